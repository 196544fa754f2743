"""Shared configuration classes for flatsync.

This module defines the configuration used by the CLI, the scheduler and the
sync components, plus helpers to load it from a JSON file.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from flatsync.sync.filters import compile_patterns

DEFAULT_FREQUENCY = 5  # minutes
DEFAULT_OPERATIONS = 1

# Keys accepted in a JSON config file
CONFIG_KEYS = frozenset(
    {"source_dir", "dest_dir", "frequency", "operations", "include", "exclude"}
)


@dataclass
class SyncConfig:
    """Configuration for mirroring one directory into another.

    Attributes:
        source_dir: Directory to sync files from.
        dest_dir: Directory to sync files to.
        frequency: Minutes between the end of a pass and the next one.
        operations: Maximum number of actions performed per pass.
        includes: Regexes a filename must all match to be synced.
        excludes: Regexes a filename must not match to be synced.
        verbosity: Log verbosity between 0 (errors only) and 3 (trace).
    """

    source_dir: Path
    dest_dir: Path
    frequency: int = DEFAULT_FREQUENCY
    operations: int = DEFAULT_OPERATIONS
    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)
    verbosity: int = 0

    def __post_init__(self) -> None:
        """Normalize paths and validate values.

        Raises:
            ValueError: If frequency or operations is not a positive integer,
                or includes or excludes is not a list of strings.
            InvalidPatternError: If a filter pattern is not a valid regex.
        """
        self.source_dir = Path(self.source_dir).expanduser()
        self.dest_dir = Path(self.dest_dir).expanduser()
        for name in ("includes", "excludes"):
            value = getattr(self, name)
            if not isinstance(value, (list, tuple)) or not all(isinstance(p, str) for p in value):
                raise ValueError(f"{name} must be a list of patterns, got {value!r}")
            setattr(self, name, list(value))

        for name in ("frequency", "operations"):
            if not _is_int(getattr(self, name)):
                raise ValueError(f"{name} must be a whole number, got {getattr(self, name)!r}")
        if self.frequency < 1:
            raise ValueError(f"frequency must be a positive whole number, got {self.frequency}")
        if self.operations < 1:
            raise ValueError(f"operations must be a positive whole number, got {self.operations}")
        self.verbosity = max(0, min(self.verbosity, 3))

        # Fail early on bad patterns
        self._include_patterns = compile_patterns(self.includes)
        self._exclude_patterns = compile_patterns(self.excludes)

    @property
    def include_patterns(self) -> list[re.Pattern[str]]:
        """Compiled include patterns."""
        return self._include_patterns

    @property
    def exclude_patterns(self) -> list[re.Pattern[str]]:
        """Compiled exclude patterns."""
        return self._exclude_patterns

    @property
    def interval_seconds(self) -> int:
        """Get the pause between passes in seconds."""
        return self.frequency * 60

    @classmethod
    def from_dict(cls, data: dict[str, Any], **overrides: Any) -> SyncConfig:
        """Build a config from a config-file mapping.

        Args:
            data: Mapping as loaded by load_config().
            **overrides: Values that take precedence over the mapping
                (None values are ignored).

        Returns:
            A validated SyncConfig.

        Raises:
            ValueError: If a required directory is missing or a value is invalid.
        """
        values: dict[str, Any] = {
            "source_dir": data.get("source_dir"),
            "dest_dir": data.get("dest_dir"),
            "frequency": data.get("frequency", DEFAULT_FREQUENCY),
            "operations": data.get("operations", DEFAULT_OPERATIONS),
            "includes": data.get("include", []),
            "excludes": data.get("exclude", []),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})

        for key in ("source_dir", "dest_dir"):
            if not values[key]:
                raise ValueError(f"Missing required setting: {key}")

        return cls(**values)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON config file.

    Args:
        path: Path to the config file.

    Returns:
        The settings found in the file.

    Raises:
        ValueError: If the file is not a JSON object, has unknown keys or a
            value of the wrong type.
        OSError: If the file cannot be read.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Invalid config file {path}: expected a JSON object")

    unknown = set(data) - CONFIG_KEYS
    if unknown:
        raise ValueError(f"Unknown setting(s) in {path}: {', '.join(sorted(unknown))}")

    for key in ("source_dir", "dest_dir"):
        if key in data and not isinstance(data[key], str):
            raise ValueError(f"Invalid config file {path}: {key} must be a string")

    for key in ("frequency", "operations"):
        if key in data and not _is_int(data[key]):
            raise ValueError(f"Invalid config file {path}: {key} must be a whole number")

    for key in ("include", "exclude"):
        # A single pattern may be given as a plain string
        if isinstance(data.get(key), str):
            data[key] = [data[key]]
        elif key in data and not (
            isinstance(data[key], list) and all(isinstance(p, str) for p in data[key])
        ):
            raise ValueError(
                f"Invalid config file {path}: {key} must be a pattern or a list of patterns"
            )

    return dict(data)
