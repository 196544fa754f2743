"""Filename filtering for file synchronization.

This module provides:
- FilenameFilter: Include/exclude regex matching on bare filenames
- compile_patterns: Compile pattern strings, reporting bad ones
- is_hidden: Hidden file check (leading period)
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from flatsync.sync.types import InvalidPatternError


def compile_patterns(patterns: Iterable[str | re.Pattern[str]]) -> list[re.Pattern[str]]:
    """Compile filter patterns.

    Args:
        patterns: Regex strings (already compiled patterns are kept as is).

    Returns:
        List of compiled patterns, in the given order.

    Raises:
        InvalidPatternError: If a pattern does not compile.
    """
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise InvalidPatternError(pattern, str(e)) from e
    return compiled


def is_hidden(filename: str) -> bool:
    """Hidden files are never synced."""
    return filename.startswith(".")


class FilenameFilter:
    """Decides which filenames take part in a sync.

    A filename is accepted when it is not hidden, matches every include
    pattern and matches none of the exclude patterns. Patterns are searched
    anywhere in the filename, anchor them with ^ and $ as needed.
    """

    def __init__(
        self,
        includes: Iterable[str | re.Pattern[str]] = (),
        excludes: Iterable[str | re.Pattern[str]] = (),
    ) -> None:
        """Initialize with patterns.

        Args:
            includes: Patterns a filename must all match.
            excludes: Patterns a filename must not match.
        """
        self._includes = compile_patterns(includes)
        self._excludes = compile_patterns(excludes)

    @property
    def includes(self) -> list[re.Pattern[str]]:
        return list(self._includes)

    @property
    def excludes(self) -> list[re.Pattern[str]]:
        return list(self._excludes)

    def accepts(self, filename: str) -> bool:
        """Check if a filename should be synced.

        Args:
            filename: Bare filename, without any directory part.

        Returns:
            True if the file passes the filter.
        """
        if is_hidden(filename):
            return False
        if not all(pattern.search(filename) for pattern in self._includes):
            return False
        return not any(pattern.search(filename) for pattern in self._excludes)
