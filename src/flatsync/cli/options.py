"""Shared options and configuration helpers for flatsync commands."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from flatsync.core.config import SyncConfig, load_config
from flatsync.sync.types import InvalidPatternError

F = TypeVar("F", bound=Callable[..., Any])

# Config file used when --config is not given
CONFIG_PATH_ENV = "FLATSYNC_CONFIG"


def common_options(func: F) -> F:
    """Add the options shared by every command."""
    decorators = [
        click.option(
            "--source-dir",
            "-s",
            "source_dir",
            type=click.Path(path_type=Path),
            default=None,
            help="The directory to sync files from.",
        ),
        click.option(
            "--dest-dir",
            "-d",
            "dest_dir",
            type=click.Path(path_type=Path),
            default=None,
            help="The directory to sync files to.",
        ),
        click.option(
            "--include",
            "-i",
            "includes",
            metavar="REGEX",
            multiple=True,
            help="Regex a file name (including extension) must match to be synced. "
            "Repeatable, every pattern must match.",
        ),
        click.option(
            "--exclude",
            "-e",
            "excludes",
            metavar="REGEX",
            multiple=True,
            help="Regex for file names (including extension) to ignore. Repeatable.",
        ),
        click.option(
            "--verbose",
            "-v",
            "verbosity",
            count=True,
            help="Increase verbosity (up to -vvv).",
        ),
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help=f"JSON config file (default: ${CONFIG_PATH_ENV}).",
        ),
        click.option(
            "--log-file",
            type=click.Path(dir_okay=False, path_type=Path),
            default=None,
            help="Also write logs to this file.",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def build_config(
    config_path: Path | None,
    source_dir: Path | None,
    dest_dir: Path | None,
    includes: tuple[str, ...],
    excludes: tuple[str, ...],
    verbosity: int,
    frequency: int | None = None,
    operations: int | None = None,
) -> SyncConfig:
    """Merge the config file with command-line values.

    Command-line values win over the config file.

    Raises:
        click.UsageError: If the resulting configuration is invalid.
    """
    if config_path is None and os.environ.get(CONFIG_PATH_ENV):
        config_path = Path(os.environ[CONFIG_PATH_ENV])

    data: dict[str, Any] = {}
    if config_path is not None:
        try:
            data = load_config(config_path)
        except (OSError, ValueError) as e:
            raise click.UsageError(str(e)) from e

    try:
        config = SyncConfig.from_dict(
            data,
            source_dir=source_dir,
            dest_dir=dest_dir,
            includes=list(includes) or None,
            excludes=list(excludes) or None,
            frequency=frequency,
            operations=operations,
            verbosity=verbosity,
        )
    except (ValueError, InvalidPatternError) as e:
        raise click.UsageError(str(e)) from e

    for label, path in (("Source", config.source_dir), ("Destination", config.dest_dir)):
        if not path.is_dir():
            raise click.UsageError(f"{label} directory does not exist: {path}")

    return config
