"""Sync command for flatsync CLI.

Commands:
- sync: Mirror the source directory into the destination, pass after pass
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from flatsync.cli.logs import setup_logging
from flatsync.cli.options import build_config, common_options
from flatsync.core.config import DEFAULT_FREQUENCY, DEFAULT_OPERATIONS
from flatsync.scheduler import SyncScheduler
from flatsync.sync import ActionExecutor, FileChecker


@click.command()
@common_options
@click.option(
    "--freq",
    "-f",
    "frequency",
    metavar="MINUTES",
    type=click.IntRange(min=1),
    default=None,
    help=f"Minutes to wait after a pass before checking again (default: {DEFAULT_FREQUENCY}).",
)
@click.option(
    "--operations",
    "-o",
    metavar="NUMBER",
    type=click.IntRange(min=1),
    default=None,
    help="How many files to add, modify or delete per pass "
    f"(default: {DEFAULT_OPERATIONS}).",
)
@click.option("--once", is_flag=True, help="Run a single pass and exit.")
def sync(
    source_dir: Path | None,
    dest_dir: Path | None,
    includes: tuple[str, ...],
    excludes: tuple[str, ...],
    verbosity: int,
    config_path: Path | None,
    log_file: Path | None,
    frequency: int | None,
    operations: int | None,
    once: bool,
) -> None:
    """Keep the destination directory in sync with the source.

    Every pass copies new files, overwrites files whose size changed and
    deletes files missing from the source, up to --operations actions.
    """
    config = build_config(
        config_path,
        source_dir,
        dest_dir,
        includes,
        excludes,
        verbosity,
        frequency=frequency,
        operations=operations,
    )
    setup_logging(config.verbosity, log_file)

    checker = FileChecker(
        config.source_dir,
        config.dest_dir,
        config.include_patterns,
        config.exclude_patterns,
        log=logging.getLogger("flatsync.checker"),
    )
    executor = ActionExecutor(
        config.source_dir,
        config.dest_dir,
        config.operations,
        log=logging.getLogger("flatsync.executor"),
    )
    scheduler = SyncScheduler(checker, executor, config.interval_seconds)

    if once:
        outcomes = scheduler.run_once()
        failed = [outcome for outcome in outcomes if not outcome.success]
        click.echo(f"{len(outcomes) - len(failed)} operation(s) done, {len(failed)} failed")
        return

    click.echo(f"Syncing {config.source_dir} -> {config.dest_dir} every {config.frequency} minute(s)")
    try:
        scheduler.start()
    except KeyboardInterrupt:
        click.echo("\nStopping...")
    finally:
        scheduler.stop()
