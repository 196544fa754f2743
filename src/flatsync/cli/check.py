"""Check command for flatsync CLI.

Commands:
- check: Print the operations a sync would perform, then exit
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from flatsync.cli.logs import setup_logging
from flatsync.cli.options import build_config, common_options
from flatsync.sync import FileChecker, ReconcileError


@click.command()
@common_options
def check(
    source_dir: Path | None,
    dest_dir: Path | None,
    includes: tuple[str, ...],
    excludes: tuple[str, ...],
    verbosity: int,
    config_path: Path | None,
    log_file: Path | None,
) -> None:
    """Show pending operations without changing anything.

    Lists the files that would be added, deleted and rewritten in the
    destination directory.
    """
    config = build_config(config_path, source_dir, dest_dir, includes, excludes, verbosity)
    log = setup_logging(config.verbosity, log_file)

    checker = FileChecker(
        config.source_dir,
        config.dest_dir,
        config.include_patterns,
        config.exclude_patterns,
        log=logging.getLogger("flatsync.check"),
    )

    try:
        results = checker.reconcile()
    except ReconcileError as e:
        log.error("%s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(results.format_report())
