"""Command-line interface for flatsync.

This module provides the main CLI entry point and assembles all commands.

Commands:
- check: Print pending operations and exit
- sync: Mirror the source directory into the destination periodically
"""

from __future__ import annotations

import click

from flatsync.cli.check import check
from flatsync.cli.logs import setup_logging
from flatsync.cli.sync import sync


@click.group()
@click.version_option(package_name="flatsync")
def cli() -> None:
    """flatsync - Mirror a flat directory into another, a few files at a time."""


cli.add_command(check)
cli.add_command(sync)


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = [
    "cli",
    "main",
    "setup_logging",
]
