"""Recordforge CLI entry point."""

import os

import click

from recordforge.config import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: RECORDFORGE_LOG_LEVEL or WARNING).")
def cli(log_level: str | None):
    """Recordforge column behaviours and calendar dates."""
    configure_logging(log_level or os.environ.get("RECORDFORGE_LOG_LEVEL", "WARNING"))


# Register subcommand groups
from recordforge.cli.behaviors_cmd import behaviors  # noqa: E402
from recordforge.cli.date_cmd import date  # noqa: E402

cli.add_command(behaviors)
cli.add_command(date)
