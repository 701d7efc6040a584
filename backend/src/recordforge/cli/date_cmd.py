"""Date CLI commands: show, diff and adjust."""

import click

from recordforge.errors import RecordforgeError
from recordforge.temporal import Date


def _fail(error: RecordforgeError) -> None:
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    raise SystemExit(1)


@click.group()
def date():
    """Date commands."""
    pass


@date.command()
@click.argument("value")
@click.option("--format", "pattern", default="Y-m-d", show_default=True, help="Date pattern or pattern name.")
def show(value: str, pattern: str):
    """Parse VALUE and print it."""
    try:
        click.echo(Date(value).format(pattern))
    except RecordforgeError as e:
        _fail(e)


@date.command()
@click.argument("value")
@click.argument("other", required=False)
def diff(value: str, other: str | None):
    """Print how far VALUE is from OTHER (default: today)."""
    try:
        target = Date(value)
        click.echo(target.get_fuzzy_difference(other))
        click.echo(f"{target.get_seconds_difference(other)} seconds")
    except RecordforgeError as e:
        _fail(e)


@date.command()
@click.argument("value")
@click.argument("adjustment")
def adjust(value: str, adjustment: str):
    """Print VALUE moved by ADJUSTMENT (e.g. "+1 week")."""
    try:
        click.echo(str(Date(value).adjust(adjustment)))
    except RecordforgeError as e:
        _fail(e)
