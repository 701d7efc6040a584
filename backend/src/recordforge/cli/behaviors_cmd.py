"""Behavior CLI commands to list and check column behaviours declared in metadata."""

from pathlib import Path

import click

from recordforge.bootstrap import apply_entity_behaviors
from recordforge.columns.registry import ColumnBehaviorRegistry
from recordforge.errors import RecordforgeError
from recordforge.hooks import HookRegistry
from recordforge.metadata.loader import MetadataLoader
from recordforge.schema import MetadataSchema


def _load(metadata_path: Path) -> MetadataLoader:
    if not metadata_path.exists():
        click.echo(f"Error: Metadata directory not found at {metadata_path}", err=True)
        raise SystemExit(1)
    loader = MetadataLoader(metadata_path)
    try:
        loader.load_all()
    except RecordforgeError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)
    return loader


_path_option = click.option(
    "--path",
    "metadata_path",
    default="metadata",
    show_default=True,
    type=click.Path(path_type=Path),
    help="Metadata directory containing entities/*.yaml.",
)


@click.group()
def behaviors():
    """Column behavior commands."""
    pass


@behaviors.command("list")
@_path_option
def list_cmd(metadata_path: Path):
    """List the column behaviors declared in metadata."""
    loader = _load(metadata_path)

    total = 0
    for name in sorted(loader.list_entities()):
        entity = loader.get_entity(name)
        click.echo(f"{name} ({entity.table})")
        for field in entity.fields:
            for behavior in field.behaviors:
                params = ", ".join(f"{k}={v}" for k, v in sorted(behavior.params.items()))
                suffix = f" ({params})" if params else ""
                click.echo(f"  {field.name}: {behavior.name}{suffix}")
                total += 1

    click.echo(f"\n{total} behavior(s) declared.")


@behaviors.command()
@_path_option
def check(metadata_path: Path):
    """Check declared behaviors against the declared column types."""
    loader = _load(metadata_path)
    registry = ColumnBehaviorRegistry(MetadataSchema(loader), HookRegistry())
    try:
        count = apply_entity_behaviors(registry, loader, upload_root=metadata_path.parent)
    except RecordforgeError as e:
        click.echo(click.style(f"Invalid behavior configuration: {e}", fg="red"), err=True)
        raise SystemExit(1)

    click.echo(click.style(f"All {count} behavior(s) are valid.", fg="green", bold=True))
