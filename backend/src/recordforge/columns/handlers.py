"""Hook handlers implementing the column behaviours.

Every handler receives the HookContext for the current lifecycle event and
mutates it in place. Handlers that overwrite a column first copy the
previous value into ``old_values``. The registry binds the leading
arguments (registry, class identity, column) when it registers a handler.
"""

from __future__ import annotations

import html
import logging
import re
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Any

from recordforge.columns.types import RandomColumnSettings
from recordforge.errors import ConfigurationError, RandomValueExhaustedError
from recordforge.hooks.types import HookContext, record_exists

if TYPE_CHECKING:
    from recordforge.columns.registry import ColumnBehaviorRegistry

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-z0-9\.'_\-\+]+@(?:[a-z0-9\-]+\.)+[a-z]{2,}$", re.IGNORECASE)
LINK_PATTERN = re.compile(r"^(https?://|/|([a-z0-9\-]+\.)+[a-z]{2,})", re.IGNORECASE)
# A domain without a scheme, e.g. "example.com" or "www.example.com/page"
BARE_DOMAIN_PATTERN = re.compile(r"^([a-z0-9\-]+\.)+[a-z]{2,}(/|$)", re.IGNORECASE)


# =============================================================================
# Timestamps
# =============================================================================


def set_date_created(registry: ColumnBehaviorRegistry, class_id: str, ctx: HookContext) -> None:
    """Stamp every date created column, for new records only."""
    if record_exists(ctx.record):
        return
    _stamp(ctx, registry.date_created_columns(class_id), registry.current_timestamp())


def set_date_updated(registry: ColumnBehaviorRegistry, class_id: str, ctx: HookContext) -> None:
    """Stamp every date updated column, for new and existing records."""
    _stamp(ctx, registry.date_updated_columns(class_id), registry.current_timestamp())


def _stamp(ctx: HookContext, columns: list[str], timestamp: str) -> None:
    for column in columns:
        ctx.old_values[column] = ctx.values.get(column)
        ctx.values[column] = timestamp


# =============================================================================
# Random strings
# =============================================================================


def set_random_strings(registry: ColumnBehaviorRegistry, class_id: str, ctx: HookContext) -> None:
    """Fill every random column of a new record.

    Columns that alone make up a unique key get a value that is not yet
    present in storage; others get a single random value.
    """
    if record_exists(ctx.record):
        return

    table = registry.resolver.table_for(class_id)
    unique_groups = registry.schema.unique_key_groups(table)

    for column, settings in registry.random_columns(class_id).items():
        ctx.old_values[column] = ctx.values.get(column)

        if frozenset([column]) in unique_groups:
            ctx.values[column] = _unique_random_string(registry, table, column, settings)
        else:
            ctx.values[column] = registry.random_generator(settings.length, settings.kind)


def _unique_random_string(
    registry: ColumnBehaviorRegistry,
    table: str,
    column: str,
    settings: RandomColumnSettings,
) -> str:
    if registry.query_executor is None:
        raise ConfigurationError(
            f"The column {table}.{column} is unique, but no storage query executor is configured",
            column,
        )

    for attempt in range(1, registry.max_random_attempts + 1):
        value = registry.random_generator(settings.length, settings.kind)
        if not registry.query_executor.count_matching(table, column, value):
            return value
        logger.debug("Random value collision on %s.%s (attempt %d)", table, column, attempt)

    logger.warning(
        "No unused random value found for %s.%s after %d attempts",
        table,
        column,
        registry.max_random_attempts,
    )
    raise RandomValueExhaustedError(
        f"Unable to generate a unique {settings.kind.value} value of length "
        f"{settings.length} for {table}.{column} after {registry.max_random_attempts} attempts",
        column,
    )


# =============================================================================
# Formatting accessors
# =============================================================================


def format_email_column(column: str, ctx: HookContext) -> Any:
    """Render an email column as a mailto link.

    Accepts one optional accessor argument: a CSS class for the anchor.
    """
    value = ctx.values.get(column)
    if not value:
        return value

    css_class = _css_class_attribute(ctx)
    address = html.escape(str(value))
    return f'<a href="mailto:{address}"{css_class}>{address}</a>'


def format_link_column(column: str, ctx: HookContext) -> Any:
    """Render a link column as a hyperlink, adding http:// to bare domains.

    Accepts one optional accessor argument: a CSS class for the anchor.
    """
    value = ctx.values.get(column)
    if not value:
        return value

    css_class = _css_class_attribute(ctx)
    link = str(value)
    if BARE_DOMAIN_PATTERN.match(link):
        link = "http://" + link
    link = html.escape(link)
    return f'<a href="{link}"{css_class}>{link}</a>'


def _css_class_attribute(ctx: HookContext) -> str:
    if len(ctx.parameters) > 1:
        raise ConfigurationError(
            f"The method {ctx.method_name} accepts at most one parameter",
            ctx.method_name,
        )
    css_class = ctx.parameters[0] if ctx.parameters else None
    if not css_class:
        return ""
    return f' class="{html.escape(str(css_class))}"'


# =============================================================================
# Validation
# =============================================================================


def validate_email_columns(
    registry: ColumnBehaviorRegistry, class_id: str, ctx: HookContext
) -> None:
    """Append a message for every email column that is not a valid address."""
    for column in registry.email_columns(class_id):
        if not EMAIL_PATTERN.match(str(ctx.values.get(column) or "")):
            label = registry.resolver.column_label(class_id, column)
            ctx.validation_messages.append(
                f"{label}: Please enter an email address in the form name@example.com"
            )


def validate_link_columns(
    registry: ColumnBehaviorRegistry, class_id: str, ctx: HookContext
) -> None:
    """Append a message for every link column that does not look like a link."""
    for column in registry.link_columns(class_id):
        if not LINK_PATTERN.match(str(ctx.values.get(column) or "")):
            label = registry.resolver.column_label(class_id, column)
            ctx.validation_messages.append(
                f"{label}: Please enter a link in the form http://www.example.com"
            )


# =============================================================================
# Uploads
# =============================================================================


def upload_file(
    registry: ColumnBehaviorRegistry, class_id: str, column: str, ctx: HookContext
) -> Any:
    """Copy a file into the column's upload directory and store its name.

    Called as ``upload_<column>(source_path)``. Without an argument the
    current value is returned unchanged.
    """
    if len(ctx.parameters) > 1:
        raise ConfigurationError(
            f"The method {ctx.method_name} accepts at most one parameter",
            ctx.method_name,
        )
    if not ctx.parameters:
        return ctx.values.get(column)

    source = Path(ctx.parameters[0])
    directory = registry.file_upload_columns(class_id)[column]
    target = _unique_destination(directory, source.name)
    shutil.copyfile(source, target)
    logger.info("Uploaded %s to %s for %s.%s", source, target, class_id, column)

    ctx.old_values[column] = ctx.values.get(column)
    ctx.values[column] = target.name
    return target


def _unique_destination(directory: Path, filename: str) -> Path:
    """Pick a path in directory that does not exist yet (name_copy1.ext, ...)."""
    target = directory / filename
    stem, suffix = target.stem, target.suffix
    copy = 1
    while target.exists():
        target = directory / f"{stem}_copy{copy}{suffix}"
        copy += 1
    return target
