"""Column behaviour registry.

Records, per record class and column, which special behaviours apply
(file upload, date created/updated, email, link, random string) and wires
the matching handlers into a HookRegistry:

- upload and format accessors replace ``upload_<column>`` / ``format_<column>``
- date created/updated stamps run at ``post-begin::store``
- random strings are filled in at ``pre::validate``
- email/link format checks run at ``post::validate``

Each handler is bound to this registry and its class (and column, for
accessors) when it is registered, so handlers never need to recover the
column from an accessor name.
"""

import logging
import os
from collections.abc import Callable
from datetime import datetime
from functools import partial
from pathlib import Path
from typing import Any

from recordforge.columns import handlers
from recordforge.columns.random import RandomStringGenerator, generate_random_string
from recordforge.columns.types import (
    DATE_TYPES,
    STRING_TYPES,
    RandomColumnSettings,
    RandomKind,
)
from recordforge.errors import ConfigurationError, RuntimeEnvironmentError
from recordforge.hooks.registry import HookFn, HookRegistry
from recordforge.hooks.types import HookKey
from recordforge.persistence.queries import StorageQueryExecutor
from recordforge.schema.introspector import ClassResolver, SchemaIntrospector
from recordforge.schema.resolver import DefaultClassResolver
from recordforge.temporal.formats import render

logger = logging.getLogger(__name__)

DEFAULT_MAX_RANDOM_ATTEMPTS = 100


class ColumnBehaviorRegistry:
    """Per-class, per-column configuration of special column behaviours.

    Configuration is expected to happen once, during application bootstrap,
    before records are processed. Entries are never removed; configuring the
    same class and column again overwrites the earlier entry.

    Example:
        registry = ColumnBehaviorRegistry(SQLAlchemySchema(engine), HookRegistry())
        registry.configure_email_column(User, "email")
        registry.configure_random_column(User, "token", "hexadecimal", 32)
    """

    def __init__(
        self,
        schema: SchemaIntrospector,
        hooks: HookRegistry,
        resolver: ClassResolver | None = None,
        query_executor: StorageQueryExecutor | None = None,
        random_generator: RandomStringGenerator = generate_random_string,
        clock: Callable[[], datetime] = datetime.now,
        max_random_attempts: int = DEFAULT_MAX_RANDOM_ATTEMPTS,
    ):
        self.schema = schema
        self.hooks = hooks
        self.resolver = resolver or DefaultClassResolver()
        self.query_executor = query_executor
        self.random_generator = random_generator
        self.clock = clock
        self.max_random_attempts = max_random_attempts

        self._file_upload_columns: dict[str, dict[str, Path]] = {}
        # dict-as-ordered-set: columns keep configuration order
        self._date_created_columns: dict[str, dict[str, None]] = {}
        self._date_updated_columns: dict[str, dict[str, None]] = {}
        self._email_columns: dict[str, dict[str, None]] = {}
        self._link_columns: dict[str, dict[str, None]] = {}
        self._random_columns: dict[str, dict[str, RandomColumnSettings]] = {}
        # (class_id, family) pairs whose shared hook is already registered
        self._family_hooks: set[tuple[str, str]] = set()

    # =========================================================================
    # Configuration
    # =========================================================================

    def configure_file_upload_column(self, cls: Any, column: str, directory: str | Path) -> None:
        """Make a column hold the name of a file uploaded into directory.

        Raises:
            ConfigurationError: If the column is not a string column
            RuntimeEnvironmentError: If directory is not a writable directory
        """
        class_id = self.resolver.class_identity(cls)
        self._check_column_type(class_id, column, STRING_TYPES, "a file upload column")

        path = Path(directory)
        if not path.is_dir() or not os.access(path, os.W_OK):
            raise RuntimeEnvironmentError(
                f"The file upload directory, {path}, is not writable", str(path)
            )

        self.hooks.register(
            class_id,
            HookKey.replace(f"upload_{column}"),
            partial(handlers.upload_file, self, class_id, column),
        )
        self._file_upload_columns.setdefault(class_id, {})[column] = path
        logger.debug("Configured %s.%s as a file upload column in %s", class_id, column, path)

    def configure_date_created_column(self, cls: Any, column: str) -> None:
        """Stamp a column with the current time when a new record is stored."""
        class_id = self.resolver.class_identity(cls)
        self._check_column_type(class_id, column, DATE_TYPES, "a date created column")

        self._register_family_hook(
            class_id,
            "date_created",
            HookKey.post_begin_store(),
            partial(handlers.set_date_created, self, class_id),
        )
        self._date_created_columns.setdefault(class_id, {})[column] = None
        logger.debug("Configured %s.%s as a date created column", class_id, column)

    def configure_date_updated_column(self, cls: Any, column: str) -> None:
        """Stamp a column with the current time whenever a record is stored."""
        class_id = self.resolver.class_identity(cls)
        self._check_column_type(class_id, column, DATE_TYPES, "a date updated column")

        self._register_family_hook(
            class_id,
            "date_updated",
            HookKey.post_begin_store(),
            partial(handlers.set_date_updated, self, class_id),
        )
        self._date_updated_columns.setdefault(class_id, {})[column] = None
        logger.debug("Configured %s.%s as a date updated column", class_id, column)

    def configure_email_column(self, cls: Any, column: str) -> None:
        """Format a column as a mailto link and validate it as an email address."""
        class_id = self.resolver.class_identity(cls)
        self._check_column_type(class_id, column, STRING_TYPES, "an email column")

        self.hooks.register(
            class_id,
            HookKey.replace(f"format_{column}"),
            partial(handlers.format_email_column, column),
        )
        self._register_family_hook(
            class_id,
            "email",
            HookKey.post_validate(),
            partial(handlers.validate_email_columns, self, class_id),
        )
        self._email_columns.setdefault(class_id, {})[column] = None
        logger.debug("Configured %s.%s as an email column", class_id, column)

    def configure_link_column(self, cls: Any, column: str) -> None:
        """Format a column as a hyperlink and validate it as a link."""
        class_id = self.resolver.class_identity(cls)
        self._check_column_type(class_id, column, STRING_TYPES, "a link column")

        self.hooks.register(
            class_id,
            HookKey.replace(f"format_{column}"),
            partial(handlers.format_link_column, column),
        )
        self._register_family_hook(
            class_id,
            "link",
            HookKey.post_validate(),
            partial(handlers.validate_link_columns, self, class_id),
        )
        self._link_columns.setdefault(class_id, {})[column] = None
        logger.debug("Configured %s.%s as a link column", class_id, column)

    def configure_random_column(
        self, cls: Any, column: str, kind: str | RandomKind, length: Any
    ) -> None:
        """Fill a column with a random string when a new record is validated.

        Args:
            cls: Record class, instance or class identity
            column: Column to fill
            kind: One of alphanumeric, alpha, numeric, hexadecimal
            length: Number of characters, an integer of at least 1

        Raises:
            ConfigurationError: If the column type, kind or length is invalid
        """
        class_id = self.resolver.class_identity(cls)
        self._check_column_type(class_id, column, STRING_TYPES, "a random string column")

        try:
            random_kind = RandomKind(kind)
        except ValueError:
            raise ConfigurationError(
                f"The type, {kind}, must be one of {', '.join(RandomKind.names())}.", kind
            ) from None

        settings = RandomColumnSettings(kind=random_kind, length=self._check_length(length))

        self._register_family_hook(
            class_id,
            "random",
            HookKey.pre_validate(),
            partial(handlers.set_random_strings, self, class_id),
        )
        self._random_columns.setdefault(class_id, {})[column] = settings
        logger.debug(
            "Configured %s.%s as a random %s column of length %d",
            class_id,
            column,
            random_kind.value,
            settings.length,
        )

    # =========================================================================
    # Lookups used by the handlers
    # =========================================================================

    def file_upload_columns(self, cls: Any) -> dict[str, Path]:
        return dict(self._file_upload_columns.get(self.resolver.class_identity(cls), {}))

    def date_created_columns(self, cls: Any) -> list[str]:
        return list(self._date_created_columns.get(self.resolver.class_identity(cls), {}))

    def date_updated_columns(self, cls: Any) -> list[str]:
        return list(self._date_updated_columns.get(self.resolver.class_identity(cls), {}))

    def email_columns(self, cls: Any) -> list[str]:
        return list(self._email_columns.get(self.resolver.class_identity(cls), {}))

    def link_columns(self, cls: Any) -> list[str]:
        return list(self._link_columns.get(self.resolver.class_identity(cls), {}))

    def random_columns(self, cls: Any) -> dict[str, RandomColumnSettings]:
        return dict(self._random_columns.get(self.resolver.class_identity(cls), {}))

    def current_timestamp(self) -> str:
        """The current time as stored in date created/updated columns."""
        return render("Y-m-d H:i:s", self.clock())

    # =========================================================================
    # Helpers
    # =========================================================================

    def _check_column_type(
        self, class_id: str, column: str, valid_types: tuple[str, ...], purpose: str
    ) -> str:
        table = self.resolver.table_for(class_id)
        data_type = self.schema.column_type(table, column)
        if data_type not in valid_types:
            raise ConfigurationError(
                f"The column specified, {column}, is a {data_type} column. "
                f"Must be one of {', '.join(valid_types)} to be set as {purpose}.",
                data_type,
            )
        return data_type

    def _check_length(self, length: Any) -> int:
        # bool is an int subclass but never a meaningful length
        if isinstance(length, bool):
            valid = False
        elif isinstance(length, int):
            valid = length >= 1
        elif isinstance(length, float):
            valid = length.is_integer() and length >= 1
        elif isinstance(length, str):
            valid = length.strip().isdecimal() and int(length) >= 1
        else:
            valid = False

        if not valid:
            raise ConfigurationError(
                f"The length specified, {length}, needs to be an integer greater than zero.",
                length,
            )
        return int(length)

    def _register_family_hook(
        self, class_id: str, family: str, key: HookKey, hook_fn: HookFn
    ) -> None:
        """Register the hook shared by every column of a family, once per class."""
        if (class_id, family) in self._family_hooks:
            return
        self.hooks.register(class_id, key, hook_fn)
        self._family_hooks.add((class_id, family))
