"""Protocols for the schema and class metadata the column registry consumes."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SchemaIntrospector(Protocol):
    """Answers questions about table columns and keys.

    Column type names are normalized to lower case storage names
    ("varchar", "char", "text", "date", "time", "timestamp", "integer", ...).
    """

    def column_type(self, table: str, column: str) -> str:
        """Return the normalized storage type of a column.

        Raises:
            ConfigurationError: If the table or column does not exist
        """
        ...

    def unique_key_groups(self, table: str) -> set[frozenset[str]]:
        """Return each unique constraint of a table as a set of column names."""
        ...


@runtime_checkable
class ClassResolver(Protocol):
    """Maps record classes to identities, tables and column labels."""

    def class_identity(self, cls_or_instance: Any) -> str:
        """Return the identity used as the registry key for a class or instance."""
        ...

    def table_for(self, class_id: str) -> str:
        """Return the table a record class is stored in."""
        ...

    def column_label(self, class_id: str, column: str) -> str:
        """Return the human-readable name of a column, used in messages."""
        ...
