"""Schema introspection through SQLAlchemy reflection."""

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from recordforge.errors import ConfigurationError

# Reflected type class name -> normalized storage type
_TYPE_NAMES = {
    "VARCHAR": "varchar",
    "NVARCHAR": "varchar",
    "STRING": "varchar",
    "UNICODE": "varchar",
    "CHAR": "char",
    "NCHAR": "char",
    "TEXT": "text",
    "CLOB": "text",
    "UNICODETEXT": "text",
    "DATE": "date",
    "TIME": "time",
    "DATETIME": "timestamp",
    "TIMESTAMP": "timestamp",
    "INTEGER": "integer",
    "BIGINT": "integer",
    "SMALLINT": "integer",
}


def normalize_type_name(column_type: Any) -> str:
    """Normalize a reflected SQLAlchemy type to a storage type name."""
    name = type(column_type).__name__.upper()
    return _TYPE_NAMES.get(name, name.lower())


class SQLAlchemySchema:
    """SchemaIntrospector backed by a live database.

    Reflection results are cached per table for the life of the object.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._columns: dict[str, dict[str, str]] = {}
        self._unique_keys: dict[str, set[frozenset[str]]] = {}

    def column_type(self, table: str, column: str) -> str:
        columns = self._reflect_columns(table)
        if column not in columns:
            raise ConfigurationError(
                f"The column specified, {column}, does not exist in the table {table}",
                column,
            )
        return columns[column]

    def unique_key_groups(self, table: str) -> set[frozenset[str]]:
        if table not in self._unique_keys:
            inspector = inspect(self.engine)
            groups: set[frozenset[str]] = set()
            for constraint in inspector.get_unique_constraints(table):
                groups.add(frozenset(constraint["column_names"]))
            for index in inspector.get_indexes(table):
                if index.get("unique"):
                    groups.add(frozenset(c for c in index["column_names"] if c))
            self._unique_keys[table] = groups
        return set(self._unique_keys[table])

    def _reflect_columns(self, table: str) -> dict[str, str]:
        if table not in self._columns:
            inspector = inspect(self.engine)
            if not inspector.has_table(table):
                raise ConfigurationError(f"The table specified, {table}, does not exist", table)
            self._columns[table] = {
                col["name"]: normalize_type_name(col["type"])
                for col in inspector.get_columns(table)
            }
        return self._columns[table]
