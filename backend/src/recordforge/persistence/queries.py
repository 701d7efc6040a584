"""Storage queries used by the column behaviour handlers."""

from typing import Any, Protocol, runtime_checkable

from sqlalchemy import MetaData, Table, func, select
from sqlalchemy.engine import Engine


@runtime_checkable
class StorageQueryExecutor(Protocol):
    """Protocol for the storage lookups column behaviours need."""

    def count_matching(self, table: str, column: str, value: Any) -> int:
        """Count the rows of a table whose column equals value."""
        ...


class SQLAlchemyQueryExecutor:
    """StorageQueryExecutor using SQLAlchemy Core with bound parameters."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._metadata = MetaData()
        self._tables: dict[str, Table] = {}

    def count_matching(self, table: str, column: str, value: Any) -> int:
        reflected = self._table(table)
        stmt = (
            select(func.count())
            .select_from(reflected)
            .where(reflected.c[column] == value)
        )
        with self.engine.connect() as conn:
            return int(conn.execute(stmt).scalar_one())

    def _table(self, name: str) -> Table:
        if name not in self._tables:
            self._tables[name] = Table(name, self._metadata, autoload_with=self.engine)
        return self._tables[name]
