"""Persistence layer - database configuration and storage queries."""

from recordforge.persistence.config import DatabaseConfig, create_engine
from recordforge.persistence.queries import SQLAlchemyQueryExecutor, StorageQueryExecutor

__all__ = ["DatabaseConfig", "SQLAlchemyQueryExecutor", "StorageQueryExecutor", "create_engine"]
