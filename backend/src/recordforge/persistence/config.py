"""Database configuration and engine factory."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import sqlalchemy
from sqlalchemy.engine import Engine


@dataclass
class DatabaseConfig:
    """Database connection configuration.

    Supports sqlite:/// and postgresql:// URL schemes.
    """

    url: str

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> DatabaseConfig:
        """Create config from environment variables.

        Resolution order:
        1. DATABASE_URL env var (standard)
        2. RECORDFORGE_DB_PATH env var (converted to sqlite:/// URL)
        3. Default: sqlite:///{base_path}/data/recordforge.db
        """
        url = os.environ.get("DATABASE_URL")
        if url:
            return cls(url=url)

        db_path = os.environ.get("RECORDFORGE_DB_PATH")
        if db_path:
            return cls(url=f"sqlite:///{db_path}")

        if base_path:
            return cls(url=f"sqlite:///{base_path / 'data' / 'recordforge.db'}")

        return cls(url="sqlite:///recordforge.db")

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_postgresql(self) -> bool:
        return self.url.startswith("postgresql")

    @property
    def sqlalchemy_url(self) -> str:
        """URL suitable for SQLAlchemy engine creation.

        Ensures postgresql:// URLs use the psycopg (v3) driver.
        """
        if self.url.startswith("postgresql://"):
            return self.url.replace("postgresql://", "postgresql+psycopg://", 1)
        return self.url


def create_engine(config: DatabaseConfig) -> Engine:
    """Create a SQLAlchemy engine for the configured database.

    Raises:
        ValueError: For unsupported URL schemes.
    """
    if not (config.is_sqlite or config.is_postgresql):
        raise ValueError(f"Unsupported database URL scheme: {config.url}")

    if config.is_sqlite:
        sqlite_path = config.url.replace("sqlite:///", "")
        if sqlite_path and sqlite_path != ":memory:":
            Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)

    return sqlalchemy.create_engine(config.sqlalchemy_url)
