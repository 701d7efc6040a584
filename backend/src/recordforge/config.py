"""Application configuration read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from recordforge.columns.registry import DEFAULT_MAX_RANDOM_ATTEMPTS
from recordforge.errors import ConfigurationError
from recordforge.persistence.config import DatabaseConfig


@dataclass
class RecordforgeConfig:
    """Runtime settings.

    Attributes:
        database: Database connection configuration
        random_max_attempts: Attempts allowed when looking for an unused random value
        upload_root: Directory relative upload directories are resolved against
        log_level: Name of the logging level
    """

    database: DatabaseConfig
    random_max_attempts: int = DEFAULT_MAX_RANDOM_ATTEMPTS
    upload_root: Path = Path(".")
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> RecordforgeConfig:
        """Create config from environment variables.

        Reads DATABASE_URL / RECORDFORGE_DB_PATH (see DatabaseConfig.from_env),
        RECORDFORGE_RANDOM_MAX_ATTEMPTS, RECORDFORGE_UPLOAD_ROOT and
        RECORDFORGE_LOG_LEVEL.
        """
        attempts = os.environ.get("RECORDFORGE_RANDOM_MAX_ATTEMPTS")
        if attempts is None:
            max_attempts = DEFAULT_MAX_RANDOM_ATTEMPTS
        elif attempts.strip().isdecimal() and int(attempts) >= 1:
            max_attempts = int(attempts)
        else:
            raise ConfigurationError(
                f"RECORDFORGE_RANDOM_MAX_ATTEMPTS, {attempts}, needs to be an integer greater than zero.",
                attempts,
            )

        upload_root = os.environ.get("RECORDFORGE_UPLOAD_ROOT")

        return cls(
            database=DatabaseConfig.from_env(base_path),
            random_max_attempts=max_attempts,
            upload_root=Path(upload_root) if upload_root else (base_path or Path.cwd()),
            log_level=os.environ.get("RECORDFORGE_LOG_LEVEL", "WARNING").upper(),
        )


def configure_logging(level: str = "WARNING") -> None:
    """Send recordforge log records to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
