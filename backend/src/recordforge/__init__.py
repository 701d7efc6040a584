"""Recordforge column behaviours and date value objects.

Provides two independent pieces:
- A column behaviour registry that wires upload, timestamp, random-string,
  email and link columns into a record lifecycle hook system
- An immutable calendar Date value object with parsing, formatting,
  arithmetic and fuzzy differences

Usage:
    from recordforge import ColumnBehaviorRegistry, Date, HookRegistry

    registry = ColumnBehaviorRegistry(schema, HookRegistry())
    registry.configure_email_column("User", "email")

    Date("2024-01-31").adjust("+1 day")  # Date("2024-02-01")
"""

from recordforge.columns import ColumnBehaviorRegistry
from recordforge.errors import (
    ConfigurationError,
    ProgrammerError,
    RandomValueExhaustedError,
    RecordforgeError,
    RuntimeEnvironmentError,
    ValidationError,
)
from recordforge.hooks import HookContext, HookKey, HookPoint, HookRegistry, HookService
from recordforge.temporal import Date

__version__ = "0.1.0"

__all__ = [
    "ColumnBehaviorRegistry",
    "ConfigurationError",
    "Date",
    "HookContext",
    "HookKey",
    "HookPoint",
    "HookRegistry",
    "HookService",
    "ProgrammerError",
    "RandomValueExhaustedError",
    "RecordforgeError",
    "RuntimeEnvironmentError",
    "ValidationError",
]
