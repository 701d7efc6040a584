"""Column behaviours: uploads, timestamps, random strings, email and link columns."""

from recordforge.columns.random import RandomStringGenerator, generate_random_string
from recordforge.columns.registry import DEFAULT_MAX_RANDOM_ATTEMPTS, ColumnBehaviorRegistry
from recordforge.columns.types import (
    DATE_TYPES,
    STRING_TYPES,
    RandomColumnSettings,
    RandomKind,
)

__all__ = [
    "ColumnBehaviorRegistry",
    "DATE_TYPES",
    "DEFAULT_MAX_RANDOM_ATTEMPTS",
    "RandomColumnSettings",
    "RandomKind",
    "RandomStringGenerator",
    "STRING_TYPES",
    "generate_random_string",
]
