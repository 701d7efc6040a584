"""Shared fixtures for recordforge tests."""

from datetime import datetime

import pytest

from recordforge.columns.registry import ColumnBehaviorRegistry
from recordforge.errors import ConfigurationError
from recordforge.hooks import HookRegistry, HookService
from recordforge.temporal import DateFormats
from recordforge.text.messages import set_message_composer

FIXED_NOW = datetime(2024, 3, 15, 9, 30, 45)


class FakeSchema:
    """In-memory SchemaIntrospector: {table: {column: type}} plus unique keys."""

    def __init__(self, tables, unique_keys=None):
        self.tables = tables
        self.unique_keys = unique_keys or {}

    def column_type(self, table, column):
        try:
            return self.tables[table][column]
        except KeyError:
            raise ConfigurationError(f"The column specified, {column}, does not exist", column)

    def unique_key_groups(self, table):
        return {frozenset(k) for k in self.unique_keys.get(table, [])}


class FakeRecord:
    def __init__(self, stored=False):
        self.stored = stored

    def exists(self):
        return self.stored


class FakeQueryExecutor:
    """Counts values from a fixed set of already-stored values."""

    def __init__(self, stored=()):
        self.stored = set(stored)
        self.calls = []

    def count_matching(self, table, column, value):
        self.calls.append((table, column, value))
        return 1 if value in self.stored else 0


def sequence_generator(*values):
    """Random generator returning the given values in order."""
    remaining = list(values)

    def generate(length, kind):
        return remaining.pop(0)

    return generate


@pytest.fixture
def schema():
    return FakeSchema(
        {
            "users": {
                "email": "varchar",
                "backup_email": "varchar",
                "website": "text",
                "token": "char",
                "nickname": "varchar",
                "avatar": "varchar",
                "created_at": "timestamp",
                "updated_at": "timestamp",
                "birthday": "date",
                "age": "integer",
            }
        },
        unique_keys={"users": [["token"], ["email", "nickname"]]},
    )


@pytest.fixture
def hooks():
    return HookRegistry()


@pytest.fixture
def hook_service(hooks):
    return HookService(hooks)


@pytest.fixture
def registry(schema, hooks):
    return ColumnBehaviorRegistry(schema, hooks, clock=lambda: FIXED_NOW)


@pytest.fixture(autouse=True)
def reset_global_state():
    """Clear process-wide date formats and message composer around each test."""
    DateFormats.clear()
    set_message_composer(None)
    yield
    DateFormats.clear()
    set_message_composer(None)
