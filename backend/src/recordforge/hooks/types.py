"""Hook system types for recordforge.

Defines the core data structures for the record lifecycle hook system:
- HookPoint: the lifecycle phases a hook can attach to
- HookKey: a hook point plus, for replace hooks, the accessor it replaces
- HookContext: the mutable record snapshot passed to every hook function
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class HookPoint(Enum):
    """Lifecycle phases a hook can be attached to."""

    PRE_VALIDATE = "pre::validate"
    POST_VALIDATE = "post::validate"
    POST_BEGIN_STORE = "post-begin::store"
    REPLACE = "replace"


@dataclass(frozen=True)
class HookKey:
    """Identifies a hook slot on a record class.

    Attributes:
        point: The lifecycle phase
        accessor: Accessor name for REPLACE hooks (e.g. "format_email"), None otherwise
    """

    point: HookPoint
    accessor: str | None = None

    def __post_init__(self) -> None:
        if (self.point is HookPoint.REPLACE) != (self.accessor is not None):
            raise ValueError(
                f"Hook point {self.point.value} requires "
                + ("an accessor name" if self.point is HookPoint.REPLACE else "no accessor name")
            )

    @classmethod
    def pre_validate(cls) -> "HookKey":
        return cls(HookPoint.PRE_VALIDATE)

    @classmethod
    def post_validate(cls) -> "HookKey":
        return cls(HookPoint.POST_VALIDATE)

    @classmethod
    def post_begin_store(cls) -> "HookKey":
        return cls(HookPoint.POST_BEGIN_STORE)

    @classmethod
    def replace(cls, accessor: str) -> "HookKey":
        return cls(HookPoint.REPLACE, accessor)

    def __str__(self) -> str:
        if self.point is HookPoint.REPLACE:
            return f"replace::{self.accessor}()"
        return f"{self.point.value}()"


@runtime_checkable
class Record(Protocol):
    """The part of a record object the hook handlers rely on."""

    def exists(self) -> bool: ...


def record_exists(record: Record | None) -> bool:
    """Return True if the record has already been stored.

    A missing record (None) is treated as a new, unsaved record.
    """
    if record is None:
        return False
    return bool(record.exists())


@dataclass
class HookContext:
    """Runtime snapshot passed to every hook function.

    One context is created per lifecycle event and discarded afterwards.
    Handlers mutate it in place.

    Attributes:
        record: The record object the event is for
        values: Current column values
        old_values: Prior column values, filled in before a handler overwrites a value
        related_records: Related record collections (opaque to the hook system)
        validation_messages: Ordered validation messages collected during a validation pass
        method_name: The accessor being invoked (REPLACE hooks only)
        parameters: Arguments passed to the accessor (REPLACE hooks only)
    """

    record: Record | None
    values: dict[str, Any]
    old_values: dict[str, Any] = field(default_factory=dict)
    related_records: Any = None
    validation_messages: list[str] = field(default_factory=list)
    method_name: str | None = None
    parameters: tuple[Any, ...] = ()
