"""Recordforge record lifecycle hook system.

Provides extension points at specific points in a record's lifecycle:
- pre::validate: Before validation runs (can fill in values)
- post::validate: After built-in validation (can append messages)
- post-begin::store: After the store transaction begins (can stamp values)
- replace::<accessor>: Replaces a generated accessor entirely

Usage:
    from recordforge.hooks import HookContext, HookKey, HookRegistry

    hooks = HookRegistry()

    @hooks.hook("User", HookKey.pre_validate())
    def normalize(ctx: HookContext) -> None:
        ctx.values["email"] = ctx.values["email"].strip()
"""

from recordforge.hooks.registry import HookFn, HookRegistry
from recordforge.hooks.service import HookService
from recordforge.hooks.types import HookContext, HookKey, HookPoint, Record, record_exists

__all__ = [
    "HookContext",
    "HookFn",
    "HookKey",
    "HookPoint",
    "HookRegistry",
    "HookService",
    "Record",
    "record_exists",
]
