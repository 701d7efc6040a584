"""Hook registry for recordforge.

Provides registration and lookup of hook functions per record class.
"""

import logging
from collections.abc import Callable
from typing import Any

from recordforge.hooks.types import HookContext, HookKey, HookPoint

logger = logging.getLogger(__name__)

# Hook function signature: (HookContext) -> Any
# The return value is only used for REPLACE hooks.
HookFn = Callable[[HookContext], Any]


class HookRegistry:
    """Registry of hook functions, keyed by record class and hook slot.

    Unlike a module-level table, each registry is an explicit object owned
    by the application bootstrap and handed to whatever dispatches hooks.

    REPLACE slots hold a single function: registering again overwrites the
    previous one. All other slots keep every registered function in order.

    Example:
        hooks = HookRegistry()
        hooks.register("User", HookKey.post_validate(), check_user)
    """

    def __init__(self) -> None:
        self._hooks: dict[str, dict[HookKey, list[HookFn]]] = {}

    def register(self, class_id: str, key: HookKey, hook_fn: HookFn) -> None:
        """Register a hook function for a record class.

        Args:
            class_id: Identity of the record class (see ClassResolver)
            key: The hook slot
            hook_fn: Function called with a HookContext
        """
        slots = self._hooks.setdefault(class_id, {})
        if key.point is HookPoint.REPLACE:
            slots[key] = [hook_fn]
        else:
            slots.setdefault(key, []).append(hook_fn)
        logger.debug("Registered hook %s on %s", key, class_id)

    def get(self, class_id: str, key: HookKey) -> list[HookFn]:
        """Get the hook functions registered for a slot, in registration order."""
        return list(self._hooks.get(class_id, {}).get(key, []))

    def is_registered(self, class_id: str, key: HookKey) -> bool:
        """Check if any hook is registered for a slot."""
        return bool(self._hooks.get(class_id, {}).get(key))

    def list_registered(self, class_id: str) -> list[HookKey]:
        """List the hook slots in use for a record class, sorted by name."""
        return sorted(self._hooks.get(class_id, {}), key=str)

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._hooks.clear()

    def hook(self, class_id: str, key: HookKey) -> Callable[[HookFn], HookFn]:
        """Decorator to register a hook function.

        Usage:
            @hooks.hook("User", HookKey.pre_validate())
            def fill_defaults(ctx: HookContext) -> None:
                ...
        """

        def decorator(fn: HookFn) -> HookFn:
            self.register(class_id, key, fn)
            return fn

        return decorator
