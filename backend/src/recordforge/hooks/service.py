"""Hook execution service for recordforge.

Dispatches registered hooks at each lifecycle point. Hook functions run
synchronously in registration order and any exception they raise
propagates to the caller.
"""

import logging
from typing import Any

from recordforge.errors import ConfigurationError, ValidationError
from recordforge.hooks.registry import HookRegistry
from recordforge.hooks.types import HookContext, HookKey, HookPoint

logger = logging.getLogger(__name__)


class HookService:
    """Runs hooks for record lifecycle events."""

    def __init__(self, registry: HookRegistry):
        self.registry = registry

    def run_hooks(self, class_id: str, point: HookPoint, context: HookContext) -> None:
        """Execute every hook registered for a lifecycle point.

        Args:
            class_id: Identity of the record class
            point: The lifecycle point (not REPLACE; use call_replace for accessors)
            context: The record snapshot, mutated in place by the hooks
        """
        if point is HookPoint.REPLACE:
            raise ValueError("Replace hooks are invoked through call_replace()")

        key = HookKey(point)
        for hook_fn in self.registry.get(class_id, key):
            logger.debug("Running hook %s on %s", key, class_id)
            hook_fn(context)

    def call_replace(self, class_id: str, accessor: str, context: HookContext) -> Any:
        """Invoke the function replacing an accessor and return its result.

        Raises:
            ConfigurationError: If nothing replaces the accessor for this class
        """
        key = HookKey.replace(accessor)
        hook_fns = self.registry.get(class_id, key)
        if not hook_fns:
            raise ConfigurationError(
                f"The method {accessor}() is not defined for {class_id}",
                accessor,
            )
        context.method_name = accessor
        return hook_fns[-1](context)

    def run_validation(self, class_id: str, context: HookContext) -> None:
        """Run a full validation pass.

        Runs pre-validate hooks, then post-validate hooks, and surfaces every
        message they collected at once.

        Raises:
            ValidationError: If any validation message was collected
        """
        self.run_hooks(class_id, HookPoint.PRE_VALIDATE, context)
        self.run_hooks(class_id, HookPoint.POST_VALIDATE, context)

        if context.validation_messages:
            messages = list(context.validation_messages)
            raise ValidationError(
                "The following problems were found:\n" + "\n".join(messages),
                messages=messages,
            )
