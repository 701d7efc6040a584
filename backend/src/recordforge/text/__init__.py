"""Message composition and inflection helpers."""

from recordforge.text.inflection import (
    humanize,
    inflect_on_quantity,
    pluralize,
    tablize,
    underscorize,
)
from recordforge.text.messages import MessageComposer, compose, set_message_composer

__all__ = [
    "MessageComposer",
    "compose",
    "humanize",
    "inflect_on_quantity",
    "pluralize",
    "set_message_composer",
    "tablize",
    "underscorize",
]
