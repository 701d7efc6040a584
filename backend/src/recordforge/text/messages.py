"""Message composition with an optional translation hook.

Messages are written as ``str.format`` templates with positional fields
(``"{0} {1} ago"``). An application may install a MessageComposer to
translate templates before substitution; without one, the template is
filled in as-is.
"""

from typing import Any, Protocol


class MessageComposer(Protocol):
    """Translates and fills a message template."""

    def compose(self, template: str, *args: Any) -> str: ...


_composer: MessageComposer | None = None


def set_message_composer(composer: MessageComposer | None) -> None:
    """Install (or with None, remove) the process-wide message composer."""
    global _composer
    _composer = composer


def compose(template: str, *args: Any) -> str:
    """Compose a message, delegating to the installed composer if any."""
    if _composer is not None:
        return _composer.compose(template, *args)
    return template.format(*args)
