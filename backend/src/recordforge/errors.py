"""Exception hierarchy for recordforge.

- ProgrammerError: misuse of the API (bad format strings, bad arguments)
- ConfigurationError: invalid column behaviour configuration
- ValidationError: data supplied by a user that cannot be accepted
- RuntimeEnvironmentError: the host environment is not usable (e.g. unwritable directory)
"""

from typing import Any


class RecordforgeError(Exception):
    """Base class for all recordforge errors.

    Attributes:
        value: The raw value that caused the error, if any
    """

    def __init__(self, message: str, value: Any = None):
        self.value = value
        super().__init__(message)


class ProgrammerError(RecordforgeError):
    """Raised when the calling code uses the API incorrectly."""


class ConfigurationError(ProgrammerError):
    """Raised when a column behaviour is configured with invalid arguments."""


class ValidationError(RecordforgeError):
    """Raised when user-supplied data fails validation.

    Attributes:
        messages: Ordered list of individual validation messages
    """

    def __init__(self, message: str, value: Any = None, messages: list[str] | None = None):
        self.messages = list(messages) if messages else [message]
        super().__init__(message, value)


class RuntimeEnvironmentError(RecordforgeError):
    """Raised when the runtime environment prevents an operation."""


class RandomValueExhaustedError(RecordforgeError):
    """Raised when no unused random value is found within the attempt limit."""
