"""Random string generation for random-string columns."""

import secrets
import string
from typing import Protocol

from recordforge.columns.types import RandomKind

_ALPHABETS = {
    RandomKind.ALPHANUMERIC: string.ascii_letters + string.digits,
    RandomKind.ALPHA: string.ascii_letters,
    RandomKind.NUMERIC: string.digits,
    RandomKind.HEXADECIMAL: "0123456789abcdef",
}


class RandomStringGenerator(Protocol):
    def __call__(self, length: int, kind: RandomKind) -> str: ...


def generate_random_string(length: int, kind: RandomKind) -> str:
    """Generate a cryptographically random string of the given kind."""
    alphabet = _ALPHABETS[kind]
    return "".join(secrets.choice(alphabet) for _ in range(length))
