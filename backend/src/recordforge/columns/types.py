"""Types shared by the column behaviour registry and its handlers."""

from dataclasses import dataclass
from enum import Enum

# Storage types a behaviour may be attached to
STRING_TYPES = ("varchar", "char", "text")
DATE_TYPES = ("date", "time", "timestamp")


class RandomKind(Enum):
    """Character set used for generated random strings."""

    ALPHANUMERIC = "alphanumeric"
    ALPHA = "alpha"
    NUMERIC = "numeric"
    HEXADECIMAL = "hexadecimal"

    @classmethod
    def names(cls) -> list[str]:
        return [kind.value for kind in cls]


@dataclass(frozen=True)
class RandomColumnSettings:
    kind: RandomKind
    length: int
