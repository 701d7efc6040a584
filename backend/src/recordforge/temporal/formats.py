"""Date pattern rendering.

Patterns use single-character tokens compatible with PHP's ``date()``
(``Y-m-d``, ``F j, Y``, ``D, d M Y H:i:s O`` ...). A backslash escapes the
next character, so ``\\W`` renders a literal W.

Naive datetimes are rendered as UTC for the timezone tokens.
"""

import calendar
from collections.abc import Callable
from datetime import datetime, timedelta

# Tokens that describe a time of day or a timezone rather than a date
RESTRICTED_TOKENS = "aABcegGhHiIOPrsTuUZ"

_DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
_MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def _ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _utc_offset(value: datetime) -> timedelta:
    return value.utcoffset() or timedelta(0)


def _offset(value: datetime, separator: str) -> str:
    seconds = int(_utc_offset(value).total_seconds())
    sign = "-" if seconds < 0 else "+"
    hours, minutes = divmod(abs(seconds) // 60, 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def _epoch_seconds(value: datetime) -> int:
    if value.tzinfo is None:
        return calendar.timegm(value.timetuple())
    return int(value.timestamp())


def _swatch_beat(value: datetime) -> str:
    # Biel Mean Time is UTC+1
    seconds = (_epoch_seconds(value) + 3600) % 86400
    return f"{int(seconds / 86.4):03d}"


def _tz_name(value: datetime) -> str:
    return (value.tzname() if value.tzinfo else None) or "UTC"


def _twelve_hour(value: datetime) -> int:
    return value.hour % 12 or 12


_TOKENS: dict[str, Callable[[datetime], str]] = {
    # Day
    "d": lambda v: f"{v.day:02d}",
    "D": lambda v: _DAY_NAMES[v.weekday()][:3],
    "j": lambda v: str(v.day),
    "l": lambda v: _DAY_NAMES[v.weekday()],
    "N": lambda v: str(v.isoweekday()),
    "S": lambda v: _ordinal_suffix(v.day),
    "w": lambda v: str(v.isoweekday() % 7),
    "z": lambda v: str(v.timetuple().tm_yday - 1),
    # Week
    "W": lambda v: f"{v.isocalendar()[1]:02d}",
    # Month
    "F": lambda v: _MONTH_NAMES[v.month - 1],
    "M": lambda v: _MONTH_NAMES[v.month - 1][:3],
    "m": lambda v: f"{v.month:02d}",
    "n": lambda v: str(v.month),
    "t": lambda v: str(calendar.monthrange(v.year, v.month)[1]),
    # Year
    "L": lambda v: "1" if calendar.isleap(v.year) else "0",
    "o": lambda v: str(v.isocalendar()[0]),
    "Y": lambda v: f"{v.year:04d}",
    "y": lambda v: f"{v.year % 100:02d}",
    # Time
    "a": lambda v: "am" if v.hour < 12 else "pm",
    "A": lambda v: "AM" if v.hour < 12 else "PM",
    "B": _swatch_beat,
    "g": lambda v: str(_twelve_hour(v)),
    "G": lambda v: str(v.hour),
    "h": lambda v: f"{_twelve_hour(v):02d}",
    "H": lambda v: f"{v.hour:02d}",
    "i": lambda v: f"{v.minute:02d}",
    "s": lambda v: f"{v.second:02d}",
    "u": lambda v: f"{v.microsecond:06d}",
    # Timezone
    "e": _tz_name,
    "I": lambda v: "1" if v.dst() else "0",
    "O": lambda v: _offset(v, ""),
    "P": lambda v: _offset(v, ":"),
    "T": _tz_name,
    "Z": lambda v: str(int(_utc_offset(v).total_seconds())),
    # Full date/time
    "c": lambda v: render("Y-m-d\\TH:i:sP", v),
    "r": lambda v: render("D, d M Y H:i:s O", v),
    "U": lambda v: str(_epoch_seconds(v)),
}


def render(pattern: str, value: datetime) -> str:
    """Render a datetime using a date pattern."""
    output = []
    chars = iter(pattern)
    for char in chars:
        if char == "\\":
            output.append(next(chars, ""))
            continue
        renderer = _TOKENS.get(char)
        output.append(renderer(value) if renderer else char)
    return "".join(output)


def find_restricted_tokens(pattern: str) -> list[str]:
    """Return the unescaped time/timezone tokens used in a pattern."""
    found = []
    chars = iter(pattern)
    for char in chars:
        if char == "\\":
            next(chars, None)
            continue
        if char in RESTRICTED_TOKENS:
            found.append(char)
    return found


class DateFormats:
    """Registry of named date patterns and the post-render callback.

    Example:
        DateFormats.define("long", "F j, Y")
        Date("2024-01-05").format("long")  # "January 5, 2024"
    """

    _formats: dict[str, str] = {}
    _callback: Callable[[str], str] | None = None

    @classmethod
    def define(cls, name: str, pattern: str) -> None:
        """Define (or redefine) a named pattern."""
        cls._formats[name] = pattern

    @classmethod
    def translate(cls, name_or_pattern: str) -> str:
        """Return the pattern for a name, or the argument itself if it is not a name."""
        return cls._formats.get(name_or_pattern, name_or_pattern)

    @classmethod
    def register_callback(cls, callback: Callable[[str], str] | None) -> None:
        """Set the function every rendered date string is passed through."""
        cls._callback = callback

    @classmethod
    def apply_callback(cls, text: str) -> str:
        if cls._callback is None:
            return text
        return cls._callback(text)

    @classmethod
    def clear(cls) -> None:
        """Clear named patterns and the callback. Primarily for testing."""
        cls._formats.clear()
        cls._callback = None
