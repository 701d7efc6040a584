"""General date/time expression parser.

Understands absolute dates and times, relative expressions and the usual
keywords, in any combination:

    "2024-01-31", "01/31/2024", "January 31, 2024", "31 Jan 2024 10:30pm"
    "now", "today", "tomorrow", "noon", "@1706659200"
    "+1 day", "-2 weeks", "3 months ago", "next month", "last friday"
    "first day of next month", "2024-01-31 +1 year"

Every expression is resolved against a base datetime (the current time by
default). A date given without a time resets the time to midnight; a
relative month or year change that lands past the end of a month rolls
the extra days into the following month.
"""

import calendar
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta


class DateParseError(ValueError):
    """Error raised when an expression cannot be parsed."""

    def __init__(self, message: str, text: str, position: int = 0):
        self.text = text
        self.position = position
        super().__init__(f"{message} in {text!r} at position {position}")


@dataclass(frozen=True)
class ParsedDateTime:
    """Result of parsing an expression.

    Attributes:
        value: The resolved naive datetime
        has_timezone: True if the expression named a timezone or UTC offset
    """

    value: datetime
    has_timezone: bool = False


_MONTHS = {
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
    "july": 7, "august": 8, "september": 9, "october": 10, "november": 11, "december": 12,
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "jun": 6, "jul": 7, "aug": 8,
    "sep": 9, "sept": 9, "oct": 10, "nov": 11, "dec": 12,
}

_WEEKDAYS = {
    "monday": 0, "tuesday": 1, "wednesday": 2, "thursday": 3,
    "friday": 4, "saturday": 5, "sunday": 6,
    "mon": 0, "tue": 1, "tues": 1, "wed": 2, "thu": 3, "thur": 3, "thurs": 3,
    "fri": 4, "sat": 5, "sun": 6,
}

# Unit word -> (relative field, multiplier)
_UNITS = {
    "sec": ("seconds", 1), "secs": ("seconds", 1),
    "second": ("seconds", 1), "seconds": ("seconds", 1),
    "min": ("minutes", 1), "mins": ("minutes", 1),
    "minute": ("minutes", 1), "minutes": ("minutes", 1),
    "hour": ("hours", 1), "hours": ("hours", 1),
    "day": ("days", 1), "days": ("days", 1),
    "week": ("days", 7), "weeks": ("days", 7),
    "fortnight": ("days", 14), "fortnights": ("days", 14),
    "month": ("months", 1), "months": ("months", 1),
    "year": ("years", 1), "years": ("years", 1),
}

_RELATIVE_WORDS = {"next": 1, "last": -1, "previous": -1, "this": 0}


def _alternation(words) -> str:
    return "|".join(sorted(words, key=len, reverse=True))


_MONTH = rf"({_alternation(_MONTHS)})\.?"
_WEEKDAY = rf"({_alternation(_WEEKDAYS)})"
_UNIT = rf"({_alternation(_UNITS)})"
_RELATIVE = rf"({_alternation(_RELATIVE_WORDS)})"
_ORDINAL = r"(?:st|nd|rd|th)?"
_END_WORD = r"(?![a-z])"
_END_NUMBER = r"(?!\d)"


@dataclass
class _Parts:
    """Pieces collected while scanning an expression."""

    date: tuple[int, int, int] | None = None
    time: tuple[int, int, int, int] | None = None
    epoch: int | None = None
    reset_time: bool = False
    has_timezone: bool = False
    day_of: str | None = None
    weekday: tuple[int, int] | None = None
    relative: dict[str, int] = field(
        default_factory=lambda: dict.fromkeys(
            ("years", "months", "days", "hours", "minutes", "seconds"), 0
        )
    )


class _Scanner:
    """Scans an expression left to right, one recognized phrase at a time."""

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.parts = _Parts()
        self._rules: list[tuple[re.Pattern[str], Callable[[re.Match[str]], bool]]] = [
            (re.compile(p, re.IGNORECASE), handler)
            for p, handler in (
                (r"[\s,]+", self._skip),
                (r"(?:at|on)" + _END_WORD, self._skip),
                (r"t(?=\d)", self._skip),
                (r"@(-?\d+)" + _END_NUMBER, self._epoch),
                (r"(now|today|midnight|noon|tomorrow|yesterday)" + _END_WORD, self._keyword),
                (r"(first|last)\s+day\s+of" + _END_WORD, self._day_of),
                (r"(\d{4})-(\d{1,2})-(\d{1,2})" + _END_NUMBER, self._ymd),
                (r"(\d{4})/(\d{1,2})/(\d{1,2})" + _END_NUMBER, self._ymd),
                (r"(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})" + _END_NUMBER, self._mdy),
                (r"(\d{1,2})-(\d{1,2})-(\d{4})" + _END_NUMBER, self._dmy),
                (r"(\d{1,2})\.(\d{1,2})\.(\d{4}|\d{2})" + _END_NUMBER, self._dmy),
                (r"(\d{4})-(\d{1,2})(?![\d-])", self._year_month),
                (_MONTH + r"\s+(\d{1,2})" + _ORDINAL + r",?\s+(\d{4})" + _END_NUMBER, self._month_day_year),
                (r"(\d{1,2})" + _ORDINAL + r"[\s-]+" + _MONTH + r",?[\s-]+(\d{4})" + _END_NUMBER, self._day_month_year),
                (_MONTH + r",?\s+(\d{4})" + _END_NUMBER, self._month_year),
                (_MONTH + r"\s+(\d{1,2})" + _ORDINAL + r"(?![\d:])", self._month_day),
                (r"(\d{1,2})" + _ORDINAL + r"\s+" + _MONTH + _END_WORD, self._day_month),
                (
                    r"(\d{1,2}):(\d{2})(?::(\d{2})(?:[.,](\d{1,6}))?)?(?:\s*([ap])\.?m\.?" + _END_WORD + r")?",
                    self._clock_time,
                ),
                (r"(\d{1,2})\s*([ap])\.?m\.?" + _END_WORD, self._hour_meridian),
                (r"(?:z|utc|gmt)" + _END_WORD, self._timezone),
                (r"[+-]\d{2}:?\d{2}" + _END_NUMBER, self._timezone),
                (r"([+-]?)\s*(\d+)\s*" + _UNIT + _END_WORD, self._relative_amount),
                (_RELATIVE + r"\s+" + _UNIT + _END_WORD, self._relative_unit),
                (_RELATIVE + r"\s+" + _WEEKDAY + _END_WORD, self._relative_weekday),
                (_WEEKDAY + _END_WORD, self._weekday),
                (r"ago" + _END_WORD, self._ago),
            )
        ]

    def scan(self) -> _Parts:
        if not self.text.strip():
            raise DateParseError("Empty date expression", self.text)

        while self.position < len(self.text):
            for pattern, handler in self._rules:
                match = pattern.match(self.text, self.position)
                if match and handler(match):
                    self.position = match.end()
                    break
            else:
                raise DateParseError("Unrecognized text", self.text, self.position)
        return self.parts

    # -------------------------------------------------------------------------
    # Setters with consistency checks
    # -------------------------------------------------------------------------

    def _set_date(self, year: int, month: int, day: int) -> bool:
        if self.parts.date is not None:
            raise DateParseError("Date given more than once", self.text, self.position)
        try:
            date(year, month, day)
        except ValueError:
            raise DateParseError("Invalid calendar date", self.text, self.position) from None
        self.parts.date = (year, month, day)
        return True

    def _set_time(self, hour: int, minute: int, second: int = 0, microsecond: int = 0) -> bool:
        if self.parts.time is not None:
            raise DateParseError("Time given more than once", self.text, self.position)
        if hour > 23 or minute > 59 or second > 59:
            raise DateParseError("Invalid time of day", self.text, self.position)
        self.parts.time = (hour, minute, second, microsecond)
        return True

    # -------------------------------------------------------------------------
    # Rule handlers; each returns True if it consumed the match
    # -------------------------------------------------------------------------

    def _skip(self, match: re.Match[str]) -> bool:
        return True

    def _epoch(self, match: re.Match[str]) -> bool:
        if self.parts.epoch is not None or self.parts.date is not None:
            raise DateParseError("Date given more than once", self.text, self.position)
        self.parts.epoch = int(match.group(1))
        return True

    def _keyword(self, match: re.Match[str]) -> bool:
        word = match.group(1).lower()
        if word == "noon":
            return self._set_time(12, 0)
        if word != "now":
            self.parts.reset_time = True
        if word == "tomorrow":
            self.parts.relative["days"] += 1
        elif word == "yesterday":
            self.parts.relative["days"] -= 1
        return True

    def _day_of(self, match: re.Match[str]) -> bool:
        self.parts.day_of = match.group(1).lower()
        return True

    def _ymd(self, match: re.Match[str]) -> bool:
        year, month, day = (int(g) for g in match.groups())
        return self._set_date(year, month, day)

    def _mdy(self, match: re.Match[str]) -> bool:
        month, day, year = match.groups()
        return self._set_date(_full_year(year), int(month), int(day))

    def _dmy(self, match: re.Match[str]) -> bool:
        day, month, year = match.groups()
        return self._set_date(_full_year(year), int(month), int(day))

    def _year_month(self, match: re.Match[str]) -> bool:
        return self._set_date(int(match.group(1)), int(match.group(2)), 1)

    def _month_day_year(self, match: re.Match[str]) -> bool:
        month, day, year = match.groups()
        return self._set_date(int(year), _MONTHS[month.lower()], int(day))

    def _day_month_year(self, match: re.Match[str]) -> bool:
        day, month, year = match.groups()
        return self._set_date(int(year), _MONTHS[month.lower()], int(day))

    def _month_year(self, match: re.Match[str]) -> bool:
        month, year = match.groups()
        return self._set_date(int(year), _MONTHS[month.lower()], 1)

    def _month_day(self, match: re.Match[str]) -> bool:
        month, day = match.groups()
        return self._defer_year(_MONTHS[month.lower()], int(day))

    def _day_month(self, match: re.Match[str]) -> bool:
        day, month = match.groups()
        return self._defer_year(_MONTHS[month.lower()], int(day))

    def _defer_year(self, month: int, day: int) -> bool:
        # Checked against leap year 2000 here, against the real year on resolve
        if self.parts.date is not None:
            raise DateParseError("Date given more than once", self.text, self.position)
        try:
            date(2000, month, day)
        except ValueError:
            raise DateParseError("Invalid calendar date", self.text, self.position) from None
        self.parts.date = (0, month, day)
        return True

    def _clock_time(self, match: re.Match[str]) -> bool:
        hour, minute, second, fraction, meridian = match.groups()
        microsecond = int((fraction or "0").ljust(6, "0"))
        return self._set_time(
            _meridian_hour(int(hour), meridian, self.text, self.position),
            int(minute),
            int(second or 0),
            microsecond,
        )

    def _hour_meridian(self, match: re.Match[str]) -> bool:
        hour, meridian = match.groups()
        return self._set_time(_meridian_hour(int(hour), meridian, self.text, self.position), 0)

    def _timezone(self, match: re.Match[str]) -> bool:
        if self.parts.time is None:
            return False
        self.parts.has_timezone = True
        return True

    def _relative_amount(self, match: re.Match[str]) -> bool:
        sign, amount, unit = match.groups()
        name, multiplier = _UNITS[unit.lower()]
        value = int(amount) * multiplier
        self.parts.relative[name] += -value if sign == "-" else value
        return True

    def _relative_unit(self, match: re.Match[str]) -> bool:
        word, unit = match.groups()
        name, multiplier = _UNITS[unit.lower()]
        self.parts.relative[name] += _RELATIVE_WORDS[word.lower()] * multiplier
        return True

    def _relative_weekday(self, match: re.Match[str]) -> bool:
        word, weekday = match.groups()
        return self._set_weekday(_WEEKDAYS[weekday.lower()], _RELATIVE_WORDS[word.lower()])

    def _weekday(self, match: re.Match[str]) -> bool:
        return self._set_weekday(_WEEKDAYS[match.group(1).lower()], 0)

    def _set_weekday(self, weekday: int, direction: int) -> bool:
        if self.parts.weekday is not None:
            raise DateParseError("Weekday given more than once", self.text, self.position)
        self.parts.weekday = (weekday, direction)
        return True

    def _ago(self, match: re.Match[str]) -> bool:
        for name in self.parts.relative:
            self.parts.relative[name] = -self.parts.relative[name]
        return True


def _full_year(year: str) -> int:
    value = int(year)
    if len(year) == 2:
        return value + (2000 if value < 70 else 1900)
    return value


def _meridian_hour(hour: int, meridian: str | None, text: str, position: int) -> int:
    if meridian is None:
        return hour
    if not 1 <= hour <= 12:
        raise DateParseError("Invalid 12-hour clock time", text, position)
    hour %= 12
    return hour + 12 if meridian.lower() == "p" else hour


def _resolve(parts: _Parts, base: datetime) -> datetime:
    value = base.replace(microsecond=0, tzinfo=None)

    if parts.epoch is not None:
        value = datetime(1970, 1, 1) + timedelta(seconds=parts.epoch)

    year, month, day = value.year, value.month, value.day
    hour, minute, second, microsecond = value.hour, value.minute, value.second, 0

    if parts.date is not None:
        year = parts.date[0] or year
        month, day = parts.date[1], parts.date[2]
        if day > calendar.monthrange(year, month)[1]:
            raise DateParseError("Invalid calendar date", f"{year}-{month}-{day}")
        hour, minute, second = 0, 0, 0

    if parts.reset_time or parts.weekday is not None:
        hour, minute, second = 0, 0, 0

    if parts.time is not None:
        hour, minute, second, microsecond = parts.time

    # Months and years move the calendar month; surplus days roll forward
    months = year * 12 + (month - 1) + parts.relative["years"] * 12 + parts.relative["months"]
    year, month = divmod(months, 12)
    month += 1

    if parts.day_of == "first":
        day = 1
    elif parts.day_of == "last":
        day = calendar.monthrange(year, month)[1]

    try:
        value = datetime(year, month, 1, hour, minute, second, microsecond)
    except ValueError:
        raise DateParseError("Date out of range", f"{year}-{month}") from None
    value += timedelta(
        days=day - 1 + parts.relative["days"],
        hours=parts.relative["hours"],
        minutes=parts.relative["minutes"],
        seconds=parts.relative["seconds"],
    )

    if parts.weekday is not None:
        weekday, direction = parts.weekday
        if direction > 0:
            delta = (weekday - value.weekday()) % 7 or 7
        elif direction < 0:
            delta = -((value.weekday() - weekday) % 7 or 7)
        else:
            delta = (weekday - value.weekday()) % 7
        value += timedelta(days=delta)

    return value


def parse_datetime(text: str, base: datetime | None = None) -> ParsedDateTime:
    """Parse a date/time expression.

    Args:
        text: The expression
        base: Datetime relative expressions are resolved against (default: now)

    Returns:
        The resolved datetime and what the expression specified

    Raises:
        DateParseError: If the expression is not understood or names an invalid date
    """
    parts = _Scanner(text).scan()
    try:
        value = _resolve(parts, base or datetime.now())
    except OverflowError:
        raise DateParseError("Date out of range", text) from None
    return ParsedDateTime(
        value=value,
        has_timezone=parts.has_timezone,
    )


_ISO_WEEK = re.compile(r"(?<!\d)(\d{4})-?W(\d{1,2})(?:-?([1-7]))?(?!\d)")


def fix_iso_week(text: str) -> str:
    """Rewrite ISO week notation as a calendar date.

    ``2024-W5-3``, ``2024W053`` and ``2024-W05-3`` all become ``2024-01-31``;
    a week without a day means its Monday. Invalid weeks are left alone.
    """

    def replace(match: re.Match[str]) -> str:
        year, week, day = match.groups()
        try:
            return date.fromisocalendar(int(year), int(week), int(day or 1)).isoformat()
        except ValueError:
            return match.group(0)

    return _ISO_WEEK.sub(replace, text)
