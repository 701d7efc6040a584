"""Immutable calendar date value object.

A Date is a single calendar day with no time of day and no timezone.
Anything finer than a day is discarded when a Date is constructed, so two
Dates are equal exactly when they name the same day.

Usage:
    due = Date("2024-01-31")
    due.adjust("+1 day")            # Date('2024-02-01')
    due.format("F j, Y")            # 'January 31, 2024'
    due.get_fuzzy_difference()      # e.g. '3 months ago'
    due.modify("Y-m-01")            # Date('2024-01-01')
"""

from datetime import date, datetime, time, timezone
from functools import total_ordering
from typing import Any

from recordforge.errors import ProgrammerError, ValidationError
from recordforge.temporal.formats import (
    RESTRICTED_TOKENS,
    DateFormats,
    find_restricted_tokens,
    render,
)
from recordforge.temporal.parser import DateParseError, fix_iso_week, parse_datetime
from recordforge.text.inflection import inflect_on_quantity
from recordforge.text.messages import compose

SECONDS_PER_DAY = 86400

_EPOCH = date(1970, 1, 1)

# (largest difference in seconds, unit length in seconds, singular, plural)
_FUZZY_UNITS = (
    (432000, 86400, "day", "days"),  # 5 days
    (1814400, 604800, "week", "weeks"),  # 3 weeks
    (23328000, 2592000, "month", "months"),  # 9 months
    (None, 31536000, "year", "years"),
)


def _coerce(value: Any) -> date:
    """Convert any supported input to a calendar day."""
    if value is None:
        return date.today()
    if isinstance(value, Date):
        return value.to_date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return _from_epoch(value)
    if isinstance(value, str) and value.strip().isdecimal():
        return _from_epoch(int(value))

    text = str(value)
    try:
        return parse_datetime(fix_iso_week(text)).value.date()
    except DateParseError:
        raise ValidationError(
            f"The date specified, {text}, does not appear to be a valid date", value
        ) from None


def _from_epoch(seconds: int) -> date:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc).date()
    except (OverflowError, OSError, ValueError):
        raise ValidationError(
            f"The date specified, {seconds}, does not appear to be a valid date", seconds
        ) from None


@total_ordering
class Date:
    """A calendar day.

    Accepts None (today), another Date, a ``datetime.date`` or
    ``datetime.datetime``, an integer (or digit-only string) of seconds since
    the Unix epoch in UTC, or any date expression understood by
    ``parse_datetime``. Other objects are converted with ``str()`` first.

    Raises:
        ValidationError: If the value cannot be read as a date
    """

    __slots__ = ("_date",)

    def __init__(self, value: Any = None):
        object.__setattr__(self, "_date", _coerce(value))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Date objects are immutable")

    @classmethod
    def today(cls) -> "Date":
        return cls()

    @property
    def timestamp(self) -> int:
        """Seconds from the epoch to the start of this day, always a multiple of 86400."""
        return (self._date - _EPOCH).days * SECONDS_PER_DAY

    def to_date(self) -> date:
        return self._date

    def _as_datetime(self) -> datetime:
        return datetime.combine(self._date, time())

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def adjust(self, adjustment: str) -> "Date":
        """Return a new Date moved by a relative expression such as "+1 day".

        Only whole-day moves are allowed: an adjustment that leaves a time
        of day or names a timezone is rejected.

        Raises:
            ValidationError: If the adjustment is invalid or not a whole-day move
        """
        try:
            parsed = parse_datetime(adjustment, base=self._as_datetime())
        except DateParseError:
            raise ValidationError(
                f"The adjustment specified, {adjustment}, does not appear to be "
                "a valid relative date measurement",
                adjustment,
            ) from None

        if parsed.has_timezone or parsed.value.time() != time():
            raise ValidationError(
                f"The adjustment specified, {adjustment}, appears to be a time or "
                "timezone adjustment. Only adjustments of a day or greater are "
                "allowed for dates.",
                adjustment,
            )

        return Date(parsed.value)

    def format(self, pattern: str) -> str:
        """Format the date with a date pattern or a pattern name.

        Raises:
            ProgrammerError: If the pattern uses a time or timezone token
        """
        pattern = DateFormats.translate(pattern)
        if find_restricted_tokens(pattern):
            raise ProgrammerError(
                f"The formatting string, {pattern}, contains one of the following "
                f"non-date formatting characters: {', '.join(RESTRICTED_TOKENS)}",
                pattern,
            )
        return DateFormats.apply_callback(render(pattern, self._as_datetime()))

    def get_seconds_difference(self, other: Any = None) -> int:
        """Seconds from other (default today) to this date; positive if this date is later."""
        return self.timestamp - Date(other).timestamp

    def get_fuzzy_difference(self, other: Any = None) -> str:
        """Describe the distance to other (default today) in one rounded unit.

        Relative to today the result reads "today", "2 days from now" or
        "1 year ago"; relative to a given date it reads "same day",
        "3 weeks after" or "1 month before". Only the coarsest fitting unit
        is used, so 6 days is "1 week" and 29 days is "1 month".
        """
        relative_to_now = other is None
        diff = self.timestamp - Date(other).timestamp

        if abs(diff) < SECONDS_PER_DAY:
            return compose("today") if relative_to_now else compose("same day")

        for limit, unit_seconds, singular, plural in _FUZZY_UNITS:
            if limit is None or abs(diff) <= limit:
                break
        # Round half away from zero
        count = (2 * abs(diff) + unit_seconds) // (2 * unit_seconds)
        units = inflect_on_quantity(count, compose(singular), compose(plural))

        if relative_to_now:
            if diff > 0:
                return compose("{0} {1} from now", count, units)
            return compose("{0} {1} ago", count, units)

        if diff > 0:
            return compose("{0} {1} after", count, units)
        return compose("{0} {1} before", count, units)

    def modify(self, pattern: str) -> "Date":
        """Create a new Date from this date formatted with pattern.

        ``"Y-m-01"`` gives the first of the month, ``"Y-m-t"`` the last and
        ``"o-\\WW-1"`` the Monday of the week.
        """
        return Date(self.format(pattern))

    # -------------------------------------------------------------------------
    # Value object protocol
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return render("Y-m-d", self._as_datetime())

    def __repr__(self) -> str:
        return f"Date({str(self)!r})"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return self.format(format_spec)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._date == other._date

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._date < other._date

    def __hash__(self) -> int:
        return hash(self._date)

    def __reduce__(self) -> tuple[Any, ...]:
        return (Date, (str(self),))
