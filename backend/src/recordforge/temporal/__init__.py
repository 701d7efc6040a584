"""Calendar date value object, date parsing and date formatting."""

from recordforge.temporal.date import SECONDS_PER_DAY, Date
from recordforge.temporal.formats import RESTRICTED_TOKENS, DateFormats, render
from recordforge.temporal.parser import DateParseError, ParsedDateTime, fix_iso_week, parse_datetime

__all__ = [
    "Date",
    "DateFormats",
    "DateParseError",
    "ParsedDateTime",
    "RESTRICTED_TOKENS",
    "SECONDS_PER_DAY",
    "fix_iso_week",
    "parse_datetime",
    "render",
]
