"""Tests for the Date value object."""

import pickle
import re
from datetime import date, datetime, timedelta

import pytest

from recordforge.errors import ProgrammerError, ValidationError
from recordforge.temporal import Date, DateFormats
from recordforge.text.messages import set_message_composer


class TestConstruction:
    @pytest.mark.parametrize(
        "value",
        [
            "2024-01-31",
            "01/31/2024",
            "January 31, 2024",
            "31 Jan 2024",
            "2024-01-31 17:45:10",
            "2024-01-31T23:59:59Z",
            date(2024, 1, 31),
            datetime(2024, 1, 31, 18, 0),
            1706659200,
            "1706659200",
            "2024-W05-3",
        ],
    )
    def test_supported_inputs(self, value):
        assert str(Date(value)) == "2024-01-31"

    def test_none_is_today(self):
        assert Date().to_date() == date.today()
        assert Date.today() == Date(None)

    def test_copy_from_date(self):
        original = Date("2024-01-31")

        assert Date(original) == original

    def test_objects_are_converted_with_str(self):
        class Deadline:
            def __str__(self):
                return "2024-02-29"

        assert str(Date(Deadline())) == "2024-02-29"

    @pytest.mark.parametrize("value", ["not a date", "2024-02-30", "", "13/45/2024", "²", "1²"])
    def test_invalid_inputs(self, value):
        with pytest.raises(ValidationError) as exc_info:
            Date(value)

        assert "does not appear to be a valid date" in str(exc_info.value)
        assert exc_info.value.value == value

    def test_epoch_is_read_as_utc(self):
        # 2024-01-31 23:30 UTC
        assert str(Date(1706743800)) == "2024-01-31"

    def test_timestamp_is_whole_days(self):
        value = Date("2024-01-31 17:45:10")

        assert value.timestamp == 1706659200
        assert value.timestamp % 86400 == 0


class TestImmutability:
    def test_attributes_cannot_be_set(self):
        value = Date("2024-01-31")

        with pytest.raises(AttributeError):
            value.year = 2025

    def test_adjust_leaves_receiver_unchanged(self):
        value = Date("2024-01-31")
        value.adjust("+1 day")

        assert str(value) == "2024-01-31"


class TestAdjust:
    @pytest.mark.parametrize(
        "adjustment,expected",
        [
            ("+1 day", "2024-02-01"),
            ("-1 day", "2024-01-30"),
            ("+2 weeks", "2024-02-14"),
            ("next month", "2024-03-02"),
            ("+1 year", "2025-01-31"),
            ("3 days ago", "2024-01-28"),
            ("tomorrow", "2024-02-01"),
            ("first day of next month", "2024-02-01"),
            ("last day of next month", "2024-02-29"),
            ("next friday", "2024-02-02"),
            ("+24 hours", "2024-02-01"),
        ],
    )
    def test_whole_day_adjustments(self, adjustment, expected):
        assert str(Date("2024-01-31").adjust(adjustment)) == expected

    @pytest.mark.parametrize("adjustment", ["+1 hour", "+90 minutes", "noon", "10:00", "now 10:00 UTC"])
    def test_sub_day_adjustments_rejected(self, adjustment):
        with pytest.raises(ValidationError) as exc_info:
            Date("2024-01-31").adjust(adjustment)

        assert "Only adjustments of a day or greater are allowed for dates." in str(exc_info.value)
        assert exc_info.value.value == adjustment

    def test_unparseable_adjustment(self):
        with pytest.raises(ValidationError, match="not appear to be a valid relative date measurement"):
            Date("2024-01-31").adjust("sideways")


class TestFormat:
    def test_iso(self):
        formatted = Date("2024-01-05").format("Y-m-d")

        assert len(formatted) == 10
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", formatted)

    @pytest.mark.parametrize(
        "pattern,expected",
        [
            ("F j, Y", "January 5, 2024"),
            ("D, M jS", "Fri, Jan 5th"),
            ("l", "Friday"),
            ("N w z", "5 5 4"),
            ("W o", "01 2024"),
            ("t L y n", "31 1 24 1"),
            ("\\H\\i Y", "Hi 2024"),
        ],
    )
    def test_patterns(self, pattern, expected):
        assert Date("2024-01-05").format(pattern) == expected

    @pytest.mark.parametrize("pattern", ["Y-m-d H:i", "c", "U", "g a"])
    def test_time_tokens_rejected(self, pattern):
        with pytest.raises(ProgrammerError) as exc_info:
            Date("2024-01-05").format(pattern)

        assert "non-date formatting characters" in str(exc_info.value)

    def test_named_pattern(self):
        DateFormats.define("long", "F j, Y")

        assert Date("2024-01-05").format("long") == "January 5, 2024"

    def test_named_pattern_is_checked_after_translation(self):
        DateFormats.define("stamp", "Y-m-d H:i")

        with pytest.raises(ProgrammerError, match="Y-m-d H:i"):
            Date("2024-01-05").format("stamp")

    def test_callback_post_processes(self):
        DateFormats.register_callback(str.upper)

        assert Date("2024-01-05").format("M j") == "JAN 5"

    def test_format_protocol(self):
        value = Date("2024-01-05")

        assert f"{value}" == "2024-01-05"
        assert f"{value:d/m/Y}" == "05/01/2024"


class TestSecondsDifference:
    def test_difference_to_other_date(self):
        assert Date("2024-01-31").get_seconds_difference("2024-01-30") == 86400
        assert Date("2024-01-30").get_seconds_difference(Date("2024-01-31")) == -86400

    def test_difference_to_today(self):
        assert Date().get_seconds_difference() == 0
        assert Date(date.today() + timedelta(days=2)).get_seconds_difference() == 172800


class TestFuzzyDifference:
    @pytest.mark.parametrize(
        "value,other,expected",
        [
            ("2024-01-31", "2024-01-31", "same day"),
            ("2024-02-01", "2024-01-31", "1 day after"),
            ("2024-01-29", "2024-01-31", "2 days before"),
            ("2024-02-05", "2024-01-31", "5 days after"),
            ("2024-02-06", "2024-01-31", "1 week after"),
            ("2024-02-21", "2024-01-31", "3 weeks after"),
            ("2024-03-01", "2024-01-31", "1 month after"),
            ("2024-09-01", "2024-01-01", "8 months after"),
            ("2024-10-01", "2024-01-01", "1 year after"),
            ("2025-01-31", "2024-01-31", "1 year after"),
            ("2020-01-31", "2024-01-31", "4 years before"),
        ],
    )
    def test_relative_to_date(self, value, other, expected):
        assert Date(value).get_fuzzy_difference(other) == expected

    def test_relative_to_today(self):
        today = date.today()

        assert Date(today).get_fuzzy_difference() == "today"
        assert Date(today + timedelta(days=2)).get_fuzzy_difference() == "2 days from now"
        assert Date(today - timedelta(days=14)).get_fuzzy_difference() == "2 weeks ago"
        assert Date(today - timedelta(days=730)).get_fuzzy_difference() == "2 years ago"

    def test_message_composer_is_used(self):
        class Shouting:
            def compose(self, template, *args):
                return template.format(*args).upper()

        set_message_composer(Shouting())

        assert Date("2024-02-02").get_fuzzy_difference("2024-01-31") == "2 DAYS AFTER"


class TestModify:
    def test_first_of_month(self):
        assert str(Date("2024-02-17").modify("Y-m-01")) == "2024-02-01"

    def test_last_of_month(self):
        assert str(Date("2024-02-17").modify("Y-m-t")) == "2024-02-29"

    def test_monday_of_week(self):
        assert str(Date("2024-01-31").modify("o-\\WW-1")) == "2024-01-29"

    def test_time_pattern_rejected(self):
        with pytest.raises(ProgrammerError):
            Date("2024-02-17").modify("Y-m-d H:00")


class TestValueSemantics:
    def test_equality_and_hash(self):
        assert Date("2024-01-31") == Date("01/31/2024 10:00")
        assert hash(Date("2024-01-31")) == hash(Date(date(2024, 1, 31)))
        assert Date("2024-01-31") != "2024-01-31"

    def test_ordering(self):
        assert Date("2024-01-30") < Date("2024-01-31")
        assert max(Date("2024-01-30"), Date("2025-01-01")) == Date("2025-01-01")

    def test_repr(self):
        assert repr(Date("2024-01-31")) == "Date('2024-01-31')"

    def test_pickle(self):
        value = Date("2024-01-31")

        assert pickle.loads(pickle.dumps(value)) == value
