"""Unit tests for relative and absolute date resolution."""

from datetime import datetime, timedelta

import pytest

from thinklink.core.date_parser import (
    extract_date,
    extract_date_time,
    extract_recurrence,
    extract_smart_date,
    get_next_weekday,
)
from thinklink.core.tokenizer import tokenize


@pytest.mark.unit
class TestGetNextWeekday:
    """Tests for get_next_weekday function."""

    def test_same_day_include_today(self, fixed_now):
        """Test the same weekday resolves to today when included."""
        assert get_next_weekday("wednesday", include_today=True, now=fixed_now) == fixed_now

    def test_same_day_excludes_today_by_default(self, fixed_now):
        """Test the same weekday rolls a full week forward."""
        assert get_next_weekday("wednesday", now=fixed_now) == fixed_now + timedelta(days=7)

    def test_rolls_forward(self, fixed_now):
        """Test an earlier weekday wraps into next week."""
        assert get_next_weekday("Monday", now=fixed_now) == datetime(2025, 6, 9, 9, 30)

    def test_later_this_week(self, fixed_now):
        """Test a later weekday resolves within the week."""
        assert get_next_weekday("friday", now=fixed_now) == datetime(2025, 6, 6, 9, 30)

    def test_unknown_day(self, fixed_now):
        """Test unknown names raise ValueError."""
        with pytest.raises(ValueError):
            get_next_weekday("someday", now=fixed_now)


@pytest.mark.unit
class TestExtractDate:
    """Tests for extract_date function."""

    def test_tomorrow_is_one_day_later(self, fixed_now):
        """Test tomorrow is exactly one day after the call time."""
        assert extract_date(["tomorrow"], now=fixed_now) == fixed_now + timedelta(days=1)

    def test_today_and_tonight(self, fixed_now):
        """Test today and tonight resolve to the reference time."""
        assert extract_date(["today"], now=fixed_now) == fixed_now
        assert extract_date(["tonight"], now=fixed_now) == fixed_now

    def test_weekday(self, fixed_now):
        """Test weekday names roll forward."""
        assert extract_date(tokenize("finish by friday"), now=fixed_now) == datetime(2025, 6, 6, 9, 30)

    def test_next_week_and_month(self, fixed_now):
        """Test multi-word indicators use calendar arithmetic."""
        assert extract_date(tokenize("review next week"), now=fixed_now) == datetime(2025, 6, 11, 9, 30)
        assert extract_date(tokenize("renew next month"), now=fixed_now) == datetime(2025, 7, 4, 9, 30)

    def test_earliest_indicator_wins(self, fixed_now):
        """Test the first indicator in the text decides."""
        assert extract_date(tokenize("tomorrow or friday"), now=fixed_now) == fixed_now + timedelta(days=1)

    def test_no_indicator(self, fixed_now):
        """Test None when no time indicator is present."""
        assert extract_date(tokenize("buy milk"), now=fixed_now) is None

    def test_defaults_to_current_time(self):
        """Test the reference time defaults to now."""
        before = datetime.now()
        result = extract_date(["today"])
        assert before <= result <= datetime.now()


@pytest.mark.unit
class TestExtractSmartDate:
    """Tests for extract_smart_date function."""

    def test_recurrence_every(self, fixed_now):
        """Test "every week" yields a recurrence without a due date."""
        result = extract_smart_date("call mom every week".split(), now=fixed_now)
        assert result.recurring == "week"
        assert result.due is None

    def test_recurrence_adverb(self, fixed_now):
        """Test recurrence adverbs map to units."""
        assert extract_smart_date(["water", "plants", "daily"], now=fixed_now).recurring == "day"
        assert extract_smart_date(["report", "monthly"], now=fixed_now).recurring == "month"

    def test_bare_weekday(self, fixed_now):
        """Test a weekday without next/this still resolves."""
        result = extract_smart_date("gym every monday".split(), now=fixed_now)
        assert result.due == datetime(2025, 6, 9, 9, 30)
        assert result.recurring is None

    def test_weekday_overrides_tomorrow(self, fixed_now):
        """Test an explicit weekday wins over other indicators."""
        result = extract_smart_date("tomorrow or saturday".split(), now=fixed_now)
        assert result.due == datetime(2025, 6, 7, 9, 30)

    def test_next_month(self, fixed_now):
        """Test next month adds a calendar month."""
        assert extract_smart_date("due next month".split(), now=fixed_now).due == datetime(2025, 7, 4, 9, 30)

    def test_tomorrow_with_recurrence(self, fixed_now):
        """Test due date and recurrence are returned together."""
        result = extract_smart_date("start tomorrow and repeat weekly".split(), now=fixed_now)
        assert result.due == fixed_now + timedelta(days=1)
        assert result.recurring == "week"

    def test_nothing_found(self, fixed_now):
        """Test both fields are None without signals."""
        result = extract_smart_date(["buy", "milk"], now=fixed_now)
        assert result.due is None
        assert result.recurring is None


@pytest.mark.unit
class TestExtractRecurrence:
    """Tests for extract_recurrence function."""

    @pytest.mark.parametrize(
        ("text", "unit"),
        [
            ("every day", "day"),
            ("every years", "year"),
            ("weekly sync", "week"),
            ("annually", "year"),
            ("once", None),
        ],
    )
    def test_units(self, text, unit):
        """Test recurrence markers map to units."""
        assert extract_recurrence(text) == unit


@pytest.mark.unit
class TestExtractDateTime:
    """Tests for extract_date_time function."""

    def test_this_weekday_is_today(self, fixed_now):
        """Test "this <today's weekday>" resolves to today."""
        assert extract_date_time("review this Wednesday", now=fixed_now) == fixed_now

    def test_next_weekday_same_day_rolls_a_week(self, fixed_now):
        """Test "next <today's weekday>" resolves a week later."""
        assert extract_date_time("next wednesday", now=fixed_now) == fixed_now + timedelta(days=7)

    def test_next_weekday(self, fixed_now):
        """Test "next <weekday>" resolves to the upcoming one."""
        assert extract_date_time("call next monday", now=fixed_now) == datetime(2025, 6, 9, 9, 30)

    def test_explicit_day_month_rolls_to_next_year(self, fixed_now):
        """Test a passed date without a year lands next year."""
        assert extract_date_time("dentist on 15 march", now=fixed_now) == datetime(2026, 3, 15)

    def test_explicit_month_day(self, fixed_now):
        """Test month-first dates with ordinals."""
        assert extract_date_time("party on December 24th", now=fixed_now) == datetime(2025, 12, 24)

    def test_explicit_date_with_year(self, fixed_now):
        """Test an explicit year is kept even if in the past."""
        assert extract_date_time("3rd of june 2024", now=fixed_now) == datetime(2024, 6, 3)

    def test_clock_time_with_relative_day(self, fixed_now):
        """Test am/pm clock times apply to the resolved day."""
        assert extract_date_time("call at 3pm tomorrow", now=fixed_now) == datetime(2025, 6, 5, 15, 0)

    def test_clock_time_with_explicit_date(self, fixed_now):
        """Test clock times apply to explicit dates."""
        assert extract_date_time("march 15 at 9:45 am", now=fixed_now) == datetime(2026, 3, 15, 9, 45)

    def test_twenty_four_hour_time_today(self, fixed_now):
        """Test HH:MM after "at" applies to the reference day."""
        assert extract_date_time("meeting at 14:30", now=fixed_now) == datetime(2025, 6, 4, 14, 30)

    def test_twelve_am_is_midnight(self, fixed_now):
        """Test 12am maps to hour zero."""
        assert extract_date_time("tomorrow 12am", now=fixed_now) == datetime(2025, 6, 5, 0, 0)

    def test_tonight_defaults_to_evening(self, fixed_now):
        """Test tonight without a clock time resolves to 20:00."""
        assert extract_date_time("dinner tonight", now=fixed_now) == datetime(2025, 6, 4, 20, 0)

    def test_invalid_calendar_date(self, fixed_now):
        """Test impossible dates resolve to None instead of raising."""
        assert extract_date_time("due 31 february", now=fixed_now) is None

    def test_nothing_found(self, fixed_now):
        """Test None when neither date nor time is present."""
        assert extract_date_time("no dates here", now=fixed_now) is None
