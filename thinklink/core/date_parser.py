"""Relative and absolute date resolution for command text.

All resolution is relative to the moment of the call. Every function accepts an
optional ``now`` so callers and tests can pin the reference time; nothing caches
it. Missing or ambiguous dates resolve to ``None`` instead of raising.
"""

import re
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta
from typing import NamedTuple

from dateutil.relativedelta import relativedelta

from thinklink.core.lexicon import PATTERNS, TIME_INDICATORS, first_term


WEEKDAYS: tuple[str, ...] = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

MONTHS: dict[str, int] = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

_MONTH_NAMES = "|".join(sorted(MONTHS, key=len, reverse=True))
_WEEKDAY_NAMES = "|".join(WEEKDAYS)

_DAY_MONTH = re.compile(rf"\b(\d{{1,2}})(?:st|nd|rd|th)?(?:\s+of)?\s+({_MONTH_NAMES})\b(?:,?\s+(\d{{4}}))?")
_MONTH_DAY = re.compile(rf"\b({_MONTH_NAMES})\s+(\d{{1,2}})(?:st|nd|rd|th)?\b(?:,?\s+(\d{{4}}))?")
_QUALIFIED_WEEKDAY = re.compile(rf"\b(this|next)\s+({_WEEKDAY_NAMES})\b")
_BARE_WEEKDAY = re.compile(rf"\b({_WEEKDAY_NAMES})\b")

_RECURRENCE_EVERY = re.compile(r"\bevery\s+(day|week|month|year)s?\b")
_RECURRENCE_ADVERB = re.compile(r"\b(daily|weekly|monthly|yearly|annually)\b")
_ADVERB_UNITS: dict[str, str] = {
    "daily": "day",
    "weekly": "week",
    "monthly": "month",
    "yearly": "year",
    "annually": "year",
}

_TONIGHT_HOUR = 20


class SmartDate(NamedTuple):
    """Due date and recurrence unit resolved from a command."""

    due: datetime | None
    recurring: str | None


def get_next_weekday(day_name: str, *, include_today: bool = False, now: datetime | None = None) -> datetime:
    """Return the next occurrence of a weekday.

    Args:
        day_name: Weekday name (e.g., "monday")
        include_today: Resolve to today when today is that weekday
        now: Reference time (defaults to the current time)

    Returns:
        Reference time shifted forward to the target weekday

    Raises:
        ValueError: If day_name is not a weekday name
    """
    reference = now or datetime.now()
    target = WEEKDAYS.index(day_name.lower())
    days_ahead = (target - reference.weekday()) % 7
    if days_ahead == 0 and not include_today:
        days_ahead = 7
    return reference + timedelta(days=days_ahead)


def _resolve_indicator(indicator: str, reference: datetime) -> datetime | None:
    match indicator:
        case "today" | "tonight":
            return reference
        case "tomorrow":
            return reference + timedelta(days=1)
        case "next week":
            return reference + relativedelta(weeks=1)
        case "next month":
            return reference + relativedelta(months=1)
        case _ if indicator in WEEKDAYS:
            return get_next_weekday(indicator, now=reference)
    return None


def extract_date(tokens: Sequence[str], *, now: datetime | None = None) -> datetime | None:
    """Resolve the earliest time indicator in the tokens to a timestamp.

    Recognizes today, tonight, tomorrow, next week, next month and weekday
    names. Weekdays always roll forward to a future day.

    Args:
        tokens: Normalized words of the command
        now: Reference time (defaults to the current time)

    Returns:
        Resolved timestamp or None if no indicator is present
    """
    indicator = first_term(tokens, TIME_INDICATORS)
    if indicator is None:
        return None
    return _resolve_indicator(indicator, now or datetime.now())


def extract_recurrence(text: str) -> str | None:
    """Return the recurrence unit ("day", "week", "month", "year") in the text, if any."""
    match = _RECURRENCE_EVERY.search(text)
    if match:
        return match.group(1)
    match = _RECURRENCE_ADVERB.search(text)
    if match:
        return _ADVERB_UNITS[match.group(1)]
    return None


def extract_smart_date(tokens: Sequence[str], *, now: datetime | None = None) -> SmartDate:
    """Resolve a due date and a recurrence marker from the tokens.

    Extends extract_date with recurrence detection ("every week", "daily") and
    calendar arithmetic for "next week"/"next month". An explicit weekday name
    wins over other indicators, with or without "next"/"this".

    Args:
        tokens: Normalized (unstemmed) words of the command
        now: Reference time (defaults to the current time)

    Returns:
        SmartDate with the due timestamp and recurrence unit, either may be None
    """
    reference = now or datetime.now()
    text = " ".join(tokens)

    due: datetime | None = None
    if re.search(r"\b(today|tonight)\b", text):
        due = reference
    elif re.search(r"\btomorrow\b", text):
        due = reference + timedelta(days=1)

    if re.search(r"\bnext\s+week\b", text):
        due = reference + relativedelta(weeks=1)
    elif re.search(r"\bnext\s+month\b", text):
        due = reference + relativedelta(months=1)

    weekday = _BARE_WEEKDAY.search(text)
    if weekday:
        due = get_next_weekday(weekday.group(1), now=reference)

    return SmartDate(due=due, recurring=extract_recurrence(text))


def _explicit_calendar_date(text: str, today: date) -> date | None:
    match = _DAY_MONTH.search(text)
    if match:
        day, month, year = int(match.group(1)), MONTHS[match.group(2)], match.group(3)
    else:
        match = _MONTH_DAY.search(text)
        if not match:
            return None
        month, day, year = MONTHS[match.group(1)], int(match.group(2)), match.group(3)

    try:
        candidate = date(int(year) if year else today.year, month, day)
        if year is None and candidate < today:
            candidate = date(today.year + 1, month, day)
    except ValueError:
        return None
    return candidate


def _clock_time(text: str) -> time | None:
    match = PATTERNS["time_expression"].search(text)
    if not match:
        return None

    if match.group(1) is not None:
        hour = int(match.group(1))
        minute = int(match.group(2)) if match.group(2) else 0
        meridiem = match.group(3)
        if not 1 <= hour <= 12 or minute > 59:  # noqa: PLR2004
            return None
        if meridiem == "pm" and hour != 12:  # noqa: PLR2004
            hour += 12
        if meridiem == "am" and hour == 12:  # noqa: PLR2004
            hour = 0
        return time(hour, minute)

    return time(int(match.group(4)), int(match.group(5)))


def extract_date_time(text: str, *, now: datetime | None = None) -> datetime | None:
    """Resolve a full date and optional clock time from raw command text.

    Supports everything extract_smart_date resolves plus:
    - "this <weekday>": today when today is that weekday, else the upcoming one
    - "next <weekday>": always the upcoming occurrence after today
    - explicit dates: "15 march", "march 15th", "3rd of june 2027"
    - clock times: "3pm", "at 9:30 am", "at 14:00"

    Explicit dates without a year that already passed roll to next year.

    Args:
        text: Raw command text
        now: Reference time (defaults to the current time)

    Returns:
        Resolved timestamp or None when neither a date nor a time is present
    """
    reference = now or datetime.now()
    lowered = " ".join(text.lower().split())

    resolved: datetime | None = None
    explicit = _explicit_calendar_date(lowered, reference.date())
    if explicit is not None:
        resolved = datetime.combine(explicit, time())
    else:
        qualified = _QUALIFIED_WEEKDAY.search(lowered)
        if qualified:
            resolved = get_next_weekday(
                qualified.group(2),
                include_today=qualified.group(1) == "this",
                now=reference,
            )
        else:
            words = re.findall(r"[a-z]+", lowered)
            resolved = extract_smart_date(words, now=reference).due

    clock = _clock_time(lowered)
    if clock is None and resolved is not None and re.search(r"\btonight\b", lowered):
        clock = time(_TONIGHT_HOUR, 0)
    if clock is None:
        return resolved

    base = resolved or reference
    return base.replace(hour=clock.hour, minute=clock.minute, second=0, microsecond=0)
