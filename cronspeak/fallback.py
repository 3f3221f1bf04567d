"""Looser extraction for phrases no rule recognizes.

A fuzzy date parser pulls a clock time out of the raw text, and the
normalized text is scanned for weekday names. The parts found are combined
into a cron expression when there is enough signal for a recurrence.
"""

import logging
import re
from datetime import datetime
from typing import Callable

from dateutil import parser as date_parser

from cronspeak.models import DAY_NAMES, WEEKDAYS, Confidence, ParseResult, weekday_code
from cronspeak.rules import clock, day_step_result

logger = logging.getLogger(__name__)

TimeExtractor = Callable[[str], tuple[int, int] | None]

# Two defaults that disagree on the hour: an hour the parser really found is
# the same under both.
_DEFAULTS = (datetime(2000, 1, 1, 0, 0), datetime(2000, 1, 1, 13, 37))

# "at 9", "around 8:30", "at 7 p.m.": a bare number the date parser would
# read as a day of the month
_AT_CLOCK = re.compile(
    r"\b(?:at|around|about)\s+(\d{1,2})(?::(\d{2}))?(?:\s*([ap])\.?m\.?)?(?![\w:.])",
    re.IGNORECASE,
)

_WEEKDAY = re.compile(rf"\b({'|'.join(sorted(WEEKDAYS, key=len, reverse=True))})s?\b")
_INTERVAL = re.compile(r"every\s*(\d+)\s*(minute|hour|day|week|month)s?")
_DAILY_CUE = re.compile(r"\b(?:every|daily|each day)\b")


def _at_clock(text: str) -> tuple[int, int] | None:
    for match in _AT_CLOCK.finditer(text):
        hour, minute = int(match.group(1)), int(match.group(2) or 0)
        meridiem = (match.group(3) or "").lower()
        if minute > 59:
            continue
        if meridiem:
            if not 1 <= hour <= 12:
                continue
            hour = hour % 12 + (12 if meridiem == "p" else 0)
        elif hour > 23:
            continue
        return hour, minute
    return None


def extract_time(text: str) -> tuple[int, int] | None:
    """(hour, minute) mentioned in ``text``, or None unless the hour is certain."""
    found = _at_clock(text)
    if found:
        return found
    try:
        first = date_parser.parse(text, default=_DEFAULTS[0], fuzzy=True)
        second = date_parser.parse(text, default=_DEFAULTS[1], fuzzy=True)
    except (ValueError, OverflowError, TypeError) as e:
        logger.debug("No time in %r: %s", text, e)
        return None
    if first.hour != second.hour:
        return None
    return first.hour, first.minute


def find_weekdays(text: str) -> list[int]:
    return sorted({weekday_code(name) for name in _WEEKDAY.findall(text)})


def fallback(raw: str, normalized: str, extract: TimeExtractor = extract_time) -> ParseResult | None:
    days = find_weekdays(normalized)
    time = extract(raw)
    interval = _INTERVAL.search(normalized)
    logger.debug("Fallback for %r: days=%s time=%s interval=%s", raw, days, time, interval and interval.group(0))

    if days and time:
        hour, minute = time
        names = ", ".join(DAY_NAMES[d] for d in days)
        return ParseResult.success(
            f"{minute} {hour} * * {','.join(str(d) for d in days)}",
            f"On {names} at {clock(hour, minute)}",
            confidence=Confidence.MEDIUM,
        )

    if time and interval and interval.group(2) == "day":
        n = int(interval.group(1))
        if n < 1 or n > 31:
            return ParseResult.failure("Days must be between 1 and 31")
        return day_step_result(n, *time)

    if time and _DAILY_CUE.search(normalized):
        hour, minute = time
        return ParseResult.success(
            f"{minute} {hour} * * *",
            f"Daily at {clock(hour, minute)}",
            confidence=Confidence.MEDIUM,
        )

    return None
