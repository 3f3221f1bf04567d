"""Ordered phrase rules for turning normalized text into cron.

Rules are tried top to bottom and the first pattern that matches the whole
string wins, so specific phrases must stay above the general ones they
overlap with ("every 3 days at 9am" before "every 3 days").
"""

import calendar
import logging
import re
from dataclasses import dataclass
from typing import Callable

from cronspeak.models import DAY_NAMES, Confidence, ParseResult, month_code, weekday_code

logger = logging.getLogger(__name__)


class TranslationError(Exception):
    """A phrase matched a rule but one of its numbers is out of range."""


Handler = Callable[[re.Match], ParseResult]


@dataclass(frozen=True)
class Rule:
    pattern: re.Pattern
    handler: Handler


DAY = r"(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday|thurs|thur|tues|mon|tue|wed|thu|fri|sat|sun)"
MONTH = (
    r"(?:january|february|march|april|may|june|july|august|september|october|november|december"
    r"|jan|feb|mar|apr|jun|jul|aug|sept|sep|oct|nov|dec)"
)
TIME = (
    r"(?:(?P<hh>\d{1,2}):(?P<mm>\d{2})\s*(?P<ap>am|pm)?"
    r"|(?P<h>\d{1,2})\s*(?P<ap2>am|pm)"
    r"|(?P<word>noon|midnight))"
)
AT_TIME = rf"(?:\s*at\s*{TIME})?"
OF_MONTH = r"\s*(?:of\s*(?:the\s*)?(?:every\s*)?month)?"
ORDINALS = {"first": 1, "second": 2, "third": 3, "fourth": 4, "fifth": 5}

_DAY_WORD = re.compile(rf"\b{DAY}\b")


def _hour(value: str, meridiem: str | None = None) -> int:
    hour = int(value)
    if meridiem:
        if hour < 1 or hour > 12:
            raise TranslationError(f"Hour must be between 1 and 12 when using {meridiem}")
        if meridiem == "pm" and hour != 12:
            hour += 12
        if meridiem == "am" and hour == 12:
            hour = 0
    elif hour > 23:
        raise TranslationError("Hour must be between 0 and 23")
    return hour


def _minute(value: str) -> int:
    minute = int(value)
    if minute > 59:
        raise TranslationError("Minute must be between 0 and 59")
    return minute


def _time_of(m: re.Match) -> tuple[int, int]:
    """(hour, minute) from the TIME groups of a match; midnight when absent."""
    g = m.groupdict()
    if g.get("word"):
        return (12, 0) if g["word"] == "noon" else (0, 0)
    if g.get("hh") is not None:
        return _hour(g["hh"], g["ap"]), _minute(g["mm"])
    if g.get("h") is not None:
        return _hour(g["h"], g["ap2"]), 0
    return 0, 0


def clock(hour: int, minute: int) -> str:
    if (hour, minute) == (0, 0):
        return "midnight"
    if (hour, minute) == (12, 0):
        return "noon"
    return f"{hour % 12 or 12}:{minute:02d} {'AM' if hour < 12 else 'PM'}"


def ordinal(n: int) -> str:
    suffix = "th" if 10 <= n % 100 <= 20 else {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _bounded(value: str, lo: int, hi: int, label: str) -> int:
    n = int(value)
    if n < lo or n > hi:
        raise TranslationError(f"{label} must be between {lo} and {hi}")
    return n


def day_step_warning(n: int) -> str:
    days = list(range(1, 32, n))
    shown = ", ".join(str(d) for d in days[:4])
    if len(days) > 4:
        shown += ", etc."
    return (
        f"Note: */{n} in the day-of-month field runs on days {shown} of each month, "
        f"not every {n} days from today. The count restarts on the 1st of every month."
    )


def day_step_result(n: int, hour: int, minute: int) -> ParseResult:
    return ParseResult.approximate(
        f"{minute} {hour} */{n} * *",
        day_step_warning(n),
        f"Every {n} day(s) at {clock(hour, minute)}",
        confidence=Confidence.MEDIUM,
    )


def _fixed(cron: str, interpretation: str) -> Handler:
    def fixed(m: re.Match) -> ParseResult:
        return ParseResult.success(cron, interpretation)

    return fixed


# --- intervals ---

def _every_minutes(m: re.Match) -> ParseResult:
    n = _bounded(m["n"], 1, 59, "Minutes")
    return ParseResult.success(f"*/{n} * * * *", f"Every {n} minute(s)")


def _every_hours(m: re.Match) -> ParseResult:
    n = _bounded(m["n"], 1, 23, "Hours")
    return ParseResult.success(f"0 */{n} * * *", f"Every {n} hour(s)")


def _every_days(m: re.Match) -> ParseResult:
    n = _bounded(m["n"], 1, 31, "Days")
    hour, minute = _time_of(m)
    return day_step_result(n, hour, minute)


# --- time of day ---

def _daily_at(m: re.Match) -> ParseResult:
    hour, minute = _time_of(m)
    return ParseResult.success(f"{minute} {hour} * * *", f"Daily at {clock(hour, minute)}")


def _every_weekday(m: re.Match) -> ParseResult:
    day = weekday_code(m["day"])
    hour, minute = _time_of(m)
    return ParseResult.success(f"{minute} {hour} * * {day}", f"Every {DAY_NAMES[day]} at {clock(hour, minute)}")


def _weekdays(m: re.Match) -> ParseResult:
    hour, minute = _time_of(m)
    return ParseResult.success(f"{minute} {hour} * * 1-5", f"Every weekday at {clock(hour, minute)}")


def _weekends(m: re.Match) -> ParseResult:
    hour, minute = _time_of(m)
    return ParseResult.success(f"{minute} {hour} * * 0,6", f"Every weekend at {clock(hour, minute)}")


def _several_days(m: re.Match) -> ParseResult:
    days = sorted({weekday_code(d) for d in _DAY_WORD.findall(m["days"])})
    hour, minute = _time_of(m)
    names = " and ".join(DAY_NAMES[d] for d in days)
    return ParseResult.success(
        f"{minute} {hour} * * {','.join(str(d) for d in days)}",
        f"Every {names} at {clock(hour, minute)}",
    )


# --- monthly / yearly ---

def _first_of_month(m: re.Match) -> ParseResult:
    hour, minute = _time_of(m)
    return ParseResult.success(f"{minute} {hour} 1 * *", f"First day of every month at {clock(hour, minute)}")


def _day_of_month(m: re.Match) -> ParseResult:
    day = _bounded(m["dom"], 1, 31, "Day")
    hour, minute = _time_of(m)
    return ParseResult.success(f"{minute} {hour} {day} * *", f"Day {day} of every month at {clock(hour, minute)}")


def _twice_a_day_at(m: re.Match) -> ParseResult:
    hours = sorted({_hour(m["h1"], m["ap1"]), _hour(m["h2"], m["ap2"])})
    labels = " and ".join(clock(h, 0) for h in hours)
    return ParseResult.success(f"0 {','.join(str(h) for h in hours)} * * *", f"Twice a day at {labels}")


def _yearly_on(m: re.Match) -> ParseResult:
    month = month_code(m["month"])
    name = calendar.month_name[month]
    last = calendar.monthrange(2000, month)[1]
    day = int(m["dom"])
    if day < 1 or day > last:
        raise TranslationError(f"Day must be between 1 and {last} for {name}")
    hour, minute = _time_of(m)
    return ParseResult.success(
        f"{minute} {hour} {day} {month} *",
        f"Every year on {name} {ordinal(day)} at {clock(hour, minute)}",
    )


# --- beyond standard cron ---

def _last_weekday(m: re.Match) -> ParseResult:
    day = weekday_code(m["day"])
    name = DAY_NAMES[day]
    hour, minute = _time_of(m)
    return ParseResult.approximate(
        f"{minute} {hour} * * {day}",
        f'Standard cron cannot express "last {name} of month". This requires the \'L\' operator '
        f"(e.g. {day}L) which is only available in extended cron formats like Quartz. "
        f"The expression shown will run every {name}.",
        f"Attempted: Last {name} of the month",
    )


def _nth_weekday(m: re.Match) -> ParseResult:
    nth_text = m["nth"]
    nth = ORDINALS.get(nth_text) or int(re.sub(r"\D", "", nth_text))
    if nth < 1 or nth > 5:
        raise TranslationError("Weekday occurrence must be between 1st and 5th")
    day = weekday_code(m["day"])
    name = DAY_NAMES[day]
    hour, minute = _time_of(m)
    return ParseResult.approximate(
        f"{minute} {hour} * * {day}",
        f'Standard cron cannot express "{ordinal(nth)} {name} of month". This requires the \'#\' operator '
        f"(e.g. {day}#{nth}) which is only available in extended cron formats. "
        f"The expression shown will run every {name}.",
        f"Attempted: {ordinal(nth)} {name} of the month",
    )


def _last_day_of_month(m: re.Match) -> ParseResult:
    hour, minute = _time_of(m)
    return ParseResult.approximate(
        f"{minute} {hour} 28-31 * *",
        "Standard cron cannot express \"last day of month\". This requires the 'L' operator "
        "which is only available in extended cron formats. "
        "The expression shown runs on days 28-31 as an approximation.",
        "Attempted: Last day of the month",
    )


def _every_weeks(m: re.Match) -> ParseResult:
    n = int(m["n"])
    return ParseResult.approximate(
        "0 0 * * 0",
        f'Standard cron cannot directly express "every {n} weeks". Cron fields reset every calendar '
        "unit, so there is no multi-week step. Run weekly and keep an execution counter in your job "
        "(or use a scheduler with week intervals) to skip the runs in between.",
        f"Attempted: Every {n} weeks",
    )


def _r(pattern: str, handler: Handler) -> Rule:
    return Rule(re.compile(pattern), handler)


RULES: tuple[Rule, ...] = (
    # exact idioms
    _r(r"every\s*minute", _fixed("* * * * *", "Every minute")),
    _r(r"every\s*hour", _fixed("0 * * * *", "Every hour at minute 0")),
    _r(r"every\s*day", _fixed("0 0 * * *", "Every day at midnight")),
    _r(r"daily", _fixed("0 0 * * *", "Every day at midnight")),
    _r(r"hourly", _fixed("0 * * * *", "Every hour at minute 0")),
    # bounded intervals
    _r(r"every\s*(?P<n>\d+)\s*minutes?", _every_minutes),
    _r(r"every\s*(?P<n>\d+)\s*hours?", _every_hours),
    _r(rf"every\s*(?P<n>\d+)\s*days?\s*at\s*{TIME}", _every_days),
    _r(r"every\s*(?P<n>\d+)\s*days?", _every_days),
    # time of day
    _r(rf"(?:every\s*day\s*)?at\s*{TIME}", _daily_at),
    _r(rf"daily\s*at\s*{TIME}", _daily_at),
    _r(rf"every\s*(?P<day>{DAY}){AT_TIME}", _every_weekday),
    _r(rf"(?:on\s*|every\s*)?weekdays?{AT_TIME}", _weekdays),
    _r(rf"(?:on\s*|every\s*)?weekends?{AT_TIME}", _weekends),
    # several weekdays
    _r(rf"every\s*(?P<days>{DAY}(?:\s*(?:,\s*and|and|,)\s*{DAY})+){AT_TIME}", _several_days),
    # monthly
    _r(rf"(?:on\s*)?(?:the\s*)?1st\s*(?:day\s*)?(?:of\s*)?(?:every|each)?\s*month{AT_TIME}", _first_of_month),
    _r(
        rf"(?:on\s*)?(?:the\s*)?(?P<dom>\d{{1,2}})(?:st|nd|rd|th)?\s*(?:day\s*)?(?:of\s*)?(?:every|each)?\s*month{AT_TIME}",
        _day_of_month,
    ),
    _r(r"(?:every|each)\s*month", _fixed("0 0 1 * *", "First day of every month at midnight")),
    _r(r"monthly", _fixed("0 0 1 * *", "First day of every month at midnight")),
    # twice a day
    _r(r"twice\s*(?:a|per)\s*day", _fixed("0 0,12 * * *", "Twice a day at midnight and noon")),
    _r(
        r"twice\s*(?:a|per)\s*day\s*at\s*(?P<h1>\d{1,2})\s*(?P<ap1>am|pm)\s*(?:and|,)\s*(?P<h2>\d{1,2})\s*(?P<ap2>am|pm)",
        _twice_a_day_at,
    ),
    # weekly / yearly
    _r(r"(?:every|each)\s*week", _fixed("0 0 * * 0", "Every week on Sunday at midnight")),
    _r(r"weekly", _fixed("0 0 * * 0", "Every week on Sunday at midnight")),
    _r(r"(?:every|each)\s*year", _fixed("0 0 1 1 *", "Every year on January 1st at midnight")),
    _r(r"yearly", _fixed("0 0 1 1 *", "Every year on January 1st at midnight")),
    _r(r"annually", _fixed("0 0 1 1 *", "Every year on January 1st at midnight")),
    _r(
        rf"(?:every|each)\s*(?:year\s*on\s*)?(?P<month>{MONTH})\s*(?P<dom>\d{{1,2}})(?:st|nd|rd|th)?{AT_TIME}",
        _yearly_on,
    ),
    # needs L or #
    _r(rf"(?:(?:every|the)\s*)?last\s*(?P<day>{DAY}){OF_MONTH}{AT_TIME}", _last_weekday),
    _r(rf"(?:every\s*)?(?:the\s*)?(?P<nth>\d+(?:st|nd|rd|th))\s*(?P<day>{DAY}){OF_MONTH}{AT_TIME}", _nth_weekday),
    _r(rf"(?:(?:every|the)\s*)?last\s*day{OF_MONTH}{AT_TIME}", _last_day_of_month),
    _r(rf"(?:every\s*)?(?:the\s*)?(?P<nth>first|second|third|fourth|fifth)\s*(?P<day>{DAY}){OF_MONTH}{AT_TIME}", _nth_weekday),
    # multi-week
    _r(r"every\s*(?P<n>\d+)\s*weeks?", _every_weeks),
)


def match_rules(text: str) -> ParseResult | None:
    """Result of the first rule whose pattern matches all of ``text``, else None."""
    for index, rule in enumerate(RULES):
        m = rule.pattern.fullmatch(text)
        if not m:
            continue
        logger.debug("Rule %d (%s) matched %r", index, rule.handler.__name__, text)
        try:
            return rule.handler(m)
        except TranslationError as e:
            return ParseResult.failure(str(e))
    return None
