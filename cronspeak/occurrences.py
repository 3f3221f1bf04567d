"""Next-run projection for cron expressions."""

import logging
from datetime import datetime

from croniter import CroniterError, croniter

from cronspeak.fields import split_seconds
from cronspeak.models import CronFormat

logger = logging.getLogger(__name__)


def next_occurrences(
    expression: str,
    count: int = 5,
    fmt: CronFormat = CronFormat.FIVE,
    start: datetime | None = None,
) -> list[datetime]:
    """Return up to ``count`` run times strictly after ``start`` (default: now).

    Seconds of a 6-field expression are dropped; runs are computed at minute
    resolution. Anything croniter cannot parse yields an empty list.
    """
    if count <= 0 or not expression:
        return []
    if len(expression.split()) != fmt.field_count:
        return []

    _, cron5 = split_seconds(expression)
    base = start or datetime.now()

    runs: list[datetime] = []
    try:
        it = croniter(cron5, base)
        while len(runs) < count:
            runs.append(it.get_next(datetime))
    except (CroniterError, ValueError) as e:
        logger.debug("Cannot project %r after %d run(s): %s", expression, len(runs), e)
    return runs


def format_occurrence(dt: datetime) -> str:
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt:%a, %b} {dt.day}, {dt.year}, {hour}:{dt.minute:02d} {meridiem}"


def relative_time(dt: datetime, now: datetime | None = None) -> str:
    now = now or datetime.now()
    seconds = (dt - now).total_seconds()
    mins = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if mins < 1:
        return "in less than a minute"
    if mins < 60:
        return f"in {mins} minute{'' if mins == 1 else 's'}"
    if hours < 24:
        return f"in {hours} hour{'' if hours == 1 else 's'}"
    if days < 7:
        return f"in {days} day{'' if days == 1 else 's'}"
    return format_occurrence(dt)
