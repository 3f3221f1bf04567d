"""Human-readable descriptions of cron expressions."""

import logging

from cron_descriptor import Options, get_description

logger = logging.getLogger(__name__)

INVALID = "Invalid cron expression"

FIELD_LABELS = [
    ("minute", "minute"),
    ("hour", "hour"),
    ("day_of_month", "day of month"),
    ("month", "month"),
    ("day_of_week", "day of week"),
]


def explain(expression: str) -> str:
    """Full English sentence for ``expression``, 12-hour clock."""
    options = Options()
    options.throw_exception_on_parse_error = True
    options.use_24hour_time_format = False
    try:
        return get_description(expression, options)
    except Exception as e:  # FormatException or any renderer error
        logger.debug("Cannot describe %r: %s", expression, e)
        return INVALID


def explain_field(value: str, label: str) -> str:
    if value == "*":
        return f"every {label}"
    if value.startswith("*/"):
        return f"every {value[2:]} {label}(s)"
    if "," in value:
        return f"at {label}(s) {value}"
    if "-" in value:
        start, end = value.split("-", 1)
        return f"{label}s {start} through {end}"
    return f"at {label} {value}"


def explain_fields(expression: str) -> dict[str, str] | None:
    parts = expression.split()
    if len(parts) != 5:
        return None
    return {key: explain_field(value, label) for value, (key, label) in zip(parts, FIELD_LABELS)}
