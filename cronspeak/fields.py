"""Cron field grammar and expression validation.

Supported field syntax:
- "*"          every value
- "*/N"        every N-th value, 1 <= N <= field max
- "A-B"        inclusive range, min <= A <= B <= max
- "A-B/N"      range with step
- "A,B,C"      list of any of the above
- "N"          single value

The minute..weekday part of an expression is checked by croniter, which
also drives occurrence projection. The seconds field of a 6-field
expression is split off first and checked here.
"""

import logging
import re

from croniter import CroniterError, croniter

from cronspeak.models import FIELD_RANGES, SECONDS_RANGE, CronFormat, ValidationResult

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")

# Vendor extensions croniter would otherwise accept: L, W, nth weekday and "?"
_EXTENSION = re.compile(r"[0-9]*L|[0-9]+W|LW|[0-9]+#[0-9]+|\?", re.IGNORECASE)


class CronFieldError(Exception):
    pass


def _to_int(value: str, name: str) -> int:
    if not _DIGITS.fullmatch(value):
        raise CronFieldError(f"{name} value {value!r} is not a number")
    return int(value)


def parse_field(field: str, min_val: int, max_val: int, name: str) -> list[int]:
    if not field:
        raise CronFieldError(f"Empty {name} field")

    if "," in field:
        values: set[int] = set()
        for part in field.split(","):
            values.update(parse_field(part.strip(), min_val, max_val, name))
        return sorted(values)

    step = 1
    base = field
    if "/" in field:
        base, step_str = field.split("/", 1)
        step = _to_int(step_str, f"{name} step")
        if step < 1 or step > max_val:
            raise CronFieldError(f"{name} step {step} out of range (1-{max_val})")
        if base != "*" and "-" not in base:
            raise CronFieldError(f"Invalid step syntax: {field}")

    if base == "*":
        return list(range(min_val, max_val + 1, step))

    if "-" in base:
        start_str, end_str = base.split("-", 1)
        start = _to_int(start_str, name)
        end = _to_int(end_str, name)
        if start < min_val or end > max_val or start > end:
            raise CronFieldError(f"{name} range {base} out of bounds ({min_val}-{max_val})")
        return list(range(start, end + 1, step))

    val = _to_int(base, name)
    if val < min_val or val > max_val:
        raise CronFieldError(f"{name} value {val} out of range ({min_val}-{max_val})")
    return [val]


def detect_format(expression: str) -> CronFormat | None:
    parts = expression.split() if expression else []
    if len(parts) == 5:
        return CronFormat.FIVE
    if len(parts) == 6:
        return CronFormat.SIX
    return None


def split_seconds(expression: str) -> tuple[str | None, str]:
    """Split a 6-field expression into (seconds, 5-field remainder)."""
    parts = expression.split()
    if len(parts) == 6:
        return parts[0], " ".join(parts[1:])
    return None, " ".join(parts)


def _pinpoint(expression: str) -> str | None:
    for value, (name, lo, hi) in zip(expression.split(), FIELD_RANGES):
        try:
            parse_field(value, lo, hi, name)
        except CronFieldError as e:
            return str(e)
    return None


def _extension_operator(expression: str) -> str | None:
    for field in expression.split():
        for part in re.split(r"[,/-]", field):
            if not _EXTENSION.fullmatch(part):
                continue
            for operator in ("#", "?", "W"):
                if operator in part.upper():
                    return operator
            return "L"
    return None


def validate(expression: str, fmt: CronFormat | None = None) -> ValidationResult:
    if not expression or not expression.strip():
        return ValidationResult(valid=False, error="Cron expression is empty")

    parts = expression.split()
    detected = detect_format(expression)
    effective = fmt or detected

    if effective is None:
        return ValidationResult(valid=False, error=f"Expected 5 or 6 fields, got {len(parts)}")

    if len(parts) != effective.field_count:
        return ValidationResult(
            valid=False,
            error=f"Expected {effective.field_count} fields ({effective.field_names}), got {len(parts)}",
            detected_format=detected,
        )

    seconds, cron5 = split_seconds(expression)
    if seconds is not None:
        name, lo, hi = SECONDS_RANGE
        try:
            parse_field(seconds, lo, hi, name)
        except CronFieldError as e:
            return ValidationResult(valid=False, error=f"Invalid seconds field: {e}", detected_format=detected)

    operator = _extension_operator(cron5)
    if operator:
        return ValidationResult(
            valid=False,
            error=f"The '{operator}' operator is a cron extension and is not supported",
            detected_format=detected,
        )

    try:
        croniter(cron5)
    except (CroniterError, ValueError) as e:
        logger.debug("croniter rejected %r: %s", cron5, e)
        return ValidationResult(valid=False, error=_pinpoint(cron5) or str(e), detected_format=detected)

    return ValidationResult(valid=True, detected_format=detected)
