"""Translate between plain-English schedules and cron expressions."""

__version__ = "0.1.0"

from cronspeak.explain import explain, explain_fields
from cronspeak.fields import detect_format, validate
from cronspeak.models import Confidence, CronFormat, ParseResult, ValidationResult
from cronspeak.normalize import normalize
from cronspeak.occurrences import next_occurrences
from cronspeak.translate import translate

__all__ = [
    "Confidence",
    "CronFormat",
    "ParseResult",
    "ValidationResult",
    "detect_format",
    "explain",
    "explain_fields",
    "next_occurrences",
    "normalize",
    "translate",
    "validate",
]
