"""Value types shared by the translator, validator and explainer."""

from dataclasses import dataclass, replace
from enum import Enum


class CronFormat(str, Enum):
    FIVE = "5-field"
    SIX = "6-field"

    @property
    def field_count(self) -> int:
        return 6 if self is CronFormat.SIX else 5

    @property
    def field_names(self) -> str:
        names = "minute hour day month weekday"
        return f"second {names}" if self is CronFormat.SIX else names


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# (name, min, max) per position of a 5-field expression
FIELD_RANGES: list[tuple[str, int, int]] = [
    ("minute", 0, 59),
    ("hour", 0, 23),
    ("day-of-month", 1, 31),
    ("month", 1, 12),
    ("day-of-week", 0, 6),
]
SECONDS_RANGE = ("seconds", 0, 59)

WEEKDAYS: dict[str, int] = {
    "sunday": 0, "sun": 0,
    "monday": 1, "mon": 1,
    "tuesday": 2, "tue": 2, "tues": 2,
    "wednesday": 3, "wed": 3,
    "thursday": 4, "thu": 4, "thur": 4, "thurs": 4,
    "friday": 5, "fri": 5,
    "saturday": 6, "sat": 6,
}

MONTHS: dict[str, int] = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def weekday_code(name: str) -> int:
    return WEEKDAYS[name.lower()]


def month_code(name: str) -> int:
    return MONTHS[name.lower()]


@dataclass(frozen=True)
class ParseResult:
    """Outcome of translating free text into cron.

    Either ``cron`` or ``error`` is set, never both. Approximate results carry
    a ``warning`` explaining what the expression does not capture.
    """

    cron: str | None = None
    confidence: Confidence = Confidence.LOW
    is_approximate: bool = False
    warning: str | None = None
    interpretation: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.cron is None) == (self.error is None):
            raise ValueError("ParseResult needs exactly one of cron or error")
        if self.warning is not None and not self.is_approximate:
            raise ValueError("Only approximate results carry a warning")

    @classmethod
    def success(
        cls, cron: str, interpretation: str | None = None, confidence: Confidence = Confidence.HIGH
    ) -> "ParseResult":
        return cls(cron=cron, confidence=confidence, interpretation=interpretation)

    @classmethod
    def approximate(
        cls,
        cron: str,
        warning: str,
        interpretation: str | None = None,
        confidence: Confidence = Confidence.LOW,
    ) -> "ParseResult":
        return cls(
            cron=cron,
            confidence=confidence,
            is_approximate=True,
            warning=warning,
            interpretation=interpretation,
        )

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.cron is not None

    def as_six_field(self) -> "ParseResult":
        if self.cron is None:
            return self
        return replace(self, cron=f"0 {self.cron}")


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None
    detected_format: CronFormat | None = None
