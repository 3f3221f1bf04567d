"""Defaults for cronspeak.

Settings are loaded from environment variables with the CRONSPEAK_ prefix.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cronspeak.models import CronFormat

DEFAULT_FORMAT = CronFormat.FIVE
DEFAULT_COUNT = 5
MAX_COUNT = 50

EXAMPLE_PHRASES = ["every 5 minutes", "daily at 9am", "every Monday at 3pm"]

FORMAT_ENV = "CRONSPEAK_FORMAT"
COUNT_ENV = "CRONSPEAK_COUNT"


class Settings(BaseSettings):
    """Output defaults for the command line."""

    model_config = SettingsConfigDict(env_prefix="CRONSPEAK_", case_sensitive=False)

    # Cron format for translated expressions
    format: CronFormat = DEFAULT_FORMAT

    # Upcoming runs listed after a translation or by `next`
    count: int = DEFAULT_COUNT

    @field_validator("format", mode="before")
    @classmethod
    def _known_format(cls, value: object) -> object:
        if isinstance(value, str) and value not in {f.value for f in CronFormat}:
            return DEFAULT_FORMAT
        return value

    @field_validator("count", mode="before")
    @classmethod
    def _clamp_count(cls, value: object) -> int:
        try:
            count = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return DEFAULT_COUNT
        return min(max(count, 1), MAX_COUNT)


def get_default_format() -> CronFormat:
    return Settings().format


def get_default_count() -> int:
    return Settings().count
