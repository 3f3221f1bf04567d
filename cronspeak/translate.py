"""Free text to cron."""

import logging

from cronspeak.fallback import TimeExtractor, extract_time, fallback
from cronspeak.models import CronFormat, ParseResult
from cronspeak.normalize import normalize
from cronspeak.rules import match_rules
from cronspeak.settings import EXAMPLE_PHRASES

logger = logging.getLogger(__name__)


def translate(text: str, fmt: CronFormat = CronFormat.FIVE, extract: TimeExtractor = extract_time) -> ParseResult:
    """Translate a schedule description such as "every Monday at 3pm".

    Phrase rules are tried first, then the fuzzy fallback. A 6-field result is
    the 5-field one with a leading "0" seconds field.
    """
    if not text or not text.strip():
        return ParseResult.failure("Please enter a schedule description")

    normalized = normalize(text)
    result = match_rules(normalized)
    if result is None:
        result = fallback(text, normalized, extract)

    if result is None:
        logger.debug("Nothing recognized in %r", text)
        examples = ", ".join(f'"{p}"' for p in EXAMPLE_PHRASES[:-1])
        return ParseResult.failure(
            f'Could not parse "{text}". Try phrases like {examples}, or "{EXAMPLE_PHRASES[-1]}".'
        )

    if fmt is CronFormat.SIX:
        return result.as_six_field()
    return result
