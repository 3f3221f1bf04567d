import pytest

from cronspeak import CronFormat, translate, validate
from cronspeak.models import Confidence, ParseResult


def test_every_five_minutes():
    result = translate("every 5 minutes", CronFormat.FIVE)
    assert result.cron == "*/5 * * * *"
    assert result.confidence is Confidence.HIGH
    assert result.is_approximate is False


def test_every_monday_at_three_pm():
    result = translate("every Monday at 3pm")
    assert result.cron == "0 15 * * 1"
    assert result.confidence is Confidence.HIGH


def test_out_of_range_interval_fails():
    result = translate("every 90 minutes")
    assert result.cron is None
    assert "between 1 and 59" in result.error


def test_last_friday_is_approximate():
    result = translate("last Friday of month")
    assert result.cron == "0 0 * * 5"
    assert result.is_approximate
    assert "'L'" in result.warning


def test_every_three_days_six_field():
    result = translate("every 3 days at 9:00am", CronFormat.SIX)
    tokens = result.cron.split(" ")
    assert len(tokens) == 6
    assert tokens[0] == "0"
    assert result.cron == "0 0 9 */3 * *"
    assert "day-of-month" in result.warning


@pytest.mark.parametrize(
    "text",
    [
        "every minute",
        "Every 15 minutes",
        "daily at 9AM",
        "every Monday at 3pm",
        "every tue and thu at 10:30",
        "on the 15th of each month",
        "every 3 days at 9:00am",
        "last day of the month",
        "every 2 weeks",
        "twice a day",
    ],
)
def test_six_field_output_prefixes_zero_seconds(text):
    five = translate(text, CronFormat.FIVE)
    six = translate(text, CronFormat.SIX)
    assert six.cron == "0 " + five.cron
    assert six.confidence == five.confidence
    assert six.warning == five.warning
    assert six.is_approximate == five.is_approximate
    assert validate(five.cron, CronFormat.FIVE).valid
    assert validate(six.cron, CronFormat.SIX).valid


@pytest.mark.parametrize("text", ["", "   "])
def test_empty_input(text):
    result = translate(text)
    assert result.cron is None
    assert result.error == "Please enter a schedule description"


def test_unrecognized_text_echoes_input_and_examples():
    result = translate("whenever I feel like it", extract=lambda _: None)
    assert result.cron is None
    assert result.error == (
        'Could not parse "whenever I feel like it". '
        'Try phrases like "every 5 minutes", "daily at 9am", or "every Monday at 3pm".'
    )


def test_failure_is_not_converted_to_six_field():
    result = translate("every 90 minutes", CronFormat.SIX)
    assert result.cron is None
    assert result.error == "Minutes must be between 1 and 59"


def test_fallback_is_used_when_no_rule_matches():
    result = translate("Mondays at 9am", CronFormat.SIX)
    assert result.cron == "0 0 9 * * 1"
    assert result.confidence is Confidence.MEDIUM


def test_fallback_receives_raw_text():
    seen = []

    def extract(text):
        seen.append(text)
        return 7, 45

    result = translate("Each Day Around 7:45", extract=extract)
    assert seen == ["Each Day Around 7:45"]
    assert result.cron == "45 7 * * *"


def test_parse_result_has_exactly_one_outcome():
    with pytest.raises(ValueError):
        ParseResult()
    with pytest.raises(ValueError):
        ParseResult(cron="* * * * *", error="boom")
    with pytest.raises(ValueError):
        ParseResult(cron="* * * * *", warning="not approximate")


@pytest.mark.parametrize(
    "text, cron",
    [
        ("every day at 9", "0 9 * * *"),
        ("every monday and thursday at 9", "0 9 * * 1,4"),
        ("every 3 days around 8", "0 8 */3 * *"),
        ("thurs at 5pm", "0 17 * * 4"),
        ("every 2 hours at 9pm", "0 21 * * *"),
    ],
)
def test_loose_phrases_with_bare_or_short_forms(text, cron):
    result = translate(text)
    assert result.cron == cron
    assert validate(result.cron).valid
