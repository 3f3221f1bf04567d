import pytest

from cronspeak.fallback import extract_time, fallback, find_weekdays
from cronspeak.models import Confidence
from cronspeak.normalize import normalize


def _run(text, time):
    return fallback(text, normalize(text), extract=lambda _: time)


def test_weekdays_and_time():
    result = _run("Mondays at 9am", (9, 0))
    assert result.cron == "0 9 * * 1"
    assert result.confidence is Confidence.MEDIUM
    assert not result.is_approximate


def test_several_weekdays_are_merged():
    result = _run("tuesdays and thu around 17:30", (17, 30))
    assert result.cron == "30 17 * * 2,4"
    assert result.interpretation == "On Tuesday, Thursday at 5:30 PM"


def test_time_with_daily_cue():
    result = _run("every night around 10:15pm", (22, 15))
    assert result.cron == "15 22 * * *"
    assert result.confidence is Confidence.MEDIUM


def test_time_without_recurrence_cue_is_not_enough():
    assert _run("around 10 in the morning", (10, 0)) is None


def test_every_n_days_with_time():
    result = _run("every 3 days around 8", (8, 0))
    assert result.cron == "0 8 */3 * *"
    assert result.is_approximate
    assert result.confidence is Confidence.MEDIUM
    assert "days 1, 4, 7, 10, etc." in result.warning


def test_every_n_days_out_of_range():
    result = _run("every 40 days around 8", (8, 0))
    assert result.cron is None
    assert result.error == "Days must be between 1 and 31"


@pytest.mark.parametrize("text", ["every 2 hours at 9pm", "every 2 weeks near 9pm", "every 3 months about 9pm"])
def test_other_interval_units_with_time_read_as_daily(text):
    result = _run(text, (21, 0))
    assert result.cron == "0 21 * * *"
    assert result.interpretation == "Daily at 9:00 PM"
    assert not result.is_approximate


def test_weekday_without_time():
    assert _run("mondays", None) is None


def test_find_weekdays():
    assert find_weekdays("mondays and fri and monday") == [1, 5]
    assert find_weekdays("every 2 months") == []
    assert find_weekdays("saturdays, sundays") == [0, 6]


@pytest.mark.parametrize("text, expected", [("thurs at 5 pm", [4]), ("tues and thur", [2, 4]), ("thursdays", [4])])
def test_find_weekdays_knows_short_forms(text, expected):
    assert find_weekdays(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("at 9am", (9, 0)),
        ("5:30pm", (17, 30)),
        ("Mondays at 9am", (9, 0)),
        ("every monday", None),
        ("every day at 9", (9, 0)),
        ("every 3 days around 8", (8, 0)),
        ("at 7:45", (7, 45)),
        ("at 7 p.m.", (19, 0)),
        ("at 12am", (0, 0)),
        ("nothing here", None),
    ],
)
def test_extract_time(text, expected):
    assert extract_time(text) == expected
