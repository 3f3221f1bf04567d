from datetime import datetime, timedelta

import pytest

from cronspeak.models import CronFormat
from cronspeak.occurrences import format_occurrence, next_occurrences, relative_time

START = datetime(2026, 10, 19, 10, 30, 15)


def test_next_occurrences_every_fifteen_minutes():
    assert next_occurrences("*/15 * * * *", 4, start=START) == [
        datetime(2026, 10, 19, 10, 45),
        datetime(2026, 10, 19, 11, 0),
        datetime(2026, 10, 19, 11, 15),
        datetime(2026, 10, 19, 11, 30),
    ]


@pytest.mark.parametrize("expression", ["* * * * *", "0 9 * * 1-5", "0 0 1 * *", "0 0 * * 0,6", "30 17 */3 * *"])
def test_next_occurrences_strictly_increase_after_start(expression):
    runs = next_occurrences(expression, 10, start=START)
    assert len(runs) == 10
    assert runs[0] > START
    assert all(a < b for a, b in zip(runs, runs[1:]))


def test_next_occurrences_on_a_matching_instant_moves_forward():
    start = datetime(2026, 10, 19, 9, 0)
    assert next_occurrences("0 9 * * *", 1, start=start) == [datetime(2026, 10, 20, 9, 0)]


def test_next_occurrences_defaults_to_now():
    before = datetime.now()
    runs = next_occurrences("* * * * *", 2)
    assert len(runs) == 2
    assert runs[0] > before


def test_six_field_drops_seconds():
    five = next_occurrences("0 9 * * *", 3, start=START)
    six = next_occurrences("30 0 9 * * *", 3, CronFormat.SIX, start=START)
    assert six == five
    assert six[0] == datetime(2026, 10, 20, 9, 0)


@pytest.mark.parametrize(
    "expression, count, fmt",
    [
        ("61 * * * *", 3, CronFormat.FIVE),
        ("not a cron", 3, CronFormat.FIVE),
        ("", 3, CronFormat.FIVE),
        ("0 9 * * *", 3, CronFormat.SIX),
        ("0 0 9 * * *", 3, CronFormat.FIVE),
        ("0 9 * * *", 0, CronFormat.FIVE),
        ("0 9 * * *", -1, CronFormat.FIVE),
    ],
)
def test_next_occurrences_returns_empty_instead_of_failing(expression, count, fmt):
    assert next_occurrences(expression, count, fmt, start=START) == []


def test_format_occurrence():
    assert format_occurrence(datetime(2026, 10, 19, 15, 0)) == "Mon, Oct 19, 2026, 3:00 PM"
    assert format_occurrence(datetime(2026, 10, 20, 0, 5)) == "Tue, Oct 20, 2026, 12:05 AM"


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=30), "in less than a minute"),
        (timedelta(minutes=1), "in 1 minute"),
        (timedelta(minutes=45), "in 45 minutes"),
        (timedelta(hours=1), "in 1 hour"),
        (timedelta(hours=5, minutes=10), "in 5 hours"),
        (timedelta(days=3), "in 3 days"),
    ],
)
def test_relative_time(delta, expected):
    assert relative_time(START + delta, START) == expected


def test_relative_time_falls_back_to_date_after_a_week():
    later = datetime(2026, 11, 2, 9, 0)
    assert relative_time(later, START) == format_occurrence(later)
