from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.guard_scheduling.guard_scheduling.common.clock_time import (
    ClockTime,
    format_time,
    parse_clock_time,
    try_parse_clock_time,
)
from src.guard_scheduling.guard_scheduling.core.exceptions import ParseError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("09:00 AM", time(9, 0)),
        ("9:05 am", time(9, 5)),
        ("12:00 AM", time(0, 0)),
        ("12:30 PM", time(12, 30)),
        ("11:59PM", time(23, 59)),
        ("  05:00 PM ", time(17, 0)),
    ],
)
def test_parse_valid_times(text, expected):
    assert parse_clock_time(text).to_time() == expected


@pytest.mark.parametrize("text", ["", None, "9 AM", "13:00 PM", "00:15 AM", "09:60 AM", "09:00", "21:00", "9:0 AM"])
def test_try_parse_reports_failure_without_raising(text):
    result = try_parse_clock_time(text)

    assert not result.ok
    assert result.value is None
    assert result.error.kind == ParseError.INVALID_TIME_FORMAT


def test_parse_raises_structured_error():
    with pytest.raises(ParseError) as exc:
        parse_clock_time("nine o'clock")

    assert exc.value.kind == "invalid_time_format"
    assert exc.value.value == "nine o'clock"


def test_clock_time_on_day_and_str():
    ct = ClockTime(hour=9, minute=0, meridiem="AM")

    assert ct.on(date(2024, 1, 8)) == datetime(2024, 1, 8, 9, 0)
    assert str(parse_clock_time("9:05 pm")) == "09:05 PM"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("09:00 AM", "9 AM"),
        ("12:00 PM", "12 PM"),
        ("10:00 pm", "10 pm"),
        ("09:30 AM", "09:30 AM"),
        ("whenever", "whenever"),
    ],
)
def test_format_time_strips_zero_minutes(text, expected):
    assert format_time(text) == expected
