import datetime as dt

import pytest

from quiet_hours.utils.formatting import (
    as_utc,
    format_clock_time,
    format_long_date,
    parse_time_of_day,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("09:00", "9:00 AM"),
        ("00:15", "12:15 AM"),
        ("12:00", "12:00 PM"),
        ("13:05:00", "1:05 PM"),
        (dt.time(23, 59), "11:59 PM"),
    ],
)
def test_format_clock_time(value, expected):
    assert format_clock_time(value) == expected


def test_format_long_date():
    assert format_long_date(dt.date(2025, 3, 10)) == "Monday, March 10, 2025"
    assert format_long_date("2025-01-05") == "Sunday, January 5, 2025"


def test_parse_time_of_day_rejects_garbage():
    with pytest.raises(ValueError):
        parse_time_of_day("quarter past nine")


def test_as_utc_attaches_zone_to_naive_values():
    naive = dt.datetime(2025, 3, 10, 8, 50)
    assert as_utc(naive) == dt.datetime(2025, 3, 10, 8, 50, tzinfo=dt.timezone.utc)
    assert as_utc(None) is None
