from datetime import date, datetime, timedelta, timezone

import pytest

from photobot.utils.dates import (
    month_window,
    month_window_of,
    parse_month_year,
    previous_month_window,
    sunday_week_start,
    to_naive_utc,
    week_window,
)


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2024, 3, 10), date(2024, 3, 10)),  # Sunday
        (date(2024, 3, 11), date(2024, 3, 10)),  # Monday
        (date(2024, 3, 16), date(2024, 3, 10)),  # Saturday
        (date(2024, 1, 2), date(2023, 12, 31)),  # across the year
    ],
)
def test_sunday_week_start(day, expected):
    assert sunday_week_start(day) == expected


def test_week_window_utc():
    w = week_window(datetime(2024, 3, 13, 12, 0))
    assert w.start_date == date(2024, 3, 10)
    assert w.end_date == date(2024, 3, 17)
    assert w.start_utc == datetime(2024, 3, 10)
    assert w.end_utc == datetime(2024, 3, 17)


def test_week_window_dst_start_is_167_hours():
    # US clocks jump forward on 2024-03-10 02:00 local
    w = week_window(datetime(2024, 3, 13, 12, 0, tzinfo=timezone.utc), "America/New_York")
    assert w.start_date == date(2024, 3, 10)
    assert w.start_utc == datetime(2024, 3, 10, 5, 0)
    assert w.end_utc == datetime(2024, 3, 17, 4, 0)
    assert w.end_utc - w.start_utc == timedelta(hours=167)


def test_week_window_uses_local_date():
    # 03:00 UTC Sunday is still Saturday evening in New York
    w = week_window(datetime(2024, 3, 10, 3, 0), "America/New_York")
    assert w.start_date == date(2024, 3, 3)


@pytest.mark.parametrize(
    "now, month_year, start, end",
    [
        (datetime(2024, 2, 15), "2024-02", datetime(2024, 2, 1), datetime(2024, 3, 1)),
        (datetime(2023, 2, 28, 23, 59), "2023-02", datetime(2023, 2, 1), datetime(2023, 3, 1)),
        (datetime(2024, 4, 30, 12), "2024-04", datetime(2024, 4, 1), datetime(2024, 5, 1)),
        (datetime(2023, 12, 31, 23, 0), "2023-12", datetime(2023, 12, 1), datetime(2024, 1, 1)),
    ],
)
def test_month_window(now, month_year, start, end):
    w = month_window(now)
    assert w.month_year == month_year
    assert w.start_utc == start
    assert w.end_utc == end


def test_month_window_includes_last_second_of_month():
    w = month_window(datetime(2024, 2, 10))
    last = datetime(2024, 2, 29, 23, 59, 59)
    assert w.start_utc <= last < w.end_utc
    assert not (w.start_utc <= datetime(2024, 3, 1) < w.end_utc)


def test_month_window_local_timezone():
    w = month_window(datetime(2024, 7, 1, 2, 0), "America/New_York")
    assert w.month_year == "2024-06"
    assert w.start_utc == datetime(2024, 6, 1, 4, 0)
    assert w.end_utc == datetime(2024, 7, 1, 4, 0)


def test_month_window_of():
    w = month_window_of("2024-02")
    assert (w.start_utc, w.end_utc) == (datetime(2024, 2, 1), datetime(2024, 3, 1))
    assert month_window_of("2023-12").end_utc == datetime(2024, 1, 1)
    with pytest.raises(ValueError):
        month_window_of("2024-13")


@pytest.mark.parametrize(
    "now, tz, month_year",
    [
        (datetime(2024, 3, 1, 0, 5), "UTC", "2024-02"),
        (datetime(2024, 1, 1, 0, 5), "UTC", "2023-12"),
        (datetime(2024, 7, 1, 4, 5), "America/New_York", "2024-06"),
    ],
)
def test_previous_month_window(now, tz, month_year):
    assert previous_month_window(now, tz).month_year == month_year


def test_parse_month_year():
    assert parse_month_year("2024-03") == "2024-03"
    assert parse_month_year(" 2024-3 ") == "2024-03"
    with pytest.raises(ValueError):
        parse_month_year("2024-13")
    with pytest.raises(ValueError):
        parse_month_year("march")


def test_to_naive_utc():
    aware = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_naive_utc(aware) == datetime(2024, 1, 1, 10, 0)
    assert to_naive_utc(datetime(2024, 1, 1, 12, 0)) == datetime(2024, 1, 1, 12, 0)
