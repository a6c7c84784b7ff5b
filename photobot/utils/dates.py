# photobot/utils/dates.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo


@dataclass(frozen=True, slots=True)
class WeekWindow:
    start_date: date  # local Sunday
    end_date: date  # next Sunday (exclusive)
    start_utc: datetime  # naive UTC
    end_utc: datetime  # naive UTC, exclusive


@dataclass(frozen=True, slots=True)
class MonthWindow:
    month_year: str  # YYYY-MM
    start_utc: datetime  # naive UTC
    end_utc: datetime  # naive UTC, exclusive


def utc_now_naive() -> datetime:
    # stored in DB as naive UTC (timezone=False columns)
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _as_aware_utc(now: datetime) -> datetime:
    # naive values are treated as UTC
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def local_midnight_utc(day: date, tz: ZoneInfo) -> datetime:
    """
    Midnight of `day` in `tz`, expressed as naive UTC.
    """
    local = datetime.combine(day, time.min, tzinfo=tz)
    return local.astimezone(timezone.utc).replace(tzinfo=None)


def local_today(now: datetime, tz_name: str = "UTC") -> date:
    return _as_aware_utc(now).astimezone(ZoneInfo(tz_name)).date()


def sunday_week_start(day: date) -> date:
    # weekday() is Monday=0..Sunday=6; shift so Sunday=0
    days_since_sunday = (day.weekday() + 1) % 7
    return day - timedelta(days=days_since_sunday)


def week_window(now: datetime, tz_name: str = "UTC") -> WeekWindow:
    """
    Current leaderboard week: [most recent Sunday 00:00 local, +7 days).
    """
    tz = ZoneInfo(tz_name)
    ws = sunday_week_start(local_today(now, tz_name))
    we = ws + timedelta(days=7)
    return WeekWindow(
        start_date=ws,
        end_date=we,
        start_utc=local_midnight_utc(ws, tz),
        end_utc=local_midnight_utc(we, tz),
    )


def month_window(now: datetime, tz_name: str = "UTC") -> MonthWindow:
    """
    Current calendar month: [1st 00:00 local, 1st of next month 00:00 local).
    """
    return _month_window_from(local_today(now, tz_name).replace(day=1), tz_name)


def month_window_of(month_year: str, tz_name: str = "UTC") -> MonthWindow:
    """
    Window of an explicit 'YYYY-MM' month. Raises ValueError on bad input.
    """
    first = datetime.strptime(parse_month_year(month_year), "%Y-%m").date()
    return _month_window_from(first, tz_name)


def previous_month_window(now: datetime, tz_name: str = "UTC") -> MonthWindow:
    first = local_today(now, tz_name).replace(day=1)
    return _month_window_from((first - timedelta(days=1)).replace(day=1), tz_name)


def _month_window_from(first: date, tz_name: str) -> MonthWindow:
    tz = ZoneInfo(tz_name)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)

    return MonthWindow(
        month_year=first.strftime("%Y-%m"),
        start_utc=local_midnight_utc(first, tz),
        end_utc=local_midnight_utc(next_first, tz),
    )


def parse_month_year(raw: str) -> str:
    """
    Validates 'YYYY-MM' and returns it normalized.
    """
    try:
        return datetime.strptime(raw.strip(), "%Y-%m").strftime("%Y-%m")
    except ValueError as e:
        raise ValueError(f"Invalid month (expected YYYY-MM): {raw!r}") from e


def to_naive_utc(value: datetime) -> datetime:
    return _as_aware_utc(value).replace(tzinfo=None)
