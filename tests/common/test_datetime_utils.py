from datetime import date, datetime, timedelta, timezone

from src.workforce.workforce.common.datetime_utils import (
    as_utc,
    format_minutes,
    iter_days,
    local_work_date,
    minutes_between,
    minutes_to_hours,
    month_bounds,
    to_local,
)


def test_naive_datetimes_are_read_as_utc():
    assert as_utc(datetime(2025, 1, 6, 9)) == datetime(2025, 1, 6, 9, tzinfo=timezone.utc)


def test_to_local_applies_fixed_offset():
    local = to_local(datetime(2025, 1, 6, 3, 15, tzinfo=timezone.utc), 345)
    assert (local.hour, local.minute) == (9, 0)
    assert local.utcoffset() == timedelta(minutes=345)


def test_local_work_date_rolls_over_at_local_midnight():
    assert local_work_date(datetime(2025, 1, 5, 18, 14, tzinfo=timezone.utc), 345) == date(2025, 1, 5)
    assert local_work_date(datetime(2025, 1, 5, 18, 15, tzinfo=timezone.utc), 345) == date(2025, 1, 6)


def test_minutes_between_mixes_aware_and_naive():
    start = datetime(2025, 1, 6, 9, tzinfo=timezone.utc)
    assert minutes_between(start, datetime(2025, 1, 6, 10, 30)) == 90
    assert minutes_between(datetime(2025, 1, 6, 10), start) == -60


def test_hours_rounded_to_two_decimals():
    assert minutes_to_hours(510) == 8.5
    assert minutes_to_hours(100) == 1.67
    assert format_minutes(125) == "2h 5m"
    assert format_minutes(-5) == "0h 0m"


def test_month_bounds_and_days():
    assert month_bounds(2, 2024) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(12, 2025) == (date(2025, 12, 1), date(2025, 12, 31))
    assert list(iter_days(date(2025, 1, 30), date(2025, 2, 1))) == [
        date(2025, 1, 30),
        date(2025, 1, 31),
        date(2025, 2, 1),
    ]
