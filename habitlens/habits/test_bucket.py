"""
Bucket key tests

Usage:
    pytest habitlens/habits/test_bucket.py
"""

from datetime import date, datetime, timezone

import pytest
import pytz

from .bucket import average_score, bucket_key, local_date, period_label, select_granularity
from .models import Granularity


@pytest.mark.parametrize("day, expected", [
    (date(2024, 1, 8), "2024-W02"),
    (date(2024, 1, 14), "2024-W02"),  # Sunday stays in the Monday-anchored week
    (date(2024, 1, 15), "2024-W03"),
    (date(2023, 12, 31), "2023-W52"),
    (date(2024, 1, 1), "2024-W01"),
    (date(2024, 12, 30), "2025-W01"),  # ISO week-year ahead of calendar year
    (date(2021, 1, 1), "2020-W53"),  # ISO week-year behind calendar year
    (date(2020, 12, 31), "2020-W53"),
])
def test_weekly_key_follows_iso_week_year(day, expected):
    assert bucket_key(day, Granularity.WEEKLY).key == expected


def test_monthly_key_is_zero_padded():
    bucket = bucket_key(datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc), Granularity.MONTHLY)

    assert bucket.key == "2024-03"
    assert bucket.year == 2024
    assert bucket.number == 3


def test_week_keys_sort_chronologically():
    days = [date(2024, 1, 1), date(2024, 2, 26), date(2024, 11, 4), date(2025, 1, 6)]
    keys = [bucket_key(d, Granularity.WEEKLY).key for d in days]

    assert keys == sorted(keys)
    assert keys[1] == "2024-W09"


def test_naive_datetime_is_utc():
    naive = datetime(2024, 1, 7, 23, 30)

    assert local_date(naive) == date(2024, 1, 7)
    assert local_date(naive, "Asia/Shanghai") == date(2024, 1, 8)


def test_timezone_moves_event_across_week_boundary():
    # Sunday 23:30 in Los Angeles is Monday 07:30 UTC.
    ts = pytz.timezone("America/Los_Angeles").localize(datetime(2024, 1, 14, 23, 30))

    assert bucket_key(ts, Granularity.WEEKLY).key == "2024-W03"
    assert bucket_key(ts, Granularity.WEEKLY, "America/Los_Angeles").key == "2024-W02"


def test_unknown_timezone_raises():
    with pytest.raises(pytz.exceptions.UnknownTimeZoneError):
        bucket_key(datetime(2024, 1, 1), Granularity.WEEKLY, "Mars/Olympus_Mons")


def test_period_labels():
    week = bucket_key(date(2024, 1, 8), Granularity.WEEKLY)
    month = bucket_key(date(2024, 1, 8), Granularity.MONTHLY)

    assert period_label(week) == "2024-W02"
    assert period_label(week, "zh") == "2024-W02"
    assert period_label(month) == "Jan 2024"
    assert period_label(month, "zh-CN") == "2024年1月"
    assert period_label(month, "klingon") == "Jan 2024"


@pytest.mark.parametrize("count, expected", [
    (0, Granularity.WEEKLY),
    (7, Granularity.WEEKLY),
    (8, Granularity.MONTHLY),
    (100, Granularity.MONTHLY),
])
def test_select_granularity(count, expected):
    assert select_granularity(count) == expected


def test_select_granularity_custom_threshold():
    assert select_granularity(4, threshold=5) == Granularity.WEEKLY
    assert select_granularity(5, threshold=5) == Granularity.MONTHLY


@pytest.mark.parametrize("scores, expected", [
    ([6, 8], 7.0),
    ([5], 5.0),
    ([1, 2], 1.5),
    ([6, 6, 7, 6], 6.3),  # 6.25 rounds half-up
    ([1, 1, 2], 1.3),
    ([10, 9, 9], 9.3),
])
def test_average_score_rounds_half_up(scores, expected):
    assert average_score(scores) == expected


def test_average_score_empty():
    assert average_score([]) == 0.0
