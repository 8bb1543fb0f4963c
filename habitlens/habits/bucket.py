"""
Bucket key calculation

All calendar math of the aggregator lives here: timezone conversion, ISO-8601
week numbering, month keys, period labels and rounding.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

import pytz

from .models import BucketKey, Granularity
from ..utils.config.habits import DEFAULT_LANGUAGE, DEFAULT_TIMEZONE, DEFAULT_WEEKLY_THRESHOLD
from ..utils.i18n import t

_LOCALE_MODULE = "habits"


def local_date(timestamp: Union[datetime, date], timezone: str = DEFAULT_TIMEZONE) -> date:
    """
    Calendar date of a timestamp in the given timezone

    Naive datetimes are treated as UTC. Plain dates are returned unchanged.

    Raises:
        pytz.exceptions.UnknownTimeZoneError: If the timezone name is invalid
    """
    if not isinstance(timestamp, datetime):
        return timestamp

    tz = pytz.timezone(timezone)
    if timestamp.tzinfo is None:
        timestamp = pytz.utc.localize(timestamp)

    return timestamp.astimezone(tz).date()


def bucket_key(
        timestamp: Union[datetime, date],
        granularity: Granularity,
        timezone: str = DEFAULT_TIMEZONE
) -> BucketKey:
    """
    Compute the bucket a timestamp falls into

    Weekly keys follow ISO-8601: week 1 holds the first Thursday of the year,
    and the year component is the ISO week-year, so 2024-12-30 maps to
    2025-W01 and 2021-01-01 maps to 2020-W53.

    Examples:
        2024-01-08 (weekly)  -> 2024-W02
        2024-01-08 (monthly) -> 2024-01
    """
    d = local_date(timestamp, timezone)

    if granularity == Granularity.WEEKLY:
        iso_year, iso_week, _ = d.isocalendar()
        return BucketKey(
            key=f"{iso_year}-W{iso_week:02d}",
            granularity=granularity,
            year=iso_year,
            number=iso_week
        )

    return BucketKey(
        key=f"{d.year}-{d.month:02d}",
        granularity=granularity,
        year=d.year,
        number=d.month
    )


def period_label(bucket: BucketKey, language: str = DEFAULT_LANGUAGE) -> str:
    """Display label: the ISO week key, or a localized month name"""
    if bucket.granularity == Granularity.WEEKLY:
        return t("week_label", language, module=_LOCALE_MODULE, week=bucket.key)

    month_name = t(f"month_{bucket.number}", language, module=_LOCALE_MODULE)
    return t(
        "month_label",
        language,
        module=_LOCALE_MODULE,
        month_name=month_name,
        month=bucket.number,
        year=bucket.year
    )


def select_granularity(count: int, threshold: int = DEFAULT_WEEKLY_THRESHOLD) -> Granularity:
    """Sparse histories are bucketed by week, dense ones by month"""
    return Granularity.WEEKLY if count < threshold else Granularity.MONTHLY


def average_score(scores: Iterable[int], places: int = 1) -> float:
    """
    Arithmetic mean rounded half-up (away from zero for positive values)

    Uses Decimal so 6.25 becomes 6.3, where the built-in round() would give 6.2.
    """
    values = list(scores)
    if not values:
        return 0.0

    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))
