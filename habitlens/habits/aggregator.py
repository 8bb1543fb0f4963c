"""
Completion aggregator

Turns a flat, unordered list of habit completions into two aligned chart
series (completion counts and average belief score), bucketed by ISO week or
calendar month. Pure functions: no I/O, no module-level state.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from pydantic import ValidationError

from .bucket import average_score, bucket_key, local_date, period_label, select_granularity
from .models import AggregatedPeriod, AggregationResult, BucketKey, CompletionEvent, Granularity
from ..utils.config.habits import DEFAULT_LANGUAGE, DEFAULT_TIMEZONE, DEFAULT_WEEKLY_THRESHOLD

RawEvent = Union[CompletionEvent, Mapping[str, Any]]


def validate_events(
        events: Iterable[RawEvent],
        timezone: str = DEFAULT_TIMEZONE
) -> Tuple[List[CompletionEvent], int]:
    """
    Validate raw records, skipping malformed ones

    A bad record (unparseable completed_at, belief score outside 1-10,
    missing fields, or a timestamp too close to the datetime range limits to
    convert into the given timezone) is logged and excluded; the remaining
    records are kept.

    Returns:
        (valid events, number of skipped records)
    """
    valid = []
    skipped = []

    for idx, raw in enumerate(events):
        try:
            event = raw if isinstance(raw, CompletionEvent) else CompletionEvent.model_validate(raw)
            local_date(event.completed_at, timezone)
        except ValidationError as e:
            skipped.append((idx, "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
            )))
        except OverflowError as e:
            skipped.append((idx, f"completed_at: {e}"))
        else:
            valid.append(event)

    if skipped:
        logging.warning(
            f"Skipped {len(skipped)} invalid completion record(s)",
            extra={"skipped": [{"index": idx, "error": error} for idx, error in skipped]}
        )

    return valid, len(skipped)


def group_events(
        events: Iterable[CompletionEvent],
        granularity: Granularity,
        timezone: str = DEFAULT_TIMEZONE
) -> Dict[BucketKey, List[CompletionEvent]]:
    """Group events by bucket key, no ordering guarantee"""
    grouped = defaultdict(list)

    for event in events:
        grouped[bucket_key(event.completed_at, granularity, timezone)].append(event)

    return dict(grouped)


def summarize(
        bucket: BucketKey,
        events: List[CompletionEvent],
        language: str = DEFAULT_LANGUAGE
) -> AggregatedPeriod:
    return AggregatedPeriod(
        period=period_label(bucket, language),
        key=bucket.key,
        completions=len(events),
        average_belief_score=average_score(e.belief_score for e in events)
    )


def aggregate_periods(
        events: Iterable[CompletionEvent],
        granularity: Granularity,
        timezone: str = DEFAULT_TIMEZONE,
        language: str = DEFAULT_LANGUAGE
) -> List[AggregatedPeriod]:
    """
    Bucket validated events and emit one row per non-empty bucket

    Rows are in ascending chronological order regardless of input order.
    Empty periods are not filled in.
    """
    grouped = group_events(events, granularity, timezone)

    return [
        summarize(bucket, grouped[bucket], language)
        for bucket in sorted(grouped, key=lambda b: b.key)
    ]


def group_by_week(
        events: Iterable[RawEvent],
        timezone: str = DEFAULT_TIMEZONE,
        language: str = DEFAULT_LANGUAGE
) -> List[AggregatedPeriod]:
    valid, _ = validate_events(events, timezone)
    return aggregate_periods(valid, Granularity.WEEKLY, timezone, language)


def group_by_month(
        events: Iterable[RawEvent],
        timezone: str = DEFAULT_TIMEZONE,
        language: str = DEFAULT_LANGUAGE
) -> List[AggregatedPeriod]:
    valid, _ = validate_events(events, timezone)
    return aggregate_periods(valid, Granularity.MONTHLY, timezone, language)


def aggregate(
        events: Iterable[RawEvent],
        *,
        timezone: str = DEFAULT_TIMEZONE,
        language: str = DEFAULT_LANGUAGE,
        weekly_threshold: int = DEFAULT_WEEKLY_THRESHOLD
) -> AggregationResult:
    """
    Aggregate completions into completion-count and belief-score series

    Granularity is chosen from the number of valid events: fewer than
    weekly_threshold (default 8) buckets by ISO week, otherwise by month.

    Args:
        events: Raw records or CompletionEvent instances, any order, any length
        timezone: Timezone used to decide which calendar day an event belongs to
        language: Language of monthly period labels
        weekly_threshold: Event count at which monthly buckets begin

    Returns:
        AggregationResult whose two series share the same periods
    """
    valid, skipped = validate_events(events, timezone)
    granularity = select_granularity(len(valid), weekly_threshold)

    periods = aggregate_periods(valid, granularity, timezone, language)

    return AggregationResult(
        granularity=granularity,
        completion_series=list(periods),
        belief_series=list(periods),
        skipped=skipped
    )
