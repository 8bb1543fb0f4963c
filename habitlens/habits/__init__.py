"""
Habit Completion Aggregation Module

Groups habit-completion logs into ISO-week or calendar-month buckets and
produces the completion-count and belief-score series shown on the dashboard.

Key Features:
- Automatic granularity (weekly below 8 events, monthly from 8 on)
- ISO-8601 week-year keys, correct across the new year boundary
- Malformed records are skipped, never abort the whole chart
- Pure functions, safe to call concurrently

Example Usage:
    from habitlens.habits import aggregate

    result = aggregate(logs)
    result.to_dict()
"""

from .aggregator import (
    aggregate,
    aggregate_periods,
    group_by_month,
    group_by_week,
    group_events,
    validate_events
)
from .bucket import average_score, bucket_key, period_label, select_granularity
from .models import (
    AggregatedPeriod,
    AggregationResult,
    BucketKey,
    CompletionEvent,
    Granularity
)
from .service import CompletionAggregateService

__all__ = [
    "aggregate",
    "aggregate_periods",
    "group_by_week",
    "group_by_month",
    "group_events",
    "validate_events",
    "bucket_key",
    "period_label",
    "select_granularity",
    "average_score",
    "AggregatedPeriod",
    "AggregationResult",
    "BucketKey",
    "CompletionEvent",
    "Granularity",
    "CompletionAggregateService",
]
