"""
Data models for the habit completion aggregator

CompletionEvent is the validated input record; BucketKey, AggregatedPeriod and
AggregationResult are derived, short-lived values produced by one aggregation call.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import pytz
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Granularity(Enum):
    """Bucket size used when grouping completions"""
    WEEKLY = "weekly"  # ISO-8601 week, Monday-anchored
    MONTHLY = "monthly"  # Calendar month


class CompletionEvent(BaseModel):
    """One instance of a user marking a habit complete"""

    model_config = ConfigDict(frozen=True)

    habit_id: Optional[Union[int, str]] = Field(
        None,
        validation_alias=AliasChoices("habit_id", "habitId"),
        description="Owning habit, not interpreted by the aggregator"
    )
    completed_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("completed_at", "completedAt"),
        description="Completion time, naive values are UTC"
    )
    belief_score: int = Field(
        ...,
        ge=1,
        le=10,
        validation_alias=AliasChoices("belief_score", "belief_score_snapshot", "beliefScore"),
        description="Self-reported belief snapshot at completion time (1-10)"
    )

    @field_validator("completed_at", mode="before")
    @classmethod
    def parse_completed_at(cls, v):
        if isinstance(v, str):
            v = datetime.fromisoformat(v.strip())

        if isinstance(v, date) and not isinstance(v, datetime):
            v = datetime.combine(v, time.min)

        if isinstance(v, datetime) and v.tzinfo is None:
            v = pytz.utc.localize(v)

        return v

    @field_validator("belief_score", mode="before")
    @classmethod
    def reject_bool_score(cls, v):
        if isinstance(v, bool):
            raise ValueError("belief score must be an integer, not a boolean")
        return v


@dataclass(frozen=True)
class BucketKey:
    """
    Grouping key for one time window

    key is zero-padded and year-major (YYYY-Www or YYYY-MM), so lexical
    order equals chronological order within one granularity.
    """
    key: str
    granularity: Granularity
    year: int  # ISO week-year for weekly buckets
    number: int  # ISO week or calendar month


@dataclass(frozen=True)
class AggregatedPeriod:
    """One chart row"""
    period: str  # Display label
    key: str  # Sortable bucket key
    completions: int
    average_belief_score: float  # Rounded half-up to 1 decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "completions": self.completions,
            "averageScore": self.average_belief_score
        }


@dataclass(frozen=True)
class AggregationResult:
    """
    Two aligned chart series

    Both series are projections of the same bucket list: identical length
    and identical period ordering.
    """
    granularity: Granularity
    completion_series: List[AggregatedPeriod] = field(default_factory=list)
    belief_series: List[AggregatedPeriod] = field(default_factory=list)
    skipped: int = 0  # Malformed records excluded

    @property
    def total_completions(self) -> int:
        return sum(p.completions for p in self.completion_series)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape consumed by the chart components"""
        return {
            "granularity": self.granularity.value,
            "completionData": [
                {"period": p.period, "completions": p.completions}
                for p in self.completion_series
            ],
            "beliefData": [
                {"period": p.period, "averageScore": p.average_belief_score}
                for p in self.belief_series
            ],
            "skipped": self.skipped
        }
