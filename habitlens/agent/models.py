"""
Health agent models
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Inputs
# ============================================================================

class UserProfile(BaseModel):
    """Onboarding profile of a user"""

    id: str = Field(..., description="User ID")
    age: Optional[int] = Field(None, ge=0, le=130, description="Age in years")
    gender: Optional[str] = Field(None, description="Gender")
    height_cm: Optional[float] = Field(None, gt=0, description="Height (cm)")
    weight_kg: Optional[float] = Field(None, gt=0, description="Weight (kg)")
    sleep_hours: Optional[float] = Field(None, ge=0, le=24, description="Average nightly sleep")
    stress_level: Optional[int] = Field(None, ge=1, le=10, description="Self-rated stress (1-10)")
    energy_level: Optional[int] = Field(None, ge=1, le=10, description="Self-rated energy (1-10)")
    exercise_types: Optional[List[str]] = Field(None, description="Kinds of exercise practiced")
    exercise_frequency: Optional[str] = Field(None, description="e.g. 2-3_per_week")
    exercise_duration_minutes: Optional[int] = Field(None, ge=0, description="Typical session length")
    work_schedule: Optional[str] = Field(None, description="e.g. day_shift, night_shift")
    meal_pattern: Optional[str] = Field(None, description="e.g. regular_three_meals")
    caffeine_intake: Optional[str] = Field(None, description="e.g. 2-3_cups_daily")
    alcohol_intake: Optional[str] = Field(None, description="e.g. 3+_per_week")
    smoking_status: Optional[str] = Field(None, description="e.g. non_smoker, quit, smoker")
    medical_conditions: Optional[List[str]] = Field(None, description="Diagnosed conditions")
    medications: Optional[List[str]] = Field(None, description="Current medications")
    primary_concern: Optional[str] = Field(None, description="Main reason for using the app")
    activity_level: Optional[str] = Field(None, description="sedentary, light, moderate or active")
    circadian_rhythm: Optional[str] = Field(None, description="morning_type, evening_type or irregular")


class RuleCondition(BaseModel):
    """Profile fields a rule requires; None means 'any'"""

    primary_concern: Optional[str] = None
    activity_level: Optional[str] = None
    circadian_rhythm: Optional[str] = None


class AgentRule(BaseModel):
    """One row of the static recommendation table"""

    conditions: RuleCondition = Field(default_factory=RuleCondition)
    recommendation_short: str
    recommendation_long: str


# ============================================================================
# Outputs
# ============================================================================

Level = Literal["low", "medium", "high"]


@dataclass
class PhysiologicalAnalysis:
    """Heuristic assessment derived from a profile"""
    metabolic_rate_estimate: Level = "medium"
    cortisol_pattern: Literal["elevated", "normal", "low"] = "normal"
    sleep_quality: Literal["poor", "fair", "good"] = "fair"
    recovery_capacity: Level = "medium"
    stress_resilience: Level = "medium"
    risk_factors: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    confidence_score: int = 0  # 0-100

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MicroHabit:
    """A minimum-effective-dose cue/response habit"""
    name: str
    cue: str
    response: str
    timing: str
    rationale: str


@dataclass
class RecommendationPlan:
    core_principles: List[str] = field(default_factory=list)
    micro_habits: List[MicroHabit] = field(default_factory=list)
    avoidance_behaviors: List[str] = field(default_factory=list)
    monitoring_approach: str = ""
    expected_timeline: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
