"""
Profile analysis and recommendation plan

Heuristic physiological assessment from onboarding answers, and the
micro-habit plan derived from it.
"""

import logging

from .models import MicroHabit, PhysiologicalAnalysis, RecommendationPlan, UserProfile

# Choice codes used by the onboarding form
FREQUENT_EXERCISE = {"4-5_per_week", "6-7_per_week"}
MODERATE_EXERCISE = "2-3_per_week"
HIGH_CAFFEINE = "4+_cups_daily"
MODERATE_CAFFEINE = "2-3_cups_daily"
HEAVY_ALCOHOL = "3+_per_week"
NON_SMOKING = {"non_smoker", "quit"}
REGULAR_MEALS = "regular_three_meals"
ANXIETY_CONDITION = "anxiety"
ANTI_ANXIETY_MEDICATION = "anti_anxiety"

MAX_CONFIDENCE = 100

CORE_PRINCIPLES = [
    "Do not chase streaks; watch physiological signals instead of numbers.",
    "Accept the natural decline of metabolism and focus on the responses you control.",
    "Improve body function (lagging indicator) by resolving anxiety (leading indicator).",
    "Build minimum-effective-dose micro-habits instead of high-intensity plans.",
]

MONITORING_APPROACH = (
    'Do not count completed days. After each action, rate "did this help me?" (1-10). '
    "Track belief strength, not completion rate."
)

EXPECTED_TIMELINE = (
    "Micro-habits settle within 2-4 weeks; physiological improvement shows in 3-6 months. "
    "Aim for long-term sustainability rather than fast change."
)


def _exercise_score(frequency: str | None) -> int:
    if frequency in FREQUENT_EXERCISE:
        return 1
    if frequency == MODERATE_EXERCISE:
        return 0
    return -1


def analyze_user_profile(profile: UserProfile) -> PhysiologicalAnalysis:
    """
    Assess a profile

    Each block adds to the confidence score when it had data to work with;
    missing stress and energy levels default to a neutral 5.
    """
    analysis = PhysiologicalAnalysis()
    confidence = 0

    exercise_score = _exercise_score(profile.exercise_frequency)

    # Metabolic rate: BMI, age and activity.
    if profile.age and profile.height_cm and profile.weight_kg:
        bmi = profile.weight_kg / (profile.height_cm / 100) ** 2
        age_factor = -1 if profile.age > 40 else 0 if profile.age > 30 else 1

        if bmi > 25 and age_factor <= 0 and exercise_score <= 0:
            analysis.metabolic_rate_estimate = "low"
        elif bmi < 20 and exercise_score >= 0:
            analysis.metabolic_rate_estimate = "high"
        confidence += 15

    # Cortisol pattern: stress, sleep and caffeine.
    stress = profile.stress_level or 5
    sleep_score = 0
    if profile.sleep_hours:
        sleep_score = 0 if 7 <= profile.sleep_hours <= 9 else -1
    caffeine_score = 1 if profile.caffeine_intake == HIGH_CAFFEINE else 0.5 if profile.caffeine_intake == MODERATE_CAFFEINE else 0

    if stress >= 7 or sleep_score < 0 or caffeine_score >= 1:
        analysis.cortisol_pattern = "elevated"
    elif stress <= 3 and sleep_score == 0 and caffeine_score == 0:
        analysis.cortisol_pattern = "low"
    confidence += 20

    # Sleep quality.
    if profile.sleep_hours:
        if profile.sleep_hours < 6:
            analysis.sleep_quality = "poor"
            analysis.risk_factors.append("insufficient sleep")
        elif 7 <= profile.sleep_hours <= 9:
            analysis.sleep_quality = "good"
            analysis.strengths.append("adequate sleep duration")
        else:
            analysis.sleep_quality = "fair"
        confidence += 15

    # Recovery capacity: exercise and energy.
    energy = profile.energy_level or 5
    energy_score = 1 if energy >= 7 else -1 if energy <= 4 else 0

    if exercise_score >= 0 and energy_score >= 0:
        analysis.recovery_capacity = "high"
        analysis.strengths.append("good exercise habits")
    elif exercise_score < 0 and energy_score < 0:
        analysis.recovery_capacity = "low"
        analysis.risk_factors.append("low activity with low energy")
    confidence += 15

    # Stress resilience.
    if profile.stress_level and profile.stress_level >= 8:
        analysis.stress_resilience = "low"
        analysis.risk_factors.append("high stress level")
    elif profile.medical_conditions and ANXIETY_CONDITION in profile.medical_conditions:
        analysis.stress_resilience = "low"
        analysis.risk_factors.append("anxiety disorder")
    elif profile.stress_level and profile.stress_level <= 4:
        analysis.stress_resilience = "high"
        analysis.strengths.append("well-managed stress")
    confidence += 15

    # Other risk factors.
    if profile.smoking_status and profile.smoking_status not in NON_SMOKING:
        analysis.risk_factors.append("smoking")
    if profile.alcohol_intake == HEAVY_ALCOHOL:
        analysis.risk_factors.append("high alcohol intake")
    if profile.medications and ANTI_ANXIETY_MEDICATION in profile.medications:
        analysis.risk_factors.append("taking anti-anxiety medication")
    confidence += 10

    # Other strengths.
    if profile.exercise_types and len(profile.exercise_types) >= 3:
        analysis.strengths.append("varied exercise types")
    if profile.meal_pattern == REGULAR_MEALS:
        analysis.strengths.append("regular meals")

    analysis.confidence_score = min(confidence, MAX_CONFIDENCE)

    logging.debug(
        "Profile analyzed",
        extra={"user_id": profile.id, "confidence_score": analysis.confidence_score}
    )

    return analysis


def generate_recommendation_plan(profile: UserProfile, analysis: PhysiologicalAnalysis) -> RecommendationPlan:
    plan = RecommendationPlan(
        core_principles=list(CORE_PRINCIPLES),
        monitoring_approach=MONITORING_APPROACH,
        expected_timeline=EXPECTED_TIMELINE
    )

    if analysis.cortisol_pattern == "elevated":
        plan.micro_habits.append(MicroHabit(
            name="Stress hormone clearance",
            cue="When anxiety or stress starts rising",
            response="Walk or breathe deeply for 5 minutes",
            timing="Any time",
            rationale="Metabolizes elevated cortisol before stress accumulates"
        ))
        plan.avoidance_behaviors.append("Avoid high-intensity exercise while stress is high")
        plan.avoidance_behaviors.append("Avoid caffeine after 3 pm")

    if analysis.sleep_quality == "poor":
        plan.micro_habits.append(MicroHabit(
            name="Sleep signal tuning",
            cue="After 9 pm",
            response="Dim the lights and stop using screens",
            timing="1-2 hours before bed",
            rationale="Supports melatonin release and deeper sleep"
        ))
        plan.avoidance_behaviors.append("Avoid eating within 2 hours of bedtime")
        plan.avoidance_behaviors.append("Avoid using devices in bed")

    if analysis.recovery_capacity == "low":
        plan.micro_habits.append(MicroHabit(
            name="Minimum effective movement",
            cue="When energy feels low",
            response="10 minutes of light movement such as stretching or a slow walk",
            timing="Depending on energy level",
            rationale="Keeps the movement habit alive without adding strain"
        ))

    return plan
