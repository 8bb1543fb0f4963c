"""
Health Agent Module

Static rule matching, heuristic profile analysis and system prompt assembly
for the health agent chat.

Example Usage:
    from habitlens.agent import UserProfile, find_matching_rule

    rule = find_matching_rule(UserProfile(id="u1", primary_concern="sleep"))
"""

from .analysis import analyze_user_profile, generate_recommendation_plan
from .models import (
    AgentRule,
    MicroHabit,
    PhysiologicalAnalysis,
    RecommendationPlan,
    RuleCondition,
    UserProfile
)
from .prompt import build_messages, build_system_prompt, trim_history
from .rules import find_matching_rule, load_agent_rules, matches_conditions

__all__ = [
    "analyze_user_profile",
    "generate_recommendation_plan",
    "build_messages",
    "build_system_prompt",
    "trim_history",
    "find_matching_rule",
    "load_agent_rules",
    "matches_conditions",
    "AgentRule",
    "MicroHabit",
    "PhysiologicalAnalysis",
    "RecommendationPlan",
    "RuleCondition",
    "UserProfile",
]
