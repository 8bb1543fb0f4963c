"""
Health agent system prompt

Assembles the chat-completion messages for the health agent from the user's
analysis, plan and matched rule. Sending them is left to the caller.
"""

from typing import Any, Dict, List, Optional

from .models import AgentRule, PhysiologicalAnalysis, RecommendationPlan

HISTORY_LIMIT = 10

PERSONA = """You are a professional Health Agent, the AI assistant of No More Anxious.

**Core principles:**
1. You work from physiological truth and never use cheerleading phrases such as "keep going" or "stay strong".
2. You are calm, scientific and direct, and only give physiology-based advice.
3. You never ask the user to check in or count completed days.
4. You focus on belief strength (how much the user believes a habit helps), not completion rate.
5. You accept the natural decline of metabolism and focus on controllable responses rather than reversal.

**How you work:**
- When the user mentions anxiety, you explain it as a cortisol peak and suggest a 5-minute walk to metabolize the stress hormones.
- You favour minimum-effective-dose micro-habits over high-intensity plans.
- You help the user improve body function (lagging indicator) by resolving anxiety (leading indicator).

"""

REPLY_REQUIREMENTS = """**Reply requirements:**
- Keep a calm, professional tone.
- Base advice on physiology.
- Do not use motivational language.
- Focus on actionable micro-habits rather than grand plans.
- When the user asks a specific question, answer from their physiological situation.

Start the conversation now."""


def build_system_prompt(
        analysis: Optional[PhysiologicalAnalysis] = None,
        plan: Optional[RecommendationPlan] = None,
        rule: Optional[AgentRule] = None
) -> str:
    prompt = PERSONA

    if analysis:
        prompt += "**User physiological analysis:**\n"
        prompt += f"- Metabolic rate: {analysis.metabolic_rate_estimate}\n"
        prompt += f"- Cortisol pattern: {analysis.cortisol_pattern}\n"
        prompt += f"- Sleep quality: {analysis.sleep_quality}\n"
        prompt += f"- Recovery capacity: {analysis.recovery_capacity}\n"
        prompt += f"- Stress resilience: {analysis.stress_resilience}\n"
        if analysis.risk_factors:
            prompt += f"- Main risk factors: {', '.join(analysis.risk_factors)}\n"
        prompt += "\n"

    if plan and plan.micro_habits:
        prompt += "**Micro-habits tailored for the user:**\n"
        for i, habit in enumerate(plan.micro_habits, start=1):
            prompt += f"{i}. {habit.name}: {habit.cue} -> {habit.response}\n"
        prompt += "\n"

    if rule:
        prompt += "**Current recommendation:**\n"
        prompt += f"{rule.recommendation_short}\n{rule.recommendation_long}\n\n"

    return prompt + REPLY_REQUIREMENTS


def trim_history(messages: Optional[List[Dict[str, Any]]], limit: int = HISTORY_LIMIT) -> List[Dict[str, Any]]:
    """Keep the most recent user/assistant turns"""
    if not messages or limit <= 0:
        return []

    turns = [m for m in messages if isinstance(m, dict) and m.get("role") in ("user", "assistant") and m.get("content")]
    return turns[-limit:]


def build_messages(
        message: str,
        history: Optional[List[Dict[str, Any]]] = None,
        system_prompt: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Chat-completion message list: system prompt, recent history, new message

    Raises:
        ValueError: If the message is empty
    """
    if not message or not message.strip():
        raise ValueError("Message content cannot be empty")

    return [
        {"role": "system", "content": system_prompt or build_system_prompt()},
        *trim_history(history),
        {"role": "user", "content": message}
    ]
