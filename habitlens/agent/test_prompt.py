import pytest

from .analysis import analyze_user_profile, generate_recommendation_plan
from .models import AgentRule, UserProfile
from .prompt import HISTORY_LIMIT, build_messages, build_system_prompt, trim_history


def test_bare_prompt():
    prompt = build_system_prompt()

    assert prompt.startswith("You are a professional Health Agent")
    assert "physiological analysis" not in prompt
    assert prompt.endswith("Start the conversation now.")


def test_prompt_includes_analysis_plan_and_rule():
    profile = UserProfile(id="u1", sleep_hours=5, stress_level=9)
    analysis = analyze_user_profile(profile)
    plan = generate_recommendation_plan(profile, analysis)
    rule = AgentRule(recommendation_short="Short tip.", recommendation_long="Long explanation.")

    prompt = build_system_prompt(analysis, plan, rule)

    assert "- Cortisol pattern: elevated" in prompt
    assert "- Main risk factors: insufficient sleep, high stress level" in prompt
    assert "1. Stress hormone clearance: When anxiety or stress starts rising -> " in prompt
    assert "Short tip.\nLong explanation." in prompt


def test_trim_history():
    history = [{"role": "user" if i % 2 else "assistant", "content": f"m{i}"} for i in range(15)]
    history.append({"role": "system", "content": "ignored"})

    trimmed = trim_history(history)

    assert len(trimmed) == HISTORY_LIMIT
    assert trimmed[-1]["content"] == "m14"
    assert trim_history(None) == []
    assert trim_history(history, limit=0) == []


def test_build_messages():
    messages = build_messages("I feel anxious", [{"role": "user", "content": "hi"}], system_prompt="sys")

    assert messages == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "hi"},
        {"role": "user", "content": "I feel anxious"},
    ]


def test_build_messages_rejects_empty():
    with pytest.raises(ValueError):
        build_messages("   ")
