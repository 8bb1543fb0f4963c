"""
Rule matcher

Selects a static recommendation for a user profile from the rules table.
Rules are defined in YAML (agent/rules.yaml by default) for easy maintenance.
"""

import importlib.resources
import io
import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import AgentRule, RuleCondition, UserProfile
from ..utils.config import global_config

_DEFAULT_RULES_FILE = "rules.yaml"

Profile = Union[UserProfile, Mapping[str, Any]]


def _read_rules_text(path: Optional[str]) -> str:
    if path:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    return importlib.resources.files(__package__).joinpath(_DEFAULT_RULES_FILE).read_text(encoding="utf-8")


def load_agent_rules(path: Optional[str] = None) -> List[AgentRule]:
    """
    Load the recommendation table

    Args:
        path: YAML file to read (default: AGENT_RULES_FILE from config, then the packaged table)

    Returns:
        Rules in file order; an empty list if the file cannot be read.
        Individual malformed rules are skipped.
    """
    if path is None:
        config = global_config()
        if config and config.habits.rules_file:
            path = config.habits.rules_file

    try:
        data = YAML(typ="safe").load(io.StringIO(_read_rules_text(path)))
    except (OSError, UnicodeDecodeError, YAMLError) as e:
        logging.error(f"Failed to load agent rules: {e}", extra={"path": path or _DEFAULT_RULES_FILE})
        return []

    raw_rules = data.get("rules") if isinstance(data, dict) else None
    if not isinstance(raw_rules, list):
        logging.error("Agent rules file must contain a 'rules' list", extra={"path": path or _DEFAULT_RULES_FILE})
        return []

    rules = []
    for idx, raw in enumerate(raw_rules):
        try:
            rules.append(AgentRule.model_validate(raw))
        except ValidationError as e:
            logging.warning(f"Skipped invalid agent rule {idx}: {e.error_count()} error(s)")

    logging.debug(f"Loaded {len(rules)} agent rule(s)")
    return rules


def _profile_value(profile: Profile, key: str) -> Any:
    if isinstance(profile, Mapping):
        return profile.get(key)
    return getattr(profile, key, None)


def matches_conditions(profile: Profile, conditions: RuleCondition) -> bool:
    """Every non-empty condition must equal the corresponding profile field"""
    for key, value in conditions.model_dump().items():
        if value and _profile_value(profile, key) != value:
            return False

    return True


def find_matching_rule(profile: Profile, rules: Optional[List[AgentRule]] = None) -> Optional[AgentRule]:
    """
    Return the first rule matching the profile, or None

    Args:
        profile: UserProfile or a plain mapping of profile fields
        rules: Table to scan (default: load_agent_rules())
    """
    if rules is None:
        rules = load_agent_rules()

    for rule in rules:
        if matches_conditions(profile, rule.conditions):
            return rule

    return None
