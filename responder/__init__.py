"""
NPC dialogue responder.

Provides:
- Keyword rule matching with priorities
- Voice + subtitle presentation with a speaking lock
- Rule tables loaded from JSON
"""

from responder.rules import ResponseRule, normalize_text, rule_matches, select_rule
from responder.config import (
    ResponderConfig,
    RuleLoader,
    RULE_SCHEMA,
    load_responder_config,
    parse_rules,
)
from responder.presenter import ResponsePresenter, PresenterState

__all__ = [
    "ResponseRule",
    "normalize_text",
    "rule_matches",
    "select_rule",
    "ResponderConfig",
    "RuleLoader",
    "RULE_SCHEMA",
    "load_responder_config",
    "parse_rules",
    "ResponsePresenter",
    "PresenterState",
]
