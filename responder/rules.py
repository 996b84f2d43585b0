"""
Response rules and keyword matching.

A rule maps a keyword pattern to a scripted response (audio clip plus
subtitle). Matching is literal: exact phrase or keyword substring,
optionally case-insensitive. No stemming, no fuzzy scoring.

Usage:
    rules = [
        ResponseRule(id="greeting", keywords=["hello", "hi"], subtitle="Hello!"),
        ResponseRule(id="door", keywords=["open", "the", "door"], exact_match=True,
                     audio="vo/door.ogg", subtitle="It's locked.", priority=5),
    ]
    rule = select_rule("Open the door", rules, case_insensitive=True)
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class ResponseRule(BaseModel):
    """
    A single scripted response.

    Attributes:
        id: Label for logs and editors; not used for matching
        keywords: Phrase words (exact mode) or alternatives (substring mode)
        exact_match: Input must equal the keywords joined by spaces
        audio: Opaque audio handle owned by the host, or None
        subtitle: Text shown while the response plays
        priority: Higher wins; equal priority goes to the later rule
    """

    model_config = ConfigDict(
        # Audio handles are host objects
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )

    id: str = "greeting"
    keywords: Optional[list[str]] = None
    exact_match: bool = False
    audio: Any = None
    subtitle: str = "Hello!"
    priority: int = 0

    @property
    def has_keywords(self) -> bool:
        return bool(self.keywords)

    @property
    def has_audio(self) -> bool:
        return self.audio is not None


def normalize_text(text: str, case_insensitive: bool) -> str:
    """Strip surrounding whitespace and optionally lower-case."""
    text = text.strip()
    return text.lower() if case_insensitive else text


def rule_matches(rule: ResponseRule, text: str, case_insensitive: bool) -> bool:
    """
    Check one rule against already-normalized text.

    Rules without keywords never match. In substring mode empty
    keywords are ignored.
    """
    if not rule.has_keywords:
        return False

    if rule.exact_match:
        target = " ".join(rule.keywords)
        if case_insensitive:
            target = target.lower()
        return text == target

    for keyword in rule.keywords:
        if not keyword:
            continue
        key = keyword.lower() if case_insensitive else keyword
        if key in text:
            return True
    return False


def select_rule(
    input_text: str,
    rules: Iterable[Optional[ResponseRule]],
    case_insensitive: bool = True,
) -> Optional[ResponseRule]:
    """
    Pick the best rule for the input.

    Rules are scanned in order. A match replaces the current best when
    its priority is greater than or equal to the best so far, so among
    equal priorities the last matching rule wins.

    Returns:
        The winning rule, or None when nothing matches
    """
    text = normalize_text(input_text, case_insensitive)
    if not text:
        return None

    best: Optional[ResponseRule] = None
    best_priority = float("-inf")

    for rule in rules:
        if rule is None or not rule.has_keywords:
            continue

        if rule_matches(rule, text, case_insensitive) and rule.priority >= best_priority:
            best = rule
            best_priority = rule.priority

    if best is not None:
        logger.debug("Input %r matched rule %r (priority %d)", text, best.id, best.priority)
    else:
        logger.debug("Input %r matched no rule", text)

    return best
