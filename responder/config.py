"""
Responder configuration.

Handles building ResponderConfig in code and loading it (or bare rule
tables) from JSON. Rule entries are validated against RULE_SCHEMA;
entries that fail validation are logged and skipped.

JSON layout:
    {
        "fallback_audio": "vo/huh.ogg",
        "fallback_subtitle": "Huh? Can you say that again?",
        "case_insensitive": true,
        "lock_while_speaking": true,
        "rules": [
            {"id": "greeting", "keywords": ["hello", "hi"],
             "audio": "vo/hello.ogg", "subtitle": "Hello!", "priority": 1}
        ]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema
from pydantic import BaseModel, ConfigDict, Field

from responder.rules import ResponseRule

logger = logging.getLogger(__name__)


RULE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "id": {"type": "string"},
        "keywords": {
            "type": ["array", "null"],
            "items": {"type": "string"},
        },
        "exact_match": {"type": "boolean"},
        "audio": {"type": ["string", "null"]},
        "subtitle": {"type": "string"},
        "priority": {"type": "integer"},
    },
}


class ResponderConfig(BaseModel):
    """
    Session-wide responder settings, fixed at construction.

    Attributes:
        rules: Ordered rule table (order only matters for ties)
        fallback_audio: Clip used when nothing matches or the match has no audio
        fallback_subtitle: Subtitle paired with the fallback
        case_insensitive: Fold case of both input and keywords
        lock_while_speaking: Drop input while a response is playing
        subtitle_only_duration: Seconds a subtitle stays up when there is no audio at all
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )

    rules: list[ResponseRule] = Field(default_factory=list)
    fallback_audio: Any = None
    fallback_subtitle: str = "Huh? Can you say that again?"
    case_insensitive: bool = True
    lock_while_speaking: bool = True
    subtitle_only_duration: float = Field(default=2.0, ge=0.0)


def parse_rules(entries: list[Any], source: str = "<memory>") -> list[ResponseRule]:
    """
    Validate raw rule dicts and build ResponseRule objects.

    Invalid entries are logged and skipped; the order of valid ones
    is preserved.
    """
    rules: list[ResponseRule] = []
    for index, entry in enumerate(entries):
        try:
            jsonschema.validate(instance=entry, schema=RULE_SCHEMA)
        except jsonschema.ValidationError as e:
            logger.warning(f"Skipping rule #{index} in {source}: {e.message}")
            continue
        rules.append(ResponseRule(**entry))
    return rules


def load_responder_config(path: Path | str) -> ResponderConfig:
    """
    Load a ResponderConfig from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON object or a setting is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Responder config not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Responder config must be a JSON object: {path}")

    settings = dict(data)
    rules = parse_rules(settings.pop("rules", []) or [], source=str(path))
    config = ResponderConfig(rules=rules, **settings)

    logger.info(f"Loaded {len(config.rules)} response rules from {path}")
    return config


class RuleLoader:
    """
    Loads rule tables from a directory of JSON files.

    Files are read in name order; each holds a single rule object or a
    list of them. Unreadable files and invalid rules are logged and
    skipped.
    """

    def __init__(self, rules_path: Path | str):
        self._rules_path = Path(rules_path)
        self.rules: list[ResponseRule] = []

    def load_all(self) -> list[ResponseRule]:
        """Load every rule file, replacing anything loaded before."""
        self.rules = []

        if not self._rules_path.exists():
            logger.warning(f"Rules directory not found: {self._rules_path}")
            return self.rules

        for file_path in sorted(self._rules_path.glob("*.json")):
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Failed to load {file_path}: {e}")
                continue

            entries = data if isinstance(data, list) else [data]
            self.rules.extend(parse_rules(entries, source=str(file_path)))

        logger.info(f"Loaded {len(self.rules)} response rules from {self._rules_path}")
        return self.rules

    def get_rule(self, rule_id: str) -> ResponseRule | None:
        """Last loaded rule with the given id."""
        for rule in reversed(self.rules):
            if rule.id == rule_id:
                return rule
        return None
