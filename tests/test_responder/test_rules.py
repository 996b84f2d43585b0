"""
Rule matching tests.
"""

import pytest
from responder.rules import ResponseRule, normalize_text, rule_matches, select_rule


def make_rule(rule_id, keywords, priority=0, exact=False):
    return ResponseRule(id=rule_id, keywords=keywords, priority=priority, exact_match=exact)


class TestNormalize:

    def test_strips_and_folds(self):
        assert normalize_text("  Hello There \n", True) == "hello there"

    def test_keeps_case_when_sensitive(self):
        assert normalize_text(" Hello ", False) == "Hello"


class TestRuleMatches:

    def test_exact_phrase(self):
        rule = make_rule("door", ["open", "the", "door"], exact=True)

        assert rule_matches(rule, "open the door", True)
        assert not rule_matches(rule, "please open the door", True)

    def test_exact_folds_keywords(self):
        rule = make_rule("door", ["Open", "The", "Door"], exact=True)

        assert rule_matches(rule, "open the door", True)
        assert not rule_matches(rule, "open the door", False)

    def test_substring_any_keyword(self):
        rule = make_rule("help", ["assist", "help"])

        assert rule_matches(rule, "can you help me", True)
        assert not rule_matches(rule, "go away", True)

    def test_substring_matches_inside_words(self):
        rule = make_rule("hi", ["hi"])
        assert rule_matches(rule, "this", True)

    def test_empty_keywords_ignored(self):
        rule = make_rule("blank", ["", "bye"])

        assert not rule_matches(rule, "hello", True)
        assert rule_matches(rule, "bye now", True)

    def test_case_sensitive_substring(self):
        rule = make_rule("name", ["Aria"])

        assert rule_matches(rule, "is Aria here", False)
        assert not rule_matches(rule, "is aria here", False)


class TestSelectRule:

    def test_no_match_returns_none(self):
        rules = [make_rule("a", ["dragon"]), make_rule("b", ["sword"], exact=True)]
        assert select_rule("where is the inn", rules) is None

    def test_equal_priority_last_wins(self):
        a = make_rule("a", ["help"], priority=5)
        b = make_rule("b", ["me"], priority=5)

        assert select_rule("help me", [a, b]) is b
        assert select_rule("help me", [b, a]) is a

    def test_higher_priority_wins_regardless_of_order(self):
        a = make_rule("a", ["help"], priority=7)
        b = make_rule("b", ["me"], priority=3)

        assert select_rule("help me", [a, b]) is a
        assert select_rule("help me", [b, a]) is a

    def test_negative_priority_can_win(self):
        low = make_rule("low", ["hello"], priority=-10)
        assert select_rule("hello", [low]) is low

    def test_exact_rule_example(self):
        door = make_rule("door", ["open", "the", "door"], exact=True)

        assert select_rule("Open The Door", [door], case_insensitive=True) is door
        assert select_rule("please open the door", [door], case_insensitive=True) is None

    def test_input_is_normalized(self):
        door = make_rule("door", ["open", "the", "door"], exact=True)
        assert select_rule("   OPEN the door  ", [door]) is door

    def test_rules_without_keywords_are_skipped(self):
        rules = [
            ResponseRule(id="none", keywords=None),
            ResponseRule(id="empty", keywords=[]),
            None,
            make_rule("help", ["help"]),
        ]
        assert select_rule("help", rules).id == "help"

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_empty_input_never_matches(self, text):
        rules = [
            make_rule("blank-exact", [""], exact=True),
            make_rule("any", ["a"]),
        ]
        assert select_rule(text, rules) is None

    def test_empty_rule_table(self):
        assert select_rule("hello", []) is None


class TestResponseRule:

    def test_defaults(self):
        rule = ResponseRule()

        assert rule.id == "greeting"
        assert rule.subtitle == "Hello!"
        assert rule.priority == 0
        assert not rule.exact_match
        assert not rule.has_keywords
        assert not rule.has_audio

    def test_audio_handle_is_opaque(self):
        handle = object()
        rule = ResponseRule(keywords=["hi"], audio=handle)

        assert rule.audio is handle
        assert rule.has_audio

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            ResponseRule(keywords=["hi"], volume=0.5)
