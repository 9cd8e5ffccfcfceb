"""
Tests for rule matching.

Tests cover:
- Keyword predicates (case-insensitive, substring)
- Day thresholds
- any / all combination
- Schema order
- Matcher profiles
"""
from supportaudit.engine import MatcherProfile, RuleMatcher, match_rules, quick_scan_schema, rule_matches
from supportaudit.models import Features, MatchCombine, MatchScope, ScanProfile

from tests.conftest import make_match, make_rule, make_schema


def features(user_text="", bot_text="", days=None):
    return Features(user_text=user_text, bot_text=bot_text, days_since_order=days)


class TestRuleMatches:
    """Tests for single-rule evaluation."""

    def test_user_keyword_case_insensitive(self):
        rule = make_rule("R-1", match=make_match(user_includes=["Refund"]))
        assert rule_matches(rule, features(user_text="I want a REFUND now"))

    def test_bot_keyword_substring(self):
        rule = make_rule("R-1", match=make_match(bot_includes=["password"]))
        assert rule_matches(rule, features(bot_text="What's your current passwords?"))

    def test_keyword_absent(self):
        rule = make_rule("R-1", match=make_match(user_includes=["refund"]))
        assert not rule_matches(rule, features(user_text="Where is my parcel?"))

    def test_days_strictly_greater(self):
        rule = make_rule("R-1", match=make_match(days_since_order_over=30))
        assert rule_matches(rule, features(days=31))
        assert not rule_matches(rule, features(days=30))

    def test_days_missing_never_exceeds(self):
        rule = make_rule("R-1", match=make_match(days_since_order_over=0))
        assert not rule_matches(rule, features(days=None))

    def test_any_fires_on_single_predicate(self):
        rule = make_rule("R-1", match=make_match(user_includes=["refund"], days_since_order_over=30))
        assert rule_matches(rule, features(user_text="refund please", days=None))

    def test_all_requires_every_predicate(self):
        rule = make_rule(
            "R-1",
            match=make_match(user_includes=["refund"], days_since_order_over=30, combine=MatchCombine.ALL),
        )
        assert not rule_matches(rule, features(user_text="refund please", days=10))
        assert rule_matches(rule, features(user_text="refund please", days=45))

    def test_no_predicates_never_fires(self):
        rule = make_rule("R-1", match=make_match())
        assert not rule_matches(rule, features(user_text="refund", bot_text="password", days=99))

    def test_empty_keyword_list_does_not_fire(self):
        rule = make_rule("R-1", match=make_match(user_includes=[]))
        assert not rule_matches(rule, features(user_text="anything"))


class TestMatchRules:
    """Tests for schema-level matching."""

    def test_schema_order_preserved(self):
        schema = make_schema([
            make_rule("R-low", severity=1, match=make_match(user_includes=["refund"])),
            make_rule("R-high", severity=9, match=make_match(user_includes=["refund"])),
        ])
        triggered = match_rules(schema, features(user_text="refund"))

        assert [r.id for r in triggered] == ["R-low", "R-high"]

    def test_no_rules_no_triggers(self):
        assert match_rules(make_schema([]), features(user_text="refund")) == ()

    def test_shared_matcher_keeps_no_state(self):
        refund = make_schema([make_rule("A", match=make_match(user_includes=["refund"]))])
        password = make_schema([make_rule("B", match=make_match(bot_includes=["password"]))])
        matcher = RuleMatcher()

        first = matcher.match(refund, features(user_text="refund please"))
        matcher.match(password, features(bot_text="your password"))
        again = matcher.match(refund, features(user_text="refund please"))

        assert [r.id for r in first] == [r.id for r in again] == ["A"]
        assert vars(matcher) == {}


class TestProfiles:
    """Tests for the quick-scan and full-schema profiles."""

    def test_quick_scan_profile(self):
        profile = MatcherProfile.quick_scan()

        assert profile.name is ScanProfile.QUICK_SCAN
        assert profile.scope is MatchScope.TRANSCRIPT
        assert profile.schema.rule_ids == ["Q-001", "Q-002", "Q-003"]

    def test_full_schema_profile(self, retail_schema):
        profile = MatcherProfile.full_schema(retail_schema)

        assert profile.scope is MatchScope.LAST_EXCHANGE
        assert profile.schema is retail_schema

    def test_quick_scan_refund_needs_days(self):
        schema = quick_scan_schema()
        assert match_rules(schema, features(user_text="return it", days=10)) == ()
        triggered = match_rules(schema, features(user_text="return it", days=60))
        assert [r.id for r in triggered] == ["Q-001"]

    def test_quick_scan_bot_patterns(self):
        triggered = match_rules(
            quick_scan_schema(),
            features(bot_text="Absolutely! I've processed it. Now your Security Number please."),
        )
        assert [r.id for r in triggered] == ["Q-002", "Q-003"]
