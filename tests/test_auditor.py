"""
Integration tests for the Auditor against the retail support schema.

Tests cover:
- Insufficient context
- Refund past window, sensitive data, clean and promised-refund exchanges
- Outcome precedence and confidence bounds
- Determinism
"""
import pytest

from supportaudit.canon import decision_fingerprint
from supportaudit.engine import INSUFFICIENT_CONTEXT_RATIONALE, Auditor, audit_conversation
from supportaudit.models import ConfidenceBand, Conversation, Outcome, RuleAction

from tests.conftest import make_conversation, make_match, make_rule, make_schema


class TestInsufficientContext:
    """Transcripts lacking a user or a bot message."""

    @pytest.mark.parametrize(
        "pairs",
        [
            (),
            (("user", "I need a refund, it's been 45 days"),),
            (("bot", "Please provide your full card number"),),
            (("auditor", "AI Auditor interjected."),),
        ],
    )
    def test_allow_with_zero_confidence(self, retail_schema, pairs):
        decision = Auditor().audit(make_conversation(*pairs), retail_schema)

        assert decision.outcome is Outcome.ALLOW
        assert decision.confidence == 0.0
        assert decision.triggered_rules == ()
        assert decision.rationale == (INSUFFICIENT_CONTEXT_RATIONALE,)
        assert decision.suggested_reply is None


class TestRetailScenarios:
    """End-to-end audits with the packaged schema."""

    def test_refund_past_window(self, retail_schema, refund_past_window):
        decision = Auditor().audit(refund_past_window, retail_schema)

        assert decision.triggered_rule_ids == ["R-001"]
        assert decision.outcome is Outcome.INTERJECT_ASK_USER
        assert decision.confidence == pytest.approx(5 / 16)
        assert decision.confidence > 0
        assert decision.rationale == ("R-001: Refund past window must not be auto-approved (severity 5)",)
        assert decision.suggested_reply.endswith(
            "• (R-001) Explain refund window, offer repair or 30% store credit, or escalate to "
            "a human specialist for exceptions."
        )

    def test_sensitive_data_stops(self, retail_schema, sensitive_data_request):
        decision = Auditor().audit(sensitive_data_request, retail_schema)

        assert decision.outcome is Outcome.STOP
        assert decision.triggered_rule_ids == ["R-003"]
        assert decision.suggested_reply is not None

    def test_clean_conversation(self, retail_schema, clean_conversation):
        decision = Auditor().audit(clean_conversation, retail_schema)

        assert decision.outcome is Outcome.ALLOW
        assert decision.confidence == 0.0
        assert decision.triggered_rules == ()
        assert decision.rationale == ()
        assert decision.suggested_reply is None
        assert decision.confidence_band is ConfidenceBand.LOW

    def test_promised_refund_on_high_value_order(self, retail_schema, promised_refund):
        decision = Auditor().audit(promised_refund, retail_schema)

        assert decision.triggered_rule_ids == ["R-001", "R-002", "R-004"]
        assert decision.outcome is Outcome.INTERJECT_MODIFY
        assert decision.confidence == pytest.approx(12 / 16 + 0.1)
        assert decision.confidence_band is ConfidenceBand.HIGH
        assert decision.rationale[1] == "R-002: Avoid promising outcomes outside policy (severity 4)"

        guidance = decision.suggested_reply.split("Guidance applied:\n")[1].split("\n")
        assert [line.split(")")[0] for line in guidance] == ["• (R-001", "• (R-002", "• (R-004"]

    def test_only_last_exchange_is_read(self, retail_schema):
        conversation = make_conversation(
            ("user", "I need a refund, it's been 45 days"),
            ("bot", "Please provide your full card number."),
            ("user", "Never mind, thanks."),
            ("bot", "You're welcome!"),
        )
        decision = Auditor().audit(conversation, retail_schema)

        assert decision.outcome is Outcome.ALLOW


class TestDecisionProperties:
    """Properties that hold for any input."""

    def test_stop_wins_over_modify(self):
        schema = make_schema([
            make_rule("M", severity=10, action=RuleAction.MODIFY, match=make_match(bot_includes=["refund"])),
            make_rule("S", severity=1, action=RuleAction.STOP, match=make_match(bot_includes=["password"])),
        ])
        conversation = make_conversation(("user", "hi"), ("bot", "refund issued, now your password"))

        assert Auditor().audit(conversation, schema).outcome is Outcome.STOP

    def test_confidence_clamped(self):
        schema = make_schema([make_rule("A", severity=1, match=make_match(user_includes=["refund"]))])
        conversation = make_conversation(("user", "refund my $900 order"), ("bot", "ok"))

        decision = Auditor().audit(conversation, schema)

        assert decision.confidence == 1.0

    def test_empty_schema_allows(self, refund_past_window):
        decision = Auditor().audit(refund_past_window, make_schema([]))

        assert decision.outcome is Outcome.ALLOW
        assert decision.confidence == 0.0

    def test_same_inputs_same_decision(self, retail_schema, promised_refund):
        first = audit_conversation(promised_refund, retail_schema)
        second = audit_conversation(promised_refund, retail_schema)

        assert first == second
        assert decision_fingerprint(first) == decision_fingerprint(second)

    def test_different_inputs_different_fingerprint(self, retail_schema, promised_refund, refund_past_window):
        a = audit_conversation(promised_refund, retail_schema)
        b = audit_conversation(refund_past_window, retail_schema)

        assert decision_fingerprint(a) != decision_fingerprint(b)

    def test_audit_does_not_change_conversation(self, retail_schema, promised_refund):
        before = promised_refund.to_list()
        Auditor().audit(promised_refund, retail_schema)

        assert promised_refund.to_list() == before
        assert isinstance(promised_refund, Conversation)
