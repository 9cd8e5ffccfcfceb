"""
SupportAudit Auditor

Evaluates the latest exchange of a conversation against a policy schema.

Pipeline:
1. Check that the conversation holds at least one user and one bot message
2. Extract features from the last user / last bot message
3. Match every rule in schema order
4. Aggregate into outcome, confidence and rationale
5. Draft a suggested reply when the outcome is not allow

audit() is a pure function of (conversation, schema): no I/O, no clock,
no randomness, so the same inputs always give the same Decision.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..canon import decision_fingerprint
from ..models import ConfidenceBand, Conversation, Decision, MessageRole, Outcome, PolicySchema
from .decision_aggregator import DecisionAggregator
from .feature_extractor import FeatureExtractor
from .reply_synthesizer import ReplySynthesizer
from .rule_matcher import RuleMatcher

logger = logging.getLogger(__name__)


# Reason code for the recovered, non-exceptional insufficient-context path
INSUFFICIENT_CONTEXT = "INSUFFICIENT_CONTEXT"
INSUFFICIENT_CONTEXT_RATIONALE = "Insufficient context to audit"


def has_sufficient_context(conversation: Conversation) -> bool:
    """True when there is at least one user message and one bot message."""
    return conversation.has_role(MessageRole.USER) and conversation.has_role(MessageRole.BOT)


def insufficient_context_decision() -> Decision:
    return Decision(
        outcome=Outcome.ALLOW,
        confidence=0.0,
        rationale=(INSUFFICIENT_CONTEXT_RATIONALE,),
        confidence_band=ConfidenceBand.LOW,
    )


@dataclass
class Auditor:
    """
    Audits conversations against policy schemas.

    Usage:
        auditor = Auditor()
        decision = auditor.audit(conversation, schema)

        if decision.outcome.is_open:
            print(decision.suggested_reply)
    """
    extractor: FeatureExtractor = field(default_factory=FeatureExtractor)
    matcher: RuleMatcher = field(default_factory=RuleMatcher)
    aggregator: DecisionAggregator = field(default_factory=DecisionAggregator)
    synthesizer: ReplySynthesizer = field(default_factory=ReplySynthesizer)

    def audit(self, conversation: Conversation, schema: PolicySchema) -> Decision:
        """
        Audit the latest exchange.

        Args:
            conversation: Transcript to audit
            schema: Policy schema to audit against

        Returns:
            Decision (allow with confidence 0 when context is insufficient)
        """
        if not has_sufficient_context(conversation):
            logger.debug(
                "Insufficient context to audit",
                extra={"conversation_id": conversation.id, "outcome": Outcome.ALLOW.value, "action": INSUFFICIENT_CONTEXT},
            )
            return insufficient_context_decision()

        features = self.extractor.extract(conversation)
        triggered = self.matcher.match(schema, features)
        decision = self.aggregator.aggregate(triggered, schema, features)

        if decision.outcome.is_open:
            decision = Decision(
                outcome=decision.outcome,
                confidence=decision.confidence,
                triggered_rules=decision.triggered_rules,
                rationale=decision.rationale,
                suggested_reply=self.synthesizer.synthesize(triggered),
                confidence_band=decision.confidence_band,
                features=decision.features,
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Conversation audited",
                extra={
                    "conversation_id": conversation.id,
                    "schema_name": schema.name,
                    "schema_version": schema.version,
                    "outcome": decision.outcome.value,
                    "confidence": decision.confidence,
                    "triggered_rules": decision.triggered_rule_ids,
                    "decision_fingerprint": decision_fingerprint(decision),
                },
            )
        return decision


def audit_conversation(conversation: Conversation, schema: PolicySchema) -> Decision:
    """Audit with a default-configured Auditor."""
    return Auditor().audit(conversation, schema)
