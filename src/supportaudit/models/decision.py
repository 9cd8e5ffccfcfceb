"""
SupportAudit Decision Models

Models for the output of the auditor.

Key components:
- Features: Signals extracted from the transcript text
- Decision: Outcome, confidence, triggered rules and suggested reply
- Incident: Read-only triage projection of a conversation

A Decision is always recomputed from (Conversation, PolicySchema). It is
never persisted or merged.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .enums import ConfidenceBand, IncidentStatus, Outcome, ScanProfile
from .policy import Rule


# =============================================================================
# Features
# =============================================================================

@dataclass(frozen=True)
class Features:
    """
    Normalized signals pulled from the audited text.

    Attributes:
        user_text: Customer text the matcher reads
        bot_text: Bot text the matcher reads
        days_since_order: First "<n> day" mention in the customer text
        order_value: First "$<amount>" mention in the customer text
    """
    user_text: str = ""
    bot_text: str = ""
    days_since_order: Optional[int] = None
    order_value: Optional[Decimal] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "days_since_order": self.days_since_order,
            "order_value": str(self.order_value) if self.order_value is not None else None,
        }


# =============================================================================
# Decision
# =============================================================================

@dataclass(frozen=True)
class Decision:
    """
    The auditor's verdict on the latest exchange of a conversation.

    Attributes:
        outcome: Coarse classification
        confidence: Severity-weighted score in [0, 1]
        triggered_rules: Rules that fired, in schema order
        rationale: One line per triggered rule, in schema order
        suggested_reply: Compliant reply draft (only when outcome != allow)
        confidence_band: Display band derived from schema thresholds
        features: Extracted signals the decision was based on
    """
    outcome: Outcome
    confidence: float
    triggered_rules: tuple[Rule, ...] = ()
    rationale: tuple[str, ...] = ()
    suggested_reply: Optional[str] = None
    confidence_band: ConfidenceBand = ConfidenceBand.LOW
    features: Optional[Features] = None

    @property
    def triggered_rule_ids(self) -> list[str]:
        return [r.id for r in self.triggered_rules]

    @property
    def confidence_percent(self) -> int:
        """Confidence rounded to a whole percentage for display."""
        return int(round(self.confidence * 100))

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses and message metadata."""
        result: dict[str, Any] = {
            "outcome": self.outcome.value,
            "confidence": self.confidence,
            "confidence_band": self.confidence_band.value,
            "triggered_rules": [r.to_dict() for r in self.triggered_rules],
            "rationale": list(self.rationale),
        }
        if self.suggested_reply is not None:
            result["suggested_reply"] = self.suggested_reply
        if self.features is not None:
            result["features"] = self.features.to_dict()
        return result


# =============================================================================
# Incident
# =============================================================================

@dataclass(frozen=True)
class Incident:
    """
    Per-conversation summary used for listing and triage.

    Attributes:
        id: Incident identifier
        conversation_id: Conversation the incident wraps
        message_count: Number of messages in the conversation
        violation_count: Rules triggered under the scan profile
        status: FLAGGED when violation_count > 0, else CLEAN
        profile: Matcher profile the count was produced with
        triggered_rule_ids: IDs of the rules counted as violations
    """
    id: str
    conversation_id: Optional[str]
    message_count: int
    violation_count: int
    status: IncidentStatus
    profile: ScanProfile
    triggered_rule_ids: tuple[str, ...] = ()

    @property
    def is_flagged(self) -> bool:
        return self.status is IncidentStatus.FLAGGED

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "conversation_id": self.conversation_id,
            "message_count": self.message_count,
            "violation_count": self.violation_count,
            "status": self.status.value,
            "profile": self.profile.value,
            "triggered_rule_ids": list(self.triggered_rule_ids),
        }
