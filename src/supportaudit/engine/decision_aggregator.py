"""
SupportAudit Decision Aggregator

Turns the triggered rule list into an outcome, a confidence score and a
rationale.

Confidence:
    severity_sum / severity_ceiling (+0.1 when the order value exceeds
    $100), clamped to [0, 1]. The ceiling is the sum of every rule's
    severity in the schema, floored at 1.

Outcome precedence (severity plays no part):
    any STOP rule          -> stop
    else any MODIFY rule   -> interject-modify
    else any rule          -> interject-ask-user
    else                   -> allow
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from ..models import (
    ConfidenceBand,
    Decision,
    Features,
    Outcome,
    PolicySchema,
    Rule,
    RuleAction,
    Thresholds,
)


HIGH_VALUE_ORDER = Decimal("100")
HIGH_VALUE_BONUS = 0.1


# =============================================================================
# Scoring
# =============================================================================

def compute_confidence(
    triggered: Sequence[Rule],
    schema: PolicySchema,
    order_value: Optional[Decimal] = None,
) -> float:
    """
    Severity-weighted confidence in [0, 1].

    An empty trigger list scores 0; the high-value bonus only raises a
    decision that already has a violation.
    """
    if not triggered:
        return 0.0
    severity_sum = sum(r.severity for r in triggered)
    score = float(severity_sum) / float(schema.severity_ceiling)
    if order_value is not None and order_value > HIGH_VALUE_ORDER:
        score += HIGH_VALUE_BONUS
    return min(1.0, max(0.0, score))


def classify_outcome(triggered: Sequence[Rule]) -> Outcome:
    """Outcome by action precedence."""
    actions = {r.action for r in triggered}
    if RuleAction.STOP in actions:
        return Outcome.STOP
    if RuleAction.MODIFY in actions:
        return Outcome.INTERJECT_MODIFY
    if triggered:
        return Outcome.INTERJECT_ASK_USER
    return Outcome.ALLOW


def build_rationale(triggered: Sequence[Rule]) -> tuple[str, ...]:
    """One "<id>: <title> (severity N)" line per rule, in input order."""
    return tuple(r.rationale for r in triggered)


def confidence_band(confidence: float, thresholds: Thresholds) -> ConfidenceBand:
    """Display band for a confidence score."""
    if confidence >= thresholds.high_confidence:
        return ConfidenceBand.HIGH
    if confidence >= thresholds.interject_min_confidence:
        return ConfidenceBand.INTERJECT
    return ConfidenceBand.LOW


# =============================================================================
# Aggregator
# =============================================================================

@dataclass
class DecisionAggregator:
    """
    Aggregates triggered rules into a Decision (without a suggested reply).

    Usage:
        aggregator = DecisionAggregator()
        decision = aggregator.aggregate(triggered, schema, features)
    """

    def aggregate(
        self,
        triggered: Sequence[Rule],
        schema: PolicySchema,
        features: Optional[Features] = None,
    ) -> Decision:
        order_value = features.order_value if features is not None else None
        confidence = compute_confidence(triggered, schema, order_value)
        return Decision(
            outcome=classify_outcome(triggered),
            confidence=confidence,
            triggered_rules=tuple(triggered),
            rationale=build_rationale(triggered),
            confidence_band=confidence_band(confidence, schema.thresholds),
            features=features,
        )
