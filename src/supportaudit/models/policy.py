"""
SupportAudit Policy Schema Models

Domain models for the declarative rule schema a transcript is audited
against.

Key components:
- Thresholds: Confidence thresholds used for display banding
- MatchSpec: Keyword / day-count predicates of a rule
- Rule: A single named policy check
- PolicySchema: The versioned rule set

These are immutable once built. A schema is replaced wholesale on edit;
nothing patches rules in place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .enums import MatchCombine, RuleAction


Number = Union[int, float]


def format_number(value: Number) -> str:
    """Render a schema number the way it was written (5, not 5.0)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# =============================================================================
# Thresholds
# =============================================================================

@dataclass(frozen=True)
class Thresholds:
    """
    Confidence thresholds declared by a schema.

    Attributes:
        high_confidence: At or above this, confidence is reported as high
        interject_min_confidence: At or above this, interjection is advised
    """
    high_confidence: float = 0.8
    interject_min_confidence: float = 0.6

    def to_dict(self) -> dict[str, Any]:
        return {
            "highConfidence": self.high_confidence,
            "interjectMinConfidence": self.interject_min_confidence,
        }


# =============================================================================
# Match Spec
# =============================================================================

@dataclass(frozen=True)
class MatchSpec:
    """
    Predicates that decide whether a rule fires.

    Attributes:
        user_includes: Keywords looked for in the customer text (case-insensitive)
        bot_includes: Keywords looked for in the bot text (case-insensitive)
        days_since_order_over: Fires when the mentioned day count exceeds this
        combine: ANY fires on the first satisfied predicate, ALL needs every
            present predicate to hold

    A MatchSpec with no predicate fields never matches.
    """
    user_includes: Optional[tuple[str, ...]] = None
    bot_includes: Optional[tuple[str, ...]] = None
    days_since_order_over: Optional[Number] = None
    combine: MatchCombine = MatchCombine.ANY

    @property
    def is_empty(self) -> bool:
        """True when no predicate is present."""
        return (
            self.user_includes is None
            and self.bot_includes is None
            and self.days_since_order_over is None
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.user_includes is not None:
            result["userIncludes"] = list(self.user_includes)
        if self.bot_includes is not None:
            result["botIncludes"] = list(self.bot_includes)
        if self.days_since_order_over is not None:
            result["daysSinceOrderOver"] = self.days_since_order_over
        if self.combine is not MatchCombine.ANY:
            result["combine"] = self.combine.value
        return result


# =============================================================================
# Rule
# =============================================================================

@dataclass(frozen=True)
class Rule:
    """
    A single policy check.

    Attributes:
        id: Unique identifier within the schema (e.g., "R-001")
        title: Short human-readable name
        description: What the rule guards against
        severity: Positive weight used for confidence scoring
        match: Predicates deciding whether the rule fires
        action: Enforcement action when the rule fires
        on_violation_guidance: Text used to draft a compliant reply
    """
    id: str
    title: str
    severity: Number
    match: MatchSpec
    action: RuleAction
    description: str = ""
    on_violation_guidance: str = ""

    @property
    def rationale(self) -> str:
        """Rationale line shown for this rule when it triggers."""
        return f"{self.id}: {self.title} (severity {format_number(self.severity)})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "severity": self.severity,
            "match": self.match.to_dict(),
            "action": self.action.value,
            "onViolationGuidance": self.on_violation_guidance,
        }


# =============================================================================
# Policy Schema
# =============================================================================

@dataclass(frozen=True)
class PolicySchema:
    """
    The declarative, versioned rule set a conversation is audited against.

    Attributes:
        name: Human-readable name
        version: Schema content version (e.g., "1.0")
        thresholds: Confidence thresholds
        support_protocols: Free-text support procedures, shown to reviewers
        rules: Rules in evaluation order
    """
    name: str
    version: str
    rules: tuple[Rule, ...] = ()
    thresholds: Thresholds = field(default_factory=Thresholds)
    support_protocols: tuple[str, ...] = ()

    @property
    def severity_ceiling(self) -> Number:
        """Sum of all rule severities, floored at 1."""
        return max(sum(r.severity for r in self.rules), 1)

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        """Look up a rule by ID."""
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None

    @property
    def rule_ids(self) -> list[str]:
        return [r.id for r in self.rules]

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the wire (camelCase) shape."""
        return {
            "name": self.name,
            "version": self.version,
            "thresholds": self.thresholds.to_dict(),
            "supportProtocols": list(self.support_protocols),
            "rules": [r.to_dict() for r in self.rules],
        }
