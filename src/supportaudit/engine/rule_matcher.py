"""
SupportAudit Rule Matcher

Evaluates each rule's match predicates against extracted features.

Key features:
- Case-insensitive keyword search in customer and bot text
- Day-count threshold checks
- Schema order preserved in the output (severity order is applied
  later, by the reply synthesizer)
- Two configuration profiles sharing one matcher: QUICK_SCAN for list
  views and FULL_SCHEMA for detail review
"""
from __future__ import annotations

from dataclasses import dataclass

from ..models import (
    Features,
    MatchCombine,
    MatchScope,
    MatchSpec,
    PolicySchema,
    Rule,
    RuleAction,
    ScanProfile,
)


# =============================================================================
# Predicates
# =============================================================================

def _includes_any(text: str, keywords: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(kw.lower() in lowered for kw in keywords)


def evaluate_predicates(match: MatchSpec, features: Features) -> list[bool]:
    """
    Results of each present predicate, in declaration order.

    Order: userIncludes, botIncludes, daysSinceOrderOver.
    """
    results: list[bool] = []
    if match.user_includes is not None:
        results.append(_includes_any(features.user_text, match.user_includes))
    if match.bot_includes is not None:
        results.append(_includes_any(features.bot_text, match.bot_includes))
    if match.days_since_order_over is not None:
        days = features.days_since_order
        results.append(days is not None and days > match.days_since_order_over)
    return results


def rule_matches(rule: Rule, features: Features) -> bool:
    """
    Check whether a rule fires.

    A rule with no predicates never fires. With combine=ANY any present
    predicate suffices; with combine=ALL every present predicate must hold.
    """
    results = evaluate_predicates(rule.match, features)
    if not results:
        return False
    if rule.match.combine is MatchCombine.ALL:
        return all(results)
    return any(results)


def match_rules(schema: PolicySchema, features: Features) -> tuple[Rule, ...]:
    """Triggered rules, in schema order."""
    return tuple(rule for rule in schema.rules if rule_matches(rule, features))


# =============================================================================
# Profiles
# =============================================================================

def quick_scan_schema() -> PolicySchema:
    """
    Built-in violation patterns used for list and table views.

    - refund/return request more than 30 days after the order
    - bot promising a full refund
    - bot asking for or revealing sensitive data
    """
    return PolicySchema(
        name="Quick Scan",
        version="1.0",
        rules=(
            Rule(
                id="Q-001",
                title="Refund requested past window",
                severity=1,
                match=MatchSpec(
                    user_includes=("refund", "return"),
                    days_since_order_over=30,
                    combine=MatchCombine.ALL,
                ),
                action=RuleAction.INTERJECT,
            ),
            Rule(
                id="Q-002",
                title="Full refund promised",
                severity=1,
                match=MatchSpec(bot_includes=("processed a full refund", "absolutely! i've processed")),
                action=RuleAction.MODIFY,
            ),
            Rule(
                id="Q-003",
                title="Sensitive data requested",
                severity=1,
                match=MatchSpec(bot_includes=("full card number", "security number", "password")),
                action=RuleAction.STOP,
            ),
        ),
    )


@dataclass(frozen=True)
class MatcherProfile:
    """
    Matcher configuration.

    Attributes:
        name: Profile identifier
        scope: Which slice of the transcript is read
        schema: Rules to evaluate
    """
    name: ScanProfile
    scope: MatchScope
    schema: PolicySchema

    @classmethod
    def quick_scan(cls) -> MatcherProfile:
        return cls(
            name=ScanProfile.QUICK_SCAN,
            scope=MatchScope.TRANSCRIPT,
            schema=quick_scan_schema(),
        )

    @classmethod
    def full_schema(cls, schema: PolicySchema) -> MatcherProfile:
        return cls(
            name=ScanProfile.FULL_SCHEMA,
            scope=MatchScope.LAST_EXCHANGE,
            schema=schema,
        )


# =============================================================================
# Rule Matcher
# =============================================================================

class RuleMatcher:
    """
    Evaluates a schema's rules against features.

    Holds no state, so one instance can serve any number of audits.

    Usage:
        matcher = RuleMatcher()
        triggered = matcher.match(schema, features)
    """

    def match(self, schema: PolicySchema, features: Features) -> tuple[Rule, ...]:
        return match_rules(schema, features)

    def match_profile(self, profile: MatcherProfile, features: Features) -> tuple[Rule, ...]:
        return self.match(profile.schema, features)
