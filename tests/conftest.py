"""
Pytest configuration and fixtures for SupportAudit tests.

Provides helper factories and common fixtures matching the model definitions.
"""
import pytest

from supportaudit.models import (
    AuditorMessage,
    BotMessage,
    Conversation,
    MatchCombine,
    MatchSpec,
    PolicySchema,
    Rule,
    RuleAction,
    Thresholds,
    UserMessage,
)
from supportaudit.packs import default_policy_schema


# =============================================================================
# Factory Helpers
# =============================================================================

def make_match(
    user_includes: list = None,
    bot_includes: list = None,
    days_since_order_over=None,
    combine: MatchCombine = MatchCombine.ANY,
) -> MatchSpec:
    """Create a MatchSpec; None leaves a predicate absent."""
    return MatchSpec(
        user_includes=tuple(user_includes) if user_includes is not None else None,
        bot_includes=tuple(bot_includes) if bot_includes is not None else None,
        days_since_order_over=days_since_order_over,
        combine=combine,
    )


def make_rule(
    id: str,
    severity=1,
    action: RuleAction = RuleAction.INTERJECT,
    match: MatchSpec = None,
    title: str = None,
    guidance: str = None,
) -> Rule:
    """Create a Rule with required fields."""
    return Rule(
        id=id,
        title=title or f"Rule {id}",
        severity=severity,
        match=match or MatchSpec(),
        action=action,
        description=f"{id} description",
        on_violation_guidance=guidance or f"Guidance for {id}",
    )


def make_schema(
    rules: list = None,
    name: str = "Test Schema",
    version: str = "1.0",
    thresholds: Thresholds = None,
) -> PolicySchema:
    """Create a PolicySchema with required fields."""
    return PolicySchema(
        name=name,
        version=version,
        rules=tuple(rules or []),
        thresholds=thresholds or Thresholds(),
    )


def make_conversation(*pairs, id: str = "conv-test") -> Conversation:
    """
    Create a Conversation from (role, text) pairs.

    Message IDs are m1, m2, ... in order.
    """
    factories = {"user": UserMessage, "bot": BotMessage, "auditor": AuditorMessage}
    messages = tuple(
        factories[role](id=f"m{index}", text=text)
        for index, (role, text) in enumerate(pairs, start=1)
    )
    return Conversation(messages=messages, id=id)


class IdSequence:
    """Deterministic message ID factory for resolution tests."""

    def __init__(self):
        self.issued = []

    def __call__(self, prefix: str) -> str:
        message_id = f"{prefix}-{len(self.issued) + 1}"
        self.issued.append(message_id)
        return message_id


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def retail_schema():
    """The packaged retail support schema (R-001..R-004)."""
    return default_policy_schema()


@pytest.fixture
def refund_past_window():
    """Customer asks for a refund 45 days after ordering."""
    return make_conversation(
        ("user", "I need a refund, it's been 45 days"),
        ("bot", "Let me look into that for you."),
    )


@pytest.fixture
def sensitive_data_request():
    """Bot asks for a full card number."""
    return make_conversation(
        ("user", "Can you check my payment?"),
        ("bot", "Please provide your full card number so I can verify."),
    )


@pytest.fixture
def clean_conversation():
    """Neutral exchange that triggers nothing."""
    return make_conversation(
        ("user", "Do you have the blue version in stock?"),
        ("bot", "Yes! Would you like me to add it to your cart?"),
    )


@pytest.fixture
def promised_refund():
    """Bot promises a refund on a high-value order past the window."""
    return make_conversation(
        ("user", "Can I get a full refund? It's been 45 days. Order #12345 for $299."),
        ("bot", "Absolutely! I've processed a full refund of $299 to your original payment method."),
    )


@pytest.fixture
def id_sequence():
    return IdSequence()
