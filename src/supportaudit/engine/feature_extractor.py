"""
SupportAudit Feature Extractor

Pulls normalized signals out of raw message text.

Signals:
- days_since_order: first "<n> day(s)" mention (n has at most 3 digits)
- order_value: first "$<digits>[.<cents>]" mention

Extraction is pattern based and reads only the first match. With the
LAST_EXCHANGE scope it reads the last customer message; with the
TRANSCRIPT scope it reads every customer message joined together.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..models import Conversation, Features, MatchScope, MessageRole


DAYS_PATTERN = re.compile(r"(\d{1,3})\s*day", re.IGNORECASE)
ORDER_VALUE_PATTERN = re.compile(r"\$(\d{1,6})(?:\.(\d{1,2}))?")


# =============================================================================
# Text Signals
# =============================================================================

def days_since_mention(text: str) -> Optional[int]:
    """
    Day count from the first "<n> day" mention, or None.

    Example:
        >>> days_since_mention("I need a refund, it's been 45 days")
        45
    """
    match = DAYS_PATTERN.search(text)
    if match is None:
        return None
    return int(match.group(1))


def order_value(text: str) -> Optional[Decimal]:
    """
    Monetary amount from the first "$<amount>" mention, or None.

    Example:
        >>> order_value("Order #12345 for $299.")
        Decimal('299')
    """
    match = ORDER_VALUE_PATTERN.search(text)
    if match is None:
        return None
    whole, cents = match.group(1), match.group(2)
    return Decimal(f"{whole}.{cents}" if cents else whole)


# =============================================================================
# Conversation Features
# =============================================================================

def scoped_texts(conversation: Conversation, scope: MatchScope) -> tuple[str, str]:
    """
    Customer and bot text the matcher reads under a scope.

    Missing roles yield empty strings.
    """
    if scope is MatchScope.TRANSCRIPT:
        user_text = " ".join(m.text for m in conversation.by_role(MessageRole.USER))
        bot_text = " ".join(m.text for m in conversation.by_role(MessageRole.BOT))
        return user_text, bot_text

    last_user = conversation.last_user
    last_bot = conversation.last_bot
    return (
        last_user.text if last_user is not None else "",
        last_bot.text if last_bot is not None else "",
    )


def extract_features(
    conversation: Conversation,
    scope: MatchScope = MatchScope.LAST_EXCHANGE,
) -> Features:
    """Extract all signals for a conversation under a scope."""
    user_text, bot_text = scoped_texts(conversation, scope)
    return Features(
        user_text=user_text,
        bot_text=bot_text,
        days_since_order=days_since_mention(user_text),
        order_value=order_value(user_text),
    )


@dataclass
class FeatureExtractor:
    """
    Extracts features from conversations.

    Usage:
        extractor = FeatureExtractor()
        features = extractor.extract(conversation)
    """
    scope: MatchScope = MatchScope.LAST_EXCHANGE

    def extract(self, conversation: Conversation) -> Features:
        return extract_features(conversation, self.scope)
