"""
Tests for feature extraction.

Tests cover:
- Day-count mentions
- Order value mentions
- Last-exchange and transcript scopes
"""
from decimal import Decimal

from supportaudit.engine import FeatureExtractor, days_since_mention, extract_features, order_value
from supportaudit.models import MatchScope

from tests.conftest import make_conversation


# =============================================================================
# Day Mentions
# =============================================================================

class TestDaysSinceMention:
    """Tests for days_since_mention."""

    def test_plural_days(self):
        assert days_since_mention("I need a refund, it's been 45 days") == 45

    def test_case_insensitive_without_space(self):
        assert days_since_mention("Bought it 7DAY ago") == 7

    def test_first_mention_wins(self):
        assert days_since_mention("It took 3 days to ship and 60 days later it broke") == 3

    def test_no_mention(self):
        assert days_since_mention("I bought it two weeks ago") is None

    def test_whitespace_between_number_and_day(self):
        assert days_since_mention("90   days") == 90


# =============================================================================
# Order Value
# =============================================================================

class TestOrderValue:
    """Tests for order_value."""

    def test_whole_dollars(self):
        assert order_value("Order #12345 for $299.") == Decimal("299")

    def test_dollars_and_cents(self):
        assert order_value("It cost $149.99 plus tax") == Decimal("149.99")

    def test_single_cent_digit(self):
        assert order_value("$45.5") == Decimal("45.5")

    def test_first_amount_wins(self):
        assert order_value("$20 shipping on a $300 order") == Decimal("20")

    def test_comma_ends_the_amount(self):
        assert order_value("$1,299") == Decimal("1")

    def test_no_amount(self):
        assert order_value("about three hundred dollars") is None
        assert order_value("a $ sign alone") is None


# =============================================================================
# Conversation Features
# =============================================================================

class TestExtractFeatures:
    """Tests for extract_features."""

    def test_last_exchange_reads_latest_messages(self):
        conversation = make_conversation(
            ("user", "It's been 45 days, I paid $299"),
            ("bot", "Let me check."),
            ("user", "Any news?"),
            ("bot", "Still checking."),
        )
        features = extract_features(conversation)

        assert features.user_text == "Any news?"
        assert features.bot_text == "Still checking."
        assert features.days_since_order is None
        assert features.order_value is None

    def test_transcript_scope_joins_role_text(self):
        conversation = make_conversation(
            ("user", "It's been 45 days"),
            ("bot", "Let me check."),
            ("user", "I paid $299"),
        )
        features = extract_features(conversation, MatchScope.TRANSCRIPT)

        assert features.user_text == "It's been 45 days I paid $299"
        assert features.bot_text == "Let me check."
        assert features.days_since_order == 45
        assert features.order_value == Decimal("299")

    def test_missing_bot_gives_empty_text(self):
        conversation = make_conversation(("user", "Hello"))
        features = extract_features(conversation)

        assert features.bot_text == ""

    def test_auditor_messages_are_ignored(self):
        conversation = make_conversation(
            ("user", "Refund please, 40 days"),
            ("bot", "Sure."),
            ("auditor", "AI Auditor stopped the bot and requested human interjection."),
        )
        features = FeatureExtractor().extract(conversation)

        assert features.bot_text == "Sure."
        assert features.days_since_order == 40
