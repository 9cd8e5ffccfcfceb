"""
Tests for SupportAudit models and shared infrastructure.

Tests cover:
- Conversation value semantics
- Message metadata
- Decision and Incident serialization
- Exception hierarchy
- Canonical JSON
- Settings and logging
"""
import json
import logging
from decimal import Decimal

import pytest

from supportaudit.canon import canonical_json, content_hash, content_hash_short
from supportaudit.config import Settings
from supportaudit.exceptions import (
    NoOpenDecisionError,
    ResolutionError,
    SchemaLoadError,
    SchemaParseError,
    SchemaVersionMismatch,
    SessionNotFoundError,
    SupportAuditError,
    TranscriptValidationError,
)
from supportaudit.logging_setup import LOGGER_NAME, JSONFormatter, configure_logging
from supportaudit.models import (
    AuditorMessage,
    BotMessage,
    Conversation,
    Decision,
    Features,
    MessageRole,
    Outcome,
    UserMessage,
)

from tests.conftest import make_conversation, make_rule


# =============================================================================
# Conversation
# =============================================================================

class TestConversation:
    """Tests for Conversation."""

    def test_last_of_role(self):
        conversation = make_conversation(("user", "a"), ("bot", "b"), ("user", "c"))

        assert conversation.last_user.text == "c"
        assert conversation.last_bot.text == "b"
        assert conversation.last_index_of(MessageRole.AUDITOR) is None

    def test_appended_returns_new_value(self):
        conversation = make_conversation(("user", "a"))
        longer = conversation.appended(BotMessage(id="x", text="b"))

        assert len(conversation) == 1
        assert len(longer) == 2
        assert longer.id == conversation.id

    def test_inserted_after(self):
        conversation = make_conversation(("user", "a"), ("bot", "b"), ("user", "c"))
        inserted = conversation.inserted_after(1, AuditorMessage(id="x", text="!"))

        assert [m.text for m in inserted] == ["a", "b", "!", "c"]

    def test_of(self):
        conversation = Conversation.of(UserMessage(id="1", text="hi"), id="c")
        assert conversation.id == "c"
        assert not conversation.is_empty


class TestMessageMeta:
    """Tests for variant metadata."""

    def test_user_has_no_meta(self):
        assert "meta" not in UserMessage(id="1", text="hi").to_dict()

    def test_substitute_bot_meta(self):
        decision = Decision(outcome=Outcome.INTERJECT_MODIFY, confidence=0.5)
        message = BotMessage(id="2", text="new", original_bot_text="old", decision=decision)

        data = message.to_dict()
        assert data["role"] == "bot"
        assert data["meta"]["originalBotText"] == "old"
        assert data["meta"]["decision"]["outcome"] == "interject-modify"

    def test_messages_are_immutable(self):
        message = UserMessage(id="1", text="hi")
        with pytest.raises(AttributeError):
            message.text = "changed"


class TestDecision:
    """Tests for Decision serialization."""

    def test_to_dict(self):
        decision = Decision(
            outcome=Outcome.STOP,
            confidence=0.25,
            triggered_rules=(make_rule("R-003", severity=4),),
            rationale=("R-003: Rule R-003 (severity 4)",),
            suggested_reply="reply",
            features=Features(days_since_order=45, order_value=Decimal("299.50")),
        )
        data = decision.to_dict()

        assert data["outcome"] == "stop"
        assert data["triggered_rules"][0]["id"] == "R-003"
        assert data["features"] == {"days_since_order": 45, "order_value": "299.50"}
        assert decision.confidence_percent == 25
        assert decision.outcome.label == "Stopped"

    def test_allow_omits_reply(self):
        data = Decision(outcome=Outcome.ALLOW, confidence=0.0).to_dict()
        assert "suggested_reply" not in data


# =============================================================================
# Exceptions
# =============================================================================

class TestExceptions:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "cls, code",
        [
            (SchemaParseError, "SA_SCHEMA_PARSE_ERROR"),
            (SchemaLoadError, "SA_SCHEMA_LOAD_ERROR"),
            (SchemaVersionMismatch, "SA_SCHEMA_VERSION_MISMATCH"),
            (TranscriptValidationError, "SA_TRANSCRIPT_INVALID"),
            (ResolutionError, "SA_RESOLUTION_ERROR"),
            (NoOpenDecisionError, "SA_NO_OPEN_DECISION"),
            (SessionNotFoundError, "SA_SESSION_NOT_FOUND"),
        ],
    )
    def test_codes(self, cls, code):
        error = cls(message="boom")
        assert error.code == code
        assert isinstance(error, SupportAuditError)

    def test_hierarchy(self):
        assert issubclass(SchemaLoadError, SchemaParseError)
        assert issubclass(SchemaVersionMismatch, SchemaParseError)
        assert issubclass(NoOpenDecisionError, ResolutionError)

    def test_str_and_to_dict(self):
        error = NoOpenDecisionError(message="Nothing open", details={"outcome": "allow"}, session_id="s-1")

        assert str(error) == "[SA_NO_OPEN_DECISION] Nothing open (session: s-1)"
        assert error.to_dict() == {
            "code": "SA_NO_OPEN_DECISION",
            "message": "Nothing open",
            "details": {"outcome": "allow"},
            "session_id": "s-1",
        }

    def test_can_be_raised(self):
        with pytest.raises(SupportAuditError, match="boom"):
            raise ResolutionError(message="boom")


# =============================================================================
# Canonical JSON
# =============================================================================

class TestCanon:
    """Tests for canonical JSON and hashing."""

    def test_sorted_compact(self):
        assert canonical_json({"b": 1, "a": 2}) == '{"a":2,"b":1}'

    def test_plain_json_only(self):
        with pytest.raises(TypeError):
            canonical_json({"v": Decimal("1.50")})
        with pytest.raises(ValueError):
            canonical_json({"v": float("nan")})

    def test_decision_with_order_value_hashes(self):
        decision = Decision(
            outcome=Outcome.STOP,
            confidence=0.5,
            features=Features(days_since_order=45, order_value=Decimal("299.50")),
        )
        assert len(content_hash(decision.to_dict())) == 64

    def test_hash_is_key_order_independent(self):
        assert content_hash({"a": 1, "b": 2}) == content_hash({"b": 2, "a": 1})
        assert len(content_hash_short({"a": 1})) == 12


# =============================================================================
# Settings and Logging
# =============================================================================

class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self, monkeypatch):
        for name in ("SA_LOG_LEVEL", "SA_DOCS_ENABLED", "SA_SCHEMA_PATH", "SA_SCHEMA_STRICT_VERSION", "SA_MAX_SESSIONS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings == Settings()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SA_LOG_LEVEL", "debug")
        monkeypatch.setenv("SA_DOCS_ENABLED", "false")
        monkeypatch.setenv("SA_SCHEMA_PATH", "/tmp/schema.yaml")
        monkeypatch.setenv("SA_SCHEMA_STRICT_VERSION", "false")
        monkeypatch.setenv("SA_MAX_SESSIONS", "5")

        settings = Settings.from_env()

        assert settings.log_level == "DEBUG"
        assert settings.docs_enabled is False
        assert settings.schema_path == "/tmp/schema.yaml"
        assert settings.schema_strict_version is False
        assert settings.max_sessions == 5


class TestLogging:
    """Tests for structured logging."""

    def test_json_formatter_includes_extras(self):
        record = logging.LogRecord("supportaudit.test", logging.INFO, __file__, 1, "Audit %s", ("done",), None)
        record.outcome = "stop"
        record.session_id = "s-1"

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "Audit done"
        assert entry["level"] == "INFO"
        assert entry["outcome"] == "stop"
        assert entry["session_id"] == "s-1"
        assert "conversation_id" not in entry

    def test_configure_is_idempotent(self):
        configure_logging("INFO")
        configure_logging("DEBUG")

        logger = logging.getLogger(LOGGER_NAME)
        marked = [h for h in logger.handlers if getattr(h, "_supportaudit", False)]
        assert len(marked) == 1
        assert logger.level == logging.DEBUG
