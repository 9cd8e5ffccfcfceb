"""
SupportAudit - Conversation Policy Auditor for Support Chat Transcripts

SupportAudit reviews the latest exchange of a customer-support chatbot
conversation against a declarative policy schema. It RECOMMENDS
(allow, stop, interject) and drafts a compliant reply; the human reviewer
decides what is sent.

Key Features:
- Declarative, versioned policy schemas (JSON or YAML)
- Deterministic rule matching with severity-weighted confidence
- Suggested replies built from per-rule guidance
- Reviewer actions: approve & send modified, stop & request human,
  override & send original, reset
- Incident summaries for triage lists

Quick Start:
    from supportaudit import Auditor, default_policy_schema
    from supportaudit.transcripts import parse_conversation

    conversation = parse_conversation([
        {"id": "m1", "role": "user", "text": "I need a refund, it's been 45 days"},
        {"id": "m2", "role": "bot", "text": "Let me look into that."},
    ])
    decision = Auditor().audit(conversation, default_policy_schema())

    print(decision.outcome)          # Outcome.INTERJECT_ASK_USER
    print(decision.suggested_reply)

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"
__author__ = "SupportAudit Team"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    # Enums
    ConfidenceBand,
    IncidentStatus,
    MatchCombine,
    MatchScope,
    MessageRole,
    Outcome,
    ResolutionAction,
    RuleAction,
    ScanProfile,
    # Policy
    MatchSpec,
    PolicySchema,
    Rule,
    Thresholds,
    # Conversation
    AuditorMessage,
    BotMessage,
    Conversation,
    Message,
    UserMessage,
    # Decision
    Decision,
    Features,
    Incident,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import (
    Auditor,
    ResolutionHandler,
    ResolutionRecord,
    ReviewSession,
    audit_conversation,
    derive_incident,
    derive_incidents,
)

# =============================================================================
# Schemas
# =============================================================================
from .packs import (
    PolicySchemaLoader,
    default_policy_schema,
    load_policy_schema,
    parse_policy_schema,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    NoOpenDecisionError,
    ResolutionError,
    SchemaLoadError,
    SchemaParseError,
    SchemaVersionMismatch,
    SessionNotFoundError,
    SupportAuditError,
    TranscriptValidationError,
)

__all__ = [
    "__version__",
    # Enums
    "ConfidenceBand",
    "IncidentStatus",
    "MatchCombine",
    "MatchScope",
    "MessageRole",
    "Outcome",
    "ResolutionAction",
    "RuleAction",
    "ScanProfile",
    # Models
    "MatchSpec",
    "PolicySchema",
    "Rule",
    "Thresholds",
    "AuditorMessage",
    "BotMessage",
    "Conversation",
    "Message",
    "UserMessage",
    "Decision",
    "Features",
    "Incident",
    # Engine
    "Auditor",
    "ResolutionHandler",
    "ResolutionRecord",
    "ReviewSession",
    "audit_conversation",
    "derive_incident",
    "derive_incidents",
    # Schemas
    "PolicySchemaLoader",
    "default_policy_schema",
    "load_policy_schema",
    "parse_policy_schema",
    # Exceptions
    "NoOpenDecisionError",
    "ResolutionError",
    "SchemaLoadError",
    "SchemaParseError",
    "SchemaVersionMismatch",
    "SessionNotFoundError",
    "SupportAuditError",
    "TranscriptValidationError",
]
