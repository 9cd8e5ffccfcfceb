"""
SupportAudit Models

Domain models for policy schemas, transcripts and audit decisions.
"""
from __future__ import annotations

from .conversation import (
    MESSAGE_TYPES,
    AuditorMessage,
    BotMessage,
    Conversation,
    Message,
    UserMessage,
)
from .decision import Decision, Features, Incident
from .enums import (
    ConfidenceBand,
    IncidentStatus,
    MatchCombine,
    MatchScope,
    MessageRole,
    Outcome,
    ResolutionAction,
    RuleAction,
    ScanProfile,
)
from .policy import MatchSpec, PolicySchema, Rule, Thresholds, format_number

__all__ = [
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
    # Policy
    "MatchSpec",
    "PolicySchema",
    "Rule",
    "Thresholds",
    "format_number",
    # Conversation
    "MESSAGE_TYPES",
    "AuditorMessage",
    "BotMessage",
    "Conversation",
    "Message",
    "UserMessage",
    # Decision
    "Decision",
    "Features",
    "Incident",
]
