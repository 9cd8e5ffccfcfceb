"""
SupportAudit Enumerations

All enumeration types used throughout the SupportAudit system.
Organized by domain area for clarity.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Rule Actions
# =============================================================================

class RuleAction(str, Enum):
    """
    Enforcement action declared by a policy rule.

    Precedence when several triggered rules disagree:
    STOP > MODIFY > INTERJECT (severity plays no part).
    """
    STOP = "stop"
    MODIFY = "modify"
    INTERJECT = "interject"


# =============================================================================
# Decision Outcomes
# =============================================================================

class Outcome(str, Enum):
    """Coarse classification of an audit decision."""
    ALLOW = "allow"                            # Bot reply may stand
    STOP = "stop"                              # Bot must be halted, human required
    INTERJECT_MODIFY = "interject-modify"      # Replace the bot reply
    INTERJECT_ASK_USER = "interject-ask-user"  # Interject and clarify with the customer

    @property
    def is_open(self) -> bool:
        """True when the outcome requires reviewer action."""
        return self is not Outcome.ALLOW

    @property
    def label(self) -> str:
        """Short label used by review surfaces."""
        return _OUTCOME_LABELS[self]


_OUTCOME_LABELS = {
    Outcome.ALLOW: "Allowed",
    Outcome.STOP: "Stopped",
    Outcome.INTERJECT_MODIFY: "Interject + Modify",
    Outcome.INTERJECT_ASK_USER: "Interject + Ask User",
}


class ConfidenceBand(str, Enum):
    """
    Display band for auditor confidence, derived from schema thresholds.

    Never influences the outcome.
    """
    HIGH = "high"
    INTERJECT = "interject"
    LOW = "low"


# =============================================================================
# Transcript
# =============================================================================

class MessageRole(str, Enum):
    """Author of a transcript message."""
    USER = "user"
    BOT = "bot"
    AUDITOR = "auditor"


# =============================================================================
# Resolution
# =============================================================================

class ResolutionAction(str, Enum):
    """Reviewer actions available on an open decision."""
    APPLY_SUGGESTION = "apply_suggestion"  # Approve & send modified
    REQUEST_HUMAN = "request_human"        # Stop & request human
    ALLOW_ORIGINAL = "allow_original"      # Override & send original
    RESET = "reset"


# =============================================================================
# Incidents
# =============================================================================

class IncidentStatus(str, Enum):
    """Triage status of a derived incident."""
    FLAGGED = "Flagged"
    CLEAN = "Clean"


class ScanProfile(str, Enum):
    """
    Rule matcher configuration profile.

    QUICK_SCAN evaluates the built-in violation patterns over the whole
    transcript and backs list views. FULL_SCHEMA evaluates a reviewer's
    policy schema against the latest exchange and backs detail review.
    """
    QUICK_SCAN = "quick-scan"
    FULL_SCHEMA = "full-schema"


class MatchScope(str, Enum):
    """Which slice of the transcript the matcher reads."""
    LAST_EXCHANGE = "last_exchange"  # Last user + last bot message
    TRANSCRIPT = "transcript"        # All user text, all bot text


class MatchCombine(str, Enum):
    """How present predicates of a MatchSpec are combined."""
    ANY = "any"
    ALL = "all"
