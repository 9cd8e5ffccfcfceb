"""
SupportAudit Exception Hierarchy

Domain-specific exceptions for the conversation-policy auditor.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: SA_<CATEGORY>_<SPECIFIC>

Insufficient context (a transcript without a user or bot message) is not
an exception: the auditor recovers it locally into an allow decision.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class SupportAuditError(Exception):
    """
    Base exception for all SupportAudit errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (SA_*)
        details: Additional context about the error
        session_id: Associated review session if applicable
    """
    message: str
    code: str = "SA_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    session_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.session_id:
            parts.append(f"(session: {self.session_id})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.session_id:
            result["session_id"] = self.session_id
        return result


# =============================================================================
# Schema Errors
# =============================================================================

@dataclass
class SchemaParseError(SupportAuditError):
    """Policy schema text is malformed or fails validation."""
    code: str = "SA_SCHEMA_PARSE_ERROR"


@dataclass
class SchemaLoadError(SchemaParseError):
    """Policy schema file could not be read."""
    code: str = "SA_SCHEMA_LOAD_ERROR"


@dataclass
class SchemaVersionMismatch(SchemaParseError):
    """Policy schema format version is incompatible."""
    code: str = "SA_SCHEMA_VERSION_MISMATCH"


# =============================================================================
# Transcript Errors
# =============================================================================

@dataclass
class TranscriptValidationError(SupportAuditError):
    """Transcript has a malformed message (unknown role, missing text)."""
    code: str = "SA_TRANSCRIPT_INVALID"


# =============================================================================
# Resolution Errors
# =============================================================================

@dataclass
class ResolutionError(SupportAuditError):
    """Resolution action could not be applied."""
    code: str = "SA_RESOLUTION_ERROR"


@dataclass
class NoOpenDecisionError(ResolutionError):
    """Resolution attempted while no decision is open."""
    code: str = "SA_NO_OPEN_DECISION"


@dataclass
class SessionNotFoundError(SupportAuditError):
    """Requested review session does not exist."""
    code: str = "SA_SESSION_NOT_FOUND"
