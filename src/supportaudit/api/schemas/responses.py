"""Response schemas for the API."""
from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel

from ...canon import decision_fingerprint, schema_hash
from ...models import Decision, PolicySchema


class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str
    timestamp: str
    version: str


class VersionResponse(BaseModel):
    """Version info response."""
    version: str
    schema_format_version: str
    default_schema_name: str
    default_schema_version: str
    default_schema_hash: str


class TriggeredRule(BaseModel):
    """A rule that fired."""
    id: str
    title: str
    severity: Union[int, float]
    action: str
    guidance: str


class DecisionResponse(BaseModel):
    """Auditor decision."""
    outcome: str  # allow|stop|interject-modify|interject-ask-user
    outcome_label: str
    confidence: float
    confidence_percent: int
    confidence_band: str  # high|interject|low
    triggered_rules: list[TriggeredRule]
    rationale: list[str]
    suggested_reply: Optional[str] = None
    days_since_order: Optional[int] = None
    order_value: Optional[str] = None
    decision_fingerprint: str

    @classmethod
    def from_decision(cls, decision: Decision) -> DecisionResponse:
        features = decision.features
        return cls(
            outcome=decision.outcome.value,
            outcome_label=decision.outcome.label,
            confidence=decision.confidence,
            confidence_percent=decision.confidence_percent,
            confidence_band=decision.confidence_band.value,
            triggered_rules=[
                TriggeredRule(
                    id=r.id,
                    title=r.title,
                    severity=r.severity,
                    action=r.action.value,
                    guidance=r.on_violation_guidance,
                )
                for r in decision.triggered_rules
            ],
            rationale=list(decision.rationale),
            suggested_reply=decision.suggested_reply,
            days_since_order=features.days_since_order if features else None,
            order_value=str(features.order_value) if features and features.order_value is not None else None,
            decision_fingerprint=decision_fingerprint(decision),
        )


class SchemaSummary(BaseModel):
    """Identity of a policy schema."""
    name: str
    version: str
    rule_count: int
    schema_hash: str

    @classmethod
    def from_schema(cls, schema: PolicySchema) -> SchemaSummary:
        return cls(
            name=schema.name,
            version=schema.version,
            rule_count=len(schema.rules),
            schema_hash=schema_hash(schema),
        )


class AuditResponse(BaseModel):
    """Response from auditing a transcript."""
    conversation_id: Optional[str] = None
    message_count: int
    schema_info: SchemaSummary
    decision: DecisionResponse


class ErrorBody(BaseModel):
    """Serialized SupportAuditError."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    session_id: Optional[str] = None


class ErrorResponse(BaseModel):
    error: ErrorBody


class SchemaValidationResponse(BaseModel):
    """Result of validating schema text."""
    valid: bool
    schema_info: Optional[SchemaSummary] = None
    error: Optional[ErrorBody] = None


class IncidentResponse(BaseModel):
    """Triage summary of one conversation."""
    id: str
    conversation_id: Optional[str] = None
    message_count: int
    violation_count: int
    status: str  # Flagged|Clean
    profile: str
    triggered_rule_ids: list[str]


class IncidentsResponse(BaseModel):
    profile: str
    total: int
    flagged: int
    incidents: list[IncidentResponse]


class ResolutionRecordResponse(BaseModel):
    action: str
    message_ids: list[str]
    decision_fingerprint: Optional[str] = None


class SessionResponse(BaseModel):
    """State of a review session."""
    id: str
    conversation_id: Optional[str] = None
    messages: list[dict[str, Any]]
    schema_info: SchemaSummary
    schema_error: Optional[ErrorBody] = None
    decision: DecisionResponse
    is_open: bool
    history: list[ResolutionRecordResponse]


class ResolutionResponse(BaseModel):
    """Result of a reviewer action."""
    record: ResolutionRecordResponse
    session: SessionResponse


class SchemaUpdateResponse(BaseModel):
    """Result of applying edited schema text to a session."""
    accepted: bool
    session: SessionResponse


class DemoConversation(BaseModel):
    """Seeded sample transcript."""
    id: str
    name: str
    clean: bool
    messages: list[dict[str, Any]]
