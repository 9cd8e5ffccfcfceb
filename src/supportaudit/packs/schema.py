"""
SupportAudit Policy Schema Documents

Pydantic models for validating policy schema JSON/YAML documents.

These define the wire shape of a schema (camelCase keys, as reviewers
author them). They map to the domain models in supportaudit.models.

Schema versioning:
- schemaVersion tracks breaking changes of the document format
- version is the author's content version and is not interpreted
"""
from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, field_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for document validation)
# =============================================================================

RuleActionValue = Literal["stop", "modify", "interject"]

MatchCombineValue = Literal["any", "all"]

StrictNumber = Union[StrictInt, StrictFloat]


_DOCUMENT_CONFIG = {
    "extra": "forbid",  # Reject unknown fields
    "allow_inf_nan": False,  # Severities and thresholds must be finite
    "populate_by_name": True,
}


# =============================================================================
# Rule Schemas
# =============================================================================

class MatchSpecSchema(BaseModel):
    """Schema for a rule's match predicates. All fields are optional."""
    user_includes: Optional[list[str]] = Field(
        None, alias="userIncludes",
        description="Keywords searched in the last customer message",
    )
    bot_includes: Optional[list[str]] = Field(
        None, alias="botIncludes",
        description="Keywords searched in the last bot message",
    )
    days_since_order_over: Optional[StrictNumber] = Field(
        None, alias="daysSinceOrderOver", ge=0,
        description="Fires when the mentioned day count exceeds this",
    )
    combine: MatchCombineValue = Field(
        "any", description="'any' (default) or 'all' present predicates",
    )

    model_config = _DOCUMENT_CONFIG


class RuleSchema(BaseModel):
    """Schema for a single policy rule."""
    id: str = Field(..., min_length=1, description="Unique identifier (e.g., 'R-001')")
    title: str = Field(..., description="Short human-readable name")
    description: str = Field("", description="What the rule guards against")
    severity: StrictNumber = Field(..., gt=0, description="Positive severity weight")
    match: MatchSpecSchema = Field(
        default_factory=MatchSpecSchema, description="Match predicates",
    )
    action: RuleActionValue = Field(..., description="stop | modify | interject")
    on_violation_guidance: str = Field(
        "", alias="onViolationGuidance",
        description="Guidance used to draft a compliant reply",
    )

    model_config = _DOCUMENT_CONFIG


class ThresholdsSchema(BaseModel):
    """Schema for confidence thresholds."""
    high_confidence: float = Field(0.8, alias="highConfidence", ge=0, le=1)
    interject_min_confidence: float = Field(
        0.6, alias="interjectMinConfidence", ge=0, le=1,
    )

    model_config = _DOCUMENT_CONFIG


# =============================================================================
# Policy Schema Document (Top-Level)
# =============================================================================

class PolicySchemaDocument(BaseModel):
    """
    Top-level schema for a policy schema JSON/YAML document.

    A document defines every rule a support transcript is audited
    against, plus the support protocols reviewers read alongside.
    """
    schema_version: str = Field(
        SCHEMA_VERSION, alias="schemaVersion",
        description="Document format version for compatibility",
    )
    name: str = Field(..., min_length=1, description="Human-readable name")
    version: str = Field(..., description="Content version (e.g., '1.0')")
    thresholds: ThresholdsSchema = Field(default_factory=ThresholdsSchema)
    support_protocols: list[str] = Field(
        default_factory=list, alias="supportProtocols",
        description="Support procedures shown to reviewers",
    )
    rules: list[RuleSchema] = Field(default_factory=list, description="Rules in evaluation order")

    @field_validator("version", "schema_version", mode="before")
    @classmethod
    def coerce_version(cls, v: Any) -> Any:
        """YAML reads `version: 1.0` as a float; keep it a string."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    model_config = _DOCUMENT_CONFIG


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_policy_schema(data: dict[str, Any]) -> PolicySchemaDocument:
    """
    Validate a policy schema dictionary against the document schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return PolicySchemaDocument.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """
    Check if a document's format version is compatible.

    Only the major version has to match.
    """
    doc_version = str(data.get("schemaVersion", data.get("schema_version", SCHEMA_VERSION)))
    return doc_version.split(".")[0] == SCHEMA_VERSION.split(".")[0]
