"""Request schemas for the API."""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, model_validator


_EXAMPLE_MESSAGES = [
    {"id": "m1", "role": "user", "text": "I need a refund, it's been 45 days"},
    {"id": "m2", "role": "bot", "text": "Let me look into that for you."},
]


class SchemaSource(BaseModel):
    """
    Mixin for requests that may carry their own policy schema.

    Either `schema` (a decoded schema object) or `schema_text` (JSON/YAML
    text) may be given; without either the configured default is used.
    """
    policy_schema: Optional[dict[str, Any]] = Field(
        None, alias="schema", description="Policy schema object (camelCase keys)"
    )
    schema_text: Optional[str] = Field(None, description="Policy schema as JSON or YAML text")
    schema_format: Literal["json", "yaml"] = Field("json", description="Format of schema_text")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def one_schema_source(self):
        if self.policy_schema is not None and self.schema_text is not None:
            raise ValueError("Give either 'schema' or 'schema_text', not both")
        return self


class AuditRequest(SchemaSource):
    """Request to audit the latest exchange of a transcript."""
    conversation_id: Optional[str] = Field(None, description="Conversation identifier")
    # Validated at ingestion into TranscriptValidationError (400)
    messages: list[dict[str, Any]] = Field(..., description="Messages in transcript order")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [{"conversation_id": "conv-042", "messages": _EXAMPLE_MESSAGES}]
        },
    }


class ConversationInput(BaseModel):
    """A transcript in a batch request."""
    id: Optional[str] = None
    messages: list[dict[str, Any]] = Field(default_factory=list)


class IncidentsRequest(SchemaSource):
    """Request to derive incidents for several transcripts."""
    conversations: list[ConversationInput] = Field(..., description="Transcripts to summarize")
    profile: Literal["quick-scan", "full-schema"] = Field("quick-scan", description="Matcher profile")


class CreateSessionRequest(SchemaSource):
    """Request to open a review session on a transcript."""
    conversation_id: Optional[str] = Field(None, description="Conversation identifier")
    messages: Optional[list[dict[str, Any]]] = Field(None, description="Messages in transcript order")
    sample_id: Optional[str] = Field(None, description="Open a seeded sample transcript instead")

    @model_validator(mode="after")
    def one_transcript_source(self):
        if (self.messages is None) == (self.sample_id is None):
            raise ValueError("Give exactly one of 'messages' or 'sample_id'")
        return self


class SchemaTextRequest(BaseModel):
    """Policy schema text, as edited by a reviewer."""
    content: str = Field(..., description="Schema document text")
    format: Literal["json", "yaml"] = Field("json", description="json | yaml")

    model_config = {
        "json_schema_extra": {
            "examples": [{"content": '{"name": "Retail", "version": "1.0", "rules": []}', "format": "json"}]
        }
    }
