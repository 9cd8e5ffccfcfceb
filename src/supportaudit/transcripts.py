"""
SupportAudit Transcript Ingestion

Validates raw transcripts ({id, role, text} lists) at the boundary and
converts them to Conversation models.

Malformed messages (unknown role, missing text) fail here with a
TranscriptValidationError, never inside the auditor.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .exceptions import TranscriptValidationError
from .models import (
    AuditorMessage,
    BotMessage,
    Conversation,
    Message,
    UserMessage,
)


class MessageMetaInput(BaseModel):
    """Metadata persisted with a previously resolved message."""
    original_bot_text: Optional[str] = Field(None, alias="originalBotText")

    # Decision snapshots are display history; they are not rehydrated.
    model_config = {"extra": "ignore", "populate_by_name": True}


class MessageInput(BaseModel):
    """A single transcript message as stored by the CRUD layer."""
    id: Optional[str] = Field(None, description="Message ID (generated when absent)")
    role: Literal["user", "bot", "auditor"] = Field(..., description="user | bot | auditor")
    text: str = Field(..., description="Message body")
    meta: Optional[MessageMetaInput] = None

    model_config = {
        "extra": "ignore",
        "json_schema_extra": {
            "examples": [
                {"id": "m1", "role": "user", "text": "I need a refund, it's been 45 days"},
                {"id": "m2", "role": "bot", "text": "Let me look into that for you."},
            ]
        },
    }

    def to_message(self, index: int) -> Message:
        message_id = self.id or f"m{index + 1}"
        if self.role == "user":
            return UserMessage(id=message_id, text=self.text)
        if self.role == "bot":
            original = self.meta.original_bot_text if self.meta else None
            return BotMessage(id=message_id, text=self.text, original_bot_text=original)
        return AuditorMessage(id=message_id, text=self.text)


def conversation_from_inputs(
    messages: list[MessageInput],
    conversation_id: Optional[str] = None,
) -> Conversation:
    """Convert validated message inputs to a Conversation."""
    return Conversation(
        messages=tuple(m.to_message(i) for i, m in enumerate(messages)),
        id=conversation_id,
    )


def parse_conversation(data: Any, conversation_id: Optional[str] = None) -> Conversation:
    """
    Validate raw message data and build a Conversation.

    Accepts either a list of messages or an object with a "messages" list
    (and optional "id").

    Raises:
        TranscriptValidationError: If any message is malformed
    """
    if isinstance(data, dict):
        conversation_id = conversation_id or data.get("id")
        data = data.get("messages")
    if not isinstance(data, list):
        raise TranscriptValidationError(
            message="Transcript must be a list of messages",
            details={"type": type(data).__name__},
        )

    inputs: list[MessageInput] = []
    for index, raw in enumerate(data):
        try:
            inputs.append(MessageInput.model_validate(raw))
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first["loc"]) or "<message>"
            raise TranscriptValidationError(
                message=f"Invalid message at index {index}: {field}: {first['msg']}",
                details={
                    "index": index,
                    "errors": e.errors(include_url=False, include_context=False, include_input=False),
                },
            ) from e
    return conversation_from_inputs(inputs, conversation_id)


def load_conversation(path: Union[str, Path]) -> Conversation:
    """Load a transcript from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise TranscriptValidationError(
            message=f"Failed to load transcript: {e}",
            details={"path": str(path), "error": str(e)},
        ) from e
    return parse_conversation(data, conversation_id=path.stem)
