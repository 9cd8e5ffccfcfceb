"""Audit endpoint."""
from __future__ import annotations

import logging
import time

from fastapi import APIRouter

from ...engine import Auditor
from ...transcripts import parse_conversation
from ..schemas.requests import AuditRequest
from ..schemas.responses import AuditResponse, DecisionResponse, SchemaSummary
from .schema import resolve_schema

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Audit"])

auditor = Auditor()


@router.post("/audit", response_model=AuditResponse)
async def audit(request: AuditRequest):
    """
    Audit the latest exchange of a transcript.

    Uses the schema in the request, or the configured default schema.
    The same transcript and schema always produce the same decision
    (compare `decision_fingerprint`).
    """
    start = time.perf_counter()
    schema = resolve_schema(request)
    conversation = parse_conversation(request.messages, conversation_id=request.conversation_id)
    decision = auditor.audit(conversation, schema)
    response = DecisionResponse.from_decision(decision)

    logger.info(
        "Audit completed",
        extra={
            "conversation_id": conversation.id,
            "outcome": response.outcome,
            "confidence": response.confidence,
            "decision_fingerprint": response.decision_fingerprint,
            "duration_ms": round((time.perf_counter() - start) * 1000, 2),
        },
    )
    return AuditResponse(
        conversation_id=conversation.id,
        message_count=len(conversation),
        schema_info=SchemaSummary.from_schema(schema),
        decision=response,
    )
