"""Incident triage endpoint."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

from ...engine import derive_incidents
from ...models import PolicySchema, ScanProfile
from ...transcripts import parse_conversation
from ..schemas.requests import IncidentsRequest
from ..schemas.responses import IncidentResponse, IncidentsResponse
from .schema import resolve_schema

router = APIRouter(tags=["Incidents"])


@router.post("/incidents", response_model=IncidentsResponse)
async def incidents(request: IncidentsRequest):
    """
    Summarize transcripts for a triage list.

    - quick-scan: built-in violation patterns over each whole transcript
    - full-schema: the policy schema against each latest exchange

    Empty transcripts are skipped.
    """
    profile = ScanProfile(request.profile)
    schema: Optional[PolicySchema] = None
    if profile is ScanProfile.FULL_SCHEMA:
        schema = resolve_schema(request)

    conversations = [parse_conversation(c.messages, conversation_id=c.id) for c in request.conversations]
    results = derive_incidents(conversations, schema=schema, profile=profile)

    return IncidentsResponse(
        profile=profile.value,
        total=len(results),
        flagged=sum(1 for i in results if i.is_flagged),
        incidents=[IncidentResponse(**i.to_dict()) for i in results],
    )
