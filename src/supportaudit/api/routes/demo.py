"""Demo conversations endpoint."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException

from ...samples import get_sample_conversation, get_sample_conversations
from ..schemas.responses import DemoConversation

router = APIRouter(prefix="/demo", tags=["Demo"])


@router.get("/conversations", response_model=list[DemoConversation])
async def list_demo_conversations(clean: Optional[bool] = None):
    """
    List seeded sample transcripts.

    Optionally filter by clean=true|false.
    """
    samples = get_sample_conversations()
    if clean is not None:
        samples = [s for s in samples if s["clean"] is clean]
    return [DemoConversation(**s) for s in samples]


@router.get("/conversations/{conversation_id}", response_model=DemoConversation)
async def get_demo_conversation(conversation_id: str):
    """Get a seeded sample transcript by ID."""
    sample = get_sample_conversation(conversation_id)
    if not sample:
        raise HTTPException(status_code=404, detail=f"Demo conversation '{conversation_id}' not found")

    return DemoConversation(**sample)
