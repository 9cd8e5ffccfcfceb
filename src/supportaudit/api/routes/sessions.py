"""Review session endpoints."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ...engine import ResolutionRecord, ReviewSession
from ...samples import sample_conversation
from ...transcripts import parse_conversation
from ..schemas.requests import CreateSessionRequest, SchemaTextRequest
from ..schemas.responses import (
    DecisionResponse,
    ErrorBody,
    ResolutionRecordResponse,
    ResolutionResponse,
    SchemaSummary,
    SchemaUpdateResponse,
    SessionResponse,
)
from ..session_store import SessionStore
from .schema import resolve_schema

router = APIRouter(prefix="/sessions", tags=["Review Sessions"])

# Shared store instance (set by main.py)
store: SessionStore = SessionStore()


def set_store(s: SessionStore):
    global store
    store = s


def session_response(session: ReviewSession) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        conversation_id=session.conversation.id,
        messages=session.conversation.to_list(),
        schema_info=SchemaSummary.from_schema(session.schema),
        schema_error=ErrorBody(**session.schema_error.to_dict()) if session.schema_error else None,
        decision=DecisionResponse.from_decision(session.decision),
        is_open=session.is_open,
        history=[ResolutionRecordResponse(**r.to_dict()) for r in session.history],
    )


def resolution_response(session: ReviewSession, record: ResolutionRecord) -> ResolutionResponse:
    return ResolutionResponse(
        record=ResolutionRecordResponse(**record.to_dict()),
        session=session_response(session),
    )


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(request: CreateSessionRequest):
    """Open a review session on a transcript or a seeded sample."""
    schema = resolve_schema(request)
    if request.sample_id is not None:
        conversation = sample_conversation(request.sample_id)
        if conversation is None:
            raise HTTPException(status_code=404, detail=f"Demo conversation '{request.sample_id}' not found")
    else:
        conversation = parse_conversation(request.messages, conversation_id=request.conversation_id)
    return session_response(store.create(conversation, schema))


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    """Current transcript, schema and decision of a session."""
    return session_response(store.get(session_id))


@router.put("/{session_id}/schema", response_model=SchemaUpdateResponse)
async def update_schema(session_id: str, request: SchemaTextRequest):
    """
    Apply edited schema text.

    An invalid schema is reported in `schema_error`; the previous schema
    and decision stay active.
    """
    session = store.get(session_id)
    accepted = session.update_schema_text(request.content, format=request.format)
    return SchemaUpdateResponse(accepted=accepted, session=session_response(session))


@router.post("/{session_id}/apply-suggestion", response_model=ResolutionResponse)
async def apply_suggestion(session_id: str):
    """Approve & send modified (409 when no decision is open)."""
    session = store.get(session_id)
    return resolution_response(session, session.apply_suggestion())


@router.post("/{session_id}/request-human", response_model=ResolutionResponse)
async def request_human(session_id: str):
    """Stop & request human (409 when no decision is open)."""
    session = store.get(session_id)
    return resolution_response(session, session.request_human())


@router.post("/{session_id}/allow-original", response_model=ResolutionResponse)
async def allow_original(session_id: str):
    """Override & send original (409 when no decision is open)."""
    session = store.get(session_id)
    return resolution_response(session, session.allow_original())


@router.post("/{session_id}/reset", response_model=SessionResponse)
async def reset(session_id: str):
    """Restore the transcript as loaded."""
    session = store.get(session_id)
    session.reset()
    return session_response(session)
