"""
In-memory review session store.

Sessions live in the process; the oldest session is evicted once
max_sessions is reached.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from ..engine import ReviewSession
from ..exceptions import SessionNotFoundError
from ..models import Conversation, PolicySchema

logger = logging.getLogger(__name__)


class SessionStore:
    """Review sessions by ID, bounded in size."""

    def __init__(self, max_sessions: int = 1000):
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, ReviewSession] = OrderedDict()

    def create(self, conversation: Conversation, schema: PolicySchema) -> ReviewSession:
        session = ReviewSession(conversation, schema)
        self._sessions[session.id] = session
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Review session evicted", extra={"session_id": evicted})
        logger.info(
            "Review session created",
            extra={
                "session_id": session.id,
                "conversation_id": conversation.id,
                "outcome": session.decision.outcome.value,
            },
        )
        return session

    def get(self, session_id: str) -> ReviewSession:
        """
        Raises:
            SessionNotFoundError: If no such session exists
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(
                message=f"Review session '{session_id}' not found",
                session_id=session_id,
            )
        return session

    def __len__(self) -> int:
        return len(self._sessions)
