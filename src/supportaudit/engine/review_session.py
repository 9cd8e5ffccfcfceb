"""
SupportAudit Review Session

Holds one reviewer's working state for a single conversation: the
transcript as loaded, the transcript as resolved so far, the active
policy schema and the current decision.

The decision is recomputed after every change to the conversation or
the schema. A schema edit that fails to parse leaves the previous schema
and decision in place and is kept as schema_error until the next
successful edit.

Resolution actions are only available while the decision is open
(outcome is not allow and no auditor message has been recorded yet).
"""
from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import uuid4

from ..canon import decision_fingerprint, schema_hash
from ..exceptions import NoOpenDecisionError, SchemaParseError
from ..models import Conversation, Decision, Incident, PolicySchema, ResolutionAction, ScanProfile
from ..packs import PolicySchemaLoader
from .auditor import Auditor
from .incidents import derive_incident
from .resolution import ResolutionHandler, ResolutionRecord

logger = logging.getLogger(__name__)


class ReviewSession:
    """
    A reviewer's session on one conversation.

    Usage:
        session = ReviewSession(conversation, schema)
        if session.is_open:
            session.apply_suggestion()
        session.reset()
    """

    def __init__(
        self,
        conversation: Conversation,
        schema: PolicySchema,
        session_id: Optional[str] = None,
        auditor: Optional[Auditor] = None,
        handler: Optional[ResolutionHandler] = None,
        loader: Optional[PolicySchemaLoader] = None,
    ):
        self.id = session_id or uuid4().hex
        self.initial_conversation = conversation
        self.conversation = conversation
        self.schema = schema
        self.schema_error: Optional[SchemaParseError] = None
        self.history: list[ResolutionRecord] = []

        self._auditor = auditor or Auditor()
        self._handler = handler or ResolutionHandler()
        self._loader = loader or PolicySchemaLoader()
        self.decision: Decision = self._evaluate()

    def _evaluate(self) -> Decision:
        self.decision = self._auditor.audit(self.conversation, self.schema)
        return self.decision

    @property
    def is_open(self) -> bool:
        """True while the decision awaits a reviewer action."""
        return self.decision.outcome.is_open and not self.conversation.has_interjection

    # =========================================================================
    # Schema
    # =========================================================================

    def replace_schema(self, schema: PolicySchema) -> Decision:
        """Switch to a validated schema and re-evaluate."""
        self.schema = schema
        self.schema_error = None
        return self._evaluate()

    def update_schema_text(self, content: str, format: str = "json") -> bool:
        """
        Apply edited schema text.

        Returns:
            True if the schema was accepted. On a parse failure the error
            is stored in schema_error and the prior schema stays active.
        """
        try:
            schema = self._loader.parse(content, format=format)
        except SchemaParseError as e:
            self.schema_error = e
            return False
        self.replace_schema(schema)
        return True

    # =========================================================================
    # Resolution
    # =========================================================================

    def _require_open(self, action: ResolutionAction) -> Decision:
        if not self.is_open:
            raise NoOpenDecisionError(
                message=f"No open decision to {action.value.replace('_', ' ')}",
                details={"outcome": self.decision.outcome.value, "action": action.value},
                session_id=self.id,
            )
        return self.decision

    def _record(self, conversation: Conversation, record: ResolutionRecord) -> ResolutionRecord:
        self.conversation = conversation
        self.history.append(record)
        self._evaluate()
        logger.info(
            "Resolution applied",
            extra={
                "session_id": self.id,
                "conversation_id": conversation.id,
                "action": record.action.value,
                "decision_fingerprint": record.decision_fingerprint,
            },
        )
        return record

    def apply_suggestion(self) -> ResolutionRecord:
        """Approve & send modified."""
        decision = self._require_open(ResolutionAction.APPLY_SUGGESTION)
        return self._record(*self._handler.apply_suggestion(self.conversation, decision))

    def request_human(self) -> ResolutionRecord:
        """Stop & request human."""
        decision = self._require_open(ResolutionAction.REQUEST_HUMAN)
        return self._record(*self._handler.request_human(self.conversation, decision))

    def allow_original(self) -> ResolutionRecord:
        """Override & send original."""
        decision = self._require_open(ResolutionAction.ALLOW_ORIGINAL)
        return self._record(*self._handler.allow_original(self.conversation, decision))

    def reset(self) -> Decision:
        """Restore the transcript as loaded and re-evaluate."""
        self.conversation = self.initial_conversation
        self.history.clear()
        logger.info(
            "Session reset",
            extra={"session_id": self.id, "action": ResolutionAction.RESET.value},
        )
        return self._evaluate()

    # =========================================================================
    # Views
    # =========================================================================

    def incident(self, profile: ScanProfile = ScanProfile.FULL_SCHEMA) -> Optional[Incident]:
        return derive_incident(self.conversation, self.schema, profile, incident_id=f"incident-{self.id}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "conversation_id": self.conversation.id,
            "messages": self.conversation.to_list(),
            "schema": {
                "name": self.schema.name,
                "version": self.schema.version,
                "hash": schema_hash(self.schema),
            },
            "schema_error": self.schema_error.to_dict() if self.schema_error else None,
            "decision": self.decision.to_dict(),
            "decision_fingerprint": decision_fingerprint(self.decision),
            "is_open": self.is_open,
            "history": [r.to_dict() for r in self.history],
        }
