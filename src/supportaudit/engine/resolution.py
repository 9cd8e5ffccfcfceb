"""
SupportAudit Resolution Handler

Applies a reviewer's choice on an open decision to the conversation.

Actions:
- apply_suggestion: record the interjection, then send the suggested
  reply as a bot message placed right after the last bot message
- request_human: record that the bot was stopped and a human requested
- allow_original: record the override; the original reply stands

Every action returns a new Conversation and never edits or removes
existing messages. Recording an auditor message closes the decision.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional
from uuid import uuid4

from ..canon import decision_fingerprint
from ..exceptions import ResolutionError
from ..models import (
    AuditorMessage,
    BotMessage,
    Conversation,
    Decision,
    MessageRole,
    ResolutionAction,
)


APPLY_SUGGESTION_TEXT = "AI Auditor interjected and modified the bot response."
REQUEST_HUMAN_TEXT = "AI Auditor stopped the bot and requested human interjection."
ALLOW_ORIGINAL_TEXT = "AI Auditor was overridden by user. Original bot response sent."


IdFactory = Callable[[str], str]


def random_message_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:8]}"


# =============================================================================
# Resolution Record
# =============================================================================

@dataclass(frozen=True)
class ResolutionRecord:
    """
    What a resolution did.

    Attributes:
        action: Reviewer action taken
        message_ids: IDs of the messages it added, in transcript order
        decision_fingerprint: Fingerprint of the decision it resolved
    """
    action: ResolutionAction
    message_ids: tuple[str, ...] = ()
    decision_fingerprint: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "action": self.action.value,
            "message_ids": list(self.message_ids),
            "decision_fingerprint": self.decision_fingerprint,
        }


# =============================================================================
# Resolution Handler
# =============================================================================

@dataclass
class ResolutionHandler:
    """
    Produces resolved conversations.

    Usage:
        handler = ResolutionHandler()
        conversation, record = handler.apply_suggestion(conversation, decision)
    """
    id_factory: IdFactory = field(default=random_message_id)

    def _auditor_message(self, text: str, decision: Decision) -> AuditorMessage:
        return AuditorMessage(id=self.id_factory("auditor"), text=text, decision=decision)

    def apply_suggestion(
        self,
        conversation: Conversation,
        decision: Decision,
    ) -> tuple[Conversation, ResolutionRecord]:
        """
        Insert the interjection and the substitute bot reply.

        Both messages go right after the last bot message; the substitute
        carries the suppressed bot text and a decision snapshot.

        Raises:
            ResolutionError: If there is no suggested reply or no bot message
        """
        if decision.suggested_reply is None:
            raise ResolutionError(
                message="Decision has no suggested reply to apply",
                details={"outcome": decision.outcome.value},
            )
        index = conversation.last_index_of(MessageRole.BOT)
        if index is None:
            raise ResolutionError(message="Conversation has no bot message to replace")

        original = conversation[index]
        auditor = self._auditor_message(APPLY_SUGGESTION_TEXT, decision)
        substitute = BotMessage(
            id=self.id_factory("bot"),
            text=decision.suggested_reply,
            original_bot_text=original.text,
            decision=decision,
        )
        record = ResolutionRecord(
            action=ResolutionAction.APPLY_SUGGESTION,
            message_ids=(auditor.id, substitute.id),
            decision_fingerprint=decision_fingerprint(decision),
        )
        return conversation.inserted_after(index, auditor, substitute), record

    def request_human(
        self,
        conversation: Conversation,
        decision: Decision,
    ) -> tuple[Conversation, ResolutionRecord]:
        """Append the stop / human-requested interjection."""
        return self._append(conversation, decision, ResolutionAction.REQUEST_HUMAN, REQUEST_HUMAN_TEXT)

    def allow_original(
        self,
        conversation: Conversation,
        decision: Decision,
    ) -> tuple[Conversation, ResolutionRecord]:
        """Append the override interjection."""
        return self._append(conversation, decision, ResolutionAction.ALLOW_ORIGINAL, ALLOW_ORIGINAL_TEXT)

    def _append(
        self,
        conversation: Conversation,
        decision: Decision,
        action: ResolutionAction,
        text: str,
    ) -> tuple[Conversation, ResolutionRecord]:
        auditor = self._auditor_message(text, decision)
        record = ResolutionRecord(
            action=action,
            message_ids=(auditor.id,),
            decision_fingerprint=decision_fingerprint(decision),
        )
        return conversation.appended(auditor), record
