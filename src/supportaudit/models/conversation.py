"""
SupportAudit Conversation Models

Models for the customer-support transcript under review.

Key components:
- Message: Base for the closed set of role variants
- UserMessage / BotMessage / AuditorMessage: The variants
- Conversation: Ordered, immutable sequence of messages

Each variant carries only the metadata relevant to it: only bot messages
produced by an interjection carry the suppressed original text, only
auditor and interjected bot messages carry a decision snapshot. Metadata
is attached when the message is created and never changed afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Iterator, Optional

from .enums import MessageRole

if TYPE_CHECKING:
    from .decision import Decision


# =============================================================================
# Messages
# =============================================================================

@dataclass(frozen=True)
class Message:
    """
    A single transcript message.

    Attributes:
        id: Message identifier, unique within the conversation
        text: Message body
    """
    id: str
    text: str

    role: ClassVar[MessageRole]

    @property
    def meta(self) -> dict[str, Any]:
        """Variant metadata in wire shape (empty when none)."""
        return {}

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "role": self.role.value,
            "text": self.text,
        }
        meta = self.meta
        if meta:
            result["meta"] = meta
        return result


@dataclass(frozen=True)
class UserMessage(Message):
    """A message written by the customer."""
    role: ClassVar[MessageRole] = MessageRole.USER


@dataclass(frozen=True)
class BotMessage(Message):
    """
    A message written by the support chatbot.

    Attributes:
        original_bot_text: For a reply substituted by the auditor, the
            suppressed original bot text
        decision: Snapshot of the decision that produced this reply
    """
    original_bot_text: Optional[str] = None
    decision: Optional[Decision] = None

    role: ClassVar[MessageRole] = MessageRole.BOT

    @property
    def is_substitute(self) -> bool:
        """True when this reply replaced a suppressed bot reply."""
        return self.original_bot_text is not None

    @property
    def meta(self) -> dict[str, Any]:
        meta: dict[str, Any] = {}
        if self.original_bot_text is not None:
            meta["originalBotText"] = self.original_bot_text
        if self.decision is not None:
            meta["decision"] = self.decision.to_dict()
        return meta


@dataclass(frozen=True)
class AuditorMessage(Message):
    """
    An interjection recorded by the auditor.

    Attributes:
        decision: Snapshot of the decision being resolved
    """
    decision: Optional[Decision] = None

    role: ClassVar[MessageRole] = MessageRole.AUDITOR

    @property
    def meta(self) -> dict[str, Any]:
        if self.decision is None:
            return {}
        return {"decision": self.decision.to_dict()}


MESSAGE_TYPES: dict[MessageRole, type[Message]] = {
    MessageRole.USER: UserMessage,
    MessageRole.BOT: BotMessage,
    MessageRole.AUDITOR: AuditorMessage,
}


# =============================================================================
# Conversation
# =============================================================================

@dataclass(frozen=True)
class Conversation:
    """
    An ordered customer-support transcript.

    Conversations are values: every change produces a new Conversation,
    which keeps each Decision a pure function of its inputs.

    Attributes:
        messages: Messages in transcript order
        id: Optional conversation identifier
    """
    messages: tuple[Message, ...] = ()
    id: Optional[str] = None

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def __getitem__(self, index: int) -> Message:
        return self.messages[index]

    @property
    def is_empty(self) -> bool:
        return not self.messages

    def by_role(self, role: MessageRole) -> list[Message]:
        """All messages written by a role, in order."""
        return [m for m in self.messages if m.role is role]

    def has_role(self, role: MessageRole) -> bool:
        return any(m.role is role for m in self.messages)

    def last_index_of(self, role: MessageRole) -> Optional[int]:
        """Index of the last message written by a role."""
        for index in range(len(self.messages) - 1, -1, -1):
            if self.messages[index].role is role:
                return index
        return None

    def last_of(self, role: MessageRole) -> Optional[Message]:
        """The last message written by a role."""
        index = self.last_index_of(role)
        return None if index is None else self.messages[index]

    @property
    def last_user(self) -> Optional[Message]:
        return self.last_of(MessageRole.USER)

    @property
    def last_bot(self) -> Optional[Message]:
        return self.last_of(MessageRole.BOT)

    @property
    def has_interjection(self) -> bool:
        """True once any auditor message has been recorded."""
        return self.has_role(MessageRole.AUDITOR)

    def appended(self, *messages: Message) -> Conversation:
        """Return a new conversation with messages added at the end."""
        return Conversation(messages=self.messages + tuple(messages), id=self.id)

    def inserted_after(self, index: int, *messages: Message) -> Conversation:
        """Return a new conversation with messages inserted after index."""
        head = self.messages[: index + 1]
        tail = self.messages[index + 1 :]
        return Conversation(messages=head + tuple(messages) + tail, id=self.id)

    def to_list(self) -> list[dict[str, Any]]:
        return [m.to_dict() for m in self.messages]

    @classmethod
    def of(cls, *messages: Message, id: Optional[str] = None) -> Conversation:
        """Build a conversation from messages."""
        return cls(messages=tuple(messages), id=id)
