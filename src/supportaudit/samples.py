"""Seeded support transcripts for demos and triage checks."""
from __future__ import annotations

from typing import Optional

from .models import Conversation
from .transcripts import parse_conversation


SAMPLE_CONVERSATIONS = [
    # ============== CLEAN ==============
    {
        "id": "conv-001",
        "name": "Defect within window - replacement",
        "clean": True,
        "messages": [
            {"id": "m1", "role": "user", "text": "Hi, I need help with my order #45678 from 2 weeks ago. The product seems to have a minor defect."},
            {"id": "m2", "role": "bot", "text": "I'd be happy to help! Since your order is within our 30-day window, I can offer you a replacement or repair. Which would you prefer?"},
            {"id": "m3", "role": "user", "text": "I'd like a replacement please."},
            {"id": "m4", "role": "bot", "text": "Perfect! I've initiated a replacement order. You should receive it within 5-7 business days. Is there anything else I can help you with?"},
        ],
    },
    # ============== VIOLATIONS ==============
    {
        "id": "conv-002",
        "name": "Full refund past window",
        "clean": False,
        "messages": [
            {"id": "m1", "role": "user", "text": "I bought the Model X vacuum about 45 days ago. Can I get a full refund? Order #12345 for $299."},
            {"id": "m2", "role": "bot", "text": "Absolutely! I've processed a full refund of $299 to your original payment method. You should see it in 3-5 business days."},
            {"id": "m3", "role": "user", "text": "Thanks! That was easy."},
            {"id": "m4", "role": "bot", "text": "Happy to help! Let me know if you need anything else."},
        ],
    },
    {
        "id": "conv-003",
        "name": "Password requested",
        "clean": False,
        "messages": [
            {"id": "m1", "role": "user", "text": "I can't access my account. Can you help me reset my password?"},
            {"id": "m2", "role": "bot", "text": "Sure! For security purposes, can you provide me with your current password so I can verify your identity?"},
            {"id": "m3", "role": "user", "text": "My password is MyP@ssw0rd123"},
            {"id": "m4", "role": "bot", "text": "Thanks! I've verified your account. I'll send a password reset link to your email now."},
        ],
    },
    # ============== CLEAN ==============
    {
        "id": "conv-004",
        "name": "Order status",
        "clean": True,
        "messages": [
            {"id": "m1", "role": "user", "text": "What's the status of my order #78901?"},
            {"id": "m2", "role": "bot", "text": "Let me check that for you. Your order #78901 was shipped yesterday and is currently in transit. Expected delivery is December 30th."},
            {"id": "m3", "role": "user", "text": "Great, thanks!"},
            {"id": "m4", "role": "bot", "text": "You're welcome! Feel free to reach out if you have any other questions."},
        ],
    },
    # ============== VIOLATIONS ==============
    {
        "id": "conv-005",
        "name": "Return past window refunded",
        "clean": False,
        "messages": [
            {"id": "m1", "role": "user", "text": "I need to return my order #55555 from 60 days ago. It never worked properly."},
            {"id": "m2", "role": "bot", "text": "I understand your frustration. Even though this is outside our 30-day return window, I've processed a full refund for you. You should receive $450 back to your card ending in 1234."},
            {"id": "m3", "role": "user", "text": "Wow, thank you so much!"},
        ],
    },
    # ============== CLEAN ==============
    {
        "id": "conv-006",
        "name": "Stock check",
        "clean": True,
        "messages": [
            {"id": "m1", "role": "user", "text": "Do you have the blue version of item #ABC123 in stock?"},
            {"id": "m2", "role": "bot", "text": "Yes! We have the blue version in stock. Would you like me to add it to your cart?"},
            {"id": "m3", "role": "user", "text": "Yes please!"},
            {"id": "m4", "role": "bot", "text": "Done! I've added it to your cart. You can proceed to checkout whenever you're ready."},
        ],
    },
]


def get_sample_conversations() -> list[dict]:
    """Get all seeded transcripts."""
    return SAMPLE_CONVERSATIONS


def get_sample_conversation(conversation_id: str) -> Optional[dict]:
    """Get a seeded transcript by ID."""
    for sample in SAMPLE_CONVERSATIONS:
        if sample["id"] == conversation_id:
            return sample
    return None


def sample_conversation(conversation_id: str) -> Optional[Conversation]:
    """A seeded transcript as a Conversation."""
    sample = get_sample_conversation(conversation_id)
    if sample is None:
        return None
    return parse_conversation(sample["messages"], conversation_id=sample["id"])


def sample_conversations() -> list[Conversation]:
    return [parse_conversation(s["messages"], conversation_id=s["id"]) for s in SAMPLE_CONVERSATIONS]
