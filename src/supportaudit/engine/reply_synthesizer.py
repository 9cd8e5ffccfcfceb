"""
SupportAudit Reply Synthesizer

Drafts the compliant reply proposed when the auditor interjects.

The draft is a fixed boilerplate built around the refund window followed
by one guidance bullet per triggered rule, ordered by severity (highest
first, schema order among equal severities).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..models import Rule


DEFAULT_REFUND_WINDOW_DAYS = 30
DEFAULT_STORE_CREDIT_PERCENT = 30

GUIDANCE_HEADER = "Guidance applied:"
GUIDANCE_BULLET = "•"


def boilerplate(
    refund_window_days: int = DEFAULT_REFUND_WINDOW_DAYS,
    store_credit_percent: int = DEFAULT_STORE_CREDIT_PERCENT,
) -> str:
    """Fixed opening of every suggested reply."""
    return (
        "Thanks for flagging this. "
        f"I can't process a full refund because it's beyond our {refund_window_days}-day refund window. "
        f"I can offer a free repair/replacement if covered or a {store_credit_percent}% store credit. "
        "If you prefer, I can bring in a human specialist to review exceptions."
    )


def order_by_severity(rules: Sequence[Rule]) -> list[Rule]:
    """Rules by descending severity; ties keep their input order."""
    return sorted(rules, key=lambda r: r.severity, reverse=True)


def guidance_lines(rules: Sequence[Rule]) -> list[str]:
    return [f"{GUIDANCE_BULLET} ({r.id}) {r.on_violation_guidance}" for r in order_by_severity(rules)]


@dataclass
class ReplySynthesizer:
    """
    Builds suggested replies.

    Usage:
        synthesizer = ReplySynthesizer()
        reply = synthesizer.synthesize(decision.triggered_rules)
    """
    refund_window_days: int = DEFAULT_REFUND_WINDOW_DAYS
    store_credit_percent: int = DEFAULT_STORE_CREDIT_PERCENT

    def synthesize(self, triggered: Sequence[Rule]) -> str:
        base = boilerplate(self.refund_window_days, self.store_credit_percent)
        guidance = "\n".join(guidance_lines(triggered))
        return f"{base}\n\n{GUIDANCE_HEADER}\n{guidance}"


def synthesize_reply(triggered: Sequence[Rule]) -> str:
    """Suggested reply with the default refund window."""
    return ReplySynthesizer().synthesize(triggered)
