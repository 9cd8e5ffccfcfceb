"""
SupportAudit Incidents

Read-only per-conversation summaries for listing and triage.

Two profiles:
- QUICK_SCAN: built-in violation patterns over the whole transcript
  (cheap, used by list views)
- FULL_SCHEMA: the reviewer's schema against the latest exchange, the
  same evaluation the detail view shows
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..models import Conversation, Incident, IncidentStatus, PolicySchema, ScanProfile
from .auditor import Auditor, has_sufficient_context
from .feature_extractor import extract_features
from .rule_matcher import MatcherProfile, RuleMatcher

logger = logging.getLogger(__name__)


DEFAULT_INCIDENT_ID = "incident-001"


def _violations(
    conversation: Conversation,
    profile: ScanProfile,
    schema: Optional[PolicySchema],
) -> tuple[str, ...]:
    if profile is ScanProfile.QUICK_SCAN:
        quick = MatcherProfile.quick_scan()
        features = extract_features(conversation, quick.scope)
        return tuple(r.id for r in RuleMatcher().match_profile(quick, features))

    if schema is None:
        raise ValueError("full-schema incidents need a policy schema")
    if not has_sufficient_context(conversation):
        return ()
    return tuple(Auditor().audit(conversation, schema).triggered_rule_ids)


def derive_incident(
    conversation: Conversation,
    schema: Optional[PolicySchema] = None,
    profile: ScanProfile = ScanProfile.QUICK_SCAN,
    incident_id: str = DEFAULT_INCIDENT_ID,
) -> Optional[Incident]:
    """
    Summarize a conversation as an incident.

    Args:
        conversation: Transcript to summarize
        schema: Policy schema (required for FULL_SCHEMA)
        profile: Matcher profile
        incident_id: Identifier for the incident

    Returns:
        Incident, or None for an empty conversation
    """
    if conversation.is_empty:
        return None

    rule_ids = _violations(conversation, profile, schema)
    return Incident(
        id=incident_id,
        conversation_id=conversation.id,
        message_count=len(conversation),
        violation_count=len(rule_ids),
        status=IncidentStatus.FLAGGED if rule_ids else IncidentStatus.CLEAN,
        profile=profile,
        triggered_rule_ids=rule_ids,
    )


def derive_incidents(
    conversations: Iterable[Conversation],
    schema: Optional[PolicySchema] = None,
    profile: ScanProfile = ScanProfile.QUICK_SCAN,
) -> list[Incident]:
    """
    Summarize several conversations, skipping empty ones.

    Incident IDs follow the conversation ID when there is one.
    """
    incidents: list[Incident] = []
    for position, conversation in enumerate(conversations, start=1):
        incident_id = f"incident-{conversation.id}" if conversation.id else f"incident-{position:03d}"
        incident = derive_incident(conversation, schema, profile, incident_id)
        if incident is not None:
            incidents.append(incident)
    logger.debug(
        "Derived %d incidents (%d flagged)",
        len(incidents),
        sum(1 for i in incidents if i.is_flagged),
    )
    return incidents
