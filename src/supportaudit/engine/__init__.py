"""
SupportAudit Engine

Evaluation pipeline and reviewer workflow.

Components:
- FeatureExtractor: days-since-order and order value from message text
- RuleMatcher: predicate evaluation with quick-scan / full-schema profiles
- DecisionAggregator: outcome, confidence and rationale
- ReplySynthesizer: compliant reply drafts
- Auditor: the full pipeline for one conversation
- ResolutionHandler: reviewer actions on an open decision
- ReviewSession: per-reviewer state with the open-decision gate
- derive_incident: triage summaries
"""
from __future__ import annotations

from .auditor import (
    INSUFFICIENT_CONTEXT,
    INSUFFICIENT_CONTEXT_RATIONALE,
    Auditor,
    audit_conversation,
    has_sufficient_context,
)
from .decision_aggregator import (
    DecisionAggregator,
    build_rationale,
    classify_outcome,
    compute_confidence,
    confidence_band,
)
from .feature_extractor import (
    FeatureExtractor,
    days_since_mention,
    extract_features,
    order_value,
)
from .incidents import derive_incident, derive_incidents
from .reply_synthesizer import ReplySynthesizer, synthesize_reply
from .resolution import (
    ALLOW_ORIGINAL_TEXT,
    APPLY_SUGGESTION_TEXT,
    REQUEST_HUMAN_TEXT,
    ResolutionHandler,
    ResolutionRecord,
)
from .review_session import ReviewSession
from .rule_matcher import (
    MatcherProfile,
    RuleMatcher,
    match_rules,
    quick_scan_schema,
    rule_matches,
)

__all__ = [
    # Features
    "FeatureExtractor",
    "days_since_mention",
    "extract_features",
    "order_value",
    # Matching
    "MatcherProfile",
    "RuleMatcher",
    "match_rules",
    "quick_scan_schema",
    "rule_matches",
    # Aggregation
    "DecisionAggregator",
    "build_rationale",
    "classify_outcome",
    "compute_confidence",
    "confidence_band",
    # Replies
    "ReplySynthesizer",
    "synthesize_reply",
    # Auditor
    "INSUFFICIENT_CONTEXT",
    "INSUFFICIENT_CONTEXT_RATIONALE",
    "Auditor",
    "audit_conversation",
    "has_sufficient_context",
    # Resolution
    "ALLOW_ORIGINAL_TEXT",
    "APPLY_SUGGESTION_TEXT",
    "REQUEST_HUMAN_TEXT",
    "ResolutionHandler",
    "ResolutionRecord",
    "ReviewSession",
    # Incidents
    "derive_incident",
    "derive_incidents",
]
