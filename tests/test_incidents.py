"""
Tests for incident derivation.

Tests cover:
- Empty conversations
- Quick-scan over the seeded sample transcripts
- Full-schema profile
"""
import pytest

from supportaudit.engine import derive_incident, derive_incidents
from supportaudit.models import Conversation, IncidentStatus, ScanProfile
from supportaudit.samples import get_sample_conversations, sample_conversation, sample_conversations

from tests.conftest import make_conversation


class TestDeriveIncident:
    """Tests for derive_incident."""

    def test_empty_conversation(self):
        assert derive_incident(Conversation()) is None

    def test_clean_conversation(self, clean_conversation):
        incident = derive_incident(clean_conversation)

        assert incident.status is IncidentStatus.CLEAN
        assert incident.violation_count == 0
        assert incident.message_count == 2
        assert incident.profile is ScanProfile.QUICK_SCAN

    def test_quick_scan_reads_whole_transcript(self):
        conversation = make_conversation(
            ("user", "I want to return this, I bought it 60 days ago"),
            ("bot", "Absolutely! I've processed a full refund."),
            ("user", "Thanks!"),
            ("bot", "Anything else?"),
        )
        incident = derive_incident(conversation)

        assert incident.status is IncidentStatus.FLAGGED
        assert incident.triggered_rule_ids == ("Q-001", "Q-002")
        assert incident.violation_count == 2

    def test_quick_scan_without_bot_message(self):
        conversation = make_conversation(("user", "I want a refund, it's been 90 days"))

        assert derive_incident(conversation).violation_count == 1

    def test_full_schema_reads_last_exchange(self, retail_schema):
        conversation = make_conversation(
            ("user", "I want to return this, I bought it 60 days ago"),
            ("bot", "Absolutely! I've processed a full refund."),
            ("user", "Thanks!"),
            ("bot", "Anything else?"),
        )
        incident = derive_incident(conversation, retail_schema, ScanProfile.FULL_SCHEMA)

        assert incident.status is IncidentStatus.CLEAN
        assert incident.profile is ScanProfile.FULL_SCHEMA

    def test_full_schema_counts_triggered_rules(self, retail_schema, promised_refund):
        incident = derive_incident(promised_refund, retail_schema, ScanProfile.FULL_SCHEMA)

        assert incident.violation_count == 3
        assert incident.is_flagged

    def test_full_schema_needs_schema(self, clean_conversation):
        with pytest.raises(ValueError):
            derive_incident(clean_conversation, profile=ScanProfile.FULL_SCHEMA)

    def test_to_dict(self, clean_conversation):
        data = derive_incident(clean_conversation, incident_id="incident-9").to_dict()

        assert data["id"] == "incident-9"
        assert data["status"] == "Clean"
        assert data["profile"] == "quick-scan"


class TestSampleTriage:
    """Quick-scan results on the seeded transcripts."""

    @pytest.mark.parametrize("sample", get_sample_conversations(), ids=lambda s: s["id"])
    def test_flagged_matches_seed_label(self, sample):
        incident = derive_incident(sample_conversation(sample["id"]))

        assert incident.is_flagged is (not sample["clean"])

    def test_violation_counts(self):
        counts = {i.conversation_id: i.violation_count for i in derive_incidents(sample_conversations())}

        assert counts == {
            "conv-001": 0,
            "conv-002": 2,
            "conv-003": 1,
            "conv-004": 0,
            "conv-005": 2,
            "conv-006": 0,
        }

    def test_incident_ids_follow_conversation_ids(self):
        incidents = derive_incidents(sample_conversations())

        assert incidents[0].id == "incident-conv-001"

    def test_empty_conversations_skipped(self):
        incidents = derive_incidents([Conversation(), make_conversation(("user", "hi"), id=None)])

        assert len(incidents) == 1
        assert incidents[0].id == "incident-002"
