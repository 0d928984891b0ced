"""Unit tests for metadata permissions, provenance tags and field filtering."""

from datetime import datetime, timezone

import pytest

from authorship_governance.engines.authorship import (
    AuthorshipStatus,
    HumanRole,
    ReasonCode,
    build_provenance_block,
    filter_metadata,
    permissions_for,
)
from authorship_governance.engines.authorship.metadata_rules import (
    AI_SOURCE_TYPE_MARKER,
    RESTRICTIVE_PERMISSIONS,
)

CLASSIFIED_AT = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestPermissionsTable:
    """Permissions are a pure function of status."""

    def test_verified_original_allows_everything(self):
        p = permissions_for(AuthorshipStatus.VERIFIED_ORIGINAL)
        assert p.allow_creator is True
        assert p.allow_copyright_overwrite is True
        assert p.allow_full_provenance is True
        assert p.force_ai_source_type is False
        assert p.blocked_reasons == ()

    def test_declared_is_provenance_only(self):
        p = permissions_for(AuthorshipStatus.DECLARED_BY_USER)
        assert p.allow_creator is False
        assert p.allow_copyright_overwrite is False
        assert p.preserve_originals is True
        assert p.blocked_reasons == (
            ReasonCode.CREATOR_FIELD_BLOCKED,
            ReasonCode.COPYRIGHT_OVERWRITE_BLOCKED,
        )

    def test_unverified_blocks_claims(self):
        p = permissions_for(AuthorshipStatus.UNVERIFIED)
        assert p.allow_creator is False
        assert ReasonCode.AUTHORSHIP_CLAIM_BLOCKED in p.blocked_reasons

    def test_synthetic_forces_ai_marker(self):
        p = permissions_for(AuthorshipStatus.SYNTHETIC_AI)
        assert p.force_ai_source_type is True
        assert p.allow_creator is False
        assert p.preserve_originals is False

    def test_accepts_status_string(self):
        assert permissions_for("VERIFIED_ORIGINAL").allow_creator is True

    @pytest.mark.parametrize("status", ["MAYBE_ORIGINAL", "", None, 42])
    def test_unknown_status_is_most_restrictive(self, status):
        p = permissions_for(status)
        assert p == RESTRICTIVE_PERMISSIONS
        assert not (p.allow_creator or p.allow_copyright_overwrite or p.allow_full_provenance)

    def test_unknown_status_is_logged(self, caplog):
        with caplog.at_level("WARNING"):
            permissions_for("NOT_A_STATUS")
        assert "failing closed" in caplog.text


class TestProvenanceBlock:
    def test_verified(self):
        block = build_provenance_block(AuthorshipStatus.VERIFIED_ORIGINAL, classified_at=CLASSIFIED_AT)
        assert block == {
            "AuthorshipIntegrity:AuthorshipStatus": "VERIFIED_ORIGINAL",
            "AuthorshipIntegrity:ClassifiedAt": "2026-03-01T12:00:00+00:00",
            "AuthorshipIntegrity:EngineVersion": "1.0",
            "AuthorshipIntegrity:VerificationLevel": "machine-verified",
        }

    def test_declared_carries_author(self):
        block = build_provenance_block(
            AuthorshipStatus.DECLARED_BY_USER,
            declared_author="Jane Doe",
            classified_at=CLASSIFIED_AT,
        )
        assert block["AuthorshipIntegrity:VerificationLevel"] == "not-verified"
        assert block["AuthorshipIntegrity:DeclaredAuthor"] == "Jane Doe"

    def test_declared_author_ignored_for_other_statuses(self):
        block = build_provenance_block(AuthorshipStatus.UNVERIFIED, declared_author="Jane Doe")
        assert "AuthorshipIntegrity:DeclaredAuthor" not in block
        assert block["AuthorshipIntegrity:VerificationLevel"] == "unverified"

    def test_synthetic(self):
        block = build_provenance_block(
            AuthorshipStatus.SYNTHETIC_AI,
            generation_tool="Midjourney v6",
            classified_at=CLASSIFIED_AT,
        )
        assert block["AuthorshipIntegrity:HumanRole"] == "prompt-author"
        assert block["AuthorshipIntegrity:GenerationTool"] == "Midjourney v6"
        assert "AuthorshipIntegrity:VerificationLevel" not in block

    def test_synthetic_custom_role(self):
        block = build_provenance_block(AuthorshipStatus.SYNTHETIC_AI, human_role=HumanRole.CURATOR)
        assert block["AuthorshipIntegrity:HumanRole"] == "curator"

    def test_unknown_status_recorded_as_unverified(self):
        block = build_provenance_block("BOGUS", classified_at=CLASSIFIED_AT)
        assert block["AuthorshipIntegrity:AuthorshipStatus"] == "UNVERIFIED"

    def test_deterministic_with_fixed_timestamp(self):
        a = build_provenance_block(AuthorshipStatus.UNVERIFIED, classified_at=CLASSIFIED_AT)
        b = build_provenance_block(AuthorshipStatus.UNVERIFIED, classified_at=CLASSIFIED_AT)
        assert a == b


class TestFilterMetadata:
    CANDIDATE = {
        "creator": "John Smith",
        "copyright": "© 2026 John Smith",
        "headline": "Kitchen remodel",
    }

    def test_verified_keeps_and_sets_creator(self):
        fields, removed = filter_metadata(self.CANDIDATE, AuthorshipStatus.VERIFIED_ORIGINAL, "J. Smith")
        assert fields["creator"] == "J. Smith"
        assert fields["copyright"] == "© 2026 John Smith"
        assert removed == []

    @pytest.mark.parametrize("status", [
        AuthorshipStatus.DECLARED_BY_USER,
        AuthorshipStatus.UNVERIFIED,
        "UNKNOWN_STATUS",
    ])
    def test_strips_creator_and_copyright(self, status):
        fields, removed = filter_metadata(self.CANDIDATE, status, "John Smith")
        assert fields == {"headline": "Kitchen remodel"}
        assert removed == ["creator", "copyright"]

    def test_synthetic_forces_source_type(self):
        fields, removed = filter_metadata(
            {"creator": "Bot", "digital_source_type": "digitalCapture"},
            AuthorshipStatus.SYNTHETIC_AI,
        )
        assert fields == {"digital_source_type": AI_SOURCE_TYPE_MARKER}
        assert removed == ["creator"]

    def test_input_not_mutated(self):
        candidate = dict(self.CANDIDATE)
        filter_metadata(candidate, AuthorshipStatus.UNVERIFIED)
        assert candidate == self.CANDIDATE
