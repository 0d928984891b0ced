"""Unit tests for the authorship classifier."""

import pytest

from authorship_governance.engines.authorship import (
    AuthorshipStatus,
    ReasonCode,
    apply_user_declaration,
    classify,
    find_ai_signatures,
)
from authorship_governance.engines.authorship.classifier import (
    CLASSIFICATION_RULES,
    normalize_name,
    normalize_source_type,
)


class TestSyntheticDetection:
    """Synthetic detection wins over every other signal."""

    def test_ai_signature_beats_matching_exif(self, make_signals):
        """AI signature -> SYNTHETIC_AI even when EXIF creator matches the user."""
        result = classify(
            make_signals(
                exif_present=True,
                existing_creator="John Smith",
                ai_signatures_found=["midjourney"],
            ),
            "John Smith",
        )
        assert result.status == AuthorshipStatus.SYNTHETIC_AI
        assert result.evidence.reason_codes == (ReasonCode.AI_METADATA_SIGNATURE,)
        assert result.needs_user_declaration is False

    def test_digital_source_type(self, make_signals):
        result = classify(
            make_signals(
                exif_present=True,
                existing_creator="John Smith",
                digital_source_type="computerGeneratedImage",
            ),
            "John Smith",
        )
        assert result.status == AuthorshipStatus.SYNTHETIC_AI
        assert ReasonCode.DIGITAL_SOURCE_TYPE_AI in result.evidence.reason_codes

    @pytest.mark.parametrize("value", [
        "trained_algorithmic_media",
        "Trained Algorithmic Media",
        "http://cv.iptc.org/newscodes/digitalsourcetype/trainedAlgorithmicMedia",
        "composite-synthetic",
    ])
    def test_digital_source_type_normalization(self, make_signals, value):
        result = classify(make_signals(digital_source_type=value))
        assert result.status == AuthorshipStatus.SYNTHETIC_AI

    def test_camera_source_type_is_not_synthetic(self, make_signals):
        result = classify(make_signals(digital_source_type="digitalCapture"))
        assert result.status == AuthorshipStatus.UNVERIFIED

    def test_high_confidence(self, make_signals):
        result = classify(
            make_signals(exif_present=True, existing_creator="John Smith", synthetic_confidence=0.85),
            "John Smith",
        )
        assert result.status == AuthorshipStatus.SYNTHETIC_AI
        assert result.evidence.reason_codes == (ReasonCode.HIGH_SYNTHETIC_CONFIDENCE,)

    def test_confidence_threshold_is_inclusive(self, make_signals):
        assert classify(make_signals(synthetic_confidence=0.7)).status == AuthorshipStatus.SYNTHETIC_AI
        assert classify(make_signals(synthetic_confidence=0.69)).status == AuthorshipStatus.UNVERIFIED

    def test_all_matching_rules_recorded(self, make_signals):
        """Evidence keeps every synthetic signal, in rule order."""
        result = classify(make_signals(
            ai_signatures_found=["dall-e"],
            digital_source_type="algorithmicMedia",
            synthetic_confidence=0.99,
        ))
        assert result.evidence.reason_codes == (
            ReasonCode.AI_METADATA_SIGNATURE,
            ReasonCode.DIGITAL_SOURCE_TYPE_AI,
            ReasonCode.HIGH_SYNTHETIC_CONFIDENCE,
        )
        assert "AI_METADATA_SIGNATURE" in result.evidence.summary


class TestVerifiedOriginal:
    """Verification requires EXIF, a declared name and a matching creator."""

    def test_matching_creator(self, make_signals):
        result = classify(
            make_signals(exif_present=True, existing_creator="John Smith", camera_make="Canon"),
            "John Smith",
        )
        assert result.status == AuthorshipStatus.VERIFIED_ORIGINAL
        assert result.evidence.reason_codes == (ReasonCode.EXIF_PRESENT_MATCH,)
        assert result.evidence.signals.camera_make == "Canon"

    def test_match_ignores_case_and_whitespace(self, make_signals):
        result = classify(
            make_signals(exif_present=True, existing_creator="  john   SMITH "),
            "John Smith",
        )
        assert result.status == AuthorshipStatus.VERIFIED_ORIGINAL

    def test_mismatched_creator_is_conflict(self, make_signals):
        result = classify(
            make_signals(exif_present=True, existing_creator="Jane Doe"),
            "John Smith",
        )
        assert result.status == AuthorshipStatus.UNVERIFIED
        assert result.evidence.reason_codes == (ReasonCode.CONFLICTING_CREATOR_FOUND,)
        assert result.needs_user_declaration is False

    def test_no_declared_name_never_verifies(self, make_signals):
        result = classify(make_signals(exif_present=True, existing_creator="Someone"))
        assert result.status == AuthorshipStatus.UNVERIFIED
        assert result.evidence.reason_codes == (ReasonCode.CONFLICTING_CREATOR_FOUND,)

    def test_blank_declared_name_never_verifies(self, make_signals):
        result = classify(make_signals(exif_present=True, existing_creator="Someone"), "   ")
        assert result.status != AuthorshipStatus.VERIFIED_ORIGINAL

    def test_creator_without_exif_is_conflict(self, make_signals):
        result = classify(make_signals(existing_creator="John Smith"), "John Smith")
        assert result.status == AuthorshipStatus.UNVERIFIED
        assert result.evidence.reason_codes == (ReasonCode.CONFLICTING_CREATOR_FOUND,)

    def test_copyright_naming_user_verifies(self, make_signals):
        result = classify(
            make_signals(
                exif_present=True,
                existing_creator="John Smith",
                existing_copyright="© 2026 John Smith",
            ),
            "John Smith",
        )
        assert result.status == AuthorshipStatus.VERIFIED_ORIGINAL

    def test_foreign_copyright_with_matching_creator_still_verifies(self, make_signals):
        """
        Pins the provisional copyright rule: a copyright naming someone else
        only conflicts when the creator also differs, which cannot happen
        once the creator has matched.
        """
        result = classify(
            make_signals(
                exif_present=True,
                existing_creator="John Smith",
                existing_copyright="© 2020 Other Studio Ltd",
            ),
            "John Smith",
        )
        assert result.status == AuthorshipStatus.VERIFIED_ORIGINAL


class TestNeedsDeclaration:
    """Missing EXIF never auto-assigns authorship."""

    def test_no_exif_no_creator(self, make_signals):
        result = classify(make_signals(), "John Smith")
        assert result.status == AuthorshipStatus.UNVERIFIED
        assert result.needs_user_declaration is True
        assert result.evidence.reason_codes == (ReasonCode.EXIF_MISSING_NO_CONFLICT,)

    def test_exif_without_creator(self, make_signals):
        result = classify(make_signals(exif_present=True, camera_model="X100V"), "John Smith")
        assert result.status == AuthorshipStatus.UNVERIFIED
        assert result.needs_user_declaration is True
        assert "EXIF present" in result.evidence.summary

    def test_no_declared_name(self, make_signals):
        result = classify(make_signals())
        assert result.status == AuthorshipStatus.UNVERIFIED
        assert result.needs_user_declaration is True


class TestDeterminism:
    def test_identical_inputs_identical_result(self, make_signals):
        signals = make_signals(exif_present=True, existing_creator="John Smith")
        assert classify(signals, "John Smith") == classify(signals, "John Smith")

    def test_rule_order(self):
        assert [name for name, _ in CLASSIFICATION_RULES] == [
            "synthetic",
            "verified_original",
            "needs_declaration",
        ]


class TestUserDeclaration:
    """Declarations only move UNVERIFIED -> DECLARED_BY_USER."""

    def test_declaration_cannot_override_synthetic(self, make_signals):
        result = apply_user_declaration(
            AuthorshipStatus.SYNTHETIC_AI,
            True,
            make_signals(ai_signatures_found=["midjourney"]),
        )
        assert result.status == AuthorshipStatus.SYNTHETIC_AI
        assert result.evidence.reason_codes == (ReasonCode.AI_DETECTED,)

    def test_declined_synthetic_stays_synthetic(self, make_signals):
        result = apply_user_declaration(AuthorshipStatus.SYNTHETIC_AI, False, make_signals())
        assert result.status == AuthorshipStatus.SYNTHETIC_AI

    def test_declared_is_not_verified(self, make_signals):
        result = apply_user_declaration(AuthorshipStatus.UNVERIFIED, True, make_signals())
        assert result.status == AuthorshipStatus.DECLARED_BY_USER
        assert result.status != AuthorshipStatus.VERIFIED_ORIGINAL
        assert result.evidence.reason_codes == (ReasonCode.USER_DECLARED_TRUE,)
        assert result.needs_user_declaration is False

    def test_declined_stays_unverified(self, make_signals):
        result = apply_user_declaration(AuthorshipStatus.UNVERIFIED, False, make_signals())
        assert result.status == AuthorshipStatus.UNVERIFIED
        assert result.evidence.reason_codes == (ReasonCode.USER_DECLARED_FALSE,)

    @pytest.mark.parametrize("current", [
        AuthorshipStatus.VERIFIED_ORIGINAL,
        AuthorshipStatus.DECLARED_BY_USER,
        AuthorshipStatus.UNVERIFIED,
    ])
    def test_declining_always_downgrades(self, make_signals, current):
        result = apply_user_declaration(current, False, make_signals())
        assert result.status == AuthorshipStatus.UNVERIFIED
        assert result.evidence.reason_codes == (ReasonCode.USER_DECLARED_FALSE,)

    @pytest.mark.parametrize("current", [
        AuthorshipStatus.VERIFIED_ORIGINAL,
        AuthorshipStatus.DECLARED_BY_USER,
    ])
    def test_declaring_never_yields_verified(self, make_signals, current):
        result = apply_user_declaration(current, True, make_signals())
        assert result.status == AuthorshipStatus.DECLARED_BY_USER


class TestHelpers:
    def test_find_ai_signatures(self):
        found = find_ai_signatures("Adobe Firefly 2.0", None, "edited")
        assert found == ["firefly", "adobe firefly"]

    def test_find_ai_signatures_none(self):
        assert find_ai_signatures("Canon EOS R5", "") == []
        assert find_ai_signatures() == []

    def test_normalizers(self):
        assert normalize_source_type("Computer_Generated Image") == "computergeneratedimage"
        assert normalize_name("  Jane\tDOE ") == "jane doe"
