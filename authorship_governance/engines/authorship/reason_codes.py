"""
Reason codes - shared vocabulary for every authorship governance decision.

Used in classification evidence, audit events and export blocking.
Machine-readable tokens; the human label is derived, never primary.
"""

from enum import Enum
from typing import Dict


class ReasonCode(str, Enum):
    """Why a classification or export decision was made."""

    # Classification
    AI_DETECTED = "AI_DETECTED"
    EXIF_PRESENT_MATCH = "EXIF_PRESENT_MATCH"
    EXIF_MISSING_NO_CONFLICT = "EXIF_MISSING_NO_CONFLICT"
    CONFLICTING_CREATOR_FOUND = "CONFLICTING_CREATOR_FOUND"
    USER_DECLARED_TRUE = "USER_DECLARED_TRUE"
    USER_DECLARED_FALSE = "USER_DECLARED_FALSE"
    DIGITAL_SOURCE_TYPE_AI = "DIGITAL_SOURCE_TYPE_AI"
    HIGH_SYNTHETIC_CONFIDENCE = "HIGH_SYNTHETIC_CONFIDENCE"
    AI_METADATA_SIGNATURE = "AI_METADATA_SIGNATURE"

    # Export blocking
    LANGUAGE_VIOLATION = "LANGUAGE_VIOLATION"
    AUTHORSHIP_CLAIM_BLOCKED = "AUTHORSHIP_CLAIM_BLOCKED"
    CREATOR_FIELD_BLOCKED = "CREATOR_FIELD_BLOCKED"
    COPYRIGHT_OVERWRITE_BLOCKED = "COPYRIGHT_OVERWRITE_BLOCKED"

    # Downstream pipeline failures (reported by export/publish callers)
    WP_ERROR = "WP_ERROR"
    METADATA_WRITE_ERROR = "METADATA_WRITE_ERROR"
    EXPORT_VALIDATION_FAILED = "EXPORT_VALIDATION_FAILED"

    @property
    def label(self) -> str:
        """Fixed human-readable label for this code."""
        return REASON_CODE_LABELS[self]


REASON_CODE_LABELS: Dict[ReasonCode, str] = {
    ReasonCode.AI_DETECTED: "AI-generated content detected",
    ReasonCode.EXIF_PRESENT_MATCH: "EXIF data present, creator matches user profile",
    ReasonCode.EXIF_MISSING_NO_CONFLICT: "No EXIF creator data, no conflicting authorship",
    ReasonCode.CONFLICTING_CREATOR_FOUND: "Existing creator does not match user",
    ReasonCode.USER_DECLARED_TRUE: "User declared as original creator",
    ReasonCode.USER_DECLARED_FALSE: "User declined creator declaration",
    ReasonCode.DIGITAL_SOURCE_TYPE_AI: "DigitalSourceType indicates AI generation",
    ReasonCode.HIGH_SYNTHETIC_CONFIDENCE: "High confidence of synthetic/AI content",
    ReasonCode.AI_METADATA_SIGNATURE: "Known AI tool metadata signature found",
    ReasonCode.LANGUAGE_VIOLATION: "Generated text violates authorship language rules",
    ReasonCode.AUTHORSHIP_CLAIM_BLOCKED: "Authorship claim not permitted by status",
    ReasonCode.CREATOR_FIELD_BLOCKED: "Creator field blocked for this authorship status",
    ReasonCode.COPYRIGHT_OVERWRITE_BLOCKED: "Copyright overwrite blocked for this status",
    ReasonCode.WP_ERROR: "WordPress publishing error",
    ReasonCode.METADATA_WRITE_ERROR: "Metadata write error",
    ReasonCode.EXPORT_VALIDATION_FAILED: "Export validation failed",
}

if set(REASON_CODE_LABELS) != set(ReasonCode):
    raise RuntimeError("REASON_CODE_LABELS must cover every ReasonCode")
