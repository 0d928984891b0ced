"""
Authorship engine core types.

AuthorshipStatus is a closed state space: exactly one status per image,
assigned by the classifier on ingest and immutable unless re-ingested or
advanced by a user declaration.
"""

from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from authorship_governance.engines.authorship.reason_codes import ReasonCode


class AuthorshipStatus(str, Enum):
    """What may truthfully be claimed about who created an image."""

    # Capture evidence present, creator matches the user, no conflicts
    VERIFIED_ORIGINAL = "VERIFIED_ORIGINAL"
    # User self-declared as creator, not machine-verified
    DECLARED_BY_USER = "DECLARED_BY_USER"
    # Default. Missing or conflicting evidence, no claims permitted
    UNVERIFIED = "UNVERIFIED"
    # AI-generated content detected
    SYNTHETIC_AI = "SYNTHETIC_AI"


def coerce_status(value: Any) -> Optional[AuthorshipStatus]:
    """Return the status named by ``value``, or None if it names no status."""
    if isinstance(value, AuthorshipStatus):
        return value
    if isinstance(value, str):
        try:
            return AuthorshipStatus(value)
        except ValueError:
            return None
    return None


class ImageSignals(BaseModel):
    """Key signals pulled from EXIF/IPTC/XMP by an external extractor."""

    model_config = ConfigDict(frozen=True)

    exif_present: bool = False
    camera_make: Optional[str] = None
    camera_model: Optional[str] = None
    date_time_original: Optional[str] = None
    existing_creator: Optional[str] = None
    existing_copyright: Optional[str] = None
    digital_source_type: Optional[str] = None
    ai_signatures_found: Tuple[str, ...] = ()
    synthetic_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class AuthorshipEvidence(BaseModel):
    """
    Snapshot of why a status was assigned.

    Only the extracted key fields are kept, never raw metadata dumps.
    """

    model_config = ConfigDict(frozen=True)

    signals: ImageSignals
    reason_codes: Tuple[ReasonCode, ...]
    summary: str


class ClassificationResult(BaseModel):
    """Outcome of classification or of applying a user declaration."""

    model_config = ConfigDict(frozen=True)

    status: AuthorshipStatus
    evidence: AuthorshipEvidence
    needs_user_declaration: bool = False
