"""
Authorship Classifier - assigns exactly one AuthorshipStatus per image.

Rules are evaluated top to bottom and the first match wins:
  1. Synthetic detection          -> SYNTHETIC_AI
  2. Verified original            -> VERIFIED_ORIGINAL
  3. No creator on record         -> UNVERIFIED (user declaration needed)
  4. Anything else (conflict)     -> UNVERIFIED

There are no override paths. Uncertainty downgrades, nothing auto-promotes.
Classification is a pure function of (signals, declared creator name).
"""

import re
from typing import Callable, List, Optional, Sequence, Tuple

from authorship_governance.engines.authorship.reason_codes import ReasonCode
from authorship_governance.engines.authorship.types import (
    AuthorshipEvidence,
    AuthorshipStatus,
    ClassificationResult,
    ImageSignals,
)

# Confidence at or above this marks the image as synthetic
SYNTHETIC_THRESHOLD = 0.7

# ── Known AI tool signatures found in EXIF/XMP software/description fields ──

AI_METADATA_SIGNATURES: Tuple[str, ...] = (
    "stable diffusion",
    "midjourney",
    "dall-e",
    "dalle",
    "comfyui",
    "automatic1111",
    "invoke ai",
    "leonardo ai",
    "firefly",
    "adobe firefly",
    "ai_generated",
    "ai generated",
    "text-to-image",
    "txt2img",
    "img2img",
    "generative ai",
    "synthetically generated",
)

# ── IPTC DigitalSourceType values (normalized) that denote AI origin ────────

AI_DIGITAL_SOURCE_TYPES: Tuple[str, ...] = (
    "computergeneratedimage",
    "computergenerated",
    "trainedalgorithmicmedia",
    "compositewithtrainedalgorithmicmedia",
    "compositesynthetic",
    "algorithmicmedia",
    # Misspellings seen in the wild from older writers
    "trainedalgographicimage",
    "trainedalgographic",
    "compositewithtrainedalgographicelements",
)

_SOURCE_TYPE_STRIP_RE = re.compile(r"[\s_\-]")


def normalize_source_type(value: str) -> str:
    """Lower-case and strip whitespace, underscores and hyphens."""
    return _SOURCE_TYPE_STRIP_RE.sub("", value.lower())


def normalize_name(value: str) -> str:
    """Case-fold a person name and collapse its whitespace."""
    return " ".join(value.split()).lower()


def find_ai_signatures(*values: Optional[str]) -> List[str]:
    """
    Return the known AI tool signatures present in any of ``values``.

    Helper for extractors building ImageSignals.ai_signatures_found from
    software, description or XMP history fields. Order follows
    AI_METADATA_SIGNATURES; each signature is reported once.
    """
    haystack = " ".join(v.lower() for v in values if v)
    if not haystack:
        return []
    return [sig for sig in AI_METADATA_SIGNATURES if sig in haystack]


def _build_evidence(
    signals: ImageSignals,
    reason_codes: Sequence[ReasonCode],
    summary: str,
) -> AuthorshipEvidence:
    return AuthorshipEvidence(
        signals=signals,
        reason_codes=tuple(reason_codes),
        summary=summary,
    )


def _result(
    status: AuthorshipStatus,
    signals: ImageSignals,
    reason_codes: Sequence[ReasonCode],
    summary: str,
    needs_user_declaration: bool = False,
) -> ClassificationResult:
    return ClassificationResult(
        status=status,
        evidence=_build_evidence(signals, reason_codes, summary),
        needs_user_declaration=needs_user_declaration,
    )


# ── Rules ───────────────────────────────────────────────────────────────────

def _check_synthetic(
    signals: ImageSignals,
    declared_creator_name: Optional[str],
) -> Optional[ClassificationResult]:
    """Every matching synthetic signal is recorded, not only the first."""
    reason_codes: List[ReasonCode] = []

    if signals.ai_signatures_found:
        reason_codes.append(ReasonCode.AI_METADATA_SIGNATURE)

    if signals.digital_source_type:
        normalized = normalize_source_type(signals.digital_source_type)
        if any(t in normalized for t in AI_DIGITAL_SOURCE_TYPES):
            reason_codes.append(ReasonCode.DIGITAL_SOURCE_TYPE_AI)

    if (
        signals.synthetic_confidence is not None
        and signals.synthetic_confidence >= SYNTHETIC_THRESHOLD
    ):
        reason_codes.append(ReasonCode.HIGH_SYNTHETIC_CONFIDENCE)

    if not reason_codes:
        return None

    return _result(
        AuthorshipStatus.SYNTHETIC_AI,
        signals,
        reason_codes,
        "AI-generated content detected: " + ", ".join(r.value for r in reason_codes),
    )


def _check_verified_original(
    signals: ImageSignals,
    declared_creator_name: Optional[str],
) -> Optional[ClassificationResult]:
    if not signals.exif_present:
        return None
    if not declared_creator_name or not declared_creator_name.strip():
        return None
    # Nothing on record to verify against
    if not signals.existing_creator:
        return None

    declared = normalize_name(declared_creator_name)
    creator = normalize_name(signals.existing_creator)
    if creator != declared:
        return None  # conflict, resolved by the fallback rule

    if signals.existing_copyright:
        copyright_text = normalize_name(signals.existing_copyright)
        # Provisional: only a copyright that omits the user AND a creator
        # naming someone else counts as a conflict. With the creator already
        # matched above, this never fires.
        if declared not in copyright_text and creator != declared:
            return None

    return _result(
        AuthorshipStatus.VERIFIED_ORIGINAL,
        signals,
        [ReasonCode.EXIF_PRESENT_MATCH],
        f'EXIF data present, creator matches user profile: "{declared_creator_name.strip()}"',
    )


def _check_needs_declaration(
    signals: ImageSignals,
    declared_creator_name: Optional[str],
) -> Optional[ClassificationResult]:
    if signals.existing_creator:
        return None

    if signals.exif_present:
        summary = "EXIF present but no creator field - user declaration needed"
    else:
        summary = "No EXIF data and no existing creator - user declaration needed"

    return _result(
        AuthorshipStatus.UNVERIFIED,
        signals,
        [ReasonCode.EXIF_MISSING_NO_CONFLICT],
        summary,
        needs_user_declaration=True,
    )


ClassificationRule = Callable[[ImageSignals, Optional[str]], Optional[ClassificationResult]]

# Order is the priority. Never reorder without updating the tests.
CLASSIFICATION_RULES: Tuple[Tuple[str, ClassificationRule], ...] = (
    ("synthetic", _check_synthetic),
    ("verified_original", _check_verified_original),
    ("needs_declaration", _check_needs_declaration),
)


def classify(
    signals: ImageSignals,
    declared_creator_name: Optional[str] = None,
) -> ClassificationResult:
    """
    Classify an image's authorship from its extracted signals.

    Args:
        signals: Key metadata signals from the external extractor
        declared_creator_name: The user's creator name from their profile

    Returns:
        ClassificationResult with status, evidence and whether the user
        should be asked to declare authorship
    """
    for _name, rule in CLASSIFICATION_RULES:
        result = rule(signals, declared_creator_name)
        if result is not None:
            return result

    return _result(
        AuthorshipStatus.UNVERIFIED,
        signals,
        [ReasonCode.CONFLICTING_CREATOR_FOUND],
        "Conflicting or insufficient authorship evidence - classified as unverified",
    )


def apply_user_declaration(
    current_status: AuthorshipStatus,
    declared: bool,
    signals: ImageSignals,
) -> ClassificationResult:
    """
    Apply the user's answer to "are you the original creator?".

    SYNTHETIC_AI can never be overridden. Any other status becomes
    DECLARED_BY_USER on a yes and UNVERIFIED on a no, so withdrawing a
    declaration downgrades. Nothing ever reaches VERIFIED_ORIGINAL this way.
    """
    if current_status == AuthorshipStatus.SYNTHETIC_AI:
        return _result(
            AuthorshipStatus.SYNTHETIC_AI,
            signals,
            [ReasonCode.AI_DETECTED],
            "Synthetic image - user declaration cannot override AI detection",
        )

    if declared:
        return _result(
            AuthorshipStatus.DECLARED_BY_USER,
            signals,
            [ReasonCode.USER_DECLARED_TRUE],
            "User declared as original creator - not machine-verified",
        )

    return _result(
        AuthorshipStatus.UNVERIFIED,
        signals,
        [ReasonCode.USER_DECLARED_FALSE],
        "User declined creator declaration",
    )
