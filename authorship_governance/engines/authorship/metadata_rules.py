"""
Metadata embedding rules - which fields an AuthorshipStatus may carry.

VERIFIED_ORIGINAL -> full attribution allowed
DECLARED_BY_USER  -> provenance namespace only, no creator/copyright overwrite
UNVERIFIED        -> preserve originals, add no authorship claims
SYNTHETIC_AI      -> mark as AI-generated, no photographer attribution

Permissions are a pure function of status. Anything that is not a known
status gets the most restrictive row.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from authorship_governance.config import get_settings
from authorship_governance.engines.authorship.reason_codes import ReasonCode
from authorship_governance.engines.authorship.types import AuthorshipStatus, coerce_status
from authorship_governance.logging_config import get_logger

logger = get_logger(__name__)

CREATOR_FIELD = "creator"
COPYRIGHT_FIELD = "copyright"
DIGITAL_SOURCE_TYPE_FIELD = "digital_source_type"

# Source-type value forced onto synthetic images
AI_SOURCE_TYPE_MARKER = "computerGenerated"

PROVENANCE_NAMESPACE = "AuthorshipIntegrity"


class HumanRole(str, Enum):
    """Role of the human behind a synthetic image."""
    PROMPT_AUTHOR = "prompt-author"
    EDITOR = "editor"
    CURATOR = "curator"


class VerificationLevel(str, Enum):
    MACHINE_VERIFIED = "machine-verified"
    NOT_VERIFIED = "not-verified"
    UNVERIFIED = "unverified"


class MetadataPermissions(BaseModel):
    """What metadata a status may carry."""

    model_config = ConfigDict(frozen=True)

    allow_creator: bool
    allow_copyright_overwrite: bool
    allow_full_provenance: bool
    force_ai_source_type: bool
    preserve_originals: bool
    blocked_reasons: Tuple[ReasonCode, ...] = ()


PERMISSIONS_TABLE: Dict[AuthorshipStatus, MetadataPermissions] = {
    AuthorshipStatus.VERIFIED_ORIGINAL: MetadataPermissions(
        allow_creator=True,
        allow_copyright_overwrite=True,
        allow_full_provenance=True,
        force_ai_source_type=False,
        preserve_originals=False,
    ),
    AuthorshipStatus.DECLARED_BY_USER: MetadataPermissions(
        allow_creator=False,
        allow_copyright_overwrite=False,
        allow_full_provenance=False,
        force_ai_source_type=False,
        preserve_originals=True,
        blocked_reasons=(
            ReasonCode.CREATOR_FIELD_BLOCKED,
            ReasonCode.COPYRIGHT_OVERWRITE_BLOCKED,
        ),
    ),
    AuthorshipStatus.UNVERIFIED: MetadataPermissions(
        allow_creator=False,
        allow_copyright_overwrite=False,
        allow_full_provenance=False,
        force_ai_source_type=False,
        preserve_originals=True,
        blocked_reasons=(
            ReasonCode.CREATOR_FIELD_BLOCKED,
            ReasonCode.COPYRIGHT_OVERWRITE_BLOCKED,
            ReasonCode.AUTHORSHIP_CLAIM_BLOCKED,
        ),
    ),
    AuthorshipStatus.SYNTHETIC_AI: MetadataPermissions(
        allow_creator=False,
        allow_copyright_overwrite=False,
        allow_full_provenance=False,
        force_ai_source_type=True,
        preserve_originals=False,
        blocked_reasons=(
            ReasonCode.CREATOR_FIELD_BLOCKED,
            ReasonCode.COPYRIGHT_OVERWRITE_BLOCKED,
        ),
    ),
}

RESTRICTIVE_PERMISSIONS = MetadataPermissions(
    allow_creator=False,
    allow_copyright_overwrite=False,
    allow_full_provenance=False,
    force_ai_source_type=False,
    preserve_originals=True,
    blocked_reasons=(
        ReasonCode.CREATOR_FIELD_BLOCKED,
        ReasonCode.COPYRIGHT_OVERWRITE_BLOCKED,
        ReasonCode.AUTHORSHIP_CLAIM_BLOCKED,
    ),
)

_VERIFICATION_LEVELS: Dict[AuthorshipStatus, Optional[VerificationLevel]] = {
    AuthorshipStatus.VERIFIED_ORIGINAL: VerificationLevel.MACHINE_VERIFIED,
    AuthorshipStatus.DECLARED_BY_USER: VerificationLevel.NOT_VERIFIED,
    AuthorshipStatus.UNVERIFIED: VerificationLevel.UNVERIFIED,
    AuthorshipStatus.SYNTHETIC_AI: None,
}

for _table in (PERMISSIONS_TABLE, _VERIFICATION_LEVELS):
    if set(_table) != set(AuthorshipStatus):
        raise RuntimeError("Status-keyed tables must cover every AuthorshipStatus")


def resolve_status(status: Any) -> Optional[AuthorshipStatus]:
    """Coerce ``status``; log and return None when it names no status."""
    resolved = coerce_status(status)
    if resolved is None:
        logger.warning(
            "Unrecognized authorship status, failing closed",
            extra={"authorship_status": repr(status)},
        )
    return resolved


def permissions_row(resolved: Optional[AuthorshipStatus]) -> MetadataPermissions:
    """Permissions for an already-resolved status; None is the restrictive row."""
    if resolved is None:
        return RESTRICTIVE_PERMISSIONS
    return PERMISSIONS_TABLE[resolved]


def permissions_for(status: Any) -> MetadataPermissions:
    """Return the permissions row for ``status`` (restrictive if unknown)."""
    return permissions_row(resolve_status(status))


def _tag(name: str) -> str:
    return f"{PROVENANCE_NAMESPACE}:{name}"


def build_provenance_block(
    status: Any,
    declared_author: Optional[str] = None,
    human_role: Optional[HumanRole] = None,
    generation_tool: Optional[str] = None,
    classified_at: Optional[datetime] = None,
) -> Dict[str, str]:
    """
    Build the AuthorshipIntegrity tag map handed to the metadata writer.

    Always carries status, classification timestamp and engine version.
    An unknown status is recorded as UNVERIFIED.
    """
    resolved = resolve_status(status) or AuthorshipStatus.UNVERIFIED
    when = classified_at or datetime.now(timezone.utc)

    block: Dict[str, str] = {
        _tag("AuthorshipStatus"): resolved.value,
        _tag("ClassifiedAt"): when.isoformat(),
        _tag("EngineVersion"): get_settings().engine_version,
    }

    level = _VERIFICATION_LEVELS[resolved]
    if level is not None:
        block[_tag("VerificationLevel")] = level.value

    if resolved == AuthorshipStatus.DECLARED_BY_USER and declared_author:
        block[_tag("DeclaredAuthor")] = declared_author

    if resolved == AuthorshipStatus.SYNTHETIC_AI:
        block[_tag("HumanRole")] = HumanRole(human_role or HumanRole.PROMPT_AUTHOR).value
        if generation_tool:
            block[_tag("GenerationTool")] = generation_tool

    return block


def filter_metadata(
    candidate_fields: Mapping[str, Any],
    status: Any,
    declared_creator: Optional[str] = None,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Sanitize synthesized metadata before it reaches any writer.

    Returns a new dict with forbidden fields stripped plus the names of the
    fields removed. The input mapping is never modified.
    """
    return strip_fields(candidate_fields, resolve_status(status), declared_creator)


def strip_fields(
    candidate_fields: Mapping[str, Any],
    resolved: Optional[AuthorshipStatus],
    declared_creator: Optional[str] = None,
) -> Tuple[Dict[str, Any], List[str]]:
    """filter_metadata for an already-resolved status (None fails closed)."""
    permissions = permissions_row(resolved)
    filtered = dict(candidate_fields)
    removed: List[str] = []

    if not permissions.allow_creator and CREATOR_FIELD in filtered:
        del filtered[CREATOR_FIELD]
        removed.append(CREATOR_FIELD)

    if not permissions.allow_copyright_overwrite and COPYRIGHT_FIELD in filtered:
        del filtered[COPYRIGHT_FIELD]
        removed.append(COPYRIGHT_FIELD)

    if permissions.force_ai_source_type:
        filtered[DIGITAL_SOURCE_TYPE_FIELD] = AI_SOURCE_TYPE_MARKER

    if resolved == AuthorshipStatus.VERIFIED_ORIGINAL and declared_creator:
        filtered[CREATOR_FIELD] = declared_creator

    return filtered, removed
