"""
Export Guard - final gate before any export.

Runs before every image, metadata, case study, AEO block or WordPress post
export. If the payload implies authorship its status does not permit, the
export is blocked. A block is the correct outcome, not an error: callers
surface it to the operator and never retry the same payload.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from authorship_governance.engines.authorship import language_governor
from authorship_governance.engines.authorship.metadata_rules import (
    COPYRIGHT_FIELD,
    CREATOR_FIELD,
    permissions_row,
    resolve_status,
    strip_fields,
)
from authorship_governance.engines.authorship.reason_codes import ReasonCode
from authorship_governance.engines.authorship.types import AuthorshipStatus


class ExportKind(str, Enum):
    """What is being exported (recorded for the audit trail)."""
    METADATA = "metadata"
    CASE_STUDY = "case_study"
    WP_POST = "wp_post"
    AEO_BLOCK = "aeo_block"


class ExportPayload(BaseModel):
    """Everything an export pipeline intends to write for one asset."""

    model_config = ConfigDict(frozen=True)

    # Plain str so unknown statuses reach the guard and fail closed
    authorship_status: str
    export_kind: ExportKind = ExportKind.METADATA
    metadata: Optional[Dict[str, Any]] = None
    text_content: Optional[List[str]] = None
    claimed_creator: Optional[str] = None
    setting_copyright: bool = False

    @field_validator("authorship_status", mode="before")
    @classmethod
    def _status_value(cls, value: Any) -> Any:
        return value.value if isinstance(value, Enum) else value


class ExportValidationResult(BaseModel):
    """
    Verdict for one export attempt.

    ``filtered_fields`` lists what filter_metadata strips for the status and
    can be non-empty on an allowed export (an empty creator value, say).
    """

    allowed: bool
    reason_codes: List[ReasonCode]
    violations: List[str]
    filtered_fields: List[str]


class ExportGuard:
    """
    Stateless gate composing the permissions table and language governor.

    Blocks export if:
    - metadata sets creator or copyright the status does not permit
    - an explicit creator claim or copyright write is not permitted
    - any generated text item contains forbidden authorship language

    All checks run; the caller sees every reason in one pass. The status is
    resolved once per call, so an unknown status is reported once.
    """

    @classmethod
    def validate_export(cls, payload: ExportPayload) -> ExportValidationResult:
        reason_codes: List[ReasonCode] = []
        violations: List[str] = []

        status = payload.authorship_status
        resolved = resolve_status(status)
        permissions = permissions_row(resolved)
        metadata = payload.metadata or {}

        # Metadata field permissions
        creator = metadata.get(CREATOR_FIELD)
        if creator and not permissions.allow_creator:
            reason_codes.append(ReasonCode.CREATOR_FIELD_BLOCKED)
            violations.append(
                f'Creator field "{creator}" blocked for {status} images. '
                f"Only {AuthorshipStatus.VERIFIED_ORIGINAL.value} images may set IPTC:Creator."
            )

        if metadata.get(COPYRIGHT_FIELD) and not permissions.allow_copyright_overwrite:
            reason_codes.append(ReasonCode.COPYRIGHT_OVERWRITE_BLOCKED)
            violations.append(f"Copyright overwrite blocked for {status} images.")

        # Explicit claims
        if payload.claimed_creator and not permissions.allow_creator:
            reason_codes.append(ReasonCode.AUTHORSHIP_CLAIM_BLOCKED)
            violations.append(
                f'Authorship claim "{payload.claimed_creator}" not permitted '
                f"for {status} images."
            )

        if payload.setting_copyright and not permissions.allow_copyright_overwrite:
            reason_codes.append(ReasonCode.COPYRIGHT_OVERWRITE_BLOCKED)
            violations.append(f"Copyright cannot be overwritten for {status} images.")

        # Language rules, per independent text item
        for index, text in enumerate(payload.text_content or []):
            found = language_governor.scan(text, resolved, index)
            if found:
                reason_codes.append(ReasonCode.LANGUAGE_VIOLATION)
                violations.extend(v.message for v in found)

        _, filtered_fields = strip_fields(metadata, resolved)
        unique_codes = list(dict.fromkeys(reason_codes))

        return ExportValidationResult(
            allowed=not unique_codes,
            reason_codes=unique_codes,
            violations=violations,
            filtered_fields=filtered_fields,
        )


def validate_export(payload: ExportPayload) -> ExportValidationResult:
    """Module-level shortcut for ExportGuard.validate_export."""
    return ExportGuard.validate_export(payload)
