"""
Authorship Engine - the system of record for authorship claims.

It does not invent authorship and it does not guess. It only:
- records what can be proven
- records what is explicitly declared
- marks uncertainty clearly
- blocks false claims

If authorship cannot be justified it is downgraded, never upgraded.
"""

from authorship_governance.engines.authorship.reason_codes import (
    ReasonCode,
    REASON_CODE_LABELS,
)
from authorship_governance.engines.authorship.types import (
    AuthorshipStatus,
    AuthorshipEvidence,
    ClassificationResult,
    ImageSignals,
    coerce_status,
)
from authorship_governance.engines.authorship.classifier import (
    classify,
    apply_user_declaration,
    find_ai_signatures,
    SYNTHETIC_THRESHOLD,
)
from authorship_governance.engines.authorship.metadata_rules import (
    MetadataPermissions,
    HumanRole,
    permissions_for,
    build_provenance_block,
    filter_metadata,
)
from authorship_governance.engines.authorship.language_governor import (
    LanguageValidationResult,
    LanguageViolation,
    validate,
    validate_batch,
    allowed_phrases,
    prompt_instruction,
)
from authorship_governance.engines.authorship.export_guard import (
    ExportGuard,
    ExportKind,
    ExportPayload,
    ExportValidationResult,
    validate_export,
)

__all__ = [
    # Evidence model
    "ReasonCode",
    "REASON_CODE_LABELS",
    "AuthorshipStatus",
    "AuthorshipEvidence",
    "ClassificationResult",
    "ImageSignals",
    "coerce_status",
    # Classifier
    "classify",
    "apply_user_declaration",
    "find_ai_signatures",
    "SYNTHETIC_THRESHOLD",
    # Permissions
    "MetadataPermissions",
    "HumanRole",
    "permissions_for",
    "build_provenance_block",
    "filter_metadata",
    # Language
    "LanguageValidationResult",
    "LanguageViolation",
    "validate",
    "validate_batch",
    "allowed_phrases",
    "prompt_instruction",
    # Export guard
    "ExportGuard",
    "ExportKind",
    "ExportPayload",
    "ExportValidationResult",
    "validate_export",
]
