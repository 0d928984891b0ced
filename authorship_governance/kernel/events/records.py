"""
Persistent governance records: the current authorship state of each image
and the lifecycle of each export attempt.

Unlike audit events these are updated in place. The image state is the
asset's authorship record of truth that export checks read back; an export
record moves through ExportStatus and stops at a terminal status.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from authorship_governance.engines.authorship.reason_codes import ReasonCode
from authorship_governance.engines.authorship.types import AuthorshipEvidence, AuthorshipStatus


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ExportStatus(str, Enum):
    STARTED = "started"
    VALIDATED = "validated"
    BLOCKED = "blocked"
    COMPLETED = "completed"
    FAILED = "failed"


# A blocked export is terminal: the same payload would be blocked again
EXPORT_TRANSITIONS: Dict[ExportStatus, FrozenSet[ExportStatus]] = {
    ExportStatus.STARTED: frozenset({ExportStatus.VALIDATED, ExportStatus.BLOCKED, ExportStatus.FAILED}),
    ExportStatus.VALIDATED: frozenset({ExportStatus.COMPLETED, ExportStatus.FAILED}),
    ExportStatus.BLOCKED: frozenset(),
    ExportStatus.COMPLETED: frozenset(),
    ExportStatus.FAILED: frozenset(),
}

if set(EXPORT_TRANSITIONS) != set(ExportStatus):
    raise RuntimeError("EXPORT_TRANSITIONS must cover every ExportStatus")


class ExportTransitionError(ValueError):
    """Raised when an export record is moved along a transition that does not exist."""

    def __init__(self, export_id: str, current: ExportStatus, requested: ExportStatus):
        self.export_id = export_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Export {export_id} cannot move from {current.value} to {requested.value}"
        )


class RecordNotFoundError(LookupError):
    """No image state or export record with the given id."""


# ── Image state ─────────────────────────────────────────────────────────

class ImageStateInput(BaseModel):
    """Authorship state to create or replace for one image."""

    model_config = ConfigDict(frozen=True)

    image_id: str
    user_id: Optional[str] = None
    project_id: Optional[str] = None
    sha256: Optional[str] = None
    source_type: str = "upload"
    authorship_status: AuthorshipStatus
    authorship_evidence: AuthorshipEvidence
    user_declared: bool = False
    synthetic_confidence: Optional[float] = None


class ImageState(ImageStateInput):
    classified_at: datetime = Field(default_factory=_now)


# ── Export records ──────────────────────────────────────────────────────

class ExportRecordInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: Optional[str] = None
    project_id: Optional[str] = None
    export_type: str
    payload_hash: Optional[str] = None


class ExportStatusUpdate(BaseModel):
    model_config = ConfigDict(frozen=True)

    export_id: str
    status: ExportStatus
    reason_codes: List[ReasonCode] = Field(default_factory=list)
    result_refs: Dict[str, Any] = Field(default_factory=dict)


class ExportRecord(ExportRecordInput):
    """One export attempt and where it is in its lifecycle."""

    id: str
    status: ExportStatus = ExportStatus.STARTED
    reason_codes: List[ReasonCode] = Field(default_factory=list)
    result_refs: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    def apply(self, update: ExportStatusUpdate) -> "ExportRecord":
        """Return the record after ``update``; raises ExportTransitionError."""
        if update.status not in EXPORT_TRANSITIONS[self.status]:
            raise ExportTransitionError(self.id, self.status, update.status)
        return self.model_copy(update={
            "status": update.status,
            "reason_codes": list(update.reason_codes),
            "result_refs": {**self.result_refs, **update.result_refs},
            "updated_at": _now(),
        })
