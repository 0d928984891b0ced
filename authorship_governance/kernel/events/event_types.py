"""
Governance event definitions using Pydantic for validation.

Only governance-significant actions are recorded, not every UI click.
Event details stay small and structured: reason codes and extracted key
fields, never full EXIF/IPTC dumps.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from authorship_governance.engines.authorship.reason_codes import ReasonCode


class CeEventType(str, Enum):
    """Audit trail event types."""

    # Ingest
    IMAGE_INGESTED = "image_ingested"
    AUTHORSHIP_CLASSIFIED = "authorship_classified"

    # User declaration
    USER_DECLARATION_PROMPTED = "user_declaration_prompted"
    USER_DECLARATION_SET = "user_declaration_set"

    # Metadata embedding
    METADATA_EMBED_REQUESTED = "metadata_embed_requested"
    METADATA_EMBED_COMPLETED = "metadata_embed_completed"

    # Export
    EXPORT_VALIDATED = "export_validated"
    EXPORT_BLOCKED = "export_blocked"
    EXPORT_COMPLETED = "export_completed"

    # Content generation
    CASE_STUDY_GENERATED = "case_study_generated"

    # Publishing
    WP_PUBLISH_ATTEMPTED = "wp_publish_attempted"
    WP_PUBLISH_SUCCEEDED = "wp_publish_succeeded"
    WP_PUBLISH_FAILED = "wp_publish_failed"

    @property
    def label(self) -> str:
        return CE_EVENT_LABELS[self]


CE_EVENT_LABELS: Dict[CeEventType, str] = {
    CeEventType.IMAGE_INGESTED: "Image ingested",
    CeEventType.AUTHORSHIP_CLASSIFIED: "Authorship classified",
    CeEventType.USER_DECLARATION_PROMPTED: "User declaration prompted",
    CeEventType.USER_DECLARATION_SET: "User declaration set",
    CeEventType.METADATA_EMBED_REQUESTED: "Metadata embed requested",
    CeEventType.METADATA_EMBED_COMPLETED: "Metadata embed completed",
    CeEventType.EXPORT_VALIDATED: "Export validated",
    CeEventType.EXPORT_BLOCKED: "Export blocked",
    CeEventType.EXPORT_COMPLETED: "Export completed",
    CeEventType.CASE_STUDY_GENERATED: "Case study generated",
    CeEventType.WP_PUBLISH_ATTEMPTED: "WordPress publish attempted",
    CeEventType.WP_PUBLISH_SUCCEEDED: "WordPress publish succeeded",
    CeEventType.WP_PUBLISH_FAILED: "WordPress publish failed",
}


class BaseEvent(BaseModel):
    """Base event payload structure."""

    model_config = ConfigDict(extra="allow")

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = Field(default_factory=dict)


class AuthorshipClassifiedEvent(BaseEvent):
    """Status assigned at (re-)ingest."""

    status: str
    reason_codes: List[ReasonCode]
    needs_user_declaration: bool = False
    synthetic_confidence: Optional[float] = None


class UserDeclarationEvent(BaseEvent):
    """User answered the creator declaration prompt."""

    declared: bool
    previous_status: str
    new_status: str
    reason_codes: List[ReasonCode]


class ExportGuardEvent(BaseEvent):
    """Export guard verdict for one asset."""

    export_kind: str
    authorship_status: str
    allowed: bool
    reason_codes: List[ReasonCode]
    filtered_fields: List[str] = Field(default_factory=list)


class ExportOutcomeEvent(BaseEvent):
    """Export pipeline reported how a validated export ended."""

    status: str
    reason_codes: List[ReasonCode] = Field(default_factory=list)
    result_refs: Dict[str, Any] = Field(default_factory=dict)


class AuditEvent(BaseModel):
    """One append-only audit trail entry."""

    model_config = ConfigDict(frozen=True)

    event_type: CeEventType
    user_id: Optional[str] = None
    project_id: Optional[str] = None
    image_id: Optional[str] = None
    export_id: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_payload(
        cls,
        event_type: CeEventType,
        payload: BaseEvent,
        **ids: Optional[str],
    ) -> "AuditEvent":
        """Build an entry whose details are the JSON form of ``payload``."""
        return cls(
            event_type=event_type,
            details=payload.model_dump(mode="json"),
            **ids,
        )
