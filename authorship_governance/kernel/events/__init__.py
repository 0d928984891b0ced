"""
Governance audit events.

Provides the audit logger contract, its event payloads, and the image state
and export records it maintains.
"""

from authorship_governance.kernel.events.audit_logger import AuditLogger, InMemoryAuditLogger
from authorship_governance.kernel.events.event_types import (
    AuditEvent,
    AuthorshipClassifiedEvent,
    BaseEvent,
    CE_EVENT_LABELS,
    CeEventType,
    ExportGuardEvent,
    ExportOutcomeEvent,
    UserDeclarationEvent,
)
from authorship_governance.kernel.events.records import (
    EXPORT_TRANSITIONS,
    ExportRecord,
    ExportRecordInput,
    ExportStatus,
    ExportStatusUpdate,
    ExportTransitionError,
    ImageState,
    ImageStateInput,
    RecordNotFoundError,
)

__all__ = [
    "AuditLogger",
    "InMemoryAuditLogger",
    "AuditEvent",
    "AuthorshipClassifiedEvent",
    "BaseEvent",
    "CE_EVENT_LABELS",
    "CeEventType",
    "ExportGuardEvent",
    "ExportOutcomeEvent",
    "UserDeclarationEvent",
    "EXPORT_TRANSITIONS",
    "ExportRecord",
    "ExportRecordInput",
    "ExportStatus",
    "ExportStatusUpdate",
    "ExportTransitionError",
    "ImageState",
    "ImageStateInput",
    "RecordNotFoundError",
]
