"""
Audit logger contract for governance records.

The engine itself never logs audit events; it returns data. Callers (the
governance service, export pipelines) record outcomes through an
AuditLogger:

- the event log is append-only
- the image state holds each image's current authorship status and evidence
- export records track each export attempt from started to a terminal status

Durable storage implements the contract elsewhere. InMemoryAuditLogger is
the reference implementation used by the API and tests.
"""

import uuid
from abc import ABC, abstractmethod
from collections import OrderedDict, deque
from typing import Deque, List, Optional

from authorship_governance.kernel.events.event_types import AuditEvent
from authorship_governance.kernel.events.records import (
    ExportRecord,
    ExportRecordInput,
    ExportStatusUpdate,
    ImageState,
    ImageStateInput,
    RecordNotFoundError,
)
from authorship_governance.logging_config import get_logger

logger = get_logger(__name__)


class AuditLogger(ABC):
    """
    Governance record store.

    Implementations must never update or delete recorded events.
    """

    @abstractmethod
    async def log_event(self, event: AuditEvent) -> None:
        """Append an event to the audit trail."""

    @abstractmethod
    async def upsert_image_state(self, state: ImageStateInput) -> str:
        """Create or replace the image's authorship state; returns the image id."""

    @abstractmethod
    async def get_image_state(self, image_id: str) -> ImageState:
        """Current state of one image. Raises RecordNotFoundError."""

    @abstractmethod
    async def create_export_record(self, record: ExportRecordInput) -> str:
        """Open an export record in status ``started``; returns its id."""

    @abstractmethod
    async def update_export_status(self, update: ExportStatusUpdate) -> ExportRecord:
        """
        Move an export record to a new status.

        Raises RecordNotFoundError or ExportTransitionError.
        """

    @abstractmethod
    async def get_export_record(self, export_id: str) -> ExportRecord:
        """Raises RecordNotFoundError."""

    @abstractmethod
    async def get_image_audit_trail(self, image_id: str) -> List[AuditEvent]:
        """Events recorded for one image, oldest first."""

    @abstractmethod
    async def get_project_audit_trail(
        self,
        project_id: str,
        limit: Optional[int] = 100,
    ) -> List[AuditEvent]:
        """Most recent events for a project, newest first."""


class InMemoryAuditLogger(AuditLogger):
    """
    Process-local, bounded record store.

    Keeps at most ``max_events`` events and ``max_records`` image states and
    export records each; the oldest are evicted first. Every event is also
    mirrored to the application log so it reaches the log aggregator even
    after eviction.
    """

    def __init__(self, max_events: int = 10_000, max_records: int = 5_000) -> None:
        self._events: Deque[AuditEvent] = deque(maxlen=max_events)
        self._images: "OrderedDict[str, ImageState]" = OrderedDict()
        self._exports: "OrderedDict[str, ExportRecord]" = OrderedDict()
        self._max_records = max_records

    def _remember(self, table: OrderedDict, key: str, value) -> None:
        table[key] = value
        table.move_to_end(key)
        while len(table) > self._max_records:
            table.popitem(last=False)

    async def log_event(self, event: AuditEvent) -> None:
        self._events.append(event)
        logger.info(
            "Audit event: %s",
            event.event_type.label,
            extra={
                "event_type": event.event_type,
                "image_id": event.image_id,
                "project_id": event.project_id,
                "export_id": event.export_id,
                "reason_codes": event.details.get("reason_codes"),
            },
        )

    async def upsert_image_state(self, state: ImageStateInput) -> str:
        self._remember(self._images, state.image_id, ImageState(**state.model_dump()))
        return state.image_id

    async def get_image_state(self, image_id: str) -> ImageState:
        try:
            return self._images[image_id]
        except KeyError:
            raise RecordNotFoundError(f"Unknown image: {image_id}") from None

    async def create_export_record(self, record: ExportRecordInput) -> str:
        export_id = str(uuid.uuid4())
        self._remember(self._exports, export_id, ExportRecord(id=export_id, **record.model_dump()))
        return export_id

    async def update_export_status(self, update: ExportStatusUpdate) -> ExportRecord:
        current = await self.get_export_record(update.export_id)
        updated = current.apply(update)
        self._remember(self._exports, update.export_id, updated)
        return updated

    async def get_export_record(self, export_id: str) -> ExportRecord:
        try:
            return self._exports[export_id]
        except KeyError:
            raise RecordNotFoundError(f"Unknown export: {export_id}") from None

    async def get_image_audit_trail(self, image_id: str) -> List[AuditEvent]:
        return [e for e in self._events if e.image_id == image_id]

    async def get_project_audit_trail(
        self,
        project_id: str,
        limit: Optional[int] = 100,
    ) -> List[AuditEvent]:
        events = [e for e in reversed(self._events) if e.project_id == project_id]
        return events[:limit] if limit is not None else events

    def __len__(self) -> int:
        return len(self._events)
