"""
Governance Service - runs the authorship engine and records the outcome.

The engine returns data and never logs. This service is the seam where
ingest, declaration and export flows call the engine and write to the
AuditLogger: the image state that later export checks read back, the export
record lifecycle, and an audit event for every outcome, pass or block.
"""

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from authorship_governance.engines.authorship import (
    AuthorshipStatus,
    ClassificationResult,
    ExportGuard,
    ExportPayload,
    ExportValidationResult,
    ImageSignals,
    ReasonCode,
    apply_user_declaration,
    classify,
)
from authorship_governance.kernel.events import (
    AuditEvent,
    AuditLogger,
    AuthorshipClassifiedEvent,
    BaseEvent,
    CeEventType,
    ExportGuardEvent,
    ExportOutcomeEvent,
    ExportRecord,
    ExportRecordInput,
    ExportStatus,
    ExportStatusUpdate,
    ImageStateInput,
    RecordNotFoundError,
    UserDeclarationEvent,
)
from authorship_governance.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ExportCheck:
    """Guard verdict plus the export record it was filed under."""
    export_id: str
    result: ExportValidationResult


def payload_hash(payload: ExportPayload) -> str:
    """Stable digest of what an export intends to write."""
    return hashlib.sha256(payload.model_dump_json().encode("utf-8")).hexdigest()


class AuthorshipGovernanceService:
    """
    Usage:
        service = AuthorshipGovernanceService(audit_logger)
        result = await service.ingest("img-1", signals, "Jane Doe", user_id="u-1")
        check = await service.guard_export(payload, image_id="img-1")
        if not check.result.allowed:
            ...surface check.result.violations to the operator
        else:
            ...write, then await service.finish_export(check.export_id, succeeded=True)
    """

    def __init__(self, audit_logger: AuditLogger):
        self.audit_logger = audit_logger

    async def ingest(
        self,
        image_id: Optional[str],
        signals: ImageSignals,
        declared_creator_name: Optional[str] = None,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
        sha256: Optional[str] = None,
    ) -> ClassificationResult:
        """
        Classify on (re-)ingest and record the assigned status.

        The image state is only stored when ``image_id`` is given; there is
        nothing to key it by otherwise.
        """
        result = classify(signals, declared_creator_name)
        ids = {"user_id": user_id, "project_id": project_id, "image_id": image_id}

        if image_id:
            await self.audit_logger.upsert_image_state(ImageStateInput(
                image_id=image_id,
                user_id=user_id,
                project_id=project_id,
                sha256=sha256,
                authorship_status=result.status,
                authorship_evidence=result.evidence,
                synthetic_confidence=signals.synthetic_confidence,
            ))

        await self.audit_logger.log_event(AuditEvent.from_payload(
            CeEventType.AUTHORSHIP_CLASSIFIED,
            AuthorshipClassifiedEvent(
                status=result.status.value,
                reason_codes=list(result.evidence.reason_codes),
                needs_user_declaration=result.needs_user_declaration,
                synthetic_confidence=signals.synthetic_confidence,
            ),
            **ids,
        ))

        if result.needs_user_declaration:
            await self.audit_logger.log_event(AuditEvent.from_payload(
                CeEventType.USER_DECLARATION_PROMPTED,
                BaseEvent(),
                **ids,
            ))

        logger.info(
            "Authorship classified",
            extra={"image_id": image_id, "authorship_status": result.status},
        )
        return result

    async def declare(
        self,
        image_id: Optional[str],
        current_status: AuthorshipStatus,
        declared: bool,
        signals: ImageSignals,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
    ) -> ClassificationResult:
        """Apply the user's declaration, store the new state and record the transition."""
        result = apply_user_declaration(current_status, declared, signals)

        if image_id:
            try:
                previous = await self.audit_logger.get_image_state(image_id)
            except RecordNotFoundError:
                previous = None
            await self.audit_logger.upsert_image_state(ImageStateInput(
                image_id=image_id,
                user_id=user_id or (previous.user_id if previous else None),
                project_id=project_id or (previous.project_id if previous else None),
                sha256=previous.sha256 if previous else None,
                source_type=previous.source_type if previous else "upload",
                authorship_status=result.status,
                authorship_evidence=result.evidence,
                user_declared=result.status == AuthorshipStatus.DECLARED_BY_USER,
                synthetic_confidence=signals.synthetic_confidence,
            ))

        await self.audit_logger.log_event(AuditEvent.from_payload(
            CeEventType.USER_DECLARATION_SET,
            UserDeclarationEvent(
                declared=declared,
                previous_status=AuthorshipStatus(current_status).value,
                new_status=result.status.value,
                reason_codes=list(result.evidence.reason_codes),
            ),
            user_id=user_id,
            project_id=project_id,
            image_id=image_id,
        ))
        return result

    async def guard_export(
        self,
        payload: ExportPayload,
        image_id: Optional[str] = None,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
    ) -> ExportCheck:
        """
        Open an export record, run the export guard, and file the verdict.

        The record ends up ``validated`` or ``blocked`` and the matching
        EXPORT_VALIDATED / EXPORT_BLOCKED event is logged. A block is
        returned, not raised, and is terminal for that record.
        """
        export_id = await self.audit_logger.create_export_record(ExportRecordInput(
            user_id=user_id,
            project_id=project_id,
            export_type=payload.export_kind.value,
            payload_hash=payload_hash(payload),
        ))
        result = ExportGuard.validate_export(payload)

        await self.audit_logger.update_export_status(ExportStatusUpdate(
            export_id=export_id,
            status=ExportStatus.VALIDATED if result.allowed else ExportStatus.BLOCKED,
            reason_codes=result.reason_codes,
        ))

        event_type = CeEventType.EXPORT_VALIDATED if result.allowed else CeEventType.EXPORT_BLOCKED
        await self.audit_logger.log_event(AuditEvent.from_payload(
            event_type,
            ExportGuardEvent(
                export_kind=payload.export_kind.value,
                authorship_status=payload.authorship_status,
                allowed=result.allowed,
                reason_codes=result.reason_codes,
                filtered_fields=result.filtered_fields,
            ),
            user_id=user_id,
            project_id=project_id,
            image_id=image_id,
            export_id=export_id,
        ))

        if not result.allowed:
            logger.warning(
                "Export blocked",
                extra={
                    "image_id": image_id,
                    "export_id": export_id,
                    "reason_codes": result.reason_codes,
                },
            )
        return ExportCheck(export_id=export_id, result=result)

    async def finish_export(
        self,
        export_id: str,
        succeeded: bool,
        reason_codes: Sequence[ReasonCode] = (),
        result_refs: Optional[Dict[str, Any]] = None,
        image_id: Optional[str] = None,
    ) -> ExportRecord:
        """
        Close a validated export as ``completed`` or ``failed``.

        Raises RecordNotFoundError for an unknown export and
        ExportTransitionError when the record was blocked or already closed.
        """
        status = ExportStatus.COMPLETED if succeeded else ExportStatus.FAILED
        record = await self.audit_logger.update_export_status(ExportStatusUpdate(
            export_id=export_id,
            status=status,
            reason_codes=list(reason_codes),
            result_refs=result_refs or {},
        ))

        await self.audit_logger.log_event(AuditEvent.from_payload(
            CeEventType.EXPORT_COMPLETED,
            ExportOutcomeEvent(
                status=status.value,
                reason_codes=list(reason_codes),
                result_refs=result_refs or {},
            ),
            user_id=record.user_id,
            project_id=record.project_id,
            image_id=image_id,
            export_id=export_id,
        ))
        return record
