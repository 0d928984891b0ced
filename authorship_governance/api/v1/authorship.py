"""
Authorship API - exposes the authorship engine via REST.

Endpoints:
  POST /authorship/classify
  POST /authorship/declare
  POST /authorship/validate-export
  POST /authorship/validate-text
  GET  /authorship/permissions/{authorship_status}
  POST /authorship/provenance
  POST /authorship/filter-metadata
  GET  /authorship/reason-codes
  GET  /authorship/images/{image_id}
  GET  /authorship/exports/{export_id}
  POST /authorship/exports/{export_id}/finish
  GET  /authorship/audit/image/{image_id}
  GET  /authorship/audit/project/{project_id}

Export checks take the status from the request. Image state and export
records are kept by the AuditLogger for the pipeline and operators to read
back. Blocked exports are 200 responses with allowed=false.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from authorship_governance.api.deps import AuditTrail, GovernanceService
from authorship_governance.engines.authorship import (
    REASON_CODE_LABELS,
    AuthorshipStatus,
    ClassificationResult,
    ExportPayload,
    allowed_phrases,
    build_provenance_block,
    coerce_status,
    filter_metadata,
    permissions_for,
    prompt_instruction,
    validate_batch,
)
from authorship_governance.kernel.events import (
    AuditEvent,
    ExportRecord,
    ExportTransitionError,
    ImageState,
    RecordNotFoundError,
)
from authorship_governance.schemas.authorship import (
    AuditEventOut,
    ClassifyRequest,
    DeclareRequest,
    DeclareResponse,
    ExportItemResult,
    FilterMetadataRequest,
    FilterMetadataResponse,
    FinishExportRequest,
    PermissionsResponse,
    ProvenanceRequest,
    ProvenanceResponse,
    ReasonCodeOut,
    ValidateExportRequest,
    ValidateExportResponse,
    ValidateTextRequest,
    ValidateTextResponse,
    ViolationOut,
)

router = APIRouter()


def _event_out(event: AuditEvent) -> AuditEventOut:
    return AuditEventOut(
        event_type=event.event_type.value,
        label=event.event_type.label,
        user_id=event.user_id,
        project_id=event.project_id,
        image_id=event.image_id,
        export_id=event.export_id,
        details=event.details,
        created_at=event.created_at,
    )


@router.post("/classify", response_model=ClassificationResult)
async def classify_image(body: ClassifyRequest, service: GovernanceService):
    """Classify one image from its extracted signals."""
    return await service.ingest(
        image_id=body.image_id,
        signals=body.signals,
        declared_creator_name=body.declared_creator_name,
        user_id=body.user_id,
        project_id=body.project_id,
        sha256=body.sha256,
    )


@router.post("/declare", response_model=DeclareResponse)
async def declare_authorship(body: DeclareRequest, service: GovernanceService):
    """
    Record the user's answer to the creator declaration prompt.

    Synthetic images stay synthetic. This is intentional.
    """
    result = await service.declare(
        image_id=body.image_id,
        current_status=body.current_status,
        declared=body.declared,
        signals=body.signals,
        user_id=body.user_id,
        project_id=body.project_id,
    )

    if result.status == AuthorshipStatus.SYNTHETIC_AI:
        message = "Synthetic images cannot be declared as original. Status remains SYNTHETIC_AI."
    elif result.status == AuthorshipStatus.DECLARED_BY_USER:
        message = "Declared as creator. Status: DECLARED_BY_USER (not machine-verified)."
    elif body.current_status == AuthorshipStatus.UNVERIFIED:
        message = "Declaration declined. Status remains UNVERIFIED."
    else:
        message = f"Declaration declined. Status downgraded from {body.current_status.value} to UNVERIFIED."

    return DeclareResponse(result=result, message=message)


@router.post("/validate-export", response_model=ValidateExportResponse)
async def validate_export(body: ValidateExportRequest, service: GovernanceService):
    """Run the export guard for every asset in the batch."""
    results: List[ExportItemResult] = []

    for item in body.items:
        payload = ExportPayload(
            authorship_status=item.authorship_status,
            export_kind=body.export_kind,
            metadata=item.metadata,
            text_content=body.text_content,
            claimed_creator=item.claimed_creator,
            setting_copyright=item.setting_copyright,
        )
        check = await service.guard_export(
            payload,
            image_id=item.asset_id,
            user_id=body.user_id,
            project_id=body.project_id,
        )
        results.append(ExportItemResult(
            asset_id=item.asset_id,
            export_id=check.export_id,
            authorship_status=item.authorship_status,
            allowed=check.result.allowed,
            reason_codes=check.result.reason_codes,
            violations=check.result.violations,
            filtered_fields=check.result.filtered_fields,
        ))

    all_allowed = all(r.allowed for r in results)
    return ValidateExportResponse(
        all_allowed=all_allowed,
        results=results,
        message=(
            "All assets passed authorship validation."
            if all_allowed
            else "Export blocked for one or more assets. This refusal is intentional and correct."
        ),
    )


@router.post("/validate-text", response_model=ValidateTextResponse)
async def validate_text(body: ValidateTextRequest):
    """Check generated text items against the language rules of a status."""
    result = validate_batch(body.texts, body.authorship_status)
    return ValidateTextResponse(
        valid=result.valid,
        violations=[
            ViolationOut(
                item_index=v.item_index,
                pattern=v.pattern,
                matched_text=v.matched_text,
                position=v.position,
                reason_code=v.reason_code,
                message=v.message,
            )
            for v in result.violations
        ],
    )


@router.get("/permissions/{authorship_status}", response_model=PermissionsResponse)
async def get_permissions(authorship_status: str):
    """Metadata permissions and phrasing guidance for a status."""
    return PermissionsResponse(
        authorship_status=authorship_status,
        recognized=coerce_status(authorship_status) is not None,
        permissions=permissions_for(authorship_status),
        allowed_phrases=allowed_phrases(authorship_status),
        prompt_instruction=prompt_instruction(authorship_status),
    )


@router.post("/provenance", response_model=ProvenanceResponse)
async def build_provenance(body: ProvenanceRequest):
    """AuthorshipIntegrity tag map for the metadata writer."""
    tags = build_provenance_block(
        body.authorship_status,
        declared_author=body.declared_author,
        human_role=body.human_role,
        generation_tool=body.generation_tool,
        classified_at=body.classified_at,
    )
    return ProvenanceResponse(tags=tags)


@router.post("/filter-metadata", response_model=FilterMetadataResponse)
async def sanitize_metadata(body: FilterMetadataRequest):
    """Strip fields the status does not permit before writing."""
    fields, removed = filter_metadata(
        body.fields,
        body.authorship_status,
        declared_creator=body.declared_creator,
    )
    return FilterMetadataResponse(fields=fields, removed_fields=removed)


@router.get("/reason-codes", response_model=List[ReasonCodeOut])
async def list_reason_codes():
    return [ReasonCodeOut(code=code, label=label) for code, label in REASON_CODE_LABELS.items()]


@router.get("/audit/image/{image_id}", response_model=List[AuditEventOut])
async def get_image_audit_trail(image_id: str, audit_trail: AuditTrail):
    events = await audit_trail.get_image_audit_trail(image_id)
    return [_event_out(e) for e in events]


@router.get("/audit/project/{project_id}", response_model=List[AuditEventOut])
async def get_project_audit_trail(
    project_id: str,
    audit_trail: AuditTrail,
    limit: int = Query(100, ge=1, le=1000),
):
    events = await audit_trail.get_project_audit_trail(project_id, limit=limit)
    return [_event_out(e) for e in events]


@router.get("/images/{image_id}", response_model=ImageState)
async def get_image_state(image_id: str, audit_trail: AuditTrail):
    """Current authorship state of an image."""
    try:
        return await audit_trail.get_image_state(image_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")


@router.get("/exports/{export_id}", response_model=ExportRecord)
async def get_export_record(export_id: str, audit_trail: AuditTrail):
    try:
        return await audit_trail.get_export_record(export_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Export not found")


@router.post("/exports/{export_id}/finish", response_model=ExportRecord)
async def finish_export(export_id: str, body: FinishExportRequest, service: GovernanceService):
    """
    Close a validated export as completed or failed.

    Blocked exports are terminal; finishing one is a 409.
    """
    try:
        return await service.finish_export(
            export_id,
            succeeded=body.succeeded,
            reason_codes=body.reason_codes,
            result_refs=body.result_refs,
            image_id=body.image_id,
        )
    except RecordNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Export not found")
    except ExportTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
