"""
Pydantic schemas for the authorship API.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from authorship_governance.engines.authorship import (
    AuthorshipStatus,
    ClassificationResult,
    ExportKind,
    HumanRole,
    ImageSignals,
    MetadataPermissions,
    ReasonCode,
)


class ClassifyRequest(BaseModel):
    """Signals for one image plus the user's profile creator name."""
    image_id: Optional[str] = None
    project_id: Optional[str] = None
    user_id: Optional[str] = None
    signals: ImageSignals
    declared_creator_name: Optional[str] = None
    sha256: Optional[str] = Field(None, pattern=r"^[0-9a-f]{64}$")


class DeclareRequest(BaseModel):
    image_id: Optional[str] = None
    project_id: Optional[str] = None
    user_id: Optional[str] = None
    current_status: AuthorshipStatus
    declared: bool
    signals: ImageSignals = Field(default_factory=ImageSignals)


class DeclareResponse(BaseModel):
    result: ClassificationResult
    message: str


class ExportItem(BaseModel):
    """One asset's proposed export."""
    asset_id: str
    authorship_status: str = AuthorshipStatus.UNVERIFIED.value
    metadata: Optional[Dict[str, Any]] = None
    claimed_creator: Optional[str] = None
    setting_copyright: bool = False


class ValidateExportRequest(BaseModel):
    """
    Batch export check. text_content applies to every asset, the way a
    case study or post describes all of its images at once.
    """
    items: List[ExportItem] = Field(..., min_length=1)
    export_kind: ExportKind = ExportKind.METADATA
    text_content: List[str] = Field(default_factory=list)
    project_id: Optional[str] = None
    user_id: Optional[str] = None


class ExportItemResult(BaseModel):
    asset_id: str
    export_id: str
    authorship_status: str
    allowed: bool
    reason_codes: List[ReasonCode]
    violations: List[str]
    filtered_fields: List[str]


class ValidateExportResponse(BaseModel):
    all_allowed: bool
    results: List[ExportItemResult]
    message: str


class ValidateTextRequest(BaseModel):
    authorship_status: str
    texts: List[str] = Field(..., min_length=1)


class ViolationOut(BaseModel):
    item_index: int
    pattern: str
    matched_text: str
    position: int
    reason_code: ReasonCode
    message: str


class ValidateTextResponse(BaseModel):
    valid: bool
    violations: List[ViolationOut]


class PermissionsResponse(BaseModel):
    authorship_status: str
    recognized: bool
    permissions: MetadataPermissions
    allowed_phrases: List[str]
    prompt_instruction: str


class ProvenanceRequest(BaseModel):
    authorship_status: str
    declared_author: Optional[str] = None
    human_role: Optional[HumanRole] = None
    generation_tool: Optional[str] = None
    classified_at: Optional[datetime] = None


class ProvenanceResponse(BaseModel):
    tags: Dict[str, str]


class FilterMetadataRequest(BaseModel):
    authorship_status: str
    fields: Dict[str, Any]
    declared_creator: Optional[str] = None


class FilterMetadataResponse(BaseModel):
    fields: Dict[str, Any]
    removed_fields: List[str]


class ReasonCodeOut(BaseModel):
    code: ReasonCode
    label: str


class AuditEventOut(BaseModel):
    event_type: str
    label: str
    user_id: Optional[str] = None
    project_id: Optional[str] = None
    image_id: Optional[str] = None
    export_id: Optional[str] = None
    details: Dict[str, Any]
    created_at: datetime


class FinishExportRequest(BaseModel):
    """Export pipeline reports how a validated export ended."""
    succeeded: bool
    image_id: Optional[str] = None
    reason_codes: List[ReasonCode] = Field(default_factory=list)
    result_refs: Dict[str, Any] = Field(default_factory=dict)
