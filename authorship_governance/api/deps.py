"""
FastAPI dependencies for the audit trail and governance service.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from authorship_governance.config import get_settings
from authorship_governance.engines.audit import AuthorshipGovernanceService
from authorship_governance.kernel.events import AuditLogger, InMemoryAuditLogger


@lru_cache
def get_audit_logger() -> AuditLogger:
    """Process-wide audit logger. Override in deployments with durable storage."""
    settings = get_settings()
    return InMemoryAuditLogger(
        max_events=settings.audit_buffer_size,
        max_records=settings.audit_record_limit,
    )


def get_governance_service(
    audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> AuthorshipGovernanceService:
    return AuthorshipGovernanceService(audit_logger)


AuditTrail = Annotated[AuditLogger, Depends(get_audit_logger)]
GovernanceService = Annotated[AuthorshipGovernanceService, Depends(get_governance_service)]
