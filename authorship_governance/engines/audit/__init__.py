"""
Audit Engine - governance flows that record every authorship decision.
"""

from authorship_governance.engines.audit.governance_service import (
    AuthorshipGovernanceService,
    ExportCheck,
)

__all__ = [
    "AuthorshipGovernanceService",
    "ExportCheck",
]
