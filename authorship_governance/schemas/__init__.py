"""
Pydantic schemas for API request/response validation.
"""

from authorship_governance.schemas.common import ErrorResponse, HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
]
