"""
API v1 routes.
"""

from fastapi import APIRouter

from authorship_governance.api.v1 import authorship

router = APIRouter()

router.include_router(authorship.router, prefix="/authorship", tags=["Authorship"])
