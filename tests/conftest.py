"""
Pytest fixtures for authorship governance tests.
"""

from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from authorship_governance.api.deps import get_audit_logger
from authorship_governance.engines.audit import AuthorshipGovernanceService
from authorship_governance.engines.authorship import ImageSignals
from authorship_governance.kernel.events import InMemoryAuditLogger
from authorship_governance.main import app


@pytest.fixture
def make_signals() -> Callable[..., ImageSignals]:
    """Factory for ImageSignals: no EXIF, no AI signatures unless overridden."""

    def _make(**overrides) -> ImageSignals:
        fields = {"exif_present": False, "ai_signatures_found": []}
        fields.update(overrides)
        return ImageSignals(**fields)

    return _make


@pytest.fixture
def audit_logger() -> InMemoryAuditLogger:
    return InMemoryAuditLogger()


@pytest.fixture
def service(audit_logger: InMemoryAuditLogger) -> AuthorshipGovernanceService:
    return AuthorshipGovernanceService(audit_logger)


@pytest_asyncio.fixture
async def client(audit_logger: InMemoryAuditLogger) -> AsyncGenerator[AsyncClient, None]:
    """Async client against the app with a fresh audit trail per test."""
    app.dependency_overrides[get_audit_logger] = lambda: audit_logger
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_audit_logger, None)
