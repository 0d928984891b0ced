"""
Request correlation for governance decisions.

Each request gets an id that is echoed back in ``X-Request-ID`` and stamped
on every log line written while handling it, so a blocked export reported
by an operator can be traced to its verdict. Responses also carry the
engine version that produced the verdict.
"""

import re
import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from authorship_governance.config import get_settings
from authorship_governance.logging_config import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
ENGINE_VERSION_HEADER = "X-Authorship-Engine-Version"

# Caller-supplied ids end up in logs; anything else is replaced
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:\-]{1,128}$")


def resolve_request_id(header_value: Optional[str]) -> str:
    """Use the caller's id when it is safe to log, otherwise mint one."""
    if header_value and _VALID_REQUEST_ID.match(header_value):
        return header_value
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            start = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000

            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[ENGINE_VERSION_HEADER] = settings.engine_version

            # Engine calls are pure and in-memory
            if elapsed_ms > settings.slow_request_ms:
                logger.warning(
                    "Slow governance request %s %s took %.1f ms",
                    request.method,
                    request.url.path,
                    elapsed_ms,
                )
            return response
        finally:
            request_id_var.reset(token)
