"""
Authorship Governance Engine

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from authorship_governance.api.middleware.request_id import RequestIdMiddleware
from authorship_governance.api.v1 import router as api_v1_router
from authorship_governance.config import get_settings
from authorship_governance.logging_config import configure_logging, get_logger
from authorship_governance.schemas.common import ErrorResponse, HealthResponse

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Configure logging on startup."""
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )
    logger.info("Starting %s v%s", settings.project_name, settings.version)

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.project_name,
    description="""
    Authorship Governance Engine

    Decides what can truthfully be claimed about who created an image, and
    blocks any export whose claims exceed the evidence.

    ## Invariants

    1. Exactly one authorship status per image, assigned at ingest
    2. A user declaration never produces VERIFIED_ORIGINAL
    3. A user declaration never alters SYNTHETIC_AI
    4. Permissions derive from status alone; unknown status fails closed
    5. A blocked export is a correct outcome, not an error
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# add_middleware stacks innermost-first: CORS added last wraps everything
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _request_id_headers(request: Request) -> dict:
    req_id = getattr(request.state, "request_id", None)
    return {"X-Request-ID": req_id} if req_id else {}


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=_request_id_headers(request),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
):
    """Handle request validation errors."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })
    content = ErrorResponse(
        detail="Validation error",
        errors=errors,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=content.model_dump(exclude_none=True),
        headers=_request_id_headers(request),
    )


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
):
    """Unexpected exceptions are logged and returned as an opaque 500."""
    logger.exception("Unhandled exception: %s", exc)
    req_id = getattr(request.state, "request_id", None)
    if settings.debug:
        content = {
            "detail": str(exc),
            "type": type(exc).__name__,
            "request_id": req_id,
        }
    else:
        content = ErrorResponse(detail="Internal server error", request_id=req_id).model_dump()
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_request_id_headers(request),
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check application health."""
    return HealthResponse(
        status="ok",
        version=settings.version,
        engine_version=settings.engine_version,
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs" if settings.debug else "disabled",
        "api": {
            "v1": settings.api_v1_prefix,
        },
    }


app.include_router(
    api_v1_router,
    prefix=settings.api_v1_prefix,
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "authorship_governance.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
