"""
OneVote Backend Application

A single-use voting widget: one vote per voter identifier, live tallies.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from api.deps import get_database_handle, get_vote_ledger
from api.v1 import router as api_v1_router
from core.config import settings
from core.events import create_start_app_handler, create_stop_app_handler
from core.exceptions import CandidateNotFound, DuplicateVote, StoreUnavailable, VotingError
from core.middleware import REQUEST_ID_HEADER, RequestIDMiddleware, SecurityHeadersMiddleware
from db.session import Database
from services.vote_ledger import VoteLedger

logger = structlog.get_logger(__name__)

APP_VERSION = "1.0.0"

# Ledger error -> HTTP status. "Already voted" is a distinct, user-facing state.
VOTING_ERROR_STATUS: dict[type[VotingError], int] = {
    DuplicateVote: status.HTTP_409_CONFLICT,
    CandidateNotFound: status.HTTP_404_NOT_FOUND,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    await create_start_app_handler(app)()
    yield
    # Shutdown
    await create_stop_app_handler(app)()


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title=settings.APP_NAME,
        description="Single-use voting widget backend",
        version=APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Add middleware (order matters - processed in reverse)
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )
    application.add_middleware(GZipMiddleware, minimum_size=1000)

    # Include routers
    application.include_router(api_v1_router, prefix="/api/v1")

    @application.exception_handler(VotingError)
    async def voting_exception_handler(request: Request, exc: VotingError) -> JSONResponse:
        """Turn ledger failures into a structured body the client can branch on."""
        status_code = VOTING_ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        detail = str(exc) if isinstance(exc, CandidateNotFound) else exc.message
        return JSONResponse(
            status_code=status_code,
            content={"detail": detail, "code": exc.code},
        )

    # Add global exception handler to ensure CORS headers are present on error responses
    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Global exception handler to catch unhandled exceptions.

        Never lets an unexpected failure look like a successful vote: the
        client gets a generic retryable error.
        """
        logger.exception(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=500,
            content={
                "detail": "An internal server error occurred. Please try again later.",
                "code": "internal_error",
                "error_type": type(exc).__name__ if settings.DEBUG else "InternalServerError",
            },
        )

    return application


app = create_application()


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for load balancers and monitoring."""
    return {"status": "healthy", "service": "onevote-api"}


@app.get("/health/services", tags=["Health"])
async def service_status(
    database: Database = Depends(get_database_handle),
    ledger: VoteLedger = Depends(get_vote_ledger),
) -> dict:
    """
    Store status endpoint for deployment validation.

    Distinguishes a store failure from a ballot that is legitimately empty,
    which the degraded read endpoints cannot.
    """
    reachable = await database.ping() if database.is_configured else False
    summary = await ledger.vote_summary()

    return {
        "status": "healthy" if reachable else "degraded",
        "services": {
            "database": {
                "configured": database.is_configured,
                "reachable": reachable,
            },
        },
        "ledger": summary.to_dict(),
    }


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "Documentation disabled in production",
    }
