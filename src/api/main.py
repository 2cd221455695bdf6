"""
FastAPI application entrypoint with middleware, lifecycle, and error handling.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import Environment, get_settings
from ..logger import setup_logging
from ..services.exceptions import ServiceError
from .dependencies import lifespan_dependencies
from .routes import health_router, posts_router, users_router
from .schemas import ErrorDetail, ErrorResponse

LOGGER = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Application Lifespan
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown of shared resources.
    """
    settings = get_settings()
    setup_logging(settings)

    LOGGER.info(
        "Starting %s v%s in %s environment",
        settings.app.name,
        settings.app.version,
        settings.app.environment.value,
    )

    async with lifespan_dependencies(settings):
        yield

    LOGGER.info("Application shutdown complete.")


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> JSONResponse:
    """Render the uniform error body."""
    body = ErrorResponse(
        status_code=status_code,
        error=error,
        message=message,
        details=details or [],
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


# -----------------------------------------------------------------------------
# Application Factory
# -----------------------------------------------------------------------------


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fully configured FastAPI instance with all routes and middleware.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Users and posts CRUD service",
        docs_url="/docs" if settings.app.debug else None,
        redoc_url="/redoc" if settings.app.debug else None,
        openapi_url="/openapi.json" if settings.app.debug else None,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------

    allowed_origins = ["*"] if settings.app.environment == Environment.LOCAL else []
    if settings.app.environment in (Environment.DEVELOPMENT, Environment.STAGING):
        allowed_origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # -------------------------------------------------------------------------
    # Request Logging Middleware
    # -------------------------------------------------------------------------

    @app.middleware("http")
    async def request_logging_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Log request details and add request ID header."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        start_time = time.perf_counter()

        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:
            LOGGER.exception(
                "Unhandled exception for %s %s [%s]",
                request.method,
                request.url.path,
                request_id,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000

        LOGGER.info(
            "%s %s -> %d (%.2fms) [%s]",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )

        response.headers["X-Request-ID"] = request_id
        return response

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with consistent error format."""
        return _error_response(
            request,
            exc.status_code,
            exc.__class__.__name__,
            str(exc.detail),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Reject malformed input with 400 and one detail per offending field."""
        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error.get("loc", [])),
                message=error.get("msg", "Validation error"),
                code=error.get("type"),
            )
            for error in exc.errors()
        ]
        return _error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "ValidationError",
            "Request validation failed",
            details,
        )

    @app.exception_handler(ServiceError)
    async def service_exception_handler(
        request: Request,
        exc: ServiceError,
    ) -> JSONResponse:
        """Map business-rule failures (not found, conflict) to their status codes."""
        return _error_response(
            request,
            exc.status_code,
            exc.__class__.__name__.removesuffix("Error") or "ServiceError",
            exc.message,
        )

    @app.exception_handler(SQLAlchemyError)
    async def backend_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """Surface persistence failures as a generic server error."""
        request_id = getattr(request.state, "request_id", None)
        LOGGER.exception("Backend failure: %s [%s]", exc.__class__.__name__, request_id)

        message = str(exc) if settings.app.debug else "A database error occurred"
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "BackendFailure",
            message,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", None)

        LOGGER.exception(
            "Unhandled exception: %s [%s]",
            str(exc),
            request_id,
        )

        # Hide internal errors in production
        message = str(exc) if settings.app.debug else "An internal error occurred"
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "InternalServerError",
            message,
        )

    # -------------------------------------------------------------------------
    # Route Registration
    # -------------------------------------------------------------------------

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(posts_router)

    return app


# -----------------------------------------------------------------------------
# Application Instance
# -----------------------------------------------------------------------------

app = create_app()


__all__ = ["app", "create_app"]
