"""FastAPI application entry point with global error handling."""
from __future__ import annotations

import os
import sys

# Add src/ to Python path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from core.config import get_settings
from core.logging_config import get_logger, log_request, setup_logging
from core.exceptions import (
    RealtyCRMError,
    ConfigurationError,
    NotFoundError,
    PermissionDeniedError,
    UpstreamError,
    ValidationError,
)
from api.routes import (
    activities,
    appointments,
    clients,
    communities,
    dashboard,
    health,
    messages,
    pages,
    properties,
    theme_settings,
    users,
    website_themes,
)

LOGGER = get_logger(__name__)
SETTINGS = get_settings()

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Sets up logging, creates missing tables and seeds demo data.
    Non-blocking startup - the app starts even if the database is not ready.
    """
    json_logging = SETTINGS.log_format == "json"
    setup_logging(level=SETTINGS.log_level, json_format=json_logging)

    LOGGER.info(
        "API application starting",
        extra={"extra_data": {
            "environment": SETTINGS.environment,
            "api_prefix": SETTINGS.api_prefix,
            "database_url": SETTINGS.database_url,
            "seed_demo_data": SETTINGS.seed_demo_data,
        }}
    )

    try:
        from core.bootstrap import bootstrap_application
        result = bootstrap_application()
        LOGGER.info(
            "Database ready",
            extra={"extra_data": {
                "created": result["database"]["tables_created"],
                "seeded": result["seeded"],
            }}
        )
    except Exception as e:
        LOGGER.error(f"Startup bootstrap failed: {e} - app will start anyway")

    yield
    LOGGER.info("API application shutting down")


def _error(status_code: int, kind: str, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": kind, "message": message, **extra})


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance with:
        - CORS middleware
        - Request logging and no-cache headers
        - Global exception handlers
        - All API routes under API_PREFIX
    """
    application = FastAPI(
        title="Realty CRM API",
        description="Property listings, leads, messaging and site configuration for realtors",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------
    application.add_middleware(
        CORSMiddleware,
        allow_origins=SETTINGS.get_cors_origins(),
        allow_credentials=SETTINGS.get_cors_origins() != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def request_logging(request: Request, call_next):
        """Log every request and keep API responses out of browser caches."""
        started = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith(SETTINGS.api_prefix or "/"):
            response.headers.update(NO_CACHE_HEADERS)
        log_request(
            LOGGER,
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            acting_user=request.headers.get("X-Acting-User"),
        )
        return response

    # -------------------------------------------------------------------------
    # Global Exception Handlers
    # -------------------------------------------------------------------------

    @application.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        """Handle unknown record references."""
        LOGGER.info(f"Not found: {exc}", extra={"extra_data": {"path": request.url.path}})
        return _error(404, "not_found", str(exc))

    @application.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        """Handle domain validation errors."""
        LOGGER.warning(f"Validation error: {exc}", extra={"extra_data": {"path": request.url.path}})
        return _error(400, "validation_error", str(exc), errors=exc.errors)

    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed ids and bodies as 400 in the common error shape."""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        LOGGER.warning(
            f"Request validation failed: {len(errors)} error(s)",
            extra={"extra_data": {"path": request.url.path, "errors": errors}},
        )
        return _error(400, "validation_error", "Invalid request", errors=errors)

    @application.exception_handler(PermissionDeniedError)
    async def permission_handler(request: Request, exc: PermissionDeniedError) -> JSONResponse:
        """Handle writes by a user who does not own the record."""
        LOGGER.warning(f"Permission denied: {exc}", extra={"extra_data": {"path": request.url.path}})
        return _error(403, "permission_denied", str(exc))

    @application.exception_handler(UpstreamError)
    async def upstream_handler(request: Request, exc: UpstreamError) -> JSONResponse:
        """Handle persistence failures raised by the domain layer."""
        LOGGER.error(f"Upstream failure: {exc}", extra={"extra_data": {"path": request.url.path}})
        return _error(503, "upstream_failure", str(exc))

    @application.exception_handler(OperationalError)
    async def operational_handler(request: Request, exc: OperationalError) -> JSONResponse:
        """Handle an unreachable or locked database."""
        LOGGER.error(f"Database unavailable: {exc}", extra={"extra_data": {"path": request.url.path}})
        return _error(503, "upstream_failure", "The database is temporarily unavailable")

    @application.exception_handler(ConfigurationError)
    async def configuration_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
        """Handle configuration errors."""
        LOGGER.error(f"Configuration error: {exc}")
        return _error(500, "configuration_error", "Service misconfiguration")

    @application.exception_handler(RealtyCRMError)
    async def app_error_handler(request: Request, exc: RealtyCRMError) -> JSONResponse:
        """Handle all other application errors."""
        LOGGER.error(f"Application error: {exc}", exc_info=True)
        return _error(500, "application_error", str(exc))

    # -------------------------------------------------------------------------
    # Include Routers
    # -------------------------------------------------------------------------
    prefix = SETTINGS.api_prefix

    application.include_router(health.router, prefix=f"{prefix}/health", tags=["Health"])
    application.include_router(users.router, prefix=f"{prefix}/users", tags=["Users"])
    application.include_router(properties.router, prefix=f"{prefix}/properties", tags=["Properties"])
    application.include_router(clients.router, prefix=f"{prefix}/clients", tags=["Clients"])
    application.include_router(messages.router, prefix=f"{prefix}/messages", tags=["Messages"])
    application.include_router(appointments.router, prefix=f"{prefix}/appointments", tags=["Appointments"])
    application.include_router(activities.router, prefix=f"{prefix}/activities", tags=["Activities"])
    application.include_router(dashboard.router, prefix=f"{prefix}/dashboard", tags=["Dashboard"])

    # Site configuration
    application.include_router(theme_settings.router, prefix=f"{prefix}/theme-settings", tags=["Theme"])
    application.include_router(website_themes.router, prefix=f"{prefix}/website-themes", tags=["Theme"])
    application.include_router(pages.router, prefix=f"{prefix}/pages", tags=["Content"])
    application.include_router(communities.router, prefix=f"{prefix}/communities", tags=["Content"])

    return application


# Create the application instance
app = create_app()

LOGGER.info("API application initialized")
