"""Core module exports."""
from __future__ import annotations

from core.config import Settings, get_settings, reload_settings
from core.db import Base, SessionLocal, get_session, init_db, upsert, validate_database
from core.exceptions import (
    # Base
    RealtyCRMError,
    # Configuration
    ConfigurationError,
    # Records
    NotFoundError,
    ValidationError,
    PermissionDeniedError,
    # Persistence
    UpstreamError,
)
from core.logging_config import (
    setup_logging,
    get_logger,
    get_context_logger,
    log_request,
    JSONFormatter,
    ContextLogger,
)
from core.models import (
    User,
    Property,
    Client,
    Message,
    Appointment,
    Activity,
    ThemeSettings,
    PageContent,
    WebsiteTheme,
    Community,
    ListingStatus,
    ListingType,
    UserRole,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "reload_settings",
    # Database
    "get_session",
    "SessionLocal",
    "Base",
    "init_db",
    "upsert",
    "validate_database",
    # Models
    "User",
    "Property",
    "Client",
    "Message",
    "Appointment",
    "Activity",
    "ThemeSettings",
    "PageContent",
    "WebsiteTheme",
    "Community",
    "ListingStatus",
    "ListingType",
    "UserRole",
    # Exceptions
    "RealtyCRMError",
    "ConfigurationError",
    "NotFoundError",
    "ValidationError",
    "PermissionDeniedError",
    "UpstreamError",
    # Logging
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "log_request",
    "JSONFormatter",
    "ContextLogger",
]
