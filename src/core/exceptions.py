"""Custom exceptions for the realty CRM application."""
from __future__ import annotations

from typing import Any, List, Optional


class RealtyCRMError(Exception):
    """Base exception for all application errors."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(RealtyCRMError):
    """Raised when required configuration is missing or invalid."""

    pass


# =============================================================================
# Record Errors
# =============================================================================


class NotFoundError(RealtyCRMError):
    """Raised when a referenced record does not exist."""

    def __init__(self, entity: str, identifier: Any = None) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found")


class ValidationError(RealtyCRMError):
    """Raised when a payload fails validation. Nothing has been written."""

    def __init__(self, message: str, errors: Optional[List[Any]] = None) -> None:
        self.errors = errors or []
        super().__init__(message)


class PermissionDeniedError(RealtyCRMError):
    """Raised when the acting user does not own the target record."""

    pass


# =============================================================================
# Persistence Errors
# =============================================================================


class UpstreamError(RealtyCRMError):
    """Raised when the persistence layer is unreachable or rejects a write."""

    pass


__all__ = [
    "RealtyCRMError",
    "ConfigurationError",
    "NotFoundError",
    "ValidationError",
    "PermissionDeniedError",
    "UpstreamError",
]
