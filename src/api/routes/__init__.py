"""API route modules."""
from __future__ import annotations

from . import (
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

__all__ = [
    "activities",
    "appointments",
    "clients",
    "communities",
    "dashboard",
    "health",
    "messages",
    "pages",
    "properties",
    "theme_settings",
    "users",
    "website_themes",
]
