"""Domain layer for the realty CRM business logic.

Every operation takes the acting user explicitly; routes and the CLI
only translate requests into these calls.
"""
from __future__ import annotations

from .appointments import AppointmentService
from .clients import ClientService
from .content import CommunityService, PageContentService
from .dashboard import DashboardService, DashboardStatistics, DashboardSummary
from .messaging import ConversationSummary, MessageService
from .properties import PropertyService, merge_property_update, reconcile_images
from .theming import DEFAULT_THEME_SETTINGS, ThemeSettingsService, WebsiteThemeService
from .users import UserService

__all__ = [
    # Users
    "UserService",
    # Properties
    "PropertyService",
    "merge_property_update",
    "reconcile_images",
    # Clients & schedule
    "ClientService",
    "AppointmentService",
    # Messaging
    "MessageService",
    "ConversationSummary",
    # Dashboard
    "DashboardService",
    "DashboardStatistics",
    "DashboardSummary",
    # Configuration
    "ThemeSettingsService",
    "WebsiteThemeService",
    "DEFAULT_THEME_SETTINGS",
    "PageContentService",
    "CommunityService",
]
