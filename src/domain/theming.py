"""
Theme configuration: per-scope colour/typography settings and the
website layout themes.

Settings rows are created lazily on first read. Both the lazy creation
and updates go through a single ``INSERT ... ON CONFLICT`` on the unique
``scope_id``, so concurrent first reads cannot produce two rows.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import case, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.db import upsert
from core.exceptions import NotFoundError, UpstreamError, ValidationError
from core.logging_config import get_logger
from core.models import ThemeSettings, WebsiteTheme
from core.utils import utcnow

LOGGER = get_logger(__name__)

DEFAULT_THEME_SETTINGS: Dict[str, str] = {
    "primary_color": "#CBA328",
    "secondary_color": "#1a1a1a",
    "tertiary_color": "#f5f5f5",
    "text_color": "#333333",
    "link_color": "#CBA328",
    "link_hover_color": "#a8861f",
    "navigation_color": "#1a1a1a",
    "sub_navigation_color": "#2a2a2a",
    "header_background_color": "#ffffff",
    "heading_font": "Inter",
    "body_font": "Inter",
    "button_font": "Inter",
    "heading_font_weight": "600",
    "body_font_weight": "400",
    "button_font_weight": "500",
}

THEME_FIELDS = frozenset(DEFAULT_THEME_SETTINGS)


class ThemeSettingsService:
    """Fetch-or-create and upsert of per-scope theme settings."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _load(self, scope_id: int) -> Optional[ThemeSettings]:
        stmt = (
            select(ThemeSettings)
            .where(ThemeSettings.scope_id == scope_id)
            .execution_options(populate_existing=True)
        )
        return self.session.scalars(stmt).first()

    def get_theme_settings(self, scope_id: int) -> ThemeSettings:
        """Return the settings for a scope, creating the default palette on first read."""
        settings = self._load(scope_id)
        if settings is not None:
            return settings

        now = utcnow()
        upsert(
            self.session,
            ThemeSettings,
            {"scope_id": scope_id, "created_at": now, "updated_at": now, **DEFAULT_THEME_SETTINGS},
            conflict_columns=["scope_id"],
        )
        LOGGER.info(f"Created default theme settings for scope {scope_id}", extra={"scope_id": scope_id})
        return self._load(scope_id)

    def update_theme_settings(self, scope_id: int, changes: Dict[str, Any]) -> ThemeSettings:
        """
        Upsert settings for a scope and return the full row.

        Fields missing from ``changes`` keep their stored value (or the
        default palette value when the row is new).
        """
        unknown = sorted(k for k in changes if k not in THEME_FIELDS)
        cleared = sorted(k for k, v in changes.items() if k in THEME_FIELDS and v is None)
        if unknown or cleared:
            raise ValidationError(
                "Invalid theme settings",
                errors=[{"field": k, "message": "unknown field"} for k in unknown]
                + [{"field": k, "message": "may not be null"} for k in cleared],
            )

        now = utcnow()
        values = {**DEFAULT_THEME_SETTINGS, **changes, "scope_id": scope_id, "created_at": now, "updated_at": now}
        upsert(
            self.session,
            ThemeSettings,
            values,
            conflict_columns=["scope_id"],
            update_columns=[*sorted(changes), "updated_at"],
        )
        LOGGER.info(
            f"Updated theme settings {sorted(changes)} for scope {scope_id}",
            extra={"scope_id": scope_id},
        )
        return self._load(scope_id)


class WebsiteThemeService:
    """Named site layouts, exactly one of which is active at a time."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_themes(self) -> List[WebsiteTheme]:
        stmt = select(WebsiteTheme).order_by(WebsiteTheme.id).execution_options(populate_existing=True)
        return list(self.session.scalars(stmt))

    def get_theme(self, theme_id: int) -> WebsiteTheme:
        theme = self.session.get(WebsiteTheme, theme_id)
        if theme is None:
            raise NotFoundError("Website theme", theme_id)
        return theme

    def get_active_theme(self) -> WebsiteTheme:
        stmt = (
            select(WebsiteTheme)
            .where(WebsiteTheme.is_active.is_(True))
            .order_by(WebsiteTheme.id)
            .execution_options(populate_existing=True)
        )
        theme = self.session.scalars(stmt).first()
        if theme is None:
            raise NotFoundError("Active website theme")
        return theme

    def create_theme(self, name: str, description: Optional[str] = None, is_active: bool = False) -> WebsiteTheme:
        """Create a theme. Creating it active deactivates every other theme."""
        if not name or not name.strip():
            raise ValidationError("Theme name is required", errors=[{"field": "name", "message": "is required"}])
        existing = self.session.scalars(select(WebsiteTheme).where(WebsiteTheme.name == name)).first()
        if existing is not None:
            raise ValidationError(
                f"Website theme '{name}' already exists",
                errors=[{"field": "name", "message": "must be unique"}],
            )

        theme = WebsiteTheme(name=name, description=description, is_active=False)
        try:
            self.session.add(theme)
            self.session.flush()
        except IntegrityError as exc:
            # A concurrent create won the unique name
            raise UpstreamError(f"Website theme '{name}' could not be stored") from exc
        LOGGER.info(f"Created website theme '{name}' (id={theme.id})")

        if is_active:
            return self.set_active_theme(theme.id)
        return theme

    def set_active_theme(self, theme_id: int) -> WebsiteTheme:
        """
        Activate one theme and deactivate the rest in a single UPDATE.

        Readers never see zero or two active themes. Repeating the call is a no-op.
        """
        self.get_theme(theme_id)

        stmt = (
            update(WebsiteTheme)
            .values(is_active=case((WebsiteTheme.id == theme_id, True), else_=False))
            .execution_options(synchronize_session=False)
        )
        self.session.execute(stmt)
        LOGGER.info(f"Activated website theme {theme_id}")

        return self.session.scalars(
            select(WebsiteTheme)
            .where(WebsiteTheme.id == theme_id)
            .execution_options(populate_existing=True)
        ).one()
