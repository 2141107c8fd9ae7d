"""Theme settings routes, one settings row per scope."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from api.deps import get_db
from api.schemas import ThemeSettingsOut, ThemeSettingsUpdate
from domain.theming import ThemeSettingsService

router = APIRouter()


@router.get("/{scope_id}", response_model=ThemeSettingsOut)
def get_theme_settings(
    scope_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    """Fetch the settings for a scope, creating the default palette on first read."""
    return ThemeSettingsService(db).get_theme_settings(scope_id)


@router.put("/{scope_id}", response_model=ThemeSettingsOut)
def update_theme_settings(
    payload: ThemeSettingsUpdate,
    scope_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    """Upsert the settings for a scope and return the full row."""
    return ThemeSettingsService(db).update_theme_settings(scope_id, payload.model_dump(exclude_unset=True))
