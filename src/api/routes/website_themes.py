"""Website theme routes."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.deps import get_db, get_readonly_db
from api.schemas import WebsiteThemeCreate, WebsiteThemeOut
from domain.theming import WebsiteThemeService

router = APIRouter()


@router.get("", response_model=List[WebsiteThemeOut])
def list_website_themes(db: Session = Depends(get_readonly_db)):
    return WebsiteThemeService(db).list_themes()


@router.get("/active", response_model=WebsiteThemeOut)
def get_active_website_theme(db: Session = Depends(get_readonly_db)):
    """The active theme, 404 when none is active."""
    return WebsiteThemeService(db).get_active_theme()


@router.post("", response_model=WebsiteThemeOut, status_code=status.HTTP_201_CREATED)
def create_website_theme(payload: WebsiteThemeCreate, db: Session = Depends(get_db)):
    return WebsiteThemeService(db).create_theme(
        name=payload.name,
        description=payload.description,
        is_active=payload.is_active,
    )


@router.put("/{theme_id}/activate", response_model=WebsiteThemeOut)
def activate_website_theme(theme_id: int, db: Session = Depends(get_db)):
    """Make one theme active and every other theme inactive in one statement."""
    return WebsiteThemeService(db).set_active_theme(theme_id)
