"""Database session and acting-principal dependencies for FastAPI routes."""
from __future__ import annotations

from typing import Generator, Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from core.config import get_settings
from core.db import SessionLocal
from core.models import User
from domain.users import UserService

SETTINGS = get_settings()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.

    Commits when the route returns, rolls back when it raises.

    Yields:
        SQLAlchemy Session instance.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_readonly_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a read-only database session.

    Yields:
        SQLAlchemy Session instance (read-only mode).
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


def get_principal(
    x_acting_user: Optional[str] = Header(None, alias="X-Acting-User"),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the user a request acts on behalf of.

    Authentication happens upstream; this only maps the forwarded
    username (or DEFAULT_USERNAME when absent) to a user row.

    Raises:
        NotFoundError: No user has that username.
    """
    username = (x_acting_user or "").strip() or SETTINGS.default_username
    return UserService(db).get_by_username(username)


__all__ = ["get_db", "get_readonly_db", "get_principal"]
