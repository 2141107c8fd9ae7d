"""Core utility functions."""
from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from typing import Optional, Tuple

from passlib.context import CryptContext

# pbkdf2_sha256 is implemented by passlib itself and needs no bcrypt backend
_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def utcnow() -> datetime:
    """Get current UTC datetime with timezone info. Always use this instead of datetime.now()."""
    return datetime.now(timezone.utc)


def ensure_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure a datetime is timezone-aware (UTC).

    SQLite stores datetimes without timezone info, so we need to make them
    aware before comparing with utcnow().
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        # Assume naive datetimes are UTC
        return dt.replace(tzinfo=timezone.utc)
    return dt


def to_utc(dt: datetime) -> datetime:
    """Normalize a datetime to UTC. Naive values are taken to be UTC already."""
    return ensure_aware(dt).astimezone(timezone.utc)


def local_day_bounds(day: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Return the [start, end) bounds of a calendar day in server-local time.

    Args:
        day: Any instant inside the wanted day. Defaults to now.

    Returns:
        (start, end) as timezone-aware datetimes.
    """
    local_date = (ensure_aware(day) or utcnow()).astimezone().date()
    # Resolve each midnight on its own, the UTC offset differs across a DST change
    start = datetime.combine(local_date, time.min).astimezone()
    end = datetime.combine(local_date + timedelta(days=1), time.min).astimezone()
    return start, end


def truncate(text: str, length: int = 50, suffix: str = "...") -> str:
    """Shorten text to ``length`` characters, appending ``suffix`` when cut."""
    if len(text) <= length:
        return text
    return text[:length] + suffix


def hash_password(password: str) -> str:
    """Hash a password with PBKDF2-SHA256."""
    return _pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return _pwd_context.verify(plain_password, hashed_password)
