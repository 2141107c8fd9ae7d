"""Activity feed routes."""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.deps import get_db, get_principal
from api.schemas import ActivityCreate, ActivityOut
from core.models import User
from services.activity_log import ActivityService

router = APIRouter()


@router.get("", response_model=List[ActivityOut])
def list_activities(
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum entries, newest first"),
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    return ActivityService(db).get_recent(principal.id, limit=limit)


@router.post("", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
def create_activity(
    payload: ActivityCreate,
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Append an entry to the principal's feed by hand (e.g. an accepted offer)."""
    return ActivityService(db).add_activity(
        user_id=principal.id,
        activity_type=payload.type,
        title=payload.title,
        description=payload.description,
        property_id=payload.property_id,
    )
