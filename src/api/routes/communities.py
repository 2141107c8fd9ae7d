"""Community marketing content (read-only)."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_readonly_db
from api.schemas import CommunityOut
from domain.content import CommunityService

router = APIRouter()


@router.get("", response_model=List[CommunityOut])
def list_communities(db: Session = Depends(get_readonly_db)):
    return CommunityService(db).list_communities()
