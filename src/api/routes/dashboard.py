"""Dashboard route."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_db, get_principal
from api.schemas import DashboardOut
from core.models import User
from domain.dashboard import DashboardService

router = APIRouter()


@router.get("", response_model=DashboardOut)
def get_dashboard(
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """
    Portfolio value, listing statistics, the most recent activities and
    today's appointments for the principal. Always recomputed.
    """
    return DashboardOut.model_validate(DashboardService(db).summary(principal.id))
