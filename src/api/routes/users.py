"""User routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_db, get_principal
from api.schemas import UserOut
from core.models import User
from domain.users import UserService

router = APIRouter()


@router.get("/me", response_model=UserOut)
def get_me(principal: User = Depends(get_principal)):
    """The acting principal."""
    return principal


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db)):
    """Public profile of any user, e.g. a message counterpart."""
    return UserService(db).get_user(user_id)
