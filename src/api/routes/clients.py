"""Client (lead) routes."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.deps import get_db, get_principal
from api.schemas import ClientCreate, ClientOut
from core.models import User
from domain.clients import ClientService

router = APIRouter()


@router.get("", response_model=List[ClientOut])
def list_clients(
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    return ClientService(db).list_clients(principal.id)


@router.get("/{client_id}", response_model=ClientOut)
def get_client(client_id: int, db: Session = Depends(get_db)):
    return ClientService(db).get_client(client_id)


@router.post("", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientCreate,
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Add a lead for the principal. Logs a `lead` activity."""
    return ClientService(db).create_client(principal.id, payload.model_dump(exclude_unset=True))
