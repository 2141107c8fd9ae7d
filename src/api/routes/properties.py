"""Property listing routes. Every operation acts for the resolved principal."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from api.deps import get_db, get_principal
from api.schemas import PropertyCreate, PropertyOut, PropertyTransfer, PropertyUpdate
from core.logging_config import get_logger
from core.models import User
from domain.properties import PropertyService

router = APIRouter()
LOGGER = get_logger(__name__)


@router.get("", response_model=List[PropertyOut])
def list_properties(
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """List the principal's listings."""
    return PropertyService(db).list_properties(principal.id)


@router.get("/{property_id}", response_model=PropertyOut)
def get_property(
    property_id: int,
    db: Session = Depends(get_db),
):
    return PropertyService(db).get_property(property_id)


@router.post("", response_model=PropertyOut, status_code=status.HTTP_201_CREATED)
def create_property(
    payload: PropertyCreate,
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Create a listing owned by the principal."""
    return PropertyService(db).create_property(principal.id, payload.model_dump(exclude_unset=True))


def _apply_update(property_id: int, payload: PropertyUpdate, principal: User, db: Session):
    # Only fields present in the body take part in the merge
    update = payload.model_dump(exclude_unset=True)
    return PropertyService(db).update_property(property_id, principal.id, update)


@router.patch("/{property_id}", response_model=PropertyOut)
def patch_property(
    property_id: int,
    payload: PropertyUpdate,
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Merge a partial update into a listing."""
    return _apply_update(property_id, payload, principal, db)


@router.put("/{property_id}", response_model=PropertyOut)
def put_property(
    property_id: int,
    payload: PropertyUpdate,
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Same merge semantics as PATCH; absent fields are kept."""
    return _apply_update(property_id, payload, principal, db)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(
    property_id: int,
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
) -> Response:
    PropertyService(db).delete_property(property_id, principal.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{property_id}/transfer", response_model=PropertyOut)
def transfer_property(
    property_id: int,
    payload: PropertyTransfer,
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Hand a listing over to another user. Only the current owner may do this."""
    return PropertyService(db).transfer_property(property_id, principal.id, payload.new_owner_id)
