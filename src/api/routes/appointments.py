"""Appointment routes."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.deps import get_db, get_principal
from api.schemas import AppointmentCreate, AppointmentOut
from core.models import User
from domain.appointments import AppointmentService

router = APIRouter()


@router.get("", response_model=List[AppointmentOut])
def list_appointments(
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """All of the principal's appointments by date ascending."""
    return AppointmentService(db).list_appointments(principal.id)


@router.get("/today", response_model=List[AppointmentOut])
def todays_appointments(
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Appointments on the server's current local calendar day."""
    return AppointmentService(db).appointments_for_day(principal.id)


@router.post("", response_model=AppointmentOut, status_code=status.HTTP_201_CREATED)
def create_appointment(
    payload: AppointmentCreate,
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    return AppointmentService(db).create_appointment(principal.id, payload.model_dump(exclude_unset=True))


@router.get("/{appointment_id}", response_model=AppointmentOut)
def get_appointment(appointment_id: int, db: Session = Depends(get_db)):
    return AppointmentService(db).get_appointment(appointment_id)
