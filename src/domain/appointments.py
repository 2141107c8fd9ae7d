"""Appointment domain service."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from core.logging_config import get_logger
from core.models import Appointment
from core.utils import ensure_aware, local_day_bounds, to_utc
from services.activity_log import ActivityService

LOGGER = get_logger(__name__)

APPOINTMENT_FIELDS = ("title", "location", "date", "client_id", "property_id", "notes")


class AppointmentService:
    """Service for a realtor's schedule."""

    def __init__(self, session: Session, activities: Optional[ActivityService] = None) -> None:
        self.session = session
        self.activities = activities or ActivityService(session)

    def list_appointments(self, realtor_id: int) -> List[Appointment]:
        """All appointments of a realtor by date ascending."""
        stmt = (
            select(Appointment)
            .where(Appointment.realtor_id == realtor_id)
            .order_by(Appointment.date, Appointment.id)
        )
        return list(self.session.scalars(stmt))

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.session.get(Appointment, appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment", appointment_id)
        return appointment

    def appointments_for_day(
        self,
        realtor_id: int,
        day: Optional[datetime] = None,
    ) -> List[Appointment]:
        """
        Appointments falling on one calendar day in server-local time.

        Filtering happens in Python since SQLite hands back naive datetimes
        (treated as UTC).
        """
        start, end = local_day_bounds(day)
        return [
            appt
            for appt in self.list_appointments(realtor_id)
            if start <= ensure_aware(appt.date) < end
        ]

    def create_appointment(self, realtor_id: int, data: Dict[str, Any]) -> Appointment:
        """
        Schedule an appointment and log it to the realtor's feed.

        client_id and property_id are stored as given without existence checks.
        """
        missing = [f for f in ("title", "location", "date") if not data.get(f)]
        if missing:
            raise ValidationError(
                "Invalid appointment data",
                errors=[{"field": f, "message": "is required"} for f in missing],
            )

        values = {k: v for k, v in data.items() if k in APPOINTMENT_FIELDS}
        values["date"] = to_utc(values["date"])

        appointment = Appointment(realtor_id=realtor_id, **values)
        self.session.add(appointment)
        self.session.flush()

        LOGGER.info(
            f"Scheduled appointment {appointment.id} at {appointment.date.isoformat()}",
            extra={"user_id": realtor_id, "property_id": appointment.property_id},
        )
        self.activities.log_appointment_booked(realtor_id, appointment)
        return appointment
