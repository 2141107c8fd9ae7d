"""Client (lead) domain service."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from core.logging_config import get_logger
from core.models import Client
from services.activity_log import ActivityService

LOGGER = get_logger(__name__)

CLIENT_FIELDS = ("name", "email", "phone", "profile_image")


class ClientService:
    """Service for a realtor's contacts."""

    def __init__(self, session: Session, activities: Optional[ActivityService] = None) -> None:
        self.session = session
        self.activities = activities or ActivityService(session)

    def list_clients(self, realtor_id: int) -> List[Client]:
        stmt = select(Client).where(Client.realtor_id == realtor_id).order_by(Client.id)
        return list(self.session.scalars(stmt))

    def get_client(self, client_id: int) -> Client:
        client = self.session.get(Client, client_id)
        if client is None:
            raise NotFoundError("Client", client_id)
        return client

    def create_client(self, realtor_id: int, data: Dict[str, Any]) -> Client:
        """Create a client for ``realtor_id`` and log a lead activity."""
        missing = [f for f in ("name", "email") if not data.get(f)]
        if missing:
            raise ValidationError(
                "Invalid client data",
                errors=[{"field": f, "message": "is required"} for f in missing],
            )

        client = Client(
            realtor_id=realtor_id,
            **{k: v for k, v in data.items() if k in CLIENT_FIELDS},
        )
        self.session.add(client)
        self.session.flush()

        LOGGER.info(f"Created client {client.id} for realtor {realtor_id}", extra={"user_id": realtor_id})
        self.activities.log_lead_added(realtor_id, client)
        return client
