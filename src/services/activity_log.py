"""Activity log service for the realtor's audit feed."""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.logging_config import get_logger
from core.models import Activity, Appointment, Client, Message, Property
from core.utils import truncate, utcnow

LOGGER = get_logger(__name__)


class ActivityType:
    """Constants for activity types."""
    LISTING = "listing"
    PROPERTY_UPDATE = "property_update"
    PROPERTY_DELETE = "property_delete"
    PROPERTY_TRANSFER = "property_transfer"
    LEAD = "lead"
    MESSAGE = "message"
    APPOINTMENT = "appointment"


class ActivityService:
    """Service for writing and reading activity entries."""

    def __init__(self, session: Session):
        """Initialize the activity service."""
        self.session = session

    def add_activity(
        self,
        user_id: int,
        activity_type: str,
        title: str,
        description: str,
        property_id: Optional[int] = None,
    ) -> Activity:
        """
        Append an activity entry.

        Args:
            user_id: Owner of the feed.
            activity_type: Type tag (use ActivityType constants).
            title: Short title.
            description: One-line description.
            property_id: Optional related listing.

        Returns:
            The created Activity.
        """
        activity = Activity(
            type=activity_type,
            title=title,
            description=description,
            user_id=user_id,
            property_id=property_id,
            created_at=utcnow(),
        )
        self.session.add(activity)
        self.session.flush()

        LOGGER.debug(f"Added activity: {activity_type} for user {user_id}")
        return activity

    def record(
        self,
        user_id: int,
        activity_type: str,
        title: str,
        description: str,
        property_id: Optional[int] = None,
    ) -> Optional[Activity]:
        """
        Best-effort variant of add_activity used after a primary mutation.

        The insert runs in a savepoint; on a database error only the
        savepoint is rolled back and None is returned.
        """
        try:
            with self.session.begin_nested():
                return self.add_activity(
                    user_id=user_id,
                    activity_type=activity_type,
                    title=title,
                    description=description,
                    property_id=property_id,
                )
        except SQLAlchemyError as exc:
            LOGGER.warning(
                f"Activity '{activity_type}' for user {user_id} was not recorded: {exc}",
                extra={"user_id": user_id, "property_id": property_id},
            )
            return None

    def get_recent(self, user_id: int, limit: Optional[int] = None) -> List[Activity]:
        """
        Most recent activities for a user, newest first.

        Args:
            user_id: Feed owner.
            limit: Maximum entries; None returns all.
        """
        stmt = (
            select(Activity)
            .where(Activity.user_id == user_id)
            .order_by(Activity.created_at.desc(), Activity.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.scalars(stmt))

    # -------------------------------------------------------------------------
    # Side-effect helpers
    # -------------------------------------------------------------------------

    def log_listing_created(self, user_id: int, prop: Property) -> Optional[Activity]:
        return self.record(
            user_id, ActivityType.LISTING, "New listing added", prop.title, property_id=prop.id
        )

    def log_listing_updated(self, user_id: int, prop: Property) -> Optional[Activity]:
        return self.record(
            user_id, ActivityType.PROPERTY_UPDATE, "Property updated", prop.title, property_id=prop.id
        )

    def log_listing_deleted(self, user_id: int, title: str) -> Optional[Activity]:
        # The listing is gone, so no property reference
        return self.record(user_id, ActivityType.PROPERTY_DELETE, "Property deleted", title)

    def log_listing_transferred(
        self, user_id: int, prop: Property, new_owner_name: str
    ) -> Optional[Activity]:
        return self.record(
            user_id,
            ActivityType.PROPERTY_TRANSFER,
            "Listing transferred",
            f"{prop.title} to {new_owner_name}",
            property_id=prop.id,
        )

    def log_lead_added(self, user_id: int, client: Client) -> Optional[Activity]:
        return self.record(user_id, ActivityType.LEAD, "New lead added", client.name)

    def log_message_sent(self, user_id: int, message: Message) -> Optional[Activity]:
        return self.record(
            user_id, ActivityType.MESSAGE, "New message sent", truncate(message.content, 50)
        )

    def log_appointment_booked(self, user_id: int, appointment: Appointment) -> Optional[Activity]:
        return self.record(
            user_id,
            ActivityType.APPOINTMENT,
            "New appointment scheduled",
            appointment.title,
            property_id=appointment.property_id,
        )
