"""Dashboard aggregations. Nothing here is cached; every call recomputes."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from core.config import get_settings
from core.logging_config import get_logger
from core.models import Activity, Appointment, Client, ListingStatus, Property
from core.utils import ensure_aware, utcnow
from domain.appointments import AppointmentService
from services.activity_log import ActivityService

LOGGER = get_logger(__name__)
SETTINGS = get_settings()

# Listing status -> statistics bucket. Anything else (Draft included) is not counted.
STATUS_BUCKETS = {
    ListingStatus.ACTIVE.value: "active_listings",
    ListingStatus.PENDING.value: "pending_sales",
    ListingStatus.SOLD.value: "closed_sales",
}


@dataclass
class DashboardStatistics:
    """Listing counts by status plus recent leads."""
    active_listings: int = 0
    pending_sales: int = 0
    closed_sales: int = 0
    new_leads: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "activeListings": self.active_listings,
            "pendingSales": self.pending_sales,
            "closedSales": self.closed_sales,
            "newLeads": self.new_leads,
        }


@dataclass
class DashboardSummary:
    """Everything the dashboard screen shows for one realtor."""
    portfolio_value: float
    statistics: DashboardStatistics
    activities: List[Activity] = field(default_factory=list)
    today_appointments: List[Appointment] = field(default_factory=list)


class DashboardService:
    """Computes portfolio value, listing statistics and the dashboard summary."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def portfolio_value(self, owner_id: int) -> float:
        """Sum of listing prices for an owner, 0 when there are none."""
        stmt = select(func.coalesce(func.sum(Property.price), 0)).where(
            Property.listed_by_id == owner_id
        )
        return float(self.session.scalar(stmt) or 0)

    def statistics(
        self,
        owner_id: int,
        now: Optional[datetime] = None,
        window_days: Optional[int] = None,
    ) -> DashboardStatistics:
        """
        Count listings per status bucket and the clients added recently.

        Args:
            owner_id: Realtor whose data is counted.
            now: Reference instant, defaults to the current time.
            window_days: Trailing window for new leads. Defaults to
                NEW_LEAD_WINDOW_DAYS.
        """
        stats = DashboardStatistics()

        rows = self.session.execute(
            select(Property.status, func.count(Property.id))
            .where(Property.listed_by_id == owner_id)
            .group_by(Property.status)
        )
        for status, count in rows:
            bucket = STATUS_BUCKETS.get(status)
            if bucket:
                setattr(stats, bucket, count)

        now = ensure_aware(now) or utcnow()
        days = SETTINGS.new_lead_window_days if window_days is None else window_days
        cutoff = now - timedelta(days=days)

        created = self.session.scalars(
            select(Client.created_at).where(Client.realtor_id == owner_id)
        )
        stats.new_leads = sum(1 for ts in created if cutoff <= ensure_aware(ts) <= now)
        return stats

    def summary(self, owner_id: int, activity_limit: Optional[int] = None) -> DashboardSummary:
        limit = SETTINGS.dashboard_activity_limit if activity_limit is None else activity_limit
        summary = DashboardSummary(
            portfolio_value=self.portfolio_value(owner_id),
            statistics=self.statistics(owner_id),
            activities=ActivityService(self.session).get_recent(owner_id, limit=limit),
            today_appointments=AppointmentService(self.session).appointments_for_day(owner_id),
        )
        LOGGER.debug(
            f"Dashboard for user {owner_id}: value={summary.portfolio_value} "
            f"stats={summary.statistics.to_dict()}"
        )
        return summary

    def as_dict(self, owner_id: int) -> Dict[str, Any]:
        """Summary numbers as a plain dict, used by the CLI."""
        summary = self.summary(owner_id)
        return {
            "portfolioValue": summary.portfolio_value,
            "statistics": summary.statistics.to_dict(),
            "activities": len(summary.activities),
            "todayAppointments": len(summary.today_appointments),
        }
