"""Tests for dashboard aggregations and the daily schedule."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from conftest import property_data
from core.models import Activity, Appointment, Client, Property
from core.utils import to_utc, utcnow
from domain.appointments import AppointmentService
from domain.dashboard import DashboardService


def _add_property(db_session, owner, **overrides):
    prop = Property(listed_by_id=owner.id, **property_data(**overrides))
    db_session.add(prop)
    db_session.flush()
    return prop


def _local_noon(days_from_today=0):
    today = datetime.now().astimezone()
    return to_utc(today.replace(hour=12, minute=0, second=0, microsecond=0) + timedelta(days=days_from_today))


class TestPortfolioValue:

    def test_sum_of_owner_prices(self, db_session, realtor, other_realtor):
        _add_property(db_session, realtor, price=100)
        _add_property(db_session, realtor, price=250.5)
        _add_property(db_session, other_realtor, price=1000)

        assert DashboardService(db_session).portfolio_value(realtor.id) == 350.5

    def test_zero_without_properties(self, db_session, realtor):
        assert DashboardService(db_session).portfolio_value(realtor.id) == 0


class TestStatistics:

    def test_status_buckets_skip_drafts(self, db_session, realtor):
        for status in ["Active", "Active", "Pending", "Sold", "Draft"]:
            _add_property(db_session, realtor, status=status)

        stats = DashboardService(db_session).statistics(realtor.id)

        assert stats.active_listings == 2
        assert stats.pending_sales == 1
        assert stats.closed_sales == 1
        assert stats.active_listings + stats.pending_sales + stats.closed_sales == 4

    def test_new_leads_use_trailing_window(self, db_session, realtor):
        now = utcnow()
        for days_ago in (0, 3, 8, 30):
            db_session.add(Client(
                name=f"Lead {days_ago}",
                email=f"lead{days_ago}@example.com",
                realtor_id=realtor.id,
                created_at=now - timedelta(days=days_ago),
            ))
        db_session.flush()

        service = DashboardService(db_session)

        assert service.statistics(realtor.id, now=now).new_leads == 2
        assert service.statistics(realtor.id, now=now, window_days=10).new_leads == 3

    def test_statistics_to_dict_uses_wire_names(self, db_session, realtor):
        assert DashboardService(db_session).statistics(realtor.id).to_dict() == {
            "activeListings": 0,
            "pendingSales": 0,
            "closedSales": 0,
            "newLeads": 0,
        }


class TestSchedule:

    @pytest.fixture
    def appointments(self, db_session, realtor):
        service = AppointmentService(db_session)
        tomorrow = service.create_appointment(
            realtor.id, {"title": "Tomorrow", "location": "Office", "date": _local_noon(1)}
        )
        today = service.create_appointment(
            realtor.id, {"title": "Today", "location": "Office", "date": _local_noon(0)}
        )
        return today, tomorrow

    def test_list_is_ordered_by_date(self, db_session, realtor, appointments):
        today, tomorrow = appointments

        listed = AppointmentService(db_session).list_appointments(realtor.id)

        assert [a.id for a in listed] == [today.id, tomorrow.id]

    def test_today_only_includes_local_calendar_day(self, db_session, realtor, appointments):
        today, _ = appointments

        todays = AppointmentService(db_session).appointments_for_day(realtor.id)

        assert [a.id for a in todays] == [today.id]

    def test_create_logs_appointment_activity(self, db_session, realtor, appointments):
        types = [a.type for a in db_session.query(Activity).filter_by(user_id=realtor.id)]

        assert types == ["appointment", "appointment"]

    def test_appointment_may_reference_missing_property(self, db_session, realtor):
        appt = AppointmentService(db_session).create_appointment(
            realtor.id,
            {"title": "Viewing", "location": "Somewhere", "date": _local_noon(), "property_id": 4242},
        )

        assert db_session.get(Appointment, appt.id).property_id == 4242


class TestSummary:

    def test_summary_combines_everything(self, db_session, realtor):
        _add_property(db_session, realtor, price=1000, status="Pending")
        for i in range(7):
            db_session.add(Activity(
                type="listing",
                title=f"Entry {i}",
                description="",
                user_id=realtor.id,
                created_at=utcnow() - timedelta(minutes=10 - i),
            ))
        db_session.flush()

        summary = DashboardService(db_session).summary(realtor.id)

        assert summary.portfolio_value == 1000
        assert summary.statistics.pending_sales == 1
        assert [a.title for a in summary.activities] == [f"Entry {i}" for i in (6, 5, 4, 3, 2)]
        assert summary.today_appointments == []
