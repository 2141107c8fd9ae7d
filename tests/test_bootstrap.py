"""Tests for environment validation and demo seeding."""
from __future__ import annotations

from sqlalchemy import func, select

from core.bootstrap import ValidationResult, seed_demo_data, validate_environment
from core.models import (
    Activity,
    Appointment,
    Client,
    Community,
    PageContent,
    Property,
    ThemeSettings,
    User,
    WebsiteTheme,
)
from domain.appointments import AppointmentService
from domain.theming import WebsiteThemeService


def _count(db_session, model):
    return db_session.scalar(select(func.count()).select_from(model))


def test_validation_result_collects_errors():
    result = ValidationResult()
    result.add_warning("careful")
    assert result.is_valid

    result.add_error("broken")
    assert not result.is_valid
    assert result.errors == ["broken"]
    assert result.warnings == ["careful"]


def test_environment_is_valid_for_tests():
    assert validate_environment().is_valid


def test_seed_inserts_demo_data(db_session):
    counts = seed_demo_data(db_session)

    assert counts == {
        "clients": 4,
        "properties": 4,
        "appointments": 4,
        "activities": 3,
        "website_themes": 2,
        "communities": 3,
        "theme_settings": 1,
        "page_content": 3,
    }
    user = db_session.scalars(select(User).where(User.username == "alexmorgan")).one()
    assert user.password != "password"
    assert _count(db_session, Property) == 4
    assert WebsiteThemeService(db_session).get_active_theme().name == "Kumara Classic"
    assert len(AppointmentService(db_session).appointments_for_day(user.id)) == 2


def test_seed_is_idempotent(db_session):
    seed_demo_data(db_session)

    assert seed_demo_data(db_session) == {}
    for model, expected in [
        (User, 1), (Client, 4), (Property, 4), (Appointment, 4), (Activity, 3),
        (WebsiteTheme, 2), (Community, 3), (ThemeSettings, 1), (PageContent, 3),
    ]:
        assert _count(db_session, model) == expected
