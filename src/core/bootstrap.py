"""Application bootstrap, environment validation and demo data.

The API calls ``bootstrap_application`` from its lifespan; the CLI exposes
the same steps as ``init-db`` and ``seed``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, text
from sqlalchemy.orm import Session

from .config import get_settings
from .db import engine, get_session, init_db
from .logging_config import get_logger
from .models import (
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
from .utils import to_utc, utcnow

LOGGER = get_logger(__name__)
SETTINGS = get_settings()

_IMG = "https://images.unsplash.com/{}?auto=format&fit=crop&w={}&h={}"


@dataclass
class ValidationResult:
    """Result of environment validation."""

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error and mark validation as failed."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning (does not fail validation)."""
        self.warnings.append(message)


def validate_environment() -> ValidationResult:
    """Check the settings needed to serve requests."""
    result = ValidationResult()

    if not SETTINGS.database_url:
        result.add_error("DATABASE_URL is not set.")
    if not SETTINGS.default_username:
        result.add_error("DEFAULT_USERNAME is not set.")

    if SETTINGS.environment == "production":
        if SETTINGS.is_sqlite():
            result.add_warning("SQLite is in use in production. Concurrent writers will serialize.")
        if SETTINGS.get_cors_origins() == ["*"]:
            result.add_warning("CORS_ALLOWED_ORIGINS is '*' in production.")
        if SETTINGS.seed_demo_data:
            result.add_warning("SEED_DEMO_DATA is enabled in production.")

    return result


def check_database_connection() -> bool:
    """
    Verify database connectivity.

    Returns:
        True if connection successful, False otherwise.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as exc:
        LOGGER.error("Database connection check failed: %s", exc)
        return False


# =============================================================================
# Demo data
# =============================================================================


def _is_empty(session: Session, model: Any, *criteria: Any) -> bool:
    stmt = select(func.count()).select_from(model)
    if criteria:
        stmt = stmt.where(*criteria)
    return (session.scalar(stmt) or 0) == 0


def _seed_user(session: Session) -> User:
    from domain.users import UserService

    users = UserService(session)
    user = users.find_by_username(SETTINGS.default_username)
    if user is not None:
        return user
    return users.create_user(
        username=SETTINGS.default_username,
        password="password",
        name="Alex Morgan",
        email="alex@example.com",
        phone="555-987-6543",
        profile_image=_IMG.format("photo-1500648767791-00dcc994a43e", 500, 500),
    )


def _seed_clients(session: Session, user: User) -> int:
    rows = [
        ("Sarah Johnson", "sarah@example.com", "555-123-4567", "photo-1573496359142-b8d87734a5a2"),
        ("David Miller", "david@example.com", "555-234-5678", "photo-1560250097-0b93528c311a"),
        ("Jennifer Lee", "jennifer@example.com", "555-345-6789", "photo-1580489944761-15a19d654956"),
        ("Michael Chang", "michael@example.com", "555-456-7890", "photo-1507003211169-0a1dd7228f2d"),
    ]
    for name, email, phone, photo in rows:
        session.add(Client(
            name=name,
            email=email,
            phone=phone,
            realtor_id=user.id,
            profile_image=_IMG.format(photo, 500, 500),
        ))
    return len(rows)


def _seed_properties(session: Session, user: User) -> int:
    villa = _IMG.format("photo-1600596542815-ffad4c1539a9", 1200, 800)
    modern = _IMG.format("photo-1512917774080-9991f1c4c750", 1200, 800)
    penthouse = _IMG.format("photo-1613977257363-707ba9348227", 1200, 800)
    malibu = _IMG.format("photo-1600607687939-ce8a6c25118c", 1200, 800)

    rows = [
        dict(
            title="Luxury Villa", address="123 Luxury Ave", city="Beverly Hills", state="CA",
            zip_code="90210", price=4500000, bedrooms=5, bathrooms=4, square_feet=6200,
            description=(
                "This stunning luxury villa offers the perfect blend of elegant design and "
                "modern convenience, with high ceilings, an open floor plan and panoramic views."
            ),
            type="For Sale", status="Active", main_image=villa, images=[villa, modern],
            features=["Swimming Pool", "Smart Home System", "Home Theater", "Wine Cellar",
                      "Outdoor Kitchen", "3-Car Garage"],
        ),
        dict(
            title="Modern House", address="456 Contemporary Dr", city="Bel Air", state="CA",
            zip_code="90077", price=2800000, bedrooms=4, bathrooms=3, square_feet=3800,
            description=(
                "A modern architectural masterpiece with clean lines, open spaces and a "
                "seamless indoor-outdoor living experience."
            ),
            type="For Sale", status="Active", main_image=modern, images=[modern],
            features=["Smart Home", "Wine Cellar", "Home Office", "Media Room"],
        ),
        dict(
            title="Luxury Penthouse", address="789 Skyline Blvd", city="Los Angeles", state="CA",
            zip_code="90001", price=180000, bedrooms=3, bathrooms=3.5, square_feet=3200,
            description=(
                "Stunning penthouse with panoramic city views, high-end finishes and a "
                "private rooftop terrace."
            ),
            type="For Rent", status="Active", main_image=penthouse, images=[penthouse],
            features=["City Views", "Concierge", "Fitness Center", "Spa"],
        ),
        dict(
            title="Elegant Villa", address="321 Ocean View Dr", city="Malibu", state="CA",
            zip_code="90265", price=5200000, bedrooms=6, bathrooms=5, square_feet=7500,
            description=(
                "Breathtaking oceanfront villa with private beach access, a chef's kitchen "
                "and magnificent outdoor spaces."
            ),
            type="For Sale", status="Active", main_image=malibu, images=[malibu],
            features=["Ocean Views", "Private Beach", "Pool", "Tennis Court"],
        ),
    ]
    for row in rows:
        session.add(Property(listed_by_id=user.id, **row))
    return len(rows)


def _seed_appointments(session: Session, user: User) -> int:
    clients = list(session.scalars(select(Client).where(Client.realtor_id == user.id).order_by(Client.id)))
    props = list(session.scalars(select(Property).where(Property.listed_by_id == user.id).order_by(Property.id)))
    if len(clients) < 4 or len(props) < 4:
        LOGGER.info("Skipping demo appointments: not enough clients or properties")
        return 0

    today = datetime.now().astimezone()
    tomorrow = today + timedelta(days=1)

    def at(day: datetime, hour: int, minute: int) -> datetime:
        return to_utc(day.replace(hour=hour, minute=minute, second=0, microsecond=0))

    def where(prop: Property) -> str:
        return f"{prop.address}, {prop.city}, {prop.state}"

    rows = [
        ("Property Viewing", where(props[0]), at(today, 10, 30), clients[0], props[0],
         "Client is very interested in this property"),
        ("Listing Presentation", where(props[3]), at(today, 14, 0), clients[1], props[3],
         "Prepare listing presentation materials"),
        ("Client Meeting", "Office - Conference Room B", at(tomorrow, 11, 0), clients[2], None,
         "Discuss property requirements"),
        ("Property Viewing", where(props[2]), at(tomorrow, 15, 30), clients[3], props[2],
         "Client interested in penthouse option"),
    ]
    for title, location, date, client, prop, notes in rows:
        session.add(Appointment(
            title=title,
            location=location,
            date=date,
            client_id=client.id,
            property_id=prop.id if prop else None,
            realtor_id=user.id,
            notes=notes,
        ))
    return len(rows)


def _seed_activities(session: Session, user: User) -> int:
    props = list(session.scalars(select(Property).where(Property.listed_by_id == user.id).order_by(Property.id)))
    now = utcnow()
    rows = [
        ("message", "New message from David Miller", "Hey, are we still meeting today at 3pm?", None),
    ]
    if len(props) > 2:
        rows.append(("offer", "Offer accepted", f"{props[2].title} on {props[2].address}", props[2].id))
    if len(props) > 3:
        rows.append(("listing", "New listing added", f"{props[3].title} on {props[3].address}", props[3].id))

    # Later rows are newer
    for offset, (kind, title, description, property_id) in enumerate(reversed(rows)):
        session.add(Activity(
            type=kind,
            title=title,
            description=description,
            user_id=user.id,
            property_id=property_id,
            created_at=now - timedelta(hours=offset + 1),
        ))
    return len(rows)


def _seed_configuration(session: Session) -> Dict[str, int]:
    from domain.theming import DEFAULT_THEME_SETTINGS

    counts: Dict[str, int] = {}

    if _is_empty(session, WebsiteTheme):
        session.add(WebsiteTheme(
            name="Kumara Classic",
            description="Classic layout with a full-width hero and gold accents",
            is_active=True,
        ))
        session.add(WebsiteTheme(
            name="Modern Luxury",
            description="Minimal layout with large photography and dark navigation",
            is_active=False,
        ))
        counts["website_themes"] = 2

    if _is_empty(session, Community):
        for name, location, description, photo in [
            ("Beverly Hills", "Los Angeles County, CA",
             "Iconic estates, tree-lined streets and world-class shopping.",
             "photo-1580587771525-78b9dba3b914"),
            ("Malibu", "Los Angeles County, CA",
             "Oceanfront living along twenty-one miles of coastline.",
             "photo-1523217582562-09d0def993a6"),
            ("Bel Air", "Los Angeles, CA",
             "Secluded hillside residences minutes from the city.",
             "photo-1564013799919-ab600027ffc6"),
        ]:
            session.add(Community(
                name=name,
                location=location,
                description=description,
                image=_IMG.format(photo, 800, 600),
            ))
        counts["communities"] = 3

    scope = SETTINGS.default_theme_scope
    if _is_empty(session, ThemeSettings, ThemeSettings.scope_id == scope):
        session.add(ThemeSettings(scope_id=scope, **DEFAULT_THEME_SETTINGS))
        counts["theme_settings"] = 1

    if _is_empty(session, PageContent, PageContent.page_name == "home"):
        for key, value in [
            ("title", "Find Your Dream Home"),
            ("subtitle", "Luxury properties in the most desirable neighbourhoods"),
            ("button_text", "View Properties"),
        ]:
            session.add(PageContent(
                page_name="home",
                section_name="hero",
                content_key=key,
                content_value=value,
                content_type="text",
            ))
        counts["page_content"] = 3

    return counts


def seed_demo_data(session: Session) -> Dict[str, int]:
    """
    Insert demo records. Each kind is only seeded while it is empty, so
    running this twice changes nothing.

    Returns:
        Number of rows inserted per kind.
    """
    counts: Dict[str, int] = {}
    user = _seed_user(session)

    if _is_empty(session, Client, Client.realtor_id == user.id):
        counts["clients"] = _seed_clients(session, user)
    if _is_empty(session, Property, Property.listed_by_id == user.id):
        counts["properties"] = _seed_properties(session, user)
    session.flush()

    if _is_empty(session, Appointment, Appointment.realtor_id == user.id):
        counts["appointments"] = _seed_appointments(session, user)
    if _is_empty(session, Activity, Activity.user_id == user.id):
        counts["activities"] = _seed_activities(session, user)

    counts.update(_seed_configuration(session))
    session.flush()

    if counts:
        LOGGER.info(f"Seeded demo data: {counts}")
    return counts


def bootstrap_application(seed: Optional[bool] = None) -> Dict[str, Any]:
    """
    Perform full application bootstrap.

    1. Validate environment
    2. Check DB connection
    3. Create missing tables
    4. Seed demo data (when SEED_DEMO_DATA is set)
    """
    validation = validate_environment()
    for warning in validation.warnings:
        LOGGER.warning("Config Warning: %s", warning)

    if not validation.is_valid:
        for error in validation.errors:
            LOGGER.error("Config Error: %s", error)
        raise ValueError("Environment validation failed. See logs for details.")

    if not check_database_connection():
        raise ConnectionError("Could not connect to the database.")

    result: Dict[str, Any] = {"database": init_db(), "seeded": {}}

    if SETTINGS.seed_demo_data if seed is None else seed:
        with get_session() as session:
            result["seeded"] = seed_demo_data(session)

    LOGGER.info("Application bootstrap completed successfully.")
    return result
