"""Pytest configuration and fixtures."""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

# Set test environment
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SEED_DEMO_DATA", "false")

from core.db import Base
from core.models import Client, Property, User
from core.utils import hash_password


SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="session")
def engine():
    """Create a test database engine."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign key support for SQLite
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


@pytest.fixture(scope="session")
def tables(engine):
    """Create all tables for testing."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(engine, tables) -> Session:
    """
    Returns a SQLAlchemy session for testing.

    Each test gets a fresh transaction that is rolled back after the test.
    """
    connection = engine.connect()
    transaction = connection.begin()

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=connection)
    session = SessionLocal()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


def make_user(session: Session, username: str, name: str = None) -> User:
    user = User(
        username=username,
        password=hash_password("password"),
        name=name or username.title(),
        email=f"{username}@example.com",
        role="realtor",
    )
    session.add(user)
    session.flush()
    return user


def property_data(**overrides) -> dict:
    """Valid create payload (snake_case) for a listing."""
    data = {
        "title": "Luxury Villa",
        "address": "123 Luxury Ave",
        "city": "Beverly Hills",
        "state": "CA",
        "zip_code": "90210",
        "price": 4500000,
        "bedrooms": 5,
        "bathrooms": 4,
        "square_feet": 6200,
        "type": "For Sale",
        "status": "Active",
    }
    data.update(overrides)
    return data


@pytest.fixture
def realtor(db_session) -> User:
    """The default acting user (matches DEFAULT_USERNAME)."""
    return make_user(db_session, "alexmorgan", "Alex Morgan")


@pytest.fixture
def other_realtor(db_session) -> User:
    return make_user(db_session, "jordanlee", "Jordan Lee")


@pytest.fixture
def sample_property(db_session, realtor) -> Property:
    """A listing owned by the default realtor."""
    prop = Property(
        listed_by_id=realtor.id,
        year_built=1990,
        images=["a.jpg"],
        main_image="a.jpg",
        features=["Pool"],
        **property_data(price=500000),
    )
    db_session.add(prop)
    db_session.flush()
    return prop


@pytest.fixture
def sample_client(db_session, realtor) -> Client:
    client = Client(name="Sarah Johnson", email="sarah@example.com", realtor_id=realtor.id)
    db_session.add(client)
    db_session.flush()
    return client


@pytest.fixture
def api_client(db_session):
    """FastAPI TestClient bound to the test transaction."""
    from fastapi.testclient import TestClient

    from api.app import app
    from api.deps import get_db, get_readonly_db

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_readonly_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
