"""Database connection and session management."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Generator, Iterable, List, Optional

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from .config import get_settings
from .exceptions import ConfigurationError, UpstreamError
from .logging_config import get_logger

LOGGER = get_logger(__name__)
SETTINGS = get_settings()

# Tables that MUST exist for the API to function
REQUIRED_TABLES = [
    "users",
    "properties",
    "clients",
    "messages",
    "appointments",
    "activities",
    "theme_settings",
    "page_content",
    "website_themes",
    "communities",
]


def _set_sqlite_pragmas(sqlite_engine, wal: bool) -> None:
    """Enforce foreign keys (off by default in SQLite) on every new connection."""

    @event.listens_for(sqlite_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if wal:
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA busy_timeout=30000")
        cursor.close()


def _create_engine():
    """Create the engine with pooling appropriate to the backend."""
    if SETTINGS.is_memory_database():
        # One shared connection, otherwise each checkout sees an empty database
        memory_engine = create_engine(
            SETTINGS.database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        _set_sqlite_pragmas(memory_engine, wal=False)
        return memory_engine

    if SETTINGS.is_sqlite():
        sqlite_engine = create_engine(
            SETTINGS.database_url,
            connect_args={"check_same_thread": False},
            poolclass=NullPool,
        )
        _set_sqlite_pragmas(sqlite_engine, wal=True)
        return sqlite_engine

    return create_engine(
        SETTINGS.database_url,
        pool_size=SETTINGS.db_pool_size,
        max_overflow=SETTINGS.db_max_overflow,
        pool_timeout=SETTINGS.db_pool_timeout,
        pool_pre_ping=True,
    )


engine = _create_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Commits on success, rolls back on any exception.
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def upsert(
    session: Session,
    model: Any,
    values: Dict[str, Any],
    conflict_columns: Iterable[str],
    update_columns: Optional[Iterable[str]] = None,
) -> None:
    """
    Atomic insert-or-update keyed by a unique constraint.

    Emits a single ``INSERT ... ON CONFLICT`` statement. When
    ``update_columns`` is empty the conflicting row is left untouched
    (insert-if-absent).

    Args:
        session: Active session.
        model: Mapped class to write.
        values: Column values for the insert.
        conflict_columns: Columns of the unique constraint.
        update_columns: Columns overwritten on conflict.

    Raises:
        UpstreamError: The row violates another constraint of the table.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    elif dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    else:
        raise ConfigurationError(f"Atomic upsert is not supported on dialect '{dialect}'")

    stmt = insert(model).values(**values)
    update_columns = list(update_columns or [])
    if update_columns:
        stmt = stmt.on_conflict_do_update(
            index_elements=list(conflict_columns),
            set_={col: stmt.excluded[col] for col in update_columns},
        )
    else:
        stmt = stmt.on_conflict_do_nothing(index_elements=list(conflict_columns))

    try:
        session.execute(stmt)
    except IntegrityError as exc:
        LOGGER.error(f"Upsert into {model.__tablename__} rejected: {exc.orig}")
        raise UpstreamError(f"The store rejected the write to {model.__tablename__}") from exc


def init_db() -> Dict[str, Any]:
    """
    Create any missing tables.

    Returns:
        Dict with initialization results.
    """
    # Import models to ensure they are registered with Base
    from . import models  # noqa: F401

    result: Dict[str, Any] = {
        "status": "success",
        "tables_created": [],
        "tables_existing": [],
        "warnings": [],
    }

    existing_tables = set(inspect(engine).get_table_names())
    Base.metadata.create_all(bind=engine)
    final_tables = set(inspect(engine).get_table_names())

    result["tables_created"] = sorted(final_tables - existing_tables)
    result["tables_existing"] = sorted(existing_tables)

    missing_required = [t for t in REQUIRED_TABLES if t not in final_tables]
    if missing_required:
        result["warnings"].append(f"Missing required tables: {missing_required}")
        result["status"] = "warning"

    if result["tables_created"]:
        LOGGER.info(f"Created tables: {result['tables_created']}")

    return result


def validate_database() -> Dict[str, Any]:
    """
    Validate database connection and required tables.

    Returns:
        Dict with validation results.
    """
    result: Dict[str, Any] = {
        "status": "ok",
        "database_url": SETTINGS.database_url,
        "tables_found": [],
        "tables_missing": [],
        "errors": [],
    }

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

        existing_tables: List[str] = inspect(engine).get_table_names()
        result["tables_found"] = existing_tables

        missing = [t for t in REQUIRED_TABLES if t not in existing_tables]
        result["tables_missing"] = missing
        if missing:
            result["status"] = "missing_tables"
            result["errors"].append(f"Missing required tables: {missing}")

    except Exception as e:
        result["status"] = "error"
        result["errors"].append(str(e))

    return result
