"""SQLAlchemy ORM models for the realty CRM."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
import enum

from core.db import Base
from core.utils import utcnow


# =============================================================================
# Enums
# =============================================================================


class ListingStatus(str, enum.Enum):
    """Listing lifecycle statuses."""
    ACTIVE = "Active"
    PENDING = "Pending"
    SOLD = "Sold"
    DRAFT = "Draft"


class ListingType(str, enum.Enum):
    """Listing offer types."""
    FOR_SALE = "For Sale"
    FOR_RENT = "For Rent"


class UserRole(str, enum.Enum):
    """User roles."""
    REALTOR = "realtor"
    ADMIN = "admin"
    CLIENT = "client"


# =============================================================================
# User Model
# =============================================================================


class User(Base):
    """An agent (or other participant) of the platform."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    profile_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(20), default=UserRole.REALTOR.value)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    properties: Mapped[list["Property"]] = relationship("Property", back_populates="listed_by")


# =============================================================================
# Property Model
# =============================================================================


class Property(Base):
    """
    A listing owned by a realtor.

    ``images`` is the canonical ordered gallery; ``main_image`` mirrors
    ``images[0]`` (see domain.properties.reconcile_images).
    """
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)

    # Address
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)

    # Listing facts
    price: Mapped[float] = mapped_column(Float, nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[float] = mapped_column(Float, nullable=False)
    square_feet: Mapped[int] = mapped_column(Integer, nullable=False)
    lot_size: Mapped[float] = mapped_column(Float, default=0)  # acres
    year_built: Mapped[int] = mapped_column(Integer, default=0)
    parking_spaces: Mapped[str] = mapped_column(String(50), default="")
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # Media
    main_image: Mapped[str] = mapped_column(Text, default="")
    images: Mapped[list] = mapped_column(JSON, default=list)
    features: Mapped[list] = mapped_column(JSON, default=list)

    listed_by_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    listed_by: Mapped["User"] = relationship("User", back_populates="properties")

    __table_args__ = (
        Index("ix_properties_owner_status", "listed_by_id", "status"),
    )


# =============================================================================
# Client Model
# =============================================================================


class Client(Base):
    """A lead or contact owned by a realtor."""
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    profile_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    realtor_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


# =============================================================================
# Message Model
# =============================================================================


class Message(Base):
    """Directed text between two users. Only ``read`` changes after creation."""
    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    receiver_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


# =============================================================================
# Appointment Model
# =============================================================================


class Appointment(Base):
    """
    A scheduled event.

    client_id and property_id are plain references: an appointment may
    outlive the property it points at.
    """
    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    client_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    property_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    realtor_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


# =============================================================================
# Activity Model
# =============================================================================


class Activity(Base):
    """Append-only audit entry written as a side effect of other mutations."""
    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    property_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


# =============================================================================
# Configuration Models
# =============================================================================


class ThemeSettings(Base):
    """Colour and typography configuration, one row per scope."""
    __tablename__ = "theme_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    scope_id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)

    # Colours
    primary_color: Mapped[str] = mapped_column(String(20), nullable=False)
    secondary_color: Mapped[str] = mapped_column(String(20), nullable=False)
    tertiary_color: Mapped[str] = mapped_column(String(20), nullable=False)
    text_color: Mapped[str] = mapped_column(String(20), nullable=False)
    link_color: Mapped[str] = mapped_column(String(20), nullable=False)
    link_hover_color: Mapped[str] = mapped_column(String(20), nullable=False)
    navigation_color: Mapped[str] = mapped_column(String(20), nullable=False)
    sub_navigation_color: Mapped[str] = mapped_column(String(20), nullable=False)
    header_background_color: Mapped[str] = mapped_column(String(20), nullable=False)

    # Typography
    heading_font: Mapped[str] = mapped_column(String(100), nullable=False)
    body_font: Mapped[str] = mapped_column(String(100), nullable=False)
    button_font: Mapped[str] = mapped_column(String(100), nullable=False)
    heading_font_weight: Mapped[str] = mapped_column(String(10), nullable=False)
    body_font_weight: Mapped[str] = mapped_column(String(10), nullable=False)
    button_font_weight: Mapped[str] = mapped_column(String(10), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class PageContent(Base):
    """Overridable page copy keyed by (page, section, key)."""
    __tablename__ = "page_content"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    page_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    section_name: Mapped[str] = mapped_column(String(100), nullable=False)
    content_key: Mapped[str] = mapped_column(String(100), nullable=False)
    content_value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content_type: Mapped[str] = mapped_column(String(20), nullable=False, default="text")
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint(
            "page_name", "section_name", "content_key", name="uq_page_content_triple"
        ),
    )


class WebsiteTheme(Base):
    """A named site layout. At most one row has is_active set."""
    __tablename__ = "website_themes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class Community(Base):
    """Read-only marketing content for neighbourhoods."""
    __tablename__ = "communities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
