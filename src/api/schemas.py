"""Request and response models shared by the route modules.

Wire format is camelCase; snake_case field names are accepted on input too.
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.utils import ensure_aware

# SQLite returns naive datetimes; they are stored as UTC
UtcDatetime = Annotated[datetime, AfterValidator(ensure_aware)]

StatusLiteral = Literal["Active", "Pending", "Sold", "Draft"]


class CamelModel(BaseModel):
    """Base model with camelCase aliases and ORM attribute loading."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Users
# =============================================================================


class UserOut(CamelModel):
    """A user as exposed over the API. The password is never included."""
    id: int
    username: str
    name: str
    email: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    role: str
    created_at: Optional[UtcDatetime] = None


# =============================================================================
# Properties
# =============================================================================


class PropertyOut(CamelModel):
    id: int
    title: str
    address: str
    city: str
    state: str
    zip_code: str
    price: float
    bedrooms: int
    bathrooms: float
    square_feet: int
    lot_size: float = 0
    year_built: int = 0
    parking_spaces: str = ""
    description: Optional[str] = None
    type: str
    status: str
    main_image: str = ""
    images: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    listed_by_id: int
    created_at: Optional[UtcDatetime] = None


class PropertyCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=50)
    zip_code: str = Field(..., min_length=1, max_length=20)
    price: float = Field(..., ge=0)
    bedrooms: int = Field(..., ge=0)
    bathrooms: float = Field(..., ge=0)
    square_feet: int = Field(..., ge=0)
    lot_size: Optional[float] = Field(None, ge=0)
    year_built: Optional[int] = Field(None, ge=0)
    parking_spaces: Optional[str] = None
    description: Optional[str] = None
    type: str = Field(..., min_length=1, max_length=20)
    status: StatusLiteral
    main_image: Optional[str] = None
    images: Optional[List[str]] = None
    features: Optional[List[str]] = None


class PropertyUpdate(CamelModel):
    """
    Partial update. Only fields present in the body are applied; an
    explicit null on a required field is rejected by the domain layer.
    ``id``, ``listedById`` and ``createdAt`` are accepted and ignored.
    """
    id: Optional[int] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=50)
    zip_code: Optional[str] = Field(None, min_length=1, max_length=20)
    price: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[float] = Field(None, ge=0)
    square_feet: Optional[int] = Field(None, ge=0)
    lot_size: Optional[float] = Field(None, ge=0)
    year_built: Optional[int] = Field(None, ge=0)
    parking_spaces: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = Field(None, min_length=1, max_length=20)
    status: Optional[StatusLiteral] = None
    main_image: Optional[str] = None
    images: Optional[List[str]] = None
    features: Optional[List[str]] = None
    listed_by_id: Optional[int] = None
    created_at: Optional[datetime] = None


class PropertyTransfer(CamelModel):
    new_owner_id: int


# =============================================================================
# Clients, messages, appointments, activities
# =============================================================================


class ClientOut(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    realtor_id: int
    created_at: Optional[UtcDatetime] = None


class ClientCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    phone: Optional[str] = Field(None, max_length=40)
    profile_image: Optional[str] = None


class MessageOut(CamelModel):
    id: int
    sender_id: int
    receiver_id: int
    content: str
    read: bool
    created_at: Optional[UtcDatetime] = None


class MessageCreate(CamelModel):
    receiver_id: int
    content: str = Field(..., min_length=1)


class ConversationOut(CamelModel):
    user: UserOut
    last_message: MessageOut


class AppointmentOut(CamelModel):
    id: int
    title: str
    location: str
    date: UtcDatetime
    client_id: Optional[int] = None
    property_id: Optional[int] = None
    realtor_id: int
    notes: Optional[str] = None
    created_at: Optional[UtcDatetime] = None


class AppointmentCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    date: datetime
    client_id: Optional[int] = None
    property_id: Optional[int] = None
    notes: Optional[str] = None


class ActivityOut(CamelModel):
    id: int
    type: str
    title: str
    description: str
    user_id: int
    property_id: Optional[int] = None
    created_at: Optional[UtcDatetime] = None


class ActivityCreate(CamelModel):
    type: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    property_id: Optional[int] = None


# =============================================================================
# Dashboard
# =============================================================================


class StatisticsOut(CamelModel):
    active_listings: int
    pending_sales: int
    closed_sales: int
    new_leads: int


class DashboardOut(CamelModel):
    portfolio_value: float
    statistics: StatisticsOut
    activities: List[ActivityOut]
    today_appointments: List[AppointmentOut]


# =============================================================================
# Theme & content
# =============================================================================


class ThemeSettingsOut(CamelModel):
    id: int
    scope_id: int
    primary_color: str
    secondary_color: str
    tertiary_color: str
    text_color: str
    link_color: str
    link_hover_color: str
    navigation_color: str
    sub_navigation_color: str
    header_background_color: str
    heading_font: str
    body_font: str
    button_font: str
    heading_font_weight: str
    body_font_weight: str
    button_font_weight: str
    updated_at: Optional[UtcDatetime] = None


class ThemeSettingsUpdate(CamelModel):
    primary_color: Optional[str] = Field(None, max_length=20)
    secondary_color: Optional[str] = Field(None, max_length=20)
    tertiary_color: Optional[str] = Field(None, max_length=20)
    text_color: Optional[str] = Field(None, max_length=20)
    link_color: Optional[str] = Field(None, max_length=20)
    link_hover_color: Optional[str] = Field(None, max_length=20)
    navigation_color: Optional[str] = Field(None, max_length=20)
    sub_navigation_color: Optional[str] = Field(None, max_length=20)
    header_background_color: Optional[str] = Field(None, max_length=20)
    heading_font: Optional[str] = Field(None, max_length=100)
    body_font: Optional[str] = Field(None, max_length=100)
    button_font: Optional[str] = Field(None, max_length=100)
    heading_font_weight: Optional[str] = Field(None, max_length=10)
    body_font_weight: Optional[str] = Field(None, max_length=10)
    button_font_weight: Optional[str] = Field(None, max_length=10)


class WebsiteThemeOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[UtcDatetime] = None


class WebsiteThemeCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    is_active: bool = False


class PageContentOut(CamelModel):
    id: int
    page_name: str
    section_name: str
    content_key: str
    content_value: str
    content_type: str
    updated_at: Optional[UtcDatetime] = None


class PageContentIn(CamelModel):
    page_name: str = Field(..., min_length=1, max_length=100)
    section_name: str = Field(..., min_length=1, max_length=100)
    content_key: str = Field(..., min_length=1, max_length=100)
    content_value: str = ""
    content_type: Optional[str] = Field(None, max_length=20)


class CommunityOut(CamelModel):
    id: int
    name: str
    location: str
    description: Optional[str] = None
    image: Optional[str] = None
