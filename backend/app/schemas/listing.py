# backend/app/schemas/listing.py
from datetime import date, datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_serializer

from app.domain.categories import Category
from app.schemas.reservation import EmptyState, ReservationOut
from app.schemas.user import HostInfo


class LocationIn(BaseModel):
    """Country picked in the wizard; only ``value`` is stored."""

    value: str = Field(min_length=1, max_length=10)
    label: Optional[str] = None
    flag: Optional[str] = None
    latlng: Optional[Tuple[float, float]] = None
    region: Optional[str] = None


class ListingCreate(BaseModel):
    category: Category
    location: LocationIn
    guest_count: int = Field(ge=1)
    room_count: int = Field(ge=1)
    bathroom_count: int = Field(ge=1)
    image_src: str = ""
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    price: int = Field(ge=1)


class ListingOut(BaseModel):
    id: int
    title: str
    description: str
    image_src: str
    category: str
    room_count: int
    bathroom_count: int
    guest_count: int
    location_value: str
    price: int
    user_id: int
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_serializer("created_at")
    def _iso(self, value: datetime) -> str:
        return value.isoformat()


class ListingDetail(ListingOut):
    user: HostInfo
    reservations: List[ReservationOut] = []
    disabled_dates: List[date] = []

    @field_serializer("disabled_dates")
    def _iso_days(self, value: List[date]) -> List[str]:
        return [d.isoformat() for d in value]


class ReservationWithListing(ReservationOut):
    listing: ListingOut


class ListingsPage(BaseModel):
    items: List[ListingOut]
    total: int
    page: int
    per_page: int
    empty_state: Optional[EmptyState] = None


class ReservationsPage(BaseModel):
    items: List[ReservationWithListing]
    empty_state: Optional[EmptyState] = None


class CategoryOut(BaseModel):
    label: str
    description: str
    count: int
