# backend/app/schemas/reservation.py
from datetime import date, datetime

from pydantic import BaseModel, Field, field_serializer


class ReservationCreate(BaseModel):
    listing_id: int
    start_date: date
    end_date: date
    total_price: int = Field(ge=1)


class ReservationOut(BaseModel):
    id: int
    listing_id: int
    user_id: int
    start_date: date
    end_date: date
    total_price: int
    created_at: datetime

    model_config = {"from_attributes": True}

    # dates leave the API as ISO-8601 strings
    @field_serializer("start_date", "end_date")
    def _iso_day(self, value: date) -> str:
        return value.isoformat()

    @field_serializer("created_at")
    def _iso(self, value: datetime) -> str:
        return value.isoformat()


class DeleteResult(BaseModel):
    count: int


class EmptyState(BaseModel):
    title: str
    subtitle: str
    show_reset: bool = False
