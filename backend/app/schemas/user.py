# backend/app/schemas/user.py
from datetime import datetime

from pydantic import BaseModel, EmailStr, field_serializer


class UserBase(BaseModel):
    id: int
    name: str
    email: EmailStr
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_serializer("created_at")
    def _iso(self, value: datetime) -> str:
        return value.isoformat()


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class HostInfo(BaseModel):
    """Owner as shown on a listing page (no email)."""

    id: int
    name: str

    model_config = {"from_attributes": True}
