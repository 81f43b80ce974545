# app/schemas/auth.py
from typing import Optional
from pydantic import BaseModel

from app.schemas.user import UserBase


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: Optional[UserBase] = None


class RefreshRequest(BaseModel):
    refresh_token: str


class LogoutRequest(BaseModel):
    refresh_token: Optional[str] = None
