# app/api/routers/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from jose import JWTError

from app.db.session import get_db
from app.db import crud_users
from app.schemas.auth import LogoutRequest, RefreshRequest, Token
from app.schemas.user import UserBase, UserCreate, UserLogin
from app.core.security import (
    REFRESH,
    create_token_pair,
    user_id_from_token,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _issue_tokens(db: AsyncSession, user) -> Token:
    access, refresh = create_token_pair(user.id)
    await crud_users.save_refresh_token(db, user.id, refresh)
    return Token(
        access_token=access,
        refresh_token=refresh,
        user=UserBase.model_validate(user),
    )


@router.post("/register", response_model=Token)
async def register(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    existing = await crud_users.get_user_by_email(db, payload.email)
    if existing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email exists")

    user = await crud_users.create_user(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    logger.info(f"registered user {user.id}")
    return await _issue_tokens(db, user)


@router.post("/login", response_model=Token)
async def login(payload: UserLogin, db: AsyncSession = Depends(get_db)):
    user = await crud_users.get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return await _issue_tokens(db, user)


@router.post("/refresh", response_model=Token)
async def refresh(body: RefreshRequest, db: AsyncSession = Depends(get_db)):
    try:
        uid = user_id_from_token(body.refresh_token, REFRESH)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )

    if not await crud_users.is_refresh_token_active(db, uid, body.refresh_token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token revoked",
        )

    user = await crud_users.get_user(db, uid)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return await _issue_tokens(db, user)


@router.post("/logout")
async def logout(body: LogoutRequest | None = None, db: AsyncSession = Depends(get_db)):
    # body is optional; logging out without a token is a no-op
    if body and body.refresh_token:
        await crud_users.revoke_refresh_token(db, body.refresh_token)
    return {"ok": True}
