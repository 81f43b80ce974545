# app/db/crud_users.py

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import User, UserRefreshToken
from app.core.security import get_password_hash


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    res = await db.execute(select(User).where(User.email == email.lower()))
    return res.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
) -> User:
    """
    Create a user with hashed password. Emails are stored lowercased so
    lookups are case-insensitive.
    """
    user = User(
        name=name,
        email=email.lower(),
        hashed_password=get_password_hash(password),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def save_refresh_token(db: AsyncSession, user_id: int, token: str) -> None:
    """
    One live refresh token per user: revoke the previous ones, then store the new.
    """
    await db.execute(
        update(UserRefreshToken)
        .where(UserRefreshToken.user_id == user_id, UserRefreshToken.revoked == False)  # noqa: E712
        .values(revoked=True)
    )

    db.add(UserRefreshToken(user_id=user_id, token=token))
    await db.commit()


async def is_refresh_token_active(db: AsyncSession, user_id: int, token: str) -> bool:
    res = await db.execute(
        select(UserRefreshToken.id).where(
            UserRefreshToken.user_id == user_id,
            UserRefreshToken.token == token,
            UserRefreshToken.revoked == False,  # noqa: E712
        )
    )
    return res.first() is not None


async def revoke_refresh_token(db: AsyncSession, token: str) -> None:
    await db.execute(
        update(UserRefreshToken)
        .where(UserRefreshToken.token == token, UserRefreshToken.revoked == False)  # noqa: E712
        .values(revoked=True)
    )
    await db.commit()
