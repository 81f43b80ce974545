# app/api/dependencies.py
import logging
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.db.models import User
from app.db import crud_users
from app.core.security import user_id_from_token

logger = logging.getLogger("uvicorn.error")
security = HTTPBearer(auto_error=False)


async def _user_from_credentials(
    db: AsyncSession,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )

    try:
        uid = user_id_from_token(credentials.credentials)
    except JWTError:
        logger.warning("rejected bearer token", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )

    user = await crud_users.get_user(db, uid)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found"
        )
    return user


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> User:
    return await _user_from_credentials(db, credentials)


async def get_optional_user(
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[User]:
    """
    Like get_current_user, but anonymous callers get None instead of a 401.
    A token that is present but broken is still rejected.
    """
    if credentials is None:
        return None
    return await _user_from_credentials(db, credentials)


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
