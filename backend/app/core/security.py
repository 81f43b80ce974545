# app/core/security.py

from datetime import datetime, timedelta
from typing import Any, Dict, Tuple

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.core.config import settings

# pbkdf2_sha256: no 72-byte password limit, no native bcrypt build
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ACCESS = "access"
REFRESH = "refresh"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _secret_for(token_type: str) -> str:
    if token_type == REFRESH:
        return settings.JWT_REFRESH_SECRET_KEY
    return settings.JWT_SECRET_KEY


def _create_token(user_id: int, expires_delta: timedelta, token_type: str) -> str:
    now = datetime.utcnow()
    claims = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
        "type": token_type,
    }
    return jwt.encode(claims, _secret_for(token_type), algorithm=settings.JWT_ALGORITHM)


def create_access_token(user_id: int) -> str:
    return _create_token(
        user_id,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        ACCESS,
    )


def create_refresh_token(user_id: int) -> str:
    return _create_token(
        user_id,
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        REFRESH,
    )


def create_token_pair(user_id: int) -> Tuple[str, str]:
    return create_access_token(user_id), create_refresh_token(user_id)


def decode_token(token: str, token_type: str = ACCESS) -> Dict[str, Any]:
    """
    Decode a token signed with the secret of ``token_type`` and check that the
    ``type`` claim matches. Raises JWTError on any mismatch.
    """
    payload = jwt.decode(
        token,
        _secret_for(token_type),
        algorithms=[settings.JWT_ALGORITHM],
    )
    if payload.get("type") != token_type:
        raise JWTError("Invalid token type")
    if not payload.get("sub"):
        raise JWTError("Missing subject in token")
    return payload


def user_id_from_token(token: str, token_type: str = ACCESS) -> int:
    payload = decode_token(token, token_type)
    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        raise JWTError("Invalid subject in token")
