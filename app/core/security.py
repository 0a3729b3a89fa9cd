# Issues and verifies the JWT access tokens that identify the caller.
# Login and registration live outside this service; it only needs to turn a
# bearer token back into a user id.

from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union
import logging

from jose import jwt, JWTError

from app.core.config import settings

logger = logging.getLogger("app")

def create_access_token(subject: Union[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"exp": expire, "sub": str(subject)}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def verify_access_token(token: str) -> Optional[str]:
    """Return the user id carried by ``token``, or None if it is invalid or expired"""
    try:
        # jose rejects expired tokens itself when "exp" is present
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.warning(f"JWT verification error: {e}")
        return None

    user_id: Optional[str] = payload.get("sub")
    if user_id is None:
        logger.warning("Token payload missing 'sub' field")
        return None
    return user_id
