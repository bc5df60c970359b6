"""Authentication dependency that resolves the bearer token to a user."""
import logging

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.security import decode_access_token
from db.session import get_async_session
from models.base import MAX_INTEGER_ID
from models.user import User

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme. auto_error is off so a missing header yields 401, not 403.
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_jwt(token: str, settings: Settings) -> dict:
    """
    Decode and validate an access token.

    Raises:
        HTTPException: If token is invalid or expired.
    """
    try:
        return decode_access_token(token, settings)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.PyJWTError as e:
        # Log full details for debugging (server-side only)
        logger.warning("JWT validation failed: %s", e)
        raise _unauthorized("Invalid token")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Dependency that validates the bearer token and returns the current user.

    The user id is taken from the token's sub claim and looked up on every
    request, so tokens of users that no longer exist are rejected.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")

    payload = decode_jwt(credentials.credentials, settings)

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid token: malformed sub claim")
    if not 1 <= user_id <= MAX_INTEGER_ID:
        raise _unauthorized("Invalid token: malformed sub claim")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise _unauthorized("User not found")

    return user
