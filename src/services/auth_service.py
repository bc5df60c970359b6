"""Service layer for signup and login."""
import logging
from functools import lru_cache

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.security import create_access_token, hash_password, verify_password
from models.user import User
from schemas.auth import AuthRequest
from services.exceptions import ConflictError, UnauthorizedError

logger = logging.getLogger(__name__)


@lru_cache
def _dummy_hash(rounds: int) -> str:
    """Stand-in hash verified when the email is unknown."""
    return hash_password("no account has this password", rounds=rounds)


def issue_token(user: User, settings: Settings) -> str:
    """Issue an access token embedding the user's id and email."""
    return create_access_token(user.id, user.email, settings)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Look up a user by email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def signup(db: AsyncSession, data: AuthRequest, settings: Settings) -> str:
    """
    Create a new user and return an access token for it.

    Note: Does not commit. Caller (session generator) handles commit at request end.

    Raises:
        ConflictError: If the email is already registered.
    """
    if await get_user_by_email(db, data.email) is not None:
        raise ConflictError("Credentials taken")

    user = User(
        email=data.email,
        hash=hash_password(data.password, rounds=settings.bcrypt_rounds),
    )
    # Savepoint so a concurrent signup with the same email only undoes this insert
    try:
        async with db.begin_nested():
            db.add(user)
    except IntegrityError as e:
        raise ConflictError("Credentials taken") from e

    logger.info("Created user %s", user.id)
    return issue_token(user, settings)


async def login(db: AsyncSession, data: AuthRequest, settings: Settings) -> str:
    """
    Verify credentials and return an access token.

    Unknown email and wrong password produce the same error and both pay
    for one bcrypt check, so callers cannot tell which emails are registered.

    Raises:
        UnauthorizedError: If the credentials don't match a user.
    """
    user = await get_user_by_email(db, data.email)
    if user is None:
        # Same bcrypt cost as a wrong password
        verify_password(data.password, _dummy_hash(settings.bcrypt_rounds))
    if user is None or not verify_password(data.password, user.hash):
        logger.warning("Failed login attempt")
        raise UnauthorizedError("Credentials incorrect")
    return issue_token(user, settings)
