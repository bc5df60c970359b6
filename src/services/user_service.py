"""Service layer for reading and editing the current user."""
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.user import UserUpdate
from services.exceptions import ConflictError, NotFoundError


def get_self(user: User) -> User:
    """Return the already-authenticated user. No extra query is made."""
    return user


async def _email_taken(db: AsyncSession, email: str, user_id: int) -> bool:
    result = await db.execute(
        select(User.id).where(User.email == email, User.id != user_id),
    )
    return result.first() is not None


async def edit_self(db: AsyncSession, user_id: int, data: UserUpdate) -> User:
    """
    Apply a partial update to a user. Fields not sent are left unchanged.

    Note: Does not commit. Caller (session generator) handles commit at request end.

    Raises:
        NotFoundError: If the user does not exist.
        ConflictError: If the new email belongs to another account.
    """
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    update_data = data.model_dump(exclude_unset=True)
    if not update_data:
        return user

    if "email" in update_data and await _email_taken(db, update_data["email"], user_id):
        raise ConflictError("Email already in use")

    try:
        async with db.begin_nested():
            for field, value in update_data.items():
                setattr(user, field, value)
            user.updated_at = func.clock_timestamp()
    except IntegrityError as e:
        raise ConflictError("Email already in use") from e

    await db.refresh(user)
    return user
