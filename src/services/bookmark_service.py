"""Service layer for bookmark CRUD operations."""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import ForbiddenError, NotFoundError


def assert_ownership(bookmark: Bookmark | None, user_id: int) -> Bookmark:
    """
    Check that a bookmark exists and belongs to the user.

    This is the single ownership check used by get, update, and delete.

    Raises:
        NotFoundError: If the bookmark does not exist.
        ForbiddenError: If the bookmark belongs to another user.
    """
    if bookmark is None:
        raise NotFoundError("Bookmark not found")
    if bookmark.user_id != user_id:
        raise ForbiddenError("Access to resource denied")
    return bookmark


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """
    Create a new bookmark owned by the user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = Bookmark(user_id=user_id, **data.model_dump())
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def list_bookmarks(db: AsyncSession, user_id: int) -> list[Bookmark]:
    """Return all of the user's bookmarks in insertion order."""
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.id),
    )
    return list(result.scalars().all())


async def get_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark:
    """
    Get a bookmark by ID, checking ownership.

    Raises:
        NotFoundError: If the bookmark does not exist.
        ForbiddenError: If the bookmark belongs to another user.
    """
    result = await db.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
    return assert_ownership(result.scalar_one_or_none(), user_id)


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Apply a partial update to a bookmark. Fields not sent are left unchanged.

    Note: Does not commit. Caller (session generator) handles commit at request end.

    Raises:
        NotFoundError: If the bookmark does not exist.
        ForbiddenError: If the bookmark belongs to another user.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(bookmark, field, value)

    if update_data:
        bookmark.updated_at = func.clock_timestamp()

    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def delete_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> None:
    """
    Permanently delete a bookmark.

    Note: Does not commit. Caller (session generator) handles commit at request end.

    Raises:
        NotFoundError: If the bookmark does not exist.
        ForbiddenError: If the bookmark belongs to another user.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)
    await db.delete(bookmark)
    await db.flush()
