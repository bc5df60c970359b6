"""Bookmark CRUD endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.base import MAX_INTEGER_ID
from models.user import User
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from services import bookmark_service
from services.exceptions import ForbiddenError, NotFoundError

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])

# Ids outside the column range cannot exist; reject them as invalid input
BookmarkId = Annotated[int, Path(ge=1, le=MAX_INTEGER_ID)]


def _ownership_error(e: NotFoundError | ForbiddenError) -> HTTPException:
    """Map a failed ownership check to 404 (missing) or 403 (someone else's)."""
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=e.message)
    return HTTPException(status_code=403, detail=e.message)


@router.post("", response_model=BookmarkResponse, status_code=201)
@router.post("/", response_model=BookmarkResponse, status_code=201, include_in_schema=False)
async def create_bookmark(
    data: BookmarkCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Create a new bookmark."""
    bookmark = await bookmark_service.create_bookmark(db, current_user.id, data)
    return BookmarkResponse.model_validate(bookmark)


@router.get("", response_model=list[BookmarkResponse])
@router.get("/", response_model=list[BookmarkResponse], include_in_schema=False)
async def list_bookmarks(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List all bookmarks of the current user, oldest first."""
    bookmarks = await bookmark_service.list_bookmarks(db, current_user.id)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: BookmarkId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    try:
        bookmark = await bookmark_service.get_bookmark(db, current_user.id, bookmark_id)
    except (NotFoundError, ForbiddenError) as e:
        raise _ownership_error(e)
    return BookmarkResponse.model_validate(bookmark)


@router.patch("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: BookmarkId,
    data: BookmarkUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Update a bookmark. Only the fields included in the body are changed."""
    try:
        bookmark = await bookmark_service.update_bookmark(
            db, current_user.id, bookmark_id, data,
        )
    except (NotFoundError, ForbiddenError) as e:
        raise _ownership_error(e)
    return BookmarkResponse.model_validate(bookmark)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: BookmarkId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Permanently delete a bookmark."""
    try:
        await bookmark_service.delete_bookmark(db, current_user.id, bookmark_id)
    except (NotFoundError, ForbiddenError) as e:
        raise _ownership_error(e)
