"""
Security test fixtures.

These fixtures enable testing IDOR (Insecure Direct Object Reference)
scenarios by creating two users, a bookmark for each, and clients holding
real access tokens for either user.
"""
from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.security import create_access_token
from models.bookmark import Bookmark
from models.user import User


@pytest.fixture
async def user_a(make_user: Callable[..., Awaitable[User]]) -> User:
    """Create the first test user (User A)."""
    return await make_user("user-a@example.com")


@pytest.fixture
async def user_b(make_user: Callable[..., Awaitable[User]]) -> User:
    """Create a second test user (User B) for IDOR testing."""
    return await make_user("user-b@example.com")


async def _add_bookmark(db_session: AsyncSession, owner: User, title: str) -> Bookmark:
    bookmark = Bookmark(
        user_id=owner.id,
        title=title,
        link=f"https://{owner.email.split('@')[0]}.example.com/",
        description="This should only be accessible to its owner",
    )
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    return bookmark


@pytest.fixture
async def user_a_bookmark(db_session: AsyncSession, user_a: User) -> Bookmark:
    """Create a bookmark belonging to User A."""
    return await _add_bookmark(db_session, user_a, "User A's Private Bookmark")


@pytest.fixture
async def user_b_bookmark(db_session: AsyncSession, user_b: User) -> Bookmark:
    """Create a bookmark belonging to User B."""
    return await _add_bookmark(db_session, user_b, "User B's Private Bookmark")


@pytest.fixture
async def client_factory(
    db_session: AsyncSession,
    settings: Settings,
) -> AsyncGenerator[Callable[[User], AsyncClient]]:
    """
    Factory fixture that creates test clients authenticated as a specific user.

    Unlike overriding the auth dependency, each client sends a real bearer
    token so the full auth path runs.

    Usage:
        client = client_factory(user_a)
        response = await client.get("/bookmarks")
    """
    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    clients: list[AsyncClient] = []

    def create_client(user: User) -> AsyncClient:
        token = create_access_token(user.id, user.email, settings)
        test_client = AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
            headers={"Authorization": f"Bearer {token}"},
        )
        clients.append(test_client)
        return test_client

    yield create_client

    for test_client in clients:
        await test_client.aclose()
    app.dependency_overrides.clear()


@pytest.fixture
def client_as_user_a(
    client_factory: Callable[[User], AsyncClient],
    user_a: User,
) -> AsyncClient:
    """Create a test client authenticated as User A."""
    return client_factory(user_a)


@pytest.fixture
def client_as_user_b(
    client_factory: Callable[[User], AsyncClient],
    user_b: User,
) -> AsyncClient:
    """Create a test client authenticated as User B."""
    return client_factory(user_b)
