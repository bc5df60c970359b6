"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator

# Settings are read at import time by db.session and validated by request
# schemas, so a signing secret and a placeholder URL must exist before any
# application module is imported. database_url() replaces the URL below.
os.environ.setdefault("JWT_SECRET", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "postgresql+asyncpg://localhost/placeholder")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings, get_settings  # noqa: E402
from core.security import create_access_token  # noqa: E402
from models.base import Base  # noqa: E402
from models.user import User  # noqa: E402


@pytest.fixture(scope="session")
def postgres_url() -> Generator[str]:
    """
    Provide a PostgreSQL URL for the test session.

    Uses TEST_DATABASE_URL when set, otherwise starts a PostgreSQL container.
    """
    external_url = os.environ.get("TEST_DATABASE_URL")
    if external_url:
        yield external_url
        return

    from testcontainers.postgres import PostgresContainer

    with PostgresContainer("postgres:16", driver="asyncpg") as postgres:
        yield postgres.get_connection_url()


@pytest.fixture(scope="session")
def database_url(postgres_url: str) -> str:
    """
    Set the test database URL in the environment.

    This must be set before any app imports that trigger Settings validation.
    """
    os.environ["DATABASE_URL"] = postgres_url
    get_settings.cache_clear()
    return postgres_url


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine for testing."""
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_connection(async_engine: AsyncEngine) -> AsyncGenerator[AsyncConnection]:
    """
    Create a connection with a transaction that will be rolled back after the test.

    This provides test isolation - each test runs in its own transaction
    that is rolled back, so tests don't affect each other.
    """
    async with async_engine.connect() as connection:
        transaction = await connection.begin()
        try:
            yield connection
        finally:
            await transaction.rollback()


@pytest.fixture
async def db_session(db_connection: AsyncConnection) -> AsyncGenerator[AsyncSession]:
    """
    Create an async session bound to the test transaction.

    Uses savepoints, allowing the session's flush/commit to work within our
    outer test transaction.
    """
    session_factory = async_sessionmaker(
        bind=db_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def settings(database_url: str) -> Settings:
    """Settings matching what the app sees during the test."""
    return get_settings()


@pytest.fixture
async def client(
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient]:
    """Create an unauthenticated test client with database session override."""
    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """
    Factory fixture that inserts users directly, bypassing signup.

    Usage:
        other = await make_user("other@example.com")
    """
    async def _make_user(
        email: str,
        password_hash: str = "not-a-real-hash",
        **fields: str,
    ) -> User:
        user = User(email=email, hash=password_hash, **fields)
        db_session.add(user)
        await db_session.flush()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
async def user(make_user: Callable[..., Awaitable[User]]) -> User:
    """A user created directly in the database."""
    return await make_user("owner@example.com", first_name="Ada", last_name="Lovelace")


@pytest.fixture
def auth_headers(user: User, settings: Settings) -> dict[str, str]:
    """Authorization header carrying a valid token for `user`."""
    token = create_access_token(user.id, user.email, settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_client(
    client: AsyncClient,
    auth_headers: dict[str, str],
) -> AsyncClient:
    """Test client authenticated as `user`."""
    client.headers.update(auth_headers)
    return client
