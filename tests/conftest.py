"""Shared test configuration and fixtures.

Every test gets its own in-memory SQLite database (aiosqlite, one shared
connection through ``StaticPool``), so the application's request-scoped
commit/rollback runs exactly as it does against PostgreSQL and nothing
leaks between tests.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from shelter import models  # noqa: F401  (register tables on Base.metadata)
from shelter.client import (
    BanClient,
    DevModeClient,
    FacilityClient,
    GuestClient,
    RegistrationClient,
    TemplateClient,
)
from shelter.database import Base, get_db
from shelter.exceptions import Forbidden, InternalServerError
from shelter.main import app

# ---------------------------------------------------------------------------
# Per-test database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database with every table."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for calling the services directly. Tests commit as needed."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Resource clients over the test app
# ---------------------------------------------------------------------------


@pytest.fixture
def ban_client(client: AsyncClient) -> BanClient:
    return BanClient(client)


@pytest.fixture
def devmode_client(client: AsyncClient) -> DevModeClient:
    return DevModeClient(client)


@pytest.fixture
def facility_client(client: AsyncClient) -> FacilityClient:
    return FacilityClient(client)


@pytest.fixture
def guest_client(client: AsyncClient) -> GuestClient:
    return GuestClient(client)


@pytest.fixture
def registration_client(client: AsyncClient) -> RegistrationClient:
    return RegistrationClient(client)


@pytest.fixture
def template_client(client: AsyncClient) -> TemplateClient:
    return TemplateClient(client)


@pytest_asyncio.fixture
async def populated(devmode_client: DevModeClient) -> None:
    """Load the DevMode fixture data; skip the test if DevMode is unavailable."""
    try:
        await devmode_client.populate()
    except (Forbidden, InternalServerError) as exc:
        pytest.skip(f"DevMode populate unavailable: {exc}")
