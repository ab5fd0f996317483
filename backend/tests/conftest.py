"""
Pytest fixtures for test database, client, and authentication.

Each test gets a fresh in-memory SQLite database; the app's DB dependency
is overridden to use it. Redis is disabled.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["REDIS_ENABLED"] = "false"
os.environ["RESERVATION_GUARD"] = "row"
os.environ["ENVIRONMENT"] = "test"

from datetime import date
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.core.security import create_access_token, hash_password
from app.models import Booking, Spot, User


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables on a private in-memory database and yield a session."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _make_user(db_session: AsyncSession, username: str, first_name: str) -> User:
    user = User(
        email=f"{username}@example.com",
        username=username,
        first_name=first_name,
        last_name="Tester",
        hashed_password=hash_password("testpassword123"),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def _headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(data={'sub': str(user.id)})}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Spot owner used by most tests."""
    return await _make_user(db_session, "testuser", "Olive")


@pytest_asyncio.fixture
async def guest_user(db_session: AsyncSession) -> User:
    """A second account that does not own the test spot."""
    return await _make_user(db_session, "guestuser", "Gus")


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    return _headers_for(test_user)


@pytest_asyncio.fixture
async def guest_headers(guest_user: User) -> dict:
    return _headers_for(guest_user)


@pytest_asyncio.fixture
async def test_spot(db_session: AsyncSession, test_user: User) -> Spot:
    spot = Spot(
        owner_id=test_user.id,
        address="123 Disney Lane",
        city="San Francisco",
        state="California",
        country="United States of America",
        lat=37.7645358,
        lng=-122.4730327,
        name="App Academy",
        description="Place where web developers are created",
        price=123,
    )
    db_session.add(spot)
    await db_session.commit()
    await db_session.refresh(spot)
    return spot


@pytest_asyncio.fixture
async def january_booking(db_session: AsyncSession, test_spot: Spot, guest_user: User) -> Booking:
    """Existing stay on the test spot: 2024-01-10 through 2024-01-15."""
    booking = Booking(
        user_id=guest_user.id,
        start_date=date(2024, 1, 10),
        end_date=date(2024, 1, 15),
    )
    test_spot.bookings.append(booking)
    await db_session.commit()
    await db_session.refresh(booking)
    return booking
