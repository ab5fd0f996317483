"""
Tests for SqlBookingStore against a file-backed SQLite database, where
each session gets its own connection like concurrent API requests do.
"""

import asyncio
from datetime import date
from typing import Sequence

import pytest
import pytest_asyncio
from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.security import hash_password
from app.db.base import Base
from app.infrastructure.booking_store import SqlBookingStore
from app.models import Booking, Spot, User
from app.services import booking_service
from app.services.interfaces import RowLockGuard


class SlowCalendarStore(SqlBookingStore):
    """Holds the request open after reading the calendar to widen the race window."""

    async def list_for_spot(self, spot_id: int) -> Sequence[Booking]:
        bookings = await super().list_for_spot(spot_id)
        await asyncio.sleep(0.05)
        return bookings


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def spot_id(session_factory) -> int:
    async with session_factory() as session:
        owner = User(
            email="host@example.com",
            username="host",
            first_name="Hal",
            last_name="Host",
            hashed_password=hash_password("testpassword123"),
        )
        session.add(owner)
        await session.flush()
        spot = Spot(
            owner_id=owner.id,
            address="1 Shore Rd",
            city="Bodega Bay",
            state="California",
            country="United States of America",
            lat=38.33,
            lng=-123.04,
            name="Shore Cottage",
            description="Two rooms and a dock",
            price=180,
        )
        session.add(spot)
        await session.commit()
        return spot.id


async def _book_in_own_session(session_factory, spot_id, user_id, start, end):
    async with session_factory() as session:
        try:
            return await booking_service.create_booking(
                SlowCalendarStore(session),
                RowLockGuard(),
                spot_id,
                user_id,
                date.fromisoformat(start),
                date.fromisoformat(end),
            )
        finally:
            await session.rollback()


@pytest.mark.asyncio
async def test_concurrent_overlapping_requests_admit_one(session_factory, spot_id):
    results = await asyncio.gather(
        _book_in_own_session(session_factory, spot_id, 1, "2024-03-01", "2024-03-05"),
        _book_in_own_session(session_factory, spot_id, 1, "2024-03-03", "2024-03-08"),
        return_exceptions=True,
    )

    admitted = [r for r in results if isinstance(r, Booking)]
    rejected = [r for r in results if isinstance(r, HTTPException)]
    assert len(admitted) == 1
    assert [r.status_code for r in rejected] == [403]

    async with session_factory() as session:
        stored = await session.scalar(select(func.count()).select_from(Booking))
    assert stored == 1


@pytest.mark.asyncio
async def test_concurrent_disjoint_requests_both_admitted(session_factory, spot_id):
    results = await asyncio.gather(
        _book_in_own_session(session_factory, spot_id, 1, "2024-03-01", "2024-03-05"),
        _book_in_own_session(session_factory, spot_id, 1, "2024-03-10", "2024-03-12"),
    )

    assert all(isinstance(r, Booking) for r in results)
    async with session_factory() as session:
        stored = await session.scalars(select(Booking).order_by(Booking.start_date))
        assert [b.start_date for b in stored] == [date(2024, 3, 1), date(2024, 3, 10)]
