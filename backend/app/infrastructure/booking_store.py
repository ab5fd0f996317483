"""
SQLAlchemy implementation of BookingStore.
"""

from typing import Optional, Sequence

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.booking_conflicts import Approved
from app.models.booking import Booking
from app.models.spot import Spot
from app.services.interfaces.booking_store import BookingStore


class SqlBookingStore(BookingStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_spot(self, spot_id: int) -> Optional[Spot]:
        return await self.db.get(Spot, spot_id)

    async def lock_spot(self, spot_id: int) -> None:
        if self.db.get_bind().dialect.name == "sqlite":
            # SQLite drops FOR UPDATE. A no-op write takes the database write
            # lock instead, held until commit/rollback.
            await self.db.execute(
                text("UPDATE spots SET id = id WHERE id = :spot_id"), {"spot_id": spot_id}
            )
            return
        await self.db.execute(
            select(Spot.id).where(Spot.id == spot_id).with_for_update()
        )

    async def list_for_spot(self, spot_id: int) -> Sequence[Booking]:
        result = await self.db.execute(
            select(Booking)
            .where(Booking.spot_id == spot_id)
            .order_by(Booking.start_date.asc(), Booking.id.asc())
        )
        return list(result.scalars().all())

    async def list_for_user(self, user_id: int) -> Sequence[Booking]:
        result = await self.db.execute(
            select(Booking)
            .where(Booking.user_id == user_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
        )
        return list(result.scalars().all())

    async def add(self, approved: Approved) -> Booking:
        spot = await self.db.get(Spot, approved.spot_id)
        booking = Booking(
            user_id=approved.user_id,
            start_date=approved.start_date,
            end_date=approved.end_date,
        )
        # through the collection so the spot's cascade sees the new row
        spot.bookings.append(booking)
        await self.db.flush()
        await self.db.refresh(booking)
        return booking

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()
