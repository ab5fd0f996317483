"""
Row-lock reservation guard: the database is the only coordinator.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from app.services.interfaces.booking_store import BookingStore
from app.services.interfaces.reservation_guard import ReservationGuard


class RowLockGuard(ReservationGuard):
    """
    Locks the spot row for the rest of the transaction.

    Use when:
    - A single database serves all API workers
    - Per-spot contention is low (typical for rentals)

    On SQLite the store takes the database-wide write lock instead.
    """

    @asynccontextmanager
    async def hold(self, store: BookingStore, spot_id: int) -> AsyncIterator[None]:
        await store.lock_spot(spot_id)
        yield
