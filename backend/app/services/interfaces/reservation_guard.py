"""
Reservation guard interface.
Allows swapping how concurrent reservations on one spot are serialized.
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager

from app.services.interfaces.booking_store import BookingStore


class ReservationGuard(ABC):
    """
    Serializes the read-decide-insert sequence per spot.

    The conflict check reads existing bookings and then inserts; without a
    guard two requests for overlapping dates can both read "no conflict".
    The guard must be held until the new booking is committed.

    Implementations:
    - RowLockGuard: SELECT ... FOR UPDATE on the spot row
    - RedisReservationGuard: Redis lock in front of the row lock
    """

    @abstractmethod
    def hold(self, store: BookingStore, spot_id: int) -> AsyncContextManager[None]:
        """
        Async context manager held around read, decide and commit.

        Args:
            store: Unit of work the reservation runs in
            spot_id: Spot being reserved
        """
