"""
Storage interface the reservation flow depends on.
Keeps the booking service free of ORM session details.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from app.domain.booking_conflicts import Approved
from app.models.booking import Booking
from app.models.spot import Spot


class BookingStore(ABC):
    """
    Repository for one unit of work on bookings.

    Implementations:
    - SqlBookingStore: AsyncSession-backed (app.infrastructure.booking_store)
    """

    @abstractmethod
    async def get_spot(self, spot_id: int) -> Optional[Spot]:
        """Load the spot, or None if it does not exist."""

    @abstractmethod
    async def lock_spot(self, spot_id: int) -> None:
        """
        Take a write lock on the spot row until commit/rollback.
        Serializes concurrent reservations for the same spot.
        """

    @abstractmethod
    async def list_for_spot(self, spot_id: int) -> Sequence[Booking]:
        """All bookings on a spot, ordered by start date."""

    @abstractmethod
    async def list_for_user(self, user_id: int) -> Sequence[Booking]:
        """All bookings made by a user, newest first."""

    @abstractmethod
    async def add(self, approved: Approved) -> Booking:
        """Stage a new booking from an approved decision and flush it."""

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass
