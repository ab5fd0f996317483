"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .booking_store import BookingStore
from .reservation_guard import ReservationGuard
from .row_lock_guard import RowLockGuard

__all__ = ['BookingStore', 'ReservationGuard', 'RowLockGuard']
