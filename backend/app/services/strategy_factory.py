"""
Reservation guard factory.
Configures how concurrent reservations on one spot are serialized.
"""

from typing import Optional

from app.core.config import get_settings
from app.services.interfaces.reservation_guard import ReservationGuard
from app.services.interfaces.row_lock_guard import RowLockGuard
from app.services.redis_guard import RedisReservationGuard


def build_reservation_guard(name: str) -> ReservationGuard:
    """
    Build a guard by name.

    - "row": RowLockGuard (single database, default)
    - "redis": RedisReservationGuard (multi-node, falls back to row lock)
    """
    if name == "redis":
        return RedisReservationGuard()
    if name == "row":
        return RowLockGuard()
    raise ValueError(f"Unknown reservation guard: {name!r}")


# Singleton instance
_guard: Optional[ReservationGuard] = None


def get_reservation_guard() -> ReservationGuard:
    """FastAPI dependency returning the configured guard singleton."""
    global _guard
    if _guard is None:
        _guard = build_reservation_guard(get_settings().RESERVATION_GUARD)
    return _guard
