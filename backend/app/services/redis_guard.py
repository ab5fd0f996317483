"""
Redis-backed reservation guard for multi-node deployments.

Circuit Breaker Pattern:
  On Redis failure the guard "fails open" to the row lock alone.
  The database stays authoritative: the row lock and the exclusion
  constraint still prevent double bookings, Redis only keeps contending
  requests from piling up on the database.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import HTTPException, status
from redis.asyncio.lock import Lock
from redis.exceptions import LockError, RedisError

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.metrics import record_lock_wait, redis_circuit_breaker_open, redis_connection_errors
from app.infrastructure.redis_client import get_redis
from app.services.interfaces.booking_store import BookingStore
from app.services.interfaces.reservation_guard import ReservationGuard
from app.services.interfaces.row_lock_guard import RowLockGuard

logger = get_logger(__name__)


def lock_key(spot_id: int) -> str:
    return f"reservation:spot:{spot_id}"


class RedisReservationGuard(ReservationGuard):
    """
    Per-spot Redis lock held in front of the row lock.

    Use when:
    - Several API nodes share one database
    - Popular spots see bursts of requests for the same dates
    """

    def __init__(self, fallback: Optional[ReservationGuard] = None):
        self.fallback = fallback or RowLockGuard()

    async def _acquire(self, spot_id: int) -> Optional[Lock]:
        """Return a held lock, or None when failing open."""
        settings = get_settings()
        client = await get_redis()
        if client is None:
            record_lock_wait("fail_open")
            return None

        lock = client.lock(
            lock_key(spot_id),
            timeout=settings.BOOKING_LOCK_TTL_SECONDS,
            blocking_timeout=settings.BOOKING_LOCK_WAIT_SECONDS,
        )
        try:
            acquired = await lock.acquire()
        except RedisError as e:
            redis_connection_errors.inc()
            redis_circuit_breaker_open.set(1)
            record_lock_wait("fail_open")
            logger.warning("reservation_lock_fail_open", spot_id=spot_id, error=str(e))
            return None

        redis_circuit_breaker_open.set(0)
        if not acquired:
            record_lock_wait("timeout")
            logger.warning("reservation_lock_timeout", spot_id=spot_id)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="This spot is being booked by someone else. Please try again.",
            )

        record_lock_wait("acquired")
        return lock

    async def _release(self, lock: Lock, spot_id: int) -> None:
        try:
            await lock.release()
        except LockError:
            # TTL expired before commit; the row lock still covered the insert
            logger.warning("reservation_lock_expired", spot_id=spot_id)
        except RedisError as e:
            redis_connection_errors.inc()
            logger.warning("reservation_lock_release_failed", spot_id=spot_id, error=str(e))

    @asynccontextmanager
    async def hold(self, store: BookingStore, spot_id: int) -> AsyncIterator[None]:
        lock = await self._acquire(spot_id)
        try:
            async with self.fallback.hold(store, spot_id):
                yield
        finally:
            if lock is not None:
                await self._release(lock, spot_id)
