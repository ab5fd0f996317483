"""
Booking service: reservation requests against a spot's calendar.

CONCURRENCY STRATEGY: Guarded read-decide-insert
=================================================

Problem:
  Two guests request overlapping dates on the same spot simultaneously.
  Both read the spot's bookings, both see no conflict, both insert.
  Result: Double booking.

Solution:
  1. Enter the ReservationGuard for the spot (row lock, optionally behind
     a Redis lock). Concurrent requests for that spot queue here.
  2. Read the spot's bookings with a bounded timeout.
  3. Run the pure conflict checker (app.domain.booking_conflicts.decide).
  4. Insert and COMMIT while still holding the guard, so the next request
     in line reads the new row.

  On PostgreSQL an exclusion constraint over (spot_id, daterange) is the
  final safety net; an IntegrityError from it is reported as a conflict.
"""

import asyncio
import time
from typing import Sequence

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.metrics import booking_latency, booking_read_timeouts, record_booking_decision
from app.core.permissions import can_mutate
from app.domain.booking_conflicts import Boundary, DateConflict, InvalidRange, Rejected, decide
from app.models.booking import Booking
from app.models.spot import Spot
from app.services.interfaces.booking_store import BookingStore
from app.services.interfaces.reservation_guard import ReservationGuard

logger = get_logger(__name__)

CONFLICT_MESSAGE = "Sorry, this spot is already booked for the specified dates"

BOUNDARY_ERRORS = {
    Boundary.START: {"startDate": "Start date conflicts with an existing booking"},
    Boundary.END: {"endDate": "End date conflicts with an existing booking"},
    Boundary.SPAN: {
        "startDate": "Start date conflicts with an existing booking",
        "endDate": "End date conflicts with an existing booking",
    },
}


def spot_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Spot couldn't be found",
    )


def rejection_error(rejection: Rejected) -> HTTPException:
    """Translate a checker rejection into the HTTP error the client sees."""
    reason = rejection.reason
    if isinstance(reason, InvalidRange):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "Validation error",
                "errors": {"endDate": "endDate cannot be on or before startDate"},
            },
        )
    if isinstance(reason, DateConflict):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"message": CONFLICT_MESSAGE, "errors": BOUNDARY_ERRORS[reason.boundary]},
        )
    raise TypeError(f"Unhandled rejection reason: {reason!r}")


async def _read_existing(store: BookingStore, spot_id: int) -> Sequence[Booking]:
    timeout = get_settings().BOOKING_READ_TIMEOUT_SECONDS
    try:
        return await asyncio.wait_for(store.list_for_spot(spot_id), timeout=timeout)
    except asyncio.TimeoutError:
        booking_read_timeouts.inc()
        logger.error("booking_read_timeout", spot_id=spot_id, timeout=timeout)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not load the spot's calendar in time. Please try again.",
        )


async def create_booking(
    store: BookingStore,
    guard: ReservationGuard,
    spot_id: int,
    user_id: int,
    start_date,
    end_date,
) -> Booking:
    """
    Reserve [start_date, end_date] on a spot for a user.
    Raises 404 (no spot), 400 (bad range), 403 (date conflict).
    """
    spot = await store.get_spot(spot_id)
    if spot is None:
        raise spot_not_found()

    started = time.perf_counter()
    async with guard.hold(store, spot_id):
        existing = await _read_existing(store, spot_id)
        decision = decide(spot_id, user_id, start_date, end_date, existing)

        if isinstance(decision, Rejected):
            reason = decision.reason
            outcome = "invalid_range" if isinstance(reason, InvalidRange) else "date_conflict"
            record_booking_decision(outcome)
            logger.warning(
                "booking_rejected",
                spot_id=spot_id,
                user_id=user_id,
                start_date=str(start_date),
                end_date=str(end_date),
                reason=outcome,
                conflicting_booking_id=getattr(reason, "booking_id", None),
                boundary=getattr(getattr(reason, "boundary", None), "value", None),
            )
            raise rejection_error(decision)

        try:
            booking = await store.add(decision)
            await store.commit()
        except IntegrityError as e:
            await store.rollback()
            record_booking_decision("storage_conflict")
            logger.warning("booking_storage_conflict", spot_id=spot_id, user_id=user_id, error=str(e.orig))
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"message": CONFLICT_MESSAGE, "errors": BOUNDARY_ERRORS[Boundary.SPAN]},
            )

    booking_latency.observe(time.perf_counter() - started)
    record_booking_decision("approved")
    logger.info(
        "booking_created",
        booking_id=booking.id,
        spot_id=spot_id,
        user_id=user_id,
        start_date=str(start_date),
        end_date=str(end_date),
    )
    return booking


async def list_spot_bookings(
    store: BookingStore,
    spot_id: int,
    user_id: int,
) -> tuple[Spot, Sequence[Booking], bool]:
    """
    Bookings on a spot plus whether the caller may see renter details.
    Only the spot owner sees who booked.
    """
    spot = await store.get_spot(spot_id)
    if spot is None:
        raise spot_not_found()

    bookings = await store.list_for_spot(spot_id)
    return spot, bookings, can_mutate(user_id, spot)


async def list_user_bookings(store: BookingStore, user_id: int) -> Sequence[Booking]:
    """Get all bookings for a user."""
    return await store.list_for_user(user_id)
