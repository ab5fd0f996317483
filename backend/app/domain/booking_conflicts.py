"""
Booking conflict detection for a single spot.

ADMISSION POLICY
================

A candidate stay [start, end] is rejected when it touches an existing stay
on the same spot, inclusive of both boundary dates:

  existing.start <= start <= existing.end    -> start conflict
  existing.start <= end   <= existing.end    -> end conflict
  start < existing.start and existing.end < end  -> span conflict

The first two rules mean a guest cannot check in on the day the previous
guest checks out. The span rule catches a candidate that swallows a shorter
booking whole, where neither candidate endpoint lands inside it.

This module is pure: it never touches storage. Callers load the existing
bookings, call `decide`, and persist the `Approved` payload themselves.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Hashable, Iterable, Optional, Protocol, Union


class Boundary(str, Enum):
    START = "start"
    END = "end"
    SPAN = "span"


class BookingSpan(Protocol):
    """Anything shaped like a stored booking (ORM row or plain record)."""

    id: Hashable
    start_date: date
    end_date: date


@dataclass(frozen=True)
class InvalidRange:
    start_date: date
    end_date: date


@dataclass(frozen=True)
class DateConflict:
    booking_id: Hashable
    boundary: Boundary


@dataclass(frozen=True)
class Approved:
    spot_id: Hashable
    user_id: Hashable
    start_date: date
    end_date: date


@dataclass(frozen=True)
class Rejected:
    reason: Union[InvalidRange, DateConflict]


Decision = Union[Approved, Rejected]


def _contains(span: BookingSpan, day: date) -> bool:
    return span.start_date <= day <= span.end_date


def find_conflict(
    start_date: date,
    end_date: date,
    existing: Iterable[BookingSpan],
) -> Optional[DateConflict]:
    """Return the first existing booking the range collides with, if any.

    Linear scan. An interval index can replace this without changing
    `decide`, since only the first hit is needed.
    """
    for booking in existing:
        if _contains(booking, start_date):
            return DateConflict(booking.id, Boundary.START)
        if _contains(booking, end_date):
            return DateConflict(booking.id, Boundary.END)
        if start_date < booking.start_date and booking.end_date < end_date:
            return DateConflict(booking.id, Boundary.SPAN)
    return None


def decide(
    spot_id: Hashable,
    user_id: Hashable,
    start_date: date,
    end_date: date,
    existing: Iterable[BookingSpan],
) -> Decision:
    """Admit or reject a reservation request for `spot_id`."""
    if end_date <= start_date:
        return Rejected(InvalidRange(start_date, end_date))

    conflict = find_conflict(start_date, end_date, existing)
    if conflict is not None:
        return Rejected(conflict)

    return Approved(
        spot_id=spot_id,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
    )
