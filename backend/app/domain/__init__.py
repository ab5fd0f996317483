"""
Pure domain rules, free of storage and HTTP concerns.
"""

from .booking_conflicts import (
    Approved,
    Boundary,
    DateConflict,
    InvalidRange,
    Rejected,
    decide,
    find_conflict,
)

__all__ = [
    "Approved", "Boundary", "DateConflict", "InvalidRange", "Rejected",
    "decide", "find_conflict",
]
