"""
Tests for the pure booking conflict checker.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from itertools import product

import pytest

from app.domain.booking_conflicts import (
    Approved, Boundary, DateConflict, InvalidRange, Rejected, decide, find_conflict,
)

SPOT_ID = 7
USER_ID = 3


@dataclass
class Stay:
    id: int
    start_date: date
    end_date: date


def d(day: str) -> date:
    return date.fromisoformat(day)


def test_empty_calendar_is_approved():
    decision = decide(SPOT_ID, USER_ID, d("2024-01-10"), d("2024-01-15"), [])
    assert decision == Approved(SPOT_ID, USER_ID, d("2024-01-10"), d("2024-01-15"))


def test_checkin_on_checkout_day_conflicts():
    existing = [Stay(1, d("2024-01-10"), d("2024-01-15"))]
    decision = decide(SPOT_ID, USER_ID, d("2024-01-15"), d("2024-01-20"), existing)
    assert decision == Rejected(DateConflict(1, Boundary.START))


def test_day_after_checkout_is_approved():
    existing = [Stay(1, d("2024-01-10"), d("2024-01-15"))]
    decision = decide(SPOT_ID, USER_ID, d("2024-01-16"), d("2024-01-20"), existing)
    assert isinstance(decision, Approved)


def test_reversed_range_is_invalid():
    decision = decide(SPOT_ID, USER_ID, d("2024-01-20"), d("2024-01-10"), [])
    assert decision == Rejected(InvalidRange(d("2024-01-20"), d("2024-01-10")))


def test_same_day_range_is_invalid():
    decision = decide(SPOT_ID, USER_ID, d("2024-01-10"), d("2024-01-10"), [])
    assert isinstance(decision, Rejected)
    assert isinstance(decision.reason, InvalidRange)


def test_invalid_range_wins_over_conflict():
    existing = [Stay(1, d("2024-01-01"), d("2024-01-31"))]
    decision = decide(SPOT_ID, USER_ID, d("2024-01-20"), d("2024-01-10"), existing)
    assert isinstance(decision.reason, InvalidRange)


def test_end_date_inside_existing_stay():
    existing = [Stay(4, d("2024-02-01"), d("2024-02-10"))]
    decision = decide(SPOT_ID, USER_ID, d("2024-01-25"), d("2024-02-05"), existing)
    assert decision == Rejected(DateConflict(4, Boundary.END))


def test_checkout_on_checkin_day_conflicts():
    existing = [Stay(4, d("2024-02-01"), d("2024-02-10"))]
    decision = decide(SPOT_ID, USER_ID, d("2024-01-25"), d("2024-02-01"), existing)
    assert decision == Rejected(DateConflict(4, Boundary.END))


def test_candidate_inside_existing_reports_start():
    existing = [Stay(2, d("2024-03-01"), d("2024-03-31"))]
    decision = decide(SPOT_ID, USER_ID, d("2024-03-10"), d("2024-03-12"), existing)
    assert decision == Rejected(DateConflict(2, Boundary.START))


def test_candidate_enclosing_existing_is_span_conflict():
    existing = [Stay(5, d("2024-03-10"), d("2024-03-12"))]
    decision = decide(SPOT_ID, USER_ID, d("2024-03-01"), d("2024-03-31"), existing)
    assert decision == Rejected(DateConflict(5, Boundary.SPAN))


def test_first_conflicting_booking_is_reported():
    existing = [
        Stay(1, d("2024-01-01"), d("2024-01-05")),
        Stay(2, d("2024-01-08"), d("2024-01-09")),
        Stay(3, d("2024-01-12"), d("2024-01-20")),
    ]
    conflict = find_conflict(d("2024-01-07"), d("2024-01-14"), existing)
    assert conflict == DateConflict(2, Boundary.SPAN)


def test_duplicate_existing_entries_are_tolerated():
    stay = Stay(1, d("2024-01-10"), d("2024-01-15"))
    decision = decide(SPOT_ID, USER_ID, d("2024-01-12"), d("2024-01-13"), [stay, stay])
    assert decision == Rejected(DateConflict(1, Boundary.START))


def test_accepts_any_iterable():
    existing = (Stay(i, d("2024-05-01") + timedelta(days=10 * i), d("2024-05-03") + timedelta(days=10 * i))
                for i in range(3))
    decision = decide(SPOT_ID, USER_ID, d("2024-05-05"), d("2024-05-08"), existing)
    assert isinstance(decision, Approved)


def test_decision_is_repeatable():
    existing = [Stay(1, d("2024-01-10"), d("2024-01-15"))]
    args = (SPOT_ID, USER_ID, d("2024-01-14"), d("2024-01-18"), existing)
    assert decide(*args) == decide(*args)
    assert existing == [Stay(1, d("2024-01-10"), d("2024-01-15"))]


@pytest.mark.parametrize("offset,length", [(0, 1), (3, 2), (6, 4), (11, 1)])
def test_disjoint_ranges_are_approved(offset, length):
    existing = [Stay(1, d("2024-06-10"), d("2024-06-15"))]
    start = d("2024-06-16") + timedelta(days=offset)
    decision = decide(SPOT_ID, USER_ID, start, start + timedelta(days=length), existing)
    assert isinstance(decision, Approved)


def _overlaps(a: Stay, b: Stay) -> bool:
    return a.start_date <= b.end_date and b.start_date <= a.end_date


def test_admitted_bookings_never_overlap():
    """Admit every candidate on a small grid in order; no two admitted stays overlap."""
    base = d("2024-01-01")
    admitted: list[Stay] = []
    for start_offset, length in product(range(0, 20), range(1, 5)):
        start = base + timedelta(days=start_offset)
        end = start + timedelta(days=length)
        if isinstance(decide(SPOT_ID, USER_ID, start, end, admitted), Approved):
            admitted.append(Stay(len(admitted) + 1, start, end))

    assert admitted
    for i, a in enumerate(admitted):
        assert a.end_date > a.start_date
        for b in admitted[i + 1:]:
            assert not _overlaps(a, b)
