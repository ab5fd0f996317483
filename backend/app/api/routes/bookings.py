"""
Booking endpoints: reserve dates on a spot and read calendars.
"""

from fastapi import APIRouter, Depends, status

from app.api.deps import get_booking_store
from app.core.security import get_current_user_id
from app.schemas.booking import (
    BookingCreate, BookingListResponse, BookingOwnerView, BookingPublicView, BookingResponse,
)
from app.services.booking_service import create_booking, list_spot_bookings, list_user_bookings
from app.services.interfaces.booking_store import BookingStore
from app.services.interfaces.reservation_guard import ReservationGuard
from app.services.strategy_factory import get_reservation_guard

router = APIRouter(tags=["Bookings"])


@router.post(
    "/spots/{spot_id}/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking_endpoint(
    spot_id: int,
    booking_data: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    store: BookingStore = Depends(get_booking_store),
    guard: ReservationGuard = Depends(get_reservation_guard),
):
    """
    Reserve a date range on a spot.

    Both dates are occupied days, so a stay may not start on the day another
    ends. Returns 400 when endDate is not after startDate and 403 when the
    range touches an existing booking.
    """
    return await create_booking(
        store, guard, spot_id, user_id, booking_data.start_date, booking_data.end_date
    )


@router.get("/spots/{spot_id}/bookings", response_model=BookingListResponse)
async def list_spot_bookings_endpoint(
    spot_id: int,
    user_id: int = Depends(get_current_user_id),
    store: BookingStore = Depends(get_booking_store),
):
    """Spot calendar. The owner also sees who booked each stay."""
    _, bookings, is_owner = await list_spot_bookings(store, spot_id, user_id)
    view = BookingOwnerView if is_owner else BookingPublicView
    return BookingListResponse(bookings=[view.model_validate(b) for b in bookings])


@router.get("/bookings/current", response_model=BookingListResponse)
async def list_my_bookings(
    user_id: int = Depends(get_current_user_id),
    store: BookingStore = Depends(get_booking_store),
):
    """Get all bookings for the authenticated user."""
    bookings = await list_user_bookings(store, user_id)
    return BookingListResponse(bookings=[BookingResponse.model_validate(b) for b in bookings])
