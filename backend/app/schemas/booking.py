"""
Pydantic schemas for booking-related request/response validation.
"""

from datetime import date, datetime
from typing import Union

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.user import UserSummary


class BookingCreate(CamelModel):
    # Ordering is checked by the conflict checker, not here
    start_date: date
    end_date: date


class BookingResponse(CamelModel):
    id: int
    spot_id: int
    user_id: int
    start_date: date
    end_date: date
    created_at: datetime
    updated_at: datetime


class BookingOwnerView(BookingResponse):
    user: UserSummary = Field(alias="User")


class BookingPublicView(CamelModel):
    spot_id: int
    start_date: date
    end_date: date


class BookingListResponse(CamelModel):
    bookings: list[Union[BookingOwnerView, BookingResponse, BookingPublicView]] = Field(
        alias="Bookings"
    )
