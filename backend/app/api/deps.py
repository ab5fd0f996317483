"""
Request-scoped collaborators injected into route handlers.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.infrastructure.booking_store import SqlBookingStore
from app.services.interfaces.booking_store import BookingStore


def get_booking_store(db: AsyncSession = Depends(get_db)) -> BookingStore:
    return SqlBookingStore(db)
