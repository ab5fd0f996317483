"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from app.api.routes import auth, spots, reviews, bookings

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(spots.router)
api_router.include_router(reviews.router)
api_router.include_router(bookings.router)
