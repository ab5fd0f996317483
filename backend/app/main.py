"""
Spot Rental API - Main Application Entry Point

A vacation-rental marketplace backend:
- Spot listings with filtered, paginated search and rating aggregates
- Reviews with images, one per guest per spot
- Date-range bookings with conflict detection and per-spot serialization
- Structured logging with request correlation, Prometheus metrics
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.logging import setup_logging, get_logger
from app.core.metrics import metrics_endpoint
from app.api.router import api_router
from app.api.middleware import RequestLoggingMiddleware
from app.infrastructure.redis_client import get_redis, close_redis
from app.services.cache_service import get_cache_stats
from app.services.strategy_factory import get_reservation_guard

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger = get_logger(__name__)

    # Fails fast on an unknown RESERVATION_GUARD
    guard = get_reservation_guard()
    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        reservation_guard=type(guard).__name__,
    )

    if await get_redis():
        logger.info("redis_ready")
    elif settings.REDIS_ENABLED:
        logger.warning("redis_unavailable", message="Spot search uncached, reservation locks fall back to row locks")

    yield

    await close_redis()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Vacation-rental marketplace API: spots, reviews, images and bookings",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)
app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness plus spot cache status."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "reservation_guard": settings.RESERVATION_GUARD,
        "cache": await get_cache_stats(),
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    return metrics_endpoint()
