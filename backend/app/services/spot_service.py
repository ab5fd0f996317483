"""
Spot service: listing CRUD, gallery images, and search with ratings.
"""

from typing import Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.permissions import require_owner
from app.models.review import Review
from app.models.spot import Spot, SpotImage
from app.schemas.spot import (
    SpotCreate, SpotDetail, SpotFilters, SpotImageCreate, SpotImageResponse, SpotListItem,
    SpotResponse,
)
from app.schemas.user import UserSummary

logger = get_logger(__name__)


def clamp_paging(page: int, size: int) -> tuple[int, int]:
    """Cap page and size at the configured maximums."""
    settings = get_settings()
    return min(page, settings.SPOT_PAGE_MAX), min(size, settings.SPOT_SIZE_MAX)


def _review_stats():
    return (
        select(
            Review.spot_id.label("spot_id"),
            func.count(Review.id).label("num_reviews"),
            func.avg(Review.stars).label("avg_rating"),
        )
        .group_by(Review.spot_id)
        .subquery()
    )


def _round_rating(value) -> Optional[float]:
    return None if value is None else round(float(value), 1)


def _preview_url(spot: Spot) -> str:
    for image in spot.images:
        if image.preview:
            return image.url
    return ""


def _apply_filters(query: Select, filters: SpotFilters) -> Select:
    if filters.min_lat is not None:
        query = query.where(Spot.lat >= filters.min_lat)
    if filters.max_lat is not None:
        query = query.where(Spot.lat <= filters.max_lat)
    if filters.min_lng is not None:
        query = query.where(Spot.lng >= filters.min_lng)
    if filters.max_lng is not None:
        query = query.where(Spot.lng <= filters.max_lng)
    if filters.min_price is not None:
        query = query.where(Spot.price >= filters.min_price)
    if filters.max_price is not None:
        query = query.where(Spot.price <= filters.max_price)
    return query


def _to_list_item(spot: Spot, avg_rating) -> SpotListItem:
    base = SpotResponse.model_validate(spot).model_dump()
    return SpotListItem(
        **base,
        avg_rating=_round_rating(avg_rating),
        preview_image=_preview_url(spot),
    )


async def search_spots(db: AsyncSession, filters: SpotFilters) -> list[SpotListItem]:
    """
    One page of spots with their average rating and preview image.
    `filters.page`/`filters.size` must already be clamped.
    """
    stats = _review_stats()
    query = _apply_filters(
        select(Spot, stats.c.avg_rating).outerjoin(stats, stats.c.spot_id == Spot.id),
        filters,
    )
    query = query.order_by(Spot.id.asc()).offset(filters.size * filters.page).limit(filters.size)

    result = await db.execute(query)
    return [_to_list_item(spot, avg) for spot, avg in result.all()]


async def list_owned_spots(db: AsyncSession, owner_id: int) -> list[SpotListItem]:
    stats = _review_stats()
    result = await db.execute(
        select(Spot, stats.c.avg_rating)
        .outerjoin(stats, stats.c.spot_id == Spot.id)
        .where(Spot.owner_id == owner_id)
        .order_by(Spot.id.asc())
    )
    return [_to_list_item(spot, avg) for spot, avg in result.all()]


async def get_spot(db: AsyncSession, spot_id: int) -> Spot:
    spot = await db.get(Spot, spot_id)
    if not spot:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Spot couldn't be found",
        )
    return spot


async def get_spot_detail(db: AsyncSession, spot_id: int) -> SpotDetail:
    """Spot with review count, average stars, images and owner."""
    stats = _review_stats()
    result = await db.execute(
        select(Spot, stats.c.num_reviews, stats.c.avg_rating)
        .outerjoin(stats, stats.c.spot_id == Spot.id)
        .where(Spot.id == spot_id)
    )
    row = result.first()
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Spot couldn't be found",
        )

    spot, num_reviews, avg_rating = row
    return SpotDetail(
        **SpotResponse.model_validate(spot).model_dump(),
        num_reviews=num_reviews or 0,
        avg_star_rating=_round_rating(avg_rating),
        images=[SpotImageResponse.model_validate(image) for image in spot.images],
        owner=UserSummary.model_validate(spot.owner),
    )


async def create_spot(db: AsyncSession, spot_data: SpotCreate, owner_id: int) -> Spot:
    spot = Spot(owner_id=owner_id, **spot_data.model_dump())
    db.add(spot)
    await db.flush()
    await db.refresh(spot)

    logger.info("spot_created", spot_id=spot.id, owner_id=owner_id)
    return spot


async def update_spot(db: AsyncSession, spot_id: int, spot_data: SpotCreate, user_id: int) -> Spot:
    spot = await get_spot(db, spot_id)
    require_owner(user_id, spot)

    for field, value in spot_data.model_dump().items():
        setattr(spot, field, value)
    await db.flush()
    await db.refresh(spot)

    logger.info("spot_updated", spot_id=spot.id, owner_id=user_id)
    return spot


async def delete_spot(db: AsyncSession, spot_id: int, user_id: int) -> None:
    """Delete a spot with its images, reviews and bookings."""
    spot = await get_spot(db, spot_id)
    require_owner(user_id, spot)

    await db.delete(spot)
    await db.flush()
    logger.info("spot_deleted", spot_id=spot_id, owner_id=user_id)


async def add_spot_image(
    db: AsyncSession,
    spot_id: int,
    image_data: SpotImageCreate,
    user_id: int,
) -> SpotImage:
    spot = await get_spot(db, spot_id)
    require_owner(user_id, spot)

    image = SpotImage(url=image_data.url, preview=image_data.preview)
    spot.images.append(image)
    await db.flush()
    await db.refresh(image)

    logger.info("spot_image_added", spot_id=spot.id, image_id=image.id, preview=image.preview)
    return image


async def delete_spot_image(db: AsyncSession, image_id: int, user_id: int) -> None:
    image = await db.get(SpotImage, image_id)
    if not image:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Spot Image couldn't be found",
        )
    require_owner(user_id, image)

    # delete-orphan removes the row once it leaves the collection
    spot = image.spot
    spot.images.remove(image)
    await db.flush()
    logger.info("spot_image_deleted", image_id=image_id, spot_id=spot.id)
