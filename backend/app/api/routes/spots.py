"""
Spot endpoints: search, details, listing CRUD and gallery images.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.core.security import get_current_user_id
from app.core.logging import get_logger
from app.schemas.base import DeleteResponse
from app.schemas.spot import (
    SpotCreate, SpotDetail, SpotFilters, SpotImageCreate, SpotImageResponse,
    SpotListResponse, SpotResponse,
)
from app.services import spot_service
from app.services.cache_service import get_cached_spots, invalidate_spot_cache, set_cached_spots

logger = get_logger(__name__)
router = APIRouter(prefix="/spots", tags=["Spots"])


@router.get("/", response_model=SpotListResponse)
async def search_spots_endpoint(
    page: int = Query(0, ge=0),
    size: int = Query(20, ge=0),
    min_lat: Optional[float] = Query(None, alias="minLat", ge=-90, le=90),
    max_lat: Optional[float] = Query(None, alias="maxLat", ge=-90, le=90),
    min_lng: Optional[float] = Query(None, alias="minLng", ge=-180, le=180),
    max_lng: Optional[float] = Query(None, alias="maxLng", ge=-180, le=180),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    db: AsyncSession = Depends(get_db),
):
    """
    Search spots with paging and bounding-box / price filters.
    Page is capped at 10 and size at 20. Results are cached in Redis.
    """
    page, size = spot_service.clamp_paging(page, size)
    filters = SpotFilters(
        page=page,
        size=size,
        min_lat=min_lat,
        max_lat=max_lat,
        min_lng=min_lng,
        max_lng=max_lng,
        min_price=min_price,
        max_price=max_price,
    )

    cached = await get_cached_spots(filters)
    if cached:
        logger.info("spots_list_cache_hit", page=page)
        cached["cached"] = True
        return SpotListResponse.model_validate(cached)

    spots = await spot_service.search_spots(db, filters)
    response = SpotListResponse(spots=spots, page=page, size=size)
    await set_cached_spots(filters, response.model_dump(mode="json", by_alias=True))
    return response


@router.get("/current", response_model=SpotListResponse)
async def list_my_spots(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Spots owned by the authenticated user."""
    spots = await spot_service.list_owned_spots(db, user_id)
    return SpotListResponse(spots=spots, page=0, size=len(spots))


@router.get("/{spot_id}", response_model=SpotDetail)
async def get_spot_endpoint(spot_id: int, db: AsyncSession = Depends(get_db)):
    """Spot details with rating summary, images and owner. Not cached."""
    return await spot_service.get_spot_detail(db, spot_id)


@router.post("/", response_model=SpotResponse, status_code=status.HTTP_201_CREATED)
async def create_spot_endpoint(
    spot_data: SpotCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    spot = await spot_service.create_spot(db, spot_data, user_id)
    await db.commit()
    await invalidate_spot_cache()
    return spot


@router.put("/{spot_id}", response_model=SpotResponse)
async def update_spot_endpoint(
    spot_id: int,
    spot_data: SpotCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Replace a spot's fields. Owner only."""
    spot = await spot_service.update_spot(db, spot_id, spot_data, user_id)
    await db.commit()
    await invalidate_spot_cache()
    return spot


@router.delete("/{spot_id}", response_model=DeleteResponse)
async def delete_spot_endpoint(
    spot_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete a spot along with its images, reviews and bookings. Owner only."""
    await spot_service.delete_spot(db, spot_id, user_id)
    await db.commit()
    await invalidate_spot_cache()
    return DeleteResponse()


@router.post("/{spot_id}/images", response_model=SpotImageResponse)
async def add_spot_image_endpoint(
    spot_id: int,
    image_data: SpotImageCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    image = await spot_service.add_spot_image(db, spot_id, image_data, user_id)
    await db.commit()
    if image.preview:
        await invalidate_spot_cache()
    return image


@router.delete("/images/{image_id}", response_model=DeleteResponse)
async def delete_spot_image_endpoint(
    image_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await spot_service.delete_spot_image(db, image_id, user_id)
    await db.commit()
    await invalidate_spot_cache()
    return DeleteResponse()
