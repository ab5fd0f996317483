"""
Review endpoints, both spot-scoped and review-scoped.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.core.security import get_current_user_id
from app.schemas.base import DeleteResponse
from app.schemas.review import (
    ReviewCreate, ReviewDetail, ReviewImageCreate, ReviewImageResponse,
    ReviewListResponse, ReviewResponse,
)
from app.services import review_service
from app.services.cache_service import invalidate_spot_cache

router = APIRouter(tags=["Reviews"])


@router.get("/spots/{spot_id}/reviews", response_model=ReviewListResponse)
async def list_spot_reviews_endpoint(spot_id: int, db: AsyncSession = Depends(get_db)):
    reviews = await review_service.list_spot_reviews(db, spot_id)
    return ReviewListResponse(reviews=[ReviewDetail.model_validate(r) for r in reviews])


@router.post(
    "/spots/{spot_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_review_endpoint(
    spot_id: int,
    review_data: ReviewCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Review a spot. One review per user per spot."""
    review = await review_service.create_review(db, spot_id, review_data, user_id)
    await db.commit()
    # Average rating in search results changed
    await invalidate_spot_cache()
    return review


@router.get("/reviews/current", response_model=ReviewListResponse)
async def list_my_reviews(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    reviews = await review_service.list_user_reviews(db, user_id)
    return ReviewListResponse(reviews=[ReviewDetail.model_validate(r) for r in reviews])


@router.put("/reviews/{review_id}", response_model=ReviewResponse)
async def update_review_endpoint(
    review_id: int,
    review_data: ReviewCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    review = await review_service.update_review(db, review_id, review_data, user_id)
    await db.commit()
    await invalidate_spot_cache()
    return review


@router.delete("/reviews/{review_id}", response_model=DeleteResponse)
async def delete_review_endpoint(
    review_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await review_service.delete_review(db, review_id, user_id)
    await db.commit()
    await invalidate_spot_cache()
    return DeleteResponse()


@router.post("/reviews/{review_id}/images", response_model=ReviewImageResponse)
async def add_review_image_endpoint(
    review_id: int,
    image_data: ReviewImageCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Attach an image to your review (at most 10)."""
    return await review_service.add_review_image(db, review_id, image_data, user_id)


@router.delete("/reviews/images/{image_id}", response_model=DeleteResponse)
async def delete_review_image_endpoint(
    image_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await review_service.delete_review_image(db, image_id, user_id)
    return DeleteResponse()
