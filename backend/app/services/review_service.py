"""
Review service: one review per guest per spot, with up to N images.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.permissions import require_owner
from app.models.review import Review, ReviewImage
from app.schemas.review import ReviewCreate, ReviewImageCreate
from app.services.spot_service import get_spot

logger = get_logger(__name__)


async def get_review(db: AsyncSession, review_id: int) -> Review:
    review = await db.get(Review, review_id)
    if not review:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Review couldn't be found",
        )
    return review


async def list_spot_reviews(db: AsyncSession, spot_id: int) -> list[Review]:
    await get_spot(db, spot_id)
    result = await db.execute(
        select(Review).where(Review.spot_id == spot_id).order_by(Review.created_at.desc(), Review.id.desc())
    )
    return list(result.scalars().all())


async def list_user_reviews(db: AsyncSession, user_id: int) -> list[Review]:
    result = await db.execute(
        select(Review).where(Review.user_id == user_id).order_by(Review.created_at.desc(), Review.id.desc())
    )
    return list(result.scalars().all())


async def create_review(
    db: AsyncSession,
    spot_id: int,
    review_data: ReviewCreate,
    user_id: int,
) -> Review:
    """
    Review a spot.
    Raises 404 if the spot is missing, 403 if the user already reviewed it.
    """
    spot = await get_spot(db, spot_id)

    existing = await db.execute(
        select(Review.id).where(Review.user_id == user_id, Review.spot_id == spot_id)
    )
    if existing.scalar_one_or_none() is not None:
        logger.warning("review_rejected", reason="duplicate", spot_id=spot_id, user_id=user_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User already has a review for this spot",
        )

    review = Review(user_id=user_id, review=review_data.review, stars=review_data.stars)
    spot.reviews.append(review)
    await db.flush()
    await db.refresh(review)

    logger.info("review_created", review_id=review.id, spot_id=spot_id, user_id=user_id, stars=review.stars)
    return review


async def update_review(
    db: AsyncSession,
    review_id: int,
    review_data: ReviewCreate,
    user_id: int,
) -> Review:
    review = await get_review(db, review_id)
    require_owner(user_id, review)

    review.review = review_data.review
    review.stars = review_data.stars
    await db.flush()
    await db.refresh(review)

    logger.info("review_updated", review_id=review.id, stars=review.stars)
    return review


async def delete_review(db: AsyncSession, review_id: int, user_id: int) -> int:
    """Delete a review and its images. Returns the reviewed spot's id."""
    review = await get_review(db, review_id)
    require_owner(user_id, review)

    spot_id = review.spot_id
    spot = await get_spot(db, spot_id)
    spot.reviews.remove(review)
    await db.flush()

    logger.info("review_deleted", review_id=review_id, spot_id=spot_id)
    return spot_id


async def add_review_image(
    db: AsyncSession,
    review_id: int,
    image_data: ReviewImageCreate,
    user_id: int,
) -> ReviewImage:
    review = await get_review(db, review_id)
    require_owner(user_id, review)

    limit = get_settings().REVIEW_IMAGE_LIMIT
    if len(review.images) >= limit:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Maximum number of images for this resource was reached",
        )

    image = ReviewImage(url=image_data.url)
    review.images.append(image)
    await db.flush()
    await db.refresh(image)

    logger.info("review_image_added", review_id=review.id, image_id=image.id)
    return image


async def delete_review_image(db: AsyncSession, image_id: int, user_id: int) -> None:
    image = await db.get(ReviewImage, image_id)
    if not image:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Review Image couldn't be found",
        )
    require_owner(user_id, image)

    review = image.review
    review.images.remove(image)
    await db.flush()
    logger.info("review_image_deleted", image_id=image_id, review_id=review.id)
