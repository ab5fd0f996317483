"""
Pydantic schemas for reviews and review images.
"""

from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.user import UserSummary


class ReviewCreate(CamelModel):
    review: str = Field(..., min_length=1)
    stars: int = Field(..., ge=1, le=5)


class ReviewImageCreate(CamelModel):
    url: str = Field(..., min_length=1, max_length=2048)


class ReviewImageResponse(CamelModel):
    id: int
    url: str


class ReviewResponse(CamelModel):
    id: int
    user_id: int
    spot_id: int
    review: str
    stars: int
    created_at: datetime
    updated_at: datetime


class ReviewDetail(ReviewResponse):
    user: UserSummary = Field(alias="User")
    images: list[ReviewImageResponse] = Field(default_factory=list, alias="ReviewImages")


class ReviewListResponse(CamelModel):
    reviews: list[ReviewDetail] = Field(alias="Reviews")
