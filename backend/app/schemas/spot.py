"""
Pydantic schemas for spots, spot images and spot search.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.user import UserSummary


class SpotCreate(CamelModel):
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1)
    price: int = Field(..., gt=0)


class SpotResponse(CamelModel):
    id: int
    owner_id: int
    address: str
    city: str
    state: str
    country: str
    lat: float
    lng: float
    name: str
    description: str
    price: int
    created_at: datetime
    updated_at: datetime


class SpotImageCreate(CamelModel):
    url: str = Field(..., min_length=1, max_length=2048)
    preview: bool = False


class SpotImageResponse(CamelModel):
    id: int
    url: str
    preview: bool


class SpotListItem(SpotResponse):
    avg_rating: Optional[float] = None
    preview_image: str = ""


class SpotListResponse(CamelModel):
    spots: list[SpotListItem] = Field(alias="Spots")
    page: int
    size: int
    cached: bool = False


class SpotDetail(SpotResponse):
    num_reviews: int = 0
    avg_star_rating: Optional[float] = None
    images: list[SpotImageResponse] = Field(default_factory=list, alias="SpotImages")
    owner: UserSummary = Field(alias="Owner")


class SpotFilters(CamelModel):
    """Normalized search parameters; also the cache key source."""

    page: int
    size: int
    min_lat: Optional[float] = None
    max_lat: Optional[float] = None
    min_lng: Optional[float] = None
    max_lng: Optional[float] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
