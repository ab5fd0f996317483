from app.schemas.user import UserCreate, UserResponse, UserLogin, UserSummary, Token
from app.schemas.spot import (
    SpotCreate, SpotResponse, SpotDetail, SpotListItem, SpotListResponse,
    SpotImageCreate, SpotImageResponse, SpotFilters,
)
from app.schemas.review import (
    ReviewCreate, ReviewResponse, ReviewDetail, ReviewListResponse,
    ReviewImageCreate, ReviewImageResponse,
)
from app.schemas.booking import (
    BookingCreate, BookingResponse, BookingOwnerView, BookingPublicView, BookingListResponse,
)

__all__ = [
    "UserCreate", "UserResponse", "UserLogin", "UserSummary", "Token",
    "SpotCreate", "SpotResponse", "SpotDetail", "SpotListItem", "SpotListResponse",
    "SpotImageCreate", "SpotImageResponse", "SpotFilters",
    "ReviewCreate", "ReviewResponse", "ReviewDetail", "ReviewListResponse",
    "ReviewImageCreate", "ReviewImageResponse",
    "BookingCreate", "BookingResponse", "BookingOwnerView", "BookingPublicView",
    "BookingListResponse",
]
