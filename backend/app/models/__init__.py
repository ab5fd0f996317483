from app.models.user import User
from app.models.spot import Spot, SpotImage
from app.models.review import Review, ReviewImage
from app.models.booking import Booking

__all__ = ["User", "Spot", "SpotImage", "Review", "ReviewImage", "Booking"]
