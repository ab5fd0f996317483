"""
Guest reviews of a spot, with attached images.

One review per (user, spot), enforced by a unique constraint.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin


class Review(Base, TimestampMixin):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    spot_id = Column(Integer, ForeignKey("spots.id", ondelete="CASCADE"), nullable=False, index=True)
    review = Column(Text, nullable=False)
    stars = Column(Integer, nullable=False)

    user = relationship("User", lazy="selectin")
    spot = relationship("Spot", back_populates="reviews")
    images = relationship(
        "ReviewImage",
        back_populates="review",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="ReviewImage.id",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "spot_id", name="uq_user_spot_review"),
        CheckConstraint("stars BETWEEN 1 AND 5", name="check_review_stars_range"),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, user={self.user_id}, spot={self.spot_id}, stars={self.stars})>"


class ReviewImage(Base, TimestampMixin):
    __tablename__ = "review_images"

    id = Column(Integer, primary_key=True, index=True)
    review_id = Column(Integer, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(2048), nullable=False)

    review = relationship("Review", back_populates="images", lazy="selectin")

    def __repr__(self) -> str:
        return f"<ReviewImage(id={self.id}, review={self.review_id})>"
