"""
Spot (listed rental property) and its gallery images.

Deleting a spot removes its images, reviews and bookings through ORM
cascades; the FK `ondelete` clauses cover deletes issued outside the ORM.
"""

from sqlalchemy import (
    Boolean, CheckConstraint, Column, Float, ForeignKey, Index, Integer, String, Text,
)
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin


class Spot(Base, TimestampMixin):
    __tablename__ = "spots"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    country = Column(String(100), nullable=False)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    name = Column(String(50), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Integer, nullable=False)

    owner = relationship("User", lazy="selectin")
    images = relationship(
        "SpotImage",
        back_populates="spot",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="SpotImage.id",
    )
    reviews = relationship(
        "Review",
        back_populates="spot",
        lazy="selectin",
        cascade="all, delete-orphan",
    )
    bookings = relationship(
        "Booking",
        back_populates="spot",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("price > 0", name="check_spot_price_positive"),
        # Bounding-box search filters on both coordinates
        Index("ix_spots_lat_lng", "lat", "lng"),
        Index("ix_spots_price", "price"),
    )

    def __repr__(self) -> str:
        return f"<Spot(id={self.id}, name={self.name}, owner={self.owner_id})>"


class SpotImage(Base, TimestampMixin):
    __tablename__ = "spot_images"

    id = Column(Integer, primary_key=True, index=True)
    spot_id = Column(Integer, ForeignKey("spots.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(2048), nullable=False)
    preview = Column(Boolean, nullable=False, default=False)

    spot = relationship("Spot", back_populates="images", lazy="selectin")

    def __repr__(self) -> str:
        return f"<SpotImage(id={self.id}, spot={self.spot_id}, preview={self.preview})>"
