"""
Booking model: a renter's reserved date range on a spot.

Key design decisions:
- Dates are calendar dates; both ends are occupied days
- end_date > start_date is a CHECK constraint
- Non-overlap per spot is enforced by a PostgreSQL exclusion constraint in
  the migration (needs btree_gist), on top of the reservation guard
- Bookings are never updated once written
"""

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Index, Integer
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    spot_id = Column(Integer, ForeignKey("spots.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    user = relationship("User", lazy="selectin")
    spot = relationship("Spot", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("end_date > start_date", name="check_booking_dates_ordered"),
        # Conflict checks scan one spot's bookings in date order
        Index("ix_bookings_spot_start", "spot_id", "start_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, spot={self.spot_id}, user={self.user_id}, "
            f"{self.start_date}..{self.end_date})>"
        )
