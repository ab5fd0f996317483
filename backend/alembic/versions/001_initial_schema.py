"""Initial schema: users, spots, images, reviews, bookings.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "spots",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("state", sa.String(100), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("lat", sa.Float(), nullable=False),
        sa.Column("lng", sa.Float(), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("price > 0", name="check_spot_price_positive"),
    )
    op.create_index("ix_spots_id", "spots", ["id"])
    op.create_index("ix_spots_owner_id", "spots", ["owner_id"])
    op.create_index("ix_spots_lat_lng", "spots", ["lat", "lng"])
    op.create_index("ix_spots_price", "spots", ["price"])

    op.create_table(
        "spot_images",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("spot_id", sa.Integer(), sa.ForeignKey("spots.id", ondelete="CASCADE"), nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
        sa.Column("preview", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_spot_images_id", "spot_images", ["id"])
    op.create_index("ix_spot_images_spot_id", "spot_images", ["spot_id"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("spot_id", sa.Integer(), sa.ForeignKey("spots.id", ondelete="CASCADE"), nullable=False),
        sa.Column("review", sa.Text(), nullable=False),
        sa.Column("stars", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "spot_id", name="uq_user_spot_review"),
        sa.CheckConstraint("stars BETWEEN 1 AND 5", name="check_review_stars_range"),
    )
    op.create_index("ix_reviews_id", "reviews", ["id"])
    op.create_index("ix_reviews_user_id", "reviews", ["user_id"])
    op.create_index("ix_reviews_spot_id", "reviews", ["spot_id"])

    op.create_table(
        "review_images",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("review_id", sa.Integer(), sa.ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_review_images_id", "review_images", ["id"])
    op.create_index("ix_review_images_review_id", "review_images", ["review_id"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("spot_id", sa.Integer(), sa.ForeignKey("spots.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("end_date > start_date", name="check_booking_dates_ordered"),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"])
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_spot_id", "bookings", ["spot_id"])
    op.create_index("ix_bookings_spot_start", "bookings", ["spot_id", "start_date"])

    # NO OVERLAPPING STAYS PER SPOT.
    # The API serializes reservations per spot, but this constraint is what
    # makes a double booking impossible even for writers that bypass it.
    # '[]' makes both dates occupied, matching the same-day turnover rule.
    # PostgreSQL only; SQLite relies on the store's write lock.
    if op.get_bind().dialect.name == "postgresql":
        op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
        op.execute(
            """
            ALTER TABLE bookings
            ADD CONSTRAINT excl_bookings_spot_dates
            EXCLUDE USING gist (spot_id WITH =, daterange(start_date, end_date, '[]') WITH &&)
            """
        )


def downgrade() -> None:
    op.drop_table("bookings")
    op.drop_table("review_images")
    op.drop_table("reviews")
    op.drop_table("spot_images")
    op.drop_table("spots")
    op.drop_table("users")
