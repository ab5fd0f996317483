"""
Ownership-based authorization.

Every mutable resource has exactly one owning user. `owner_id_of` resolves
it per resource type; handlers call `require_owner` instead of comparing
ids themselves.
"""

from functools import singledispatch

from fastapi import HTTPException, status

from app.models.booking import Booking
from app.models.review import Review, ReviewImage
from app.models.spot import Spot, SpotImage


@singledispatch
def owner_id_of(resource) -> int:
    raise TypeError(f"No ownership rule for {type(resource).__name__}")


@owner_id_of.register
def _(resource: Spot) -> int:
    return resource.owner_id


@owner_id_of.register
def _(resource: SpotImage) -> int:
    return resource.spot.owner_id


@owner_id_of.register
def _(resource: Review) -> int:
    return resource.user_id


@owner_id_of.register
def _(resource: ReviewImage) -> int:
    return resource.review.user_id


@owner_id_of.register
def _(resource: Booking) -> int:
    return resource.user_id


def can_mutate(user_id: int, resource) -> bool:
    """May `user_id` change or delete `resource`?"""
    return owner_id_of(resource) == user_id


def require_owner(user_id: int, resource) -> None:
    """Raise 403 unless `user_id` owns `resource`."""
    if not can_mutate(user_id, resource):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
