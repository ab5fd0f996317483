"""
Infrastructure layer - external system integrations.
Keeps business logic clean from implementation details.
"""

from .booking_store import SqlBookingStore
from .redis_client import get_redis, close_redis

__all__ = ['SqlBookingStore', 'get_redis', 'close_redis']
