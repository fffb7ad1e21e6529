"""
Repository layer for data access abstraction.

This package contains repository classes that encapsulate database queries
and provide a clean interface for data access operations.
"""

from .base_repository import BaseRepository
from .owner_request_repository import OwnerRequestRepository
from .rating_repository import RatingRepository
from .store_repository import StoreRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "OwnerRequestRepository",
    "RatingRepository",
    "StoreRepository",
    "UserRepository",
]
