"""
Internal Service Result DTOs

Values returned by the core services to the API layer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from models import Rating, User


@dataclass
class RatingResult:
    """
    Outcome of a rating submission.

    created is True when the submission inserted the (user, store) row and
    False when it overwrote an existing one.
    """

    rating: Rating
    created: bool

    @property
    def updated(self) -> bool:
        return not self.created


@dataclass
class LoginResult:
    token: str
    user: User


@dataclass(frozen=True)
class RaterEntry:
    """One user's rating of a store, as shown to the store's owner."""

    user_id: str
    name: str
    email: str
    address: str
    rating: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class StoreListing:
    """A store with its average and the viewing user's own rating."""

    id: str
    name: str
    address: str
    avg_rating: float
    rating_count: int
    user_rating: Optional[int]
