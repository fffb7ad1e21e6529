"""
Store and Rating Response DTOs
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional


class StoreResponse(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    address: Optional[str] = None
    owner_id: Optional[str] = None
    created_at: datetime

    class Config:
        """Pydantic configuration."""
        from_attributes = True


class RatingResponse(BaseModel):
    """
    Stored rating after a submission.

    created tells the client whether this submission created the rating
    or overwrote an earlier one.
    """

    id: str
    user_id: str
    store_id: str
    rating: int
    created_at: datetime
    updated_at: datetime
    created: bool = Field(description="True on first submission for this store")

    @classmethod
    def from_result(cls, result) -> "RatingResponse":
        r = result.rating
        return cls(
            id=r.id,
            user_id=r.user_id,
            store_id=r.store_id,
            rating=r.rating,
            created_at=r.created_at,
            updated_at=r.updated_at,
            created=result.created,
        )


class StoreAggregateResponse(BaseModel):
    store_id: str
    avg_rating: float = Field(description="Mean rating; 0 when unrated")
    rating_count: int

    class Config:
        """Pydantic configuration."""
        from_attributes = True


class OwnerAggregateResponse(BaseModel):
    owner_id: str
    avg_rating: float = Field(description="Mean over all ratings of all owned stores; 0 when unrated")
    rating_count: int
    stores: List[StoreAggregateResponse] = Field(default_factory=list)

    class Config:
        """Pydantic configuration."""
        from_attributes = True


class StoreListingResponse(BaseModel):
    id: str
    name: str
    address: str
    avg_rating: float
    rating_count: int
    user_rating: Optional[int] = Field(None, description="The caller's own rating, if any")

    class Config:
        """Pydantic configuration."""
        from_attributes = True


class RaterResponse(BaseModel):
    user_id: str
    name: str
    email: str
    address: str
    rating: int
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic configuration."""
        from_attributes = True


class DashboardResponse(BaseModel):
    user_count: int
    store_count: int
    rating_count: int
    pending_request_count: int

    class Config:
        """Pydantic configuration."""
        from_attributes = True
