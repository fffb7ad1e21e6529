"""
Response DTOs

DTOs for outgoing API responses. These decouple the API from database models
and provide a clear contract for what data the API returns.
"""

from .owner_request_response import (
    OwnerRequestDecisionResponse,
    OwnerRequestResponse,
    OwnerRequestStatusResponse,
)
from .store_response import (
    DashboardResponse,
    OwnerAggregateResponse,
    RaterResponse,
    RatingResponse,
    StoreAggregateResponse,
    StoreListingResponse,
    StoreResponse,
)
from .user_response import IdentityResponse, LoginResponse, MessageResponse, UserResponse

__all__ = [
    "DashboardResponse",
    "IdentityResponse",
    "LoginResponse",
    "MessageResponse",
    "OwnerAggregateResponse",
    "OwnerRequestDecisionResponse",
    "OwnerRequestResponse",
    "OwnerRequestStatusResponse",
    "RaterResponse",
    "RatingResponse",
    "StoreAggregateResponse",
    "StoreListingResponse",
    "StoreResponse",
    "UserResponse",
]
