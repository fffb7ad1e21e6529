"""
Request DTOs

DTOs for incoming API requests. These decouple the API from database models
and provide a clear contract for what data the API expects.
"""

from .auth_request import (
    ChangePasswordRequest,
    CreateStoreRequest,
    CreateUserRequest,
    LoginRequest,
    SignupRequest,
)
from .owner_request_request import RejectOwnerRequest
from .rating_request import SubmitRatingRequest

__all__ = [
    "ChangePasswordRequest",
    "CreateStoreRequest",
    "CreateUserRequest",
    "LoginRequest",
    "RejectOwnerRequest",
    "SignupRequest",
    "SubmitRatingRequest",
]
