"""
User Response DTOs
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class UserResponse(BaseModel):
    """Public view of an account. Never includes the password hash."""

    id: str = Field(description="User ID")
    name: str
    email: str
    address: Optional[str] = None
    role: str = Field(description="admin, normal or owner")
    created_at: datetime

    class Config:
        """Pydantic configuration."""
        from_attributes = True


class LoginResponse(BaseModel):
    token: str = Field(description="Bearer credential")
    token_type: str = "bearer"
    user: UserResponse


class IdentityResponse(BaseModel):
    """The caller as resolved from its credential."""

    user_id: str
    role: str
    credential_version: int


class MessageResponse(BaseModel):
    message: str
