"""
Owner Request Response DTOs
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class OwnerRequestResponse(BaseModel):
    id: str
    user_id: str
    status: str = Field(description="pending, approved or rejected")
    reason: Optional[str] = Field(None, description="Set only when rejected")
    created_at: datetime
    updated_at: datetime
    name: Optional[str] = Field(None, description="Requester's name")
    email: Optional[str] = Field(None, description="Requester's email")

    @classmethod
    def from_model(cls, request) -> "OwnerRequestResponse":
        user = request.user
        return cls(
            id=request.id,
            user_id=request.user_id,
            status=request.status,
            reason=request.reason,
            created_at=request.created_at,
            updated_at=request.updated_at,
            name=user.name if user else None,
            email=user.email if user else None,
        )


class OwnerRequestDecisionResponse(BaseModel):
    message: str
    request: OwnerRequestResponse


class OwnerRequestStatusResponse(BaseModel):
    request: Optional[OwnerRequestResponse] = None
    message: Optional[str] = None
