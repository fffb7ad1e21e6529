"""
Owner Request DTOs
"""

from pydantic import BaseModel, Field
from typing import Optional


class RejectOwnerRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=500, description="Shown to the requester; defaulted when omitted")
