"""
Rating Request DTOs
"""

from pydantic import BaseModel, Field


class SubmitRatingRequest(BaseModel):
    """
    Rating submission.

    The 1-5 range is enforced by the rating ledger, not here, so an out of
    range value is reported as a domain validation error.
    """

    rating: int = Field(description="Whole number from 1 to 5")
