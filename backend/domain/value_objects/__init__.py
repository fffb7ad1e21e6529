"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

- Role: closed set of identity roles
- OwnerRequestStatus / Decision: owner-upgrade workflow states and admin decisions
- RatingValue: validated 1-5 star rating
"""

from .owner_request_status import Decision, OwnerRequestStatus
from .rating_value import RatingValue
from .role import Role

__all__ = ["Decision", "OwnerRequestStatus", "RatingValue", "Role"]
