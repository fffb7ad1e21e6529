"""
OwnerRequestStatus Value Object

Immutable representation of where an owner-upgrade request sits in its
lifecycle.
"""

from enum import Enum


class OwnerRequestStatus(str, Enum):
    """
    Owner request state enum.

    A request is created PENDING and is decided exactly once. APPROVED and
    REJECTED are terminal: a rejected user has no path back to PENDING.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    def is_terminal(self) -> bool:
        """Check if this state is terminal (no further transitions)."""
        return self in {OwnerRequestStatus.APPROVED, OwnerRequestStatus.REJECTED}

    def can_transition_to(self, new_state: "OwnerRequestStatus") -> bool:
        """
        Check if transition to new state is valid.

        Args:
            new_state: Target state

        Returns:
            True if transition is allowed
        """
        valid_transitions = {
            OwnerRequestStatus.PENDING: {OwnerRequestStatus.APPROVED, OwnerRequestStatus.REJECTED},
            OwnerRequestStatus.APPROVED: set(),
            OwnerRequestStatus.REJECTED: set(),
        }

        return new_state in valid_transitions.get(self, set())

    @classmethod
    def from_string(cls, value: str) -> "OwnerRequestStatus":
        """
        Create OwnerRequestStatus from string value.

        Raises:
            ValueError: If value is not a valid status
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid owner request status: {value}")

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


class Decision(str, Enum):
    """Admin decision on a pending owner request."""

    APPROVE = "approve"
    REJECT = "reject"

    @property
    def target_status(self) -> OwnerRequestStatus:
        if self is Decision.APPROVE:
            return OwnerRequestStatus.APPROVED
        return OwnerRequestStatus.REJECTED
