"""
Role Value Object

Closed set of roles an identity can hold.
"""

from enum import Enum


class Role(str, Enum):
    """
    Immutable role enum.

    Persisted as its string value; anything outside this set is rejected
    both by the enum and by a CHECK constraint on users.role.
    """

    ADMIN = "admin"
    NORMAL = "normal"
    OWNER = "owner"

    @classmethod
    def from_string(cls, value: str) -> "Role":
        """
        Create Role from string value.

        Args:
            value: String representation

        Returns:
            Role instance

        Raises:
            ValueError: If value is not a valid role
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid role: {value}")

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]
