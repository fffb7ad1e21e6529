"""
Identity Entity

The resolved caller of an operation.
"""

from dataclasses import dataclass

from domain.value_objects.role import Role


@dataclass(frozen=True)
class IdentityContext:
    """
    Caller identity resolved from a verified credential.

    The role is the one embedded in the credential at issue time. A role
    change in storage is not reflected until the caller obtains a new
    credential.
    """

    user_id: str
    role: Role
    credential_version: int = 1

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles
