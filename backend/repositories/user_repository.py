"""
User repository for account lookups and role changes.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import update
from sqlalchemy.orm import Session

from domain.value_objects import Role
from models import User as UserModel
from .base_repository import BaseRepository


class UserRepository(BaseRepository[UserModel]):
    """Repository for User model operations."""

    def __init__(self, db: Session):
        super().__init__(db, UserModel)

    def get_by_email(self, email: str) -> Optional[UserModel]:
        """
        Get a user by email address.

        Args:
            email: Email address (exact match)

        Returns:
            User or None
        """
        return self.db.query(self.model).filter(self.model.email == email).first()

    def has_role(self, role: Role) -> bool:
        """Check whether any user holds the given role."""
        return self.db.query(self.model.id).filter(self.model.role == role.value).first() is not None

    def set_role(self, user_id: str, role: Role, now: datetime) -> int:
        """
        Overwrite a user's role and bump its credential version.

        Args:
            user_id: User UUID
            role: New role
            now: Timestamp for updated_at

        Returns:
            Number of rows updated (0 if the user is gone)
        """
        table = self.model.__table__
        result = self.db.execute(
            update(table)
            .where(table.c.id == user_id)
            .values(
                role=role.value,
                credential_version=table.c.credential_version + 1,
                updated_at=now,
            )
        )
        return result.rowcount

    def set_password_hash(self, user: UserModel, password_hash: str, now: datetime) -> UserModel:
        """Replace the password hash and bump the credential version."""
        user.password_hash = password_hash
        user.credential_version = (user.credential_version or 1) + 1
        user.updated_at = now
        self.db.flush()
        return user
