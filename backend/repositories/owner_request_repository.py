"""
Owner request repository for the owner-upgrade workflow.
"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload

from domain.value_objects import OwnerRequestStatus
from models import OwnerRequest as OwnerRequestModel
from .base_repository import BaseRepository


class OwnerRequestRepository(BaseRepository[OwnerRequestModel]):
    """Repository for OwnerRequest model operations."""

    def __init__(self, db: Session):
        super().__init__(db, OwnerRequestModel)

    def get_by_user(self, user_id: str) -> Optional[OwnerRequestModel]:
        """
        Get the (single) owner request made by a user.

        Args:
            user_id: Requesting user's UUID

        Returns:
            OwnerRequest or None if the user never asked
        """
        return self.db.query(self.model).filter(self.model.user_id == user_id).first()

    def get_with_user(self, request_id: str) -> Optional[OwnerRequestModel]:
        """Get a request with its user eagerly loaded."""
        return self.db.query(self.model).options(
            joinedload(self.model.user)
        ).filter(self.model.id == request_id).first()

    def transition(
        self,
        request_id: str,
        from_status: OwnerRequestStatus,
        to_status: OwnerRequestStatus,
        now: datetime,
        reason: Optional[str] = None,
    ) -> int:
        """
        Move a request between states if, and only if, it is still in from_status.

        The status guard is part of the UPDATE's WHERE clause, so two admins
        deciding the same request concurrently cannot both succeed.

        Args:
            request_id: Request UUID
            from_status: Required current status
            to_status: New status
            now: Timestamp for updated_at
            reason: Stored in the reason column (rejections only)

        Returns:
            Number of rows updated (1 on success, 0 if the guard failed)
        """
        table = self.model.__table__
        result = self.db.execute(
            update(table)
            .where(table.c.id == request_id, table.c.status == from_status.value)
            .values(status=to_status.value, reason=reason, updated_at=now)
        )
        return result.rowcount

    def get_by_status(self, status: OwnerRequestStatus) -> List[OwnerRequestModel]:
        """
        Requests in one status, oldest first.

        Returns:
            List ordered by created_at ascending
        """
        return self.db.query(self.model).options(
            joinedload(self.model.user)
        ).filter(
            self.model.status == status.value
        ).order_by(self.model.created_at.asc(), self.model.id.asc()).all()

    def get_history(self, status: Optional[OwnerRequestStatus] = None) -> List[OwnerRequestModel]:
        """
        All requests, optionally filtered by status, newest first.
        """
        query = self.db.query(self.model).options(joinedload(self.model.user))
        if status:
            query = query.filter(self.model.status == status.value)
        return query.order_by(self.model.created_at.desc(), self.model.id.desc()).all()

    def count_by_status(self, status: OwnerRequestStatus) -> int:
        """Count requests in a status."""
        return self.db.query(self.model).filter(
            self.model.status == status.value
        ).count()
