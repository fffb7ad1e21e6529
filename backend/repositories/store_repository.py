"""
Store repository for store lookups and ownership checks.
"""

from typing import List
from sqlalchemy.orm import Session

from models import Store as StoreModel
from .base_repository import BaseRepository


class StoreRepository(BaseRepository[StoreModel]):
    """Repository for Store model operations."""

    def __init__(self, db: Session):
        super().__init__(db, StoreModel)

    def get_owned_by(self, owner_id: str) -> List[StoreModel]:
        """
        Get every store belonging to an owner, ordered by name.

        Args:
            owner_id: Owner's user UUID

        Returns:
            List of stores
        """
        return self.db.query(self.model).filter(
            self.model.owner_id == owner_id
        ).order_by(self.model.name).all()

    def is_owned_by(self, store_id: str, owner_id: str) -> bool:
        """
        Check that a store exists and belongs to the given owner.

        A missing store and someone else's store both return False.
        """
        return self.db.query(self.model.id).filter(
            self.model.id == store_id,
            self.model.owner_id == owner_id,
        ).first() is not None
