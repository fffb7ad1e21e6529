"""
Rating repository for the (user, store) keyed rating set.

Writes go through insert_if_absent / get_for_update so the uniqueness of
(user_id, store_id) is enforced by the database, never by a read followed
by an insert.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, joinedload

from exceptions import DatabaseError
from models import Rating as RatingModel, Store as StoreModel
from utils.uuid_helper import generate_uuid
from .base_repository import BaseRepository

_UPSERT_DIALECTS = {
    'sqlite': sqlite.insert,
    'postgresql': postgresql.insert,
}


class RatingRepository(BaseRepository[RatingModel]):
    """Repository for Rating model operations."""

    def __init__(self, db: Session):
        super().__init__(db, RatingModel)

    def insert_if_absent(self, user_id: str, store_id: str, value: int, now: datetime) -> bool:
        """
        Insert a rating unless one already exists for (user_id, store_id).

        Issues a single INSERT ... ON CONFLICT (user_id, store_id) DO NOTHING,
        so two concurrent calls for the same pair can never both insert.

        Args:
            user_id: Rating user's UUID
            store_id: Rated store's UUID
            value: Validated rating value
            now: Timestamp for created_at and updated_at

        Returns:
            True if a row was inserted, False if the pair already had a rating

        Raises:
            DatabaseError: If the bound dialect has no ON CONFLICT support
            sqlalchemy.exc.IntegrityError: On foreign key violations
        """
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise DatabaseError("rating_upsert", f"Unsupported database dialect: {dialect}")

        stmt = insert(self.model.__table__).values(
            id=generate_uuid(),
            user_id=user_id,
            store_id=store_id,
            rating=value,
            created_at=now,
            updated_at=now,
        ).on_conflict_do_nothing(index_elements=['user_id', 'store_id'])

        result = self.db.execute(stmt)
        return result.rowcount == 1

    def get_by_pair(self, user_id: str, store_id: str) -> Optional[RatingModel]:
        """Get the rating a user gave a store, if any."""
        return self.db.query(self.model).filter(
            self.model.user_id == user_id,
            self.model.store_id == store_id,
        ).first()

    def get_for_update(self, user_id: str, store_id: str) -> Optional[RatingModel]:
        """
        Load the rating for (user_id, store_id) with a row lock.

        SELECT ... FOR UPDATE on PostgreSQL; SQLite ignores the clause and
        relies on its database-level write lock instead.
        """
        return self.db.query(self.model).filter(
            self.model.user_id == user_id,
            self.model.store_id == store_id,
        ).with_for_update().populate_existing().first()

    def store_stats(self, store_id: str) -> Tuple[Optional[int], int, Optional[datetime]]:
        """
        Sum, count and latest update time of a store's ratings.

        Returns:
            (sum or None, count, max(updated_at) or None)
        """
        total, count, last_rated_at = self.db.query(
            func.sum(self.model.rating),
            func.count(self.model.id),
            func.max(self.model.updated_at),
        ).filter(self.model.store_id == store_id).one()
        return total, count, last_rated_at

    def owner_stats(self, owner_id: str) -> Tuple[Optional[int], int]:
        """
        Sum and count of every rating on every store owned by owner_id.

        Returns:
            (sum or None, count)
        """
        total, count = self.db.query(
            func.sum(self.model.rating),
            func.count(self.model.id),
        ).join(
            StoreModel, StoreModel.id == self.model.store_id
        ).filter(StoreModel.owner_id == owner_id).one()
        return total, count

    def stats_by_store(self, store_ids: List[str]) -> Dict[str, Tuple[int, int, Optional[datetime]]]:
        """
        Sum, count and latest update per store for a set of stores.

        Stores without ratings are absent from the result.
        """
        if not store_ids:
            return {}
        rows = self.db.query(
            self.model.store_id,
            func.sum(self.model.rating),
            func.count(self.model.id),
            func.max(self.model.updated_at),
        ).filter(
            self.model.store_id.in_(store_ids)
        ).group_by(self.model.store_id).all()
        return {store_id: (total, count, last) for store_id, total, count, last in rows}

    def values_by_user(self, user_id: str) -> Dict[str, int]:
        """Map of store_id -> rating value for every store a user has rated."""
        rows = self.db.query(self.model.store_id, self.model.rating).filter(
            self.model.user_id == user_id
        ).all()
        return {store_id: value for store_id, value in rows}

    def get_raters(self, store_id: str) -> List[RatingModel]:
        """
        Ratings of a store with their users loaded, most recently updated first.
        """
        return self.db.query(self.model).options(
            joinedload(self.model.user)
        ).filter(
            self.model.store_id == store_id
        ).order_by(self.model.updated_at.desc()).all()

    def count_for_pair(self, user_id: str, store_id: str) -> int:
        """Number of rating rows for (user_id, store_id); 0 or 1 by construction."""
        return self.db.query(self.model).filter(
            self.model.user_id == user_id,
            self.model.store_id == store_id,
        ).count()
