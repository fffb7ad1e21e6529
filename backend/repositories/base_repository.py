"""
Shared data access for the users, stores, ratings and owner_requests tables.

Every table uses a UUID string primary key named id. Writes are flushed but
never committed here; the calling service owns the transaction.
"""

from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import exists as sql_exists, func
from sqlalchemy.orm import Session

ModelT = TypeVar('ModelT')


class BaseRepository(Generic[ModelT]):
    """
    Lookups and counts by primary key for one model.

    Args:
        db: Session owned by the calling service
        model: Mapped class with a string id column
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model

    def create(self, obj: ModelT) -> ModelT:
        """
        Stage a new row and flush it.

        Unique and foreign key violations are raised from here as
        IntegrityError, before the service commits.
        """
        self.db.add(obj)
        self.db.flush()
        return obj

    def get_by_id(self, id: str) -> Optional[ModelT]:
        return self.db.get(self.model, id)

    def get_all(self) -> List[ModelT]:
        """Every row, in no particular order."""
        return self.db.query(self.model).all()

    def count(self) -> int:
        """Row count computed by the database at call time."""
        return self.db.query(func.count(self.model.id)).scalar() or 0

    def exists(self, id: str) -> bool:
        return self.db.query(sql_exists().where(self.model.id == id)).scalar()
