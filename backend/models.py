from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, CheckConstraint, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from database import Base
from domain.value_objects import OwnerRequestStatus, Role
from utils.uuid_helper import generate_uuid


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what SQLite round-trips."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _in_clause(column: str, values: list[str]) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class User(Base):
    """
    A platform account.

    role is written only by administrative user creation and by approval of
    an owner request. credential_version is bumped whenever the role or the
    password changes and is embedded in issued credentials.
    """
    __tablename__ = 'users'

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    address = Column(Text, default='')
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default=Role.NORMAL.value)
    credential_version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    stores = relationship("Store", back_populates="owner")
    ratings = relationship("Rating", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    owner_request = relationship("OwnerRequest", back_populates="user", uselist=False,
                                 cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        CheckConstraint(_in_clause('role', Role.values()), name='ck_users_role'),
        CheckConstraint("name != ''"),
        Index('idx_users_role', 'role'),
    )


class Store(Base):
    __tablename__ = 'stores'

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False)
    email = Column(String)
    address = Column(Text, default='')
    owner_id = Column(String, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    owner = relationship("User", back_populates="stores")
    ratings = relationship("Rating", back_populates="store", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("name != ''"),
        Index('idx_stores_owner', 'owner_id'),
    )


class Rating(Base):
    """
    One user's rating of one store.

    The (user_id, store_id) unique constraint is what makes the rating ledger's
    upsert atomic: a second insert for the same pair is turned into an update.
    created_at is set once; updated_at moves forward on every write.
    """
    __tablename__ = 'ratings'

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    store_id = Column(String, ForeignKey('stores.id', ondelete='CASCADE'), nullable=False)
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="ratings")
    store = relationship("Store", back_populates="ratings")

    __table_args__ = (
        UniqueConstraint('user_id', 'store_id', name='uq_ratings_user_store'),
        CheckConstraint('rating BETWEEN 1 AND 5', name='ck_ratings_range'),
        Index('idx_ratings_store', 'store_id'),
    )


class OwnerRequest(Base):
    """
    A normal user's request to be promoted to store owner.

    Each user has at most one request for the lifetime of the account
    (unique user_id). Status starts at pending; approved and rejected are
    terminal. reason is only populated on rejection.
    """
    __tablename__ = 'owner_requests'

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    status = Column(String, nullable=False, default=OwnerRequestStatus.PENDING.value)
    reason = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="owner_request")

    __table_args__ = (
        UniqueConstraint('user_id', name='uq_owner_requests_user'),
        CheckConstraint(_in_clause('status', OwnerRequestStatus.values()), name='ck_owner_requests_status'),
        Index('idx_owner_requests_status_created', 'status', 'created_at'),
    )
