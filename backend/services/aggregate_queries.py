"""
Aggregate Query Surface

Read-only projections over the current ratings and owner requests. Every
figure is recomputed with SQL aggregates at read time; nothing here is
cached or stored, so a rating write is visible on the very next call.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from domain.aggregates import DashboardCounts, OwnerAggregate, StoreAggregate, mean_or_zero
from domain.entities import IdentityContext
from domain.value_objects import OwnerRequestStatus, Role
from dtos.internal import RaterEntry, StoreListing
from exceptions import NotFoundError, ValidationError
from models import OwnerRequest
from repositories.owner_request_repository import OwnerRequestRepository
from repositories.rating_repository import RatingRepository
from repositories.store_repository import StoreRepository
from repositories.user_repository import UserRepository
from services.access_control import AccessControl


class AggregateQueries:
    """
    Dashboard counts, store/owner averages, and admin/owner views.

    Args:
        db: Database session for this request
        access_control: Gate used for the owner-scoped rater view
    """

    def __init__(self, db: Session, access_control: Optional[AccessControl] = None):
        self.db = db
        self.access_control = access_control
        self.users = UserRepository(db)
        self.stores = StoreRepository(db)
        self.ratings = RatingRepository(db)
        self.requests = OwnerRequestRepository(db)

    def dashboard_counts(self) -> DashboardCounts:
        """Platform totals: users, stores, ratings, pending owner requests."""
        return DashboardCounts(
            user_count=self.users.count(),
            store_count=self.stores.count(),
            rating_count=self.ratings.count(),
            pending_request_count=self.requests.count_by_status(OwnerRequestStatus.PENDING),
        )

    def store_aggregate(self, store_id: str) -> StoreAggregate:
        """
        Average and count of a store's ratings.

        Returns:
            StoreAggregate with avg_rating 0.0 when the store has no ratings

        Raises:
            NotFoundError: If the store does not exist
        """
        if not self.stores.exists(store_id):
            raise NotFoundError("Store", store_id)
        total, count, last_rated_at = self.ratings.store_stats(store_id)
        return StoreAggregate(
            store_id=store_id,
            avg_rating=mean_or_zero(total, count),
            rating_count=count,
            last_rated_at=last_rated_at,
        )

    def owner_aggregate(self, owner_id: str) -> OwnerAggregate:
        """
        Average of every rating across every store the owner holds.

        Returns:
            OwnerAggregate with avg_rating 0.0 when no owned store is rated

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If the user is not an owner
        """
        owner = self.users.get_by_id(owner_id)
        if owner is None:
            raise NotFoundError("User", owner_id)
        if owner.role != Role.OWNER.value:
            raise ValidationError("User is not a store owner", invalid_fields={"owner_id": owner_id})

        total, count = self.ratings.owner_stats(owner_id)
        return OwnerAggregate(
            owner_id=owner_id,
            avg_rating=mean_or_zero(total, count),
            rating_count=count,
            stores=self.owner_store_summaries(owner_id),
        )

    def owner_store_summaries(self, owner_id: str) -> List[StoreAggregate]:
        """Per-store average and count for each store the owner holds."""
        owned = self.stores.get_owned_by(owner_id)
        stats = self.ratings.stats_by_store([store.id for store in owned])
        summaries = []
        for store in owned:
            total, count, last_rated_at = stats.get(store.id, (None, 0, None))
            summaries.append(StoreAggregate(
                store_id=store.id,
                avg_rating=mean_or_zero(total, count),
                rating_count=count,
                last_rated_at=last_rated_at,
            ))
        return summaries

    def store_raters(self, identity: IdentityContext, store_id: str) -> List[RaterEntry]:
        """
        Who rated one of the caller's stores, most recently updated first.

        Raises:
            Forbidden: If the caller is not an owner, or does not own store_id
                (including when store_id does not exist)
        """
        if self.access_control is None:
            raise RuntimeError("store_raters requires an AccessControl")
        self.access_control.authorize(
            identity,
            [Role.OWNER],
            ownership_check=self.access_control.store_ownership(store_id),
        )
        return [
            RaterEntry(
                user_id=r.user.id,
                name=r.user.name,
                email=r.user.email,
                address=r.user.address or '',
                rating=r.rating,
                created_at=r.created_at,
                updated_at=r.updated_at,
            )
            for r in self.ratings.get_raters(store_id)
        ]

    def pending_requests(self) -> List[OwnerRequest]:
        """Pending owner requests, oldest first."""
        return self.requests.get_by_status(OwnerRequestStatus.PENDING)

    def all_requests(self, status: Optional[OwnerRequestStatus] = None) -> List[OwnerRequest]:
        """Every owner request, optionally filtered by status, newest first."""
        return self.requests.get_history(status)

    def stores_for_user(self, user_id: str) -> List[StoreListing]:
        """All stores by name, each with its average and the user's own rating."""
        stores = self.stores.get_all()
        stats = self.ratings.stats_by_store([store.id for store in stores])
        mine = self.ratings.values_by_user(user_id)
        listings = []
        for store in sorted(stores, key=lambda s: s.name):
            total, count, _ = stats.get(store.id, (None, 0, None))
            listings.append(StoreListing(
                id=store.id,
                name=store.name,
                address=store.address or '',
                avg_rating=mean_or_zero(total, count),
                rating_count=count,
                user_rating=mine.get(store.id),
            ))
        return listings
