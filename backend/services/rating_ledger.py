"""
Rating Ledger

Owns the rating set. Each (user, store) pair has at most one rating; a
second submission overwrites the value and moves updated_at forward while
created_at stays as it was. The write is committed before the call
returns, so the next aggregate read already includes it.
"""

from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.entities import IdentityContext
from domain.value_objects import RatingValue
from dtos.internal import RatingResult
from exceptions import DatabaseError, NotFoundError
from models import Rating
from repositories.rating_repository import RatingRepository
from repositories.store_repository import StoreRepository
from services.interfaces import IClock, SystemClock
from utils.logging_utils import StructuredLogger, log_operation

logger = StructuredLogger(__name__)

TIMESTAMP_RESOLUTION = timedelta(microseconds=1)


class RatingLedger:
    """
    Upserts ratings keyed on (user_id, store_id).

    Args:
        db: Database session for this request
        clock: Time source for created_at/updated_at
    """

    def __init__(self, db: Session, clock: IClock | None = None):
        self.db = db
        self.clock = clock or SystemClock()
        self.ratings = RatingRepository(db)
        self.stores = StoreRepository(db)

    @log_operation("submit_rating")
    def submit_rating(self, identity: IdentityContext, store_id: str, value) -> RatingResult:
        """
        Create or overwrite the caller's rating of a store.

        The insert is a single INSERT ... ON CONFLICT DO NOTHING. If it
        inserted nothing, the existing row is locked and overwritten. There is
        no read-then-insert window in which a concurrent submission could
        create a second row.

        Args:
            identity: Rating user
            store_id: Store being rated
            value: Integer from 1 to 5

        Returns:
            RatingResult with the stored row and whether it was created

        Raises:
            InvalidRatingValue: If value is not an integer in [1, 5] (nothing is written)
            NotFoundError: If the store, or the caller's user record, does not exist
        """
        rating_value = RatingValue(value)

        if not self.stores.exists(store_id):
            raise NotFoundError("Store", store_id)

        now = self.clock.now()
        try:
            created = self.ratings.insert_if_absent(
                identity.user_id, store_id, rating_value.value, now
            )
            if created:
                rating = self.ratings.get_by_pair(identity.user_id, store_id)
            else:
                rating = self._overwrite(identity.user_id, store_id, rating_value.value, now)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # The store was checked above, so a foreign key failure here means
            # the caller's account no longer exists (or the store vanished mid-request).
            logger.warning(
                "Rating write violated a constraint",
                extra={"user_id": identity.user_id, "store_id": store_id, "error": str(e.orig)},
            )
            if not self.stores.exists(store_id):
                raise NotFoundError("Store", store_id)
            raise NotFoundError("User", identity.user_id)
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(rating)
        logger.info(
            f"Rating {'created' if created else 'updated'}",
            extra={"user_id": identity.user_id, "store_id": store_id, "rating": rating.rating},
        )
        return RatingResult(rating=rating, created=created)

    def _overwrite(self, user_id: str, store_id: str, value: int, now: datetime) -> Rating:
        rating = self.ratings.get_for_update(user_id, store_id)
        if rating is None:
            # The conflicting row was deleted between the insert and the lock.
            raise DatabaseError("submit_rating", "Rating disappeared during update; retry the request")

        rating.rating = value
        rating.updated_at = self._next_timestamp(rating.updated_at, now)
        self.db.flush()
        return rating

    @staticmethod
    def _next_timestamp(previous: datetime, now: datetime) -> datetime:
        """updated_at must strictly increase even if the clock has not moved."""
        if now > previous:
            return now
        return previous + TIMESTAMP_RESOLUTION
