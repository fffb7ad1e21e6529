"""
Rating Aggregates

Derived statistics computed from the current set of ratings. None of these
are stored; they are rebuilt on every read.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


def mean_or_zero(total: Optional[float], count: int) -> float:
    """
    Average that reports 0.0 for an empty set instead of None.

    Args:
        total: Sum of values (None when SQL SUM saw no rows)
        count: Number of values

    Returns:
        Mean as float, or 0.0 when count is zero
    """
    if not count or total is None:
        return 0.0
    return float(total) / count


@dataclass(frozen=True)
class StoreAggregate:
    """Average and count of one store's ratings."""

    store_id: str
    avg_rating: float
    rating_count: int
    last_rated_at: Optional[datetime] = None


@dataclass(frozen=True)
class OwnerAggregate:
    """Average of every rating across every store an owner holds."""

    owner_id: str
    avg_rating: float
    rating_count: int = 0
    stores: List[StoreAggregate] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardCounts:
    """Platform-wide totals for the admin dashboard."""

    user_count: int
    store_count: int
    rating_count: int
    pending_request_count: int
