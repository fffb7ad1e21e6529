"""
Domain Aggregates

Derived projections over the rating set and the owner-request queue.

- StoreAggregate: per-store average and count
- OwnerAggregate: per-owner average across owned stores
- DashboardCounts: platform totals
"""

from .rating_aggregates import DashboardCounts, OwnerAggregate, StoreAggregate, mean_or_zero

__all__ = ["DashboardCounts", "OwnerAggregate", "StoreAggregate", "mean_or_zero"]
