"""
Service Interfaces

Abstract base classes for collaborators the core services depend on,
following the Dependency Inversion Principle. Tests substitute their own
implementations through FastAPI dependency overrides.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone


class IClock(ABC):
    """
    Source of the current time.

    Implementations return naive UTC datetimes, the form stored in the
    database.
    """

    @abstractmethod
    def now(self) -> datetime:
        """
        Get the current time.

        Returns:
            Naive datetime in UTC
        """
        pass


class SystemClock(IClock):
    """Wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)
