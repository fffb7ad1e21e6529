"""
RatingValue Value Object

Immutable, validated star rating.
"""

from dataclasses import dataclass

from constants import RatingBounds
from exceptions import InvalidRatingValue


@dataclass(frozen=True)
class RatingValue:
    """
    Immutable rating value object.

    Only whole numbers from 1 to 5 are accepted. Booleans are rejected even
    though they are ints in Python.
    """

    value: int

    def __post_init__(self):
        """Validate rating."""
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidRatingValue(self.value)
        if not RatingBounds.MIN <= self.value <= RatingBounds.MAX:
            raise InvalidRatingValue(self.value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"{self.value}/{RatingBounds.MAX}"
