"""
Internal DTOs

DTOs for service-to-service communication within the backend.
These are not exposed to external APIs.
"""

from .service_results import LoginResult, RaterEntry, RatingResult, StoreListing

__all__ = ["LoginResult", "RaterEntry", "RatingResult", "StoreListing"]
