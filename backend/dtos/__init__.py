"""
Data Transfer Objects (DTOs) Layer

This package contains DTOs that decouple the API layer from the database models.

Structure:
- request/: DTOs for incoming API requests
- response/: DTOs for outgoing API responses
- internal/: results passed from services to the API layer
"""
