"""
Custom exception classes for the application.

This module defines the domain error taxonomy shared by the access control
gate, the rating ledger and the owner-request workflow. Every error carries
a human-readable message plus a details dict, and is translated to an HTTP
response at the API boundary by utils.error_handlers.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class Unauthenticated(ApplicationError):
    """Raised when no usable credential accompanies a request"""


class MissingCredential(Unauthenticated):
    """Raised when the credential is absent or empty"""

    def __init__(self, message: str = "Credential missing"):
        super().__init__(message)


class ExpiredCredential(Unauthenticated):
    """Raised when a correctly signed credential is past its expiry"""

    def __init__(self, message: str = "Credential expired"):
        super().__init__(message)


class InvalidSignature(Unauthenticated):
    """Raised when a credential is malformed, tampered with, or carries unknown claims"""

    def __init__(self, message: str = "Credential signature invalid"):
        super().__init__(message)


class InvalidLogin(Unauthenticated):
    """Raised when an email/password pair does not match an account"""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class Forbidden(ApplicationError):
    """Raised when an authenticated caller lacks the role or ownership an operation needs"""

    def __init__(self, message: str, required_roles: list[str] | None = None):
        details = {"required_roles": required_roles} if required_roles else {}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when validation fails"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class InvalidRatingValue(ValidationError):
    """Raised when a rating is not an integer between 1 and 5"""

    def __init__(self, value):
        super().__init__(
            "Rating must be between 1 and 5",
            invalid_fields={"rating": value},
        )


class ConflictError(ApplicationError):
    """Raised when a write collides with a uniqueness constraint"""


class DuplicateRequestError(ConflictError):
    """Raised when a user who already has an owner request asks again"""

    def __init__(self, user_id: str, existing_status: str | None = None):
        details = {"user_id": user_id}
        if existing_status:
            details["existing_status"] = existing_status
        if existing_status == "rejected":
            msg = "Your owner request was rejected and cannot be resubmitted"
        else:
            msg = "You already have a pending or approved owner request"
        super().__init__(msg, details)


class NotFoundError(ApplicationError):
    """Raised when a referenced entity does not exist"""

    def __init__(self, entity: str, entity_id: str):
        details = {"entity": entity, "id": entity_id}
        super().__init__(f"{entity} not found", details)


class NotPendingError(ApplicationError):
    """Raised when an owner request decision targets a request that is no longer pending"""

    def __init__(self, request_id: str, status: str):
        details = {"request_id": request_id, "status": status}
        super().__init__("Request is not pending", details)


class DatabaseError(ApplicationError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)
