"""
Error handling decorators and utilities for API endpoints.

Domain errors are raised by services and by the access control
dependencies; this module is the single place that turns them into HTTP
responses.
"""

import inspect
import logging
from functools import wraps
from typing import Callable

from fastapi import HTTPException

from constants import AuthMessages, HTTPStatus
from exceptions import (
    ApplicationError,
    ConflictError,
    DatabaseError,
    Forbidden,
    InvalidLogin,
    MissingCredential,
    NotFoundError,
    NotPendingError,
    Unauthenticated,
    ValidationError,
)

logger = logging.getLogger(__name__)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def to_http_exception(error: ApplicationError, operation_name: str = "Request") -> HTTPException:
    """
    Map a domain error to the HTTPException presented to the caller.

    Expired and badly signed credentials share one detail so the response
    does not reveal which check failed.

    Args:
        error: Domain error raised by a service or dependency
        operation_name: Human-readable operation name for logs and 500 details

    Returns:
        HTTPException ready to raise
    """
    if isinstance(error, MissingCredential):
        return HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail=AuthMessages.MISSING_TOKEN,
            headers=BEARER_CHALLENGE,
        )
    if isinstance(error, InvalidLogin):
        return HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail=AuthMessages.INVALID_CREDENTIALS,
        )
    if isinstance(error, Unauthenticated):
        logger.info(f"{operation_name} - Unauthenticated: {error.message}")
        return HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail=AuthMessages.INVALID_TOKEN,
            headers=BEARER_CHALLENGE,
        )
    if isinstance(error, Forbidden):
        logger.info(f"{operation_name} - Forbidden: {error.message}")
        return HTTPException(status_code=HTTPStatus.FORBIDDEN, detail=error.message)
    if isinstance(error, ValidationError):
        logger.warning(f"{operation_name} - Validation error: {error.message}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=error.message)
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=error.message)
    if isinstance(error, (ConflictError, NotPendingError)):
        logger.warning(f"{operation_name} - Conflict: {error.message}")
        return HTTPException(status_code=HTTPStatus.CONFLICT, detail=error.message)
    if isinstance(error, DatabaseError):
        logger.error(f"{operation_name} - Database error: {error.message}", exc_info=True)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Database operation failed: {error.message}"
        )
    logger.error(f"{operation_name} - Application error: {error.message}", exc_info=True)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=f"{operation_name} failed: {error.message}"
    )


def _unexpected(operation_name: str, e: Exception) -> HTTPException:
    logger.error(f"{operation_name} - Unexpected error: {e}", exc_info=True)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=f"{operation_name} failed. Please check server logs or contact support."
    )


def handle_api_errors(operation_name: str):
    """
    Decorator to handle common API errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Submit rating")

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.post("/stores/{store_id}/rating")
        @handle_api_errors("Submit rating")
        def submit_rating(...):
            return ledger.submit_rating(...)
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except ApplicationError as e:
                raise to_http_exception(e, operation_name)
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                raise _unexpected(operation_name, e)

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ApplicationError as e:
                raise to_http_exception(e, operation_name)
            except HTTPException:
                raise
            except Exception as e:
                raise _unexpected(operation_name, e)

        # Return appropriate wrapper based on whether the function is async
        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
