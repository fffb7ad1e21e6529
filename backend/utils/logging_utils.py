"""
Structured Logging Utilities

Log handler setup plus helpers for adding request-scoped context
(caller id, store id, request id) to log messages.
"""

import inspect
import logging
import sys
from contextvars import ContextVar
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from constants import LogConfig


# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

_CONTEXT_KEYS = ("user_id", "store_id", "request_id", "owner_id")


def configure_logging(log_dir: Path, level: int = logging.INFO) -> Path:
    """
    Install a rotating file handler and a stdout handler on the root logger.

    Safe to call more than once; handlers are only added the first time.

    Args:
        log_dir: Directory for the log file (created if missing)
        level: Root log level

    Returns:
        Path of the log file
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LogConfig.FILE_NAME

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if any(getattr(h, "_ratings_handler", False) for h in root_logger.handlers):
        return log_file

    log_formatter = logging.Formatter(LogConfig.FORMAT)

    # File handler with rotation (10MB per file, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LogConfig.MAX_BYTES,
        backupCount=LogConfig.BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_formatter)
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(level)

    for handler in (file_handler, console_handler):
        handler._ratings_handler = True
        root_logger.addHandler(handler)

    return log_file


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Rating stored", extra={
            "user_id": identity.user_id,
            "store_id": store_id,
        })
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message with structured context."""
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message with structured context."""
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message with structured context."""
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        """Log error message with structured context."""
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current request/operation.

    This context will be automatically included in all log messages
    within the current context (typically a request).

    Example:
        set_logging_context(user_id=identity.user_id, role=identity.role.value)
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def _collect_context(operation_name: str, kwargs: Dict[str, Any]) -> Dict[str, Any]:
    context = {"operation": operation_name}
    for key in _CONTEXT_KEYS:
        if key in kwargs:
            context[key] = kwargs[key]
    identity = kwargs.get("identity")
    if identity is not None and hasattr(identity, "user_id"):
        context["caller_id"] = identity.user_id
    return context


def log_operation(operation_name: str):
    """
    Decorator to log operation start/end with structured context.

    Domain errors still propagate; they are logged at warning level so that
    expected rejections (forbidden, conflict) do not read like crashes.

    Example:
        @log_operation("submit_rating")
        def submit_rating(self, identity, store_id, value):
            ...
    """
    from exceptions import ApplicationError

    def decorator(func):
        logger = StructuredLogger(func.__module__)

        def _failed(context, e):
            context["error"] = str(e)
            context["error_type"] = type(e).__name__
            if isinstance(e, ApplicationError):
                logger.warning(f"Rejected {operation_name}: {e.message}", extra=context)
            else:
                logger.error(f"Failed {operation_name}", extra=context, exc_info=True)

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            context = _collect_context(operation_name, kwargs)
            logger.debug(f"Starting {operation_name}", extra=context)
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _failed(context, e)
                raise
            logger.info(f"Completed {operation_name}", extra=context)
            return result

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            context = _collect_context(operation_name, kwargs)
            logger.debug(f"Starting {operation_name}", extra=context)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _failed(context, e)
                raise
            logger.info(f"Completed {operation_name}", extra=context)
            return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
