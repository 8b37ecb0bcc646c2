"""Utility interfaces and implementations."""

from .error_handler import ErrorHandler, LoggingErrorHandler
from .identifiers import new_uuid

__all__ = [
    "ErrorHandler",
    "LoggingErrorHandler",
    "new_uuid",
]
