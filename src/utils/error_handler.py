"""Error handling abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import logfire


class ErrorHandler(ABC):
    """Interface for reporting errors.

    Implementations should avoid raising further exceptions and should emit
    concise diagnostics suitable for production logs.
    """

    @abstractmethod
    def handle(
        self, message: str, exc: Exception | None = None, **context: Any
    ) -> None:
        """Record ``message`` with optional ``exc`` and structured ``context``."""


class LoggingErrorHandler(ErrorHandler):
    """Error handler that logs via ``logfire``."""

    def handle(
        self, message: str, exc: Exception | None = None, **context: Any
    ) -> None:
        """Log an error message with optional exception context.

        Args:
            message: Description of the error to record.
            exc: Exception instance providing additional context.
            **context: Extra attributes attached to the log record, such as
                the environment name or failing step id.

        Returns:
            None.
        """
        if exc:
            logfire.error(
                "{detail}: {error}", detail=message, error=str(exc), **context
            )
        else:
            logfire.error("{detail}", detail=message, **context)
