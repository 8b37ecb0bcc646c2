# SPDX-License-Identifier: MIT
"""Exceptions raised while upgrading environment documents."""

from __future__ import annotations


class MigrationError(Exception):
    """Base class for failures raised by the migration runner.

    Attributes:
        step_id: Identifier of the first step that failed, when known.
        last_applied: Marker left on the document when the run stopped.
    """

    def __init__(
        self,
        message: str,
        *,
        step_id: int | None = None,
        last_applied: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.step_id = step_id
        self.last_applied = last_applied

    def __str__(self) -> str:
        parts = [self.message]
        if self.step_id is not None:
            parts.append(f"step={self.step_id}")
        if self.last_applied is not None:
            parts.append(f"last_applied={self.last_applied}")
        return " ".join(parts)


class MalformedDocumentError(MigrationError):
    """The document lacks a structure a migration step relies on."""


class MigrationStepError(MigrationError):
    """A migration step raised an unexpected exception."""


__all__ = ["MigrationError", "MalformedDocumentError", "MigrationStepError"]
