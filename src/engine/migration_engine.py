# SPDX-License-Identifier: MIT
"""Batch migration of environment documents.

Each environment is migrated independently: a failure is reported, optionally
quarantined, and the remaining environments carry on unless ``strict`` is set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, MutableMapping, Sequence

import logfire

from io_utils.quarantine import QuarantineWriter
from migrations import MalformedDocumentError, MigrationError, MigrationRunner
from models import MigrationReport
from observability import telemetry
from utils import ErrorHandler, LoggingErrorHandler


@dataclass
class MigrationFailure:
    """An environment that could not be brought up to date."""

    index: int
    environment: str
    error: MigrationError


@dataclass
class BatchResult:
    """Reports for migrated environments and the failures encountered."""

    reports: list[MigrationReport] = field(default_factory=list)
    failures: list[MigrationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` when every environment migrated."""
        return not self.failures


def _label(environment: Any, index: int) -> str:
    """Return a human readable label for ``environment``."""
    if isinstance(environment, MutableMapping):
        name = environment.get("name")
        if isinstance(name, str) and name:
            return name
        uuid = environment.get("uuid")
        if isinstance(uuid, str) and uuid:
            return uuid
    return f"environment-{index}"


class MigrationEngine:
    """Run the migration runner over a sequence of environments.

    Args:
        runner: Runner to use; defaults to the shipped migrations.
        error_handler: Receives one report per failing environment.
        quarantine: Optional writer storing failed environments.
        strict: Re-raise the first failure instead of continuing.
    """

    def __init__(
        self,
        runner: MigrationRunner | None = None,
        error_handler: ErrorHandler | None = None,
        quarantine: QuarantineWriter | None = None,
        strict: bool = False,
    ) -> None:
        self.runner = runner or MigrationRunner()
        self.error_handler = error_handler or LoggingErrorHandler()
        self.quarantine = quarantine
        self.strict = strict

    def migrate(
        self, environments: Sequence[Any], *, target: int | None = None
    ) -> BatchResult:
        """Migrate every document in ``environments`` in place.

        Raises:
            MigrationError: The first failure, when ``strict`` is enabled.
        """
        result = BatchResult()
        with logfire.span(
            "migration_engine.migrate",
            attributes={"count": len(environments), "strict": self.strict},
        ):
            for index, environment in enumerate(environments):
                label = _label(environment, index)
                try:
                    report = self.runner.apply(environment, target=target)
                except MigrationError as exc:
                    self._report_failure(environment, label, exc)
                    result.failures.append(MigrationFailure(index, label, exc))
                    if self.strict:
                        raise
                    continue
                telemetry.record_migration(report)
                result.reports.append(report)
        return result

    def _report_failure(
        self, environment: Any, label: str, exc: MigrationError
    ) -> None:
        """Log, count and optionally quarantine a failed environment."""
        self.error_handler.handle(
            f"Environment '{label}' failed to migrate",
            exc,
            environment=label,
            step=exc.step_id,
            last_applied=exc.last_applied,
        )
        telemetry.record_failure(label, exc.step_id)
        if self.quarantine is None:
            return
        kind = (
            "malformed_document"
            if isinstance(exc, MalformedDocumentError)
            else "step_failure"
        )
        self.quarantine.write(
            label, kind, environment, step_id=exc.step_id, error=exc.message
        )


def migrate_environments(
    environments: Sequence[Any],
    *,
    target: int | None = None,
    strict: bool = False,
    quarantine: QuarantineWriter | None = None,
) -> BatchResult:
    """Migrate ``environments`` in place with the shipped migrations."""
    engine = MigrationEngine(quarantine=quarantine, strict=strict)
    return engine.migrate(environments, target=target)


__all__ = [
    "BatchResult",
    "MigrationEngine",
    "MigrationFailure",
    "migrate_environments",
]
