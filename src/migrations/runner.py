# SPDX-License-Identifier: MIT
"""Apply pending migration steps to environment documents.

The runner reads the ``lastMigration`` marker, applies every registered step
with a greater id in ascending order and advances the marker after each step.
A failing step stops the run with the marker left on the last completed step,
so a retry resumes where the previous attempt ended.
"""

from __future__ import annotations

from typing import Any, MutableMapping

import logfire

from constants import LAST_MIGRATION_FIELD
from models import MigrationReport

from .catalog import MIGRATIONS
from .errors import MalformedDocumentError, MigrationError, MigrationStepError
from .registry import Document, MigrationRegistry


def _coerce_marker(value: Any) -> int:
    """Return ``value`` as a non-negative marker.

    Raises:
        MalformedDocumentError: If ``value`` is not an integer.
    """
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedDocumentError(
            f"'{LAST_MIGRATION_FIELD}' must be an integer, got {value!r}"
        )
    return max(value, 0)


def read_marker(document: Document) -> int:
    """Return the migration marker stored on ``document``.

    Documents created before versioning carry no marker and yield ``0``.
    """
    return _coerce_marker(document.get(LAST_MIGRATION_FIELD))


class MigrationRunner:
    """Upgrade documents through the steps of a :class:`MigrationRegistry`."""

    def __init__(self, registry: MigrationRegistry | None = None) -> None:
        self.registry = registry or MIGRATIONS

    @property
    def highest_id(self) -> int:
        """Return the ceiling of the underlying registry."""
        return self.registry.highest_id

    def apply(
        self,
        document: Document,
        current_marker: int | None = None,
        *,
        target: int | None = None,
    ) -> MigrationReport:
        """Migrate ``document`` in place and describe what happened.

        Args:
            document: Environment mapping to upgrade.
            current_marker: Highest migration already applied. Read from the
                document's ``lastMigration`` field when omitted.
            target: Optional upper bound; steps above it are not applied.

        Returns:
            A :class:`MigrationReport` for the run.

        Raises:
            MalformedDocumentError: If the document lacks a structure a step
                relies on.
            MigrationStepError: If a step raised any other exception.
        """
        if not isinstance(document, MutableMapping):
            raise MalformedDocumentError("Environment document must be an object")
        marker = (
            read_marker(document)
            if current_marker is None
            else _coerce_marker(current_marker)
        )
        name = document.get("name")
        uuid = document.get("uuid")
        report = MigrationReport(
            name=name if isinstance(name, str) else None,
            uuid=uuid if isinstance(uuid, str) else None,
            from_marker=marker,
            to_marker=marker,
        )

        with logfire.span(
            "migrations.run",
            attributes={"environment": report.name, "from_marker": marker},
        ):
            if marker > self.highest_id:
                # Written by a newer release; downgrading is not supported.
                logfire.warning(
                    "Environment is newer than the known migrations",
                    environment=report.name,
                    marker=marker,
                    highest=self.highest_id,
                )
                report.future = True
                return report

            for step in self.registry.pending(marker, target):
                logfire.debug(
                    "Applying migration",
                    step=step.id,
                    release=step.release,
                    description=step.description,
                )
                try:
                    step.apply(document)
                except MigrationError as exc:
                    exc.step_id = step.id
                    exc.last_applied = report.to_marker
                    logfire.error(
                        "Migration failed", step=step.id, error=exc.message
                    )
                    raise
                except Exception as exc:  # pylint: disable=broad-except
                    logfire.error("Migration failed", step=step.id, error=str(exc))
                    raise MigrationStepError(
                        f"Migration {step.id} ({step.description}) failed: {exc}",
                        step_id=step.id,
                        last_applied=report.to_marker,
                    ) from exc
                document[LAST_MIGRATION_FIELD] = step.id
                report.to_marker = step.id
                report.applied.append(step.id)

            if report.applied:
                logfire.info(
                    "Environment migrated",
                    environment=report.name,
                    from_marker=report.from_marker,
                    to_marker=report.to_marker,
                )
        return report

    def run(
        self,
        document: Document,
        current_marker: int | None = None,
        *,
        target: int | None = None,
    ) -> Document:
        """Migrate ``document`` in place and return it."""
        self.apply(document, current_marker, target=target)
        return document


def run_migrations(
    document: Document,
    current_marker: int | None = None,
    *,
    target: int | None = None,
) -> Document:
    """Upgrade ``document`` through the shipped migrations and return it."""
    return MigrationRunner().run(document, current_marker, target=target)


__all__ = ["MigrationRunner", "read_marker", "run_migrations"]
