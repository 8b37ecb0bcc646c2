# SPDX-License-Identifier: MIT
"""Forward-only schema migrations for environment documents.

Exports:
    MIGRATIONS: The shipped :class:`MigrationRegistry`.
    HIGHEST_MIGRATION_ID: Id of the most recent migration step.
    MigrationRunner: Applies pending steps to a document.
    run_migrations: Convenience wrapper around :class:`MigrationRunner`.
"""

from .catalog import HIGHEST_MIGRATION_ID, MIGRATIONS
from .errors import MalformedDocumentError, MigrationError, MigrationStepError
from .registry import MigrationRegistry, MigrationStep
from .runner import MigrationRunner, read_marker, run_migrations

__all__ = [
    "HIGHEST_MIGRATION_ID",
    "MIGRATIONS",
    "MalformedDocumentError",
    "MigrationError",
    "MigrationRegistry",
    "MigrationRunner",
    "MigrationStep",
    "MigrationStepError",
    "read_marker",
    "run_migrations",
]
