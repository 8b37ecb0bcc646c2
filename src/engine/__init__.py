# SPDX-License-Identifier: MIT
"""Batch migration engine."""

from .migration_engine import (
    BatchResult,
    MigrationEngine,
    MigrationFailure,
    migrate_environments,
)

__all__ = ["BatchResult", "MigrationEngine", "MigrationFailure", "migrate_environments"]
