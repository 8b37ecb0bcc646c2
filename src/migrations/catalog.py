# SPDX-License-Identifier: MIT
"""The shipped migration registry and its ceiling."""

from __future__ import annotations

from .registry import MigrationRegistry
from .steps import STEPS

MIGRATIONS = MigrationRegistry(STEPS)

# Stamped on newly created environments so they skip the migration path.
HIGHEST_MIGRATION_ID = MIGRATIONS.highest_id

__all__ = ["HIGHEST_MIGRATION_ID", "MIGRATIONS"]
