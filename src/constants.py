"""Project-wide constants.

This module centralises small constants that are imported across the
application. Keep this file minimal and free of side effects.
"""

from __future__ import annotations

from pathlib import Path

# Document field recording the highest migration already applied.
LAST_MIGRATION_FIELD = "lastMigration"

DEFAULT_CONFIG_DIR = Path("config")
DEFAULT_CONFIG_FILE = Path("app.yaml")
DEFAULT_QUARANTINE_DIR = Path("quarantine")

__all__ = [
    "DEFAULT_CONFIG_DIR",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_QUARANTINE_DIR",
    "LAST_MIGRATION_FIELD",
]
