"""Telemetry and monitoring helpers for environment migrations.

Exports:
    init_logfire: Configure Pydantic Logfire instrumentation.
    record_migration: Record the outcome of one environment migration.
    record_failure: Track an environment that failed to migrate.
    record_quarantine: Track creation of quarantine files.
    print_summary: Output a summary of collected metrics.
    has_failures: Indicate whether any environment failed.
    reset: Clear stored metrics and quarantine paths.
"""

from .monitoring import init_logfire
from .telemetry import (
    has_failures,
    has_quarantines,
    print_summary,
    record_failure,
    record_migration,
    record_quarantine,
    reset,
)

__all__ = [
    "init_logfire",
    "record_migration",
    "record_failure",
    "record_quarantine",
    "print_summary",
    "has_failures",
    "has_quarantines",
    "reset",
]
