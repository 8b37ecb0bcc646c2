# SPDX-License-Identifier: MIT
"""Aggregate migration metrics for end-of-run reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from models import MigrationReport


@dataclass
class RunMetrics:
    """Counters collected across every environment in a run."""

    environments: int = 0
    migrated: int = 0
    up_to_date: int = 0
    future: int = 0
    steps_applied: int = 0
    failures: List[str] = field(default_factory=list)

    def add(self, report: MigrationReport) -> None:
        """Update counters with a single migration ``report``."""

        self.environments += 1
        if report.future:
            self.future += 1
        elif report.applied:
            self.migrated += 1
            self.steps_applied += len(report.applied)
        else:
            self.up_to_date += 1


_metrics = RunMetrics()
_quarantine_paths: List[Path] = []


def record_migration(report: MigrationReport) -> None:
    """Record the outcome of migrating one environment."""

    _metrics.add(report)


def record_failure(environment: str, step_id: int | None) -> None:
    """Track an environment that failed at ``step_id``."""

    _metrics.environments += 1
    _metrics.failures.append(f"{environment}@{step_id if step_id else '?'}")


def record_quarantine(path: Path) -> None:
    """Track creation of a quarantine ``path``."""

    _quarantine_paths.append(path)


def has_failures() -> bool:
    """Return ``True`` when any environment failed to migrate."""

    return bool(_metrics.failures)


def has_quarantines() -> bool:
    """Return ``True`` when any quarantine files were created."""

    return bool(_quarantine_paths)


def snapshot() -> RunMetrics:
    """Return a copy of the current counters."""

    return RunMetrics(
        environments=_metrics.environments,
        migrated=_metrics.migrated,
        up_to_date=_metrics.up_to_date,
        future=_metrics.future,
        steps_applied=_metrics.steps_applied,
        failures=list(_metrics.failures),
    )


def reset() -> None:
    """Clear all recorded metrics and quarantine paths."""

    global _metrics
    _metrics = RunMetrics()
    _quarantine_paths.clear()


def print_summary() -> None:
    """Write a summary of collected metrics to ``stdout``."""

    if not _metrics.environments:
        return
    print(
        f"environments={_metrics.environments} migrated={_metrics.migrated} "
        f"up_to_date={_metrics.up_to_date} future={_metrics.future} "
        f"steps={_metrics.steps_applied} failed={len(_metrics.failures)}"
    )
    for failure in _metrics.failures:
        print(f"failed: {failure}")


__all__ = [
    "RunMetrics",
    "has_failures",
    "has_quarantines",
    "print_summary",
    "record_failure",
    "record_migration",
    "record_quarantine",
    "reset",
    "snapshot",
]
