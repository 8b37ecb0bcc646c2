# SPDX-License-Identifier: MIT
"""Tests for the batch migration engine."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from engine import MigrationEngine, migrate_environments
from io_utils import QuarantineWriter
from migrations import HIGHEST_MIGRATION_ID, MalformedDocumentError
from observability import telemetry
from utils import ErrorHandler


class RecordingHandler(ErrorHandler):
    """Error handler capturing reported failures."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Exception | None, dict]] = []

    def handle(self, message, exc=None, **context) -> None:
        self.calls.append((message, exc, context))


def test_failures_do_not_stop_other_environments(legacy_environment) -> None:
    handler = RecordingHandler()
    broken = {"name": "broken", "lastMigration": 1}
    environments = [legacy_environment, broken, {"lastMigration": 99, "routes": []}]

    result = MigrationEngine(error_handler=handler).migrate(environments)

    assert not result.ok
    assert [report.name for report in result.reports] == ["Legacy API", None]
    assert legacy_environment["lastMigration"] == HIGHEST_MIGRATION_ID
    [failure] = result.failures
    assert failure.index == 1
    assert failure.environment == "broken"
    assert isinstance(failure.error, MalformedDocumentError)
    [(message, exc, context)] = handler.calls
    assert "broken" in message
    assert context["step"] == 2
    assert context["last_applied"] == 1

    metrics = telemetry.snapshot()
    assert metrics.environments == 3
    assert metrics.migrated == 1
    assert metrics.future == 1
    assert metrics.failures == ["broken@2"]


def test_strict_mode_reraises(legacy_environment) -> None:
    engine = MigrationEngine(error_handler=RecordingHandler(), strict=True)
    with pytest.raises(MalformedDocumentError):
        engine.migrate([{"lastMigration": 3}, legacy_environment])
    assert "lastMigration" not in legacy_environment


def test_failed_environment_is_quarantined(tmp_path: Path) -> None:
    writer = QuarantineWriter(tmp_path / "q")
    result = migrate_environments(
        [{"uuid": "abc/def", "routes": "nope"}], quarantine=writer
    )
    assert not result.ok
    qdir = tmp_path / "q" / "abc_def"
    payload = json.loads((qdir / "malformed_document_1.json").read_text())
    assert payload["routes"] == "nope"
    manifest = json.loads((qdir / "manifest.json").read_text())
    assert manifest["malformed_document"]["count"] == 1
    assert manifest["malformed_document"]["failures"][0]["step"] == 2
    assert telemetry.has_quarantines()


def test_non_object_entries_are_labelled_by_index() -> None:
    handler = RecordingHandler()
    result = MigrationEngine(error_handler=handler).migrate(["oops"])
    assert result.failures[0].environment == "environment-0"


def test_target_is_forwarded() -> None:
    env = {"routes": []}
    result = migrate_environments([env], target=3)
    assert result.reports[0].to_marker == 3
    assert env["lastMigration"] == 3
