# SPDX-License-Identifier: MIT
"""Validation tests for the pydantic models."""

import pytest
from pydantic import ValidationError

from models import AppConfig, MigrationReport


def test_report_changed_flag() -> None:
    assert not MigrationReport(from_marker=3, to_marker=3).changed
    assert MigrationReport(from_marker=3, to_marker=4, applied=[4]).changed


def test_report_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        MigrationReport(from_marker=0, to_marker=0, extra=True)


def test_app_config_defaults() -> None:
    config = AppConfig()
    assert config.log_level == "INFO"
    assert config.backup is True
    assert config.strict is False


def test_app_config_requires_log_level() -> None:
    with pytest.raises(ValidationError):
        AppConfig(log_level="")
