# SPDX-License-Identifier: MIT
"""Tests for configuration loading."""

from pathlib import Path

import pytest

from runtime.settings import load_settings


def test_load_settings_uses_config_file(monkeypatch) -> None:
    """Values come from ``config/app.yaml`` when no overrides are set."""
    monkeypatch.delenv("EM_QUARANTINE_DIR", raising=False)
    settings = load_settings()
    assert settings.log_level == "INFO"
    assert settings.backup is True
    assert settings.strict is False
    assert settings.quarantine_dir == Path("quarantine")


def test_load_settings_reads_env(monkeypatch, tmp_path) -> None:
    """Environment variables should win over file values."""
    monkeypatch.setenv("EM_BACKUP", "0")
    monkeypatch.setenv("EM_STRICT", "yes")
    monkeypatch.setenv("EM_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("EM_QUARANTINE_DIR", str(tmp_path / "q"))
    monkeypatch.setenv("EM_LOGFIRE_TOKEN", "secret-token")
    settings = load_settings()
    assert settings.backup is False
    assert settings.strict is True
    assert settings.log_level == "DEBUG"
    assert settings.quarantine_dir == tmp_path / "q"
    assert settings.logfire_token == "secret-token"
    assert "secret-token" not in repr(settings)


def test_load_settings_custom_path(tmp_path) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text("backup: false\n", encoding="utf-8")
    settings = load_settings(path)
    assert settings.backup is False


def test_load_settings_rejects_invalid_config(tmp_path) -> None:
    """Invalid configuration should raise ``RuntimeError``."""
    path = tmp_path / "bad.yaml"
    path.write_text("log_level: ''\n", encoding="utf-8")
    with pytest.raises(RuntimeError):
        load_settings(path)


def test_env_file_overrides_config_file(monkeypatch, tmp_path) -> None:
    """``EM_*`` entries in ``.env`` win over the YAML file."""
    config = tmp_path / "app.yaml"
    config.write_text("backup: true\nstrict: false\n", encoding="utf-8")
    (tmp_path / ".env").write_text("EM_BACKUP=false\nEM_STRICT=true\n")
    monkeypatch.chdir(tmp_path)

    settings = load_settings(config)

    assert settings.backup is False
    assert settings.strict is True


def test_environment_overrides_env_file(monkeypatch, tmp_path) -> None:
    (tmp_path / ".env").write_text("EM_STRICT=true\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("EM_STRICT", "false")

    assert load_settings().strict is False


def test_load_settings_rejects_invalid_env_value(monkeypatch) -> None:
    monkeypatch.setenv("EM_BACKUP", "sometimes")
    with pytest.raises(RuntimeError):
        load_settings()
