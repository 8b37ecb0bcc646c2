# SPDX-License-Identifier: MIT
"""Tests for logfire configuration and error reporting."""

from __future__ import annotations

import logfire

from observability.monitoring import _mask_token, init_logfire
from utils import LoggingErrorHandler


def test_mask_token() -> None:
    assert _mask_token(None) is None
    assert _mask_token("abcdefgh") == "abcd..."


def test_init_logfire_keeps_telemetry_local_without_token(monkeypatch) -> None:
    captured: dict = {}
    monkeypatch.delenv("EM_LOGFIRE_TOKEN", raising=False)
    monkeypatch.setattr(logfire, "configure", lambda **kwargs: captured.update(kwargs))
    monkeypatch.setattr(logfire, "instrument_pydantic", lambda *a, **k: None)

    init_logfire(min_log_level="debug")

    assert captured["token"] is None
    assert captured["send_to_logfire"] == "if-token-present"
    assert captured["service_name"] == "environment-migrations"


def test_init_logfire_reads_token_from_env(monkeypatch) -> None:
    captured: dict = {}
    monkeypatch.setenv("EM_LOGFIRE_TOKEN", "tok")
    monkeypatch.setattr(logfire, "configure", lambda **kwargs: captured.update(kwargs))
    monkeypatch.setattr(logfire, "instrument_pydantic", lambda *a, **k: None)

    init_logfire()

    assert captured["token"] == "tok"


def test_logging_error_handler_forwards_context(monkeypatch) -> None:
    calls: list = []
    monkeypatch.setattr(logfire, "error", lambda *a, **k: calls.append((a, k)))

    LoggingErrorHandler().handle("Migration failed", ValueError("bad"), step=3)
    LoggingErrorHandler().handle("No routes")

    (args, kwargs), (args2, kwargs2) = calls
    assert kwargs["detail"] == "Migration failed"
    assert kwargs["error"] == "bad"
    assert kwargs["step"] == 3
    assert kwargs2 == {"detail": "No routes"}
