# SPDX-License-Identifier: MIT
"""Test configuration for environment-migrations.

Keeps Logfire output local and provides fixtures for legacy environments.
"""

from __future__ import annotations

import copy
from typing import Any

import logfire
import pytest

logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture(autouse=True)
def _init_runtime_env(tmp_path, monkeypatch):
    """Initialise a default runtime environment for tests."""

    from observability import telemetry
    from runtime.environment import RuntimeEnv
    from runtime.settings import load_settings

    for name in ("EM_BACKUP", "EM_STRICT", "EM_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("EM_QUARANTINE_DIR", str(tmp_path / "quarantine"))
    telemetry.reset()
    RuntimeEnv.reset()
    RuntimeEnv.initialize(load_settings())
    yield
    RuntimeEnv.reset()
    telemetry.reset()


LEGACY_ENVIRONMENT: dict[str, Any] = {
    "uuid": "env-1",
    "name": "Legacy API",
    "endpointPrefix": "api",
    "latency": 0,
    "port": 3000,
    "routes": [
        {
            "method": "get",
            "endpoint": "users",
            "body": '{"users": []}',
            "latency": 0,
            "statusCode": "200",
            "customHeaders": [{"key": "X-Custom", "value": "1"}],
            "contentType": "application/json",
            "file": {"path": "/tmp/users.json"},
        },
        {
            "method": "post",
            "endpoint": "users",
            "body": "",
            "latency": 250,
            "statusCode": "201",
            "customHeaders": [],
            "contentType": "text/plain",
            "file": None,
        },
    ],
}


@pytest.fixture()
def legacy_environment() -> dict[str, Any]:
    """Return a fresh copy of an environment that predates versioning."""

    return copy.deepcopy(LEGACY_ENVIRONMENT)
