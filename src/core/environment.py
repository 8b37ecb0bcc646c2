# SPDX-License-Identifier: MIT
"""Builders for environments in the current schema.

Documents built here already carry every field the migrations introduce and
are stamped with :data:`migrations.HIGHEST_MIGRATION_ID`, so the runner treats
them as up to date.
"""

from __future__ import annotations

from typing import Any

from constants import LAST_MIGRATION_FIELD
from migrations import HIGHEST_MIGRATION_ID
from utils.identifiers import new_uuid


def new_route_response(**overrides: Any) -> dict[str, Any]:
    """Return a default ``200`` route response."""
    response: dict[str, Any] = {
        "uuid": new_uuid(),
        "body": "{}",
        "latency": 0,
        "statusCode": 200,
        "label": "",
        "headers": [],
        "filePath": "",
        "sendFileAsBody": False,
        "rules": [],
        "rulesOperator": "OR",
        "disableTemplating": False,
    }
    response.update(overrides)
    return response


def new_route(**overrides: Any) -> dict[str, Any]:
    """Return an enabled ``GET`` route with one default response."""
    route: dict[str, Any] = {
        "uuid": new_uuid(),
        "documentation": "",
        "method": "get",
        "endpoint": "",
        "responses": [new_route_response()],
        "enabled": True,
    }
    route.update(overrides)
    return route


def new_environment(name: str = "New environment", **overrides: Any) -> dict[str, Any]:
    """Return an empty environment stamped with the latest migration id."""
    environment: dict[str, Any] = {
        "uuid": new_uuid(),
        LAST_MIGRATION_FIELD: HIGHEST_MIGRATION_ID,
        "name": name,
        "endpointPrefix": "",
        "latency": 0,
        "port": 3000,
        "routes": [],
        "proxyMode": False,
        "proxyHost": "",
        "https": False,
        "cors": True,
        "headers": [{"key": "Content-Type", "value": "application/json"}],
        "proxyReqHeaders": [{"key": "", "value": ""}],
        "proxyResHeaders": [{"key": "", "value": ""}],
    }
    environment.update(overrides)
    return environment


__all__ = ["new_environment", "new_route", "new_route_response"]
