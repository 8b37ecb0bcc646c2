# SPDX-License-Identifier: MIT
"""Tests for :mod:`core.environment`."""

import copy

from core import new_environment, new_route, new_route_response
from migrations import HIGHEST_MIGRATION_ID, MigrationRunner


def test_new_environment_is_stamped_with_latest_marker() -> None:
    env = new_environment("Shop API")
    assert env["name"] == "Shop API"
    assert env["lastMigration"] == HIGHEST_MIGRATION_ID
    assert env["routes"] == []


def test_new_environment_skips_migrations() -> None:
    env = new_environment(routes=[new_route(endpoint="items")])
    before = copy.deepcopy(env)
    report = MigrationRunner().apply(env)
    assert report.applied == []
    assert env == before


def test_builders_match_fully_migrated_shape() -> None:
    legacy = {"routes": [{"method": "get", "endpoint": "x", "statusCode": "200"}]}
    MigrationRunner().run(legacy)
    migrated_route = legacy["routes"][0]
    route = new_route()
    assert set(migrated_route) <= set(route)
    assert set(migrated_route["responses"][0]) <= set(new_route_response())
    assert set(legacy) <= set(new_environment())


def test_builders_issue_distinct_identifiers() -> None:
    routes = [new_route() for _ in range(3)]
    ids = [route["uuid"] for route in routes]
    ids += [route["responses"][0]["uuid"] for route in routes]
    assert len(set(ids)) == len(ids)


def test_overrides_replace_defaults() -> None:
    response = new_route_response(statusCode=404, body="missing")
    assert response["statusCode"] == 404
    assert response["body"] == "missing"
    assert response["rulesOperator"] == "OR"
