# SPDX-License-Identifier: MIT
"""Tests for :mod:`migrations.registry`."""

import pytest

from migrations import HIGHEST_MIGRATION_ID, MIGRATIONS, MigrationRegistry, MigrationStep


def _noop(document) -> None:
    return None


def test_shipped_registry_is_dense_and_ordered() -> None:
    ids = [step.id for step in MIGRATIONS]
    assert ids == list(range(1, 13))
    assert HIGHEST_MIGRATION_ID == 12
    assert MIGRATIONS.highest_id == HIGHEST_MIGRATION_ID


def test_every_shipped_step_is_labelled() -> None:
    for step in MIGRATIONS:
        assert step.release
        assert step.description


def test_registry_sorts_steps_by_id() -> None:
    registry = MigrationRegistry(
        [MigrationStep(3, _noop), MigrationStep(1, _noop), MigrationStep(2, _noop)]
    )
    assert [step.id for step in registry.steps] == [1, 2, 3]
    assert registry.highest_id == 3


def test_registry_allows_sparse_ids() -> None:
    registry = MigrationRegistry([MigrationStep(10, _noop), MigrationStep(4, _noop)])
    assert [step.id for step in registry.pending(0)] == [4, 10]
    assert [step.id for step in registry.pending(4)] == [10]
    assert registry.pending(10) == []


def test_pending_respects_target() -> None:
    assert [step.id for step in MIGRATIONS.pending(2, target=5)] == [3, 4, 5]
    assert MIGRATIONS.pending(5, target=5) == []


@pytest.mark.parametrize(
    "steps",
    [
        [],
        [MigrationStep(1, _noop), MigrationStep(1, _noop)],
        [MigrationStep(0, _noop)],
        [MigrationStep(-2, _noop)],
        [MigrationStep(True, _noop)],
    ],
)
def test_registry_rejects_invalid_steps(steps) -> None:
    with pytest.raises(ValueError):
        MigrationRegistry(steps)


def test_get_returns_step_or_raises() -> None:
    assert MIGRATIONS.get(7).id == 7
    with pytest.raises(KeyError):
        MIGRATIONS.get(99)


def test_steps_are_immutable() -> None:
    step = MIGRATIONS.get(1)
    with pytest.raises(AttributeError):
        step.id = 5  # type: ignore[misc]
    assert isinstance(MIGRATIONS.steps, tuple)
