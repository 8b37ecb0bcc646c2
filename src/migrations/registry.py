# SPDX-License-Identifier: MIT
"""Ordered registry of environment migration steps.

A :class:`MigrationRegistry` wraps an immutable, id-sorted tuple of
:class:`MigrationStep` records. Steps are appended across releases and never
reordered or removed, so any document written by an older release can be
replayed through exactly the transformations it missed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, MutableMapping

from .errors import MigrationError

Document = MutableMapping[str, Any]
Transform = Callable[[Document], None]


@dataclass(frozen=True)
class MigrationStep:
    """A single forward-only transformation applied once per document."""

    id: int
    transform: Transform = field(compare=False)
    release: str = ""
    description: str = ""

    def apply(self, document: Document) -> None:
        """Run the transformation against ``document`` in place.

        Raises:
            MigrationError: Raised by the transformation, tagged with this
                step's id.
        """
        try:
            self.transform(document)
        except MigrationError as exc:
            exc.step_id = self.id
            raise


class MigrationRegistry:
    """Immutable collection of migration steps ordered by id.

    Args:
        steps: Steps in any order. They are sorted ascending by id so that
            execution order never depends on registration order.

    Raises:
        ValueError: If the registry is empty, an id is not a positive integer
            or an id is registered twice.
    """

    def __init__(self, steps: Iterable[MigrationStep]) -> None:
        ordered = tuple(sorted(steps, key=lambda step: step.id))
        if not ordered:
            raise ValueError("A migration registry requires at least one step")
        seen: set[int] = set()
        for step in ordered:
            if isinstance(step.id, bool) or not isinstance(step.id, int):
                raise ValueError(f"Migration id must be an integer: {step.id!r}")
            if step.id < 1:
                raise ValueError(f"Migration id must be positive: {step.id}")
            if step.id in seen:
                raise ValueError(f"Duplicate migration id: {step.id}")
            seen.add(step.id)
        self._steps = ordered

    @property
    def steps(self) -> tuple[MigrationStep, ...]:
        """Return every registered step in ascending id order."""
        return self._steps

    @property
    def highest_id(self) -> int:
        """Return the id of the most recent step."""
        return self._steps[-1].id

    def get(self, step_id: int) -> MigrationStep:
        """Return the step registered under ``step_id``.

        Raises:
            KeyError: If no step carries ``step_id``.
        """
        for step in self._steps:
            if step.id == step_id:
                return step
        raise KeyError(step_id)

    def pending(self, marker: int, target: int | None = None) -> list[MigrationStep]:
        """Return steps with ``marker < id <= target`` in ascending order.

        ``target`` defaults to :attr:`highest_id`.
        """
        ceiling = self.highest_id if target is None else target
        return [step for step in self._steps if marker < step.id <= ceiling]

    def __iter__(self) -> Iterator[MigrationStep]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"MigrationRegistry(steps={len(self)}, highest_id={self.highest_id})"


__all__ = ["Document", "MigrationRegistry", "MigrationStep", "Transform"]
