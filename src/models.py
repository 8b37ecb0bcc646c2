# SPDX-License-Identifier: MIT
"""Pydantic models describing configuration and migration results.

Environment documents themselves are deliberately left as plain mappings: their
shape depends on the release that wrote them. The models here cover the data
the application produces about a run and the configuration that drives it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from constants import DEFAULT_QUARANTINE_DIR


class StrictModel(BaseModel):
    """Base model with strict settings to prevent shape drift."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=False)


class MigrationReport(StrictModel):
    """Outcome of migrating a single environment document."""

    name: str | None = Field(None, description="Environment name, when present.")
    uuid: str | None = Field(None, description="Environment identifier, if any.")
    from_marker: int = Field(
        ..., ge=0, description="Marker the document carried before the run."
    )
    to_marker: int = Field(
        ..., ge=0, description="Marker the document carries after the run."
    )
    applied: list[int] = Field(
        default_factory=list, description="Migration ids applied, in order."
    )
    future: bool = Field(
        False,
        description="Document was written by a newer release and left untouched.",
    )

    @property
    def changed(self) -> bool:
        """Return ``True`` when at least one step was applied."""
        return bool(self.applied)


class AppConfig(StrictModel):
    """Top-level application configuration loaded from ``config/app.yaml``."""

    log_level: Annotated[
        str, Field(min_length=1, description="Logging verbosity level.")
    ] = "INFO"
    backup: bool = Field(
        True, description="Keep a '.bak' copy of files rewritten in place."
    )
    strict: bool = Field(
        False, description="Abort a batch on the first failing environment."
    )
    quarantine_dir: Path = Field(
        DEFAULT_QUARANTINE_DIR,
        description="Directory receiving environments that failed to migrate.",
    )


__all__ = ["AppConfig", "MigrationReport", "StrictModel"]
