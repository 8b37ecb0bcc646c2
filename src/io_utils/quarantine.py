# SPDX-License-Identifier: MIT
"""Utilities for writing environments that failed to migrate."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import logfire
from pydantic_core import from_json, to_json

from observability import telemetry

MANIFEST = "manifest.json"
ALLOWED_KINDS = {"malformed_document", "step_failure"}

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def _safe_name(value: str) -> str:
    """Return ``value`` reduced to characters safe for a directory name."""
    return _UNSAFE.sub("_", value).strip("_") or "unnamed"


class QuarantineWriter:
    """Persist failed environments and maintain a manifest."""

    def __init__(self, base_dir: Path | str = Path("quarantine")) -> None:
        self.base_dir = Path(base_dir)

    def write(
        self,
        environment: str,
        kind: str,
        payload: Any,
        *,
        step_id: int | None = None,
        error: str = "",
    ) -> Path:
        """Persist ``payload`` and update the manifest.

        Parameters
        ----------
        environment:
            Name or identifier of the environment associated with ``payload``.
        kind:
            Nature of the failure, ``malformed_document`` or ``step_failure``.
        payload:
            The environment as it stood when the migration stopped.
        step_id:
            Id of the failing migration step, when known.
        error:
            Short description of the failure.

        Returns
        -------
        Path
            Location of the written payload file.
        """

        if kind not in ALLOWED_KINDS:
            raise ValueError(f"Unsupported quarantine kind: {kind}")

        qdir = self.base_dir / _safe_name(environment)
        qdir.mkdir(parents=True, exist_ok=True)

        index = sum(1 for _ in qdir.glob(f"{kind}_*.json")) + 1
        file_path = qdir / f"{kind}_{index}.json"
        file_path.write_text(
            to_json(payload, indent=2, fallback=str).decode("utf-8"),
            encoding="utf-8",
        )

        manifest_path = qdir / MANIFEST
        if manifest_path.exists():
            manifest = from_json(manifest_path.read_text(encoding="utf-8"))
        else:
            manifest = {}
        entry = manifest.setdefault(kind, {"count": 0, "failures": []})
        entry["count"] += 1
        if len(entry["failures"]) < 3:
            entry["failures"].append(
                {"file": file_path.name, "step": step_id, "error": error}
            )
        manifest_path.write_text(
            to_json(manifest, indent=2).decode("utf-8"),
            encoding="utf-8",
        )

        logfire.warning(
            "Quarantined environment",
            path=str(file_path),
            kind=kind,
            environment=environment,
            step=step_id,
        )

        telemetry.record_quarantine(file_path)
        return file_path


__all__ = ["QuarantineWriter"]
