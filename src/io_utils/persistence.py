# SPDX-License-Identifier: MIT
"""Utilities for safe environment file writes.

Environment files are rewritten in place after migration. Writes go through a
temporary file that is synced and then swapped in with :func:`os.replace`, so a
crash never leaves a half-written environment behind.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

import logfire


def atomic_write(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` atomically.

    Args:
        path: Destination file to replace.
        text: Complete file contents.

    The function writes to ``path`` with a ``.tmp`` suffix, flushes and
    syncs the temporary file to disk, then performs :func:`os.replace` to
    ensure the final file is updated atomically.
    """
    with logfire.span("fs.atomic_write", attributes={"path": str(path)}):
        tmp_path = Path(f"{path}.tmp")
        # Ensure the destination directory exists before attempting the write.
        tmp_path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
        logfire.debug("Atomic write complete", path=str(path), bytes=len(text))


def backup_file(path: Path) -> Path | None:
    """Copy ``path`` to ``<path>.bak`` and return the copy's location.

    Missing files yield ``None``.
    """
    if not path.exists():
        return None
    backup = Path(f"{path}.bak")
    shutil.copy2(path, backup)
    logfire.debug("Backup written", path=str(backup))
    return backup


__all__ = ["atomic_write", "backup_file"]
