"""Input and output helpers for configuration and environment files.

Exports:
    load_app_config: Read the YAML application configuration.
    load_environments: Read one or many environments from a JSON file.
    dump_environments: Serialise environments back to JSON text.
    atomic_write: Write files atomically.
    backup_file: Keep a ``.bak`` copy of a file before rewriting it.
    QuarantineWriter: Persist failed environments and maintain a manifest.
"""

from __future__ import annotations

from .loader import dump_environments, load_app_config, load_environments
from .persistence import atomic_write, backup_file
from .quarantine import QuarantineWriter

__all__ = [
    "load_app_config",
    "load_environments",
    "dump_environments",
    "atomic_write",
    "backup_file",
    "QuarantineWriter",
]
