# SPDX-License-Identifier: MIT
"""Utilities for loading configuration and environment files.

The helpers in this module centralise file-system access for the application
configuration and for environment documents. Errors are reported through an
:class:`utils.ErrorHandler` and re-raised as concise exceptions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import logfire
import yaml
from pydantic import ValidationError
from pydantic_core import from_json, to_json

from constants import DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_FILE
from models import AppConfig
from utils import ErrorHandler, LoggingErrorHandler


def _read_file(path: Path, error_handler: ErrorHandler | None = None) -> str:
    """Return the contents of ``path``.

    Raises:
        FileNotFoundError: If the file does not exist.
        RuntimeError: If the file cannot be read.
    """
    handler = error_handler or LoggingErrorHandler()
    with logfire.span("fs.read_text", attributes={"path": str(path)}):
        try:
            with path.open("r", encoding="utf-8") as file:
                text = file.read()
                logfire.debug("Read text file", path=str(path), bytes=len(text))
                return text
        except FileNotFoundError as exc:
            handler.handle(f"File not found: {path}", exc)
            raise
        except OSError as exc:
            handler.handle(f"Error reading file {path}", exc)
            raise RuntimeError(
                f"An error occurred while reading the file: {exc}"
            ) from exc


def load_app_config(
    base_dir: Path | str = DEFAULT_CONFIG_DIR,
    filename: Path | str = DEFAULT_CONFIG_FILE,
    error_handler: ErrorHandler | None = None,
) -> AppConfig:
    """Return application configuration from ``base_dir``.

    A missing file yields the defaults of :class:`AppConfig`.

    Raises:
        RuntimeError: If the file cannot be parsed or fails validation.
    """
    handler = error_handler or LoggingErrorHandler()
    path = Path(base_dir) / Path(filename)
    if not path.exists():
        logfire.debug("No configuration file, using defaults", path=str(path))
        return AppConfig()
    with logfire.span("fs.read_yaml", attributes={"path": str(path)}):
        try:
            data = yaml.safe_load(_read_file(path, handler)) or {}
            return AppConfig.model_validate(data)
        except (RuntimeError, ValidationError, yaml.YAMLError, ValueError) as exc:
            handler.handle(f"Error reading YAML file {path}", exc)
            raise RuntimeError(
                f"An error occurred while reading the YAML file: {exc}"
            ) from exc


def load_environments(
    path: Path | str, error_handler: ErrorHandler | None = None
) -> tuple[list[Any], bool]:
    """Return the environments stored in ``path``.

    Files hold either one environment object or a list of them.

    Returns:
        The environments and ``True`` when the file held a single object.

    Raises:
        FileNotFoundError: If the file does not exist.
        RuntimeError: If the file is not valid JSON or holds neither an object
            nor a list.
    """
    handler = error_handler or LoggingErrorHandler()
    file_path = Path(path)
    with logfire.span("fs.read_json", attributes={"path": str(file_path)}):
        text = _read_file(file_path, handler)
        try:
            data = from_json(text)
        except ValueError as exc:
            handler.handle(f"Error reading JSON file {file_path}", exc)
            raise RuntimeError(
                f"An error occurred while reading the JSON file: {exc}"
            ) from exc
        if isinstance(data, dict):
            return [data], True
        if isinstance(data, list):
            logfire.debug("Loaded environments", path=str(file_path), count=len(data))
            return data, False
        handler.handle(f"Unexpected JSON document in {file_path}")
        raise RuntimeError(
            f"Expected an environment object or a list of environments in {file_path}"
        )


def dump_environments(environments: Sequence[Any], single: bool = False) -> str:
    """Serialise ``environments`` the way :func:`load_environments` reads them."""
    payload: Any = environments[0] if single and len(environments) == 1 else list(
        environments
    )
    return to_json(payload, indent=2).decode("utf-8") + "\n"


__all__ = ["dump_environments", "load_app_config", "load_environments"]
