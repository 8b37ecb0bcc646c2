# SPDX-License-Identifier: MIT
"""Centralised application configuration management.

This module exposes :class:`Settings`, a ``pydantic-settings`` model that
combines values sourced from the YAML configuration file, a ``.env`` file and
environment variables. Environment variables take precedence over the ``.env``
file, which takes precedence over file-based values. The merged configuration
is validated before use.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from constants import DEFAULT_QUARANTINE_DIR
from io_utils.loader import load_app_config


class Settings(BaseSettings):
    """Application settings combining file-based and environment configuration."""

    log_level: str = Field("INFO", description="Logging verbosity level.")
    logfire_token: str | None = Field(
        None, description="Logfire authentication token, if available.", repr=False
    )
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

    model_config = SettingsConfigDict(env_prefix="EM_", extra="ignore")

    @field_validator("quarantine_dir")
    @classmethod
    def _expand_quarantine_dir(cls, value: Path) -> Path:
        return value.expanduser()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Init values carry the YAML file and rank below the environment.
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load and validate application settings.

    Configuration values are read from the application configuration file and
    then merged with ``EM_*`` values from a ``.env`` file in the working
    directory and from the environment. Environment variables win over the
    ``.env`` file, and both win over the configuration file.

    Args:
        config_path: Optional path to a YAML configuration file. Defaults to
            ``config/app.yaml``.

    Returns:
        Settings: Fully validated application configuration.

    Raises:
        RuntimeError: If configuration values are invalid.
    """
    if config_path:
        cfg_path = Path(config_path)
        config = load_app_config(cfg_path.parent, cfg_path.name)
    else:
        config = load_app_config()
    env_file_path = Path(".env")
    env_file = env_file_path if env_file_path.exists() else None
    try:
        return Settings(
            log_level=config.log_level,
            backup=config.backup,
            strict=config.strict,
            quarantine_dir=config.quarantine_dir,
            _env_file=env_file,
        )
    except ValidationError as exc:
        # Summarise validation issues so the caller receives clear feedback.
        details = "; ".join(
            f"{'.'.join(map(str, error['loc']))}: {error['msg']}"
            for error in exc.errors()
        )
        raise RuntimeError(f"Invalid configuration: {details}") from exc
