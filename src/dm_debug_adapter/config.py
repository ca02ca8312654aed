"""dm-debug-adapter configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import PydanticBaseSettingsSource
from pydantic_settings import SettingsConfigDict
from pydantic_settings import TomlConfigSettingsSource

CONFIG_FILES = [
    Path("dm-dap.toml"),
    Path.home() / ".config" / "dm-dap" / "config.toml",
]


class AdapterSettings(BaseSettings):
    """Adapter configuration.

    Configuration is loaded from (in order of precedence):
    1. Environment variables (prefixed with DM_DAP_)
    2. Config file (./dm-dap.toml or ~/.config/dm-dap/config.toml)
    3. Default values

    The DreamSeeker path is deliberately not configurable here; it always
    comes from ``--dreamseeker-exe``.

    Environment variable examples:
        DM_DAP_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="DM_DAP_",
        toml_file=CONFIG_FILES,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include TOML config files."""
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @property
    def log_level_number(self) -> int:
        """``log_level`` as a ``logging`` constant."""
        return logging.getLevelNamesMapping()[self.log_level]


def load_config() -> AdapterSettings:
    """Load adapter configuration."""
    return AdapterSettings()


# Global config instance (lazily loaded)
_config: AdapterSettings | None = None


def get_config() -> AdapterSettings:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
