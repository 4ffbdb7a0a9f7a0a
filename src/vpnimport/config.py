from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal, Optional, Type

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .constants import CONFIG_FILE_NAME, MAX_CONFIG_BYTES
from .core.file_utils import find_config_file
from .exceptions import ConfigError


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """
    A Pydantic settings source that loads variables from a YAML file.
    """

    def __init__(self, settings_cls: Type[BaseSettings], yaml_file: Path | None):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._data: dict[str, Any] = {}
        if self.yaml_file and self.yaml_file.exists():
            try:
                loaded = yaml.safe_load(self.yaml_file.read_text()) or {}
            except (yaml.YAMLError, IOError) as exc:
                raise ConfigError(f"Could not read settings from {self.yaml_file}: {exc}") from exc
            if not isinstance(loaded, dict):
                raise ConfigError(f"Settings file {self.yaml_file} must contain a mapping")
            self._data = loaded

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class Settings(BaseSettings):
    """
    Application settings for the import command line.
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "WARNING", description="Root logging level."
    )
    mask_sensitive: bool = Field(
        True, description="Mask key material and credentials in log output."
    )
    log_file: Optional[Path] = Field(
        None, description="Optional file that receives a copy of the log output."
    )
    max_config_bytes: int = Field(
        MAX_CONFIG_BYTES,
        gt=0,
        description="Largest configuration file accepted for import, in bytes.",
    )

    config_file: Optional[Path] = Field(default=None, exclude=True)

    model_config = SettingsConfigDict(
        env_prefix="VPNIMPORT_", case_sensitive=False, extra="ignore"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        config_file = init_settings.init_kwargs.get("config_file")
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=config_file),
            file_secret_settings,
        )


def load_config(path: Path | None = None) -> Settings:
    """
    Load application settings from a YAML file and environment variables.
    """
    config_file = path
    if config_file is None:
        config_file = find_config_file(CONFIG_FILE_NAME)
        if config_file is None:
            logging.debug("No '%s' found, using defaults and environment", CONFIG_FILE_NAME)
    return Settings(config_file=config_file)
