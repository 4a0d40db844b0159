"""Builder options and application settings."""

import logging
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import DATABASE_PATH, FORMS_DIR_DEFAULT, LOG_FILE_DEFAULT
from .enums import StorageType
from .errors import ConfigException

logger = logging.getLogger(__name__)

ENV_PREFIX = "FORMBUILDER_"


def _noop(*args: Any, **kwargs: Any) -> None:
    return None


class BuilderOptions(BaseModel):
    """Options a ``FormBuilder`` is constructed with.

    Callbacks default to no-ops; unknown options are rejected.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    on_save: Callable[..., Any] = _noop
    on_preview: Callable[..., Any] = _noop
    on_field_add: Callable[..., Any] = _noop
    on_field_remove: Callable[..., Any] = _noop
    show_preview: bool = True
    allow_advanced: bool = True


class StorageConfig(BaseModel):
    type: StorageType = StorageType.FILE
    directory: str = Field(default=FORMS_DIR_DEFAULT)
    database_path: str = Field(default=DATABASE_PATH)


class WebConfig(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)


class BuilderConfig(BaseModel):
    show_preview: bool = True
    allow_advanced: bool = True


class Settings(BaseSettings):
    """Application settings."""

    log_file: str = Field(default=LOG_FILE_DEFAULT)

    storage: StorageConfig = Field(default_factory=StorageConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    builder: BuilderConfig = Field(default_factory=BuilderConfig)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "Settings":
        """Load settings from a TOML file, with environment overrides."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Settings(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix=ENV_PREFIX,
                env_nested_delimiter="__",
            )

        try:
            return _Settings()
        except ValidationError as e:
            error_lines = ["Configuration validation failed:"]
            for error in e.errors():
                loc = " -> ".join(str(item) for item in error["loc"])
                error_lines.append(f"  - {loc}: {error['msg']}")
            raise ConfigException("\n".join(error_lines)) from e
        except ValueError as e:
            raise ConfigException(f"Invalid configuration file {config_path}: {e}") from e

    @classmethod
    def load(cls, config_path: str | None) -> "Settings":
        """Load from ``config_path`` when it exists, else use defaults and env."""
        if config_path and Path(config_path).exists():
            return cls.load_from_file(config_path)
        logger.debug(f"No configuration file at {config_path}, using defaults")
        try:
            return cls()
        except ValidationError as e:
            raise ConfigException(str(e)) from e

    def builder_options(self) -> BuilderOptions:
        return BuilderOptions(
            show_preview=self.builder.show_preview,
            allow_advanced=self.builder.allow_advanced,
        )
