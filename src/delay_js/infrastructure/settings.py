"""Runtime settings for :mod:`delay_js`.

Settings are defined in one place (this file) and loaded using `pydantic-settings`.

Supported sources (lowest → highest precedence):
1) `settings.toml` (current working directory)
2) `.env` (current working directory)
3) environment variables (prefix: `DELAY_JS_`)
4) explicit overrides (`RuntimeSettings(...)` / CLI)

`settings.toml` is flat: keys map 1:1 to `RuntimeSettings` fields.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, TomlConfigSettingsSource

ENV_PREFIX = "DELAY_JS_"

DEFAULT_EXCLUSIONS: tuple[str, ...] = (
    "/jquery-?[0-9.](.*)(.min|.slim|.slim.min)?.js",
    "jquery-migrate(.min)?.js",
)


def _coerce_log_level(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("log_level must be an int or a log level name")

    if isinstance(value, int):
        return value

    text = str(value).strip()
    if not text:
        return logging.INFO

    if text.isdigit():
        return int(text)

    mapped = logging.getLevelNamesMapping().get(text.upper())
    if isinstance(mapped, int):
        return mapped

    raise ValueError(f"Invalid log_level: {value!r}")


def _coerce_patterns(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()

    if isinstance(value, (list, tuple)):
        return tuple(str(v).strip() for v in value if str(v).strip())

    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())

    raise TypeError("default_exclusions must be a list/tuple of strings or a comma-separated string")


class RuntimeSettings(BaseSettings):
    """Runtime settings for the plugin wiring and CLI."""

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix=ENV_PREFIX,
        env_file=".env",
    )

    # Host option names
    settings_option_name: str = Field(default="wp_rocket_settings", min_length=1)

    # Localisation
    text_domain: str = Field(default="rocket", min_length=1)
    locale_dir: Path | None = Field(default=None)

    # Upgrade behavior
    exclusions_threshold_version: str = Field(default="3.9")
    default_exclusions: tuple[str, ...] = Field(default=DEFAULT_EXCLUSIONS)

    # Logging
    log_format: Literal["text", "ndjson"] = Field(default="text")
    log_level: int = Field(default=logging.INFO)

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: Any) -> int:
        return _coerce_log_level(value)

    @field_validator("default_exclusions", mode="before")
    @classmethod
    def _validate_default_exclusions(cls, value: Any) -> tuple[str, ...]:
        return _coerce_patterns(value)

    @field_validator("exclusions_threshold_version")
    @classmethod
    def _validate_threshold(cls, value: str) -> str:
        text = value.strip()
        if not text or not all(part.isdigit() for part in text.split(".")):
            raise ValueError(f"exclusions_threshold_version must look like '3.9', got {value!r}")
        return text

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_settings = TomlConfigSettingsSource(settings_cls, toml_file=Path.cwd() / "settings.toml")

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            toml_settings,
            file_secret_settings,
        )


__all__ = ["DEFAULT_EXCLUSIONS", "ENV_PREFIX", "RuntimeSettings"]
