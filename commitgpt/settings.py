"""Locate, load and resolve commitgpt settings.

Settings come from three layers, highest precedence first:

1. command-line overrides (``Overrides``),
2. ``OPENAI_``-prefixed environment variables,
3. the TOML settings file, whose missing keys fall back to built-in defaults.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from commitgpt.config import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CONTEXT_PREFIX,
    DEFAULT_IGNORE_SPACE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_SUGGESTIONS,
    DEFAULT_TIMEOUT,
    ENV_PREFIX,
    MAX_MAX_TOKENS,
    MAX_SUGGESTIONS,
    MIN_MAX_TOKENS,
    MIN_SUGGESTIONS,
)
from commitgpt.errors import SettingsError
from commitgpt.logger import commitgpt_logger
from commitgpt.schemas import DEFAULT_MODEL, Model, Overrides, Settings, coerce_model

logger = commitgpt_logger(__name__)


class FileSettings(BaseSettings):
    """Settings as read from the TOML file and the environment."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    api_key: str = Field(..., min_length=1, description="Your API key from https://platform.openai.com/account/api-keys")
    context_prefix: str = Field(DEFAULT_CONTEXT_PREFIX, description="System prompt sent ahead of the diff.")
    suggestions: int = Field(DEFAULT_SUGGESTIONS, ge=MIN_SUGGESTIONS, le=MAX_SUGGESTIONS)
    ignore_space: bool = Field(DEFAULT_IGNORE_SPACE, description="Ignore space change and blank lines in the diff.")
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, ge=MIN_MAX_TOKENS, le=MAX_MAX_TOKENS)
    model: Model = DEFAULT_MODEL
    base_url: Optional[str] = Field(None, description="Alternative OpenAI compatible endpoint.")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Request deadline in seconds.")

    @field_validator("model", mode="before")
    @classmethod
    def parse_model(cls, value: Any) -> Any:
        return coerce_model(value)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # File values arrive as init kwargs; the environment must win over them.
        return env_settings, dotenv_settings, init_settings

    def __repr__(self) -> str:
        return f"FileSettings(api_key='***', model={self.model.value!r})"

    __str__ = __repr__


def settings_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return where the settings file is expected.

    ``$XDG_CONFIG_HOME/commitgpt/config.toml`` when ``XDG_CONFIG_HOME`` is set,
    ``~/.config/commitgpt/config.toml`` otherwise.
    """

    env = os.environ if environ is None else environ
    xdg_config_home = env.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        home = env.get("HOME")
        base = (Path(home) if home else Path.home()) / ".config"
    return base / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_file_settings(path: Optional[Path] = None) -> FileSettings:
    """Read the TOML settings file and apply environment overrides.

    Raises:
        SettingsError: If the file is missing, unreadable, not TOML, or any
            value fails validation.
    """
    path = path or settings_path()
    logger.debug("Loading settings from %s", path)

    try:
        with open(path, "rb") as handle:
            data = tomllib.load(handle)
    except FileNotFoundError:
        raise SettingsError(f"settings file {path} does not exist") from None
    except OSError as exc:
        raise SettingsError(f"unable to read settings file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise SettingsError(f"settings file {path} is not valid TOML: {exc}") from exc

    try:
        file_settings = FileSettings(**data)
    except ValidationError as exc:
        raise SettingsError(f"settings file {path} is invalid: {exc}") from exc

    logger.debug("Loaded settings: %r", file_settings)
    return file_settings


def resolve(overrides: Overrides, file_settings: FileSettings) -> Settings:
    """Merge invocation overrides over file settings into a frozen record."""

    values = {name: getattr(file_settings, name) for name in Settings.model_fields}
    present = overrides.model_dump(exclude_none=True)
    values.update(present)

    if present:
        logger.debug("Applying overrides for: %s", ", ".join(sorted(present)))

    return Settings(**values)
