"""Configuration loader for utilkit helpers using Pydantic settings."""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

ENV_VAR_NAME = "UTILKIT_ENV"
DEFAULT_ENV = "local"
PROJECT_ROOT = Path(__file__).resolve().parents[3]
CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_CONFIG_FILE = CONFIG_DIR / "settings.default.toml"
LOCAL_CONFIG_FILE = CONFIG_DIR / "settings.local.toml"
SETTINGS_FILE_ENV_VAR = "UTILKIT_SETTINGS_FILE"


def _resolve_env(explicit_env: str | None = None) -> str:
    """Return the active environment name.

    Args:
        explicit_env: Environment value supplied directly by the caller.

    Returns:
        A stripped environment name, falling back to ``DEFAULT_ENV``.
    """

    env = explicit_env or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV
    return env.strip()


def _env_file_candidates(env: str) -> list[Path]:
    """List candidate ``.env`` files used during settings resolution."""

    return [
        PROJECT_ROOT / ".env",
        PROJECT_ROOT / f".env.{env}",
        PROJECT_ROOT / ".env.local",
    ]


def _resolve_config_path(raw_path: str | None) -> Path | None:
    """Return an absolute config path from user input."""

    if not raw_path:
        return None
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        candidate = (PROJECT_ROOT / candidate).resolve()
    return candidate


def _config_file_priority() -> tuple[Path, ...]:
    """Return config files in descending precedence order."""

    ordered: list[Path] = []
    env_override = _resolve_config_path(os.getenv(SETTINGS_FILE_ENV_VAR))
    if env_override:
        ordered.append(env_override)
    ordered.append(LOCAL_CONFIG_FILE)
    ordered.append(DEFAULT_CONFIG_FILE)
    return tuple(path for path in ordered if path.exists())


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Pydantic settings source that loads values from a TOML file."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path) -> None:
        super().__init__(settings_cls)
        self.path = path
        self._data: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data
        if not self.path.exists():
            self._data = {}
            return self._data
        try:
            with self.path.open("rb") as handle:
                self._data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:  # pragma: no cover - invalid files surface immediately
            raise ValueError(f"Invalid TOML syntax in {self.path}") from exc
        return self._data

    def __call__(self) -> dict[str, Any]:  # pragma: no cover - trivial wrapper
        return self._load()

    def get_field_value(self, field_name: str, field):  # pragma: no cover - passthrough helper
        data = self._load()
        return data.get(field_name), field_name in data


class RuntimeSettings(BaseSettings):
    """Process-level runtime controls."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("UTILKIT_LOG_LEVEL", "RUNTIME__LOG_LEVEL"),
    )


class EncodingSettings(BaseSettings):
    """Text encodings used by the byte/string and stream helpers."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    default_encoding: str = Field(
        default="utf-8",
        validation_alias=AliasChoices("UTILKIT_DEFAULT_ENCODING", "ENCODING__DEFAULT_ENCODING"),
    )
    stream_encoding: str = Field(
        default="utf-8-sig",
        validation_alias=AliasChoices("UTILKIT_STREAM_ENCODING", "ENCODING__STREAM_ENCODING"),
    )
    base64_line_length: int = Field(
        default=76,
        ge=4,
        validation_alias=AliasChoices("UTILKIT_BASE64_LINE_LENGTH", "ENCODING__BASE64_LINE_LENGTH"),
    )

    @field_validator("default_encoding", "stream_encoding", mode="after")
    @classmethod
    def _normalize_encoding(cls, value: str) -> str:
        return value.strip().lower()


class HashingSettings(BaseSettings):
    """Digest and salt defaults."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    default_algorithm: str = Field(
        default="sha256",
        validation_alias=AliasChoices("UTILKIT_HASH_ALGORITHM", "HASHING__DEFAULT_ALGORITHM"),
    )
    default_salt_size: int = Field(
        default=32,
        ge=0,
        validation_alias=AliasChoices("UTILKIT_SALT_SIZE", "HASHING__DEFAULT_SALT_SIZE"),
    )

    @field_validator("default_algorithm", mode="after")
    @classmethod
    def _normalize_algorithm(cls, value: str) -> str:
        return value.strip().lower().replace("-", "")


class ValidationSettings(BaseSettings):
    """Behaviour switches for the validation rules."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    require_sibling_property: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "UTILKIT_VALIDATION_REQUIRE_SIBLING_PROPERTY",
            "VALIDATION__REQUIRE_SIBLING_PROPERTY",
        ),
    )


class ObservabilitySettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    structured_logging: bool = Field(
        default=False,
        validation_alias=AliasChoices("UTILKIT_OBS_STRUCTURED_LOGGING", "OBSERVABILITY__STRUCTURED_LOGGING"),
    )
    service_name: str = Field(
        default="utilkit",
        validation_alias=AliasChoices("UTILKIT_OBS_SERVICE_NAME", "OBSERVABILITY__SERVICE_NAME"),
    )


class Settings(BaseSettings):
    """Top-level configuration model with nested sections for each helper family."""

    env: str = Field(
        default_factory=lambda: _resolve_env(),
        validation_alias=AliasChoices(ENV_VAR_NAME),
    )
    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)
    encoding: EncodingSettings = Field(default_factory=EncodingSettings)
    hashing: HashingSettings = Field(default_factory=HashingSettings)
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
    env_files: tuple[Path, ...] = Field(default_factory=tuple, exclude=True)
    config_files: tuple[Path, ...] = Field(default_factory=tuple, exclude=True)

    model_config = SettingsConfigDict(
        env_prefix="UTILKIT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """Extend settings sources with TOML-based config files."""

        config_sources = [TomlConfigSettingsSource(settings_cls, path) for path in _config_file_priority()]
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            *config_sources,
            file_secret_settings,
        )

    @property
    def log_level(self) -> str:
        """str: Effective logging level for the running process."""

        return self.runtime.log_level

    @property
    def default_encoding(self) -> str:
        """str: Encoding applied when callers do not pass one."""

        return self.encoding.default_encoding

    @property
    def default_hash_algorithm(self) -> str:
        """str: ``hashlib`` algorithm name used when callers do not pass one."""

        return self.hashing.default_algorithm


def _load_settings(env: str | None = None) -> Settings:
    """Load settings with optional environment override.

    Args:
        env: Environment name supplied programmatically.

    Returns:
        Fully parsed :class:`Settings` instance with env files applied.
    """

    resolved_env = _resolve_env(env)
    candidate_files = [path for path in _env_file_candidates(resolved_env) if path.exists()]
    config_files = _config_file_priority()
    return Settings(
        _env_file=[str(path) for path in candidate_files],
        _env_file_encoding="utf-8",
        env=resolved_env,
        env_files=tuple(candidate_files),
        config_files=config_files,
    )


@lru_cache(maxsize=1)
def get_settings(env: str | None = None) -> Settings:
    """Return cached settings for the requested environment."""

    return _load_settings(env)


def reload_settings(env: str | None = None) -> Settings:
    """Clear the cached settings and reload from disk."""

    get_settings.cache_clear()
    return get_settings(env)


__all__ = [
    "Settings",
    "get_settings",
    "reload_settings",
    "PROJECT_ROOT",
    "ENV_VAR_NAME",
]
