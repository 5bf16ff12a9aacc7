"""Configuration management for the aws-cli-oidc credential cache."""

from __future__ import annotations

import logging
import os
import tempfile
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

_config_logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "aws-cli-oidc"
DEFAULT_LOCK_RESOURCE = "aws-cli-oidc"


def _default_lock_dir() -> str:
    return str(Path(tempfile.gettempdir()) / "aws-cli-oidc-lock")


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")


class CacheSettings(BaseModel):
    """Keyring cache settings.

    All cache instances contend on ``lock_resource`` unless ``lock_per_service``
    is set, in which case each provider namespace gets its own lock.
    """

    namespace: str = Field(default=DEFAULT_NAMESPACE, min_length=1)
    lock_dir: str = Field(default_factory=_default_lock_dir)
    lock_resource: str = Field(default=DEFAULT_LOCK_RESOURCE, min_length=1)
    lock_timeout_seconds: float = Field(default=180.0, ge=1, le=3600)
    lock_per_service: bool = Field(default=False)
    refresh_buffer_seconds: int = Field(default=300, ge=0, le=3600)

    @field_validator("namespace", "lock_resource")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class ConfigurationError(RuntimeError):
    """Raised when settings fail validation."""


class Settings(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)


ENV_KEYS = {
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "namespace": "AWS_CLI_OIDC_NAMESPACE",
    "lock_dir": "AWS_CLI_OIDC_LOCK_DIR",
    "lock_resource": "AWS_CLI_OIDC_LOCK_RESOURCE",
    "lock_timeout": "AWS_CLI_OIDC_LOCK_TIMEOUT_SECONDS",
    "lock_per_service": "AWS_CLI_OIDC_LOCK_PER_SERVICE",
    "refresh_buffer": "AWS_CLI_OIDC_REFRESH_BUFFER_SECONDS",
}

_TRUE_VALUES = frozenset({"1", "true", "yes"})


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        _config_logger.warning(
            "Invalid integer value for %s: %r, using default %d", key, value, default
        )
        return default


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        _config_logger.warning(
            "Invalid float value for %s: %r, using default %s", key, value, default
        )
        return default


def _expand_path(path: str) -> str:
    return str(Path(path).expanduser())


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=Path.cwd() / ".env")
    log_file_env = os.getenv(ENV_KEYS["log_file"])
    defaults = CacheSettings()

    settings_data: dict[str, object] = {
        "logging": {
            "level": os.getenv(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": _expand_path(log_file_env) if log_file_env else None,
        },
        "cache": {
            "namespace": os.getenv(ENV_KEYS["namespace"], defaults.namespace),
            "lock_dir": _expand_path(os.getenv(ENV_KEYS["lock_dir"], defaults.lock_dir)),
            "lock_resource": os.getenv(ENV_KEYS["lock_resource"], defaults.lock_resource),
            "lock_timeout_seconds": _env_float(
                ENV_KEYS["lock_timeout"],
                defaults.lock_timeout_seconds,
            ),
            "lock_per_service": _env_bool(
                ENV_KEYS["lock_per_service"],
                defaults.lock_per_service,
            ),
            "refresh_buffer_seconds": _env_int(
                ENV_KEYS["refresh_buffer"],
                defaults.refresh_buffer_seconds,
            ),
        },
    }

    try:
        return Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
