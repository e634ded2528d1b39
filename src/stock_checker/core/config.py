"""Configuration loading, validation, and access."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from stock_checker.core.exceptions import ConfigError
from stock_checker.core.models import Language

# Provider throttles at roughly one request per second on the free tier
MIN_HISTORY_DELAY_SECONDS = 1.0


class ProviderConfig(BaseModel):
    """Alpha Vantage access configuration.

    The API key is deliberately absent: it is supplied per request and
    never stored.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = "https://www.alphavantage.co/query"
    request_timeout: float = 30.0
    history_delay_seconds: float = MIN_HISTORY_DELAY_SECONDS

    @field_validator("base_url")
    @classmethod
    def base_url_is_http(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return v

    @field_validator("request_timeout")
    @classmethod
    def timeout_positive(cls, v: float) -> float:
        if v < 1:
            raise ValueError("request_timeout must be >= 1 second")
        return v

    @field_validator("history_delay_seconds")
    @classmethod
    def delay_respects_provider_limit(cls, v: float) -> float:
        if v < MIN_HISTORY_DELAY_SECONDS:
            raise ValueError(
                f"history_delay_seconds must be >= {MIN_HISTORY_DELAY_SECONDS}"
            )
        return v


class APIConfig(BaseModel):
    """FastAPI server configuration."""

    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 8000
    default_language: Language = Language.JA
    cors_origins: list[str] = ["*"]


class PreferencesConfig(BaseModel):
    """Where the CLI keeps language/theme/period selections."""

    model_config = ConfigDict(frozen=True)

    path: str = "~/.stock-checker/preferences.json"

    @property
    def resolved_path(self) -> Path:
        return Path(self.path).expanduser()


class LoggingConfig(BaseModel):
    """Log verbosity."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def level_known(cls, v: str) -> str:
        upper = v.upper()
        if upper not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v!r}")
        return upper


class StockCheckerConfig(BaseModel):
    """Root configuration for stock-checker."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderConfig = ProviderConfig()
    api: APIConfig = APIConfig()
    preferences: PreferencesConfig = PreferencesConfig()
    logging: LoggingConfig = LoggingConfig()


ENV_PREFIX = "STOCK_CHECKER_"
CONFIG_ENV_VAR = "STOCK_CHECKER_CONFIG"
DEFAULT_CONFIG_FILE = "stock-checker.yml"

# Names the config file, and the CLI's credential; neither is a setting
_RESERVED_ENV_KEYS = {("config",), ("api_key",)}


def load_config(
    config_path: str | None = None,
    env_prefix: str = ENV_PREFIX,
) -> StockCheckerConfig:
    """Build the configuration from defaults, a YAML file and the environment.

    The file is ``config_path``, else ``$STOCK_CHECKER_CONFIG``, else
    ``./stock-checker.yml`` when present. Environment variables win over the
    file; ``__`` descends into a section and values are read as YAML scalars,
    so ``STOCK_CHECKER_API__CORS_ORIGINS='["https://a.example"]'`` yields a list.
    """
    path = _config_file(config_path)
    data = _read_yaml(path) if path is not None else {}

    for keys, value in _env_overrides(env_prefix):
        _set_nested(data, keys, value)

    try:
        return StockCheckerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", context={"source": str(path)}) from e


def _config_file(explicit: str | None) -> Path | None:
    if explicit is not None:
        named, source = explicit, "config_path"
    else:
        named, source = os.environ.get(CONFIG_ENV_VAR), CONFIG_ENV_VAR

    if named:
        path = Path(named)
        if not path.is_file():
            raise ConfigError(
                f"Config file not found ({source}): {named}",
                context={"field": source, "value": named},
            )
        return path

    default = Path(DEFAULT_CONFIG_FILE)
    return default if default.is_file() else None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(
            f"Cannot parse YAML config {path}: {e}",
            context={"field": "config_file", "value": str(path)},
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"YAML config must be a mapping, got {type(data).__name__}",
            context={"field": "config_file", "value": str(path)},
        )
    return data


def _env_overrides(prefix: str) -> Iterator[tuple[tuple[str, ...], Any]]:
    """Yield ``(section keys, parsed value)`` for each prefixed variable."""
    for name, raw in os.environ.items():
        if not name.startswith(prefix):
            continue
        keys = tuple(part.lower() for part in name[len(prefix):].split("__"))
        if keys in _RESERVED_ENV_KEYS or not all(keys):
            continue
        yield keys, _parse_env_value(raw)


def _parse_env_value(raw: str) -> Any:
    """Read an environment value as a YAML scalar or flow collection.

    Falls back to the raw string when it is blank or not valid YAML.
    """
    if not raw.strip():
        return raw
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


def _set_nested(data: dict[str, Any], keys: tuple[str, ...], value: Any) -> None:
    target = data
    for key in keys[:-1]:
        if target.get(key) is None:
            target[key] = {}
        target = target[key]
        if not isinstance(target, dict):
            raise ConfigError(
                f"Cannot set {'.'.join(keys)}: {key} is not a section",
                context={"field": ".".join(keys), "value": value},
            )
    target[keys[-1]] = value
