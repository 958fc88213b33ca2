"""Configuration loading for the dedications service.

Settings come from an optional YAML file, then environment overrides:

    DEDICATIONS_CONFIG        path to the YAML file
    DEDICATIONS_DB_PATH       SQLite file location
    DEDICATIONS_HOST          bind address for `dedications serve`
    DEDICATIONS_PORT          listen port
    DEDICATIONS_LOG_LEVEL     debug / info / warning / error
    DEDICATIONS_CORS_ORIGINS  comma-separated allowed origins
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from dedications.storage.db import DEFAULT_DB_PATH

_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class ConfigError(Exception):
    """Raised when a config file or environment override is invalid."""


def _default_cors_origins() -> list[str]:
    return [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]


@dataclass
class Settings:
    """Runtime settings for the API server and CLI."""

    db_path: Path = DEFAULT_DB_PATH
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"
    cors_origins: list[str] = field(default_factory=_default_cors_origins)

    def __post_init__(self) -> None:
        self.db_path = Path(self.db_path).expanduser()
        try:
            self.port = int(self.port)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"port must be an integer, got {self.port!r}") from e
        if not 0 < self.port < 65536:
            raise ConfigError(f"port out of range: {self.port}")
        self.log_level = str(self.log_level).lower()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level!r}"
            )
        if isinstance(self.cors_origins, str):
            self.cors_origins = _split_origins(self.cors_origins)
        else:
            self.cors_origins = [str(o) for o in self.cors_origins]


def _split_origins(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _load_file(path: Path) -> dict[str, Any]:
    """Load settings from a YAML file."""
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")
    return data


def load_settings(config_file: Path | str | None = None) -> Settings:
    """Build Settings from file + environment (environment wins)."""
    values: dict[str, Any] = {}

    if config_file is None:
        env_config = os.getenv("DEDICATIONS_CONFIG")
        if env_config:
            config_file = env_config
    if config_file is not None:
        values.update(_load_file(Path(config_file).expanduser()))

    overrides = {
        "db_path": os.getenv("DEDICATIONS_DB_PATH"),
        "host": os.getenv("DEDICATIONS_HOST"),
        "port": os.getenv("DEDICATIONS_PORT"),
        "log_level": os.getenv("DEDICATIONS_LOG_LEVEL"),
        "cors_origins": os.getenv("DEDICATIONS_CORS_ORIGINS"),
    }
    values.update({k: v for k, v in overrides.items() if v})

    return Settings(**values)
