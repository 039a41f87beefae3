"""Environment configuration for the Nautilus dashboard."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Mapping

StoreKind = Literal["sqlite", "file", "memory"]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(ValueError):
    """Raised when an environment variable holds an invalid value."""


@dataclass
class DashboardConfig:
    """Dashboard configuration.

    Attributes:
        db_path: SQLite settings database (None for ~/.nautilus/settings.db)
        theme_store: Backend for theme preferences
        theme_file: JSON file used when ``theme_store`` is ``file``
        log_level: Level for the ``nautilus`` logger
        log_json: Emit JSON log lines
        refresh_interval: Client polling interval in milliseconds
        cors_origins: Allowed CORS origins
    """
    db_path: Path | None = None
    theme_store: StoreKind = "sqlite"
    theme_file: Path | None = None
    log_level: str = "INFO"
    log_json: bool = False
    refresh_interval: int = 5000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def load_config(environ: Mapping[str, str] | None = None) -> DashboardConfig:
    """Build a config from ``NAUTILUS_*`` environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ``

    Returns:
        Dashboard configuration

    Raises:
        ConfigError: If a variable holds an invalid value
    """
    env = os.environ if environ is None else environ
    config = DashboardConfig()

    if env.get("NAUTILUS_DB_PATH"):
        config.db_path = Path(env["NAUTILUS_DB_PATH"]).expanduser()

    store = env.get("NAUTILUS_THEME_STORE")
    if store:
        store = store.strip().lower()
        if store not in ("sqlite", "file", "memory"):
            raise ConfigError(f"Unknown theme store: {store}. Available: sqlite, file, memory")
        config.theme_store = store  # type: ignore[assignment]

    if env.get("NAUTILUS_THEME_FILE"):
        config.theme_file = Path(env["NAUTILUS_THEME_FILE"]).expanduser()

    level = env.get("NAUTILUS_LOG_LEVEL")
    if level:
        level = level.strip().upper()
        if level not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {level}")
        config.log_level = level

    if "NAUTILUS_LOG_JSON" in env:
        config.log_json = _parse_bool("NAUTILUS_LOG_JSON", env["NAUTILUS_LOG_JSON"])

    interval = env.get("NAUTILUS_REFRESH_INTERVAL")
    if interval:
        try:
            config.refresh_interval = int(interval)
        except ValueError:
            raise ConfigError(f"NAUTILUS_REFRESH_INTERVAL must be an integer, got {interval!r}")
        if config.refresh_interval <= 0:
            raise ConfigError("NAUTILUS_REFRESH_INTERVAL must be positive")

    origins = env.get("NAUTILUS_CORS_ORIGINS")
    if origins:
        config.cors_origins = [o.strip() for o in origins.split(",") if o.strip()]

    return config
