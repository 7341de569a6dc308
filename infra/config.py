"""
Configuration Manager
---------------------
Loads configuration from YAML with environment variable overrides.

Environment variables win over the file: `server.port` is read from
PAGES_SERVER_PORT first.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import logging
import os

import yaml


ENV_PREFIX = "PAGES"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ConfigManager:
    """
    Centralized configuration management.
    Loads configuration from YAML with environment variable overrides.
    """

    def __init__(self, config_path: str = "config.yaml"):
        self._config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._logger = logging.getLogger("pages.infra.config")

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file."""
        if self._config_path.exists():
            with open(self._config_path, 'r') as f:
                self._config = yaml.safe_load(f) or {}
            self._logger.info(f"Loaded config from {self._config_path}")
        else:
            self._config = {}
            self._logger.debug(f"Config file not found: {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.
        Supports dot notation: 'section.key'
        Environment variables override file config.
        """
        env_key = f"{ENV_PREFIX}_{key.upper().replace('.', '_')}"
        env_value = os.getenv(env_key)
        if env_value is not None:
            return env_value

        value = self._config
        for part in key.split('.'):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section."""
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()


@dataclass
class AutomationSettings:
    """Settings for running scripts and serving the tools."""
    interpreter: str = "osascript"
    application: str = "Pages"
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    log_file: bool = False
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_config(cls, config: ConfigManager) -> "AutomationSettings":
        """Raises ValueError if logging.level is not one of LOG_LEVELS."""
        defaults = cls()
        log_level = str(config.get("logging.level", defaults.log_level)).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid logging.level {log_level!r}: must be one of {', '.join(LOG_LEVELS)}"
            )

        return cls(
            interpreter=str(config.get("automation.interpreter", defaults.interpreter)),
            application=str(config.get("automation.application", defaults.application)),
            log_level=log_level,
            log_dir=config.get("logging.dir", defaults.log_dir),
            log_file=_as_bool(config.get("logging.file", defaults.log_file)),
            host=str(config.get("server.host", defaults.host)),
            port=int(config.get("server.port", defaults.port)),
        )


def _as_bool(value: Any) -> bool:
    """Booleans from YAML arrive typed, from the environment as strings."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def load_settings(config_path: str = "config.yaml") -> AutomationSettings:
    """Load settings from a YAML file plus environment overrides."""
    return AutomationSettings.from_config(ConfigManager(config_path))
