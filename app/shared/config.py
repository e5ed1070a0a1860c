"""
Centralized configuration management.

Supports:
1) `env.example` (committed, safe placeholders)
2) `env.local` (optional, MUST NOT be committed)
3) System environment variables (highest priority)
"""

import os
from pathlib import Path

from dotenv import dotenv_values
from loguru import logger


class EnvironConfig:
    """
    Singleton configuration class that loads environment variables from env files
    and system environment, providing dictionary-like access with default values.
    """

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(EnvironConfig, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._config = {}
            self._load_config()
            EnvironConfig._initialized = True

    def _load_config(self):
        """
        Load configuration from env files and system environment.

        Priority order (later overrides earlier):
        1. env.example (committed placeholders)
        2. env.local (developer-local, not committed)
        3. System environment variables (highest priority)
        """
        root = Path(__file__).parent.parent.parent

        example_path = root / "env.example"
        if example_path.exists():
            env_values = dotenv_values(example_path)
            self._config.update(env_values)
            logger.info("Loaded environment variables from {}", example_path)

        local_path = root / "env.local"
        if local_path.exists():
            local_values = dotenv_values(local_path)
            self._config.update(local_values)
            logger.info("Loaded and overrode environment variables from {}", local_path)

        self._config.update(os.environ)

    def __getitem__(self, key):
        """
        Get configuration value by key.

        Raises:
            KeyError: If key not found
        """
        if key not in self._config:
            raise KeyError(f"Configuration key '{key}' not found")

        return self._config[key]

    def get(self, key, default=None):
        """Get configuration value by key with optional default."""
        return self._config.get(key, default)

    def reload(self):
        """
        Reload configuration from files and environment.
        Useful for testing or when configuration files change.
        """
        self._config.clear()
        self._load_config()
        logger.info("Configuration reloaded")

    def __contains__(self, key):
        return key in self._config

    def __iter__(self):
        return iter(self._config)

    def items(self):
        return self._config.items()

    def get_cors_origins(self) -> list[str]:
        """
        Get allowed CORS origins.

        Returns:
            list[str]: Comma separated `API_CORS_ORIGINS` split into a list (default: ["*"])
        """
        raw = self.get("API_CORS_ORIGINS") or "*"
        return [x.strip() for x in raw.split(",") if x.strip()]

    def get_tick_seconds(self) -> float:
        """
        Get the studio clock interval from configuration.

        Returns:
            float: Seconds between elapsed-time ticks (0.1-60, default: 1)
        """
        try:
            seconds = float(self.get("STUDIO_TICK_SECONDS", "1"))
            if 0.1 <= seconds <= 60:
                return seconds
            else:
                logger.warning("STUDIO_TICK_SECONDS value {} is out of range (0.1-60), defaulting to 1", seconds)
                return 1.0
        except (ValueError, TypeError):
            logger.warning("Invalid STUDIO_TICK_SECONDS value '{}', defaulting to 1", self.get("STUDIO_TICK_SECONDS"))
            return 1.0


config = EnvironConfig()
