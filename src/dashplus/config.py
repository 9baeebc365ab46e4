"""Configuration management for dashplus using YAML files."""

from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()

CONFIG_DIR_NAME = ".dashplus"

DEFAULTS: dict[str, Any] = {
    "store.path": "dashplus.yaml",
    "graph.depth": 2,
    "graph.format": "text",
}


class Config:
    """Configuration stored in YAML files.

    Local settings live in ``.dashplus/config.yaml`` under the current
    directory and global settings in ``~/.dashplus/config.yaml``. Reads check
    the local file, then the global file, then :data:`DEFAULTS`.
    """

    def __init__(self, use_global: bool = False, config_dir: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            use_global: If True, use global config only. If False, use local config with global fallback.
            config_dir: Custom directory to store config file (overrides use_global)
        """
        if config_dir is not None:
            self.config_dir = Path(config_dir)
        elif use_global:
            self.config_dir = Path.home() / CONFIG_DIR_NAME
        else:
            self.config_dir = Path.cwd() / CONFIG_DIR_NAME
        self.is_global = use_global
        self.config_file = self.config_dir / "config.yaml"

        self._config: dict[str, Any] = self._read(self.config_file)

        self._global_config: dict[str, Any] = {}
        if not self.is_global:
            global_config_file = Path.home() / CONFIG_DIR_NAME / "config.yaml"
            if global_config_file != self.config_file and global_config_file.exists():
                try:
                    self._global_config = self._read(global_config_file)
                except ValueError as e:
                    logger.warning("Failed to load global config", error=str(e))

        logger.debug("Config initialized", config_file=str(self.config_file), is_global=self.is_global)

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        """Read a YAML config file, returning an empty mapping when it is absent."""
        if not path.exists():
            logger.debug("Config file does not exist", config_file=str(path))
            return {}

        try:
            with open(path, "r") as f:
                config = yaml.safe_load(f) or {}
        except Exception as e:
            logger.error("Failed to load config", config_file=str(path), error=str(e))
            raise ValueError(f"Failed to load config from {path}: {e}") from e

        if not isinstance(config, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        logger.debug("Config loaded successfully", keys=list(config.keys()))
        return config

    def _save(self) -> None:
        """Write the settings of this scope back to disk."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
            logger.debug("Config saved successfully")
        except OSError as e:
            logger.error("Failed to save config", error=str(e))
            raise ValueError(f"Failed to save config to {self.config_file}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value.

        Args:
            key: Configuration key
            default: Returned when the key is set nowhere (falls back to :data:`DEFAULTS`)

        Returns:
            Configuration value or default
        """
        if key in self._config:
            logger.debug("Getting config value from local", key=key)
            return self._config[key]
        if not self.is_global and key in self._global_config:
            logger.debug("Getting config value from global", key=key)
            return self._global_config[key]

        logger.debug("Config value not found", key=key)
        return DEFAULTS.get(key) if default is None else default

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Get a configuration value as an integer.

        Values set from the command line are stored as strings, so they are
        converted here. Unparseable values fall back to ``default``.
        """
        value = self.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Config value is not an integer", key=key, value=value)
            return default

    def set(self, key: str, value: str) -> None:
        """Set a configuration value."""
        logger.debug("Setting config value", key=key)
        self._config[key] = value
        self._save()

    def unset(self, key: str) -> None:
        """Remove a configuration value."""
        logger.debug("Unsetting config value", key=key)
        if key in self._config:
            del self._config[key]
            self._save()

    def list(self) -> dict[str, Any]:
        """List all configuration settings, local taking precedence over global."""
        if self.is_global:
            return self._config.copy()
        merged = self._global_config.copy()
        merged.update(self._config)
        logger.debug("Listing merged config values", count=len(merged))
        return merged


def get_config(use_global: bool = False) -> Config:
    """Get a configuration instance."""
    return Config(use_global=use_global)
