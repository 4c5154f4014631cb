"""Configuration management for the optional YAML config file."""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "UP2CODE_CONFIG"
LOCAL_CONFIG_NAME = "up2code.yaml"

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "fetch": {
        "timeout": 15,
        "delay": 0.0,
        "raw_query": "raw=true",
    },
    "report": {
        "show_url": False,
        "keep_going": False,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge *override* into a copy of *base*."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_config_path(config_path: Optional[str] = None) -> Optional[Path]:
    """Pick the config file to load, or None to run on built-in defaults.

    An explicit path wins, then $UP2CODE_CONFIG, then ./up2code.yaml if present.
    """
    if config_path:
        return Path(config_path).expanduser()
    env_path = os.getenv(CONFIG_ENV_VAR, "").strip()
    if env_path:
        return Path(env_path).expanduser()
    local = Path.cwd() / LOCAL_CONFIG_NAME
    if local.exists():
        return local
    return None


class ConfigManager:
    """Loads the YAML config and layers it over the built-in defaults."""

    def __init__(self, config_path: Optional[str] = None):
        path = resolve_config_path(config_path)
        self.config_path = str(path) if path is not None else None
        self._config = None

    def load_config(self) -> Dict[str, Any]:
        """Load the configuration, falling back to defaults when no file is used."""
        if self._config is None:
            if self.config_path is None:
                logger.debug("No config file found; using built-in defaults")
                self._config = copy.deepcopy(DEFAULT_CONFIG)
                return self._config
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
                if not isinstance(data, dict):
                    raise ValueError(f"Top level of {self.config_path} must be a mapping")
                self._config = _merge(DEFAULT_CONFIG, data)
                logger.info(f"Loaded configuration from {self.config_path}")
            except yaml.YAMLError as e:
                logger.error(f"Failed to parse config {self.config_path}: {e}")
                raise ValueError(f"Invalid YAML in {self.config_path}: {e}") from e
            except Exception as e:
                logger.error(f"Failed to load config from {self.config_path}: {e}")
                raise

        return self._config

    def get(self, *keys: str, default: Any = None) -> Any:
        """Get a nested value, e.g. ``get('fetch', 'delay')``."""
        value: Any = self.load_config()
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def validate_config(self) -> bool:
        """Validate option types and ranges."""
        try:
            config = self.load_config()

            for section in DEFAULT_CONFIG:
                if not isinstance(config.get(section), dict):
                    logger.error(f"Config section '{section}' must be a mapping")
                    return False

            timeout = config['fetch'].get('timeout')
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                logger.error("'fetch.timeout' must be a positive number")
                return False

            delay = config['fetch'].get('delay')
            if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
                logger.error("'fetch.delay' must be a non-negative number")
                return False

            if not isinstance(config['fetch'].get('raw_query'), str):
                logger.error("'fetch.raw_query' must be a string")
                return False

            for key in ('show_url', 'keep_going'):
                if not isinstance(config['report'].get(key), bool):
                    logger.error(f"'report.{key}' must be true or false")
                    return False

            logger.debug("Configuration validation passed")
            return True

        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            return False


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG",
    "CONFIG_ENV_VAR",
    "resolve_config_path",
]
