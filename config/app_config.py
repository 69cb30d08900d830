"""
Configuration management for HelloShell.

Handles loading, validation, and saving of application configuration.
"""

import copy
import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict

APP_DIR_NAME = ".helloshell"
PROJECT_ROOT = Path(__file__).resolve().parent.parent

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_app_dir() -> Path:
    """Return the root directory for HelloShell user data."""
    return Path.home() / APP_DIR_NAME


logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages application configuration with validation and persistence."""

    def __init__(self):
        """Initialize the configuration manager."""
        self.default_config_path = Path(__file__).parent / "default_config.json"
        self.user_config_dir = get_app_dir()
        self.user_config_path = self.user_config_dir / "app_config.json"
        self._config: Dict[str, Any] = {}
        self._default_config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from user config or default config."""
        try:
            logger.info(f"Loading default configuration from {self.default_config_path}")
            with open(self.default_config_path, "r", encoding="utf-8") as f:
                self._default_config = json.load(f)

            user_config: Dict[str, Any] = {}
            if self.user_config_path.exists():
                logger.info(f"Loading user configuration from {self.user_config_path}")
                with open(self.user_config_path, "r", encoding="utf-8") as f:
                    user_config = json.load(f)

            self._config = self._deep_merge(self._default_config, user_config)

            self._validate_config()
            logger.info("Configuration loaded and validated successfully")

        except FileNotFoundError as e:
            logger.error(f"Configuration file not found: {e}")
            raise
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in configuration file: {e}")
            raise
        except Exception as e:
            logger.error(f"Error loading configuration: {e}")
            raise

    def _validate_config(self) -> None:
        """Validate required configuration fields and types."""
        required_fields = {
            "version": str,
            "site": dict,
            "shell": dict,
            "preferences": dict,
            "logging": dict,
        }

        for field, expected_type in required_fields.items():
            if field not in self._config:
                raise ValueError(f"Missing required configuration field: {field}")
            if not isinstance(self._config[field], expected_type):
                raise TypeError(
                    f"Configuration field '{field}' must be of type "
                    f"{expected_type.__name__}, got "
                    f"{type(self._config[field]).__name__}"
                )

        self._validate_site_config()
        self._validate_shell_config()
        self._validate_preferences_config()
        self._validate_logging_config()

    def _validate_site_config(self) -> None:
        """Validate site source/distribution directories."""
        site_config = self._config["site"]
        for field in ("source_dir", "dist_dir"):
            if field not in site_config:
                raise ValueError(f"Missing required field: site.{field}")
            value = site_config[field]
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"site.{field} must be a non-empty string")

    def _validate_shell_config(self) -> None:
        """Validate shell window configuration."""
        shell_config = self._config["shell"]
        if "default_page" not in shell_config:
            raise ValueError("Missing required field: shell.default_page")
        if not isinstance(shell_config["default_page"], str):
            raise TypeError("shell.default_page must be a string")

        debounce = shell_config.get("resize_debounce_ms", 0)
        if not isinstance(debounce, int) or debounce < 0:
            raise ValueError("shell.resize_debounce_ms must be a non-negative integer")

        for field in ("window_width", "window_height"):
            if field in shell_config:
                value = shell_config[field]
                if not isinstance(value, int) or value <= 0:
                    raise ValueError(f"shell.{field} must be a positive integer")

    def _validate_preferences_config(self) -> None:
        """Validate preference store configuration."""
        prefs_config = self._config["preferences"]
        filename = prefs_config.get("filename")
        if not isinstance(filename, str) or not filename.strip():
            raise ValueError("preferences.filename must be a non-empty string")

    def _validate_logging_config(self) -> None:
        """Validate logging configuration."""
        logging_config = self._config["logging"]
        level = logging_config.get("level", "INFO")
        if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {VALID_LOG_LEVELS}")

        console_output = logging_config.get("console_output", True)
        if not isinstance(console_output, bool):
            raise TypeError("logging.console_output must be a boolean")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Supports nested keys using dot notation (e.g., "site.dist_dir").

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key is not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value by key.

        Supports nested keys using dot notation (e.g., "shell.default_page").

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split(".")
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def resolve_path(self, key: str) -> Path:
        """
        Resolve a path-valued setting.

        Relative paths are resolved against the project root so the desktop
        shell and the build script agree on where the site tree lives.
        """
        raw = self.get(key)
        if not isinstance(raw, str) or not raw:
            raise ValueError(f"Configuration key '{key}' is not a path")

        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path

    def get_preferences_path(self) -> Path:
        """Return the file backing the preference store."""
        return self.user_config_dir / self.get("preferences.filename")

    def save(self) -> None:
        """Save the current configuration to the user config file."""
        try:
            self.user_config_dir.mkdir(parents=True, exist_ok=True)

            self._validate_config()

            with open(self.user_config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)

            try:
                os.chmod(self.user_config_path, 0o600)
                logger.debug("Set secure permissions for config file")
            except OSError as e:
                logger.warning(f"Could not set file permissions: {e}")

            logger.info(f"Configuration saved to {self.user_config_path}")

        except Exception as e:
            logger.error(f"Error saving configuration: {e}")
            raise

    def get_all(self) -> Dict[str, Any]:
        """
        Get the entire configuration dictionary.

        Returns:
            Complete configuration dictionary
        """
        return self._clone_value(self._config)

    def reload(self) -> None:
        """Reload configuration from disk."""
        self._load_config()

    def get_defaults(self) -> Mapping:
        """Return an immutable view of the default configuration."""
        return self._deep_freeze(self._default_config)

    @classmethod
    def _deep_merge(cls, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two dictionaries without mutating inputs."""
        result: Dict[str, Any] = {}

        for key, base_value in base.items():
            if key in override:
                override_value = override[key]
                if isinstance(base_value, dict) and isinstance(override_value, dict):
                    result[key] = cls._deep_merge(base_value, override_value)
                else:
                    result[key] = cls._clone_value(override_value)
            else:
                result[key] = cls._clone_value(base_value)

        for key, override_value in override.items():
            if key not in base:
                result[key] = cls._clone_value(override_value)

        return result

    @classmethod
    def _clone_value(cls, value: Any) -> Any:
        """Return a deep copy of supported container types."""
        if isinstance(value, dict):
            return {k: cls._clone_value(v) for k, v in value.items()}
        if isinstance(value, list):
            return [cls._clone_value(v) for v in value]
        return copy.deepcopy(value)

    @classmethod
    def _deep_freeze(cls, value: Any) -> Any:
        """Create an immutable representation of nested configuration data."""
        if isinstance(value, dict):
            frozen = {k: cls._deep_freeze(v) for k, v in value.items()}
            return MappingProxyType(frozen)
        if isinstance(value, list):
            return tuple(cls._deep_freeze(v) for v in value)
        return value
