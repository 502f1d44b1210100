"""Manages application settings for pysysctl.

This module loads the settings that control how pysysctl itself behaves
(which line prefixes count as comments, how structured output is rendered).
It aggregates default values, TOML files and environment variables behind a
single dot-key interface. These settings are separate from the sysctl-style
documents the tool parses.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib  # Available in Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python versions < 3.11

logger = logging.getLogger(__name__)

# The default path for the user-specific global settings file.
USER_CONFIG_PATH = Path.home() / ".config" / "pysysctl" / "config.toml"

# The project-level settings file looked up in the working directory.
PROJECT_CONFIG_NAME = "pysysctl.toml"


class Config:
    """Handles the settings for the pysysctl application.

    This class loads settings from multiple sources with a defined
    precedence:
    1.  Default values (lowest precedence).
    2.  Project-specific `pysysctl.toml` file.
    3.  User-level `~/.config/pysysctl/config.toml` file.
    4.  A custom settings file specified at runtime, which replaces 2 and 3.
    5.  Environment variables (highest precedence).

    Attributes:
        DEFAULT_CONFIG (Dict[str, Any]): A dictionary containing the default
            setting values.
    """

    DEFAULT_CONFIG = {
        "colors": True,
        "verbose": False,
        "parser": {
            "comment_prefixes": ["#", ";"],
        },
        "output": {
            "format": "json",  # Can be "json" or "yaml".
            "indent": 2,
        },
    }

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initializes the settings manager.

        Args:
            config_path (Optional[Path]): An optional path to a specific
                settings file to load. If provided, the default file locations
                are not consulted.
        """
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self._load_config(config_path)

    def _load_config(self, config_path: Optional[Path] = None) -> None:
        if config_path:
            self._load_file_config(Path(config_path))
        else:
            self._load_default_configs()

        self._load_env_config()
        self._check_types(self.DEFAULT_CONFIG)

    def _check_types(self, defaults: Dict[str, Any], prefix: str = "") -> None:
        """Resets settings whose type differs from their default's type.

        Args:
            defaults (Dict[str, Any]): The defaults for this level of the
                settings tree.
            prefix (str): The dot-separated path of this level.
        """
        for key, default in defaults.items():
            key_path = f"{prefix}{key}"
            value = self.get(key_path)
            if isinstance(default, dict) and isinstance(value, dict):
                self._check_types(default, f"{key_path}.")
                continue
            if not _same_type(value, default):
                logger.warning(
                    f"Invalid value for setting '{key_path}': {value!r}; using default {default!r}"
                )
                self.set(key_path, copy.deepcopy(default))

    def _load_default_configs(self) -> None:
        """Loads settings from standard locations if they exist."""
        project_config = Path.cwd() / PROJECT_CONFIG_NAME
        if project_config.exists():
            self._load_file_config(project_config)

        if USER_CONFIG_PATH.exists():
            self._load_file_config(USER_CONFIG_PATH)

    def _merge_configs(self, base: Dict[str, Any], new: Dict[str, Any]) -> None:
        """Recursively merges a new settings dict into a base dict.

        Args:
            base (Dict[str, Any]): The base settings dictionary.
            new (Dict[str, Any]): The new settings to merge in.
        """
        for key, value in new.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                self._merge_configs(base[key], value)
            else:
                base[key] = value

    def _load_file_config(self, config_path: Path) -> None:
        """Loads and merges settings from a TOML file.

        A file that cannot be read or decoded is skipped with a warning.

        Args:
            config_path (Path): The path to the TOML settings file.
        """
        try:
            with open(config_path, "rb") as f:
                file_config = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Could not load settings from {config_path}: {e}")
            return
        logger.debug(f"Loaded settings from {config_path}")
        self._merge_configs(self.config, file_config)

    def _load_env_config(self) -> None:
        """Loads and merges settings from environment variables."""
        env_mapping = {
            "PYSYSCTL_COLORS": "colors",
            "PYSYSCTL_VERBOSE": "verbose",
            "PYSYSCTL_COMMENT_PREFIXES": "parser.comment_prefixes",
            "PYSYSCTL_OUTPUT_FORMAT": "output.format",
            "PYSYSCTL_OUTPUT_INDENT": "output.indent",
        }

        for env_var, config_key in env_mapping.items():
            value = os.getenv(env_var)
            if value is not None:
                self._set_nested_key(config_key, value)

    def _set_nested_key(self, key_path: str, value: str) -> None:
        """Sets a value in the settings dict using a dot-separated path.

        Environment values are always strings, so they are cast according
        to the setting they target.

        Args:
            key_path (str): The dot-separated key (e.g., "output.indent").
            value (str): The string value from the environment variable.
        """
        keys = key_path.split('.')
        target_config = self.config
        for key in keys[:-1]:
            if key not in target_config or not isinstance(target_config[key], dict):
                target_config[key] = {}
            target_config = target_config[key]

        leaf_key = keys[-1]

        if leaf_key in ["colors", "verbose"]:
            target_config[leaf_key] = value.lower() in ("true", "1", "yes", "on")
        elif leaf_key in ["indent"]:
            try:
                target_config[leaf_key] = int(value)
            except ValueError:
                logger.warning(f"Invalid integer value for {leaf_key}: {value}")
        elif leaf_key in ["comment_prefixes"]:
            target_config[leaf_key] = [v.strip() for v in value.split(",") if v.strip()]
        else:
            target_config[leaf_key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieves a setting using a dot-separated key.

        Args:
            key (str): The dot-separated key (e.g., "output.format").
            default (Any): The default value to return if the key is not found.

        Returns:
            Any: The setting value or the default.
        """
        keys = key.split('.')
        value = self.config
        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Sets a setting in memory.

        Args:
            key (str): The dot-separated key (e.g., "output.format").
            value (Any): The value to set.
        """
        keys = key.split('.')
        target_config = self.config
        for k in keys[:-1]:
            target_config = target_config.setdefault(k, {})
        target_config[keys[-1]] = value

    @property
    def comment_prefixes(self) -> tuple:
        return tuple(self.get("parser.comment_prefixes", ["#", ";"]))

    def __str__(self) -> str:
        return f"Config({self.config})"


def _same_type(value: Any, default: Any) -> bool:
    """Checks a setting value against the type of its default."""
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(default, list):
        return isinstance(value, list) and all(isinstance(v, str) for v in value)
    return isinstance(value, type(default))
