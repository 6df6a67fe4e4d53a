#!/usr/bin/env python3
"""Layered configuration for pyextglob.

This module provides configuration management with:
- Precedence: compiled defaults < system file < user file < environment
  < runtime updates
- YAML configuration files (PyYAML ``safe_load``)
- Environment variables ``PYEXTGLOB_<SECTION>__<KEY>``
- Thread-safe reads and updates
- Deep merging of nested sections

The ``pyextglob.options`` section supplies default match options, the
``pyextglob.rules`` section include/exclude patterns and
``pyextglob.logging`` the log level.

Example:
    >>> config = ConfigManager()
    >>> config.load_file("pyextglob.yaml")
    >>> config.get("pyextglob.options.bash", default=False)
    >>> options = config.get_match_options()
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from pyextglob.core.constants import DEFAULT_CONFIG, ConfigKey, ErrorCode
from pyextglob.core.logger import Logger, LogLevel, get_logger
from pyextglob.core.options import MatchOptions
from pyextglob.core.validators import OptionsError

ENV_PREFIX = "PYEXTGLOB_"
ENV_NESTING = "__"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    SYSTEM_CONFIG = 2
    USER_CONFIG = 3
    ENVIRONMENT = 4
    RUNTIME = 5  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe layered configuration manager.

    Values are looked up from the highest-precedence source that defines
    them; :meth:`get_all` deep-merges every source.
    """

    DEFAULT_CONFIG = {ConfigKey.ROOT: DEFAULT_CONFIG}

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional YAML file loaded as user config
            load_environment: Read ``PYEXTGLOB_*`` environment variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._files: Dict[str, ConfigSource] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be read or parsed
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except PermissionError as e:
            raise ConfigError(f"Cannot read config {file_path}: {e}", ErrorCode.PERMISSION_DENIED)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        with self._lock:
            self._config[source] = config_data
            self._files[str(path)] = source

        get_logger().debug("Loaded config file", path=str(path), source=source.name)

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from dictionary.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level
        """
        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        ``PYEXTGLOB_OPTIONS__CASE_SENSITIVE=false`` sets
        ``pyextglob.options.case_sensitive``.
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = [part for part in key[len(ENV_PREFIX) :].lower().split(ENV_NESTING) if part]
            if not parts:
                continue

            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})
                if not isinstance(current, dict):
                    break
            else:
                current[parts[-1]] = self._parse_env_value(value)

        if env_config:
            with self._lock:
                self._config[ConfigSource.ENVIRONMENT] = {ConfigKey.ROOT: env_config}

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value.

        Args:
            value: String value from environment

        Returns:
            Parsed value (bool, None, int, float, or str)
        """
        lowered = value.lower()
        if lowered in ("true", "yes", "on"):
            return True
        if lowered in ("false", "no", "off"):
            return False
        if lowered in ("null", "none", ""):
            return None

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "pyextglob.options.bash")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return value

            return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        current: Any = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            current = self._config.setdefault(source, {})
            parts = key.split(".")
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        with self._lock:
            merged: Dict[str, Any] = {}
            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])
            return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def get_match_options(self) -> MatchOptions:
        """Resolve default match options from every source.

        Sources are applied from lowest to highest precedence, so a higher
        source may use any spelling of an option (``dialect`` over a lower
        ``bash``). Null values are skipped.

        Returns:
            Resolved match options

        Raises:
            ConfigError: If the options section is malformed
        """
        with self._lock:
            layers = [
                self._get_nested(self._config[source], f"{ConfigKey.ROOT}.{ConfigKey.OPTIONS}")
                for source in sorted(self._config.keys(), key=lambda s: s.value)
            ]

        options = MatchOptions()
        for section in layers:
            if section is None:
                continue
            if not isinstance(section, dict):
                raise ConfigError("Config section 'options' must be a mapping")
            values = {str(k): v for k, v in section.items() if v is not None}
            try:
                options = options.merge(**values)
            except OptionsError as e:
                raise ConfigError(f"Invalid match options: {e}", e.error_code) from e
        return options

    def get_rules(self) -> Tuple[List[str], List[str]]:
        """Get include and exclude patterns.

        Returns:
            ``(include, exclude)`` pattern lists

        Raises:
            ConfigError: If either list is not a list of strings
        """
        result = []
        for name in (ConfigKey.RULE_INCLUDE, ConfigKey.RULE_EXCLUDE):
            patterns = self.get(f"{ConfigKey.ROOT}.{ConfigKey.RULES}.{name}", [])
            if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
                raise ConfigError(f"Config rules '{name}' must be a list of strings")
            result.append(list(patterns))
        return result[0], result[1]

    def apply_logging(self, logger: Optional[Logger] = None) -> Logger:
        """Apply the configured log level.

        Args:
            logger: Logger to configure (defaults to the global logger)

        Returns:
            The configured logger

        Raises:
            ConfigError: If the level name is unknown
        """
        logger = logger or get_logger()
        level = self.get(f"{ConfigKey.ROOT}.{ConfigKey.LOGGING}.{ConfigKey.LOG_LEVEL}", "WARNING")
        try:
            logger.set_level(LogLevel[str(level).upper()])
        except KeyError:
            raise ConfigError(f"Unknown log level: {level}")
        return logger

    def reload(self) -> None:
        """Reload all file-based configurations.

        Raises:
            ConfigError: If a previously loaded file can no longer be read
        """
        with self._lock:
            files = list(self._files.items())

        for file_path, source in files:
            self.load_file(file_path, source)

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        with self._lock:
            if source:
                if source in self._config and source != ConfigSource.COMPILED_DEFAULTS:
                    del self._config[source]
                self._files = {f: s for f, s in self._files.items() if s != source}
            else:
                for s in [s for s in self._config if s != ConfigSource.COMPILED_DEFAULTS]:
                    del self._config[s]
                self._files.clear()


# Global config manager instance
_global_config: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[str] = None) -> ConfigManager:
    """Get or create global configuration manager.

    Args:
        config_file: Optional config file to load

    Returns:
        Global configuration manager
    """
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager(config_file)
    return _global_config


def set_global_config(config: Optional[ConfigManager]) -> None:
    """Set the global configuration manager.

    Args:
        config: Configuration manager to use globally
    """
    global _global_config
    _global_config = config
