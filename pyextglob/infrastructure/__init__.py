"""pyextglob Infrastructure Layer.

Services shared by the API and the rules layer:
- PatternCache: process-wide cache of compiled patterns
- ConfigManager: layered configuration (defaults, YAML, environment)
"""

from .cache_manager import CacheEntry, PatternCache, get_pattern_cache, set_global_cache
from .config_manager import (
    ConfigError,
    ConfigManager,
    ConfigSource,
    get_config_manager,
    set_global_config,
)

__all__ = [
    # Cache exports
    "CacheEntry",
    "PatternCache",
    "get_pattern_cache",
    "set_global_cache",
    # Config exports
    "ConfigSource",
    "ConfigError",
    "ConfigManager",
    "get_config_manager",
    "set_global_config",
]
