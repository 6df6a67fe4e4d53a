"""
pyextglob Core: Constants and Type Definitions

This module provides library-wide constants, error codes, glob syntax tables
and configuration keys shared by the engine, the cache and the API layers.
"""
from enum import IntEnum
from typing import FrozenSet, TypeAlias

# Version information
PYEXTGLOB_VERSION = "1.0.0"
PYEXTGLOB_API_VERSION = 1


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for pyextglob operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad subject, pattern or option value
    NOT_FOUND = 2  # Config file doesn't exist
    PERMISSION_DENIED = 3  # Config file not readable
    CONFLICT = 4  # Conflicting option values
    DEPENDENCY_ERROR = 5  # Missing dependency
    INTERNAL_ERROR = 6  # Bug in pyextglob
    TIMEOUT = 7  # Step budget exhausted
    RATE_LIMITED = 8  # Reserved
    DEGRADED = 9  # Pattern syntax degraded to literals


# Type aliases for clarity
Pattern: TypeAlias = str
Subject: TypeAlias = str


# Resource limits and defaults
class Limits:
    """Matching limits and default values."""

    # Search step budget (None means unbounded)
    DEFAULT_MAX_STEPS = None
    MIN_MAX_STEPS = 1

    # Deepest group/brace nesting; deeper openers are matched literally
    MAX_GROUP_DEPTH = 64


# Glob syntax
SEPARATOR = "/"
WINDOWS_SEPARATOR = "\\"

# Characters that keep their escaped meaning under separator normalization
GLOB_METACHARS: FrozenSet[str] = frozenset("\\*?[](){}!@+|,")

# Characters that open an extglob group when followed by "("
EXTGLOB_PREFIXES: FrozenSet[str] = frozenset("!*+?@")

POSIX_CLASSES: FrozenSet[str] = frozenset(
    {
        "alnum",
        "alpha",
        "ascii",
        "blank",
        "cntrl",
        "digit",
        "graph",
        "lower",
        "print",
        "punct",
        "space",
        "upper",
        "word",
        "xdigit",
    }
)


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    ROOT = "pyextglob"
    OPTIONS = "options"
    LOGGING = "logging"
    RULES = "rules"

    # Option keys
    BASH = "bash"
    DIALECT = "dialect"
    CASE_SENSITIVE = "case_sensitive"
    NOCASE = "nocase"
    NORMALIZE_SEPARATORS = "normalize_separators"
    UNIXIFY = "unixify"
    MAX_STEPS = "max_steps"

    # Rule configuration
    RULE_INCLUDE = "include"
    RULE_EXCLUDE = "exclude"

    # Logging configuration
    LOG_LEVEL = "level"


# Every option key accepted at the API boundary
OPTION_KEYS: FrozenSet[str] = frozenset(
    {
        ConfigKey.BASH,
        ConfigKey.DIALECT,
        ConfigKey.CASE_SENSITIVE,
        ConfigKey.NOCASE,
        ConfigKey.NORMALIZE_SEPARATORS,
        ConfigKey.UNIXIFY,
        ConfigKey.MAX_STEPS,
    }
)


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.OPTIONS: {
        ConfigKey.BASH: False,
        ConfigKey.CASE_SENSITIVE: True,
        ConfigKey.NORMALIZE_SEPARATORS: False,
        ConfigKey.MAX_STEPS: Limits.DEFAULT_MAX_STEPS,
    },
    ConfigKey.LOGGING: {
        ConfigKey.LOG_LEVEL: "WARNING",
    },
    ConfigKey.RULES: {
        ConfigKey.RULE_INCLUDE: [],
        ConfigKey.RULE_EXCLUDE: [],
    },
}
