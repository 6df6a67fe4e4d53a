"""
pyextglob Core: Input Validators.

This module validates what callers hand to the public API: the subject
string, the pattern string and the option mapping. Pattern *syntax* is never
validated here; malformed glob syntax degrades to literals in the scanner.
"""
from typing import Any, Dict, Mapping

from pyextglob.core.constants import OPTION_KEYS, ConfigKey, ErrorCode, Limits


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


class OptionsError(ValidationError):
    """Unknown or ill-typed match option."""


def validate_subject(subject: Any) -> bool:
    """Validate the string being matched.

    Args:
        subject: Candidate string

    Returns:
        True if valid

    Raises:
        ValidationError: If subject is not a string
    """
    if not isinstance(subject, str):
        raise ValidationError(f"Expected input to be a string, got {type(subject).__name__}")
    return True


def validate_pattern(pattern: Any) -> bool:
    """Validate a glob pattern.

    Any string is a valid pattern; irregular syntax is matched literally.

    Args:
        pattern: Glob pattern

    Returns:
        True if valid

    Raises:
        ValidationError: If pattern is not a string
    """
    if not isinstance(pattern, str):
        raise ValidationError(f"Expected pattern to be a string, got {type(pattern).__name__}")
    return True


def _require_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise OptionsError(f"Option '{key}' must be boolean: {value!r}")
    return value


def validate_max_steps(value: Any) -> bool:
    """Validate a backtracking step budget.

    Args:
        value: Positive integer or None

    Returns:
        True if valid

    Raises:
        OptionsError: If the budget is not a positive integer
    """
    if value is None:
        return True
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise OptionsError(f"Option 'max_steps' must be an integer or None: {value!r}")
    if value < Limits.MIN_MAX_STEPS:
        raise OptionsError(f"Option 'max_steps' must be >= {Limits.MIN_MAX_STEPS}: {value}")
    return True


def validate_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate an option mapping and resolve aliases.

    ``nocase`` is folded into ``case_sensitive`` and ``unixify`` into
    ``normalize_separators``. Conflicting spellings of the same option are
    rejected.

    Args:
        options: Raw option mapping

    Returns:
        Dictionary keyed by canonical option names

    Raises:
        OptionsError: If a key is unknown, a value has the wrong type, or two
            spellings of one option disagree
    """
    if not isinstance(options, Mapping):
        raise OptionsError(f"Options must be a mapping, got {type(options).__name__}")

    unknown = sorted(str(key) for key in options if key not in OPTION_KEYS)
    if unknown:
        raise OptionsError(f"Unknown option(s): {', '.join(unknown)}")

    resolved: Dict[str, Any] = {}

    if ConfigKey.DIALECT in options:
        dialect = options[ConfigKey.DIALECT]
        name = getattr(dialect, "value", dialect)
        if not isinstance(name, str) or name.lower() not in ("default", "bash"):
            raise OptionsError(f"Option 'dialect' must be 'default' or 'bash': {dialect!r}")
        resolved[ConfigKey.BASH] = name.lower() == "bash"

    if ConfigKey.BASH in options:
        bash = _require_bool(ConfigKey.BASH, options[ConfigKey.BASH])
        if resolved.get(ConfigKey.BASH, bash) != bash:
            raise OptionsError("Options 'bash' and 'dialect' disagree", ErrorCode.CONFLICT)
        resolved[ConfigKey.BASH] = bash

    if ConfigKey.CASE_SENSITIVE in options:
        resolved[ConfigKey.CASE_SENSITIVE] = _require_bool(
            ConfigKey.CASE_SENSITIVE, options[ConfigKey.CASE_SENSITIVE]
        )

    if ConfigKey.NOCASE in options:
        sensitive = not _require_bool(ConfigKey.NOCASE, options[ConfigKey.NOCASE])
        if resolved.get(ConfigKey.CASE_SENSITIVE, sensitive) != sensitive:
            raise OptionsError("Options 'nocase' and 'case_sensitive' disagree", ErrorCode.CONFLICT)
        resolved[ConfigKey.CASE_SENSITIVE] = sensitive

    if ConfigKey.NORMALIZE_SEPARATORS in options:
        resolved[ConfigKey.NORMALIZE_SEPARATORS] = _require_bool(
            ConfigKey.NORMALIZE_SEPARATORS, options[ConfigKey.NORMALIZE_SEPARATORS]
        )

    if ConfigKey.UNIXIFY in options:
        unixify = _require_bool(ConfigKey.UNIXIFY, options[ConfigKey.UNIXIFY])
        if resolved.get(ConfigKey.NORMALIZE_SEPARATORS, unixify) != unixify:
            raise OptionsError(
                "Options 'unixify' and 'normalize_separators' disagree", ErrorCode.CONFLICT
            )
        resolved[ConfigKey.NORMALIZE_SEPARATORS] = unixify

    if ConfigKey.MAX_STEPS in options:
        validate_max_steps(options[ConfigKey.MAX_STEPS])
        resolved[ConfigKey.MAX_STEPS] = options[ConfigKey.MAX_STEPS]

    return resolved
