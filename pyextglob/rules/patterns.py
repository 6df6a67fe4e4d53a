#!/usr/bin/env python3
"""Include/exclude filtering of path strings with extglob patterns.

This module provides filtering on top of :func:`pyextglob.api.is_match`:
- Named extglob patterns with per-pattern option overrides
- OR logic across the patterns of one matcher
- Exclude-first include/exclude precedence
- Construction from the ``pyextglob.rules`` configuration section

Example:
    >>> matcher = MultiMatcher()
    >>> matcher.add_include_pattern("**/*.+(py|pyi)")
    >>> matcher.add_exclude_pattern("**/test_*")
    >>> matcher.filter(["src/app.py", "src/test_app.py", "README.md"])
    ['src/app.py']
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from pyextglob.api import is_match
from pyextglob.core.options import MatchOptions, OptionsLike, resolve_options
from pyextglob.infrastructure.cache_manager import PatternCache
from pyextglob.infrastructure.config_manager import ConfigManager, get_config_manager


@dataclass(frozen=True)
class PatternEntry:
    """A single pattern entry with metadata."""

    pattern: str
    options: MatchOptions
    name: Optional[str] = None


class PatternMatcher:
    """Ordered list of extglob patterns; a path matches if any pattern does."""

    def __init__(self, options: OptionsLike = None, cache: Optional[PatternCache] = None):
        """Initialize pattern matcher.

        Args:
            options: Default options for patterns added to this matcher
            cache: Pattern cache to compile through (process-wide if None)
        """
        self._patterns: List[PatternEntry] = []
        self._options = resolve_options(options)
        self._cache = cache

    @property
    def options(self) -> MatchOptions:
        return self._options

    def add_pattern(self, pattern: str, name: Optional[str] = None, **option_overrides: Any) -> None:
        """Add an extglob pattern.

        Args:
            pattern: Pattern (e.g., "**/*.+(js|jsx)")
            name: Optional name for this pattern
            **option_overrides: Options overriding the matcher defaults

        Raises:
            OptionsError: If an override is unknown or ill-typed
        """
        options = self._options.merge(**option_overrides)
        self._patterns.append(PatternEntry(pattern=pattern, options=options, name=name))

    def _matches_entry(self, path: str, entry: PatternEntry) -> bool:
        return is_match(path, entry.pattern, entry.options, cache=self._cache)

    def matches(self, path: str) -> bool:
        """Check if path matches any pattern.

        Args:
            path: Path string to check

        Returns:
            True if path matches any pattern
        """
        return any(self._matches_entry(path, entry) for entry in self._patterns)

    def get_matching_patterns(self, path: str) -> List[str]:
        """Get the names (or pattern text) of every matching pattern.

        Args:
            path: Path string to check

        Returns:
            List of matching pattern names
        """
        return [entry.name or entry.pattern for entry in self._patterns if self._matches_entry(path, entry)]

    def filter(self, paths: Iterable[str]) -> List[str]:
        """Keep the paths matching any pattern, preserving order."""
        return [path for path in paths if self.matches(path)]

    def remove_pattern(self, name: str) -> bool:
        """Remove pattern by name.

        Args:
            name: Pattern name to remove

        Returns:
            True if pattern was found and removed
        """
        for i, entry in enumerate(self._patterns):
            if entry.name == name:
                self._patterns.pop(i)
                return True
        return False

    def get_patterns(self) -> List[PatternEntry]:
        """Get all registered patterns."""
        return self._patterns.copy()

    def clear(self) -> None:
        """Clear all patterns."""
        self._patterns.clear()

    def __len__(self) -> int:
        return len(self._patterns)

    def __bool__(self) -> bool:
        return bool(self._patterns)


class MultiMatcher:
    """Include/exclude filter.

    Precedence:
    1. A path matching any exclude pattern is rejected
    2. With no include patterns every other path is accepted
    3. Otherwise the path must match an include pattern
    """

    def __init__(self, options: OptionsLike = None, cache: Optional[PatternCache] = None):
        """Initialize multi-matcher.

        Args:
            options: Default options for every pattern
            cache: Pattern cache to compile through (process-wide if None)
        """
        self._include = PatternMatcher(options, cache)
        self._exclude = PatternMatcher(options, cache)

    @classmethod
    def from_config(
        cls, config: Optional[ConfigManager] = None, cache: Optional[PatternCache] = None
    ) -> "MultiMatcher":
        """Build a matcher from the ``pyextglob`` configuration.

        Args:
            config: Configuration manager (global one if None)
            cache: Pattern cache to compile through

        Returns:
            Matcher with the configured options and rules

        Raises:
            ConfigError: If the options or rules sections are malformed
        """
        config = config or get_config_manager()
        matcher = cls(config.get_match_options(), cache)
        include, exclude = config.get_rules()
        for pattern in include:
            matcher.add_include_pattern(pattern)
        for pattern in exclude:
            matcher.add_exclude_pattern(pattern)
        return matcher

    def add_include_pattern(self, pattern: str, name: Optional[str] = None, **option_overrides: Any) -> None:
        """Add include pattern."""
        self._include.add_pattern(pattern, name, **option_overrides)

    def add_exclude_pattern(self, pattern: str, name: Optional[str] = None, **option_overrides: Any) -> None:
        """Add exclude pattern."""
        self._exclude.add_pattern(pattern, name, **option_overrides)

    def matches(self, path: str) -> bool:
        """Check if path should be included.

        Args:
            path: Path string to check

        Returns:
            True if path should be included
        """
        if self._exclude.matches(path):
            return False

        if not self._include:
            return True

        return self._include.matches(path)

    def filter(self, paths: Iterable[str]) -> List[str]:
        """Keep the included paths, preserving order."""
        return [path for path in paths if self.matches(path)]

    def explain(self, path: str) -> Dict[str, List[str]]:
        """Report which include and exclude patterns match a path."""
        return {
            "include": self._include.get_matching_patterns(path),
            "exclude": self._exclude.get_matching_patterns(path),
        }

    def get_include_matcher(self) -> PatternMatcher:
        return self._include

    def get_exclude_matcher(self) -> PatternMatcher:
        return self._exclude

    def clear(self) -> None:
        """Clear all patterns."""
        self._include.clear()
        self._exclude.clear()
