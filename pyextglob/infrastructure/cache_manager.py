#!/usr/bin/env python3
"""Process-wide cache of compiled patterns.

This module provides the pattern cache with:
- Keys of ``(pattern, MatchOptions)``; a hit never crosses options
- Thread-safe insert-if-absent (compilation runs outside the lock)
- Explicit clear only: entries never expire and the cache is unbounded
- Hit/miss/compilation statistics

Patterns already handed out stay usable after :meth:`PatternCache.clear`.

Example:
    >>> cache = PatternCache()
    >>> compiled = cache.get_or_compile("*.+(js|jsx)", MatchOptions())
    >>> cache.get_or_compile("*.+(js|jsx)", MatchOptions()) is compiled
    True
    >>> cache.clear()
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from pyextglob.core.logger import get_logger
from pyextglob.core.options import MatchOptions
from pyextglob.engine.compiler import CompiledPattern, build_pattern

CacheKey = Tuple[str, MatchOptions]
PatternCompiler = Callable[[str, MatchOptions], CompiledPattern]


@dataclass
class CacheEntry:
    """Single cache entry with metadata."""

    key: CacheKey
    value: CompiledPattern
    timestamp: float = field(default_factory=time.time)
    access_count: int = 0
    last_access: float = field(default_factory=time.time)

    def touch(self) -> None:
        """Update access time and count."""
        self.last_access = time.time()
        self.access_count += 1


class PatternCache:
    """Thread-safe map from ``(pattern, options)`` to compiled patterns."""

    def __init__(self, compiler: PatternCompiler = build_pattern):
        """Initialize pattern cache.

        Args:
            compiler: Function building a CompiledPattern on a miss
        """
        self._compiler = compiler
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._lock = threading.RLock()

        # Statistics
        self._hits = 0
        self._misses = 0
        self._compilations = 0
        self._clears = 0

    def get(self, pattern: str, options: MatchOptions) -> Optional[CompiledPattern]:
        """Look up a compiled pattern without compiling.

        Args:
            pattern: Pattern text
            options: Match options

        Returns:
            Cached pattern or None
        """
        with self._lock:
            entry = self._entries.get((pattern, options))
            if entry is None:
                self._misses += 1
                return None
            entry.touch()
            self._hits += 1
            return entry.value

    def get_or_compile(self, pattern: str, options: MatchOptions) -> CompiledPattern:
        """Return the cached pattern for the key, compiling it on a miss.

        When two threads miss on the same key both compile, and the first
        to insert wins; both get the stored instance.

        Args:
            pattern: Pattern text
            options: Match options

        Returns:
            Compiled pattern for exactly this key
        """
        cached = self.get(pattern, options)
        if cached is not None:
            return cached

        compiled = self._compiler(pattern, options)

        with self._lock:
            self._compilations += 1
            key = (pattern, options)
            entry = self._entries.get(key)
            if entry is None:
                entry = CacheEntry(key=key, value=compiled)
                self._entries[key] = entry
            entry.touch()
            return entry.value

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
            self._clears += 1
        get_logger().debug("Pattern cache cleared", entries=dropped)

    def get_entries(self) -> List[CacheEntry]:
        """Snapshot of the current entries."""
        with self._lock:
            return list(self._entries.values())

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with entries, hits, misses, hit_rate, compilations
            and clears
        """
        with self._lock:
            lookups = self._hits + self._misses
            return {
                "entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / lookups if lookups else 0.0,
                "compilations": self._compilations,
                "clears": self._clears,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries


# Global pattern cache instance
_global_cache: Optional[PatternCache] = None
_global_lock = threading.Lock()


def get_pattern_cache() -> PatternCache:
    """Get or create the process-wide pattern cache.

    Returns:
        Global pattern cache
    """
    global _global_cache
    if _global_cache is None:
        with _global_lock:
            if _global_cache is None:
                _global_cache = PatternCache()
    return _global_cache


def set_global_cache(cache: Optional[PatternCache]) -> None:
    """Set the process-wide pattern cache (None resets to lazy creation).

    Args:
        cache: Pattern cache to use globally
    """
    global _global_cache
    _global_cache = cache
