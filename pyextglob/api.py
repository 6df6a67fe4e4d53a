#!/usr/bin/env python3
"""Public matching API.

Example:
    >>> is_match("foo.txt", "**/!(bar).txt")
    True
    >>> is_match("a.js", "*.!(js)", bash=True)
    False
    >>> is_match("a\\\\b", "a/b", {"normalize_separators": True})
    True
    >>> clear_cache()
"""

from typing import Any, Iterable, List, Optional

from pyextglob.core.options import MatchOptions, OptionsLike, resolve_options
from pyextglob.core.validators import validate_pattern, validate_subject
from pyextglob.engine.compiler import CompiledPattern
from pyextglob.infrastructure.cache_manager import PatternCache, get_pattern_cache


def compile_pattern(
    pattern: str,
    options: OptionsLike = None,
    *,
    cache: Optional[PatternCache] = None,
    **option_kwargs: Any,
) -> CompiledPattern:
    """Compile a pattern through the cache.

    Args:
        pattern: Glob pattern
        options: MatchOptions, a mapping of option names, or None
        cache: Cache to use instead of the process-wide one
        **option_kwargs: Options applied on top of ``options``

    Returns:
        Compiled pattern

    Raises:
        ValidationError: If the pattern is not a string
        OptionsError: If an option is unknown or ill-typed
    """
    validate_pattern(pattern)
    resolved = resolve_options(options, **option_kwargs)
    if cache is None:
        cache = get_pattern_cache()
    return cache.get_or_compile(pattern, resolved)


def is_match(
    input: str,
    pattern: str,
    options: OptionsLike = None,
    *,
    cache: Optional[PatternCache] = None,
    **option_kwargs: Any,
) -> bool:
    """Test whether a pattern matches the whole input string.

    Args:
        input: String to test
        pattern: Glob pattern
        options: MatchOptions, a mapping of option names, or None
        cache: Cache to use instead of the process-wide one
        **option_kwargs: Options applied on top of ``options``

    Returns:
        True if the pattern matches the entire input

    Raises:
        ValidationError: If input or pattern is not a string
        OptionsError: If an option is unknown or ill-typed
    """
    validate_subject(input)
    return compile_pattern(pattern, options, cache=cache, **option_kwargs).match(input)


def clear_cache(cache: Optional[PatternCache] = None) -> None:
    """Drop every compiled pattern from the cache.

    Args:
        cache: Cache to clear instead of the process-wide one
    """
    if cache is None:
        cache = get_pattern_cache()
    cache.clear()


def match_filter(
    inputs: Iterable[str],
    pattern: str,
    options: OptionsLike = None,
    *,
    cache: Optional[PatternCache] = None,
    **option_kwargs: Any,
) -> List[str]:
    """Keep the inputs a pattern matches, preserving order.

    Raises:
        ValidationError: If an input or the pattern is not a string
        OptionsError: If an option is unknown or ill-typed
    """
    compiled = compile_pattern(pattern, options, cache=cache, **option_kwargs)
    result = []
    for item in inputs:
        validate_subject(item)
        if compiled.match(item):
            result.append(item)
    return result


class Matcher:
    """A pattern bound to its options, callable as a predicate.

    Example:
        >>> is_source = Matcher("**/*.+(py|pyi)")
        >>> is_source("pkg/mod.py")
        True
    """

    def __init__(
        self,
        pattern: str,
        options: OptionsLike = None,
        *,
        cache: Optional[PatternCache] = None,
        **option_kwargs: Any,
    ):
        self._compiled = compile_pattern(pattern, options, cache=cache, **option_kwargs)

    @property
    def pattern(self) -> str:
        return self._compiled.pattern

    @property
    def options(self) -> MatchOptions:
        return self._compiled.options

    def match(self, input: str) -> bool:
        """Test one input string."""
        validate_subject(input)
        return self._compiled.match(input)

    __call__ = match

    def __repr__(self) -> str:
        return f"Matcher({self.pattern!r}, {self.options!r})"
