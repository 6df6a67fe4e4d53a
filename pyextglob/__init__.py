"""pyextglob - bash extended glob matching.

Matches path-like strings against glob patterns with the extglob operators
``!()``, ``*()``, ``+()``, ``?()`` and ``@()``, brace alternation, character
classes, ``*``, ``**`` and ``?``, in a permissive default dialect or a
bash-compatible one.

Example:
    >>> from pyextglob import is_match
    >>> is_match("fofoofoofofoo", "*(fo|foo)")
    True
    >>> is_match("foobar", "!(foo)*", bash=True)
    False
"""

from pyextglob.api import Matcher, clear_cache, compile_pattern, is_match, match_filter
from pyextglob.core.constants import PYEXTGLOB_VERSION, ErrorCode
from pyextglob.core.options import Dialect, MatchOptions
from pyextglob.core.validators import OptionsError, ValidationError
from pyextglob.engine.compiler import CompiledPattern
from pyextglob.engine.parser import PatternSyntaxError
from pyextglob.infrastructure.cache_manager import PatternCache, get_pattern_cache

__version__ = PYEXTGLOB_VERSION

__all__ = [
    "is_match",
    "clear_cache",
    "compile_pattern",
    "match_filter",
    "Matcher",
    "Dialect",
    "MatchOptions",
    "CompiledPattern",
    "PatternCache",
    "get_pattern_cache",
    "ErrorCode",
    "ValidationError",
    "OptionsError",
    "PatternSyntaxError",
]
