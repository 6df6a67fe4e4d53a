"""pyextglob Rules System.

Include/exclude filtering of path strings built on ``is_match``:
- PatternMatcher: any-of matching over named extglob patterns
- MultiMatcher: exclude-first include/exclude filtering, configurable
  from the ``pyextglob.rules`` section
"""

from .patterns import MultiMatcher, PatternEntry, PatternMatcher

__all__ = [
    "PatternEntry",
    "PatternMatcher",
    "MultiMatcher",
]
