#!/usr/bin/env python3
"""Compiler: node tree to a position-set matcher.

Every node becomes a function ``match(search, i)`` returning the set of
positions where the node can stop when it starts at position ``i``. A
sequence feeds each node the end positions of the node before it, and the
pattern matches when the input length is among the final positions. Each
sequence is walked iteratively and repetitions explore their reachable
positions with a worklist, so the Python stack only grows with the nesting
depth of the pattern, never with the length of the input.

Alternatives of groups are memoized per search by start position.

Dialects differ in three places:
- DEFAULT: ``?``, ``*`` and negated classes never match ``/``; ``!(x)``
  consumes any span of the current segment that no alternative matches
  exactly
- BASH: wildcards match ``/``; ``!(x)`` is a lookahead that fails when an
  alternative matches the rest of the input (nothing follows the group),
  a prefix of it, or a prefix followed by a ``.ext`` suffix, and otherwise
  consumes any span
- BASH: an empty input only matches the empty pattern

Example:
    >>> compiled = build_pattern("*(fo|foo)", MatchOptions())
    >>> compiled.match("fofoofoofofoo")
    True
"""

import itertools
import string
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from pyextglob.core.constants import SEPARATOR, WINDOWS_SEPARATOR
from pyextglob.core.logger import get_logger
from pyextglob.core.options import MatchOptions
from pyextglob.engine.nodes import (
    AnyChar,
    AnyChars,
    Brace,
    CharClass,
    Complement,
    Extglob,
    GlobStar,
    Literal,
    Node,
    Plus,
    Sequence,
)
from pyextglob.engine.parser import parse
from pyextglob.engine.scanner import scan
from pyextglob.engine.tokens import ExtglobOp, NegationTail

Positions = FrozenSet[int]
MatchFn = Callable[["Search", int], Positions]

_NOWHERE: Positions = frozenset()

_POSIX_TESTS: Dict[str, Callable[[str], bool]] = {
    "alnum": str.isalnum,
    "alpha": str.isalpha,
    "ascii": lambda c: ord(c) < 128,
    "blank": lambda c: c in " \t",
    "cntrl": lambda c: ord(c) < 32 or ord(c) == 127,
    "digit": lambda c: c in string.digits,
    "graph": lambda c: 32 < ord(c) < 127,
    "lower": str.islower,
    "print": lambda c: 32 <= ord(c) < 127,
    "punct": lambda c: c in string.punctuation,
    "space": lambda c: c in string.whitespace,
    "upper": str.isupper,
    "word": lambda c: c.isalnum() or c == "_",
    "xdigit": lambda c: c in string.hexdigits,
}


class StepBudgetExceeded(Exception):
    """Raised inside a search when ``max_steps`` is used up."""

    def __init__(self, steps: int):
        super().__init__(f"Search exceeded {steps} steps")
        self.steps = steps


class Search:
    """Mutable state of one match attempt."""

    __slots__ = ("text", "n", "steps", "max_steps", "memo")

    def __init__(self, text: str, max_steps: Optional[int] = None):
        self.text = text
        self.n = len(text)
        self.steps = 0
        self.max_steps = max_steps
        self.memo: Dict[Tuple[int, int], Positions] = {}

    def tick(self) -> None:
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise StepBudgetExceeded(self.max_steps)

    def segment_end(self, i: int) -> int:
        """Index of the next separator at or after ``i`` (or the input end)."""
        end = self.text.find(SEPARATOR, i)
        return self.n if end == -1 else end


def _union(search: Search, matchers: Iterable[MatchFn], starts: Iterable[int]) -> Positions:
    ends = set()
    for i in starts:
        for matcher in matchers:
            ends.update(matcher(search, i))
    return frozenset(ends)


def _reachable(search: Search, alternatives: List[MatchFn], starts: Iterable[int]) -> Positions:
    """Positions reachable from ``starts`` by repeating any alternative."""
    seen = set(starts)
    pending = list(seen)
    while pending:
        i = pending.pop()
        for alt in alternatives:
            for j in alt(search, i):
                if j not in seen:
                    seen.add(j)
                    pending.append(j)
    return frozenset(seen)


class Compiler:
    """Translates node trees into matcher functions for one set of options."""

    def __init__(self, options: MatchOptions):
        self.options = options
        self.bash = options.bash
        self.fold = not options.case_sensitive
        self._memo_ids = itertools.count()
        self._dispatch: Dict[type, Callable[[Node], MatchFn]] = {
            Literal: self._literal,
            AnyChar: self._any_char,
            AnyChars: self._any_chars,
            GlobStar: self._globstar,
            CharClass: self._char_class,
            Sequence: self._sequence,
            Brace: self._brace,
            Extglob: self._extglob,
            Plus: self._plus,
            Complement: self._complement,
        }

    def compile(self, tree: Sequence) -> MatchFn:
        return self._sequence(tree)

    def _node(self, node: Node) -> MatchFn:
        return self._dispatch[type(node)](node)

    def _memoized(self, matcher: MatchFn) -> MatchFn:
        memo_id = next(self._memo_ids)

        def match(search: Search, i: int) -> Positions:
            key = (memo_id, i)
            ends = search.memo.get(key)
            if ends is None:
                ends = search.memo[key] = matcher(search, i)
            return ends

        return match

    def _alternatives(self, alternatives: Iterable[Sequence]) -> List[MatchFn]:
        return [self._memoized(self._sequence(alt)) for alt in alternatives]

    def _sequence(self, node: Sequence) -> MatchFn:
        matchers = [self._node(item) for item in node.items]

        def match(search: Search, i: int) -> Positions:
            search.tick()
            positions: Positions = frozenset((i,))
            for matcher in matchers:
                if not positions:
                    break
                positions = _union(search, (matcher,), positions)
            return positions

        return match

    def _literal(self, node: Literal) -> MatchFn:
        text = node.text.lower() if self.fold else node.text
        size = len(text)

        def match(search: Search, i: int) -> Positions:
            search.tick()
            if search.text.startswith(text, i):
                return frozenset((i + size,))
            return _NOWHERE

        return match

    def _any_char(self, node: AnyChar) -> MatchFn:
        bash = self.bash

        def match(search: Search, i: int) -> Positions:
            search.tick()
            if i >= search.n or (not bash and search.text[i] == SEPARATOR):
                return _NOWHERE
            return frozenset((i + 1,))

        return match

    def _any_chars(self, node: AnyChars) -> MatchFn:
        bash = self.bash

        def match(search: Search, i: int) -> Positions:
            search.tick()
            limit = search.n if bash else search.segment_end(i)
            return frozenset(range(i, limit + 1))

        return match

    def _globstar(self, node: GlobStar) -> MatchFn:
        def match(search: Search, i: int) -> Positions:
            search.tick()
            text = search.text
            n = search.n
            if node.trailing:
                # "" or any span ending in a separator
                return frozenset(j for j in range(i, n + 1) if j == i or text[j - 1] == SEPARATOR)
            if node.leading:
                # "" or a separator followed by anything
                if i < n and text[i] == SEPARATOR:
                    return frozenset(range(i, n + 1))
                return frozenset((i,))
            return frozenset(range(i, n + 1))

        return match

    def _char_class(self, node: CharClass) -> MatchFn:
        bash = self.bash
        fold = self.fold
        posix_tests = [_POSIX_TESTS[name] for name in node.posix]

        def contains(c: str) -> bool:
            if c in node.chars:
                return True
            if any(lo <= c <= hi for lo, hi in node.ranges):
                return True
            return any(test(c) for test in posix_tests)

        def match(search: Search, i: int) -> Positions:
            search.tick()
            if i >= search.n:
                return _NOWHERE
            c = search.text[i]
            hit = contains(c) or (fold and contains(c.upper()))
            if node.negated:
                ok = not hit and (bash or c != SEPARATOR)
            else:
                ok = hit
            return frozenset((i + 1,)) if ok else _NOWHERE

        return match

    def _choice(self, alternatives: List[MatchFn]) -> MatchFn:
        def match(search: Search, i: int) -> Positions:
            search.tick()
            return _union(search, alternatives, (i,))

        return match

    def _brace(self, node: Brace) -> MatchFn:
        return self._choice(self._alternatives(node.alternatives))

    def _zero_or_more(self, alternatives: List[MatchFn]) -> MatchFn:
        def match(search: Search, i: int) -> Positions:
            search.tick()
            return _reachable(search, alternatives, (i,))

        return match

    def _one_or_more(self, alternatives: List[MatchFn]) -> MatchFn:
        def match(search: Search, i: int) -> Positions:
            search.tick()
            return _reachable(search, alternatives, _union(search, alternatives, (i,)))

        return match

    def _zero_or_one(self, alternatives: List[MatchFn]) -> MatchFn:
        def match(search: Search, i: int) -> Positions:
            search.tick()
            return _union(search, alternatives, (i,)) | {i}

        return match

    def _extglob(self, node: Extglob) -> MatchFn:
        alternatives = self._alternatives(node.alternatives)
        if node.op is ExtglobOp.EXACTLY_ONE:
            return self._choice(alternatives)
        if node.op is ExtglobOp.ZERO_OR_ONE:
            return self._zero_or_one(alternatives)
        if node.op is ExtglobOp.ZERO_OR_MORE:
            return self._zero_or_more(alternatives)
        if node.op is ExtglobOp.ONE_OR_MORE:
            return self._one_or_more(alternatives)
        if self.bash:
            return self._negation_lookahead(node, alternatives)
        return self._negation_complement(node, alternatives)

    def _plus(self, node: Plus) -> MatchFn:
        return self._one_or_more([self._memoized(self._node(node.node))])

    def _negation_complement(self, node: Extglob, alternatives: List[MatchFn]) -> MatchFn:
        spans = node.spans_separators

        def match(search: Search, i: int) -> Positions:
            search.tick()
            limit = search.n if spans else search.segment_end(i)
            excluded = _union(search, alternatives, (i,))
            return frozenset(j for j in range(i, limit + 1) if j not in excluded)

        return match

    def _negation_lookahead(self, node: Extglob, alternatives: List[MatchFn]) -> MatchFn:
        suffix = self._sequence(node.suffix) if node.suffix is not None else None
        tail = node.tail or NegationTail.PREFIX

        def match(search: Search, i: int) -> Positions:
            search.tick()
            ends = _union(search, alternatives, (i,))
            if tail is NegationTail.END:
                excluded = search.n in ends
            elif tail is NegationTail.SUFFIX and suffix is not None:
                excluded = any(suffix(search, e) for e in ends)
            else:
                excluded = bool(ends)
            return _NOWHERE if excluded else frozenset(range(i, search.n + 1))

        return match

    def _complement(self, node: Complement) -> MatchFn:
        body = self._sequence(node.body)

        def match(search: Search, i: int) -> Positions:
            search.tick()
            if search.n in body(search, i):
                return _NOWHERE
            return frozenset((search.n,))

        return match


class CompiledPattern:
    """Immutable matcher for one ``(pattern, options)`` key.

    Safe to share between threads: every call to :meth:`match` runs with
    its own search state.
    """

    def __init__(self, pattern: str, options: MatchOptions, tree: Sequence, matcher: MatchFn):
        self._pattern = pattern
        self._options = options
        self._tree = tree
        self._matcher = matcher

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def options(self) -> MatchOptions:
        return self._options

    @property
    def tree(self) -> Sequence:
        return self._tree

    @property
    def key(self):
        return (self._pattern, self._options)

    def normalize(self, subject: str) -> str:
        """Apply separator and case normalization to an input string."""
        if self._options.normalize_separators:
            subject = subject.replace(WINDOWS_SEPARATOR, SEPARATOR)
        if not self._options.case_sensitive:
            subject = subject.lower()
        return subject

    def match(self, subject: str) -> bool:
        """Match the whole of ``subject``.

        Args:
            subject: Input string

        Returns:
            True if some derivation of the pattern consumes the input
            exactly; False otherwise, including when ``max_steps`` runs out
        """
        text = self.normalize(subject)
        if self._options.bash and not text:
            return self._pattern == ""

        search = Search(text, self._options.max_steps)
        try:
            return search.n in self._matcher(search, 0)
        except StepBudgetExceeded as e:
            get_logger().warning(
                "Match search exhausted", pattern=self._pattern, subject=subject, steps=e.steps
            )
            return False

    __call__ = match

    def __repr__(self) -> str:
        return f"CompiledPattern({self._pattern!r}, dialect={self._options.dialect.value})"


def compile_tree(tree: Sequence, options: MatchOptions, pattern: str = "") -> CompiledPattern:
    """Compile a parse tree.

    Args:
        tree: Root sequence from the parser
        options: Match options
        pattern: Source text, kept for the cache key and diagnostics

    Returns:
        Compiled pattern
    """
    return CompiledPattern(pattern, options, tree, Compiler(options).compile(tree))


def build_pattern(pattern: str, options: MatchOptions) -> CompiledPattern:
    """Scan, parse and compile a pattern.

    Args:
        pattern: Glob pattern text
        options: Match options

    Returns:
        Compiled pattern
    """
    tree = parse(scan(pattern, options))
    compiled = compile_tree(tree, options, pattern)
    get_logger().debug("Compiled pattern", pattern=pattern, dialect=options.dialect.value)
    return compiled
