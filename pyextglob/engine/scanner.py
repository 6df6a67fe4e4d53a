#!/usr/bin/env python3
"""Pattern scanner: glob text to tokens.

The scanner never fails. Constructs that are not well formed are degraded to
literal characters:
- ``[`` without a closing ``]`` is a literal ``[``
- ``(``/``)`` and ``{``/``}`` without a partner are literals
- ``{...}`` without a top-level comma is literal text
- groups and braces nested more than ``Limits.MAX_GROUP_DEPTH`` deep are
  literal text
- a trailing backslash is a literal backslash

Parentheses and braces are paired up front by a stack pass that skips
escapes and complete character classes, so an extglob prefix only opens a
group when its ``(`` is known to be closed.

Example:
    >>> [t.type.name for t in scan("a*(b|c)", MatchOptions())]
    ['LITERAL', 'EXTGLOB_OPEN', 'LITERAL', 'PIPE', 'LITERAL', 'GROUP_CLOSE', 'END']
"""

import re
from typing import Dict, List, Set, Tuple

from pyextglob.core.constants import (
    EXTGLOB_PREFIXES,
    GLOB_METACHARS,
    POSIX_CLASSES,
    SEPARATOR,
    Limits,
)
from pyextglob.core.logger import get_logger
from pyextglob.core.options import MatchOptions
from pyextglob.engine.tokens import ExtglobOp, NegationTail, Token, TokenType

_END_TAIL = re.compile(r"\)*")
_SUFFIX_TAIL = re.compile(r"\.[^\\/.]+")

_GROUP = "group"
_BRACE = "brace"


def class_end(pattern: str, start: int) -> int:
    """Find the ``]`` closing the character class opened at ``start``.

    A ``]`` directly after ``[``, ``[!`` or ``[^`` is a member, backslash
    escapes the next character and ``[:name:]`` is skipped as a unit.

    Args:
        pattern: Pattern text
        start: Index of the opening ``[``

    Returns:
        Index of the closing ``]``, or -1 when the class is unterminated
    """
    n = len(pattern)
    j = start + 1
    if j < n and pattern[j] in "!^":
        j += 1
    if j < n and pattern[j] == "]":
        j += 1
    while j < n:
        c = pattern[j]
        if c == "\\":
            j += 2
            continue
        if c == "[" and pattern.startswith("[:", j):
            close = pattern.find(":]", j + 2)
            if close != -1:
                j = close + 2
                continue
        if c == "]":
            return j
        j += 1
    return -1


def pair_groups(pattern: str) -> Dict[int, int]:
    """Pair parentheses and braces.

    A closer only pairs with an opener of its own kind on top of the stack;
    anything left unpaired is a literal. Openers nested deeper than
    ``Limits.MAX_GROUP_DEPTH`` are left unpaired.

    Args:
        pattern: Pattern text

    Returns:
        Mapping of opener index to closer index
    """
    pairs: Dict[int, int] = {}
    stack: List[int] = []
    n = len(pattern)
    i = 0
    while i < n:
        c = pattern[i]
        if c == "\\":
            i += 2
            continue
        if c == "[":
            end = class_end(pattern, i)
            if end != -1:
                i = end + 1
                continue
        elif c in "({":
            stack.append(i)
        elif c in ")}":
            opener = "(" if c == ")" else "{"
            if stack and pattern[stack[-1]] == opener:
                start = stack.pop()
                if len(stack) < Limits.MAX_GROUP_DEPTH:
                    pairs[start] = i
        i += 1
    return pairs


def _has_top_level_comma(pattern: str, start: int, end: int, pairs: Dict[int, int]) -> bool:
    i = start + 1
    while i < end:
        c = pattern[i]
        if c == "\\":
            i += 2
            continue
        if c == "[":
            close = class_end(pattern, i)
            if close != -1:
                i = close + 1
                continue
        if i in pairs:
            i = pairs[i] + 1
            continue
        if c == ",":
            return True
        i += 1
    return False


class Scanner:
    """Converts one pattern into tokens for the given options."""

    def __init__(self, pattern: str, options: MatchOptions):
        """Initialize scanner.

        Args:
            pattern: Glob pattern text
            options: Match options (dialect and separator handling)
        """
        self.pattern = pattern
        self.options = options
        self._pairs = pair_groups(pattern)
        self._group_closers: Set[int] = set()
        self._brace_opens: Set[int] = set()
        self._brace_closers: Set[int] = set()
        for open_, close in self._pairs.items():
            if pattern[open_] == "(":
                self._group_closers.add(close)
            elif _has_top_level_comma(pattern, open_, close, self._pairs):
                self._brace_opens.add(open_)
                self._brace_closers.add(close)

    def _opens_group(self, index: int) -> bool:
        return index < len(self.pattern) and self.pattern[index] == "(" and index in self._pairs

    def scan(self) -> List[Token]:
        """Scan the pattern.

        Returns:
            Tokens in pattern order, terminated by an END token
        """
        p = self.pattern
        n = len(p)
        tokens: List[Token] = []
        contexts: List[str] = []
        i = 0

        while i < n and p[i] == "!" and not self._opens_group(i + 1):
            tokens.append(Token(TokenType.NEGATE, "!", i))
            i += 1

        while i < n:
            c = p[i]
            in_brace = bool(contexts) and contexts[-1] == _BRACE

            if c == "\\":
                i = self._scan_escape(i, tokens)
                continue

            if c == "[":
                end = class_end(p, i)
                if end != -1:
                    self._scan_class(i, end, tokens)
                    i = end + 1
                    continue
                get_logger().debug("Unterminated character class matched literally", pattern=p, offset=i)
                tokens.append(Token(TokenType.LITERAL, c, i))
            elif c in EXTGLOB_PREFIXES and self._opens_group(i + 1):
                tokens.append(self._extglob_token(i))
                contexts.append(_GROUP)
                i += 2
                continue
            elif c == "(" and i in self._pairs:
                tokens.append(Token(TokenType.GROUP_OPEN, c, i))
                contexts.append(_GROUP)
            elif c == ")" and i in self._group_closers:
                tokens.append(Token(TokenType.GROUP_CLOSE, c, i))
                contexts.pop()
            elif c == "{" and i in self._brace_opens:
                tokens.append(Token(TokenType.BRACE_OPEN, c, i))
                contexts.append(_BRACE)
            elif c == "}" and i in self._brace_closers:
                tokens.append(Token(TokenType.BRACE_CLOSE, c, i))
                contexts.pop()
            elif c == "," and in_brace:
                tokens.append(Token(TokenType.BRACE_COMMA, c, i))
            elif c == "|" and not in_brace:
                tokens.append(Token(TokenType.PIPE, c, i))
            elif c == "*":
                tokens.append(Token(TokenType.STAR, c, i))
            elif c == "?":
                tokens.append(Token(TokenType.QMARK, c, i))
            elif c == "+":
                tokens.append(Token(TokenType.PLUS, c, i))
            elif c == SEPARATOR:
                tokens.append(Token(TokenType.SEPARATOR, c, i))
            else:
                if c in "()":
                    get_logger().debug("Unbalanced parenthesis matched literally", pattern=p, offset=i)
                tokens.append(Token(TokenType.LITERAL, c, i))
            i += 1

        tokens.append(Token(TokenType.END, "", n))
        return tokens

    def _scan_escape(self, i: int, tokens: List[Token]) -> int:
        """Scan a backslash at ``i`` and return the next index to scan."""
        p = self.pattern
        if i + 1 >= len(p):
            tokens.append(Token(TokenType.LITERAL, "\\", i))
            return i + 1

        nxt = p[i + 1]
        if self.options.normalize_separators and nxt not in GLOB_METACHARS:
            # Windows spelling of "/"; the next character is scanned normally
            tokens.append(Token(TokenType.SEPARATOR, SEPARATOR, i))
            return i + 1
        if self.options.bash and nxt == "*":
            tokens.append(Token(TokenType.STAR, "*", i))
            return i + 2
        tokens.append(Token(TokenType.LITERAL, nxt, i, escaped=True))
        return i + 2

    def _extglob_token(self, i: int) -> Token:
        p = self.pattern
        op = ExtglobOp(p[i])
        if op is not ExtglobOp.NOT:
            return Token(TokenType.EXTGLOB_OPEN, p[i : i + 2], i, op=op)

        close = self._pairs[i + 1]
        inner = p[i + 2 : close]
        rest = p[close + 1 :]
        spans = len(inner) > 1 and SEPARATOR in inner
        suffix: Tuple[Token, ...] = ()

        if spans or _END_TAIL.fullmatch(rest):
            tail = NegationTail.END
        elif "*" in inner and _SUFFIX_TAIL.fullmatch(rest):
            tail = NegationTail.SUFFIX
            suffix = tuple(Scanner(rest, self.options).scan())
        else:
            tail = NegationTail.PREFIX

        return Token(
            TokenType.EXTGLOB_OPEN,
            p[i : i + 2],
            i,
            op=op,
            tail=tail,
            suffix=suffix,
            spans_separators=spans,
        )

    def _class_char(self, j: int, end: int) -> Tuple[str, int]:
        p = self.pattern
        if p[j] == "\\" and j + 1 < end:
            return p[j + 1], j + 2
        return p[j], j + 1

    def _scan_class(self, start: int, end: int, tokens: List[Token]) -> None:
        """Emit tokens for the class spanning ``start``..``end`` inclusive."""
        p = self.pattern
        j = start + 1
        negated = p[j] in "!^"
        if negated:
            j += 1
        tokens.append(Token(TokenType.CLASS_OPEN, "!" if negated else "", start))

        while j < end:
            if p.startswith("[:", j):
                close = p.find(":]", j + 2)
                if close != -1 and close < end:
                    name = p[j + 2 : close]
                    if name in POSIX_CLASSES:
                        tokens.append(Token(TokenType.CLASS_POSIX, name, j))
                    else:
                        for k in range(j, close + 2):
                            tokens.append(Token(TokenType.CLASS_CHAR, p[k], k))
                    j = close + 2
                    continue

            offset = j
            lo, j = self._class_char(j, end)
            if j + 1 < end and p[j] == "-":
                hi, j = self._class_char(j + 1, end)
                tokens.append(Token(TokenType.CLASS_RANGE, lo + hi, offset))
            else:
                tokens.append(Token(TokenType.CLASS_CHAR, lo, offset))

        tokens.append(Token(TokenType.CLASS_CLOSE, "]", end))


def scan(pattern: str, options: MatchOptions) -> List[Token]:
    """Scan a pattern into tokens.

    Args:
        pattern: Glob pattern text
        options: Match options

    Returns:
        Tokens terminated by an END token
    """
    return Scanner(pattern, options).scan()
