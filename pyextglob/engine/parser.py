#!/usr/bin/env python3
"""Recursive-descent parser: tokens to a node tree.

Rules applied while building the tree:
- Groups split their alternatives on ``|`` at their own nesting level,
  braces on ``,``; empty alternatives are kept and match the empty span
- A ``|`` outside every group splits the whole pattern into alternatives
- A run of two or more ``*`` filling a whole path segment is a globstar and
  absorbs one neighbouring separator; any other run is a single ``*``
- ``+`` repeats the preceding class, group or brace, or (inside a group)
  the preceding node; elsewhere it is a literal
- An odd number of leading ``!`` complements the whole pattern

Only token streams the scanner cannot produce (unbalanced groups, braces or
classes) raise :class:`PatternSyntaxError`.

Example:
    >>> parse(scan("a/**/b", MatchOptions()))
    Sequence(items=(Literal(text='a/'), GlobStar(leading=False, trailing=True), Literal(text='b')))
"""

from typing import Iterable, List, Set, Union

from pyextglob.core.constants import SEPARATOR, ErrorCode
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
from pyextglob.engine.tokens import ExtglobOp, Token, TokenType


class PatternSyntaxError(SyntaxError):
    """Unbalanced group, brace or class in a token stream."""

    def __init__(self, message: str, offset: int):
        """Initialize PatternSyntaxError.

        Args:
            message: Error message
            offset: Pattern offset of the offending token
        """
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset
        self.error_code = ErrorCode.INVALID_INPUT


class _StarRun:
    """Consecutive ``*`` tokens awaiting globstar resolution."""

    def __init__(self) -> None:
        self.count = 1


_Item = Union[Node, _StarRun]

_STRAY = {
    TokenType.GROUP_CLOSE,
    TokenType.BRACE_CLOSE,
    TokenType.BRACE_COMMA,
    TokenType.CLASS_CHAR,
    TokenType.CLASS_RANGE,
    TokenType.CLASS_POSIX,
    TokenType.CLASS_CLOSE,
    TokenType.END,
}


def _is_separator(item) -> bool:
    return isinstance(item, Literal) and item.text == SEPARATOR


class Parser:
    """Builds a :class:`Sequence` from scanner tokens."""

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: List[Token] = list(tokens)
        if not self._tokens or self._tokens[-1].type is not TokenType.END:
            offset = self._tokens[-1].offset + 1 if self._tokens else 0
            self._tokens.append(Token(TokenType.END, "", offset))
        self._pos = 0

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        if tok.type is not TokenType.END:
            self._pos += 1
        return tok

    def _expect(self, token_type: TokenType, opener: Token) -> None:
        tok = self._peek()
        if tok.type is not token_type:
            raise PatternSyntaxError(
                f"Expected {token_type.name} closing {opener.type.name}, got {tok.type.name}",
                tok.offset,
            )
        self._advance()

    def parse(self) -> Sequence:
        """Parse the whole token stream.

        Returns:
            Root sequence

        Raises:
            PatternSyntaxError: If groups, braces or classes are unbalanced
        """
        negations = 0
        while self._peek().type is TokenType.NEGATE:
            self._advance()
            negations += 1

        alternatives = self._parse_alternatives(TokenType.PIPE, TokenType.END, in_group=False)
        tok = self._peek()
        if tok.type is not TokenType.END:
            raise PatternSyntaxError(f"Unexpected {tok.type.name}", tok.offset)

        if len(alternatives) == 1:
            body = alternatives[0]
        else:
            body = Sequence((Extglob(ExtglobOp.EXACTLY_ONE, tuple(alternatives)),))

        if negations % 2:
            return Sequence((Complement(body),))
        return body

    def _parse_alternatives(
        self, separator: TokenType, close: TokenType, in_group: bool
    ) -> List[Sequence]:
        stop = {separator, close}
        alternatives = [self._parse_sequence(stop, in_group)]
        while self._peek().type is separator:
            self._advance()
            alternatives.append(self._parse_sequence(stop, in_group))
        return alternatives

    def _parse_sequence(self, stop: Set[TokenType], in_group: bool) -> Sequence:
        items: List[_Item] = []

        while True:
            tok = self._peek()
            if tok.type in stop:
                break
            if tok.type is TokenType.END:
                raise PatternSyntaxError("Unexpected end of pattern", tok.offset)
            if tok.type in _STRAY:
                raise PatternSyntaxError(f"Unbalanced {tok.type.name}", tok.offset)
            self._advance()

            if tok.type is TokenType.LITERAL:
                items.append(Literal(tok.value))
            elif tok.type is TokenType.SEPARATOR:
                items.append(Literal(SEPARATOR))
            elif tok.type is TokenType.STAR:
                if items and isinstance(items[-1], _StarRun):
                    items[-1].count += 1
                else:
                    items.append(_StarRun())
            elif tok.type is TokenType.QMARK:
                items.append(AnyChar())
            elif tok.type is TokenType.CLASS_OPEN:
                items.append(self._parse_class(tok))
            elif tok.type is TokenType.BRACE_OPEN:
                alternatives = self._parse_alternatives(
                    TokenType.BRACE_COMMA, TokenType.BRACE_CLOSE, in_group
                )
                self._expect(TokenType.BRACE_CLOSE, tok)
                items.append(Brace(tuple(alternatives)))
            elif tok.type in (TokenType.EXTGLOB_OPEN, TokenType.GROUP_OPEN):
                items.append(self._parse_group(tok))
            elif tok.type is TokenType.PLUS:
                self._apply_plus(items, in_group)
            else:
                # "|" inside a brace, "!" past the pattern start
                items.append(Literal(tok.value))

        return Sequence(tuple(_merge_literals(_resolve_stars(items))))

    def _parse_group(self, tok: Token) -> Extglob:
        alternatives = self._parse_alternatives(TokenType.PIPE, TokenType.GROUP_CLOSE, in_group=True)
        self._expect(TokenType.GROUP_CLOSE, tok)

        op = tok.op or ExtglobOp.EXACTLY_ONE
        if op is not ExtglobOp.NOT:
            return Extglob(op, tuple(alternatives))

        suffix = Parser(tok.suffix).parse() if tok.suffix else None
        return Extglob(
            op,
            tuple(alternatives),
            tail=tok.tail,
            suffix=suffix,
            spans_separators=tok.spans_separators,
        )

    def _parse_class(self, open_tok: Token) -> CharClass:
        chars: List[str] = []
        ranges = []
        posix = []
        while True:
            tok = self._advance()
            if tok.type is TokenType.CLASS_CHAR:
                chars.append(tok.value)
            elif tok.type is TokenType.CLASS_RANGE:
                ranges.append((tok.value[0], tok.value[1]))
            elif tok.type is TokenType.CLASS_POSIX:
                posix.append(tok.value)
            elif tok.type is TokenType.CLASS_CLOSE:
                break
            else:
                raise PatternSyntaxError("Unterminated character class", open_tok.offset)
        return CharClass("".join(chars), tuple(ranges), tuple(posix), negated=open_tok.value == "!")

    @staticmethod
    def _apply_plus(items: List[_Item], in_group: bool) -> None:
        prev = items[-1] if items else None
        if in_group and isinstance(prev, Plus):
            # x++ repeats the same language as x+
            return
        repeatable = isinstance(prev, (CharClass, Extglob, Brace)) or (
            in_group and prev is not None and not isinstance(prev, _StarRun)
        )
        if repeatable:
            items[-1] = Plus(prev)
        else:
            items.append(Literal("+"))


def _resolve_stars(items: List[_Item]) -> List[Node]:
    """Turn star runs into ``AnyChars`` or segment-bounded ``GlobStar``."""
    out: List[Node] = []
    absorbed: Set[int] = set()

    for idx, item in enumerate(items):
        if idx in absorbed:
            continue
        if not isinstance(item, _StarRun):
            out.append(item)
            continue

        prev = items[idx - 1] if idx > 0 else None
        nxt = items[idx + 1] if idx + 1 < len(items) else None
        bounded = (prev is None or _is_separator(prev)) and (nxt is None or _is_separator(nxt))

        if item.count < 2 or not bounded:
            out.append(AnyChars())
        elif nxt is not None:
            absorbed.add(idx + 1)
            out.append(GlobStar(trailing=True))
        elif prev is not None and out and out[-1] is prev:
            out.pop()
            out.append(GlobStar(leading=True))
        else:
            out.append(GlobStar())

    return out


def _merge_literals(nodes: List[Node]) -> List[Node]:
    merged: List[Node] = []
    for node in nodes:
        if isinstance(node, Literal) and merged and isinstance(merged[-1], Literal):
            merged[-1] = Literal(merged[-1].text + node.text)
        else:
            merged.append(node)
    return merged


def parse(tokens: Iterable[Token]) -> Sequence:
    """Parse scanner tokens into a tree.

    Args:
        tokens: Tokens from :func:`pyextglob.engine.scanner.scan`

    Returns:
        Root sequence

    Raises:
        PatternSyntaxError: If groups, braces or classes are unbalanced
    """
    return Parser(tokens).parse()
