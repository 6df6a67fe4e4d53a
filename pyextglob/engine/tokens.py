"""Token types produced by the pattern scanner."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class TokenType(Enum):
    """Syntactic token kinds."""

    LITERAL = "literal"
    STAR = "star"  # *
    QMARK = "qmark"  # ?
    SEPARATOR = "separator"  # /
    CLASS_OPEN = "class_open"  # [ or [! / [^ (value "!")
    CLASS_CHAR = "class_char"
    CLASS_RANGE = "class_range"  # value is "lo" + "hi"
    CLASS_POSIX = "class_posix"  # value is the class name
    CLASS_CLOSE = "class_close"
    BRACE_OPEN = "brace_open"
    BRACE_COMMA = "brace_comma"
    BRACE_CLOSE = "brace_close"
    EXTGLOB_OPEN = "extglob_open"  # !( *( +( ?( @(
    GROUP_OPEN = "group_open"  # bare (
    GROUP_CLOSE = "group_close"
    PIPE = "pipe"
    PLUS = "plus"  # + outside an extglob prefix
    NEGATE = "negate"  # leading !
    END = "end"


class ExtglobOp(Enum):
    """Extglob operators, keyed by their prefix character."""

    NOT = "!"
    ZERO_OR_MORE = "*"
    ONE_OR_MORE = "+"
    ZERO_OR_ONE = "?"
    EXACTLY_ONE = "@"


class NegationTail(Enum):
    """What follows a ``!(...)`` group; selects the bash lookahead rule."""

    END = "end"  # nothing but closing parens: exclude whole-remainder matches
    PREFIX = "prefix"  # anything else: exclude any alternative matching a prefix
    SUFFIX = "suffix"  # "*" body followed by ".ext": exclude alternative + suffix


@dataclass(frozen=True)
class Token:
    """A scanned token.

    ``offset`` is the index of the token's first character in the pattern.
    ``escaped`` marks literals written with a backslash. The negation fields
    are only set on ``!(`` tokens.
    """

    type: TokenType
    value: str = ""
    offset: int = 0
    escaped: bool = False
    op: Optional[ExtglobOp] = None
    tail: Optional[NegationTail] = None
    suffix: Tuple["Token", ...] = ()
    spans_separators: bool = False

    def __repr__(self) -> str:
        extra = f" {self.op.value}(" if self.op else ""
        return f"Token({self.type.name}{extra} {self.value!r} @{self.offset})"
