"""Parse-tree nodes.

Nodes are frozen dataclasses with value equality, so parsing the same
pattern twice yields equal trees. The root of every tree is a ``Sequence``.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from pyextglob.engine.tokens import ExtglobOp, NegationTail


@dataclass(frozen=True)
class Literal:
    """Exact text."""

    text: str


@dataclass(frozen=True)
class AnyChar:
    """``?``: one character."""


@dataclass(frozen=True)
class AnyChars:
    """``*``: zero or more characters."""


@dataclass(frozen=True)
class GlobStar:
    """``**`` occupying a whole path segment.

    ``trailing`` means the following separator was absorbed (``**/``),
    ``leading`` means the preceding one was (``/**`` at the end).
    """

    leading: bool = False
    trailing: bool = False


@dataclass(frozen=True)
class CharClass:
    """``[...]`` membership test.

    ``ranges`` holds inclusive ``(lo, hi)`` pairs and ``posix`` the names of
    ``[:name:]`` classes.
    """

    chars: str = ""
    ranges: Tuple[Tuple[str, str], ...] = ()
    posix: Tuple[str, ...] = ()
    negated: bool = False


@dataclass(frozen=True)
class Sequence:
    """Concatenation of nodes."""

    items: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class Brace:
    """``{a,b}``: ordered choice between alternatives."""

    alternatives: Tuple[Sequence, ...]


@dataclass(frozen=True)
class Extglob:
    """An extglob group, or a bare ``(...)`` group as ``EXACTLY_ONE``.

    ``tail``, ``suffix`` and ``spans_separators`` only apply to ``NOT``.
    """

    op: ExtglobOp
    alternatives: Tuple[Sequence, ...]
    tail: Optional[NegationTail] = None
    suffix: Optional[Sequence] = None
    spans_separators: bool = False


@dataclass(frozen=True)
class Plus:
    """``x+``: one or more of the preceding node."""

    node: "Node"


@dataclass(frozen=True)
class Complement:
    """Leading ``!``: the whole remaining input must not match ``body``."""

    body: Sequence


Node = Union[
    Literal,
    AnyChar,
    AnyChars,
    GlobStar,
    CharClass,
    Sequence,
    Brace,
    Extglob,
    Plus,
    Complement,
]
