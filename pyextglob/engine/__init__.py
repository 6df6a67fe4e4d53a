"""pyextglob Engine - the pattern compilation pipeline.

Scanner -> Parser -> Compiler:
- scan: pattern text to tokens, degrading malformed syntax to literals
- parse: tokens to a tree of frozen nodes
- compile_tree: tree to a backtracking CompiledPattern

``build_pattern`` runs all three stages.
"""

from .compiler import CompiledPattern, Compiler, StepBudgetExceeded, build_pattern, compile_tree
from .nodes import (
    AnyChar,
    AnyChars,
    Brace,
    CharClass,
    Complement,
    Extglob,
    GlobStar,
    Literal,
    Plus,
    Sequence,
)
from .parser import Parser, PatternSyntaxError, parse
from .scanner import Scanner, scan
from .tokens import ExtglobOp, NegationTail, Token, TokenType

__all__ = [
    # Tokens
    "TokenType",
    "ExtglobOp",
    "NegationTail",
    "Token",
    # Scanner
    "Scanner",
    "scan",
    # Nodes
    "Literal",
    "AnyChar",
    "AnyChars",
    "GlobStar",
    "CharClass",
    "Sequence",
    "Brace",
    "Extglob",
    "Plus",
    "Complement",
    # Parser
    "Parser",
    "PatternSyntaxError",
    "parse",
    # Compiler
    "Compiler",
    "CompiledPattern",
    "StepBudgetExceeded",
    "compile_tree",
    "build_pattern",
]
