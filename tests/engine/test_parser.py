#!/usr/bin/env python3
"""Tests for the recursive-descent parser."""
import pytest

from pyextglob.core.options import Dialect, MatchOptions
from pyextglob.engine.nodes import (
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
from pyextglob.engine.parser import Parser, PatternSyntaxError, parse
from pyextglob.engine.scanner import scan
from pyextglob.engine.tokens import ExtglobOp, NegationTail, Token, TokenType

BASH = MatchOptions(dialect=Dialect.BASH)


def tree(pattern, options=None):
    return parse(scan(pattern, options or MatchOptions()))


def seq(*items):
    return Sequence(tuple(items))


class TestSequences:
    """Test plain sequences."""

    def test_literals_merge(self):
        """Adjacent literals merge into one node."""
        assert tree("abc") == seq(Literal("abc"))

    def test_empty(self):
        """The empty pattern is an empty sequence."""
        assert tree("") == seq()

    def test_wildcards(self):
        """? and * become AnyChar and AnyChars."""
        assert tree("a?*") == seq(Literal("a"), AnyChar(), AnyChars())

    def test_equal_trees(self):
        """Parsing twice yields equal trees."""
        assert tree("*(a|b)/[x-z]") == tree("*(a|b)/[x-z]")

    def test_top_level_alternatives(self):
        """| outside groups splits the whole pattern."""
        assert tree("a|b*") == seq(
            Extglob(ExtglobOp.EXACTLY_ONE, (seq(Literal("a")), seq(Literal("b"), AnyChars())))
        )


class TestGlobStar:
    """Test globstar resolution."""

    def test_middle(self):
        """a/**/b absorbs the trailing separator."""
        assert tree("a/**/b") == seq(Literal("a/"), GlobStar(trailing=True), Literal("b"))

    def test_alone(self):
        """** alone matches everything."""
        assert tree("**") == seq(GlobStar())

    def test_end(self):
        """a/** absorbs the leading separator."""
        assert tree("a/**") == seq(Literal("a"), GlobStar(leading=True))

    def test_start(self):
        """**/a absorbs the trailing separator."""
        assert tree("**/a") == seq(GlobStar(trailing=True), Literal("a"))

    def test_not_segment_bounded(self):
        """a**b is a single star."""
        assert tree("a**b") == seq(Literal("a"), AnyChars(), Literal("b"))

    def test_triple_star(self):
        """Longer runs bounded by separators are globstars too."""
        assert tree("***") == seq(GlobStar())


class TestGroups:
    """Test extglob groups and braces."""

    def test_extglob(self):
        """Alternatives are split on |."""
        assert tree("*(a|bc)") == seq(
            Extglob(ExtglobOp.ZERO_OR_MORE, (seq(Literal("a")), seq(Literal("bc"))))
        )

    def test_empty_alternative(self):
        """Empty alternatives are kept."""
        assert tree("@(a|)") == seq(Extglob(ExtglobOp.EXACTLY_ONE, (seq(Literal("a")), seq())))

    def test_bare_group(self):
        """A bare group is exactly-one."""
        assert tree("(a)") == seq(Extglob(ExtglobOp.EXACTLY_ONE, (seq(Literal("a")),)))

    def test_nested(self):
        """Groups nest."""
        inner = Extglob(ExtglobOp.ONE_OR_MORE, (seq(Literal("b")),))
        assert tree("?(a+(b))") == seq(Extglob(ExtglobOp.ZERO_OR_ONE, (seq(Literal("a"), inner),)))

    def test_brace(self):
        """Braces split on commas."""
        assert tree("{a,b}c") == seq(Brace((seq(Literal("a")), seq(Literal("b")))), Literal("c"))

    def test_negation_prefix(self):
        """A negation followed by text has a prefix tail."""
        assert tree("!(foo)bar", BASH) == seq(
            Extglob(ExtglobOp.NOT, (seq(Literal("foo")),), tail=NegationTail.PREFIX),
            Literal("bar"),
        )

    def test_negation_suffix(self):
        """A suffix tail carries its parsed suffix."""
        node = tree("!(*).js", BASH).items[0]
        assert node.tail is NegationTail.SUFFIX
        assert node.suffix == seq(Literal(".js"))


class TestPlus:
    """Test + repetition."""

    def test_class_plus(self):
        """+ after a class repeats it."""
        assert tree("[a-c]+") == seq(Plus(CharClass(ranges=(("a", "c"),))))

    def test_literal_plus_outside_group(self):
        """+ after text outside a group is literal."""
        assert tree("a+") == seq(Literal("a+"))

    def test_literal_plus_inside_group(self):
        """+ after text inside a group repeats it."""
        assert tree("@(a+|b)") == seq(
            Extglob(ExtglobOp.EXACTLY_ONE, (seq(Plus(Literal("a"))), seq(Literal("b"))))
        )

    def test_group_plus(self):
        """+ after a group repeats the group."""
        node = tree("(a|b)+").items[0]
        assert isinstance(node, Plus)
        assert isinstance(node.node, Extglob)

    def test_repeated_plus_inside_group(self):
        """A run of + inside a group repeats the node once."""
        assert tree("@(a+++)") == seq(Extglob(ExtglobOp.EXACTLY_ONE, (seq(Plus(Literal("a"))),)))

    def test_repeated_plus_after_class(self):
        """Outside a group only the first + after a class repeats it."""
        assert tree("[a]++") == seq(Plus(CharClass("a")), Literal("+"))

    def test_leading_plus(self):
        """+ with nothing before it is literal."""
        assert tree("+a") == seq(Literal("+a"))


class TestClasses:
    """Test class nodes."""

    def test_class_fields(self):
        """Members, ranges, POSIX names and negation."""
        assert tree("[!xa-c[:digit:]]") == seq(
            CharClass(chars="x", ranges=(("a", "c"),), posix=("digit",), negated=True)
        )


class TestComplement:
    """Test leading ! negation."""

    def test_single(self):
        """One ! complements the pattern."""
        assert tree("!abc") == seq(Complement(seq(Literal("abc"))))

    def test_double(self):
        """Two ! cancel out."""
        assert tree("!!abc") == seq(Literal("abc"))

    def test_complement_alternatives(self):
        """The complement covers every top-level alternative."""
        body = seq(Extglob(ExtglobOp.EXACTLY_ONE, (seq(Literal("a")), seq(Literal("b")))))
        assert tree("!a|b") == seq(Complement(body))


class TestErrors:
    """Test token streams the scanner never produces."""

    def test_stray_group_close(self):
        """A closer without an opener is reported with its offset."""
        with pytest.raises(PatternSyntaxError, match="Unbalanced GROUP_CLOSE at offset 3") as exc_info:
            Parser([Token(TokenType.GROUP_CLOSE, ")", 3)]).parse()
        assert exc_info.value.offset == 3

    def test_unclosed_group(self):
        """A group running into the end is reported."""
        tokens = [
            Token(TokenType.EXTGLOB_OPEN, "*(", 0, op=ExtglobOp.ZERO_OR_MORE),
            Token(TokenType.LITERAL, "a", 2),
        ]
        with pytest.raises(PatternSyntaxError, match="Unexpected end of pattern"):
            parse(tokens)

    def test_unterminated_class(self):
        """A class without CLASS_CLOSE is reported at its opener."""
        tokens = [Token(TokenType.CLASS_OPEN, "", 0), Token(TokenType.LITERAL, "a", 1)]
        with pytest.raises(PatternSyntaxError, match="Unterminated character class at offset 0"):
            parse(tokens)

    def test_missing_end_token(self):
        """A stream without END is terminated automatically."""
        assert parse([Token(TokenType.LITERAL, "a", 0)]) == seq(Literal("a"))

    def test_is_syntax_error(self):
        """PatternSyntaxError is a SyntaxError."""
        assert issubclass(PatternSyntaxError, SyntaxError)
