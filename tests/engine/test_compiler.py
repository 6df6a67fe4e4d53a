#!/usr/bin/env python3
"""Tests for the backtracking matcher."""
import io
import logging

import pytest

from pyextglob.core.constants import Limits
from pyextglob.core.logger import Logger, LogLevel, set_global_logger
from pyextglob.core.options import Dialect, MatchOptions
from pyextglob.engine.compiler import CompiledPattern, Search, StepBudgetExceeded, build_pattern, compile_tree
from pyextglob.engine.nodes import Literal, Sequence

DEFAULT = MatchOptions()
BASH = MatchOptions(dialect=Dialect.BASH)


def matches(subject, pattern, options=DEFAULT):
    return build_pattern(pattern, options).match(subject)


@pytest.fixture
def captured_warnings():
    """Install a global logger writing to a buffer."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    set_global_logger(Logger(level=LogLevel.WARNING, handlers=[handler]))
    return stream


class TestSearch:
    """Test search state."""

    def test_segment_end(self):
        """segment_end stops at the next separator."""
        search = Search("ab/cd")
        assert search.segment_end(0) == 2
        assert search.segment_end(3) == 5

    def test_budget(self):
        """tick raises once the budget is used up."""
        search = Search("abc", max_steps=2)
        search.tick()
        search.tick()
        with pytest.raises(StepBudgetExceeded):
            search.tick()


class TestWildcards:
    """Test ?, * and ** in both dialects."""

    @pytest.mark.parametrize(
        "subject,pattern,expected",
        [
            ("a.js", "*.js", True),
            ("a/b.js", "*.js", False),
            ("abc", "a?c", True),
            ("a/c", "a?c", False),
            ("abc", "a*", True),
            ("", "*", True),
            ("a/b/c.js", "**/*.js", True),
            ("c.js", "**/*.js", True),
            ("a", "a/**", True),
            ("a/b/c", "a/**", True),
            ("ab", "a/**", False),
            ("a/b", "a/**/b", True),
            ("a/x/y/b", "a/**/b", True),
            ("a/xb", "a/**/b", False),
            ("x/y", "**", True),
        ],
    )
    def test_default_dialect(self, subject, pattern, expected):
        """Default wildcards stay inside one segment."""
        assert matches(subject, pattern) is expected

    @pytest.mark.parametrize(
        "subject,pattern,expected",
        [
            ("a/b.js", "*.js", True),
            ("a/c", "a?c", True),
            ("", "*", False),
            ("", "", True),
            ("a", "", False),
        ],
    )
    def test_bash_dialect(self, subject, pattern, expected):
        """bash wildcards cross separators; empty input needs an empty pattern."""
        assert matches(subject, pattern, BASH) is expected


class TestClasses:
    """Test character classes."""

    def test_range(self):
        """Ranges are inclusive."""
        assert matches("b", "[a-c]")
        assert not matches("d", "[a-c]")

    def test_negated(self):
        """Negated classes exclude their members."""
        assert matches("d", "[!a-c]")
        assert not matches("a", "[^a-c]")

    def test_negated_separator(self):
        """Only bash lets a negated class match /."""
        assert not matches("/", "[!a]")
        assert matches("/", "[!a]", BASH)

    @pytest.mark.parametrize(
        "subject,pattern,expected",
        [
            ("123", "[[:digit:]]+", True),
            ("12a", "[[:digit:]]+", False),
            ("aZ", "[[:alpha:]][[:upper:]]", True),
            (" ", "[[:space:]]", True),
            ("f", "[[:xdigit:]]", True),
            ("g", "[[:xdigit:]]", False),
            ("_", "[[:word:]]", True),
            ("!", "[[:punct:]]", True),
        ],
    )
    def test_posix(self, subject, pattern, expected):
        """POSIX classes test character kinds."""
        assert matches(subject, pattern) is expected


class TestExtglobs:
    """Test extglob operators."""

    @pytest.mark.parametrize(
        "subject,pattern,expected",
        [
            ("fofoofoofofoo", "*(fo|foo)", True),
            ("", "*(a)", True),
            ("aab", "*(a)b", True),
            ("", "+(a|b)", False),
            ("abba", "+(a|b)", True),
            ("b", "?(a)b", True),
            ("ab", "?(a)b", True),
            ("aab", "?(a)b", False),
            ("a", "@(a|b)", True),
            ("ab", "@(a|b)", False),
            ("ac", "{a,b}c", True),
            ("cc", "{a,b}c", False),
            ("aaab", "(a+|b)+", True),
            ("x", "a|x", True),
        ],
    )
    def test_operators(self, subject, pattern, expected):
        """Repetition and choice operators."""
        assert matches(subject, pattern) is expected

    def test_empty_alternative(self):
        """An empty alternative matches the empty span."""
        assert matches("b", "@(a|)b")

    def test_leading_complement(self):
        """A leading ! negates the whole pattern."""
        assert matches("a.md", "!*.js")
        assert not matches("a.js", "!*.js")
        assert matches("a.js", "!!*.js")


class TestNegation:
    """Test !(...) in both dialects."""

    @pytest.mark.parametrize(
        "subject,pattern,expected",
        [
            ("bar", "!(foo)", True),
            ("foo", "!(foo)", False),
            ("foo.js", "!(foo).js", False),
            ("bar.js", "!(foo).js", True),
            ("foobar.js", "!(foo).js", True),
            ("foobar", "!(foo)*", True),
            ("a.md", "*.!(js)", True),
            ("a.js", "*.!(js)", False),
            ("x/bar", "x/!(foo)", True),
            ("x/foo", "x/!(foo)", False),
        ],
    )
    def test_default_complement(self, subject, pattern, expected):
        """Default negation is a complement within the segment."""
        assert matches(subject, pattern) is expected

    @pytest.mark.parametrize(
        "subject,pattern,expected",
        [
            ("bar", "!(foo)", True),
            ("foo", "!(foo)", False),
            ("foobar", "!(foo)*", False),
            ("barfoo", "!(foo)*", True),
            ("a.md", "*.!(js)", True),
            ("a.js", "*.!(js)", False),
            ("foo.js", "!(*).js", False),
            ("foo.md", "!(*).js", False),
        ],
    )
    def test_bash_lookahead(self, subject, pattern, expected):
        """bash negation is a lookahead."""
        assert matches(subject, pattern, BASH) is expected


class TestCaseInsensitive:
    """Test case folding."""

    def test_literal(self):
        """Literals compare case-insensitively."""
        options = MatchOptions(case_sensitive=False)
        assert matches("A.JS", "*.js", options)
        assert matches("a.js", "*.JS", options)
        assert not matches("a.js", "*.JS")

    def test_class(self):
        """Class ranges fold case."""
        options = MatchOptions(case_sensitive=False)
        assert matches("qX", "[A-Z]x", options)
        assert matches("Q", "[a-z]", options)


class TestSeparatorNormalization:
    """Test backslash separators."""

    def test_subject_backslashes(self):
        """Backslashes in the input become separators."""
        options = MatchOptions(normalize_separators=True)
        assert matches("a\\b", "a/b", options)
        assert not matches("a\\b", "a/b")

    def test_normalize(self):
        """normalize applies separator and case folding."""
        compiled = build_pattern("x", MatchOptions(normalize_separators=True, case_sensitive=False))
        assert compiled.normalize("A\\B") == "a/b"


class TestStepBudget:
    """Test the backtracking step budget."""

    def test_exhausted_budget_is_no_match(self, captured_warnings):
        """An exhausted search returns False and logs a warning."""
        compiled = build_pattern("*(a|aa)*(a|aa)b", MatchOptions(max_steps=50))
        assert compiled.match("a" * 30) is False
        assert "Match search exhausted" in captured_warnings.getvalue()

    def test_generous_budget(self):
        """A sufficient budget does not change the result."""
        assert matches("abc", "a*", MatchOptions(max_steps=1000))


class TestLongInput:
    """Test matching inputs far longer than the interpreter stack."""

    def test_repetition_over_thousands_of_chars(self):
        """*(a) matches a long run without giving up."""
        compiled = build_pattern("*(a)", DEFAULT)
        assert compiled.match("a" * 5000) is True
        assert compiled.match("a" * 4999 + "b") is False

    def test_one_or_more_over_long_input(self):
        """+(ab) matches many repetitions."""
        assert matches("ab" * 3000, "+(ab)")

    def test_many_single_char_wildcards(self):
        """A thousand ? each consume one character."""
        compiled = build_pattern("?" * 1000, DEFAULT)
        assert compiled.match("a" * 1000) is True
        assert compiled.match("a" * 999) is False

    def test_many_segments(self):
        """Two hundred */ segments match a matching path."""
        assert matches("a/" * 200, "*/" * 200)
        assert not matches("a/" * 199, "*/" * 200)

    def test_negation_over_long_input(self):
        """!(x) spans a long segment."""
        assert matches("b" * 3000, "!(a)")
        assert matches("b" * 3000, "!(a)", BASH)

    def test_no_step_warning_without_budget(self, captured_warnings):
        """An unbounded search never logs exhaustion."""
        assert build_pattern("*(a|aa)*(a|aa)b", DEFAULT).match("a" * 30) is False
        assert "Match search exhausted" not in captured_warnings.getvalue()


class TestDeepNesting:
    """Test groups nested past the pairing limit."""

    def test_nesting_at_limit_matches(self):
        """Groups nested exactly to the limit behave as groups."""
        depth = Limits.MAX_GROUP_DEPTH
        compiled = build_pattern("@(" * depth + "a" + ")" * depth, DEFAULT)
        assert compiled.match("a") is True

    def test_nesting_past_limit_is_literal(self):
        """Openers past the limit are matched as literal text."""
        inner = 200 - Limits.MAX_GROUP_DEPTH
        compiled = build_pattern("@(" * 200 + "a" + ")" * 200, DEFAULT)
        assert compiled.match("a") is False
        assert compiled.match("@(" * inner + "a" + ")" * inner) is True

    def test_deep_nesting_in_bash(self):
        """Deep nesting compiles in the bash dialect too."""
        compiled = build_pattern("!(" * 200 + "a" + ")" * 200, BASH)
        assert compiled.match("b") in (True, False)

    def test_long_plus_chain(self):
        """A run of + after a node inside a group repeats it once."""
        compiled = build_pattern("@(a" + "+" * 2000 + ")", DEFAULT)
        assert compiled.match("aaa") is True
        assert compiled.match("") is False


class TestCompiledPattern:
    """Test the CompiledPattern wrapper."""

    def test_properties(self):
        """Pattern, options, key and tree are exposed."""
        compiled = build_pattern("a*", BASH)
        assert compiled.pattern == "a*"
        assert compiled.options is BASH
        assert compiled.key == ("a*", BASH)
        assert isinstance(compiled.tree, Sequence)

    def test_callable(self):
        """A compiled pattern is a predicate."""
        compiled = build_pattern("a*", DEFAULT)
        assert list(filter(compiled, ["ab", "ba"])) == ["ab"]

    def test_repr(self):
        """repr shows pattern and dialect."""
        assert repr(build_pattern("a*", BASH)) == "CompiledPattern('a*', dialect=bash)"

    def test_compile_tree(self):
        """Trees can be compiled directly."""
        compiled = compile_tree(Sequence((Literal("ab"),)), DEFAULT)
        assert isinstance(compiled, CompiledPattern)
        assert compiled.match("ab")
        assert not compiled.match("abc")
