#!/usr/bin/env python3
"""Tests for input and option validators."""
import pytest

from pyextglob.core.constants import ErrorCode
from pyextglob.core.validators import (
    OptionsError,
    ValidationError,
    validate_max_steps,
    validate_options,
    validate_pattern,
    validate_subject,
)


class TestSubjectAndPattern:
    """Test subject and pattern validation."""

    @pytest.mark.parametrize("value", ["", "abc", "a/b\\c", "!(x)"])
    def test_strings_are_valid(self, value):
        """Any string is a valid subject and pattern."""
        assert validate_subject(value) is True
        assert validate_pattern(value) is True

    @pytest.mark.parametrize("value", [None, 1, b"abc", ["a"]])
    def test_subject_must_be_string(self, value):
        """Non-strings are rejected as subjects."""
        with pytest.raises(ValidationError) as exc_info:
            validate_subject(value)
        assert "Expected input to be a string" in str(exc_info.value)
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    @pytest.mark.parametrize("value", [None, 1.5, b"*"])
    def test_pattern_must_be_string(self, value):
        """Non-strings are rejected as patterns."""
        with pytest.raises(ValidationError, match="Expected pattern to be a string"):
            validate_pattern(value)

    def test_options_error_is_validation_error(self):
        """OptionsError is a ValidationError subclass."""
        assert issubclass(OptionsError, ValidationError)


class TestMaxSteps:
    """Test step budget validation."""

    @pytest.mark.parametrize("value", [None, 1, 10_000])
    def test_valid(self, value):
        """None and positive integers are valid."""
        assert validate_max_steps(value) is True

    @pytest.mark.parametrize("value", [0, -5, True, 2.5, "100"])
    def test_invalid(self, value):
        """Zero, negatives, booleans and non-integers are rejected."""
        with pytest.raises(OptionsError):
            validate_max_steps(value)


class TestValidateOptions:
    """Test option mapping validation."""

    def test_empty(self):
        """An empty mapping resolves to nothing."""
        assert validate_options({}) == {}

    def test_unknown_key(self):
        """Unknown keys are listed in the error."""
        with pytest.raises(OptionsError, match="Unknown option"):
            validate_options({"dot": True})

    def test_not_a_mapping(self):
        """A non-mapping is rejected."""
        with pytest.raises(OptionsError):
            validate_options([("bash", True)])

    def test_non_bool_flag(self):
        """Boolean options reject truthy non-bools."""
        with pytest.raises(OptionsError):
            validate_options({"bash": 1})

    @pytest.mark.parametrize("dialect,expected", [("bash", True), ("BASH", True), ("default", False)])
    def test_dialect(self, dialect, expected):
        """dialect resolves to the bash flag, case-insensitively."""
        assert validate_options({"dialect": dialect}) == {"bash": expected}

    def test_unknown_dialect(self):
        """Only default and bash dialects exist."""
        with pytest.raises(OptionsError):
            validate_options({"dialect": "zsh"})

    def test_nocase_folds(self):
        """nocase becomes the inverse case_sensitive."""
        assert validate_options({"nocase": True}) == {"case_sensitive": False}

    def test_unixify_folds(self):
        """unixify becomes normalize_separators."""
        assert validate_options({"unixify": True}) == {"normalize_separators": True}

    def test_agreeing_aliases(self):
        """Aliases that agree are accepted."""
        resolved = validate_options({"nocase": True, "case_sensitive": False})
        assert resolved == {"case_sensitive": False}

    @pytest.mark.parametrize(
        "options",
        [
            {"bash": False, "dialect": "bash"},
            {"nocase": True, "case_sensitive": True},
            {"unixify": False, "normalize_separators": True},
        ],
    )
    def test_conflicts(self, options):
        """Disagreeing aliases raise CONFLICT."""
        with pytest.raises(OptionsError) as exc_info:
            validate_options(options)
        assert exc_info.value.error_code == ErrorCode.CONFLICT
