"""
Unit tests for pattern compilation in linepick.matching.patterns.

Tests cover:
- Match / ignore / skip-path compilation
- Invalid expressions raising ValueError
- Matching raw bytes with str and bytes patterns
- Default Korean pattern
"""

import re

import pytest

from linepick.matching import (
    KOREAN_PATTERN,
    NON_ASCII_PATTERN,
    compile_ignore_pattern,
    compile_match_pattern,
    compile_skip_paths,
    line_matches,
)


@pytest.mark.unit
class TestCompilePatterns:
    """Compilation and validation."""

    def test_match_pattern(self):
        pattern = compile_match_pattern(NON_ASCII_PATTERN)
        assert pattern.pattern == NON_ASCII_PATTERN

    def test_empty_match_pattern_rejected(self):
        with pytest.raises(ValueError, match="must not be empty"):
            compile_match_pattern("")

    def test_invalid_match_pattern(self):
        with pytest.raises(ValueError, match="Invalid match pattern"):
            compile_match_pattern("[unclosed")

    def test_empty_ignore_is_none(self):
        assert compile_ignore_pattern("") is None
        assert compile_ignore_pattern(None) is None

    def test_invalid_ignore_pattern(self):
        with pytest.raises(ValueError, match="Invalid ignore pattern"):
            compile_ignore_pattern("(")

    def test_skip_paths_joined_with_alternation(self):
        pattern = compile_skip_paths("vendor/, node_modules/ ,,")
        assert pattern.pattern == "vendor/|node_modules/"

    def test_skip_paths_custom_separator(self):
        pattern = compile_skip_paths("a;b", separator=";")
        assert pattern.pattern == "a|b"

    @pytest.mark.parametrize("value", ["", None, " , ,"])
    def test_empty_skip_paths_is_none(self, value):
        assert compile_skip_paths(value) is None

    def test_invalid_skip_path(self):
        with pytest.raises(ValueError, match="Invalid skip path pattern"):
            compile_skip_paths("ok,[bad")


@pytest.mark.unit
class TestLineMatches:
    """Matching raw line bytes."""

    def test_non_ascii(self):
        pattern = compile_match_pattern(NON_ASCII_PATTERN)

        assert line_matches(pattern, "αβγ".encode("utf-8"))
        assert not line_matches(pattern, b"hello")

    def test_korean_default(self):
        pattern = compile_match_pattern(KOREAN_PATTERN)

        assert line_matches(pattern, "// 안녕하세요".encode("utf-8"))
        assert line_matches(pattern, "ㄱㄴㄷ".encode("utf-8"))
        assert not line_matches(pattern, "日本語".encode("utf-8"))
        assert not line_matches(pattern, b"plain ascii")

    def test_invalid_utf8_does_not_raise(self):
        pattern = compile_match_pattern("abc")
        assert line_matches(pattern, b"\xff\xfeabc")

    def test_bytes_pattern(self):
        pattern = re.compile(rb"^\xef\xbb\xbf")
        assert line_matches(pattern, b"\xef\xbb\xbfpackage main")
        assert not line_matches(pattern, b"package main")

    def test_search_not_anchored_match(self):
        pattern = compile_ignore_pattern("//")
        assert line_matches(pattern, b"x := 1 // note")
