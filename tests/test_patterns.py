"""Tests for rulelex.patterns — pattern-text helpers."""

import re

import pytest

from rulelex.errors import ConfigurationError
from rulelex.patterns import (
    as_list,
    build_pattern,
    check_prop,
    escape_literal,
    has_leading_anchor,
    parse_flags,
    pattern_source,
    strip_group_names,
)


class TestCheckProp:
    """Source properties must be absent or non-empty throughout."""

    def test_absent_is_valid(self) -> None:
        assert check_prop(None) is True

    def test_strings(self) -> None:
        assert check_prop("") is False
        assert check_prop("string") is True

    def test_compiled_patterns(self) -> None:
        assert check_prop(re.compile("")) is False
        assert check_prop(re.compile(".*")) is True

    def test_lists(self) -> None:
        assert check_prop([]) is False
        assert check_prop([""]) is False
        assert check_prop(["string"]) is True
        assert check_prop(["string", ""]) is False
        assert check_prop([re.compile("")]) is False
        assert check_prop([re.compile(".*")]) is True


class TestPatternSource:
    def test_text_is_returned_as_is(self) -> None:
        assert pattern_source("string") == "string"
        assert pattern_source(".*") == ".*"
        assert pattern_source("(?P<value>.*)") == "(?P<value>.*)"

    def test_compiled_pattern_gives_its_text(self) -> None:
        assert pattern_source(re.compile(".*")) == ".*"
        assert pattern_source(re.compile("(?P<value>.*)", re.IGNORECASE)) == "(?P<value>.*)"

    def test_bytes_pattern_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            pattern_source(re.compile(b"abc"))


class TestBuildPattern:
    """build_pattern anchors the text and strips search-mode flags."""

    def test_anchors_text(self) -> None:
        assert build_pattern("string").pattern == "^string"
        assert build_pattern(".*").pattern == "^.*"
        assert build_pattern("(?P<value>.*)").pattern == "^(?P<value>.*)"

    def test_applies_flags(self) -> None:
        assert build_pattern("string", "i").flags & re.IGNORECASE
        assert build_pattern("string", re.MULTILINE).flags & re.MULTILINE

    def test_global_flag_is_dropped(self) -> None:
        assert build_pattern(".*", "g").flags == build_pattern(".*").flags
        assert build_pattern(".*", "gi").flags == build_pattern(".*", "i").flags

    @pytest.mark.parametrize("pattern", ["^a", "(^a)", "((^a))", "(?:^a)", "((?P<x>^a))"])
    def test_rejects_leading_anchor(self, pattern: str) -> None:
        with pytest.raises(ConfigurationError, match="cannot start with"):
            build_pattern(pattern)

    def test_rejects_invalid_regex(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid regex"):
            build_pattern("(abc")

    def test_is_prefix_matcher(self) -> None:
        compiled = build_pattern("b")
        assert compiled.match("bc") is not None
        assert compiled.match("abc") is None


class TestLeadingAnchor:
    def test_anchor_later_in_pattern_is_allowed(self) -> None:
        assert has_leading_anchor("a^") is False
        assert has_leading_anchor("[^ ]+") is False
        assert has_leading_anchor("(?<=x)a") is False


class TestParseFlags:
    def test_letters(self) -> None:
        assert parse_flags("i") == re.IGNORECASE
        assert parse_flags("ms") == re.MULTILINE | re.DOTALL

    def test_search_modes_are_stripped(self) -> None:
        assert parse_flags("g") == 0
        assert parse_flags("gyd") == 0
        assert parse_flags("gi") == re.IGNORECASE

    def test_empty_values(self) -> None:
        assert parse_flags(None) == 0
        assert parse_flags("") == 0

    def test_re_flags_pass_through(self) -> None:
        assert parse_flags(re.IGNORECASE | re.VERBOSE) == re.IGNORECASE | re.VERBOSE

    def test_unknown_letter(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown regex flag"):
            parse_flags("iq")

    def test_wrong_type(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_flags(True)  # type: ignore[arg-type]
        with pytest.raises(ConfigurationError):
            parse_flags(["i"])  # type: ignore[arg-type]


class TestEscapeLiteral:
    def test_plain_text_unchanged(self) -> None:
        assert escape_literal("string") == "string"

    def test_metacharacters(self) -> None:
        raw = "-[]/{}()*+?.\\^$|"
        assert escape_literal(raw) == r"\-\[\]\/\{\}\(\)\*\+\?\.\\\^\$\|"
        assert re.fullmatch(escape_literal(raw), raw) is not None

    def test_verbose_sensitive_characters(self) -> None:
        raw = "a b\t# c"
        assert escape_literal(raw) == "a\\ b\\\t\\#\\ c"
        assert re.fullmatch(escape_literal(raw), raw, re.VERBOSE) is not None


class TestAsList:
    def test_wraps_single_values(self) -> None:
        assert as_list("value") == ["value"]
        pattern = re.compile("regex")
        assert as_list(pattern) == [pattern]

    def test_lists_are_copied(self) -> None:
        values = ["value"]
        result = as_list(values)
        assert result == ["value"]
        assert result is not values
        assert as_list([]) == []
        assert as_list(("a", "b")) == ["a", "b"]


class TestStripGroupNames:
    def test_named_groups_become_plain_groups(self) -> None:
        assert strip_group_names("(?P<a>x)(?P<b>y)") == "(x)(y)"
        assert strip_group_names("(?<a>x)") == "(x)"

    def test_lookbehind_untouched(self) -> None:
        assert strip_group_names("(?<=a)b") == "(?<=a)b"
        assert strip_group_names("(?<!a)b") == "(?<!a)b"

    def test_embedding_twice(self) -> None:
        word = "(?P<word>[a-z]+)"
        pair = re.compile(f"{strip_group_names(word)} {strip_group_names(word)}")
        assert pair.fullmatch("ab cd") is not None
