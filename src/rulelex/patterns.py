"""Pattern-text helpers used to compile definitions.

Every definition is compiled into a prefix matcher: the combined alternation
is wrapped, optionally guarded by word boundaries, and anchored with ``^``.
The helpers here work on pattern *text* so that one definition's pattern
can be embedded verbatim in another's.

Example:
    >>> escape_literal("a+b")
    'a\\\\+b'
    >>> build_pattern("(abc)").pattern
    '^(abc)'

"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TypeVar

from rulelex.errors import ConfigurationError

T = TypeVar("T")

PatternSource = str | re.Pattern[str]
"""A regex given either as text or as a compiled pattern."""

FlagsLike = str | int | None
"""Regex flags as a letter string (``"im"``), an ``re`` flag value, or None."""

# Whitespace and # are included so literals stay literal under re.VERBOSE
_ESCAPE_RE = re.compile(r"[\-\[\]/{}()*+?.\\^$|#\s]")

# ^ after any run of group openers: (, (?:, (?P<name>, (?<name>
_LEADING_ANCHOR_RE = re.compile(r"^(?:\((?:\?:|\?P?<[^>=!]+>)?)*\^")

_GROUP_NAME_RE = re.compile(r"\?P?<(?![=!])[^>]+>")

_FLAG_LETTERS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "a": re.ASCII,
    "u": re.UNICODE,
}

# Search modes that make no sense for a single anchored attempt
_STRIPPED_FLAG_LETTERS = frozenset("gyd")


def escape_literal(literal: str) -> str:
    """Escape regex metacharacters so the literal matches itself."""
    return _ESCAPE_RE.sub(lambda m: "\\" + m.group(0), literal)


def pattern_source(pattern: PatternSource) -> str:
    """Return the pattern text of a string or compiled pattern.

    Flags carried by a compiled pattern are not part of its text and are
    therefore dropped.

    Raises:
        ConfigurationError: If a bytes pattern is given
    """
    if isinstance(pattern, re.Pattern):
        if not isinstance(pattern.pattern, str):
            raise ConfigurationError(f"Only str patterns are supported, got {pattern.pattern!r}")
        return pattern.pattern
    return pattern


def as_list(value: T | Sequence[T]) -> list[T]:
    """Wrap a single value in a list; copy lists and tuples."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]  # type: ignore[list-item]


def check_prop(value: PatternSource | Sequence[PatternSource] | None) -> bool:
    """Check that an optional source property is usable.

    Returns True when the property is absent (None). Otherwise every entry
    must be non-empty and at least one entry must be present.
    """
    if value is None:
        return True
    values = as_list(value)
    if not values:
        return False
    for item in values:
        if isinstance(item, re.Pattern):
            if not item.pattern:
                return False
        elif not isinstance(item, str) or not item:
            return False
    return True


def strip_group_names(pattern: str) -> str:
    """Turn named groups into plain capturing groups.

    Lets a definition's pattern text be embedded several times in another
    pattern without redefining group names.

    Example:
        >>> strip_group_names("(?P<word>[a-z]+)")
        '([a-z]+)'
    """
    return _GROUP_NAME_RE.sub("", pattern)


def parse_flags(flags: FlagsLike) -> int:
    """Convert a flags description into an ``re`` flags value.

    Letters ``g``, ``y`` and ``d`` are accepted and discarded; matching is
    always a single anchored attempt.

    Raises:
        ConfigurationError: If a letter is unknown or the type is unsupported
    """
    if flags is None:
        return 0
    if isinstance(flags, bool):
        raise ConfigurationError(f"Invalid regex flags: {flags!r}")
    if isinstance(flags, int):
        return int(flags)
    if not isinstance(flags, str):
        raise ConfigurationError(f"Invalid regex flags: {flags!r}")

    result = 0
    for letter in flags:
        if letter in _STRIPPED_FLAG_LETTERS:
            continue
        flag = _FLAG_LETTERS.get(letter)
        if flag is None:
            raise ConfigurationError(f"Unknown regex flag {letter!r} in {flags!r}")
        result |= flag
    return result


def has_leading_anchor(pattern: str) -> bool:
    """Check whether the pattern starts with ``^``, possibly inside groups."""
    return _LEADING_ANCHOR_RE.match(pattern) is not None


def build_pattern(pattern: str, flags: FlagsLike = None) -> re.Pattern[str]:
    """Compile pattern text as a prefix matcher anchored with ``^``.

    Args:
        pattern: Pattern text, without a leading anchor
        flags: Flags for the compiled pattern

    Returns:
        Compiled pattern

    Raises:
        ConfigurationError: If the text already starts with an anchor or
            does not compile
    """
    if has_leading_anchor(pattern):
        raise ConfigurationError(f'Regex cannot start with ^: "{pattern}"')
    try:
        return re.compile("^" + pattern, parse_flags(flags))
    except re.error as e:
        raise ConfigurationError(f'Invalid regex "{pattern}": {e}') from e


__all__ = [
    "FlagsLike",
    "PatternSource",
    "as_list",
    "build_pattern",
    "check_prop",
    "escape_literal",
    "has_leading_anchor",
    "parse_flags",
    "pattern_source",
    "strip_group_names",
]
