"""Pattern definitions: compiled matching rules plus behavior flags.

A ``DefinitionSpec`` is the configuration boundary: it names exactly one
matching source (``literal`` or ``regex``, each a single value or a list)
together with optional validation rules and flags. ``compile_definition``
turns it into an immutable ``Definition`` that the lexer drives.

Pattern text produced for a definition:

    literal/regex alternatives a, b, c
        -> (\\b(a|b|c)\\b)      word boundary enabled (default)
        -> (a|b|c)             word boundary disabled

The compiled match rule is ``^`` followed by that text. ``str(definition)``
returns the text without the anchor, so it can be embedded in another
definition's regex:

    >>> hello = definition(type="hello", literal="hello")
    >>> world = definition(type="world", literal="world")
    >>> greeting = definition(type="greeting", regex=f"{hello} {world}", deep=True)

Thread Safety:
Definition is a frozen dataclass holding compiled patterns. Safe to share
across threads and across any number of lexers.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, NamedTuple

from rulelex.config import get_lexer_config
from rulelex.errors import ConfigurationError
from rulelex.patterns import (
    FlagsLike,
    PatternSource,
    as_list,
    build_pattern,
    check_prop,
    escape_literal,
    has_leading_anchor,
    pattern_source,
)
from rulelex.tokens import TokenProcessor, identity
from rulelex.utils.logger import get_logger

logger = get_logger(__name__)

VALUE_GROUP = "value"
"""Named group whose capture replaces the whole match as the token value."""


class SourceKind(Enum):
    """Which matching source a DefinitionSpec supplies."""

    LITERAL = auto()  # "if"
    LITERALS = auto()  # ["if", "else"]
    PATTERN = auto()  # "[a-z]+"
    PATTERNS = auto()  # ["[a-z]+", re.compile("[0-9]+")]


@dataclass(frozen=True, slots=True)
class DefinitionSpec:
    """Uncompiled description of a definition.

    Attributes:
        type: Token type label (non-empty, need not be unique)
        literal: Literal text, or list of literal texts, escaped automatically
        regex: Pattern, or list of patterns, used as given
        regex_flags: Flags for the match rule (None = config default)
        valid: Replacement pattern for the eligibility test only
        valid_flags: Flags for the validation rule (None = regex_flags)
        next_valid: Pattern that must follow the match for it to be eligible
        word_boundary: Guard the match with word boundaries (None = config default)
        deep: Re-tokenize the matched value into children
        skip: Consume the match without emitting a token
        process: Hook applied to each token this definition produces

    """

    type: str
    literal: str | Sequence[str] | None = None
    regex: PatternSource | Sequence[PatternSource] | None = None
    regex_flags: FlagsLike = None
    valid: PatternSource | None = None
    valid_flags: FlagsLike = None
    next_valid: PatternSource | None = None
    word_boundary: bool | None = None
    deep: bool = False
    skip: bool = False
    process: TokenProcessor | None = None

    @classmethod
    def from_dict(cls, spec_dict: Mapping[str, Any]) -> DefinitionSpec:
        """Create DefinitionSpec from a mapping.

        Keys must be DefinitionSpec field names.

        Raises:
            ConfigurationError: If ``type`` is missing or a key is unknown
        """
        if "type" not in spec_dict:
            raise ConfigurationError("Definition must define a type")
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        unknown = sorted(str(k) for k in spec_dict if k not in valid_fields)
        if unknown:
            raise ConfigurationError(f"Unknown definition keys: {', '.join(unknown)}")
        return cls(**spec_dict)

    def source(self) -> tuple[SourceKind, list[str]]:
        """Classify the matching source and return its regex alternatives.

        Literals come back escaped; patterns come back as their text.

        Raises:
            ConfigurationError: If zero or both sources are given, or the
                given source is empty
        """
        if self.literal is None and self.regex is None:
            raise ConfigurationError("Definition must define regex or literal")
        if self.literal is not None and self.regex is not None:
            raise ConfigurationError("Can only define one of regex or literal")

        if self.literal is not None:
            if not check_prop(self.literal):
                raise ConfigurationError("Definition literal cannot be empty")
            if not all(isinstance(value, str) for value in as_list(self.literal)):
                raise ConfigurationError("Definition literal must be text, use regex for patterns")
            if isinstance(self.literal, (list, tuple)):
                return SourceKind.LITERALS, [escape_literal(value) for value in self.literal]
            return SourceKind.LITERAL, [escape_literal(self.literal)]

        if not check_prop(self.regex):
            raise ConfigurationError("Definition regex cannot be empty")
        if isinstance(self.regex, (list, tuple)):
            return SourceKind.PATTERNS, [pattern_source(regex) for regex in self.regex]
        return SourceKind.PATTERN, [pattern_source(self.regex)]  # type: ignore[arg-type]


class ExtractedMatch(NamedTuple):
    """Result of a successful match rule attempt."""

    length: int
    value: str
    data: dict[str, str]


@dataclass(frozen=True, slots=True, eq=False)
class Definition:
    """A compiled definition.

    Identity matters: the lexer tells definitions apart by object identity,
    so two definitions with the same type and pattern stay distinct.

    Attributes:
        type: Token type label
        pattern: Match pattern text, unanchored (see ``to_display_string``)
        valid_pattern: Validation pattern text, unanchored
        match_rule: Anchored rule used to extract the token
        validation_rule: Anchored rule used to decide eligibility
        word_boundary: Whether the pattern is guarded by word boundaries
        deep: Re-tokenize the value into children
        skip: Consume without emitting
        process: Hook applied to produced tokens

    """

    type: str
    pattern: str
    valid_pattern: str
    match_rule: re.Pattern[str]
    validation_rule: re.Pattern[str]
    word_boundary: bool = True
    deep: bool = False
    skip: bool = False
    process: TokenProcessor = identity

    def matches(self, remaining: str) -> bool:
        """Check whether the validation rule accepts the start of ``remaining``."""
        return self.validation_rule.match(remaining) is not None

    def extract(self, remaining: str) -> ExtractedMatch | None:
        """Apply the match rule at the start of ``remaining``.

        Returns None when the match rule fails. That can happen after
        ``matches`` succeeded if ``valid``/``next_valid`` differ from the
        match rule.
        """
        match = self.match_rule.match(remaining)
        if match is None:
            return None

        data = {name: text for name, text in match.groupdict().items() if text is not None}
        value = data.pop(VALUE_GROUP, None)
        if value is None:
            value = match.group(0)
        return ExtractedMatch(match.end(), value, data)

    def to_display_string(self) -> str:
        """Return the match pattern text, for embedding in other patterns."""
        return self.pattern

    def __str__(self) -> str:
        return self.pattern

    def __repr__(self) -> str:
        flags = [name for name in ("deep", "skip") if getattr(self, name)]
        suffix = f", {', '.join(flags)}" if flags else ""
        return f"Definition({self.type!r}, {self.pattern!r}{suffix})"


def compile_definition(
    spec: DefinitionSpec | Mapping[str, Any] | Callable[[], DefinitionSpec | Mapping[str, Any]],
) -> Definition:
    """Compile a definition spec into a Definition.

    Args:
        spec: A DefinitionSpec, a mapping of its fields, or a zero-argument
            callable returning either

    Returns:
        Compiled, immutable Definition

    Raises:
        ConfigurationError: If the definition is malformed

    """
    if callable(spec) and not isinstance(spec, (DefinitionSpec, Mapping)):
        spec = spec()
    if isinstance(spec, Mapping):
        spec = DefinitionSpec.from_dict(spec)
    if not isinstance(spec, DefinitionSpec):
        raise ConfigurationError(f"Expected a definition spec, got {type(spec).__name__}")

    if not isinstance(spec.type, str) or not spec.type:
        raise ConfigurationError("Definition type cannot be empty")
    if spec.valid is not None and spec.next_valid is not None:
        raise ConfigurationError("Can only define one of valid or next_valid")
    for name in ("valid", "next_valid"):
        value = getattr(spec, name)
        if value is None:
            continue
        if not isinstance(value, (str, re.Pattern)):
            raise ConfigurationError(f"Definition {name} must be a single pattern, got {value!r}")
        if not check_prop(value):
            raise ConfigurationError(f"Definition {name} cannot be empty")
    if spec.process is not None and not callable(spec.process):
        raise ConfigurationError(f"Definition process must be callable, got {spec.process!r}")

    kind, alternatives = spec.source()
    if kind in (SourceKind.PATTERN, SourceKind.PATTERNS):
        for alternative in alternatives:
            if has_leading_anchor(alternative):
                raise ConfigurationError(f'Regex cannot start with ^: "{alternative}"')

    config = get_lexer_config()
    word_boundary = config.word_boundary if spec.word_boundary is None else spec.word_boundary
    regex_flags = config.regex_flags if spec.regex_flags is None else spec.regex_flags
    valid_flags = regex_flags if spec.valid_flags is None else spec.valid_flags

    alternation = "|".join(alternatives)
    pattern = rf"(\b({alternation})\b)" if word_boundary else f"({alternation})"

    if spec.valid is not None:
        valid_pattern = pattern_source(spec.valid)
    elif spec.next_valid is not None:
        valid_pattern = pattern + pattern_source(spec.next_valid)
    else:
        valid_pattern = pattern

    compiled = Definition(
        type=spec.type,
        pattern=pattern,
        valid_pattern=valid_pattern,
        match_rule=build_pattern(pattern, regex_flags),
        validation_rule=build_pattern(valid_pattern, valid_flags),
        word_boundary=word_boundary,
        deep=spec.deep,
        skip=spec.skip,
        process=spec.process or identity,
    )
    logger.debug("Compiled %s definition %r: %s", kind.name.lower(), spec.type, pattern)
    return compiled


def definition(
    spec: DefinitionSpec | Mapping[str, Any] | Callable[[], Any] | None = None,
    /,
    **fields: Any,
) -> Definition:
    """Compile a definition from a spec or from keyword fields.

    Example:
        >>> word = definition(type="word", regex="[a-z]+")
        >>> space = definition(type="space", regex="[ ]+", word_boundary=False, skip=True)

    Raises:
        ConfigurationError: If the definition is malformed
        TypeError: If both a spec and keyword fields are given, or a keyword
            is not a DefinitionSpec field
    """
    if spec is not None:
        if fields:
            raise TypeError("definition() takes a spec or keyword fields, not both")
        return compile_definition(spec)
    return compile_definition(DefinitionSpec(**fields))


__all__ = [
    "VALUE_GROUP",
    "Definition",
    "DefinitionSpec",
    "ExtractedMatch",
    "SourceKind",
    "compile_definition",
    "definition",
]
