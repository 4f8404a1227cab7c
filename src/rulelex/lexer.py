"""Definition-driven lexer.

Repeatedly matches the start of the remaining input against an ordered list
of definitions. The first definition whose validation rule accepts the
position wins; its match rule decides how much input is consumed.

Deep definitions re-tokenize their value into children. The nested call runs
with the same definitions minus the deep definition that started it, and a
recursion context records which (definition, value) pairs are in flight so
that a definition asked to recurse on a value it is already recursing on
raises InfiniteLoopError instead of recursing forever.

Processing pipeline per token (fixed order):
    definition.process -> per-call process -> lexer process

Thread Safety:
Lexer instances hold only immutable state. The recursion context is created
per ``tokenize`` call and passed down explicitly, so one lexer can serve
concurrent calls from many threads.

"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from rulelex.definitions import Definition
from rulelex.errors import (
    ConfigurationError,
    InfiniteLoopError,
    NoDefinitionMatchedError,
    NoValueMatchedError,
)
from rulelex.tokens import Token, TokenProcessor, identity
from rulelex.utils.logger import get_logger

logger = get_logger(__name__)


class RecursionFrame(NamedTuple):
    """A deep definition currently re-tokenizing ``value``."""

    definition: Definition
    value: str


class Lexer:
    """Tokenizer over an ordered list of definitions.

    Usage:
            >>> word = definition(type="word", regex="[^ ]+")
            >>> space = definition(type="space", regex="[ ]+", word_boundary=False, skip=True)
            >>> tokenize = Lexer([word, space])
            >>> tokenize("a b")
        [Token(word, 'a'), Token(word, 'b')]

    """

    __slots__ = ("_definitions", "_process")

    def __init__(
        self,
        definitions: Iterable[Definition],
        process: TokenProcessor | None = None,
    ) -> None:
        """Initialize lexer with its definitions.

        Args:
            definitions: Definitions in priority order (first match wins)
            process: Hook applied last to every token, nested ones included

        Raises:
            ConfigurationError: If no definitions are given or an entry is
                not a Definition
        """
        self._definitions: tuple[Definition, ...] = tuple(definitions)
        if not self._definitions:
            raise ConfigurationError("No definitions provided")
        for entry in self._definitions:
            if not isinstance(entry, Definition):
                raise ConfigurationError(f"Expected a Definition, got {type(entry).__name__}")
        if process is not None and not callable(process):
            raise ConfigurationError(f"Lexer process must be callable, got {process!r}")
        self._process: TokenProcessor = process or identity

        logger.debug(
            "Built lexer with %d definitions: %s",
            len(self._definitions),
            ", ".join(d.type for d in self._definitions),
        )

    @property
    def definitions(self) -> tuple[Definition, ...]:
        """Definitions in priority order."""
        return self._definitions

    def __call__(self, source: str, process: TokenProcessor | None = None) -> list[Token]:
        return self.tokenize(source, process)

    def tokenize(self, source: str, process: TokenProcessor | None = None) -> list[Token]:
        """Tokenize the whole source.

        Args:
            source: Input text
            process: Hook applied to top-level tokens, after the definition's
                own hook and before the lexer's hook

        Returns:
            Tokens in source order; deep tokens carry their children

        Raises:
            NoDefinitionMatchedError: No definition accepts the current position
            NoValueMatchedError: A definition accepted the position but its
                match rule consumed nothing
            InfiniteLoopError: A deep definition would recurse on a value it is
                already recursing on
        """
        return self._tokenize(source, process or identity, ())

    def _tokenize(
        self,
        source: str,
        process: TokenProcessor,
        frames: tuple[RecursionFrame, ...],
    ) -> list[Token]:
        excluded = frames[-1].definition if frames else None
        active = [d for d in self._definitions if d is not excluded]

        tokens: list[Token] = []
        pos = 0
        end = len(source)
        while pos < end:
            # Sliced so ^ and \b see the remaining text as the start of input
            remaining = source[pos:]

            definition = next((d for d in active if d.matches(remaining)), None)
            if definition is None:
                raise NoDefinitionMatchedError(remaining)

            match = definition.extract(remaining)
            if match is None or match.length == 0:
                raise NoValueMatchedError(remaining)
            pos += match.length

            value = match.value
            for frame in frames:
                if frame.definition is definition and frame.value == value:
                    chain = [f.definition.type for f in frames]
                    chain.append(definition.type)
                    logger.debug("Loop detected for %r: %s", value, " -> ".join(chain))
                    raise InfiniteLoopError(value, chain)

            if definition.skip:
                continue

            children: tuple[Token, ...] | None = None
            if definition.deep:
                logger.debug("Recursing into %r on %r (depth %d)", definition.type, value, len(frames) + 1)
                nested = frames + (RecursionFrame(definition, value),)
                children = tuple(self._tokenize(value, identity, nested))

            token = Token(type=definition.type, value=value, data=match.data, children=children)
            token = definition.process(token)
            token = process(token)
            token = self._process(token)
            tokens.append(token)

        return tokens

    def __repr__(self) -> str:
        return f"Lexer({', '.join(d.type for d in self._definitions)})"


def build_tokenizer(
    definitions: Iterable[Definition],
    process: TokenProcessor | None = None,
) -> Lexer:
    """Build a Lexer from definitions in priority order.

    Raises:
        ConfigurationError: If ``definitions`` is empty
    """
    return Lexer(definitions, process)


# Short name for build_tokenizer; not re-exported at package level, where
# ``rulelex.lexer`` is this module.
lexer = build_tokenizer


__all__ = ["Lexer", "RecursionFrame", "build_tokenizer", "lexer"]
