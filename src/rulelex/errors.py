"""Exception classes for Rulelex.

Provides the error taxonomy used by definition compilation and tokenization.
Nothing inside the library catches these; every error aborts the current call.
"""

from __future__ import annotations

from collections.abc import Iterable


class RulelexError(Exception):
    """Base exception for all Rulelex errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigurationError(RulelexError):
    """Malformed definition or lexer configuration.

    Raised at build time, never while tokenizing.
    """

    pass


class TokenizeError(RulelexError):
    """Base class for failures raised by ``Lexer.tokenize``.

    No partial token list is returned when one of these is raised.
    """

    pass


class NoDefinitionMatchedError(TokenizeError):
    """No active definition validates at the current position."""

    def __init__(self, remaining: str) -> None:
        """Initialize with the unconsumed input.

        Args:
            remaining: Input text left at the failing position
        """
        self.remaining = remaining
        super().__init__(f'No definition matched for "{remaining}"')


class NoValueMatchedError(TokenizeError):
    """A definition validated but its match rule extracted nothing.

    Indicates that ``valid``/``next_valid`` accepts text the match rule
    cannot consume, or that the match rule consumed zero characters.
    """

    def __init__(self, remaining: str) -> None:
        """Initialize with the unconsumed input.

        Args:
            remaining: Input text left at the failing position
        """
        self.remaining = remaining
        super().__init__(f'No value matched for "{remaining}"')


class InfiniteLoopError(TokenizeError):
    """A deep definition was asked to recurse on a value it is already recursing on."""

    def __init__(self, value: str, chain: Iterable[str]) -> None:
        """Initialize loop error.

        Args:
            value: The value that would be re-tokenized forever
            chain: Definition types on the recursion stack (oldest first),
                followed by the offending type
        """
        self.value = value
        self.chain = tuple(chain)
        super().__init__(f'Infinite loop detected for "{value}": {" -> ".join(self.chain)}')
