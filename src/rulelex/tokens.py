"""Token definition for the Rulelex engine.

The lexer produces a list of Token objects. Each Token carries the type of
the definition that matched, the matched value, any named captures, and,
for deep definitions, the tokens produced by re-tokenizing its value.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
Processors build new tokens with ``dataclasses.replace`` instead of mutating.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: Type label copied from the matching definition
        value: Matched text, or the ``value`` capture group when the pattern has one
        data: Named captures other than ``value`` (empty when there are none)
        children: Tokens of the re-tokenized value; None unless the definition is deep

    """

    type: str
    value: str
    data: dict[str, str] = field(default_factory=dict)
    children: tuple[Token, ...] | None = None

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        parts = [self.type, repr(val)]
        if self.data:
            parts.append(f"data={self.data!r}")
        if self.children is not None:
            parts.append(f"children={len(self.children)}")
        return f"Token({', '.join(parts)})"


TokenProcessor = Callable[[Token], Token]
"""A hook receiving a token and returning the (possibly new) token."""


def identity(token: Token) -> Token:
    """Default processor: returns the token unchanged."""
    return token


def flatten(tokens: Iterable[Token]) -> Iterator[Token]:
    """Yield the leaf tokens of a token tree in source order.

    A deep token is replaced by its children, since the children account
    for the same characters as the parent's value.

    Args:
        tokens: Top-level tokens as returned by ``Lexer.tokenize``

    Yields:
        Tokens without children
    """
    for token in tokens:
        if token.children is None:
            yield token
        else:
            yield from flatten(token.children)


__all__ = ["Token", "TokenProcessor", "flatten", "identity"]
