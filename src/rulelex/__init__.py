"""
Rulelex — Definition-Driven Tokenizer for Python

Turns an ordered list of pattern definitions and an input string into a
token list. The first definition that accepts a position wins; deep
definitions re-tokenize their value into child tokens.

Quick Start:
    >>> from rulelex import build_tokenizer, definition
    >>> word = definition(type="word", regex="[^ ]+")
    >>> space = definition(type="space", regex="[ ]+", word_boundary=False, skip=True)
    >>> tokenize = build_tokenizer([word, space])
    >>> tokenize("hello world")
    [Token(word, 'hello'), Token(word, 'world')]

Nested Definitions:
    >>> hello = definition(type="hello", literal="hello")
    >>> world = definition(type="world", literal="world")
    >>> space = definition(type="space", literal=" ", word_boundary=False)
    >>> greeting = definition(type="greeting", regex=f"{hello} {world}", deep=True)
    >>> tokenize = build_tokenizer([greeting, hello, world, space])
    >>> tokenize("hello world")[0].children
    (Token(hello, 'hello'), Token(space, ' '), Token(world, 'world'))

Installation:
    pip install rulelex
"""

from rulelex.config import (
    LexerConfig,
    get_lexer_config,
    lexer_config_context,
    reset_lexer_config,
    set_lexer_config,
)
from rulelex.definitions import (
    Definition,
    DefinitionSpec,
    ExtractedMatch,
    SourceKind,
    compile_definition,
    definition,
)
from rulelex.errors import (
    ConfigurationError,
    InfiniteLoopError,
    NoDefinitionMatchedError,
    NoValueMatchedError,
    RulelexError,
    TokenizeError,
)
from rulelex.lexer import Lexer, build_tokenizer
from rulelex.patterns import escape_literal, strip_group_names
from rulelex.serialization import from_dict, from_json, to_dict, to_json
from rulelex.tokens import Token, TokenProcessor, flatten

__version__ = "0.1.0"


def tokenize(
    source: str,
    definitions: list[Definition],
    process: TokenProcessor | None = None,
) -> list[Token]:
    """Tokenize source with a one-off lexer.

    Args:
        source: Input text
        definitions: Definitions in priority order
        process: Hook applied to every top-level token

    Returns:
        Tokens in source order

    Example:
        >>> tokenize("a", [definition(type="letter", regex="[a-z]")])
        [Token(letter, 'a')]
    """
    return Lexer(definitions).tokenize(source, process)


__all__ = [
    "ConfigurationError",
    "Definition",
    "DefinitionSpec",
    "ExtractedMatch",
    "InfiniteLoopError",
    "Lexer",
    "LexerConfig",
    "NoDefinitionMatchedError",
    "NoValueMatchedError",
    "RulelexError",
    "SourceKind",
    "Token",
    "TokenProcessor",
    "TokenizeError",
    "__version__",
    "build_tokenizer",
    "compile_definition",
    "definition",
    "escape_literal",
    "flatten",
    "from_dict",
    "from_json",
    "get_lexer_config",
    "lexer_config_context",
    "reset_lexer_config",
    "set_lexer_config",
    "strip_group_names",
    "to_dict",
    "to_json",
    "tokenize",
]
