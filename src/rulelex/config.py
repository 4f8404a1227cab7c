"""ContextVar-based definition defaults for Rulelex.

Provides context-local defaults applied while compiling definitions.
A field left as None on a ``DefinitionSpec`` falls back to the active
``LexerConfig``.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from rulelex import definition
    from rulelex.config import LexerConfig, lexer_config_context

    with lexer_config_context(LexerConfig(word_boundary=False)):
        char = definition(type="char", regex=".")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from rulelex.patterns import FlagsLike


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Immutable definition defaults.

    Attributes:
        word_boundary: Wrap match rules in word boundaries unless a definition
            says otherwise
        regex_flags: Flags for match rules of definitions that give none

    """

    word_boundary: bool = True
    regex_flags: FlagsLike = ""

    @classmethod
    def from_dict(cls, config_dict: dict) -> "LexerConfig":
        """Create LexerConfig from dictionary.

        Only includes keys that are valid LexerConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                LexerConfig attribute names.

        Returns:
            New LexerConfig instance with values from dict.

        Example:
            >>> config = LexerConfig.from_dict({"word_boundary": False, "other": 1})
            >>> config.word_boundary
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: LexerConfig = LexerConfig()

_lexer_config: ContextVar[LexerConfig] = ContextVar(
    "lexer_config",
    default=_DEFAULT_CONFIG,
)


def get_lexer_config() -> LexerConfig:
    """Get the active configuration for this thread/context."""
    return _lexer_config.get()


def set_lexer_config(config: LexerConfig) -> None:
    """Set the configuration for the current context.

    Args:
        config: LexerConfig instance to use for this context.

    """
    _lexer_config.set(config)


def reset_lexer_config() -> None:
    """Reset to the default configuration."""
    _lexer_config.set(_DEFAULT_CONFIG)


@contextmanager
def lexer_config_context(config: LexerConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: LexerConfig to use within the context.

    Yields:
        None

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _lexer_config.get()
    _lexer_config.set(config)
    try:
        yield
    finally:
        _lexer_config.set(previous)


__all__ = [
    "LexerConfig",
    "get_lexer_config",
    "set_lexer_config",
    "reset_lexer_config",
    "lexer_config_context",
]
