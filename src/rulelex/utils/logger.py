"""Logger lookup for Rulelex modules.

Every module logs under the ``rulelex`` namespace so applications can turn
on lexer tracing with a single ``logging.getLogger("rulelex")`` handler.
Nothing is emitted above DEBUG: compilation, lexer construction, recursion
into deep definitions and loop detection.

Example:
    >>> import logging
    >>> logging.basicConfig(level=logging.DEBUG)
    >>> from rulelex import definition
    >>> definition(type="word", regex="[a-z]+")  # logs "Compiled pattern definition 'word': ..."
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the ``rulelex`` namespace.

    Names already under ``rulelex`` (module ``__name__`` values) are used
    as-is; anything else is nested beneath it.

    Example:
        >>> get_logger("rulelex.lexer").name
        'rulelex.lexer'
        >>> get_logger("grammar").name
        'rulelex.grammar'
    """
    if name != "rulelex" and not name.startswith("rulelex."):
        name = f"rulelex.{name}"
    return logging.getLogger(name)
