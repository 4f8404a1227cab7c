"""Token serialization — JSON round-trip for Rulelex tokens.

Converts tokens to/from JSON-compatible dicts shaped like::

    {"type": "word", "value": "hello"}
    {"type": "group", "value": "quick fox", "data": {...}, "children": [...]}

``data`` is omitted when empty and ``children`` when the token is not deep.
All JSON output is deterministic (sorted keys).

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Iterable
from typing import Any

from rulelex.tokens import Token


def to_dict(token: Token) -> dict[str, Any]:
    """Convert a token (and its children) to a JSON-compatible dict."""
    result: dict[str, Any] = {"type": token.type, "value": token.value}
    if token.data:
        result["data"] = dict(token.data)
    if token.children is not None:
        result["children"] = [to_dict(child) for child in token.children]
    return result


def from_dict(data: dict[str, Any]) -> Token:
    """Reconstruct a token from a dict produced by ``to_dict``.

    Raises:
        ValueError: If ``type`` or ``value`` is missing or not a string

    """
    for key in ("type", "value"):
        if not isinstance(data.get(key), str):
            msg = f"Serialized token needs a string {key!r} field: {data!r}"
            raise ValueError(msg)

    children = data.get("children")
    return Token(
        type=data["type"],
        value=data["value"],
        data=dict(data.get("data") or {}),
        children=None if children is None else tuple(from_dict(child) for child in children),
    )


def to_json(tokens: Iterable[Token], *, indent: int | None = None) -> str:
    """Serialize a token list to a JSON string.

    Args:
        tokens: Tokens as returned by ``Lexer.tokenize``
        indent: JSON indentation level (None for compact)

    """
    return json.dumps([to_dict(token) for token in tokens], sort_keys=True, indent=indent)


def from_json(data: str) -> list[Token]:
    """Deserialize a token list from a JSON string.

    Raises:
        ValueError: If the JSON is not a list of serialized tokens

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a list of tokens, got {type(raw).__name__}"
        raise ValueError(msg)
    return [from_dict(item) for item in raw]


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
