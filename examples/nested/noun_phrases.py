"""Build a small recursive grammar out of deep definitions.

Each deep definition re-tokenizes its own value, so "of A of B" becomes
a tree of prepositional phrases and noun phrases.

Run: python examples/nested/noun_phrases.py
"""

from rulelex import InfiniteLoopError, Token, build_tokenizer, definition

sprep = definition(type="sprep", regex="of (A|B|C)( of (A|B|C))*", deep=True)
sn = definition(type="sn", regex="(A|B|C)( of (A|B|C))*", deep=True)
prep = definition(type="prep", regex="of")
noun = definition(type="noun", regex="(A|B|C)")
space = definition(type="space", regex="[ ]+", word_boundary=False, skip=True)


def show(tokens: list[Token] | tuple[Token, ...], depth: int = 0) -> None:
    for token in tokens:
        print(f"{'  ' * depth}{token.type}: {token.value!r}")
        if token.children:
            show(token.children, depth + 1)


show(build_tokenizer([sprep, sn, prep, noun, space])("of A of B of C"))

# A deep noun re-enters sn on the same value: reported instead of recursing forever
noun_deep = definition(type="noun", regex="(A|B|C)", deep=True)
try:
    build_tokenizer([sprep, sn, prep, noun_deep, space])("of A of B of C")
except InfiniteLoopError as e:
    print(e)
