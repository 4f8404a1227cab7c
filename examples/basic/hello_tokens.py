"""Tokenize a short sentence with word, number and space definitions.

Run: python examples/basic/hello_tokens.py
"""

from rulelex import build_tokenizer, definition, to_json

word = definition(type="word", regex="[A-Za-z]+")
number = definition(type="number", regex=r"(?P<sign>-)?(?P<value>[0-9]+)", word_boundary=False)
punct = definition(type="punct", literal=[",", ".", "!"], word_boundary=False)
space = definition(type="space", regex=r"\s+", word_boundary=False, skip=True)

tokenize = build_tokenizer([word, number, punct, space])

for token in tokenize("Hello, world! It is -3 degrees."):
    print(token)

print(to_json(tokenize("Hello 42"), indent=2))
