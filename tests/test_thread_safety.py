"""Thread safety tests for shared lexers.

A Lexer keeps its recursion context per call, so one instance can serve
concurrent tokenize calls. These tests use real threading to catch
interference between calls.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from rulelex import InfiniteLoopError, build_tokenizer, definition

SPREP = definition(type="sprep", regex="of (A|B|C)( of (A|B|C))*", deep=True)
SN = definition(type="sn", regex="(A|B|C)( of (A|B|C))*", deep=True)
PREP = definition(type="prep", regex="of")
NOUN = definition(type="noun", regex="(A|B|C)")
SPACE = definition(type="space", regex="[ ]+", word_boundary=False, skip=True)

INPUTS = ["of A of B of C", "of C", "A of B", "A", "of B of A of C of B"]


class TestSharedLexer:
    def test_concurrent_calls_match_sequential(self) -> None:
        lexer = build_tokenizer([SPREP, SN, PREP, NOUN, SPACE])
        expected = {source: lexer(source) for source in INPUTS}

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [(source, executor.submit(lexer, source)) for source in INPUTS * 40]
            for source, future in futures:
                assert future.result() == expected[source]

    def test_loop_errors_do_not_leak_between_calls(self) -> None:
        """Definitions shared by a looping lexer and a working one stay independent."""
        token1 = definition(type="token1", regex="mock", deep=True)
        token2 = definition(type="token2", regex="mock", deep=True)
        token3 = definition(type="token3", regex="mock")
        looping = build_tokenizer([token1, token2])
        working = build_tokenizer([token1, token3])
        expected = working("mock")

        def run(i: int) -> object:
            if i % 2:
                with pytest.raises(InfiniteLoopError):
                    looping("mock")
                return None
            return working("mock")

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(run, range(200)))

        assert all(result == expected for result in results[::2])
