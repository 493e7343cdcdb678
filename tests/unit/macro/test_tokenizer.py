"""
yx-cli - unit tests for the alias expansion tokenizer

File: tests/unit/macro/test_tokenizer.py

Purpose
- Pin down quoting, escaping, and failure behavior of ``tokenize``.
- Property: ``join_tokens`` output always re-tokenizes to the same list.
"""

from __future__ import annotations

import sys

import pytest
from hypothesis import given
from hypothesis import strategies as st

from yxcli.macro import MalformedExpansionError, join_tokens, tokenize

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("expansion", "expected"),
    [
        ("pr checkout", ["pr", "checkout"]),
        ("  pr\tcheckout \n --draft ", ["pr", "checkout", "--draft"]),
        ("a 'b c' d", ["a", "b c", "d"]),
        ('a "b\\"c"', ["a", 'b"c']),
        ('"x\\\\y"', ["x\\y"]),
        ("'a\\b'", ["a\\b"]),
        ('"a\\nb"', ["a\\nb"]),
        ("a\\ b", ["a b"]),
        ("pre'quoted part'post", ["prequoted partpost"]),
        ("issue list --search 'needs triage'", ["issue", "list", "--search", "needs triage"]),
    ],
)
def test_tokenize_quoting_rules(expansion: str, expected: list[str]) -> None:
    assert tokenize(expansion) == expected


@pytest.mark.parametrize(
    "blank", ["", "   \t ", "\x0b", "\x0c", "\r\n", "\xa0", "\u2003\u3000", " \x85 "]
)
def test_tokenize_whitespace_only_input_yields_no_tokens(blank: str) -> None:
    assert tokenize(blank) == []


@pytest.mark.parametrize(
    ("expansion", "expected"),
    [
        ("a\x0bb\x0cc", ["a", "b", "c"]),
        ("a\xa0b", ["a", "b"]),
        ("pr\u2028checkout\u3000--draft", ["pr", "checkout", "--draft"]),
        ("'a\xa0b'", ["a\xa0b"]),
        ("a\\\xa0b", ["a\xa0b"]),
    ],
)
def test_tokenize_splits_on_unicode_whitespace(expansion: str, expected: list[str]) -> None:
    assert tokenize(expansion) == expected


def test_every_str_isspace_character_separates_fields() -> None:
    spaces = [chr(code) for code in range(sys.maxunicode + 1) if chr(code).isspace()]
    assert tokenize("x".join(["", *spaces, ""])) == ["x"] * (len(spaces) + 1)


def test_tokenize_keeps_empty_quoted_word() -> None:
    assert tokenize("api get ''") == ["api", "get", ""]
    assert tokenize('say ""') == ["say", ""]


def test_tokenize_keeps_trailing_backslash_literally() -> None:
    assert tokenize("pr\\") == ["pr\\"]
    assert tokenize("a b\\") == ["a", "b\\"]


def test_tokenize_does_not_treat_hash_as_comment() -> None:
    assert tokenize("issue view #12") == ["issue", "view", "#12"]


@pytest.mark.parametrize("expansion", ["a 'b", 'a "b', "'", '"a\\', "pr 'checkout"])
def test_tokenize_unclosed_quote_raises(expansion: str) -> None:
    with pytest.raises(MalformedExpansionError) as excinfo:
        tokenize(expansion)
    assert excinfo.value.expansion == expansion
    assert "unclosed quote" in str(excinfo.value)


def test_join_tokens_quotes_only_when_needed() -> None:
    assert join_tokens(["pr", "checkout", "--draft"]) == "pr checkout --draft"
    assert tokenize(join_tokens(["issue", "list", "--search", "it's done"])) == [
        "issue",
        "list",
        "--search",
        "it's done",
    ]


_PRINTABLE = st.characters(min_codepoint=32, max_codepoint=126)


@given(st.lists(st.text(alphabet=_PRINTABLE, max_size=12), max_size=8))
def test_join_tokens_round_trips_through_tokenize(tokens: list[str]) -> None:
    assert tokenize(join_tokens(tokens)) == tokens


@given(
    st.lists(
        st.text(alphabet="abcdefghijklmnopqrstuvwxyz-0123456789", min_size=1, max_size=10),
        max_size=8,
    )
)
def test_plain_words_split_on_single_spaces(tokens: list[str]) -> None:
    assert tokenize(" ".join(tokens)) == tokens
