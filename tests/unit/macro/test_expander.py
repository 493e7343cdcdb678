"""
yx-cli - unit tests for recursive alias expansion

File: tests/unit/macro/test_expander.py

Purpose
- Only the leading word expands, recursively, with trailing words untouched.
- Cycles, over-long chains, empty and malformed expansions fail without partial output.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from yxcli.constants import MAX_ALIAS_EXPANSION_DEPTH
from yxcli.macro import (
    AliasCycleError,
    AliasDepthExceededError,
    AliasTable,
    EmptyExpansionError,
    MalformedExpansionError,
    expand,
)

CHAINED = {"co": "pr checkout", "pco": "co --draft"}


def test_non_alias_head_is_returned_unchanged() -> None:
    argv = ["pr", "list", "--state", "opened"]
    assert expand(argv, CHAINED) == argv


def test_empty_argv_expands_to_empty() -> None:
    assert expand([], CHAINED) == []


def test_single_expansion_appends_trailing_arguments() -> None:
    assert expand(["co", "repo", "42"], CHAINED) == ["pr", "checkout", "repo", "42"]


def test_nested_alias_expands_recursively() -> None:
    assert expand(["pco", "42"], CHAINED) == ["pr", "checkout", "--draft", "42"]


def test_trailing_words_are_never_expanded() -> None:
    assert expand(["pr", "co", "pco"], CHAINED) == ["pr", "co", "pco"]
    assert expand(["co", "co"], CHAINED) == ["pr", "checkout", "co"]


def test_quoted_expansion_keeps_grouping() -> None:
    table = {"triage": "issue list --label 'needs triage'"}
    assert expand(["triage", "-L", "5"], table) == [
        "issue",
        "list",
        "--label",
        "needs triage",
        "-L",
        "5",
    ]


def test_expand_does_not_mutate_input() -> None:
    argv = ["pco", "42"]
    expand(argv, CHAINED)
    assert argv == ["pco", "42"]


def test_two_alias_cycle_raises_with_chain() -> None:
    with pytest.raises(AliasCycleError) as excinfo:
        expand(["a"], {"a": "b", "b": "a"})
    assert excinfo.value.chain == ("a", "b", "a")
    assert "a -> b -> a" in str(excinfo.value)


def test_self_reference_is_a_cycle() -> None:
    with pytest.raises(AliasCycleError) as excinfo:
        expand(["ls", "-x"], {"ls": "ls --all"})
    assert excinfo.value.chain == ("ls", "ls")


def test_chain_at_depth_limit_succeeds() -> None:
    table = {f"a{i}": f"a{i + 1}" for i in range(MAX_ALIAS_EXPANSION_DEPTH - 1)}
    table[f"a{MAX_ALIAS_EXPANSION_DEPTH - 1}"] = "pr list"
    assert expand(["a0", "--json"], table) == ["pr", "list", "--json"]


def test_chain_past_depth_limit_raises() -> None:
    table = {f"a{i}": f"a{i + 1}" for i in range(MAX_ALIAS_EXPANSION_DEPTH)}
    table[f"a{MAX_ALIAS_EXPANSION_DEPTH}"] = "pr list"
    with pytest.raises(AliasDepthExceededError) as excinfo:
        expand(["a0"], table)
    assert excinfo.value.limit == MAX_ALIAS_EXPANSION_DEPTH
    assert isinstance(excinfo.value, AliasCycleError)
    assert "max depth" in str(excinfo.value)


@pytest.mark.parametrize("blank", ["   ", "\x0b", "\x0c", "\xa0 \t"])
def test_blank_expansion_raises_empty_expansion(blank: str) -> None:
    with pytest.raises(EmptyExpansionError) as excinfo:
        expand(["blank", "x"], {"blank": blank})
    assert excinfo.value.name == "blank"


def test_malformed_expansion_raises() -> None:
    with pytest.raises(MalformedExpansionError):
        expand(["bad"], {"bad": "pr 'checkout"})


def test_malformed_expansion_reached_through_chain_raises() -> None:
    with pytest.raises(MalformedExpansionError):
        expand(["outer"], {"outer": "inner --x", "inner": 'pr "open'})


def test_alias_table_is_accepted_like_a_mapping() -> None:
    table = AliasTable(CHAINED)
    assert expand(["pco"], table) == ["pr", "checkout", "--draft"]


@given(st.lists(st.text(min_size=1, max_size=8), max_size=6))
def test_expansion_is_prefix_plus_trailing_and_idempotent(trailing: list[str]) -> None:
    result = expand(["pco", *trailing], CHAINED)
    assert result == ["pr", "checkout", "--draft", *trailing]
    assert expand(result, CHAINED) == result


class TestAliasTable:
    def test_iterates_in_sorted_order(self) -> None:
        table = AliasTable({"pco": "co --draft", "co": "pr checkout", "b": "x"})
        assert list(table) == ["b", "co", "pco"]
        assert len(table) == 3

    def test_with_alias_and_without_return_new_tables(self) -> None:
        table = AliasTable({"co": "pr checkout"})
        added = table.with_alias("v", "pr view")
        removed = added.without("co")

        assert dict(table) == {"co": "pr checkout"}
        assert dict(added) == {"co": "pr checkout", "v": "pr view"}
        assert dict(removed) == {"v": "pr view"}

    def test_definitions_are_sorted_values(self) -> None:
        table = AliasTable({"z": "pr list", "a": "issue list"})
        assert [(d.name, d.expansion) for d in table.definitions()] == [
            ("a", "issue list"),
            ("z", "pr list"),
        ]
        assert AliasTable(table.definitions()) == table
