"""Tests for alias definition, removal, and reserved-name checks."""

from __future__ import annotations

import pytest

from yxcli.completion import CommandNode
from yxcli.macro import (
    AliasConflictError,
    AliasCycleError,
    AliasDepthExceededError,
    AliasNotFoundError,
    AliasTable,
    EmptyExpansionError,
    InvalidAliasNameError,
    MalformedExpansionError,
    ReservedAliasNameError,
    define_alias,
    remove_alias,
    reserved_command_names,
    validate_alias_name,
)

RESERVED = frozenset({"alias", "pr", "repo"})


@pytest.mark.parametrize("name", ["co", "pco", "my-alias", "A1", "x"])
def test_valid_names_pass(name: str) -> None:
    assert validate_alias_name(name, RESERVED) == name


@pytest.mark.parametrize("name", ["", "1co", "-co", "co co", "co_x", "co.x", "日本"])
def test_invalid_names_are_rejected(name: str) -> None:
    with pytest.raises(InvalidAliasNameError):
        validate_alias_name(name, RESERVED)


@pytest.mark.parametrize("name", ["pr", "alias", "help"])
def test_reserved_names_are_rejected(name: str) -> None:
    with pytest.raises(ReservedAliasNameError, match="built-in command"):
        validate_alias_name(name, RESERVED)


def test_define_alias_returns_new_table() -> None:
    original = AliasTable()
    updated = define_alias(original, "co", "pr checkout", reserved_names=RESERVED)
    assert dict(updated) == {"co": "pr checkout"}
    assert len(original) == 0


def test_define_alias_accepts_plain_dict() -> None:
    updated = define_alias({"co": "pr checkout"}, "pco", "co --draft", reserved_names=RESERVED)
    assert isinstance(updated, AliasTable)
    assert dict(updated) == {"co": "pr checkout", "pco": "co --draft"}


def test_redefining_with_different_expansion_requires_overwrite() -> None:
    table = AliasTable({"co": "pr checkout"})
    with pytest.raises(AliasConflictError, match="--clobber"):
        define_alias(table, "co", "pr view", reserved_names=RESERVED)

    updated = define_alias(table, "co", "pr view", reserved_names=RESERVED, overwrite=True)
    assert updated["co"] == "pr view"


def test_redefining_with_same_expansion_is_allowed() -> None:
    table = AliasTable({"co": "pr checkout"})
    assert define_alias(table, "co", "pr checkout", reserved_names=RESERVED) == table


@pytest.mark.parametrize("expansion", ["", "   ", "\t\n", "\x0b", "\x0c", "\xa0\u3000"])
def test_empty_expansion_is_rejected(expansion: str) -> None:
    with pytest.raises(EmptyExpansionError):
        define_alias(AliasTable(), "co", expansion, reserved_names=RESERVED)


def test_malformed_expansion_is_rejected() -> None:
    with pytest.raises(MalformedExpansionError):
        define_alias(AliasTable(), "co", "pr 'checkout", reserved_names=RESERVED)


def test_definition_closing_a_cycle_is_rejected_and_table_unchanged() -> None:
    table = AliasTable({"a": "b --x"})
    with pytest.raises(AliasCycleError):
        define_alias(table, "b", "a", reserved_names=RESERVED)
    assert dict(table) == {"a": "b --x"}


def test_definition_may_reference_undefined_alias() -> None:
    updated = define_alias(AliasTable(), "a", "later --x", reserved_names=RESERVED)
    assert updated["a"] == "later --x"


def test_remove_alias() -> None:
    table = AliasTable({"co": "pr checkout", "v": "pr view"})
    assert dict(remove_alias(table, "co")) == {"v": "pr view"}
    assert "co" in table


def test_remove_missing_alias_raises() -> None:
    with pytest.raises(AliasNotFoundError, match="alias not found: nope"):
        remove_alias({"co": "pr checkout"}, "nope")


def test_reserved_command_names_cover_root_names_aliases_and_help() -> None:
    tree = CommandNode(
        name="yx",
        children=(
            CommandNode(name="alias"),
            CommandNode(name="repository", aliases=frozenset({"repo"})),
            CommandNode(name="__complete", hidden=True),
        ),
    )
    assert reserved_command_names(tree) == {
        "alias",
        "repository",
        "repo",
        "__complete",
        "help",
    }


def _chain(length: int) -> dict[str, str]:
    """``a0 -> a1 -> ... -> a{length}`` where the last name is left undefined."""

    return {f"a{i}": f"a{i + 1}" for i in range(length)}


def test_definition_extending_a_chain_to_the_depth_limit_is_accepted() -> None:
    table = AliasTable(_chain(31))
    updated = define_alias(table, "a31", "a32", reserved_names=RESERVED)
    assert updated["a31"] == "a32"


def test_definition_pushing_an_existing_chain_past_the_limit_is_rejected() -> None:
    table = AliasTable(_chain(32))
    with pytest.raises(AliasDepthExceededError) as excinfo:
        define_alias(table, "a32", "pr list", reserved_names=RESERVED)
    assert excinfo.value.chain[0] == "a0"
    assert "a32" not in table


def test_unrelated_broken_alias_does_not_block_definitions() -> None:
    table = AliasTable({"blank": "   ", "co": "pr checkout"})
    updated = define_alias(table, "pco", "co --draft", reserved_names=RESERVED)
    assert updated["pco"] == "co --draft"
