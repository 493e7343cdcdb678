"""Tests for the JSON alias store and YAML alias import files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from yxcli.config.store import AliasStore, AliasStoreError, load_alias_file
from yxcli.macro import AliasCycleError, AliasTable, define_alias


def test_missing_store_loads_empty_table(tmp_path: Path) -> None:
    table = AliasStore(tmp_path / "aliases.json").load()
    assert isinstance(table, AliasTable)
    assert len(table) == 0


def test_save_writes_versioned_sorted_document(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "aliases.json"
    store = AliasStore(path)
    store.save(AliasTable({"pco": "co --draft", "co": "pr checkout"}))

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document == {
        "schema_version": 1,
        "aliases": {"co": "pr checkout", "pco": "co --draft"},
    }
    assert list(document["aliases"]) == ["co", "pco"]
    assert dict(store.load()) == {"co": "pr checkout", "pco": "co --draft"}


def test_update_persists_mutation(tmp_path: Path) -> None:
    store = AliasStore(tmp_path / "aliases.json")
    updated = store.update(lambda t: define_alias(t, "co", "pr checkout", reserved_names=()))
    assert dict(updated) == {"co": "pr checkout"}
    assert dict(store.load()) == {"co": "pr checkout"}


def test_update_writes_nothing_when_mutator_raises(tmp_path: Path) -> None:
    store = AliasStore(tmp_path / "aliases.json")
    store.save(AliasTable({"a": "b"}))
    before = store.path.read_bytes()

    with pytest.raises(AliasCycleError):
        store.update(lambda t: define_alias(t, "b", "a", reserved_names=()))

    assert store.path.read_bytes() == before


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("{not json", "invalid JSON"),
        ("[]", "root must be an object"),
        ('{"schema_version": 2, "aliases": {}}', "unsupported alias store schema_version"),
        ('{"aliases": {}}', "unsupported alias store schema_version"),
        ('{"schema_version": 1, "aliases": []}', "mapping of name to expansion"),
        ('{"schema_version": 1, "aliases": {"co": 5}}', "strings to strings"),
    ],
)
def test_malformed_store_raises(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "aliases.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(AliasStoreError, match=message):
        AliasStore(path).load()


def test_load_alias_file_flat_mapping(tmp_path: Path) -> None:
    path = tmp_path / "aliases.yml"
    path.write_text("co: pr checkout\nmine: \"issue list -a self\"\n", encoding="utf-8")
    assert load_alias_file(path) == {"co": "pr checkout", "mine": "issue list -a self"}


def test_load_alias_file_nested_aliases_key(tmp_path: Path) -> None:
    path = tmp_path / "aliases.yaml"
    path.write_text("aliases:\n  co: pr checkout\n", encoding="utf-8")
    assert load_alias_file(path) == {"co": "pr checkout"}


def test_load_alias_file_empty_document(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_alias_file(path) == {}


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("co: [unclosed", "invalid YAML"),
        ("- co\n- pr\n", "mapping of name to expansion"),
        ("co: 5\n", "strings to strings"),
    ],
)
def test_load_alias_file_rejects_bad_content(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "bad.yml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(AliasStoreError, match=message):
        load_alias_file(path)


def test_load_alias_file_missing_file(tmp_path: Path) -> None:
    with pytest.raises(AliasStoreError, match="unable to read"):
        load_alias_file(tmp_path / "missing.yml")
