"""
yx-cli - persisted alias store

File: src/yxcli/config/store.py

Purpose
- Load and save the user's alias table as a small versioned JSON document.
- Read alias bundles from YAML files for ``yx alias import``.

Functional requirements
- Missing store file means an empty table.
- Writes are atomic; a crash never leaves a truncated store.
- Any malformed content is reported as ``AliasStoreError``, never silently dropped.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml

from yxcli.constants import ALIAS_STORE_SCHEMA_VERSION
from yxcli.macro import AliasTable
from yxcli.utils.fs import atomic_write, read_text_if_exists

logger = logging.getLogger(__name__)


class AliasStoreError(ValueError):
    """Raised when the alias store or an import file cannot be read or written."""


class AliasStore:
    """JSON-backed alias table at a fixed path."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"AliasStore({self.path.as_posix()!r})"

    def load(self) -> AliasTable:
        try:
            raw = read_text_if_exists(self.path)
        except OSError as exc:
            raise AliasStoreError(f"unable to read alias store {self.path}: {exc}") from exc
        if raw is None:
            return AliasTable()

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise AliasStoreError(f"invalid JSON in alias store {self.path}: {exc}") from exc

        if not isinstance(payload, dict):
            raise AliasStoreError(f"alias store root must be an object: {self.path}")
        version = payload.get("schema_version")
        if version != ALIAS_STORE_SCHEMA_VERSION:
            raise AliasStoreError(
                f"unsupported alias store schema_version {version!r} in {self.path}; "
                f"expected {ALIAS_STORE_SCHEMA_VERSION}"
            )
        return AliasTable(_string_mapping(payload.get("aliases", {}), source=self.path))

    def save(self, table: Mapping[str, str]) -> None:
        document: dict[str, Any] = {
            "schema_version": ALIAS_STORE_SCHEMA_VERSION,
            "aliases": {name: table[name] for name in sorted(table)},
        }
        rendered = json.dumps(document, sort_keys=True, indent=2, ensure_ascii=False) + "\n"
        try:
            atomic_write(self.path, rendered)
        except OSError as exc:
            raise AliasStoreError(f"unable to write alias store {self.path}: {exc}") from exc
        logger.debug("alias store saved", extra={"path": self.path.as_posix(), "count": len(table)})

    def update(self, mutator: Callable[[AliasTable], AliasTable]) -> AliasTable:
        """Load, apply ``mutator``, save, and return the new table.

        Nothing is written when ``mutator`` raises.
        """

        updated = mutator(self.load())
        self.save(updated)
        return updated


def load_alias_file(path: str | Path) -> dict[str, str]:
    """Read a YAML alias bundle.

    Accepted shapes are a flat ``name: expansion`` mapping or a document with an
    ``aliases:`` mapping at the top level.
    """

    source = Path(path)
    try:
        with source.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise AliasStoreError(f"invalid YAML in {source}: {exc}") from exc
    except OSError as exc:
        raise AliasStoreError(f"unable to read alias file {source}: {exc}") from exc

    if payload is None:
        return {}
    if isinstance(payload, dict) and "aliases" in payload:
        payload = payload["aliases"]
    return _string_mapping(payload, source=source)


def _string_mapping(value: object, *, source: Path) -> dict[str, str]:
    if not isinstance(value, dict):
        raise AliasStoreError(f"aliases must be a mapping of name to expansion: {source}")
    out: dict[str, str] = {}
    for name, expansion in value.items():
        if not isinstance(name, str) or not isinstance(expansion, str):
            raise AliasStoreError(
                f"alias entries must map strings to strings: {name!r} in {source}"
            )
        out[name] = expansion
    return out


__all__ = ["AliasStore", "AliasStoreError", "load_alias_file"]
