"""
yx-cli - alias table and recursive expansion

File: src/yxcli/macro/expander.py

Purpose
- Replace a leading alias name with its tokenized expansion, recursively.
- Validate new alias definitions with the same expansion algorithm used at dispatch.

Functional requirements
- Only the leading token is ever expanded; trailing user tokens pass through untouched.
- Cycles and over-long chains fail explicitly with no partial argv.
- Tables are immutable per call; definitions return a new table.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from yxcli.constants import ALIAS_NAME_PATTERN, ALWAYS_RESERVED_NAMES, MAX_ALIAS_EXPANSION_DEPTH
from yxcli.macro.errors import (
    AliasConflictError,
    AliasCycleError,
    AliasDepthExceededError,
    AliasNotFoundError,
    EmptyExpansionError,
    InvalidAliasNameError,
    MalformedExpansionError,
    ReservedAliasNameError,
)
from yxcli.macro.tokenizer import tokenize

if TYPE_CHECKING:
    from yxcli.completion.tree import CommandNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AliasDefinition:
    """One stored alias: a short name and its raw, unexpanded expansion."""

    name: str
    expansion: str


class AliasTable(Mapping[str, str]):
    """Immutable mapping of alias name to raw expansion string."""

    __slots__ = ("_entries",)

    def __init__(
        self, entries: Mapping[str, str] | Iterable[AliasDefinition] | None = None
    ) -> None:
        materialized: dict[str, str] = {}
        if isinstance(entries, Mapping):
            materialized.update(entries)
        elif entries is not None:
            for definition in entries:
                materialized[definition.name] = definition.expansion
        self._entries = materialized

    def __getitem__(self, name: str) -> str:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AliasTable({dict(sorted(self._entries.items()))!r})"

    def definitions(self) -> tuple[AliasDefinition, ...]:
        return tuple(AliasDefinition(name, self._entries[name]) for name in self)

    def with_alias(self, name: str, expansion: str) -> AliasTable:
        updated = dict(self._entries)
        updated[name] = expansion
        return AliasTable(updated)

    def without(self, name: str) -> AliasTable:
        updated = dict(self._entries)
        updated.pop(name, None)
        return AliasTable(updated)


@dataclass(slots=True)
class _ExpansionContext:
    visited: list[str]
    depth: int = 0


def expand(argv: Sequence[str], table: Mapping[str, str]) -> list[str]:
    """Expand a leading alias in ``argv`` until the head is no longer an alias.

    Raises ``AliasCycleError`` when a name repeats within one call,
    ``AliasDepthExceededError`` past ``MAX_ALIAS_EXPANSION_DEPTH`` expansions,
    ``EmptyExpansionError`` for expansions without tokens and
    ``MalformedExpansionError`` for unterminated quotes.
    """

    expanded = _expand(list(argv), table, _ExpansionContext(visited=[]))
    if expanded != list(argv):
        logger.debug("expanded alias argv", extra={"argv_in": list(argv), "argv_out": expanded})
    return expanded


def _expand(argv: list[str], table: Mapping[str, str], context: _ExpansionContext) -> list[str]:
    if not argv:
        return argv
    head = argv[0]
    expansion = table.get(head)
    if expansion is None:
        return argv

    if head in context.visited:
        raise AliasCycleError([*context.visited, head])
    context.visited.append(head)
    context.depth += 1
    if context.depth > MAX_ALIAS_EXPANSION_DEPTH:
        raise AliasDepthExceededError(context.visited, MAX_ALIAS_EXPANSION_DEPTH)

    tokens = tokenize(expansion)
    if not tokens:
        raise EmptyExpansionError(head)

    return _expand([*tokens, *argv[1:]], table, context)


def validate_alias_name(name: str, reserved_names: Iterable[str]) -> str:
    """Return ``name`` if it is a well-formed, non-reserved alias name."""

    if not ALIAS_NAME_PATTERN.fullmatch(name):
        raise InvalidAliasNameError(name)
    if name in ALWAYS_RESERVED_NAMES or name in frozenset(reserved_names):
        raise ReservedAliasNameError(name)
    return name


def define_alias(
    table: Mapping[str, str],
    name: str,
    expansion: str,
    *,
    reserved_names: Iterable[str],
    overwrite: bool = False,
) -> AliasTable:
    """Validate and add ``name -> expansion``, returning the new table.

    The candidate table is checked by expanding ``[name]`` with :func:`expand`, so a
    definition is accepted exactly when dispatching it would succeed. Every other
    alias whose chain passes through ``name`` is expanded too, so a definition cannot
    push an existing chain past ``MAX_ALIAS_EXPANSION_DEPTH``.
    """

    validate_alias_name(name, reserved_names)

    existing = table.get(name)
    if existing is not None and existing != expansion and not overwrite:
        raise AliasConflictError(name, existing)

    current = table if isinstance(table, AliasTable) else AliasTable(table)
    candidate = current.with_alias(name, expansion)
    expand([name], candidate)
    for other in candidate:
        if other != name and _chain_reaches(candidate, other, name):
            expand([other], candidate)
    logger.info("alias defined", extra={"alias": name, "replaced": existing is not None})
    return candidate


def _chain_reaches(table: Mapping[str, str], start: str, target: str) -> bool:
    seen: set[str] = set()
    head = start
    while head in table and head not in seen:
        if head == target:
            return True
        seen.add(head)
        try:
            tokens = tokenize(table[head])
        except MalformedExpansionError:
            return False
        if not tokens:
            return False
        head = tokens[0]
    return False


def remove_alias(table: Mapping[str, str], name: str) -> AliasTable:
    """Return a copy of ``table`` without ``name``."""

    if name not in table:
        raise AliasNotFoundError(name)
    current = table if isinstance(table, AliasTable) else AliasTable(table)
    logger.info("alias removed", extra={"alias": name})
    return current.without(name)


def reserved_command_names(tree: CommandNode) -> frozenset[str]:
    """Names an alias may not take: every root command name and alias, plus ``help``."""

    names: set[str] = set(ALWAYS_RESERVED_NAMES)
    for child in tree.children:
        names.add(child.name)
        names.update(child.aliases)
    return frozenset(names)


__all__ = [
    "AliasDefinition",
    "AliasTable",
    "define_alias",
    "expand",
    "remove_alias",
    "reserved_command_names",
    "validate_alias_name",
]
