"""
yx-cli - command tree model

File: src/yxcli/completion/tree.py

Purpose
- Model the subcommand/option grammar as a standalone, serializable value.
- Mirror an argparse parser (the metadata behind ``--help``) into that value.

Functional requirements
- Sibling nodes never share a name or alias.
- Lookups are deterministic and never raise.
"""

from __future__ import annotations

import argparse
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


class CommandTreeError(ValueError):
    """Raised when a command tree violates its structural invariants."""


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """One option flag: long form, optional short form, and whether it takes a value."""

    long: str
    short: str | None = None
    takes_value: bool = False

    def matches(self, token: str) -> bool:
        if token == self.long or token.startswith(f"{self.long}="):
            return True
        return bool(self.short) and token == self.short

    def flags(self) -> tuple[str, ...]:
        if self.short:
            return (self.long, self.short)
        return (self.long,)


@dataclass(frozen=True, slots=True)
class CommandNode:
    """A command with its aliases, child subcommands, and option descriptors."""

    name: str
    aliases: frozenset[str] = field(default_factory=frozenset)
    children: tuple[CommandNode, ...] = ()
    options: tuple[OptionSpec, ...] = ()
    hidden: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "aliases", frozenset(self.aliases))
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "options", tuple(self.options))

        seen: dict[str, str] = {}
        for child in self.children:
            for label in (child.name, *sorted(child.aliases)):
                owner = seen.get(label)
                if owner is not None:
                    raise CommandTreeError(
                        f"command {self.name!r}: {label!r} is used by both "
                        f"{owner!r} and {child.name!r}"
                    )
                seen[label] = child.name

    def child(self, token: str) -> CommandNode | None:
        for candidate in self.children:
            if candidate.name == token or token in candidate.aliases:
                return candidate
        return None

    def option(self, token: str) -> OptionSpec | None:
        for candidate in self.options:
            if candidate.matches(token):
                return candidate
        return None

    def subcommand_words(self) -> list[str]:
        """Names and aliases of visible children."""

        words: list[str] = []
        for candidate in self.children:
            if candidate.hidden:
                continue
            words.append(candidate.name)
            words.extend(sorted(candidate.aliases))
        return words

    def option_flags(self) -> list[str]:
        flags: list[str] = []
        for candidate in self.options:
            flags.extend(candidate.flags())
        return flags

    def walk(self, path: tuple[str, ...] = ()) -> Iterable[tuple[tuple[str, ...], CommandNode]]:
        """Yield ``(path, node)`` for this node and every descendant, depth first."""

        yield path, self
        for candidate in self.children:
            yield from candidate.walk((*path, candidate.name))


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def command_tree_to_dict(node: CommandNode) -> dict[str, Any]:
    """Return a JSON-compatible representation of ``node`` and its descendants."""

    payload: dict[str, Any] = {"name": node.name}
    if node.aliases:
        payload["aliases"] = sorted(node.aliases)
    if node.hidden:
        payload["hidden"] = True
    if node.options:
        payload["options"] = [_option_to_dict(option) for option in node.options]
    if node.children:
        payload["children"] = [command_tree_to_dict(child) for child in node.children]
    return payload


def command_tree_from_dict(payload: Mapping[str, Any]) -> CommandNode:
    """Build a tree from :func:`command_tree_to_dict` output or literal fixtures."""

    name = payload.get("name")
    if not isinstance(name, str) or not name:
        raise CommandTreeError("command node requires a non-empty 'name'")

    aliases = payload.get("aliases", ())
    if not isinstance(aliases, (list, tuple)) or not all(isinstance(a, str) for a in aliases):
        raise CommandTreeError(f"command {name!r}: 'aliases' must be a list of strings")

    raw_options = payload.get("options", ())
    raw_children = payload.get("children", ())
    if not isinstance(raw_options, (list, tuple)) or not isinstance(raw_children, (list, tuple)):
        raise CommandTreeError(f"command {name!r}: 'options' and 'children' must be lists")

    return CommandNode(
        name=name,
        aliases=frozenset(aliases),
        children=tuple(command_tree_from_dict(child) for child in raw_children),
        options=tuple(_option_from_dict(name, option) for option in raw_options),
        hidden=bool(payload.get("hidden", False)),
    )


def dump_command_tree(node: CommandNode) -> str:
    """Deterministic JSON dump of a command tree."""

    return json.dumps(
        command_tree_to_dict(node), sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )


def _option_to_dict(option: OptionSpec) -> dict[str, Any]:
    payload: dict[str, Any] = {"long": option.long, "takes_value": option.takes_value}
    if option.short:
        payload["short"] = option.short
    return payload


def _option_from_dict(command: str, payload: object) -> OptionSpec:
    if not isinstance(payload, Mapping):
        raise CommandTreeError(f"command {command!r}: option entries must be objects")
    long = payload.get("long")
    if not isinstance(long, str) or not long.startswith("-"):
        raise CommandTreeError(f"command {command!r}: option 'long' must be a flag string")
    short = payload.get("short")
    if short is not None and not isinstance(short, str):
        raise CommandTreeError(f"command {command!r}: option 'short' must be a string")
    return OptionSpec(long=long, short=short or None, takes_value=bool(payload.get("takes_value")))


# ---------------------------------------------------------------------------
# argparse mirroring
# ---------------------------------------------------------------------------


def command_tree_from_parser(
    parser: argparse.ArgumentParser, name: str | None = None
) -> CommandNode:
    """Mirror ``parser`` and its sub-parsers into a :class:`CommandNode` tree.

    Sub-parsers registered without ``help=`` are treated as hidden: they stay
    traversable but are never offered as completion candidates.
    """

    return _node_from_parser(parser, name or parser.prog, aliases=(), hidden=False)


def _node_from_parser(
    parser: argparse.ArgumentParser,
    name: str,
    *,
    aliases: Iterable[str],
    hidden: bool,
) -> CommandNode:
    options: list[OptionSpec] = []
    children: list[CommandNode] = []

    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            children.extend(_children_from_subparsers(action))
            continue
        if not action.option_strings:
            continue
        options.extend(_options_from_action(action))

    return CommandNode(
        name=name,
        aliases=frozenset(aliases),
        children=tuple(children),
        options=tuple(options),
        hidden=hidden,
    )


def _children_from_subparsers(action: argparse._SubParsersAction) -> list[CommandNode]:
    visible = {choice.dest for choice in action._choices_actions}

    # argparse registers the canonical name first, then its aliases, all pointing
    # at the same sub-parser object.
    grouped: dict[int, tuple[argparse.ArgumentParser, list[str]]] = {}
    for label, subparser in action.choices.items():
        entry = grouped.get(id(subparser))
        if entry is None:
            grouped[id(subparser)] = (subparser, [label])
        else:
            entry[1].append(label)

    children: list[CommandNode] = []
    for subparser, labels in grouped.values():
        canonical, *extra = labels
        children.append(
            _node_from_parser(
                subparser,
                canonical,
                aliases=extra,
                hidden=canonical not in visible,
            )
        )
    return children


def _options_from_action(action: argparse.Action) -> list[OptionSpec]:
    takes_value = action.nargs != 0
    longs = [flag for flag in action.option_strings if flag.startswith("--")]
    shorts = [flag for flag in action.option_strings if not flag.startswith("--")]

    if not longs:
        return [OptionSpec(long=flag, takes_value=takes_value) for flag in shorts]

    short = shorts[0] if shorts else None
    specs = [OptionSpec(long=longs[0], short=short, takes_value=takes_value)]
    specs.extend(OptionSpec(long=flag, takes_value=takes_value) for flag in longs[1:])
    specs.extend(OptionSpec(long=flag, takes_value=takes_value) for flag in shorts[1:])
    return specs


__all__ = [
    "CommandNode",
    "CommandTreeError",
    "OptionSpec",
    "command_tree_from_dict",
    "command_tree_from_parser",
    "command_tree_to_dict",
    "dump_command_tree",
]
