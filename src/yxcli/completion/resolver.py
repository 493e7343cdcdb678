"""Replay partially typed words against a command tree and rank completions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from yxcli.completion.tree import CommandNode

logger = logging.getLogger(__name__)

_END_OF_OPTIONS = "--"


@dataclass(frozen=True, slots=True)
class CompletionContext:
    """Where a replay of preceding words ended up."""

    node: CommandNode
    expecting_option_value: bool = False


def locate(tree: CommandNode, tokens: Sequence[str]) -> CompletionContext:
    """Walk ``tokens`` from the root, tracking subcommand descent and option arity.

    Unknown options and unknown bare words leave the state unchanged, so malformed
    partial commands degrade to the outer node instead of failing.
    """

    node = tree
    expecting_value = False

    for token in tokens:
        if expecting_value:
            expecting_value = False
            continue
        if token == _END_OF_OPTIONS:
            break
        if token.startswith("-"):
            option = node.option(token)
            if option is not None and option.takes_value and "=" not in token:
                expecting_value = True
            continue

        child = node.child(token)
        if child is not None:
            node = child

    return CompletionContext(node=node, expecting_option_value=expecting_value)


def complete(tree: CommandNode, words: Sequence[str]) -> list[str]:
    """Return sorted, de-duplicated candidates for the last word in ``words``.

    An empty list means "no suggestions"; this function never raises for any input.
    """

    current = words[-1] if words else ""
    context = locate(tree, words[:-1])
    if context.expecting_option_value:
        return []

    if current.startswith("-"):
        pool = context.node.option_flags()
    else:
        pool = [*context.node.subcommand_words(), *context.node.option_flags()]

    candidates = sorted({item for item in pool if item.startswith(current)})
    logger.debug(
        "completion resolved",
        extra={"node": context.node.name, "current": current, "candidates": len(candidates)},
    )
    return candidates


__all__ = ["CompletionContext", "complete", "locate"]
