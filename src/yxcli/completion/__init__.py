"""Command tree model and shell completion resolver."""

from yxcli.completion.resolver import CompletionContext, complete, locate
from yxcli.completion.scripts import SUPPORTED_SHELLS, completion_script
from yxcli.completion.tree import (
    CommandNode,
    CommandTreeError,
    OptionSpec,
    command_tree_from_dict,
    command_tree_from_parser,
    command_tree_to_dict,
    dump_command_tree,
)

__all__ = [
    "SUPPORTED_SHELLS",
    "CommandNode",
    "CommandTreeError",
    "CompletionContext",
    "OptionSpec",
    "command_tree_from_dict",
    "command_tree_from_parser",
    "command_tree_to_dict",
    "complete",
    "completion_script",
    "dump_command_tree",
    "locate",
]
