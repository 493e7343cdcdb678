"""Alias tokenizing, recursive expansion, and definition-time validation."""

from yxcli.macro.errors import (
    AliasConflictError,
    AliasCycleError,
    AliasDefinitionError,
    AliasDepthExceededError,
    AliasNotFoundError,
    EmptyExpansionError,
    InvalidAliasNameError,
    MacroError,
    MalformedExpansionError,
    ReservedAliasNameError,
)
from yxcli.macro.expander import (
    AliasDefinition,
    AliasTable,
    define_alias,
    expand,
    remove_alias,
    reserved_command_names,
    validate_alias_name,
)
from yxcli.macro.tokenizer import join_tokens, tokenize

__all__ = [
    "AliasConflictError",
    "AliasCycleError",
    "AliasDefinition",
    "AliasDefinitionError",
    "AliasDepthExceededError",
    "AliasNotFoundError",
    "AliasTable",
    "EmptyExpansionError",
    "InvalidAliasNameError",
    "MacroError",
    "MalformedExpansionError",
    "ReservedAliasNameError",
    "define_alias",
    "expand",
    "join_tokens",
    "remove_alias",
    "reserved_command_names",
    "tokenize",
    "validate_alias_name",
]
