"""Stable constants shared across the alias, completion, and config layers."""

from __future__ import annotations

import re
from typing import Final

PROGRAM_NAME: Final[str] = "yx"
VERSION: Final[str] = "0.1.0"

# Schema versions for persisted contracts.
CONFIG_SCHEMA_VERSION: Final[int] = 1
ALIAS_STORE_SCHEMA_VERSION: Final[int] = 1

# Config location.
CONFIG_DIR_ENV: Final[str] = "YX_CONFIG_DIR"
DEFAULT_CONFIG_DIR_NAME: Final[str] = ".yx"
CONFIG_FILE_NAME: Final[str] = "config.toml"
ENV_PREFIX: Final[str] = "YX_"

# Alias expansion.
MAX_ALIAS_EXPANSION_DEPTH: Final[int] = 32
ALIAS_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")
ALWAYS_RESERVED_NAMES: Final[frozenset[str]] = frozenset({"help"})

# Hidden entry point used by the shell completion scripts.
COMPLETE_COMMAND: Final[str] = "__complete"

__all__ = [
    "ALIAS_NAME_PATTERN",
    "ALIAS_STORE_SCHEMA_VERSION",
    "ALWAYS_RESERVED_NAMES",
    "COMPLETE_COMMAND",
    "CONFIG_DIR_ENV",
    "CONFIG_FILE_NAME",
    "CONFIG_SCHEMA_VERSION",
    "DEFAULT_CONFIG_DIR_NAME",
    "ENV_PREFIX",
    "MAX_ALIAS_EXPANSION_DEPTH",
    "PROGRAM_NAME",
    "VERSION",
]
