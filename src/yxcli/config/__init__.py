"""
yx-cli config package public API.

File: src/yxcli/config/__init__.py

Purpose
- Export config loading/validation entrypoints, the alias store, and public error types.

Functional requirements
- Support loading from ``$YX_CONFIG_DIR/config.toml`` + ``YX_`` env + ``--config`` overrides.
- Fail fast with clear structured validation/load errors.
"""

from yxcli.config.loader import (
    ConfigLoadError,
    config_dir,
    dump_effective_config,
    load_config,
    normalize_paths,
    parse_config_overrides,
)
from yxcli.config.schema import (
    DEFAULT_CONFIG,
    PATH_FIELDS,
    CLIConfig,
    ConfigSchemaVersion,
    ConfigValidationError,
    ConfigValidationIssue,
    ConfigValidationResult,
    assert_valid_config,
    default_config,
    merge_config,
    migration_guidance,
    redact_config,
    validate_config,
)
from yxcli.config.store import AliasStore, AliasStoreError, load_alias_file

__all__ = [
    "AliasStore",
    "AliasStoreError",
    "CLIConfig",
    "ConfigLoadError",
    "ConfigSchemaVersion",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "DEFAULT_CONFIG",
    "PATH_FIELDS",
    "assert_valid_config",
    "config_dir",
    "default_config",
    "dump_effective_config",
    "load_alias_file",
    "load_config",
    "merge_config",
    "migration_guidance",
    "normalize_paths",
    "parse_config_overrides",
    "redact_config",
    "validate_config",
]
