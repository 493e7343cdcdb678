"""
yx-cli - unit tests for config loader

File: tests/unit/config/test_loader.py

Purpose
- Validate deterministic config loading from defaults, TOML, env overrides, and CLI overrides.

What this test file should cover
- Precedence: CLI > env > file > defaults.
- Deterministic env var path mapping and type coercion.
- Path normalization relative to the config directory.
- Redacted effective config dumping.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from yxcli.config.loader import (
    ConfigLoadError,
    config_dir,
    dump_effective_config,
    load_config,
    parse_config_overrides,
)
from yxcli.config.schema import ConfigValidationError


def _write_config(directory: Path, text: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "config.toml").write_text(text, encoding="utf-8")


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})
    assert config["meta"]["schema_version"] == 1
    assert config["observability"] == {
        "log_file": "",
        "log_format": "text",
        "log_level": "WARNING",
        "redact_secrets": True,
    }
    assert config["paths"]["alias_store"] == (tmp_path.resolve() / "aliases.json").as_posix()


def test_precedence_file_env_cli(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[observability]
log_level = "INFO"
log_format = "json"
""".strip(),
    )

    from_file = load_config(tmp_path, environ={})
    assert from_file["observability"]["log_level"] == "INFO"
    assert from_file["observability"]["log_format"] == "json"

    env = {"YX_OBSERVABILITY_LOG_LEVEL": "ERROR"}
    from_env = load_config(tmp_path, environ=env)
    assert from_env["observability"]["log_level"] == "ERROR"
    assert from_env["observability"]["log_format"] == "json"

    from_cli = load_config(
        tmp_path,
        environ=env,
        cli_overrides={"observability.log_level": "DEBUG"},
    )
    assert from_cli["observability"]["log_level"] == "DEBUG"


@pytest.mark.parametrize(("raw", "expected"), [("0", False), ("off", False), ("YES", True)])
def test_env_boolean_coercion(tmp_path: Path, raw: str, expected: bool) -> None:
    config = load_config(tmp_path, environ={"YX_OBSERVABILITY_REDACT_SECRETS": raw})
    assert config["observability"]["redact_secrets"] is expected


def test_env_boolean_coercion_rejects_garbage(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="YX_OBSERVABILITY_REDACT_SECRETS"):
        load_config(tmp_path, environ={"YX_OBSERVABILITY_REDACT_SECRETS": "maybe"})


def test_env_integer_coercion_rejects_garbage(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="must be an integer"):
        load_config(tmp_path, environ={"YX_META_SCHEMA_VERSION": "one"})


def test_invalid_env_enum_fails_validation(tmp_path: Path) -> None:
    with pytest.raises(ConfigValidationError, match="observability.log_level"):
        load_config(tmp_path, environ={"YX_OBSERVABILITY_LOG_LEVEL": "chatty"})


def test_invalid_toml_raises_load_error(tmp_path: Path) -> None:
    _write_config(tmp_path, "[observability\nlog_level = 1")
    with pytest.raises(ConfigLoadError, match="invalid TOML"):
        load_config(tmp_path, environ={})


def test_embedded_secret_in_file_is_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, '[observability]\ntoken = "abc"\n')
    with pytest.raises(ConfigValidationError) as excinfo:
        load_config(tmp_path, environ={})
    assert excinfo.value.issues[0].path == "observability.token"


def test_paths_normalize_relative_to_config_dir(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[paths]
alias_store = "state/../data/aliases.json"

[observability]
log_file = "logs/yx.log"
""".strip(),
    )
    config = load_config(tmp_path, environ={})
    base = tmp_path.resolve()
    assert config["paths"]["alias_store"] == (base / "data" / "aliases.json").as_posix()
    assert config["observability"]["log_file"] == (base / "logs" / "yx.log").as_posix()


def test_absolute_alias_store_is_kept(tmp_path: Path) -> None:
    target = (tmp_path / "elsewhere" / "a.json").resolve()
    _write_config(tmp_path / "cfg", f'[paths]\nalias_store = "{target.as_posix()}"\n')
    config = load_config(tmp_path / "cfg", environ={})
    assert config["paths"]["alias_store"] == target.as_posix()


def test_config_dir_comes_from_environment(tmp_path: Path) -> None:
    assert config_dir({"YX_CONFIG_DIR": str(tmp_path)}) == tmp_path.resolve()
    assert config_dir({}) == (Path.home() / ".yx").resolve()


def test_load_config_uses_config_dir_env_when_no_directory_given(tmp_path: Path) -> None:
    _write_config(tmp_path, '[observability]\nlog_format = "json"\n')
    config = load_config(environ={"YX_CONFIG_DIR": str(tmp_path)})
    assert config["observability"]["log_format"] == "json"


def test_dump_effective_config_is_deterministic(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})
    first = dump_effective_config(config)
    second = dump_effective_config(load_config(tmp_path, environ={}))
    assert first == second
    assert json.loads(first)["observability"]["log_level"] == "WARNING"


def test_cli_override_strings_are_coerced_like_env(tmp_path: Path) -> None:
    config = load_config(
        tmp_path,
        environ={"YX_OBSERVABILITY_REDACT_SECRETS": "true"},
        cli_overrides={"observability.redact_secrets": "off"},
    )
    assert config["observability"]["redact_secrets"] is False


def test_cli_override_coercion_names_the_flag(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="--config meta.schema_version"):
        load_config(tmp_path, environ={}, cli_overrides={"meta.schema_version": "one"})


def test_parse_config_overrides_splits_on_first_equals() -> None:
    assert parse_config_overrides(
        ["observability.log_level=DEBUG", "paths.alias_store=a=b.json", "observability.log_file="]
    ) == {
        "observability.log_level": "DEBUG",
        "paths.alias_store": "a=b.json",
        "observability.log_file": "",
    }


@pytest.mark.parametrize("item", ["observability.log_level", "=DEBUG", " =x"])
def test_parse_config_overrides_rejects_malformed_items(item: str) -> None:
    with pytest.raises(ConfigLoadError, match="expected KEY=VALUE"):
        parse_config_overrides([item])
