"""Process entrypoint for ``yx``: run the CLI and turn every outcome into an exit status."""

from __future__ import annotations

import sys
import traceback
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

INTERRUPTED_EXIT_CODE = 130


class ExitCode(IntEnum):
    """Exit statuses of ``yx``; shell wrappers and aliases in scripts rely on them."""

    SUCCESS = 0
    COMMAND_ERROR = 1
    CONFIG_ERROR = 2  # config.toml, --config, the alias store, or usage errors
    ALIAS_ERROR = 3  # cycles, depth, malformed or conflicting alias definitions
    INTERNAL_ERROR = 4


def cli_entrypoint(argv: Sequence[str] | None = None) -> int:
    """Run ``yx`` with ``argv`` and return its exit status; the ``yx`` console script."""

    try:
        from yxcli.ui.cli import run_cli

        return _normalize_exit_code(run_cli(argv))
    except SystemExit as exc:
        # argparse exits 2 on usage errors and 0 for --help/--version.
        return _normalize_exit_code(exc.code)
    except KeyboardInterrupt:
        _write_stderr("interrupted")
        return INTERRUPTED_EXIT_CODE
    except Exception as exc:  # noqa: BLE001 - last line before the shell sees a traceback.
        exit_code = _route_exception(exc)
        _emit_failure(exc, exit_code)
        return int(exit_code)


def _normalize_exit_code(raw_code: object) -> int:
    if raw_code is None:
        return int(ExitCode.SUCCESS)
    if isinstance(raw_code, int) and raw_code in set(ExitCode):
        return int(raw_code)
    if isinstance(raw_code, str) and raw_code.strip():
        _write_stderr(raw_code.strip())
    return int(ExitCode.INTERNAL_ERROR)


def _route_exception(exc: BaseException) -> ExitCode:
    """Map an escaped exception, or anything in its cause chain, to an exit status."""

    from yxcli.config import AliasStoreError, ConfigLoadError, ConfigValidationError
    from yxcli.macro import MacroError

    routes: tuple[tuple[tuple[type[BaseException], ...], ExitCode], ...] = (
        ((MacroError,), ExitCode.ALIAS_ERROR),
        ((ConfigLoadError, ConfigValidationError, AliasStoreError), ExitCode.CONFIG_ERROR),
        ((FileNotFoundError, NotADirectoryError, PermissionError), ExitCode.CONFIG_ERROR),
    )
    for item in _exception_chain(exc):
        for types, code in routes:
            if isinstance(item, types):
                return code
    return ExitCode.INTERNAL_ERROR


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__


def _emit_failure(exc: BaseException, exit_code: ExitCode) -> None:
    if exit_code is ExitCode.INTERNAL_ERROR:
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        return
    _write_stderr(f"error: {str(exc).strip() or exc.__class__.__name__}")


def _write_stderr(message: str) -> None:
    sys.stderr.write(message.rstrip("\n") + "\n")


__all__ = ["ExitCode", "cli_entrypoint"]
