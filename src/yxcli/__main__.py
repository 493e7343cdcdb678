"""Module entrypoint for ``python -m yxcli``."""

from __future__ import annotations

from yxcli.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
