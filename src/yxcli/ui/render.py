"""Output rendering for the ``yx`` CLI.

File: src/yxcli/ui/render.py

Purpose
- Keep human-facing output in one place so handlers stay free of print formatting.
- Respect ``NO_COLOR`` and ``--no-color``.

Functional requirements
- Plain-text rendering always works; machine output (completion, JSON) bypasses it.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def _color_allowed(no_color_flag: bool) -> bool:
    if no_color_flag:
        return False
    if os.environ.get("NO_COLOR", ""):
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


class CLIRenderer:
    """Thin CLI output renderer producing deterministic plain text."""

    def __init__(self, *, no_color: bool = False, verbose: bool = False) -> None:
        self.verbose = verbose
        self._color = _color_allowed(no_color)

    def text(self, line: str) -> None:
        print(line)

    def kv(self, key: str, value: object) -> None:
        print(f"{key}: {value}")

    def ok(self, message: str) -> None:
        print(self._paint(f"✓ {message}", "32"))

    def warning(self, message: str) -> None:
        print(self._paint(f"! {message}", "33"), file=sys.stderr)

    def table(self, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        """Print a left-aligned two-space-separated table; nothing for no rows."""

        if not rows:
            return

        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row[: len(headers)]):
                widths[i] = max(widths[i], len(cell))

        def _pad(cells: Sequence[str]) -> str:
            parts = [
                (cells[i] if i < len(cells) else "").ljust(widths[i])
                for i in range(len(headers))
            ]
            return "  ".join(parts).rstrip()

        print(self._paint(_pad(headers), "1"))
        for row in rows:
            print(_pad(row))

    def next_steps(self, steps: Sequence[str]) -> None:
        if not steps:
            return
        print("\nNext steps:")
        for step in steps:
            print(f"  $ {step}")

    def _paint(self, text: str, code: str) -> str:
        if not self._color:
            return text
        return f"\x1b[{code}m{text}\x1b[0m"


def create_renderer(*, no_color: bool = False, verbose: bool = False) -> CLIRenderer:
    return CLIRenderer(no_color=no_color, verbose=verbose)


__all__ = ["CLIRenderer", "create_renderer"]
