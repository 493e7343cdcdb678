"""
yx-cli - alias expansion tokenizer

File: src/yxcli/macro/tokenizer.py

Purpose
- Split a stored alias expansion into argv-style tokens.

Quoting rules
- Whitespace (any ``str.isspace`` character) separates fields.
- Single-quoted spans are literal up to the closing quote.
- Double-quoted spans are literal except ``\\"`` and ``\\\\``, which unescape.
- Outside quotes a backslash escapes the next character and is removed.
- A dangling trailing backslash outside quotes is kept literally.

Functional requirements
- Unterminated quotes raise ``MalformedExpansionError``; nothing is partially returned.
- Empty or whitespace-only input yields no tokens.
"""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING, Final

from yxcli.macro.errors import MalformedExpansionError

if TYPE_CHECKING:
    from collections.abc import Sequence

_NO_ESCAPED_CHARACTER: Final[str] = "No escaped character"

# Every character for which ``str.isspace`` is true, so fields split the way ``\s`` does.
_WHITESPACE: Final[str] = (
    "\t\n\x0b\x0c\r\x1c\x1d\x1e\x1f \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def tokenize(expansion: str) -> list[str]:
    """Split ``expansion`` into tokens using POSIX quoting rules."""

    try:
        return _split(expansion)
    except ValueError as exc:
        if str(exc) != _NO_ESCAPED_CHARACTER:
            raise MalformedExpansionError(expansion) from exc

    # shlex rejects a backslash at end of input; doubling it keeps it literal and
    # still reports an unclosed double quote if the backslash sat inside one.
    try:
        return _split(expansion + "\\")
    except ValueError as exc:
        raise MalformedExpansionError(expansion) from exc


def join_tokens(tokens: Sequence[str]) -> str:
    """Render ``tokens`` as one expansion string that re-tokenizes to the same list."""

    return shlex.join(tokens)


def _split(value: str) -> list[str]:
    lexer = shlex.shlex(value, posix=True)
    lexer.whitespace = _WHITESPACE
    lexer.whitespace_split = True
    lexer.commenters = ""
    return list(lexer)


__all__ = ["join_tokens", "tokenize"]
