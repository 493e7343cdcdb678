"""
yx-cli - filesystem helpers

File: src/yxcli/utils/fs.py

Purpose
- Write local state (alias store) without ever leaving a half-written file behind.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path

PathLike = str | os.PathLike[str]

__all__ = ["atomic_write", "read_text_if_exists"]


def atomic_write(path: PathLike, data: bytes | str, *, encoding: str = "utf-8") -> None:
    """
    Atomically write ``data`` to ``path``, creating missing parent directories.

    A sibling temp file is written, fsynced, then moved over the target with
    ``os.replace``; readers observe either the old or the new content.
    """

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target_parent = target.parent.resolve(strict=True)

    fd, temp_name = tempfile.mkstemp(
        prefix=f".{target.name}.",
        suffix=".tmp",
        dir=str(target_parent),
    )
    temp_path = Path(temp_name)
    payload = data if isinstance(data, bytes) else data.encode(encoding)

    try:
        with os.fdopen(fd, "wb") as file_handle:
            file_handle.write(payload)
            file_handle.flush()
            os.fsync(file_handle.fileno())
        os.replace(temp_path, target)
        _fsync_directory(target_parent)
    except Exception:
        with contextlib.suppress(OSError):
            temp_path.unlink(missing_ok=True)
        raise


def read_text_if_exists(path: PathLike, *, encoding: str = "utf-8") -> str | None:
    """Return file text, or ``None`` when ``path`` does not exist."""

    try:
        return Path(path).read_text(encoding=encoding)
    except FileNotFoundError:
        return None


def _fsync_directory(path: Path) -> None:
    # Best effort: not every platform supports fsync on a directory handle.
    if os.name == "nt":
        return

    flags = os.O_RDONLY
    if hasattr(os, "O_DIRECTORY"):
        flags |= os.O_DIRECTORY

    try:
        dir_fd = os.open(path, flags)
    except OSError:
        return

    try:
        os.fsync(dir_fd)
    except OSError:
        return
    finally:
        os.close(dir_fd)
