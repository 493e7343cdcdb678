"""Small shared helpers."""

from yxcli.utils.fs import atomic_write, read_text_if_exists

__all__ = ["atomic_write", "read_text_if_exists"]
