"""Splitting user-supplied names into 8.3 name and extension parts."""

from __future__ import annotations

from fatshell.errors import FsError

NAME_LEN = 8
EXT_LEN = 3


def split_name(text: str | None) -> tuple[str, str]:
    """Split ``text`` into an 8.3 ``(name, ext)`` pair.

    Raises FsError when the name is missing or a part is too long.
    """
    if not text:
        raise FsError("Missing directory name")
    if text in (".", ".."):
        return text, ""

    name, dot, ext = text.rpartition(".")
    if not dot:
        if len(text) > NAME_LEN:
            raise FsError("Too long directory name")
        return text, ""
    if len(ext) > EXT_LEN:
        raise FsError("Too long extension name")
    if len(name) > NAME_LEN:
        raise FsError("Too long directory name")
    return name, ext


def display_name(name: str, ext: str) -> str:
    """Join a name and extension the way paths and listings show them."""
    if name and ext:
        return f"{name}.{ext}"
    if name:
        return name
    return f".{ext}"