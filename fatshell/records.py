"""The 32-byte FAT16 directory entry."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

RECORD_SIZE = 32
NAME_LEN = 8
EXT_LEN = 3

_LAYOUT = struct.Struct("<8s3sB10sHHHI")


class EntryType(IntEnum):
    """Attribute byte values of a directory entry."""

    READ_WRITE = 0x00
    READ_ONLY = 0x01
    HIDDEN = 0x02
    SYSTEM = 0x04
    VOLUME = 0x08
    DIRECTORY = 0x10
    ARCHIVE = 0x20


_LABELS = {
    EntryType.READ_WRITE: "r&w",
    EntryType.READ_ONLY: "r-o",
    EntryType.HIDDEN: "hid",
    EntryType.SYSTEM: "sys",
    EntryType.VOLUME: "vol",
    EntryType.DIRECTORY: "dir",
    EntryType.ARCHIVE: "arc",
}


def type_label(entry_type: int) -> str:
    """Three-letter label of an attribute byte, ``unk`` when unknown."""
    try:
        return _LABELS[EntryType(entry_type)]
    except ValueError:
        return "unk"


def _as_bytes(value: str | bytes) -> bytes:
    if isinstance(value, str):
        return value.encode("latin-1")
    return bytes(value)


def _cstr(value: bytes) -> bytes:
    return value.split(b"\0", 1)[0]


def _fixed(value: str | bytes, width: int, what: str) -> bytes:
    data = _as_bytes(value).rstrip(b"\0")
    if len(data) > width:
        raise ValueError(f"{what} longer than {width} bytes: {data!r}")
    return data


@dataclass
class Record:
    """A directory entry; name and ext are held without NUL padding."""

    name: bytes = b""
    ext: bytes = b""
    kind: int = 0
    reserved: bytes = bytes(10)
    time: int = 0
    date: int = 0
    cluster: int = 0
    size: int = 0

    def __post_init__(self) -> None:
        self.name = _fixed(self.name, NAME_LEN, "name")
        self.ext = _fixed(self.ext, EXT_LEN, "extension")
        reserved = _as_bytes(self.reserved)
        if len(reserved) > 10:
            raise ValueError("reserved area longer than 10 bytes")
        self.reserved = reserved.ljust(10, b"\0")

    def pack(self) -> bytes:
        """Serialise to the on-disk 32-byte layout."""
        return _LAYOUT.pack(
            self.name,
            self.ext,
            self.kind & 0xFF,
            self.reserved,
            self.time & 0xFFFF,
            self.date & 0xFFFF,
            self.cluster & 0xFFFF,
            self.size & 0xFFFFFFFF,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> Record:
        """Parse the first 32 bytes of ``data``."""
        if len(data) < RECORD_SIZE:
            raise ValueError(f"a record needs {RECORD_SIZE} bytes, got {len(data)}")
        name, ext, kind, reserved, time, date, cluster, size = _LAYOUT.unpack_from(data)
        return cls(name, ext, kind, reserved, time, date, cluster, size)

    def is_empty(self) -> bool:
        """True when the slot is unused: name, extension and type all zero."""
        return not self.name and not self.ext and self.kind == 0

    def matches(self, name: str | bytes, ext: str | bytes) -> bool:
        """Compare with an 8.3 name the way the C-string fields compare."""
        want_name = _cstr(_as_bytes(name))[:NAME_LEN]
        want_ext = _cstr(_as_bytes(ext))[:EXT_LEN]
        return _cstr(self.name) == want_name and _cstr(self.ext) == want_ext