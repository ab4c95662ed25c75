"""Regular files: opening, reading, writing, closing and deleting."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from fatshell.dbr import CLUSTER_SIZE
from fatshell.errors import FatCorruptedError, FsError
from fatshell.fattime import fat_time_date
from fatshell.names import display_name, split_name
from fatshell.records import RECORD_SIZE, EntryType, Record
from fatshell.session import PathNode, Session
from fatshell.volume import LAST_CLUSTER, RECORDS_PER_CLUSTER, Partition

READ_ONLY = 0
READ_WRITE = 1
APPEND = 2
_MODES = (READ_ONLY, READ_WRITE, APPEND)
REWIND = -1

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class OpenFile:
    """A file opened on a partition, with separate read and write positions."""

    record_offset: int
    cluster: int
    mode: int
    size: int
    read_pos: int = 0
    write_pos: int = 0


def _atoi(text: str | None) -> int:
    match = _LEADING_INT.match(text or "")
    return int(match.group(1)) if match else 0


def _encode(part: str) -> bytes:
    try:
        return part.encode("latin-1")
    except UnicodeEncodeError:
        raise FsError(f"Invalid name: {part}") from None


def _entries(partition: Partition, start: int) -> Iterator[tuple[int, Record]]:
    for clust in partition.chain(start):
        base = partition.cluster_offset(clust)
        for slot in range(RECORDS_PER_CLUSTER):
            offset = base + slot * RECORD_SIZE
            yield offset, partition.read_record(offset)


def _clear_cluster(partition: Partition, clust: int) -> None:
    start = partition.cluster_offset(clust)
    partition.data[start:start + CLUSTER_SIZE] = bytes(CLUSTER_SIZE)


def _cluster_count(size: int) -> int:
    return max(1, -(-size // CLUSTER_SIZE))


def delete_file(partition: Partition, record_offset: int) -> None:
    """Free every cluster of a file and clear its directory entry."""
    rec = partition.read_record(record_offset)
    if rec.cluster == 0:
        raise FatCorruptedError()
    for clust in list(partition.chain(rec.cluster)):
        _clear_cluster(partition, clust)
        partition.set_fat(clust, 0)
    partition.write_record(record_offset, Record())


def find_file(
    partition: Partition, start_cluster: int, name: str, ext: str
) -> tuple[int | None, bool]:
    """Look a file up in the directory starting at ``start_cluster``.

    Returns ``(offset, True)`` for a matching file, otherwise
    ``(first free slot or None, False)``. Raises FsError when the name
    belongs to a directory.
    """
    raw_name, raw_ext = _encode(name), _encode(ext)
    empty = None
    for offset, rec in _entries(partition, start_cluster):
        if rec.is_empty():
            if empty is None:
                empty = offset
            continue
        if rec.matches(raw_name, raw_ext):
            if rec.kind == EntryType.DIRECTORY:
                raise FsError("A directory with given file name already exists")
            return offset, True
    return empty, False


def _create_file(partition: Partition, directory: int, slot: int | None) -> int:
    """Allocate a data cluster and an entry for a new empty file."""
    file_clust = partition.find_free()
    if file_clust is None:
        raise FsError("Partition full")
    if slot is None:
        extra = partition.find_free(file_clust + 1)
        if extra is None:
            raise FsError("Partition full")
        last = list(partition.chain(directory))[-1]
        partition.set_fat(last, extra)
        partition.set_fat(extra, LAST_CLUSTER)
        _clear_cluster(partition, extra)
        slot = partition.cluster_offset(extra)
    partition.set_fat(file_clust, LAST_CLUSTER)
    _clear_cluster(partition, file_clust)
    time, date = fat_time_date()
    partition.write_record(slot, Record(cluster=file_clust, time=time, date=date))
    return slot


def open_file(session: Session, args: str | None) -> OpenFile:
    """Open ``"<name> <mode>"``: 0 read-only, 1 read-write, 2 append.

    Modes 1 and 2 create the file when it does not exist.
    """
    if session.is_file_open:
        raise FsError("Already opening a file")
    target, sep, mode_text = (args or "").partition(" ")
    if not sep:
        raise FsError("Missing argument: mode")
    name, ext = split_name(target)
    mode = _atoi(mode_text)
    partition = session.partition

    offset, found = find_file(partition, session.cwd, name, ext)
    if not found and mode == READ_ONLY:
        raise FsError(f"No such file: {target}")
    if mode not in _MODES:
        raise FsError("Invalid mode")

    if mode == READ_ONLY:
        rec = partition.read_record(offset)
    else:
        if not found:
            offset = _create_file(partition, session.cwd, offset)
        rec = partition.read_record(offset)
        rec.name = _encode(name)
        rec.ext = _encode(ext)
        rec.kind = EntryType.READ_WRITE
        partition.write_record(offset, rec)

    handle = OpenFile(record_offset=offset, cluster=rec.cluster, mode=mode, size=rec.size)
    if mode == APPEND:
        handle.write_pos = rec.size
    session.open_file = handle
    session.push(PathNode(display_name(name, ext), offset, is_file=True))
    return handle


def close_file(session: Session, args: str | None = None) -> None:
    """Close the file opened on the current partition."""
    if args:
        raise FsError("Too many arguments")
    if not session.is_file_open:
        raise FsError("Not opening a file")
    session.open_file = None
    if session.pop() is None:
        raise FsError("Broken dir buffer")


def _require_open(session: Session) -> OpenFile:
    if not session.is_file_open:
        raise FsError("Open a file first")
    return session.open_file


def _load(partition: Partition, first: int, pos: int, length: int) -> bytes:
    if length <= 0:
        return b""
    content = b"".join(
        bytes(partition.data[start:start + CLUSTER_SIZE])
        for start in map(partition.cluster_offset, partition.chain(first))
    )
    return content[pos:pos + length]


def _store(partition: Partition, first: int, pos: int, data: bytes) -> None:
    clusters = list(partition.chain(first))
    view = memoryview(data)
    while view:
        index, within = divmod(pos, CLUSTER_SIZE)
        chunk = view[:CLUSTER_SIZE - within]
        start = partition.cluster_offset(clusters[index]) + within
        partition.data[start:start + len(chunk)] = chunk
        pos += len(chunk)
        view = view[len(chunk):]


def _extend(partition: Partition, first: int, needed: int, count: int) -> None:
    fresh: list[int] = []
    start = 0
    while len(fresh) < needed:
        clust = partition.find_free(start)
        if clust is None:
            raise FsError(f"Not enough space for {count} bytes")
        fresh.append(clust)
        start = clust + 1
    last = list(partition.chain(first))[-1]
    for clust in fresh:
        _clear_cluster(partition, clust)
        partition.set_fat(last, clust)
        last = clust
    partition.set_fat(last, LAST_CLUSTER)


def read_file(session: Session, args: str | None) -> bytes | None:
    """Read up to ``args`` bytes; ``-1`` rewinds and returns None."""
    handle = _require_open(session)
    count = _atoi(args)
    if count == REWIND:
        handle.read_pos = 0
        return None
    count &= 0xFFFFFFFF
    real = max(0, min(handle.size - handle.read_pos, count))
    data = _load(session.partition, handle.cluster, handle.read_pos, real)
    handle.read_pos += real
    return data


def _as_bytes(data: bytes | bytearray | str) -> bytes:
    if isinstance(data, str):
        try:
            return data.encode("latin-1")
        except UnicodeEncodeError:
            raise FsError("Data holds characters that cannot be stored") from None
    return bytes(data)


def write_file(session: Session, args: str | None, data: bytes | bytearray | str) -> int | None:
    """Write ``args`` bytes taken from ``data``; ``-1`` rewinds and returns None.

    Returns the number of bytes written.
    """
    handle = _require_open(session)
    if handle.mode == READ_ONLY:
        raise FsError("Read only mode")
    count = _atoi(args)
    if count == REWIND:
        handle.write_pos = 0
        return None
    count &= 0xFFFFFFFF
    payload = _as_bytes(data)[:count]
    if len(payload) < count:
        raise FsError(f"Expected {count} bytes of data, got {len(payload)}")

    partition = session.partition
    new_size = handle.write_pos + count
    if new_size > handle.size:
        needed = _cluster_count(new_size) - _cluster_count(handle.size)
        _extend(partition, handle.cluster, needed, count)
        handle.size = new_size
    _store(partition, handle.cluster, handle.write_pos, payload)
    handle.write_pos = new_size

    rec = partition.read_record(handle.record_offset)
    rec.size = handle.size
    partition.write_record(handle.record_offset, rec)
    return count


def hexdump(data: bytes) -> str:
    """Rows of 16 bytes: row number, hex bytes and printable characters."""
    lines = []
    for row, start in enumerate(range(0, len(data), 16)):
        chunk = data[start:start + 16]
        hex_part = "".join(f"{byte:02X} " for byte in chunk)
        text = "".join(chr(byte) if 31 < byte < 127 else "." for byte in chunk)
        lines.append(f"{row} | {hex_part}| {text} |\n")
    return "".join(lines)