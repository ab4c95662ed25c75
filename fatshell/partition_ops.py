"""Partition-level commands: deleting entries and switching partitions."""

from __future__ import annotations

import re

from fatshell.directory import delete_dir
from fatshell.errors import FsError
from fatshell.fileio import delete_file
from fatshell.names import split_name
from fatshell.records import RECORD_SIZE, EntryType
from fatshell.session import Session
from fatshell.volume import RECORDS_PER_CLUSTER

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_MAX_PARTITION = 3


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _encode(part: str) -> bytes:
    try:
        return part.encode("latin-1")
    except UnicodeEncodeError:
        raise FsError(f"Invalid name: {part}") from None


def delete(session: Session, args: str | None) -> None:
    """Delete a file, or a directory when it is empty."""
    name, ext = split_name(args)
    if name in (".", "..") and not ext:
        raise FsError(f"Invalid file name or directory name: {args}")
    raw_name, raw_ext = _encode(name), _encode(ext)
    partition = session.partition
    for clust in partition.chain(session.cwd):
        base = partition.cluster_offset(clust)
        for slot in range(RECORDS_PER_CLUSTER):
            offset = base + slot * RECORD_SIZE
            rec = partition.read_record(offset)
            if rec.is_empty() or not rec.matches(raw_name, raw_ext):
                continue
            if rec.kind == EntryType.DIRECTORY:
                delete_dir(partition, offset)
            elif session.is_file_open:
                raise FsError("Opening a file, please close it first")
            else:
                delete_file(partition, offset)
            return
    raise FsError(f"No such file or directory: {args}")


def part(session: Session, args: str | None) -> int:
    """Switch to the partition whose index is given; returns it."""
    if not args:
        raise FsError("Missing arguments")
    target = _atoi(args) & 0xFF
    if target > _MAX_PARTITION or target >= len(session.partitions):
        raise FsError("Invalid partition index")
    session.index = target
    return target