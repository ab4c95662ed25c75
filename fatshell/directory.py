"""Directory commands: listing, creating, entering and removing directories."""

from __future__ import annotations

from collections.abc import Iterator

from fatshell.dbr import CLUSTER_SIZE
from fatshell.errors import FatCorruptedError, FsError
from fatshell.fattime import fat_time_date, format_fat_timestamp
from fatshell.names import display_name, split_name
from fatshell.records import RECORD_SIZE, EntryType, Record, type_label
from fatshell.session import PathNode, Session
from fatshell.volume import LAST_CLUSTER, RECORDS_PER_CLUSTER, Partition

_DOT_NAMES = (b".", b"..")


def _entries(partition: Partition, start: int) -> Iterator[tuple[int, Record]]:
    """Yield ``(offset, record)`` for every slot of a directory chain."""
    for clust in partition.chain(start):
        base = partition.cluster_offset(clust)
        for slot in range(RECORDS_PER_CLUSTER):
            offset = base + slot * RECORD_SIZE
            yield offset, partition.read_record(offset)


def _text(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("latin-1")


def _encode(part: str) -> bytes:
    try:
        return part.encode("latin-1")
    except UnicodeEncodeError:
        raise FsError(f"Invalid name: {part}") from None


def _require_closed(session: Session) -> None:
    if session.is_file_open:
        raise FsError("Opening a file, please close it first")


def _clear_cluster(partition: Partition, clust: int) -> None:
    start = partition.cluster_offset(clust)
    partition.data[start:start + CLUSTER_SIZE] = bytes(CLUSTER_SIZE)


def ls(session: Session, args: str | None = None) -> str:
    """List the current directory, one line per entry with a name."""
    if args:
        raise FsError("Too many arguments")
    lines = []
    for _, rec in _entries(session.partition, session.cwd):
        if not rec.name:
            continue
        name, ext = _text(rec.name), _text(rec.ext)
        shown = f"{name}.{ext}" if ext else name
        stamp = format_fat_timestamp(rec.time, rec.date)
        lines.append(f"{type_label(rec.kind)} {rec.size:4d} {stamp} |{shown}|\n")
    return "".join(lines)


def _grow(session: Session, partition: Partition, start: int) -> int:
    """Append a cluster to a directory chain and return its first slot."""
    last = list(partition.chain(start))[-1]
    new = partition.find_free()
    if new is None:
        raise FsError("Partition full")
    partition.set_fat(last, new)
    partition.set_fat(new, LAST_CLUSTER)
    _clear_cluster(partition, new)
    if session.path:
        owner = session.path[-1].record_offset
        rec = partition.read_record(owner)
        rec.size += CLUSTER_SIZE
        partition.write_record(owner, rec)
    return partition.cluster_offset(new)


def mkdir(session: Session, args: str | None) -> None:
    """Create a directory in the current directory."""
    _require_closed(session)
    name, ext = split_name(args)
    raw_name, raw_ext = _encode(name), _encode(ext)
    partition = session.partition
    cwd = session.cwd

    slot = None
    for offset, rec in _entries(partition, cwd):
        if rec.is_empty():
            if slot is None:
                slot = offset
            continue
        if rec.matches(raw_name, raw_ext):
            raise FsError("File or directory already exists")

    if slot is None:
        slot = _grow(session, partition, cwd)
    new_clust = partition.find_free()
    if new_clust is None:
        raise FsError("Partition full")

    time, date = fat_time_date()
    partition.write_record(slot, Record(
        name=raw_name, ext=raw_ext, kind=EntryType.DIRECTORY,
        time=time, date=date, cluster=new_clust, size=CLUSTER_SIZE,
    ))
    partition.set_fat(new_clust, LAST_CLUSTER)
    _clear_cluster(partition, new_clust)
    base = partition.cluster_offset(new_clust)
    for position, (dot, target) in enumerate(((".", new_clust), ("..", cwd))):
        partition.write_record(base + position * RECORD_SIZE, Record(
            name=dot, kind=EntryType.DIRECTORY, time=time, date=date,
            cluster=target, size=CLUSTER_SIZE,
        ))


def cd(session: Session, args: str | None) -> None:
    """Change the working directory of the current partition."""
    _require_closed(session)
    name, ext = split_name(args)
    raw_name, raw_ext = _encode(name), _encode(ext)
    for offset, rec in _entries(session.partition, session.cwd):
        if rec.is_empty() or not rec.matches(raw_name, raw_ext):
            continue
        if rec.kind == EntryType.READ_WRITE:
            raise FsError(f"{args} is a file")
        if name == ".":
            return
        if name == "..":
            session.pop()
        else:
            session.push(PathNode(display_name(name, ext), offset))
        session.cwd = rec.cluster
        return
    raise FsError(f"No such directory: {args}")


def delete_dir(partition: Partition, record_offset: int) -> None:
    """Remove an empty directory, freeing its clusters and its entry."""
    rec = partition.read_record(record_offset)
    if rec.cluster == 0:
        raise FatCorruptedError()
    clusters = list(partition.chain(rec.cluster))
    for _, entry in _entries(partition, rec.cluster):
        if entry.is_empty():
            continue
        if entry.name in _DOT_NAMES and not entry.ext:
            continue
        raise FsError("Directory not empty")
    for clust in clusters:
        _clear_cluster(partition, clust)
        partition.set_fat(clust, 0)
    partition.write_record(record_offset, Record())