"""Master boot record layout and formatting."""

from __future__ import annotations

import struct
from dataclasses import dataclass

SECTOR_SIZE = 512
TABLE_OFFSET = 446
PARTITION_COUNT = 4
SIGNATURE = b"\x55\xaa"
FAT16_TYPE = 0x04

_ENTRY = struct.Struct("<8BII")
_SECTORS_PER_HEAD = 63
_SECTORS_PER_CYLINDER = 16128  # 63 sectors * 256 heads


@dataclass(frozen=True)
class PartitionEntry:
    """One of the four primary partition table entries."""

    valid: int
    head_start: int
    sector_start: int
    cylinder_start: int
    partition_type: int
    head_end: int
    sector_end: int
    cylinder_end: int
    sector_offset: int
    sector_count: int


def chs(block: int) -> tuple[int, int, int]:
    """Return the ``(cylinder, head, sector)`` bytes stored for a block."""
    cylinder = block // _SECTORS_PER_CYLINDER
    head = (block // _SECTORS_PER_HEAD) & 0xFF
    sector = ((block % _SECTORS_PER_HEAD) + 1) | ((cylinder >> 8) & 3)
    return cylinder & 0xFF, head, sector


def _entry_offset(index: int) -> int:
    return TABLE_OFFSET + index * _ENTRY.size


def format_mbr(buf: bytearray) -> list[PartitionEntry]:
    """Write a four-partition table and boot signature into ``buf``.

    The disk is split into four equal spans, the last one clipped so it
    ends before the final sector. Returns the entries written.
    """
    total = len(buf) // SECTOR_SIZE
    span = total // PARTITION_COUNT
    if span == 0:
        raise ValueError(f"disk of {len(buf)} bytes is too small to partition")
    last = total - 1

    entries = []
    block = 1
    for index in range(PARTITION_COUNT):
        cyl_start, head_start, sec_start = chs(block)
        start = block
        block = min(block + span, last)
        cyl_end, head_end, sec_end = chs(block)
        entry = PartitionEntry(
            valid=0,
            head_start=head_start,
            sector_start=sec_start,
            cylinder_start=cyl_start,
            partition_type=FAT16_TYPE,
            head_end=head_end,
            sector_end=sec_end,
            cylinder_end=cyl_end,
            sector_offset=start,
            sector_count=block - start,
        )
        _ENTRY.pack_into(
            buf,
            _entry_offset(index),
            entry.valid,
            entry.head_start,
            entry.sector_start,
            entry.cylinder_start,
            entry.partition_type,
            entry.head_end,
            entry.sector_end,
            entry.cylinder_end,
            entry.sector_offset,
            entry.sector_count,
        )
        entries.append(entry)
    buf[SECTOR_SIZE - 2:SECTOR_SIZE] = SIGNATURE
    return entries


def read_partition_table(buf: bytes) -> list[PartitionEntry]:
    """Parse the four partition entries of an MBR."""
    if len(buf) < SECTOR_SIZE:
        raise ValueError("buffer is shorter than one sector")
    return [
        PartitionEntry(*_ENTRY.unpack_from(buf, _entry_offset(index)))
        for index in range(PARTITION_COUNT)
    ]