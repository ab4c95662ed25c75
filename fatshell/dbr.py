"""FAT16 boot sector layout and partition formatting."""

from __future__ import annotations

import struct

from fatshell.fattime import fat_time_date
from fatshell.mbr import SECTOR_SIZE
from fatshell.records import RECORD_SIZE, EntryType, Record

CLUSTER_SIZE = 4096
SECTORS_PER_CLUSTER = 8
SECTORS_PER_FAT_OFFSET = 22
VOLUME_ID_OFFSET = 39
LAST_CLUSTER = 0xFFFF

_DBR = struct.Struct("<3s8sHBHBHHBHHHIIBBBI11s8s448sH")


def sectors_per_fat(sector_count: int) -> int:
    """Number of sectors one FAT copy takes for a partition of this size."""
    entries_bytes = max(sector_count - 1, 0) * 2
    return -(-entries_bytes // (4 + SECTOR_SIZE * 8))


def format_partition(buf: bytearray, offset: int, index: int, sector_count: int) -> int:
    """Lay down a boot sector, two empty FATs and a root directory.

    ``offset`` is the byte position of the partition. Returns the number
    of sectors per FAT.
    """
    spf = sectors_per_fat(sector_count)
    big = sector_count > 0xFFFF
    _DBR.pack_into(
        buf,
        offset,
        b"\xeb\x3c\x90",
        b"MSDOS1.7",
        SECTOR_SIZE,
        SECTORS_PER_CLUSTER,
        1,
        2,
        0xFFFF,
        0 if big else sector_count,
        0xF0,
        spf,
        256,
        (sector_count >> 8) & 0xFFFF,
        0,
        sector_count if big else 0,
        0,
        0,
        0,
        index & 0xFFFFFFFF,
        bytes([index & 0xFF]),
        b"FAT16",
        b"",
        0xAA55,
    )

    fat_bytes = spf * SECTOR_SIZE
    fat1 = offset + SECTOR_SIZE
    fat2 = fat1 + fat_bytes
    root = fat2 + fat_bytes
    buf[fat1:root] = bytes(2 * fat_bytes)
    buf[root:root + CLUSTER_SIZE] = bytes(CLUSTER_SIZE)

    time, date = fat_time_date()
    for position, name in enumerate((".", "..")):
        entry = Record(name=name, kind=EntryType.DIRECTORY, time=time, date=date,
                       cluster=0, size=CLUSTER_SIZE)
        start = root + position * RECORD_SIZE
        buf[start:start + RECORD_SIZE] = entry.pack()

    struct.pack_into("<H", buf, fat1, LAST_CLUSTER)
    struct.pack_into("<H", buf, fat2, LAST_CLUSTER)
    return spf