"""Mounted FAT16 partitions living inside a disk image."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass, field

from fatshell.dbr import CLUSTER_SIZE, SECTORS_PER_FAT_OFFSET, VOLUME_ID_OFFSET
from fatshell.errors import FatCorruptedError
from fatshell.mbr import SECTOR_SIZE, read_partition_table
from fatshell.records import RECORD_SIZE, Record

RECORDS_PER_CLUSTER = CLUSTER_SIZE // RECORD_SIZE
END_OF_CHAIN = 0xFFF8
LAST_CLUSTER = 0xFFFF
FREE_CLUSTER = 0

_U16 = struct.Struct("<H")


@dataclass(eq=False)
class Partition:
    """A FAT16 partition viewed through the shared disk buffer."""

    data: bytearray
    index: int
    offset: int
    sectors_per_fat: int
    sector_count: int
    fat_len: int
    fat1_offset: int = field(init=False)
    fat2_offset: int = field(init=False)
    data_offset: int = field(init=False)

    def __post_init__(self) -> None:
        fat_bytes = self.sectors_per_fat * SECTOR_SIZE
        self.fat1_offset = self.offset + SECTOR_SIZE
        self.fat2_offset = self.fat1_offset + fat_bytes
        self.data_offset = self.fat2_offset + fat_bytes

    def _check(self, clust: int) -> None:
        if not 0 <= clust < self.fat_len:
            raise IndexError(f"cluster {clust} outside 0..{self.fat_len - 1}")

    def __getitem__(self, clust: int) -> int:
        """The primary FAT entry of ``clust``."""
        self._check(clust)
        return _U16.unpack_from(self.data, self.fat1_offset + 2 * clust)[0]

    def cluster_offset(self, clust: int) -> int:
        """Byte position of a cluster inside the disk buffer."""
        self._check(clust)
        return self.data_offset + clust * CLUSTER_SIZE

    def chain(self, start: int) -> Iterator[int]:
        """Yield the clusters of the chain starting at ``start``."""
        clust = start
        for _ in range(self.fat_len):
            yield clust
            nxt = self[clust]
            if nxt >= END_OF_CHAIN:
                return
            if nxt == FREE_CLUSTER or nxt >= self.fat_len:
                raise FatCorruptedError()
            clust = nxt
        raise FatCorruptedError()

    def set_fat(self, clust: int, value: int) -> None:
        """Write ``value`` into both FAT copies for ``clust``."""
        self._check(clust)
        _U16.pack_into(self.data, self.fat1_offset + 2 * clust, value)
        _U16.pack_into(self.data, self.fat2_offset + 2 * clust, value)

    def find_free(self, start: int = 0) -> int | None:
        """First free cluster at or after ``start``, or None when full."""
        for clust in range(max(start, 0), self.fat_len):
            if self[clust] == FREE_CLUSTER:
                return clust
        return None

    def read_record(self, offset: int) -> Record:
        """Parse the directory entry at a byte position of the disk."""
        return Record.from_bytes(self.data[offset:offset + RECORD_SIZE])

    def write_record(self, offset: int, record: Record) -> None:
        """Store a directory entry at a byte position of the disk."""
        self.data[offset:offset + RECORD_SIZE] = record.pack()


def load_partitions(data: bytearray) -> list[Partition]:
    """Mount the four partitions described by the disk's MBR.

    Raises FatCorruptedError when the two FAT copies disagree.
    """
    partitions = []
    for entry in read_partition_table(data):
        offset = entry.sector_offset * SECTOR_SIZE
        spf = _U16.unpack_from(data, offset + SECTORS_PER_FAT_OFFSET)[0]
        volume_id = struct.unpack_from("<I", data, offset + VOLUME_ID_OFFSET)[0]
        fat_len = max(entry.sector_count - 2 * spf, 0) >> 3
        partition = Partition(
            data=data,
            index=volume_id,
            offset=offset,
            sectors_per_fat=spf,
            sector_count=entry.sector_count,
            fat_len=fat_len,
        )
        span = 2 * fat_len
        fat1 = data[partition.fat1_offset:partition.fat1_offset + span]
        fat2 = data[partition.fat2_offset:partition.fat2_offset + span]
        if fat1 != fat2:
            raise FatCorruptedError()
        partitions.append(partition)
    return partitions