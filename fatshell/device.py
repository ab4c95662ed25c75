"""The in-memory disk image and its formatting."""

from __future__ import annotations

from fatshell.dbr import format_partition
from fatshell.mbr import SECTOR_SIZE, format_mbr
from fatshell.volume import Partition, load_partitions

DISK_SIZE = 1 << 30
MIN_DISK_SIZE = 64 * 1024


class Disk:
    """A zero-filled disk image held in memory."""

    def __init__(self, size: int = DISK_SIZE) -> None:
        if size < MIN_DISK_SIZE:
            raise ValueError(f"disk must hold at least {MIN_DISK_SIZE} bytes")
        if size % SECTOR_SIZE:
            raise ValueError(f"disk size must be a multiple of {SECTOR_SIZE}")
        self.data = bytearray(size)
        self.partitions: list[Partition] = []

    def format(self) -> None:
        """Wipe the disk and lay down an MBR with four FAT16 partitions."""
        self.data = bytearray(len(self.data))
        self.partitions = []
        for index, entry in enumerate(format_mbr(self.data)):
            format_partition(
                self.data,
                entry.sector_offset * SECTOR_SIZE,
                index,
                entry.sector_count,
            )


def init_disk(size: int = DISK_SIZE) -> Disk:
    """Create, format and mount a disk."""
    disk = Disk(size)
    disk.format()
    disk.partitions = load_partitions(disk.data)
    return disk