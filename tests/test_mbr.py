import pytest

from fatshell.mbr import (
    FAT16_TYPE,
    SECTOR_SIZE,
    chs,
    format_mbr,
    read_partition_table,
)

SIZE = 8 * 1024 * 1024


@pytest.fixture
def disk():
    return bytearray(SIZE)


def test_signature_written(disk):
    format_mbr(disk)
    assert disk[510:512] == b"\x55\xaa"


def test_table_round_trip(disk):
    written = format_mbr(disk)
    assert read_partition_table(disk) == written
    assert len(written) == 4


def test_partitions_are_contiguous(disk):
    entries = format_mbr(disk)
    assert entries[0].sector_offset == 1
    for prev, nxt in zip(entries, entries[1:]):
        assert nxt.sector_offset == prev.sector_offset + prev.sector_count
    last = entries[-1]
    assert last.sector_offset + last.sector_count <= SIZE // SECTOR_SIZE - 1


def test_partition_type_and_chs(disk):
    for entry in format_mbr(disk):
        assert entry.partition_type == FAT16_TYPE
        assert entry.valid == 0
        cyl, head, sec = chs(entry.sector_offset)
        assert (entry.cylinder_start, entry.head_start, entry.sector_start) == (cyl, head, sec)
        end = entry.sector_offset + entry.sector_count
        assert (entry.cylinder_end, entry.head_end, entry.sector_end) == chs(end)


def test_chs_first_cylinder_boundary():
    assert chs(16128) == (1, 0, 1)


@pytest.mark.parametrize("block", [0, 1, 62, 63, 16127, 524289, 2097151])
def test_chs_fields_fit_in_bytes(block):
    cyl, head, sec = chs(block)
    assert 0 <= cyl <= 0xFF
    assert 0 <= head <= 0xFF
    assert 1 <= sec <= 63


def test_too_small_disk_rejected():
    with pytest.raises(ValueError):
        format_mbr(bytearray(SECTOR_SIZE * 3))


def test_short_buffer_rejected():
    with pytest.raises(ValueError):
        read_partition_table(bytes(100))