"""Packing and unpacking of FAT16 time and date words."""

from __future__ import annotations

from datetime import datetime

_EPOCH_YEAR = 1980


def fat_time_date(when: datetime | None = None) -> tuple[int, int]:
    """Return the FAT ``(time, date)`` words for ``when`` (local now by default)."""
    if when is None:
        when = datetime.now()
    year = when.year - _EPOCH_YEAR
    if not 0 <= year <= 0x7F:
        raise ValueError(f"year {when.year} cannot be stored in a FAT date")
    time = (when.hour << 11) | (when.minute << 5) | (when.second >> 1)
    date = (year << 9) | (when.month << 5) | when.day
    return time, date


def format_fat_timestamp(time: int, date: int) -> str:
    """Render FAT time and date words as ``YYYY-MM-DD HH:MM:SS``."""
    year = (date >> 9) + _EPOCH_YEAR
    month = (date >> 5) & 0xF
    day = date & 0x1F
    hour = time >> 11
    minute = (time >> 5) & 0x3F
    second = (time & 0x1F) << 1
    return f"{year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:{second:02d}"