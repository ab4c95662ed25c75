"""Exceptions raised by the file system and shell operations."""


class FsError(Exception):
    """A file-system operation could not be carried out."""


class FatCorruptedError(FsError):
    """The file allocation table holds an inconsistent chain."""

    def __init__(self, message: str = "FAT corrupted") -> None:
        super().__init__(message)