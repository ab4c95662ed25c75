"""An interactive shell over an in-memory MBR disk with four FAT16 partitions."""

__version__ = "0.1.0"