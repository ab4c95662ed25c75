"""Per-partition shell state: current directory, path and open file."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from fatshell.volume import Partition


@dataclass
class PathNode:
    """One step of the working path.

    ``record_offset`` is the disk position of the directory entry the step
    was entered through; ``is_file`` marks an opened file at the end of the path.
    """

    name: str
    record_offset: int
    is_file: bool = False


@dataclass
class _PartitionState:
    cwd: int = 0
    path: list[PathNode] = field(default_factory=list)
    open_file: Any = None


class Session:
    """The shell's view of the mounted partitions, one state per partition."""

    def __init__(self, partitions: Sequence[Partition]) -> None:
        self.partitions = list(partitions)
        if not self.partitions:
            raise ValueError("a session needs at least one partition")
        self._states = [_PartitionState() for _ in self.partitions]
        self._index = 0

    @property
    def index(self) -> int:
        """Index of the partition the shell works on."""
        return self._index

    @index.setter
    def index(self, value: int) -> None:
        if not 0 <= value < len(self.partitions):
            raise ValueError(f"partition index {value} out of range")
        self._index = value

    @property
    def _state(self) -> _PartitionState:
        return self._states[self._index]

    @property
    def partition(self) -> Partition:
        """The current partition."""
        return self.partitions[self._index]

    @property
    def cwd(self) -> int:
        """First cluster of the current directory."""
        return self._state.cwd

    @cwd.setter
    def cwd(self, cluster: int) -> None:
        self._state.cwd = cluster

    @property
    def path(self) -> tuple[PathNode, ...]:
        """The working path of the current partition, outermost first."""
        return tuple(self._state.path)

    @property
    def open_file(self) -> Any:
        """The file opened on the current partition, or None."""
        return self._state.open_file

    @open_file.setter
    def open_file(self, value: Any) -> None:
        self._state.open_file = value

    @property
    def is_file_open(self) -> bool:
        """True while a file is open on the current partition."""
        return self._state.open_file is not None

    def push(self, node: PathNode) -> None:
        """Append a step to the working path."""
        self._state.path.append(node)

    def pop(self) -> PathNode | None:
        """Remove and return the last step, or None at the root."""
        path = self._state.path
        return path.pop() if path else None

    def prompt(self) -> str:
        """The prompt showing the working path."""
        parts = "".join(
            node.name if node.is_file else f"{node.name}/" for node in self._state.path
        )
        return f"/{parts} $ "