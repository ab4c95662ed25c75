"""The interactive command shell and its entry point."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TextIO

from fatshell.device import DISK_SIZE, Disk
from fatshell.directory import cd, ls, mkdir
from fatshell.errors import FsError
from fatshell.fileio import READ_ONLY, REWIND, close_file, hexdump, open_file, read_file, write_file
from fatshell.partition_ops import delete, part
from fatshell.session import Session
from fatshell.volume import load_partitions

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_HELP_LINES = (
    "Commands:",
    "part <index>            : Change current partition",
    "                          index = 0, 1, 2, 3",
    "mkdir <dir name>        : Create a directory",
    "ls                      : Show all entities in current directory",
    "cd <dir name>           : Change work directory",
    "open <file name> <mode> : Open a file",
    "                          mode = 0: read-only mode ",
    "                                    (file must exists)",
    "                          mode = 1: read-write mode",
    "                          mode = 2: read-write-append mode",
    "read <n>                : Read n bytes from the file opened until end of file",
    "                          n = -1 means read from the first byte of the file",
    "write <n>               : Write n bytes to the file opened",
    "                          n = -1 means write from the first byte of the file",
    "delete <file/dir name>  : Delete a file or a directory if not empty",
    "help                    : Print this message",
    "exit                    : Exit shell",
)


def help_text() -> str:
    """The list of commands the shell understands."""
    return "".join(f"{line}\n" for line in _HELP_LINES)


def _atoi(text: str | None) -> int:
    match = _LEADING_INT.match(text or "")
    return int(match.group(1)) if match else 0


@dataclass(frozen=True)
class _Command:
    op: str
    length: int
    needs_arg: bool
    handler: Callable[[str | None], str | None]

    def matches(self, word: str) -> bool:
        # Compares the first ``length`` characters, terminator included,
        # so some commands accept any word they prefix and others only themselves.
        return (word + "\0")[:self.length] == (self.op + "\0")[:self.length]


class Shell:
    """Reads command lines and runs them against a session."""

    def __init__(
        self,
        session: Session,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.session = session
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self._exiting = False
        self._commands = (
            _Command("mkdir", 5, True, self._mkdir),
            _Command("ls", 2, False, self._ls),
            _Command("delete", 6, True, self._delete),
            _Command("open", 5, True, self._open),
            _Command("read", 5, True, self._read),
            _Command("write", 5, True, self._write),
            _Command("close", 5, False, self._close),
            _Command("exit", 4, False, self._exit),
            _Command("cd", 2, True, self._cd),
            _Command("part", 4, True, self._part),
            _Command("help", 4, False, self._help),
        )

    def _emit(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _mkdir(self, arg: str | None) -> None:
        mkdir(self.session, arg)

    def _ls(self, arg: str | None) -> str:
        return ls(self.session, arg)

    def _delete(self, arg: str | None) -> None:
        delete(self.session, arg)

    def _open(self, arg: str | None) -> None:
        open_file(self.session, arg)

    def _close(self, arg: str | None) -> None:
        close_file(self.session, arg)

    def _cd(self, arg: str | None) -> None:
        cd(self.session, arg)

    def _part(self, arg: str | None) -> str:
        return f"Change partition to {part(self.session, arg)}\n"

    def _help(self, arg: str | None) -> str:
        return help_text()

    def _exit(self, arg: str | None) -> str:
        self._exiting = True
        return "Exiting...\n"

    def _read(self, arg: str | None) -> str | None:
        data = read_file(self.session, arg)
        if data is None:
            return None
        return f"Read {len(data)} bytes:\n{hexdump(data)}"

    def _write(self, arg: str | None) -> str | None:
        handle = self.session.open_file
        count = _atoi(arg)
        if handle is None or handle.mode == READ_ONLY or count == REWIND:
            # Raises the matching error, or rewinds the write position.
            write_file(self.session, arg, b"")
            return None
        count &= 0xFFFFFFFF
        self._emit(f"Writing {count} bytes:\n> ")
        data = self.stdin.read(count)
        written = write_file(self.session, arg, data)
        return f"Writed {written} bytes\n"

    def execute(self, line: str) -> bool:
        """Run one command line; returns False once the shell should stop."""
        word, sep, rest = line.partition(" ")
        arg = rest if sep else None
        for command in self._commands:
            if not command.matches(word):
                continue
            if arg is None and command.needs_arg:
                self._emit("Missing arguments\n")
                return True
            try:
                output = command.handler(arg)
            except FsError as exc:
                self._emit(f"{exc}\n")
                return True
            if output:
                self._emit(output)
            return not self._exiting
        self._emit(f"command not found: {word}\n")
        return True

    def run(self) -> None:
        """Prompt, read and execute commands until exit or end of input."""
        while True:
            self._emit(self.session.prompt())
            line = self.stdin.readline()
            if not line:
                return
            if not self.execute(line.rstrip("\n")):
                return


def main(argv: Sequence[str] | None = None) -> int:
    """Format an in-memory disk and start the shell on it."""
    parser = argparse.ArgumentParser(description="Shell over an in-memory FAT16 disk.")
    parser.add_argument("--size", type=int, default=DISK_SIZE,
                        help="disk size in bytes")
    options = parser.parse_args(argv)

    try:
        disk = Disk(options.size)
        disk.format()
        print("Disk format success\nNow loading disk")
        disk.partitions = load_partitions(disk.data)
        print("Disk loaded")
    except (ValueError, FsError) as exc:
        print(exc, file=sys.stderr)
        print("Init failed.")
        return 1

    Shell(Session(disk.partitions)).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())