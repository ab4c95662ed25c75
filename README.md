# fatshell

`fatshell` is an interactive shell over a disk image held in memory. When it
starts, it formats the disk with a master boot record and four FAT16
partitions. You can then create directories and move between them, and you can
create, read, write and delete files on any of the four partitions.

## Installation

```
pip install .
```

## Usage

Start the shell:

```
fatshell
```

By default the disk is 1 GiB. That memory is allocated when the shell starts.
You can pick a smaller disk with `--size`, which takes a number of bytes. The
size must be at least 64 KiB and a multiple of 512:

```
fatshell --size 67108864
```

The prompt shows the current path, for example `/docs/ $ `. When a file is open,
its name comes at the end of the path. Each partition keeps its own working
directory and its own open file.

### Commands

| Command                   | What it does                                              |
|---------------------------|-----------------------------------------------------------|
| `part <index>`            | Switch to partition 0, 1, 2 or 3                          |
| `mkdir <dir name>`        | Create a directory                                        |
| `ls`                      | List the named entries of the current directory          |
| `cd <dir name>`           | Change directory (`.` and `..` work)                      |
| `open <file name> <mode>` | Open a file: 0 read-only, 1 read-write, 2 append          |
| `read <n>`                | Read up to `n` bytes and show them as a hex dump; `-1` goes back to the start |
| `write <n>`               | Store the next `n` characters of input; `-1` goes back to the start |
| `close`                   | Close the open file                                       |
| `delete <name>`           | Delete a file, or a directory if it is empty              |
| `help`                    | Show the list of commands                                 |
| `exit`                    | Leave the shell                                           |

The shell also stops at the end of its input.

Names follow the 8.3 rule: at most eight characters for the name and at most
three for the extension. If you open a file that does not exist in mode 1 or 2,
the shell creates it. You cannot create a directory, change directory or delete
a file while a file is open on the current partition.

`write <n>` reads exactly `n` characters from the input, and that count includes
newlines. Anything typed after those characters is read as the next command. If
you end the data with Enter, count the newline in `n`.

If a command fails, the shell prints its error message, for example
`File or directory already exists` or `Partition full`, and waits for the next
command.

### Example session

```
/ $ mkdir docs
/ $ cd docs
/docs/ $ open note.txt 1
/docs/note.txt $ write 6
Writing 6 bytes:
> hello
Writed 6 bytes
/docs/note.txt $ read -1
/docs/note.txt $ read 6
Read 6 bytes:
0 | 68 65 6C 6C 6F 0A | hello. |
/docs/note.txt $ close
/docs/ $ cd ..
/ $ exit
Exiting...
```

`ls` prints one line for each entry: its type (`dir`, `r&w`, ...), its size,
its date and time stamp, and its name between bars. The `.` and `..` entries
are included.

## Using it from Python

You can drive the shell with your own streams:

```python
import io
from fatshell.device import init_disk
from fatshell.session import Session
from fatshell.shell import Shell

disk = init_disk(64 * 1024 * 1024)
session = Session(disk.partitions)
out = io.StringIO()
shell = Shell(session, io.StringIO(), out)
shell.execute("mkdir docs")
shell.execute("ls")
print(out.getvalue())
```

You can also call the operations directly. They raise `fatshell.errors.FsError`
when something goes wrong:

```python
from fatshell.device import init_disk
from fatshell.directory import cd, ls, mkdir
from fatshell.fileio import close_file, open_file, read_file, write_file
from fatshell.session import Session

session = Session(init_disk(64 * 1024 * 1024).partitions)
mkdir(session, "docs")
cd(session, "docs")
open_file(session, "note.txt 1")
write_file(session, "5", b"hello")
read_file(session, "5")      # b"hello"
close_file(session)
print(session.prompt())      # "/docs/ $ "
print(ls(session))
```

The lower layers are available as well. `fatshell.mbr` holds the partition
table, `fatshell.dbr` the boot sector, `fatshell.volume` the mounted
partitions and FAT chains, and `fatshell.records` the 32-byte directory
entries.

## Limitations

The disk exists only in memory, for as long as the shell runs. It is formatted
fresh every time the shell starts. The package cannot save the image to a file
or load one, so nothing you create is kept after you exit.

## Running the tests

```
pip install .[test]
pytest
```