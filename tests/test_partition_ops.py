import pytest

from fatshell.device import init_disk
from fatshell.directory import cd, mkdir
from fatshell.errors import FsError
from fatshell.fileio import close_file, find_file, open_file, write_file
from fatshell.partition_ops import delete, part
from fatshell.session import Session


@pytest.fixture
def session():
    return Session(init_disk(4 * 1024 * 1024).partitions)


def test_part_switches(session):
    assert part(session, "2") == 2
    assert session.index == 2


def test_part_missing_argument(session):
    with pytest.raises(FsError, match="Missing arguments"):
        part(session, None)
    with pytest.raises(FsError, match="Missing arguments"):
        part(session, "")


@pytest.mark.parametrize("arg", ["4", "-1", "200"])
def test_part_invalid_index(session, arg):
    with pytest.raises(FsError, match="Invalid partition index"):
        part(session, arg)
    assert session.index == 0


def test_part_index_wraps_to_byte(session):
    part(session, "2")
    assert part(session, "256") == 0
    assert session.index == 0


def test_part_keeps_open_files_per_partition(session):
    open_file(session, "a.txt 1")
    part(session, "1")
    assert not session.is_file_open
    open_file(session, "b.txt 1")
    part(session, "0")
    assert session.prompt() == "/a.txt $ "
    close_file(session)
    assert not session.is_file_open


@pytest.mark.parametrize("arg", [".", ".."])
def test_delete_dot_names(session, arg):
    with pytest.raises(FsError, match="Invalid file name or directory name"):
        delete(session, arg)


def test_delete_missing(session):
    with pytest.raises(FsError, match="No such file or directory: x"):
        delete(session, "x")


def test_delete_file(session):
    handle = open_file(session, "a.txt 1")
    write_file(session, "3", b"abc")
    close_file(session)
    delete(session, "a.txt")
    _, found = find_file(session.partition, session.cwd, "a", "txt")
    assert not found
    assert session.partition[handle.cluster] == 0


def test_delete_while_file_open(session):
    open_file(session, "a.txt 1")
    with pytest.raises(FsError, match="Opening a file, please close it first"):
        delete(session, "a.txt")
    _, found = find_file(session.partition, session.cwd, "a", "txt")
    assert found


def test_delete_empty_directory(session):
    mkdir(session, "d")
    delete(session, "d")
    with pytest.raises(FsError, match="No such directory: d"):
        cd(session, "d")


def test_delete_non_empty_directory(session):
    mkdir(session, "d")
    cd(session, "d")
    mkdir(session, "e")
    cd(session, "..")
    with pytest.raises(FsError, match="Directory not empty"):
        delete(session, "d")
    cd(session, "d")
    assert session.prompt() == "/d/ $ "