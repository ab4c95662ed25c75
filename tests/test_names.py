import pytest

from fatshell.errors import FsError
from fatshell.names import display_name, split_name


@pytest.mark.parametrize(
    "text, expected",
    [
        ("a.txt", ("a", "txt")),
        ("readme", ("readme", "")),
        (".", (".", "")),
        ("..", ("..", "")),
        (".txt", ("", "txt")),
        ("a.b.c", ("a.b", "c")),
        ("abcdefgh.xyz", ("abcdefgh", "xyz")),
        ("name.", ("name", "")),
    ],
)
def test_split_name_valid(text, expected):
    assert split_name(text) == expected


@pytest.mark.parametrize("text", ["", None])
def test_split_name_missing(text):
    with pytest.raises(FsError, match="Missing"):
        split_name(text)


def test_split_name_too_long_without_extension():
    with pytest.raises(FsError, match="Too long directory name"):
        split_name("abcdefghi")


def test_split_name_too_long_extension():
    with pytest.raises(FsError, match="extension"):
        split_name("a.abcd")


def test_split_name_too_long_name_with_extension():
    with pytest.raises(FsError, match="Too long directory name"):
        split_name("abcdefghi.t")


@pytest.mark.parametrize(
    "name, ext, expected",
    [
        ("a", "txt", "a.txt"),
        ("a", "", "a"),
        ("", "txt", ".txt"),
    ],
)
def test_display_name(name, ext, expected):
    assert display_name(name, ext) == expected


def test_split_then_display_round_trip():
    for text in ["hello.c", "notes", "x.yz"]:
        assert display_name(*split_name(text)) == text