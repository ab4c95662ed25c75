import pytest

from fatshell.session import PathNode, Session


@pytest.fixture
def session():
    return Session(["p0", "p1", "p2", "p3"])


def test_prompt_at_root(session):
    assert session.prompt() == "/ $ "


def test_prompt_with_directories_and_file(session):
    session.push(PathNode("a", 100))
    session.push(PathNode("b.txt", 200, is_file=True))
    assert session.prompt() == "/a/b.txt $ "


def test_pop_returns_last_node(session):
    first = PathNode("a", 1)
    second = PathNode("b", 2)
    session.push(first)
    session.push(second)
    assert session.pop() == second
    assert session.path == (first,)


def test_pop_at_root_returns_none(session):
    assert session.pop() is None
    assert session.path == ()


def test_state_is_kept_per_partition(session):
    session.push(PathNode("docs", 64))
    session.cwd = 7
    session.open_file = "handle"
    session.index = 2
    assert session.prompt() == "/ $ "
    assert session.cwd == 0
    assert session.is_file_open is False
    session.index = 0
    assert session.cwd == 7
    assert session.open_file == "handle"
    assert session.prompt() == "/docs/ $ "


def test_partition_follows_index(session):
    session.index = 3
    assert session.partition == "p3"


@pytest.mark.parametrize("bad", [-1, 4])
def test_index_out_of_range(session, bad):
    session.index = 2
    with pytest.raises(ValueError):
        session.index = bad
    assert session.index == 2
    assert session.partition == "p2"


def test_empty_partition_list_rejected():
    with pytest.raises(ValueError):
        Session([])