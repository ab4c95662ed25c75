import io
import sys

import pytest

from fatshell.device import init_disk
from fatshell.fileio import hexdump
from fatshell.session import Session
from fatshell.shell import Shell, help_text, main

DISK = 1 << 20


def make_shell(stdin_text=""):
    disk = init_disk(DISK)
    out = io.StringIO()
    shell = Shell(Session(disk.partitions), io.StringIO(stdin_text), out)
    return shell, out


def run_line(shell, out, line):
    out.seek(0)
    out.truncate()
    result = shell.execute(line)
    return result, out.getvalue()


def test_help_text_lists_commands():
    text = help_text()
    assert text.startswith("Commands:\n")
    assert "exit                    : Exit shell\n" in text


def test_help_command_prints_help():
    shell, out = make_shell()
    assert run_line(shell, out, "help") == (True, help_text())


def test_fresh_root_lists_dot_entries():
    shell, out = make_shell()
    _, text = run_line(shell, out, "ls")
    assert "|.|" in text
    assert "|..|" in text
    assert all(line.startswith("dir") for line in text.splitlines())


def test_unknown_command():
    shell, out = make_shell()
    assert run_line(shell, out, "foo bar") == (True, "command not found: foo\n")


def test_missing_arguments():
    shell, out = make_shell()
    assert run_line(shell, out, "mkdir")[1] == "Missing arguments\n"


def test_prefix_matching_for_ls():
    shell, out = make_shell()
    _, plain = run_line(shell, out, "ls")
    _, prefixed = run_line(shell, out, "lsx")
    assert prefixed == plain


def test_open_requires_exact_word():
    shell, out = make_shell()
    assert run_line(shell, out, "openx a 1")[1] == "command not found: openx\n"


def test_exit_stops():
    shell, out = make_shell()
    assert run_line(shell, out, "exit") == (False, "Exiting...\n")


def test_mkdir_cd_and_prompt():
    shell, out = make_shell()
    run_line(shell, out, "mkdir docs")
    _, listing = run_line(shell, out, "ls")
    assert "|docs|" in listing
    run_line(shell, out, "cd docs")
    assert shell.session.prompt() == "/docs/ $ "
    run_line(shell, out, "cd ..")
    assert shell.session.prompt() == "/ $ "


def test_errors_are_printed():
    shell, out = make_shell()
    assert run_line(shell, out, "cd nowhere")[1] == "No such directory: nowhere\n"


def test_part_switches_partition():
    shell, out = make_shell()
    assert run_line(shell, out, "part 2")[1] == "Change partition to 2\n"
    assert shell.session.index == 2
    assert run_line(shell, out, "part 7")[1] == "Invalid partition index\n"
    assert shell.session.index == 2


def test_write_then_read_round_trip():
    shell, out = make_shell("hello")
    run_line(shell, out, "open f.txt 1")
    assert shell.session.prompt() == "/f.txt $ "
    _, written = run_line(shell, out, "write 5")
    assert written == "Writing 5 bytes:\n> Writed 5 bytes\n"
    _, read = run_line(shell, out, "read 5")
    assert read == "Read 5 bytes:\n" + hexdump(b"hello")


def test_write_without_open_file():
    shell, out = make_shell()
    assert run_line(shell, out, "write 3")[1] == "Open a file first\n"


def test_write_in_read_only_mode():
    shell, out = make_shell("abc")
    run_line(shell, out, "open f.txt 1")
    run_line(shell, out, "write 3")
    run_line(shell, out, "close")
    run_line(shell, out, "open f.txt 0")
    assert run_line(shell, out, "write 3")[1] == "Read only mode\n"


def test_delete_directory():
    shell, out = make_shell()
    run_line(shell, out, "mkdir gone")
    run_line(shell, out, "delete gone")
    _, listing = run_line(shell, out, "ls")
    assert "|gone|" not in listing


def test_run_until_exit():
    shell, out = make_shell("mkdir a\ncd a\nexit\nls\n")
    shell.run()
    text = out.getvalue()
    assert "/a/ $ " in text
    assert text.endswith("Exiting...\n")


def test_run_stops_at_end_of_input():
    shell, out = make_shell("mkdir a\n")
    shell.run()
    assert out.getvalue() == "/ $ / $ "


def test_main_starts_shell(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("exit\n"))
    assert main(["--size", str(DISK)]) == 0
    text = capsys.readouterr().out
    assert text.startswith("Disk format success\nNow loading disk\nDisk loaded\n")
    assert text.endswith("Exiting...\n")


def test_main_reports_init_failure(capsys):
    assert main(["--size", "100"]) == 1
    assert "Init failed." in capsys.readouterr().out


@pytest.mark.parametrize("line", ["close", "read 4"])
def test_file_commands_need_open_file(line):
    shell, out = make_shell()
    _, text = run_line(shell, out, line)
    assert text in ("Not opening a file\n", "Open a file first\n")