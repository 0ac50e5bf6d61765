import io
import os
from pathlib import Path

import pytest

from minish.builtins import (
    ShellExit,
    ShellState,
    cmd_cd,
    cmd_echo,
    cmd_env,
    cmd_exit,
    cmd_export,
    cmd_pwd,
    cmd_unset,
    is_builtin,
    run_builtin,
)
from minish.environment import Environment
from minish.quotes import Command


def make_state(entries=("PATH=/bin", "HOME=/home/user"), home=None, status=0):
    return ShellState(
        env=Environment(list(entries)), home=home, status=status, stdout=io.StringIO()
    )


def output(state):
    return state.stdout.getvalue()


@pytest.mark.parametrize(
    "name, expected",
    [("echo", True), ("pwd", True), ("exit", True), ("ls", False), (None, False)],
)
def test_is_builtin(name, expected):
    assert is_builtin(name) is expected


def test_echo_prints_option_with_newline():
    state = make_state(status=5)
    cmd_echo(state, Command(command="echo", option="hello world"))
    assert output(state) == "hello world\n"
    assert state.status == 0


def test_echo_without_option_prints_newline():
    state = make_state()
    cmd_echo(state, Command(command="echo"))
    assert output(state) == "\n"


def test_echo_bare_dash_n_prints_nothing():
    state = make_state(status=3)
    cmd_echo(state, Command(command="echo", option="-n"))
    assert output(state) == ""
    assert state.status == 0


def test_echo_dash_n_with_text_drops_flag():
    state = make_state()
    cmd_echo(state, Command(command="echo", option="-n hi"))
    assert output(state) == "hi\n"


def test_echo_dash_n_glued_keeps_text():
    state = make_state()
    cmd_echo(state, Command(command="echo", option="-nx"))
    assert output(state) == "-nx\n"


def test_echo_status_query_prints_previous_status():
    state = make_state(status=127)
    cmd_echo(state, Command(command="echo", option="$?"))
    assert output(state) == "127\n"
    assert state.status == 0


def test_pwd_prints_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state = make_state(status=2)
    cmd_pwd(state, Command(command="pwd"))
    assert output(state) == os.getcwd() + "\n"
    assert state.status == 0


def test_cd_to_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "sub"
    target.mkdir()
    state = make_state()
    assert cmd_cd(state, Command(command="cd", option=str(target), argc=2)) is True
    assert Path(os.getcwd()).samefile(target)


def test_cd_missing_directory_reports_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state = make_state()
    missing = str(tmp_path / "missing")
    assert cmd_cd(state, Command(command="cd", option=missing, argc=2)) is True
    assert output(state).startswith("cd: ")
    assert state.status == 1
    assert Path(os.getcwd()).samefile(tmp_path)


def test_cd_without_argument_goes_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    state = make_state(home=str(home), status=4)
    assert cmd_cd(state, Command(command="cd", argc=1)) is True
    assert Path(os.getcwd()).samefile(home)
    assert state.status == 0


def test_cd_home_missing_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state = make_state(home=str(tmp_path / "nowhere"))
    assert cmd_cd(state, Command(command="cd", argc=1)) is False
    assert state.status == 0


def test_exit_plain_raises():
    state = make_state()
    with pytest.raises(ShellExit) as info:
        cmd_exit(state, Command(command="exit", argc=1))
    assert info.value.code == 1
    assert output(state) == "\nexit\n"
    assert state.status == 1


def test_exit_non_numeric_argument():
    state = make_state()
    with pytest.raises(ShellExit):
        cmd_exit(state, Command(command="exit", option="abc", argc=2))
    assert output(state) == "exit: $s: a numeric argument required\n"


def test_exit_too_many_arguments():
    state = make_state()
    with pytest.raises(ShellExit):
        cmd_exit(state, Command(command="exit", option="1 2", argc=3))
    assert output(state) == "\nexit: too many arguments\n"
    assert state.status == 255


def test_exit_with_zero_argc_does_nothing():
    state = make_state(status=7)
    cmd_exit(state, Command(command="exit", argc=0))
    assert output(state) == ""
    assert state.status == 7


def test_env_prints_variables():
    state = make_state(status=9)
    cmd_env(state, Command(command="env"))
    assert output(state) == "PATH=/bin\nHOME=/home/user\n"
    assert state.status == 0


def test_export_bare_lists_sorted():
    state = make_state()
    cmd_export(state, Command(command="export", argc=1))
    assert output(state) == 'declare -x HOME="/home/user"\ndeclare -x PATH="/bin"\n'


def test_export_adds_and_updates():
    state = make_state()
    cmd_export(state, Command(command="export", option="NEW=1 PATH=/usr", argc=2))
    assert state.env.get("NEW") == "1"
    assert state.env.get("PATH") == "/usr"


def test_export_ignored_argc_leaves_env():
    state = make_state()
    cmd_export(state, Command(command="export", option="NEW=1", argc=42))
    assert state.env.get("NEW") is None


def test_unset_removes_variable():
    state = make_state(status=3)
    cmd_unset(state, Command(command="unset", option="PATH", argc=2))
    assert state.env.get("PATH") is None
    assert state.env.names() == ["HOME"]
    assert state.status == 0


def test_unset_without_arguments_keeps_status():
    state = make_state(status=3)
    cmd_unset(state, Command(command="unset", argc=1))
    assert state.status == 3
    assert state.env.names() == ["PATH", "HOME"]


def test_run_builtin_unknown_command():
    state = make_state()
    assert run_builtin(state, Command(command="foo")) is True
    assert output(state) == "foo: command not found\n"
    assert state.status == 127


def test_run_builtin_status_query_is_silent():
    state = make_state(status=4)
    assert run_builtin(state, Command(command="$?")) is True
    assert output(state) == ""
    assert state.status == 4


def test_run_builtin_dispatches_echo():
    state = make_state()
    run_builtin(state, Command(command="echo", option="hi"))
    assert output(state) == "hi\n"


def test_run_builtin_cd_home_failure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state = make_state(home=str(tmp_path / "absent"))
    assert run_builtin(state, Command(command="cd", argc=1)) is False