"""Builtin commands and the state they act on."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import TextIO

from minish.environment import Environment, parse_assignment
from minish.quotes import Command
from minish.textutils import split_fields

BUILTINS = frozenset({"pwd", "echo", "env", "cd", "export", "unset", "exit"})

# Argument count the pipeline parser gives to export/unset that must not act.
_IGNORED_ARGC = 42

COMMAND_NOT_FOUND = 127
TOO_MANY_ARGUMENTS = 255


@dataclass
class ShellState:
    """What the builtins read and change: variables, home directory, last status."""

    env: Environment
    home: str | None = None
    status: int = 0
    stdout: TextIO = field(default_factory=lambda: sys.stdout)


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``code``."""

    def __init__(self, code: int = 1) -> None:
        super().__init__(f"shell exit with status {code}")
        self.code = code


def _out(state: ShellState, text: str) -> None:
    state.stdout.write(text)


def is_builtin(name: str | None) -> bool:
    """Tell whether ``name`` is one of the shell's builtin commands."""
    return name in BUILTINS


def cmd_cd(state: ShellState, cmd: Command) -> bool:
    """Change directory; return False only when going home fails."""
    if cmd.argc == 1:
        state.status = 0
        if state.home is None:
            return False
        try:
            os.chdir(state.home)
        except OSError:
            return False
    elif cmd.argc == 2:
        try:
            os.chdir(cmd.option or "")
        except OSError as error:
            _out(state, f"cd: {os.strerror(error.errno or 0)}\n")
            state.status = 1
    return True


def cmd_echo(state: ShellState, cmd: Command) -> None:
    """Print the option text followed by a newline."""
    option = cmd.option
    if option and option.startswith("-n"):
        if option == "-n":
            state.status = 0
            return
        if option[2] != " ":
            _out(state, option)
        else:
            _out(state, option[3:])
    elif option == "$?":
        _out(state, str(state.status))
    elif option:
        _out(state, option)
    state.status = 0
    _out(state, "\n")


def cmd_pwd(state: ShellState, cmd: Command) -> None:
    """Print the current working directory."""
    _out(state, os.getcwd())
    state.status = 0
    _out(state, "\n")


def cmd_exit(state: ShellState, cmd: Command) -> None:
    """Leave the shell by raising ShellExit, unless no arguments were counted."""
    if cmd.argc in (1, 2):
        state.status = 1
        if cmd.option and not all(char in "0123456789" for char in cmd.option):
            _out(state, f"{cmd.command}: $s: a numeric argument required\n")
            raise ShellExit(1)
        _out(state, "\nexit\n")
        raise ShellExit(1)
    if cmd.argc == 0:
        return
    _out(state, "\nexit: too many arguments")
    _out(state, "\n")
    state.status = TOO_MANY_ARGUMENTS
    raise ShellExit(1)


def cmd_env(state: ShellState, cmd: Command) -> None:
    """Print every variable that has a value."""
    if not state.env.names():
        return
    _out(state, state.env.format_env())
    state.status = 0


def cmd_export(state: ShellState, cmd: Command) -> None:
    """List exports when called bare, otherwise set each ``NAME[=value]`` given."""
    state.env.sort_exports()
    if cmd.argc == 1:
        _out(state, state.env.format_export())
    if cmd.argc > 1 and cmd.argc != _IGNORED_ARGC:
        for word in split_fields(cmd.option or "", " "):
            try:
                state.env.export(word)
            except ValueError:
                continue


def cmd_unset(state: ShellState, cmd: Command) -> None:
    """Remove each named variable from the environment and the export list."""
    if cmd.argc <= 1:
        return
    if cmd.argc != _IGNORED_ARGC:
        for word in split_fields(cmd.option or "", " "):
            try:
                name, _ = parse_assignment(word)
            except ValueError:
                continue
            state.env.unset(name)
    state.status = 0


def run_builtin(state: ShellState, cmd: Command) -> bool:
    """Run ``cmd`` as a builtin, reporting unknown names; False when ``cd`` home fails."""
    name = cmd.command
    if name == "pwd":
        cmd_pwd(state, cmd)
    elif name == "cd":
        return cmd_cd(state, cmd)
    elif name == "echo":
        cmd_echo(state, cmd)
    elif name == "exit":
        cmd_exit(state, cmd)
    elif name == "env":
        cmd_env(state, cmd)
    elif name == "export":
        cmd_export(state, cmd)
    elif name == "unset":
        cmd_unset(state, cmd)
    elif name != "$?":
        _out(state, f"{name}: command not found\n")
        state.status = COMMAND_NOT_FOUND
    return True