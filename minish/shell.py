"""The interactive shell: reading lines, dispatching commands, pipes and redirections."""

from __future__ import annotations

import copy
import os
import signal
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import TextIO

from minish.builtins import (
    COMMAND_NOT_FOUND,
    ShellExit,
    ShellState,
    is_builtin,
    run_builtin,
)
from minish.environment import Environment
from minish.expansion import expand_unquoted
from minish.parser import (
    ShellSyntaxError,
    TokenType,
    check_syntax,
    count_operators,
    split_commands,
    split_pipeline,
)
from minish.quotes import Command

_ERASE = "\b\b  \b\b"
_EOF_MESSAGE = _ERASE + " exit!\n"
_EOF_STATUS = 130
_MIXED_OPERATORS = "pipe와 redirection을 동시에 하지 마시오\n"

_PROMPT_PARTS = (
    ("0;31", "m"),
    ("1;32", "i"),
    ("1;36", "n"),
    ("0;35", "i"),
    ("0;33", "s"),
    ("1;31", "h"),
    ("0;36", "e"),
    ("0;35", "l"),
    ("1;33", "l"),
    ("1;35", " > "),
)


def prompt() -> str:
    """The coloured prompt printed before each line is read."""
    coloured = "".join(f"\x1b[{colour}m{text}" for colour, text in _PROMPT_PARTS)
    return coloured + "\x1b[0m"


def welcome_banner() -> str:
    """The screen-clearing greeting shown when the shell starts."""
    border = "*" * 47
    blank = "*" + " " * 45 + "*"
    title = "*      Welcome to the world of Minishell!     *"
    lines = (border, blank, title, blank, border)
    body = "".join(f"\t{line} \n" for line in lines)
    return "\x1bc" + "\x1b[0;34m" + body + "\t\n\x1b[0;0m"


class Shell:
    """A small shell running builtin commands, pipelines and redirections."""

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        environ = os.environ if environ is None else environ
        self.stdout = sys.stdout if stdout is None else stdout
        self.state = ShellState(
            env=Environment.from_mapping(environ),
            home=environ.get("HOME"),
            stdout=self.stdout,
        )

    def _write(self, text: str) -> None:
        self.stdout.write(text)

    @contextmanager
    def _child(self, stdout: TextIO | None = None) -> Iterator[ShellState]:
        """State for a command that runs apart from the shell.

        Changes it makes to variables or the working directory are discarded,
        and an ``exit`` inside it ends only that command.
        """
        try:
            cwd: str | None = os.getcwd()
        except OSError:
            cwd = None
        child = ShellState(
            env=copy.deepcopy(self.state.env),
            home=self.state.home,
            status=self.state.status,
            stdout=self.stdout if stdout is None else stdout,
        )
        try:
            yield child
        except ShellExit:
            pass
        finally:
            if cwd is not None:
                os.chdir(cwd)

    def execute_line(self, line: str) -> None:
        """Run every semicolon-separated command of ``line``.

        Only the first command looks at the operators of the whole line;
        the commands after it run as simple commands.
        """
        commands = split_commands(line, self.state.env, self.state.home)
        source: str | None = line
        for cmd in commands:
            if not cmd.command:
                continue
            if source is None:
                self._run_simple(cmd)
                continue
            try:
                trimmed = check_syntax(source)
            except ShellSyntaxError as error:
                self._write(f"{error}\n")
                continue
            pipes, redirs = count_operators(trimmed)
            if pipes or redirs:
                self._run_compound(trimmed, pipes, redirs)
            else:
                self._run_simple(cmd)
            source = None

    def _run_simple(self, cmd: Command) -> None:
        result = expand_unquoted(cmd, self.state.env)
        if result.status_query:
            self._write(f"{self.state.status}: command not found\n")
            self.state.status = COMMAND_NOT_FOUND
        if result.replacement is not None:
            run_builtin(self.state, result.replacement)
            return
        run_builtin(self.state, cmd)

    def _run_compound(self, line: str, pipes: int, redirs: int) -> None:
        commands = split_pipeline(line)
        if pipes and redirs:
            self._write(_MIXED_OPERATORS)
            return
        if pipes:
            self.run_pipeline(commands)
        else:
            self.run_redirections(commands)

    @staticmethod
    def _status_for(cmd: Command) -> int:
        return 0 if is_builtin(cmd.command) else COMMAND_NOT_FOUND

    def run_pipeline(self, commands: list[Command]) -> None:
        """Run a pipeline: only its last command produces output."""
        for cmd in commands:
            if cmd.token_type != TokenType.LASTPIPE and not is_builtin(cmd.command):
                self._write(f"{cmd.command}:command not found\n")
            elif cmd.token_type == TokenType.LASTPIPE:
                with self._child() as child:
                    run_builtin(child, cmd)
            self.state.status = self._status_for(cmd)

    def run_redirections(self, commands: list[Command]) -> None:
        """Run each command with the redirection that follows it."""
        for cmd, target in zip(commands, commands[1:]):
            if cmd.token_type == TokenType.LASTREDIR:
                break
            self._redirect(cmd, target)
        if commands:
            self.state.status = self._status_for(commands[0])

    def _open_target(self, cmd: Command, target: Command) -> int | None:
        kind = cmd.token_type
        try:
            if kind == TokenType.REDIR:
                return os.open(
                    target.command, os.O_RDWR | os.O_CREAT | os.O_TRUNC, 0o744
                )
            if kind == TokenType.DREDIR:
                return os.open(
                    target.command, os.O_RDWR | os.O_CREAT | os.O_APPEND, 0o644
                )
            return os.open(target.command, os.O_RDONLY)
        except OSError as error:
            reason = os.strerror(error.errno or 0)
            if kind == TokenType.REDIR:
                self._write(f"{cmd.command}: No such file or directory...\n")
            elif kind == TokenType.DREDIR:
                self._write(f"{cmd.command}: {reason}\n")
            else:
                self._write(f"{target.command}: {reason}\n")
            return None

    def _redirect(self, cmd: Command, target: Command) -> None:
        kind = cmd.token_type
        if kind not in (TokenType.REDIR, TokenType.DREDIR, TokenType.BREDIR):
            return
        fd = self._open_target(cmd, target)
        if fd is None:
            return
        if not is_builtin(cmd.command):
            os.close(fd)
            self._write(f"{cmd.command}: command not found\n")
            return
        if kind == TokenType.BREDIR:
            os.close(fd)
            with self._child() as child:
                run_builtin(child, cmd)
            return
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            with self._child(handle) as child:
                run_builtin(child, cmd)

    def run(self, stdin: TextIO | None = None) -> int:
        """Read and run lines until ``exit`` or end of input; return the exit code."""
        stdin = sys.stdin if stdin is None else stdin
        while True:
            self._write(prompt())
            flush = getattr(self.stdout, "flush", None)
            if flush is not None:
                flush()
            try:
                line = stdin.readline()
            except KeyboardInterrupt:
                self._write(_ERASE + "\n")
                self.state.status = 1
                continue
            if not line.endswith("\n"):
                self.state.status = _EOF_STATUS
                self._write(_EOF_MESSAGE)
                return 1
            try:
                self.execute_line(line[:-1])
            except ShellExit as done:
                return done.code


def main(argv: list[str] | None = None) -> int:
    """Start an interactive shell on the standard streams."""
    shell = Shell(os.environ, sys.stdout)
    sys.stdout.write(welcome_banner())
    previous = None
    if hasattr(signal, "SIGQUIT"):
        previous = signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    try:
        return shell.run(sys.stdin)
    finally:
        if previous is not None:
            signal.signal(signal.SIGQUIT, previous)


if __name__ == "__main__":
    raise SystemExit(main())