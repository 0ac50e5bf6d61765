"""Syntax checks and splitting of an input line into commands."""

from __future__ import annotations

from enum import IntEnum

from minish.environment import Environment
from minish.expansion import expand_quoted
from minish.quotes import (
    SINGLE,
    Command,
    get_quote_type,
    has_quotes,
    quote_kind,
    remove_quotes,
    split_quoted_command,
)
from minish.textutils import is_space, trim

_SPACES = " \r\t"
_OPERATORS = "<>|"
_ARGC_COMMANDS = ("export", "unset", "cd", "exit")

_PIPE_ERROR = "syntax error near unexpected token `|'"
_NEWLINE_ERROR = "syntax error near unexpected token `newline'"
_RETRY_ERROR = "올바르게 다시 입력하세요"


class TokenType(IntEnum):
    """Kind of operator that ends a command in a pipeline or redirection."""

    CHARACTERS = 1
    SEMICOLON = 2
    PIPE = 3
    REDIR = 4
    DREDIR = 5
    BREDIR = 6
    LASTPIPE = 7
    LASTREDIR = 8


class ShellSyntaxError(ValueError):
    """Raised when an input line is rejected before it is run."""


def check_syntax(line: str) -> str:
    """Reject malformed operator use and return the line with its ends trimmed."""
    if line.startswith("|"):
        raise ShellSyntaxError(_PIPE_ERROR)
    if line.startswith((">", "<")):
        raise ShellSyntaxError(_NEWLINE_ERROR)
    for index in range(len(line)):
        pair = line[index:index + 2]
        if pair == "||":
            raise ShellSyntaxError(_PIPE_ERROR)
        if pair in ("<<", "<>") or line.startswith(">>>", index):
            raise ShellSyntaxError(_NEWLINE_ERROR)
    trimmed = trim(line)
    if trimmed and trimmed[-1] in _OPERATORS:
        raise ShellSyntaxError(_RETRY_ERROR)
    return trimmed


def count_operators(line: str) -> tuple[int, int]:
    """Number of pipes and of redirection characters in ``line``."""
    pipes = line.count("|")
    redirs = sum(1 for char in line if char in "<>")
    return pipes, redirs


def count_argc(text: str) -> int:
    """Count words as separators plus one, ignoring trailing separators."""
    separators = sum(1 for char in text if is_space(char))
    trailing = len(text) - len(text.rstrip(_SPACES))
    return separators - trailing + 1


def split_argv(cmd: Command) -> None:
    """Split ``cmd.command`` into its first word and the option text after it."""
    cmd.option = None
    cmd.argc += count_argc(cmd.command)
    if cmd.argc == 1 and not cmd.has_quote:
        return
    index = 0
    closing = has_quotes(cmd)
    text = cmd.command
    if (
        text
        and quote_kind(text[0])
        and closing
        and text[closing:closing + 1] != " "
    ):
        index = closing
    index -= remove_quotes(cmd)
    text = cmd.command
    index = min(max(index, 0), len(text))
    while index < len(text) and not is_space(text[index]):
        index += 1
    cmd.command = text[:index]
    cmd.option = text[index + 1:]


def apply_tilde(cmd: Command, home: str | None) -> None:
    """Replace a leading ``~`` in the option text with the home directory."""
    option = cmd.option
    if not option or option[0] != "~":
        return
    following = option[1:2]
    if following == "" or following == "/" or is_space(following):
        cmd.option = (home or "") + option[1:]


def parse_segment(segment: str, env: Environment | None, home: str | None) -> Command:
    """Build one command from the text between two semicolons."""
    cmd = Command(command=segment.lstrip(_SPACES).rstrip(_SPACES + ";"))
    get_quote_type(cmd)
    expand = env is not None and cmd.has_env and cmd.quote_type != SINGLE
    if quote_kind(cmd.command[:1]) and has_quotes(cmd):
        cmd.argc = 0
        if expand:
            expand_quoted(cmd, env)
        split_quoted_command(cmd)
    else:
        if expand:
            expand_quoted(cmd, env)
        split_argv(cmd)
    if cmd.option is not None:
        apply_tilde(cmd, home)
    return cmd


def split_commands(
    line: str, env: Environment | None, home: str | None
) -> list[Command]:
    """Split ``line`` on semicolons into parsed commands."""
    segments = line.split(";")
    if segments[-1] == "":
        segments.pop()
    return [parse_segment(segment, env, home) for segment in segments]


def assign_argc(cmd: Command) -> None:
    """Set the argument count that ``cd``, ``export``, ``unset`` and ``exit`` expect."""
    kind = cmd.token_type
    if cmd.command == "cd":
        if cmd.option is None and kind > TokenType.PIPE and kind != TokenType.LASTPIPE:
            cmd.argc = 1
        elif cmd.option and kind != TokenType.LASTPIPE:
            cmd.argc = 2
    if cmd.command == "export":
        if kind == TokenType.LASTPIPE:
            cmd.argc = 1 if cmd.option is None else 42
        elif kind > TokenType.PIPE:
            cmd.argc = 1 if cmd.option is None else 2
    if cmd.command == "unset":
        if kind == TokenType.LASTPIPE:
            cmd.argc = 42
        elif kind > TokenType.PIPE:
            cmd.argc = 2
    if cmd.command == "exit" and kind != TokenType.LASTPIPE and kind > TokenType.PIPE:
        cmd.argc = 1


def _pipeline_node(text: str, kind: TokenType) -> Command:
    name, _, rest = text.partition(" ")
    cmd = Command(command=name, option=trim(rest) or None, token_type=kind)
    if name in _ARGC_COMMANDS:
        assign_argc(cmd)
    return cmd


def split_pipeline(line: str) -> list[Command]:
    """Split ``line`` at pipe and redirection operators into typed commands.

    Each command carries the operator that follows it; the last one is marked
    ``LASTPIPE`` after a pipe and ``LASTREDIR`` otherwise.
    """
    commands: list[Command] = []
    rest = line
    last_kind: TokenType | None = None
    index = 0
    while index < len(rest):
        char = rest[index]
        if char not in _OPERATORS:
            index += 1
            continue
        following = rest[index + 1:index + 2]
        if char == "|":
            kind, skip = TokenType.PIPE, 1
        elif char == ">" and following != ">":
            kind, skip = TokenType.REDIR, 1
        elif char == ">":
            kind, skip = TokenType.DREDIR, 2
        else:
            kind, skip = TokenType.BREDIR, 2
        commands.append(_pipeline_node(trim(rest[:index]), kind))
        last_kind = kind
        rest = rest[index + skip:]
        index = 0
    final = TokenType.LASTPIPE if last_kind == TokenType.PIPE else TokenType.LASTREDIR
    commands.append(_pipeline_node(trim(rest), final))
    return commands