"""Expansion of ``$NAME`` references inside a parsed command."""

from __future__ import annotations

from dataclasses import dataclass

from minish.environment import Environment
from minish.quotes import SINGLE, Command, quote_kind
from minish.textutils import is_space, search_char, strcmp, strncmp


@dataclass
class DollarResult:
    """Outcome of a ``$`` expansion.

    ``matched`` tells whether a variable was substituted, ``replacement`` holds
    a new command to run instead of the original, and ``status_query`` is set
    when a ``$?`` was seen.
    """

    matched: bool = False
    replacement: Command | None = None
    status_query: bool = False


def next_word_end(text: str) -> int:
    """Index of the first space or quote in ``text``, or -1."""
    return next(
        (
            index
            for index, char in enumerate(text)
            if is_space(char) or quote_kind(char)
        ),
        -1,
    )


def _variables(env: Environment) -> list[tuple[str, str]]:
    return [(name, env.get(name) or "") for name in env.names()]


def _is_status_query(text: str, index: int) -> bool:
    return text[index + 1:index + 2] == "?"


def expand_quoted(cmd: Command, env: Environment) -> DollarResult:
    """Substitute ``$NAME`` references in ``cmd.command`` in place."""
    text = cmd.command
    index = search_char(text, "$")
    if index < 0:
        return DollarResult()
    end = next_word_end(text[index:])
    query = _is_status_query(text, index)
    tail = text[index + 1:]
    for name, value in _variables(env):
        if end < 0:
            found = strcmp(name, tail) == 0
        else:
            found = strncmp(name, tail, end - 1) == 0
        if found:
            rest = "" if end < 0 else text[index + end:]
            cmd.command = text[:index] + value + rest
            if search_char(cmd.command[index + 1:], "$") > -1:
                inner = expand_quoted(cmd, env)
                query = query or inner.status_query
            return DollarResult(matched=True, status_query=query)
    return DollarResult(status_query=query)


def option_to_command(cmd: Command) -> None:
    """Promote the first word of the option text to be the command name."""
    text = cmd.option or ""
    head, sep, rest = text.partition(" ")
    cmd.command = head
    cmd.option = rest if sep else None


def expand_unquoted(cmd: Command, env: Environment) -> DollarResult:
    """Resolve a command whose name holds a ``$NAME`` reference.

    A known variable yields a replacement command to run; an unknown one with
    option text shifts the option's first word into the command name.
    """
    if (cmd.has_quote and not cmd.has_env) or cmd.quote_type == SINGLE:
        return DollarResult()
    text = cmd.command
    index = search_char(text, "$")
    if index < 0:
        return DollarResult()
    query = _is_status_query(text, index)
    tail = text[index + 1:]
    for name, value in _variables(env):
        if strncmp(name, tail, len(tail)) == 0:
            replacement = Command(command=text[:index] + value, argc=1)
            return DollarResult(
                matched=True, replacement=replacement, status_query=query
            )
    if cmd.option:
        option_to_command(cmd)
    return DollarResult(status_query=query)