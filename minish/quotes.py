"""Quote detection and removal for a single parsed command."""

from __future__ import annotations

from dataclasses import dataclass

from minish.textutils import is_space, trim_char

NO_QUOTE = 0
SINGLE = 1
DOUBLE = 2

_QUOTE_CHARS = {"'": SINGLE, '"': DOUBLE}


@dataclass
class Command:
    """One simple command: its name, raw option text and parse flags."""

    command: str = ""
    option: str | None = None
    argc: int = 0
    token_type: int = 0
    has_env: bool = False
    quote_type: int = NO_QUOTE
    has_quote: bool = False


def quote_kind(char: str) -> int:
    """Return 1 for a single quote, 2 for a double quote and 0 otherwise."""
    return _QUOTE_CHARS.get(char, NO_QUOTE)


def first_quote(text: str, kind: int) -> int:
    """Index of the first quote of ``kind`` in ``text``, or -1."""
    if kind not in (SINGLE, DOUBLE):
        return -1
    return next(
        (index for index, char in enumerate(text) if quote_kind(char) == kind), -1
    )


def has_quotes(cmd: Command) -> int:
    """Position just past the closing quote of the first quoted pair, or 0."""
    singles = doubles = 0
    for position, char in enumerate(cmd.command, start=1):
        kind = quote_kind(char)
        if cmd.quote_type != DOUBLE and kind == SINGLE:
            singles += 1
        if cmd.quote_type != SINGLE and kind == DOUBLE:
            doubles += 1
        if singles == 2 or doubles == 2:
            return position
    return 0


def _update_quote_type(doubles: int, singles: int, cmd: Command) -> None:
    first_single = first_quote(cmd.command, SINGLE)
    first_double = first_quote(cmd.command, DOUBLE)
    if doubles == 2 and (first_single < first_double or first_single == 0):
        cmd.has_env = True
    if doubles == 2 and -1 < first_single < first_double:
        cmd.quote_type = SINGLE
    if singles == 2 and first_double > -1 and first_single > first_double:
        cmd.quote_type = DOUBLE
        cmd.has_env = True


def get_quote_type(cmd: Command) -> int:
    """Classify the outer quoting of ``cmd`` and return the end of the first pair, or 0."""
    singles = doubles = 0
    for position, char in enumerate(cmd.command, start=1):
        kind = quote_kind(char)
        if kind == SINGLE:
            singles += 1
        elif kind == DOUBLE:
            doubles += 1
        _update_quote_type(doubles, singles, cmd)
        if singles == 2 or doubles == 2:
            cmd.has_quote = True
            return position
    cmd.has_quote = False
    return 0


def count_quotes(text: str) -> int:
    """Number of quote characters of either kind in ``text``."""
    return sum(1 for char in text if quote_kind(char))


def remove_quotes(cmd: Command) -> int:
    """Strip the quotes that delimit ``cmd.command``; return how many were removed (at most 2)."""
    total = count_quotes(cmd.command)
    if cmd.quote_type == SINGLE:
        cmd.command = trim_char(cmd.command, "'")
    elif cmd.quote_type == DOUBLE:
        cmd.command = trim_char(cmd.command, '"')
    else:
        cmd.command = trim_char(trim_char(cmd.command, '"'), "'")
    return min(total, 2)


def split_quoted_command(cmd: Command) -> None:
    """Split a command that starts with a quote into its name and option text."""
    cmd.option = None
    if not cmd.command and not cmd.has_quote:
        return
    last_quote = first_quote(cmd.command[1:], cmd.quote_type)
    closing = has_quotes(cmd)
    removed = remove_quotes(cmd)
    index = closing - removed
    if cmd.quote_type in (SINGLE, DOUBLE):
        index = last_quote
    text = cmd.command
    index = min(max(index, 0), len(text))
    while index < len(text) and not is_space(text[index]):
        index += 1
    cmd.command = text[:index]
    cmd.option = text[index + 1:]


def count_pipes(text: str | None) -> int:
    """Number of ``|`` characters in ``text``."""
    if not text:
        return 0
    return text.count("|")


def count_redirs(text: str | None) -> int:
    """Number of ``<`` and ``>`` characters in ``text``."""
    if not text:
        return 0
    return sum(1 for char in text if char in "<>")