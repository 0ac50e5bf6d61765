"""Small string helpers shared by the parser and the builtins."""

from __future__ import annotations

from itertools import zip_longest

_TRIM_CHARS = " \n\t"
_SPACE_CHARS = " \r\t"
_NUL = "\0"


def split_fields(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty fields."""
    return [field for field in text.split(sep) if field]


def trim(text: str) -> str:
    """Strip spaces, tabs and newlines from both ends of ``text``."""
    return text.strip(_TRIM_CHARS)


def trim_char(text: str, char: str) -> str:
    """Return ``text`` with every occurrence of ``char`` removed."""
    return text.replace(char, "")


def strncmp(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` characters; the sign of the result orders the strings."""
    if n <= 0:
        return 0
    for a, b in zip_longest(s1[:n], s2[:n], fillvalue=_NUL):
        if a != b or a == _NUL:
            return ord(a) - ord(b)
    return 0


def strcmp(s1: str, s2: str) -> int:
    """Compare two whole strings; the sign of the result orders them."""
    for a, b in zip_longest(s1, s2, fillvalue=_NUL):
        if a != b or a == _NUL:
            return ord(a) - ord(b)
    return 0


def is_space(char: str) -> bool:
    """Tell whether ``char`` is a word separator (space, tab or carriage return)."""
    return len(char) == 1 and char in _SPACE_CHARS


def search_char(text: str, char: str) -> int:
    """Index of the first ``char`` in ``text``, or -1 when it is absent."""
    if not char or char == _NUL:
        return -1
    return text.find(char)