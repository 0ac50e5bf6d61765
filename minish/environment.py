"""Shell variables: the environment list and the export list."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from minish.textutils import split_fields


@dataclass
class _Variable:
    name: str
    value: str | None


def parse_assignment(text: str) -> tuple[str, str | None]:
    """Split ``NAME=value`` into its name and value.

    Empty fields are dropped, so only the text up to the second ``=`` makes up
    the value; a missing value yields ``None``.
    """
    fields = split_fields(text, "=")
    if not fields:
        raise ValueError(f"not a valid assignment: {text!r}")
    value = fields[1] if len(fields) > 1 else None
    return fields[0], value


class Environment:
    """The shell's variables, kept both in environment order and as an export list."""

    def __init__(self, entries: Iterable[str]) -> None:
        self._env: list[_Variable] = []
        for entry in entries:
            name, value = parse_assignment(entry)
            self._env.append(_Variable(name, value))
        self._exports = self._copy(self._env)

    @staticmethod
    def _copy(variables: list[_Variable]) -> list[_Variable]:
        return [_Variable(var.name, var.value) for var in variables]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> Environment:
        """Build an environment from a name-to-value mapping such as ``os.environ``."""
        env = cls(())
        env._env = [_Variable(name, value) for name, value in mapping.items()]
        env._exports = cls._copy(env._env)
        return env

    def get(self, name: str) -> str | None:
        """Value of the first variable called ``name``, or ``None``."""
        return next((var.value for var in self._env if var.name == name), None)

    def names(self) -> list[str]:
        """Variable names in environment order."""
        return [var.name for var in self._env]

    @staticmethod
    def _update(variables: list[_Variable], name: str, value: str | None) -> bool:
        for var in variables:
            if var.name == name:
                if value is not None:
                    var.value = value
                return True
        return False

    def export(self, assignment: str) -> None:
        """Set or add one ``NAME[=value]`` in both the environment and the export list."""
        name, value = parse_assignment(assignment)
        if self._update(self._env, name, value):
            self._update(self._exports, name, value)
            return
        self._exports.append(_Variable(name, value))
        self._env.append(_Variable(name, value))

    def unset(self, name: str) -> None:
        """Remove every variable called ``name`` from both lists."""
        self._env = [var for var in self._env if var.name != name]
        self._exports = [var for var in self._exports if var.name != name]

    def sort_exports(self) -> None:
        """Order the export list by variable name."""
        self._exports.sort(key=lambda var: var.name)

    def format_env(self) -> str:
        """Text printed by ``env``: one ``NAME=value`` line per variable with a value."""
        return "".join(
            f"{var.name}={var.value}\n" for var in self._env if var.value is not None
        )

    def format_export(self) -> str:
        """Text printed by a bare ``export``: one ``declare -x`` line per variable."""
        lines = []
        for var in self._exports:
            line = f"declare -x {var.name}"
            if var.value is not None:
                line += f'="{var.value}"'
            lines.append(line + "\n")
        return "".join(lines)