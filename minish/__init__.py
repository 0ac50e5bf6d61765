"""A small interactive shell with built-in commands, variable expansion, quoting, pipes and redirections."""

__version__ = "0.1.0"

__all__ = ["builtins", "environment", "expansion", "parser", "quotes", "shell", "textutils"]