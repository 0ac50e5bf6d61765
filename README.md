# minish

`minish` is a small interactive shell. It reads one line at a time, splits it
on `;`, removes quotes, expands `$VARIABLES` inside double-quoted text,
expands a leading `~` in the arguments to the home directory and runs its
built-in commands. It also understands `|`, `>`, `>>` and `<`.

## Installing

```
pip install .
```

## Running

```
minish
```

The shell clears the screen, prints a welcome banner and then a coloured
`minishell > ` prompt. Type a command and press Enter. End the input
(Ctrl-D) or type `exit` to leave; the shell then finishes with status 1.

## Built-in commands

| Command  | What it does                                                   |
|----------|----------------------------------------------------------------|
| `echo`   | Prints its arguments and a newline; `echo -n` with nothing after it prints nothing; `echo $?` prints the last status. |
| `cd`     | Changes directory; with no argument goes to `$HOME`.           |
| `pwd`    | Prints the current directory.                                  |
| `env`    | Lists the variables that have a value as `NAME=value`.         |
| `export` | With no argument lists `declare -x` lines sorted by name; with `NAME=value` or `NAME` arguments sets or adds variables. |
| `unset`  | Removes the named variables.                                   |
| `exit`   | Leaves the shell; a non-numeric argument is reported as an error first. |

A name that is not one of these is reported as `command not found`, and the
status becomes 127. A command name of the form `$NAME` runs the value of
that variable as the command.

## Expansion and quoting

- `$NAME` inside double quotes is replaced by the variable's value:
  `echo "$USER"`. Text in single quotes is left as it is.
- Quotes around the command and its arguments are removed.
- An argument starting with `~` followed by `/`, a space or nothing gets the
  home directory in place of the `~`.

## Pipes and redirections

- `a | b | c`: commands before the last are only checked to be built-ins;
  only the last command runs and prints its output.
- `cmd > file` writes the output of `cmd` to `file`, truncating it;
  `cmd >> file` appends; `cmd < file` requires `file` to exist and runs `cmd`
  with its usual output.
- Commands run this way do not change the shell's variables or working
  directory.

A line that starts with `|`, `>` or `<`, contains `||`, `<<`, `<>` or `>>>`,
or ends with an operator is rejected with a syntax message. A line that
mixes a pipe and a redirection is refused.

## What it does not do

`minish` runs only its built-in commands: it never starts other programs,
and a pipe does not pass one command's output to the next. There is no
command history, line editing, globbing or background jobs.

## Using it from Python

```python
import io
from minish.shell import Shell

out = io.StringIO()
shell = Shell({"HOME": "/tmp", "USER": "guest"}, out)
shell.execute_line("export GREETING=hello")
shell.execute_line('echo "$GREETING"')
print(out.getvalue())   # hello
```

`Shell.run(stdin)` runs the prompt loop over any text stream and returns the
exit code. The parts of the shell are usable on their own:

- `minish.parser` — `check_syntax`, `split_commands`, `split_pipeline`, `ShellSyntaxError`
- `minish.environment` — `Environment` with `export`, `unset`, `get`, `format_env`, `format_export`
- `minish.expansion` — `expand_quoted`, `expand_unquoted`
- `minish.quotes` — `Command` and the quote helpers
- `minish.builtins` — `ShellState`, `ShellExit`, `run_builtin` and the individual commands