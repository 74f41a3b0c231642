# minihell

A small interactive command shell. It reads a line, splits it into tokens,
checks the syntax, expands environment variables, groups the words into
simple commands separated by pipes, and runs each one either as a builtin or
as a program found on `PATH`.

## Installing

```
pip install .
```

## Running

```
minihell
```

The prompt is `[minihell]::~> `. Blank lines are ignored. End of input
(Ctrl-D) prints `exit` and leaves the shell with status 1. Ctrl-C prints a
new line and shows a fresh prompt. `SIGQUIT` is ignored while the shell runs.
Lines are added to the `readline` history where that module is available.

## What the shell understands

- Words, with single quotes (no expansion inside) and double quotes
  (variables expanded inside). Adjacent pieces join into one word; quote
  characters are removed.
- `$NAME`. The value is that of the first variable whose name begins the
  given name; an unknown name expands to an empty string. `$?` and `$0`–`$9`
  are read as one-character names looked up the same way. A variable right
  after `<<` is kept as the literal here-document limiter.
- Pipes `|` and redirections `<`, `>`, `>>`, `<<`.
- A line with a dangling redirection or pipe, two operators in a row, or an
  unbalanced quote is rejected with `Syntax error` on standard error.

Programs are looked up in the directories of `PATH`. A name that is not
found is reported as `<name> : command not found`.

## Builtins

A command runs as a builtin when its name begins with one of these words.

| Command  | Behaviour |
|----------|-----------|
| `echo`   | Prints its arguments; leading `-n`, `-nn`, … options suppress the newline. |
| `pwd`    | Prints the current directory. |
| `env`    | Lists variables that have a value, as `KEY=value`. |
| `export` | Without arguments, lists every variable as `declare -x` lines; with `KEY=value` or `KEY`, adds or updates. Invalid names are reported as `not a valid identifier`. |
| `unset`  | Removes the variable named by its first argument; prints a notice when nothing was removed. |
| `cd`     | Changes directory (no argument or `~` means the home directory) and updates `PWD` and `OLDPWD`. |
| `exit`   | Prints `exit` and leaves the shell with an optional numeric status; a non-numeric argument or more than one argument gives status 1. |

## What it does not do

- Here-documents are parsed (`<<` and its limiter are recorded) but never
  read; a command with `<<` runs without that input.
- Builtins write to the shell's own output; pipes and redirections around a
  builtin are not applied to it.
- The commands of a pipeline run one after another, each one's output
  collected and then passed to the next, not concurrently.
- There is no exit-status variable: `$?` is not the status of the last
  command.
- Backslashes are kept as ordinary characters; there is no escaping.

## Using it as a library

The stages are available on their own:

```python
from minihell.environment import Environment
from minihell.syntax import lex
from minihell.organizer import organize
from minihell.commands import build_commands, format_commands

env = Environment.from_strings(["HOME=/home/user", "PATH=/usr/bin:/bin"])
items = organize(env, lex('echo "$HOME" | cat > out.txt'))
print(format_commands(build_commands(items)))
```

- `minihell.lexer.tokenize` splits text into `Item`s; `minihell.tokens.format_items`
  renders them as a table.
- `minihell.syntax.lex` tokenizes, marks quoting and raises `ShellSyntaxError`
  for malformed input.
- `minihell.organizer.organize` expands variables, joins words and marks
  redirection targets.
- `minihell.commands.build_commands` returns `SimpleCommand`s with `args`,
  `redirections` and a `pipe` position.
- `minihell.executor.execute_commands` runs them; `minihell.shell.handle_line`
  does all of this for one line and returns its status. The `exit` builtin
  raises `minihell.builtins.ShellExit`.

## Running the tests

```
pip install ".[test]"
pytest
```