"""The shell's built-in commands: echo, pwd, env, unset, export, cd and exit."""

from __future__ import annotations

import os
from typing import Optional, Sequence, TextIO

from .commands import SimpleCommand
from .environment import EnvVar, Environment, split_assignment

_LLONG_MAX = 2**63 - 1

_BUILTIN_NAMES = ("echo", "pwd", "env", "unset", "export", "cd", "exit")


class ShellExit(Exception):
    """Raised by the exit built-in; status is the code the shell ends with."""

    def __init__(self, status: int) -> None:
        super().__init__(f"exit {status}")
        self.status = status


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def atoi(text: str) -> int:
    """Parse a leading integer the way the shell's exit status parser does.

    Leading whitespace and one sign are accepted and parsing stops at the
    first non-digit. A magnitude beyond the 64-bit range gives -1, or 0 when
    negative; otherwise the result is truncated to a 32-bit signed integer.
    """
    position = 0
    while position < len(text) and (text[position] == " " or "\t" <= text[position] <= "\r"):
        position += 1
    sign = 1
    if position < len(text) and text[position] in "+-":
        if text[position] == "-":
            sign = -1
        position += 1
    result = 0
    while position < len(text) and "0" <= text[position] <= "9":
        result = result * 10 + (ord(text[position]) - ord("0"))
        if result > _LLONG_MAX:
            return 0 if sign == -1 else -1
        position += 1
    return _to_int32(result * sign)


def builtin_index(name: Optional[str]) -> int:
    """Return the built-in number (1 to 7) a command name starts with, or 0."""
    if name is None:
        return 0
    for index, keyword in enumerate(_BUILTIN_NAMES, start=1):
        if name.startswith(keyword):
            return index
    return 0


def _echo_options(args: Sequence[str]) -> tuple[int, bool]:
    position = 1
    newline = True
    while position < len(args):
        arg = args[position]
        if not arg.startswith("-n"):
            break
        if arg[2:].strip("n"):
            return position, newline
        newline = False
        position += 1
    return position, newline


def echo(args: Sequence[str], out: TextIO) -> int:
    """Write the arguments separated by spaces; -n options drop the newline."""
    start, newline = _echo_options(args)
    out.write(" ".join(args[start:]))
    if len(args) < 2 or newline:
        out.write("\n")
    return 0


def _perror(error: OSError) -> str:
    return f"Error: {error.strerror or error}\n"


def pwd(out: TextIO, err: TextIO) -> int:
    """Write the current working directory."""
    try:
        directory = os.getcwd()
    except OSError as error:
        err.write(_perror(error))
        return 1
    out.write(f"{directory}\n")
    return 0


def env_command(environment: Environment, out: TextIO) -> int:
    """Write every variable that has a value as KEY=value."""
    environment.set("_", "builtin_mini_env", True)
    for var in environment.visible():
        out.write(f"{var.key}={var.value}\n")
    return 0


def unset(environment: Environment, args: Sequence[str], out: TextIO) -> int:
    """Remove the variable named by the first argument.

    Only the first argument is looked up; when nothing is removed a notice
    is written instead.
    """
    if len(args) > 1 and environment.remove(args[1]):
        return 0
    out.write("mal9ahch\n")
    return 0


def is_valid_key(key: str) -> bool:
    """True if key starts with a letter or "_" and holds only letters, digits, "_" or "="."""
    if not key:
        return False
    first = key[0]
    if first != "_" and not (first.isascii() and first.isalpha()):
        return False
    return all(
        (char.isascii() and char.isalnum()) or char in "_=" for char in key[1:]
    )


def _print_exports(environment: Environment, out: TextIO) -> None:
    for var in environment:
        if var.has_value:
            out.write(f'declare -x {var.key}="{var.value}"\n')
        else:
            out.write(f"declate -x {var.key}\n")


def _update_existing(
    environment: Environment, key: str, value: str, has_value: bool
) -> bool:
    variables = list(environment)
    match: Optional[EnvVar] = None
    start = 0
    for position, var in enumerate(variables):
        if var.key.startswith(key):
            match, start = var, position
            break
    if match is None:
        return False
    if has_value:
        for var in variables[start:]:
            if key.startswith(var.key):
                var.value = value
                var.has_value = has_value
        match.has_value = has_value
    return True


def export(
    environment: Environment, args: Sequence[str], out: TextIO, err: TextIO
) -> int:
    """Add or update variables; with no arguments, list them all."""
    if len(args) < 2:
        _print_exports(environment, out)
    for arg in args[1:]:
        key, value, has_value = split_assignment(arg)
        if _update_existing(environment, key, value, has_value):
            continue
        if not is_valid_key(key):
            err.write(f"export : `{arg}': not a valid identifier\n")
            continue
        environment.add(key, value, has_value)
    return 0


def cd(
    environment: Environment,
    args: Sequence[str],
    err: TextIO,
    home: Optional[str] = None,
) -> int:
    """Change directory and update OLDPWD and PWD.

    With no argument, or with "~" or an empty argument, go to home, which
    defaults to the user's home directory.
    """
    try:
        current = os.getcwd()
    except OSError:
        return 1
    argument = args[1] if len(args) > 1 else None
    if argument is None or "~".startswith(argument):
        target = os.fspath(home) if home is not None else os.path.expanduser("~")
    else:
        target = argument
    try:
        os.chdir(target)
    except OSError as error:
        err.write(_perror(error))
        return 1
    environment.set("OLDPWD", current, True)
    try:
        environment.set("PWD", os.getcwd(), True)
    except OSError as error:
        err.write(_perror(error))
    return 0


def exit_command(args: Sequence[str], out: TextIO) -> int:
    """Write "exit" and raise ShellExit with the requested status."""
    out.write("exit\n")
    if len(args) < 2:
        raise ShellExit(0)
    if len(args) > 2:
        out.write("logout\n-bash: exit: too many arguments\n")
        raise ShellExit(1)
    if not all("0" <= char <= "9" for char in args[1]):
        out.write("arguments must be numeric\n")
        raise ShellExit(1)
    raise ShellExit(atoi(args[1]))


def run_builtin(
    command: SimpleCommand,
    environment: Environment,
    index: int,
    out: TextIO,
    err: TextIO,
) -> int:
    """Run the built-in numbered index for command and return its status."""
    args = command.args
    if index == 1:
        return echo(args, out)
    if index == 2:
        return pwd(out, err)
    if index == 3:
        return env_command(environment, out)
    if index == 4:
        return unset(environment, args, out)
    if index == 5:
        return export(environment, args, out, err)
    if index == 6:
        return cd(environment, args, err)
    if index == 7:
        return exit_command(args, out)
    return 0