"""Running a pipeline of simple commands: built-ins in process, others as programs."""

from __future__ import annotations

import os
import subprocess
from contextlib import ExitStack
from typing import BinaryIO, Dict, List, Optional, Sequence, TextIO, Tuple, Union

from .builtins import builtin_index, run_builtin
from .commands import PipePosition, SimpleCommand
from .environment import Environment
from .tokens import TokenType

_RECEIVES = (PipePosition.BEFORE, PipePosition.BETWEEN)
_SENDS = (PipePosition.AFTER, PipePosition.BETWEEN)

_Stream = Union[int, BinaryIO, None]


class _InputRedirectionError(Exception):
    """An input file named by a redirection could not be opened."""


def path_directories(environment: Environment) -> Optional[List[str]]:
    """Return the non-empty PATH entries, or None if there is no PATH variable."""
    var = environment.find("PATH")
    if var is None:
        return None
    return [directory for directory in var.value.split(":") if directory]


def find_executable(directories: Sequence[str], name: str) -> Optional[str]:
    """Return the first directory/name that is an executable file, or None."""
    for directory in directories:
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK) and os.path.isfile(candidate):
            return candidate
    return None


def environment_strings(environment: Environment) -> List[str]:
    """Return "KEY=value" for every variable that has a value."""
    return [f"{var.key}={var.value}" for var in environment.visible()]


def _child_environment(environment: Environment) -> Dict[str, str]:
    return {var.key: var.value for var in environment.visible()}


def _stream_fd(stream: TextIO) -> Optional[int]:
    try:
        descriptor = stream.fileno()
    except (OSError, ValueError, AttributeError):
        return None
    stream.flush()
    return descriptor


def _open_redirections(
    command: SimpleCommand, stack: ExitStack, out: TextIO
) -> Tuple[Optional[BinaryIO], Optional[BinaryIO]]:
    stdin_file: Optional[BinaryIO] = None
    stdout_file: Optional[BinaryIO] = None
    for redirection in command.redirections:
        if redirection.type == TokenType.REDIR_IN_FILE:
            try:
                stdin_file = stack.enter_context(open(redirection.target, "rb"))
            except OSError as error:
                raise _InputRedirectionError(redirection.target) from error
        elif redirection.type in (TokenType.REDIR_OUT_FILE, TokenType.DREDIR_OUT_FILE):
            flags = os.O_WRONLY | os.O_CREAT
            if redirection.type == TokenType.DREDIR_OUT_FILE:
                flags |= os.O_APPEND
            else:
                flags |= os.O_TRUNC
            try:
                descriptor = os.open(redirection.target, flags, 0o644)
            except OSError:
                out.write("there is a problem\n")
                continue
            stdout_file = stack.enter_context(os.fdopen(descriptor, "wb"))
    return stdin_file, stdout_file


def _run_external(
    command: SimpleCommand,
    environment: Environment,
    piped: bytes,
    out: TextIO,
    err: TextIO,
) -> Tuple[int, bytes]:
    directories = path_directories(environment)
    if directories is None:
        return 1, b""
    name = command.args[0]
    path = find_executable(directories, name)
    if path is None:
        out.write(f"{name} : command not found\n")
        return 127, b""

    sends = command.pipe in _SENDS
    with ExitStack() as stack:
        try:
            stdin_file, stdout_file = _open_redirections(command, stack, out)
        except _InputRedirectionError:
            out.write("problem in opne file\n")
            return 1, b""

        options: Dict[str, object] = {}
        if stdin_file is not None:
            options["stdin"] = stdin_file
        elif command.pipe in _RECEIVES:
            options["input"] = piped

        stdout: _Stream
        if stdout_file is not None:
            stdout = stdout_file
        elif sends:
            stdout = subprocess.PIPE
        else:
            descriptor = _stream_fd(out)
            stdout = descriptor if descriptor is not None else subprocess.PIPE
        err_descriptor = _stream_fd(err)
        stderr = err_descriptor if err_descriptor is not None else subprocess.PIPE

        try:
            result = subprocess.run(
                [path, *command.args[1:]],
                env=_child_environment(environment),
                stdout=stdout,
                stderr=stderr,
                check=False,
                **options,
            )
        except OSError as error:
            err.write(f"{name}: {error.strerror or error}\n")
            return 126, b""

    status = result.returncode if result.returncode >= 0 else 128 - result.returncode
    output = result.stdout or b""
    if result.stderr:
        err.write(result.stderr.decode(errors="replace"))
    if sends:
        return status, output if stdout_file is None else b""
    if output:
        out.write(output.decode(errors="replace"))
    return status, b""


def execute_commands(
    commands: Sequence[SimpleCommand],
    environment: Environment,
    out: TextIO,
    err: TextIO,
) -> int:
    """Run each command in order, feeding piped output forward; return the last status."""
    status = 0
    piped = b""
    for command in commands:
        if command.name is None:
            piped = b""
            continue
        index = builtin_index(command.name)
        if index:
            status = run_builtin(command, environment, index, out, err)
            piped = b""
            continue
        status, piped = _run_external(command, environment, piped, out, err)
    return status