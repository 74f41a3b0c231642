"""The interactive loop: read a line, parse it and run its commands."""

from __future__ import annotations

import os
import signal
import sys
from typing import List, Optional, TextIO

from .builtins import ShellExit
from .commands import build_commands
from .environment import Environment
from .executor import execute_commands
from .lexer import is_empty
from .organizer import organize
from .syntax import ShellSyntaxError, lex

try:
    import readline as _readline
except ImportError:  # pragma: no cover - platforms without readline
    _readline = None

PROMPT = "[minihell]::~> "
_TRIM_SET = "\t \f\v\n\r"


def trim_prompt(text: str) -> str:
    """Strip tabs, spaces, form feeds, vertical tabs and line ends from both ends."""
    return text.strip(_TRIM_SET)


def handle_line(line: str, environment: Environment, out: TextIO, err: TextIO) -> int:
    """Parse and run one command line; return its status.

    A syntax error is reported on err. ShellExit from the exit built-in is
    left to the caller.
    """
    text = trim_prompt(line)
    if is_empty(text):
        return 0
    try:
        items = lex(text)
    except ShellSyntaxError as error:
        err.write(f"{error}\n")
        return 1
    organized = organize(environment, items)
    if not organized:
        return 0
    return execute_commands(build_commands(organized), environment, out, err)


def _remember(line: str) -> None:
    if _readline is not None:
        _readline.add_history(line)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the interactive shell until end of input or the exit built-in."""
    environment = Environment.from_strings(
        f"{key}={value}" for key, value in os.environ.items()
    )
    quit_signal = getattr(signal, "SIGQUIT", None)
    previous_handler = (
        signal.signal(quit_signal, signal.SIG_IGN) if quit_signal is not None else None
    )
    try:
        while True:
            try:
                raw = input(PROMPT)
            except EOFError:
                sys.stdout.write("exit\n")
                return 1
            except KeyboardInterrupt:
                sys.stdout.write("\n")
                continue
            line = trim_prompt(raw)
            if is_empty(line):
                continue
            _remember(line)
            try:
                handle_line(line, environment, sys.stdout, sys.stderr)
            except ShellExit as request:
                return request.status & 0xFF
            except KeyboardInterrupt:
                sys.stdout.write("\n")
    finally:
        if quit_signal is not None and previous_handler is not None:
            signal.signal(quit_signal, previous_handler)


if __name__ == "__main__":
    sys.exit(main())