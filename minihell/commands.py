"""Grouping organized items into simple commands separated by pipes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence

from .tokens import Item, State, TokenType

_REDIRECTION_TARGETS = frozenset(
    {
        TokenType.REDIR_IN_FILE,
        TokenType.REDIR_OUT_FILE,
        TokenType.DREDIR_OUT_FILE,
        TokenType.HERE_DOC_LIMITER,
    }
)

_REDIRECTION_LABELS = {
    TokenType.REDIR_IN_FILE: "\t[ <  ]",
    TokenType.REDIR_OUT_FILE: "\t[ >  ]",
    TokenType.DREDIR_OUT_FILE: "\t[ >> ]",
    TokenType.HERE_DOC_LIMITER: "\t[ << ] here doc : ",
}

_GREEN_RULE = "\033[0;32m" + "=" * 61 + "\033[0m"


class PipePosition(IntEnum):
    """Where a command sits relative to the pipes around it."""

    NONE = 0
    BEFORE = 1
    AFTER = 2
    BETWEEN = 3

    @property
    def label(self) -> str:
        return {
            PipePosition.NONE: "no pipe",
            PipePosition.BEFORE: "before",
            PipePosition.AFTER: "after",
            PipePosition.BETWEEN: "between",
        }[self]


@dataclass
class Redirection:
    """A redirection target: its kind and the path or here-document limiter."""

    type: TokenType
    target: str


@dataclass
class SimpleCommand:
    """One command of a pipeline: its words, redirections and pipe position."""

    index: int
    args: List[str] = field(default_factory=list)
    redirections: List[Redirection] = field(default_factory=list)
    pipe: PipePosition = PipePosition.NONE

    @property
    def name(self) -> Optional[str]:
        """The command name, the first word, or None if there are no words."""
        return self.args[0] if self.args else None


def split_segments(items: Sequence[Item]) -> List[List[Item]]:
    """Split items at unquoted pipes into the items of each command.

    A pipe with nothing after it does not start a new command.
    """
    if not items:
        return []
    segments: List[List[Item]] = [[items[0]]]
    collecting = True
    for position, item in enumerate(items[1:], start=1):
        if item.type == TokenType.PIPE_LINE:
            collecting = False
            if item.state == State.GENERAL and position + 1 < len(items):
                segments.append([])
                collecting = True
            continue
        if collecting:
            segments[-1].append(item)
    return segments


def build_command(index: int, segment: Iterable[Item]) -> SimpleCommand:
    """Make a command from the items of one pipeline segment."""
    command = SimpleCommand(index)
    for item in segment:
        if item.type == TokenType.WORD:
            command.args.append(item.content)
        elif item.type in _REDIRECTION_TARGETS:
            command.redirections.append(Redirection(TokenType(item.type), item.content))
    return command


def _pipe_position(index: int, count: int) -> PipePosition:
    if count == 1:
        return PipePosition.NONE
    if index == 0:
        return PipePosition.AFTER
    if index == count - 1:
        return PipePosition.BEFORE
    return PipePosition.BETWEEN


def build_commands(items: Sequence[Item]) -> List[SimpleCommand]:
    """Build the pipeline of commands from organized items."""
    commands = [
        build_command(index, segment)
        for index, segment in enumerate(split_segments(items))
    ]
    for command in commands:
        command.pipe = _pipe_position(command.index, len(commands))
    return commands


def _format_args(args: Iterable[str]) -> str:
    words = "".join(f"\033[0;33m[ {arg} ]==\033[0m" for arg in args)
    return words + "\033[0;33m[ NULL ]\033[0m\n\n"


def _format_redirections(redirections: Iterable[Redirection]) -> str:
    parts = ["-" * 30 + "\n", "\nredirections:\n"]
    for redirection in redirections:
        label = _REDIRECTION_LABELS.get(redirection.type, "")
        parts.append(f"{label}-[ {redirection.target} ]\n")
    parts.append("-" * 29 + "\n")
    return "".join(parts)


def format_command(command: SimpleCommand) -> str:
    """Render one command as a diagnostic block."""
    name = command.name if command.name is not None else "(null)"
    return "".join(
        [
            _GREEN_RULE + "\n\n",
            f"[{command.index}] => Command name\t: {name}\n\n",
            _format_args(command.args),
            f"pipe flag\t: {command.pipe.label}\n",
            _format_redirections(command.redirections),
            "\n" + _GREEN_RULE + "\n",
        ]
    )


def format_commands(commands: Iterable[SimpleCommand]) -> str:
    """Render every command of a pipeline, one block after another."""
    return "".join(format_command(command) for command in commands)