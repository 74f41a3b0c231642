"""Token kinds, lexer states and the item record produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional


class TokenType(IntEnum):
    """Kinds of token. Single-character tokens carry their character code."""

    WORD = -1
    WHITE_SPACE = 0
    NEW_LINE = ord("\n")
    QUOTE = ord("'")
    DOUBLE_QUOTE = ord('"')
    ESCAPE = ord("\\")
    ENV = ord("$")
    PIPE_LINE = ord("|")
    REDIR_IN = ord("<")
    REDIR_OUT = ord(">")
    HERE_DOC = ord(">") + 1
    DREDIR_OUT = ord(">") + 2
    REDIR_IN_FILE = ord(">") + 3
    HERE_DOC_LIMITER = ord(">") + 4
    REDIR_OUT_FILE = ord(">") + 5
    DREDIR_OUT_FILE = ord(">") + 6


class State(IntEnum):
    """Quoting context an item was found in."""

    GENERAL = 1
    IN_QUOTE = 2
    IN_DQUOTE = 3


@dataclass
class Item:
    """One lexical item: its text, kind and quoting state."""

    content: str
    type: TokenType
    state: State = State.GENERAL

    @property
    def length(self) -> int:
        return len(self.content)


_TOKEN_NAMES = {
    TokenType.WORD: "WORD",
    TokenType.WHITE_SPACE: "WHITE_SPACES",
    TokenType.NEW_LINE: "NEW_LINE",
    TokenType.QUOTE: "QOUTE",
    TokenType.DOUBLE_QUOTE: "DOUBLE_QUOTE",
    TokenType.PIPE_LINE: "PIPE_LINE",
    TokenType.ENV: "ENV",
    TokenType.REDIR_IN: "REDIR_IN",
    TokenType.REDIR_OUT: "REDIR_OUT",
    TokenType.HERE_DOC: "HERE_DOC",
    TokenType.DREDIR_OUT: "DREDIR_OUT",
    TokenType.ESCAPE: "ESCAPE",
    TokenType.REDIR_IN_FILE: "REDIR_IN_FILE",
    TokenType.REDIR_OUT_FILE: "REDIR_OUT_FILE",
    TokenType.HERE_DOC_LIMITER: "HERE_DOC_LIMITER",
    TokenType.DREDIR_OUT_FILE: "DREDIR_OUT_FILE",
}

_STATE_LABELS = {
    State.GENERAL: "general",
    State.IN_QUOTE: "\033[0;32mIN_QUT\033[0m",
    State.IN_DQUOTE: "\033[0;33mIN_DQUT\033[0m",
}

_RULE = " " + "-" * 80 + "\n"
_FOOTER = " " + "_" * 79 + "\n\n"


def token_name(token_type: int) -> Optional[str]:
    """Return the display name of a token kind, or None if it is unknown."""
    try:
        return _TOKEN_NAMES[TokenType(token_type)]
    except ValueError:
        return None


def format_items(items: Iterable[Item]) -> str:
    """Render items as the diagnostic table of content, length, state and kind."""
    parts = [_RULE, "|\t[CMD]\t|\t[len]\t|\t[state]\t|\t[token]\t\t\t\t\n", _RULE]
    for item in items:
        name = token_name(item.type) or "(null)"
        label = _STATE_LABELS.get(item.state, "(null)")
        parts.append(
            f"|\t[{item.content}]\t|   {item.length}\t\t|\t{label}\t|\t{name}\t\t\t\n"
        )
    parts.append(_FOOTER)
    return "".join(parts)