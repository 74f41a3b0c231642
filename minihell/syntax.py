"""Syntax checks on lexed items: operators need operands and quotes must close."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .lexer import add_states, is_empty, reset_tokens, tokenize
from .tokens import Item, State, TokenType

_REDIRECTIONS = frozenset(
    {
        TokenType.DREDIR_OUT,
        TokenType.HERE_DOC,
        TokenType.REDIR_OUT,
        TokenType.REDIR_IN,
    }
)


class ShellSyntaxError(ValueError):
    """Raised when a command line is not well formed."""

    def __init__(self, message: str = "Syntax error") -> None:
        super().__init__(message)


def is_redirection(token_type: int) -> bool:
    """True for the four redirection operators."""
    return token_type in _REDIRECTIONS


def is_alone(items: Sequence[Item], index: int) -> bool:
    """True if the operator at index has the operands it needs.

    A redirection needs something after it; a pipe needs something on both
    sides. Any other item always passes.
    """
    item = items[index]
    before = any(not is_empty(other.content) for other in items[:index])
    after = any(not is_empty(other.content) for other in items[index + 1:])
    if is_redirection(item.type):
        return after
    if item.type == TokenType.PIPE_LINE:
        return before and after
    return True


def _previous_operand(items: Sequence[Item], index: int) -> Optional[Item]:
    for other in reversed(items[:index]):
        if is_redirection(other.type) or not is_empty(other.content):
            return other
    return None


def check_redirections(items: Sequence[Item]) -> bool:
    """True unless a redirection lacks a target or follows another one."""
    for index, item in enumerate(items):
        if not is_redirection(item.type):
            continue
        if not is_alone(items, index):
            return False
        previous = _previous_operand(items, index)
        if previous is not None and is_redirection(previous.type):
            return False
    return True


def check_pipes(items: Sequence[Item]) -> bool:
    """True unless a pipe lacks a side or follows a redirection or pipe."""
    for index, item in enumerate(items):
        if item.type != TokenType.PIPE_LINE:
            continue
        if not is_alone(items, index):
            return False
        previous = _previous_operand(items, index)
        if previous is not None and (
            is_redirection(previous.type) or previous.type == TokenType.PIPE_LINE
        ):
            return False
    return True


def check_quotes(items: Sequence[Item]) -> bool:
    """True if unquoted single and double quotes each come in pairs."""
    for kind in (TokenType.DOUBLE_QUOTE, TokenType.QUOTE):
        count = sum(
            1 for item in items if item.type == kind and item.state == State.GENERAL
        )
        if count % 2:
            return False
    return True


def check_syntax(items: Sequence[Item]) -> None:
    """Raise ShellSyntaxError if the items do not form a valid command line."""
    if not (check_redirections(items) and check_pipes(items) and check_quotes(items)):
        raise ShellSyntaxError()


def lex(text: str) -> List[Item]:
    """Tokenize text, mark quoting, and check its syntax."""
    items = tokenize(text)
    add_states(items)
    reset_tokens(items)
    check_syntax(items)
    return items