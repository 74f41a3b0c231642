"""Joining lexed pieces into words and marking redirection targets."""

from __future__ import annotations

from typing import List, Optional

from .environment import Environment
from .expander import expand
from .tokens import Item, State, TokenType

_OPERATORS = frozenset(
    {
        TokenType.REDIR_IN,
        TokenType.REDIR_OUT,
        TokenType.DREDIR_OUT,
        TokenType.HERE_DOC,
        TokenType.PIPE_LINE,
    }
)

_TARGETS = {
    TokenType.REDIR_IN: TokenType.REDIR_IN_FILE,
    TokenType.REDIR_OUT: TokenType.REDIR_OUT_FILE,
    TokenType.DREDIR_OUT: TokenType.DREDIR_OUT_FILE,
    TokenType.HERE_DOC: TokenType.HERE_DOC_LIMITER,
}


def is_join_boundary(token_type: int, state: Optional[int]) -> bool:
    """True for unquoted whitespace and for operators, which end a word."""
    return (
        token_type == TokenType.WHITE_SPACE and state == State.GENERAL
    ) or token_type in _OPERATORS


def _is_dropped(item: Item) -> bool:
    return (
        item.type == TokenType.WHITE_SPACE and item.state == State.GENERAL
    ) or item.type in (TokenType.QUOTE, TokenType.DOUBLE_QUOTE)


def join_words(items: List[Item]) -> List[Item]:
    """Build a new list with quotes removed and adjacent pieces joined."""
    result: List[Item] = []
    joined = ""
    for index, item in enumerate(items):
        if not _is_dropped(item):
            joined += item.content
        following = items[index + 1] if index + 1 < len(items) else None
        is_operator = is_join_boundary(item.type, None)
        ends_word = (
            following is None
            or is_join_boundary(following.type, following.state)
            or is_operator
        )
        if joined and ends_word:
            kind = TokenType(item.type) if is_operator else TokenType.WORD
            result.append(Item(joined, kind, State.GENERAL))
            joined = ""
    return result


def mark_redirection_targets(items: List[Item]) -> None:
    """Give the item after each redirection its target kind, in place."""
    for current, following in zip(items, items[1:]):
        target = _TARGETS.get(current.type)
        if target is not None:
            following.type = target


def organize(environment: Environment, items: List[Item]) -> List[Item]:
    """Expand variables, join words and mark redirection targets."""
    expand(environment, items)
    organized = join_words(items)
    mark_redirection_targets(organized)
    return organized