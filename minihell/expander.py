"""Replacing $NAME items with the values of environment variables."""

from __future__ import annotations

from typing import List

from .environment import Environment
from .tokens import Item, State, TokenType


def _is_general_word(item: Item) -> bool:
    return item.type == TokenType.WORD and item.state == State.GENERAL


def _heredoc_before(items: List[Item], index: int) -> bool:
    position = index - 1 if index > 0 else index
    while position >= 0 and items[position].type == TokenType.WHITE_SPACE:
        position -= 1
    return position >= 0 and items[position].type == TokenType.HERE_DOC


def follows_heredoc(items: List[Item], index: int) -> bool:
    """True if the item at index is part of a here-document limiter."""
    position = index - 1 if index > 0 else index
    while position >= 0 and not (
        _is_general_word(items[position])
        or items[position].type == TokenType.HERE_DOC
    ):
        position -= 1
    if position < 0:
        return False
    anchor = items[position]
    if anchor.type == TokenType.HERE_DOC:
        return True
    following = items[position + 1] if position + 1 < len(items) else None
    if following is not None and following.type == TokenType.WHITE_SPACE:
        return False
    return _heredoc_before(items, position)


def expand(environment: Environment, items: List[Item]) -> None:
    """Expand variable items in place; every variable item becomes a word."""
    for index, item in enumerate(items):
        if item.type != TokenType.ENV:
            continue
        if not follows_heredoc(items, index):
            item.content = environment.lookup(item.content[1:])
        item.type = TokenType.WORD