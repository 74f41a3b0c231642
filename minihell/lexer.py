"""Splitting a command line into items and marking their quoting state."""

from __future__ import annotations

from typing import List

from .tokens import Item, State, TokenType

_SPECIAL = "\n'\"\\$|<>"

_SINGLE_CHAR_TOKENS = {
    "\n": TokenType.NEW_LINE,
    "'": TokenType.QUOTE,
    '"': TokenType.DOUBLE_QUOTE,
    "\\": TokenType.ESCAPE,
    "|": TokenType.PIPE_LINE,
}


def is_whitespace(char: str) -> bool:
    """True for a space or a character from tab to carriage return."""
    return len(char) == 1 and (char == " " or "\t" <= char <= "\r")


def is_token_char(char: str) -> bool:
    """True for a character that starts or ends a token."""
    return is_whitespace(char) or (len(char) == 1 and char in _SPECIAL)


def is_empty(text: str) -> bool:
    """True if the text holds nothing but whitespace."""
    return all(is_whitespace(char) for char in text)


def _env_length(text: str, start: int) -> tuple[int, TokenType]:
    following = start + 1
    if following >= len(text) or is_token_char(text[following]):
        return 1, TokenType.WORD
    if text[following] == "?" or text[following].isdigit() and text[following].isascii():
        return 2, TokenType.ENV
    end = following + 1
    while end < len(text) and not is_token_char(text[end]):
        end += 1
    return end - start, TokenType.ENV


def _next_token(text: str, start: int) -> tuple[int, TokenType]:
    char = text[start]
    following = text[start + 1] if start + 1 < len(text) else ""
    if is_whitespace(char):
        return 1, TokenType.WHITE_SPACE
    if char in _SINGLE_CHAR_TOKENS:
        return 1, _SINGLE_CHAR_TOKENS[char]
    if char == "<":
        return (2, TokenType.HERE_DOC) if following == "<" else (1, TokenType.REDIR_IN)
    if char == ">":
        return (2, TokenType.DREDIR_OUT) if following == ">" else (1, TokenType.REDIR_OUT)
    if char == "$":
        return _env_length(text, start)
    end = start
    while end < len(text) and not is_token_char(text[end]):
        end += 1
    return end - start, TokenType.WORD


def tokenize(text: str) -> List[Item]:
    """Split text into items, all in the general state."""
    items: List[Item] = []
    position = 0
    while position < len(text):
        length, kind = _next_token(text, position)
        items.append(Item(text[position:position + length], kind, State.GENERAL))
        position += length
    return items


def add_states(items: List[Item]) -> None:
    """Mark the items between matching quotes as quoted, in place."""
    index = 0
    count = len(items)
    while index < count:
        kind = items[index].type
        if kind in (TokenType.QUOTE, TokenType.DOUBLE_QUOTE):
            state = State.IN_QUOTE if kind == TokenType.QUOTE else State.IN_DQUOTE
            inner = index + 1 if index + 1 < count else index
            while inner < count and items[inner].type != kind:
                items[inner].state = state
                inner += 1
            index = inner
        else:
            items[index].state = State.GENERAL
        index += 1


def _keeps_type(item: Item) -> bool:
    return item.type in (TokenType.WHITE_SPACE, TokenType.WORD) or (
        item.type == TokenType.ENV and item.state != State.IN_QUOTE
    )


def reset_tokens(items: List[Item]) -> None:
    """Turn quoted special tokens into words, in place."""
    for item in items:
        if not _keeps_type(item) and item.state != State.GENERAL:
            item.type = TokenType.WORD