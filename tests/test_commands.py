import pytest

from minihell.commands import (
    PipePosition,
    Redirection,
    SimpleCommand,
    build_command,
    build_commands,
    format_command,
    format_commands,
    split_segments,
)
from minihell.environment import Environment
from minihell.organizer import organize
from minihell.syntax import lex
from minihell.tokens import Item, State, TokenType


def _commands(line, env=None):
    environment = Environment.from_strings(env or [])
    return build_commands(organize(environment, lex(line)))


def test_split_segments_empty():
    assert split_segments([]) == []


def test_split_segments_drops_pipes():
    items = [
        Item("ls", TokenType.WORD),
        Item("|", TokenType.PIPE_LINE),
        Item("wc", TokenType.WORD),
    ]
    segments = split_segments(items)
    assert [[item.content for item in segment] for segment in segments] == [["ls"], ["wc"]]


def test_split_segments_trailing_pipe_starts_nothing():
    items = [Item("ls", TokenType.WORD), Item("|", TokenType.PIPE_LINE)]
    segments = split_segments(items)
    assert len(segments) == 1
    assert segments[0][0].content == "ls"


def test_split_segments_preserves_all_non_pipe_items():
    items = [
        Item("a", TokenType.WORD),
        Item("b", TokenType.WORD),
        Item("|", TokenType.PIPE_LINE),
        Item("c", TokenType.WORD),
        Item("|", TokenType.PIPE_LINE),
        Item("d", TokenType.WORD),
    ]
    segments = split_segments(items)
    flat = [item.content for segment in segments for item in segment]
    assert flat == ["a", "b", "c", "d"]
    assert len(segments) == 3


def test_build_command_collects_words_and_targets():
    segment = [
        Item("cat", TokenType.WORD),
        Item("<", TokenType.REDIR_IN),
        Item("in.txt", TokenType.REDIR_IN_FILE),
        Item("-e", TokenType.WORD),
    ]
    command = build_command(4, segment)
    assert command.index == 4
    assert command.args == ["cat", "-e"]
    assert command.name == "cat"
    assert command.redirections == [Redirection(TokenType.REDIR_IN_FILE, "in.txt")]
    assert command.pipe == PipePosition.NONE


def test_command_without_words_has_no_name():
    command = build_command(0, [Item("out", TokenType.REDIR_OUT_FILE)])
    assert command.name is None
    assert command.args == []


def test_single_command_has_no_pipe():
    commands = _commands("echo hello world")
    assert len(commands) == 1
    assert commands[0].args == ["echo", "hello", "world"]
    assert commands[0].pipe == PipePosition.NONE


def test_two_commands_pipe_positions():
    commands = _commands("ls -l | grep x")
    assert [c.args for c in commands] == [["ls", "-l"], ["grep", "x"]]
    assert [c.pipe for c in commands] == [PipePosition.AFTER, PipePosition.BEFORE]
    assert [c.index for c in commands] == [0, 1]


def test_three_commands_middle_is_between():
    commands = _commands("a | b | c")
    assert [c.pipe for c in commands] == [
        PipePosition.AFTER,
        PipePosition.BETWEEN,
        PipePosition.BEFORE,
    ]


@pytest.mark.parametrize(
    "line, kind, target",
    [
        ("cat < in", TokenType.REDIR_IN_FILE, "in"),
        ("ls > out", TokenType.REDIR_OUT_FILE, "out"),
        ("ls >> log", TokenType.DREDIR_OUT_FILE, "log"),
        ("cat << end", TokenType.HERE_DOC_LIMITER, "end"),
    ],
)
def test_redirections_are_recorded(line, kind, target):
    (command,) = _commands(line)
    assert command.redirections == [Redirection(kind, target)]
    assert target not in command.args


def test_quoted_pipe_is_a_word():
    commands = _commands("echo '|' x")
    assert len(commands) == 1
    assert commands[0].args == ["echo", "|", "x"]


def test_expanded_variable_becomes_argument():
    (command,) = _commands("echo $NAME", ["NAME=value"])
    assert command.args == ["echo", "value"]


@pytest.mark.parametrize(
    "line, flags",
    [
        ("a", [0]),
        ("a | b", [2, 1]),
        ("a | b | c", [2, 3, 1]),
    ],
)
def test_pipe_position_values_match_flags(line, flags):
    assert [int(c.pipe) for c in _commands(line)] == flags


def test_format_command_contains_fields():
    command = SimpleCommand(
        0,
        ["ls", "-a"],
        [Redirection(TokenType.REDIR_OUT_FILE, "out")],
        PipePosition.NONE,
    )
    text = format_command(command)
    assert "[0] => Command name\t: ls\n\n" in text
    assert "\033[0;33m[ ls ]==\033[0m\033[0;33m[ -a ]==\033[0m" in text
    assert "\033[0;33m[ NULL ]\033[0m\n\n" in text
    assert "pipe flag\t: no pipe\n" in text
    assert "\nredirections:\n" in text
    assert "\t[ >  ]-[ out ]\n" in text


def test_format_command_without_name():
    text = format_command(SimpleCommand(2))
    assert "[2] => Command name\t: (null)" in text


@pytest.mark.parametrize(
    "position, label",
    [
        (PipePosition.AFTER, "after"),
        (PipePosition.BEFORE, "before"),
        (PipePosition.BETWEEN, "between"),
    ],
)
def test_format_command_pipe_labels(position, label):
    text = format_command(SimpleCommand(0, ["x"], [], position))
    assert f"pipe flag\t: {label}\n" in text


def test_format_commands_concatenates():
    commands = _commands("a | b")
    assert format_commands(commands) == "".join(format_command(c) for c in commands)
    assert format_commands([]) == ""


def test_split_segments_item_state_general_required():
    items = [
        Item("a", TokenType.WORD),
        Item("|", TokenType.PIPE_LINE, State.IN_QUOTE),
        Item("b", TokenType.WORD),
    ]
    segments = split_segments(items)
    assert len(segments) == 1
    assert [item.content for item in segments[0]] == ["a"]