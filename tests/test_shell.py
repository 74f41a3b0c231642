import io

import pytest

from minihell.builtins import ShellExit
from minihell.environment import Environment
from minihell.shell import handle_line, main, trim_prompt


def _run(line, environment):
    out, err = io.StringIO(), io.StringIO()
    handle_line(line, environment, out, err)
    return out.getvalue(), err.getvalue()


@pytest.fixture
def environment(tmp_path):
    _script = tmp_path / "upper"
    _script.write_text("#!/bin/sh\ntr a-z A-Z\n")
    _script.chmod(0o755)
    return Environment.from_strings(
        [f"PATH={tmp_path}:/bin:/usr/bin", "HOME=/home/someone"]
    )


def test_trim_prompt_strips_both_ends():
    assert trim_prompt(" \t echo hi \n\r") == "echo hi"


def test_trim_prompt_whitespace_only():
    assert trim_prompt("\t \v\f") == ""


def test_trim_prompt_keeps_inner_spaces():
    assert trim_prompt("  a   b  ") == "a   b"


def test_blank_line_does_nothing(environment):
    out, err = _run("   \t", environment)
    assert (out, err) == ("", "")


def test_echo_joins_words(environment):
    out, _ = _run("echo hello   world", environment)
    assert out == "hello world\n"


def test_quoted_pipe_is_a_word(environment):
    out, _ = _run("echo 'a | b'", environment)
    assert out == "a | b\n"


def test_variable_expansion(environment):
    out, _ = _run("echo $HOME", environment)
    assert out == "/home/someone\n"


def test_syntax_error_reported(environment):
    out, err = _run("echo |", environment)
    assert err == "Syntax error\n"
    assert out == ""


def test_unclosed_quote_is_syntax_error(environment):
    _, err = _run('echo "open', environment)
    assert err == "Syntax error\n"


def test_export_then_env(environment):
    _run("export FOO=bar", environment)
    assert environment.lookup("FOO") == "bar"
    out, _ = _run("env", environment)
    assert "FOO=bar\n" in out.splitlines(keepends=True)


def test_pipeline_through_external_command(environment):
    out, _ = _run("echo ignored | upper", environment)
    assert out == "ignored\n"


def test_exit_raises_with_status(environment):
    with pytest.raises(ShellExit) as raised:
        _run("exit 3", environment)
    assert raised.value.status == 3


def test_main_runs_lines_until_end_of_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("echo hi\n"))
    status = main([])
    captured = capsys.readouterr().out
    assert status == 1
    assert "hi\n" in captured
    assert captured.endswith("exit\n")


def test_main_exit_builtin_status(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("exit 5\necho never\n"))
    status = main([])
    captured = capsys.readouterr().out
    assert status == 5
    assert "never" not in captured