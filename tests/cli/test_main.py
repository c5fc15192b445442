from __future__ import annotations

import builtins

import pytest

from consolechess.cli import main as cli


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args([])
    settings = cli.settings_from_args(args, environ={})
    assert settings.white_name is None and settings.black_name is None
    assert not settings.strict and not settings.ascii_pieces
    assert settings.log_level == "WARNING"


def test_parser_options() -> None:
    args = cli.build_parser().parse_args(
        ["--white", "Alice", "--black", "Bob", "--strict", "--ascii", "--log-level", "debug"]
    )
    settings = cli.settings_from_args(args, environ={})
    assert settings.white_name == "Alice"
    assert settings.black_name == "Bob"
    assert settings.strict and settings.ascii_pieces
    assert settings.log_level == "DEBUG"


def test_log_level_from_environment() -> None:
    args = cli.build_parser().parse_args([])
    settings = cli.settings_from_args(args, environ={cli.LOG_LEVEL_ENV: "info"})
    assert settings.log_level == "INFO"


def test_command_line_overrides_environment() -> None:
    args = cli.build_parser().parse_args(["--log-level", "ERROR"])
    settings = cli.settings_from_args(args, environ={cli.LOG_LEVEL_ENV: "DEBUG"})
    assert settings.log_level == "ERROR"


def test_bad_environment_log_level() -> None:
    args = cli.build_parser().parse_args([])
    with pytest.raises(ValueError):
        cli.settings_from_args(args, environ={cli.LOG_LEVEL_ENV: "LOUD"})


def test_bad_command_line_log_level_exits() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--log-level", "LOUD"])


def test_main_runs_a_session(monkeypatch, capsys) -> None:
    answers = iter(["quit"])

    def fake_input(prompt: str = "") -> str:
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)
    monkeypatch.delenv(cli.LOG_LEVEL_ENV, raising=False)
    assert cli.main(["--white", "Alice", "--black", "Bob"]) == 0
    out = capsys.readouterr().out
    assert "White: Alice" in out
    assert "Game ended by player choice." in out
