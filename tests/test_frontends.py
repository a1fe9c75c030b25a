"""Tests for configuration and the terminal, -parse and Telegram front-ends."""

from pathlib import Path

from salesbook import main as main_module
from salesbook import telegram_bot
from salesbook.__main__ import _parse_cmd
from salesbook.config import Config


# --- Config ---

def test_config_defaults_log_beside_data_dir(tmp_path):
    config = Config(data_dir=tmp_path / "data")
    assert config.log_path == tmp_path / "salesbook.log"
    assert config.telegram_token is None


def test_config_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SALESBOOK_DATA_DIR", str(tmp_path / "d"))
    monkeypatch.setenv("SALESBOOK_LOG_PATH", str(tmp_path / "x.log"))
    monkeypatch.setenv("TELEGRAM_TOKEN", "abc")
    config = Config.from_env(load_env_file=False)
    assert config.data_dir == tmp_path / "d"
    assert config.log_path == tmp_path / "x.log"
    assert config.telegram_token == "abc"


def test_config_from_env_unset(monkeypatch):
    for name in ("SALESBOOK_DATA_DIR", "SALESBOOK_LOG_PATH", "TELEGRAM_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    config = Config.from_env(load_env_file=False)
    assert config.data_dir.name == "data"
    assert isinstance(config.log_path, Path)
    assert config.telegram_token is None


# --- Terminal loop ---

def _feed(monkeypatch, lines):
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_main_loop(monkeypatch, capsys, tmp_path):
    _feed(monkeypatch, ["person list", "", "bogus", "reminder add i/1 m/Call d/2023-08-01",
                        "exit", "person list"])
    main_module.main(Config(data_dir=tmp_path / "data"))
    out = capsys.readouterr().out
    assert "0 records loaded" in out
    assert "Your contact list is empty." in out
    assert "Unknown command: 'bogus'" in out
    assert "New reminder added: Call" in out
    assert out.rstrip().endswith("Goodbye!")
    assert (tmp_path / "data" / "reminders.json").exists()
    assert (tmp_path / "salesbook.log").exists()


def test_main_loop_stops_on_eof(monkeypatch, capsys, tmp_path):
    _feed(monkeypatch, [])
    main_module.main(Config(data_dir=tmp_path / "data"))
    assert "Type 'help'" in capsys.readouterr().out


# --- -parse ---

def test_parse_cmd_prints_fields(capsys):
    _parse_cmd("tag edit 1 c/ t/minions")
    assert capsys.readouterr().out.splitlines() == [
        "> tag edit 1 c/ t/minions",
        "command: tag.edit",
        "index: 1",
        "kind: contact",
        "tag: minions",
    ]


def test_parse_cmd_prints_errors(capsys):
    _parse_cmd("sale add m/Printer d/2023-08-01 p/1.5 q/2")
    _parse_cmd("hello")
    assert capsys.readouterr().out.splitlines() == [
        "> sale add m/Printer d/2023-08-01 p/1.5 q/2",
        "error: InvalidFormat",
        "field: unit_price",
        "> hello",
        "error: UnknownCommand",
    ]


# --- Telegram ---

def test_telegram_skipped_without_token(capsys, tmp_path):
    assert telegram_bot.main(Config(data_dir=tmp_path)) is False
    assert "Telegram disabled" in capsys.readouterr().out


def test_telegram_reply_clipped():
    assert telegram_bot._clip("short") == "short"
    clipped = telegram_bot._clip("x" * 5000)
    assert len(clipped) == 4096
    assert clipped.endswith("…")


def test_main_loop_reports_failed_save(monkeypatch, capsys, tmp_path):
    def fail_save(self, snapshot):
        raise OSError("disk full")

    monkeypatch.setattr("salesbook.storage.JsonStorage.save", fail_save)
    _feed(monkeypatch, ["reminder add i/1 m/Call d/2023-08-01", "reminder list", "exit"])
    main_module.main(Config(data_dir=tmp_path / "data"))
    out = capsys.readouterr().out
    assert "Could not save data: disk full" in out
    assert "1. Call" in out
    assert out.rstrip().endswith("Goodbye!")
