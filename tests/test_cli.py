# File: tests/test_cli.py
"""Тесты для CLI (`shout/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `log`, `pipe`, `config`, `--version`, а также обработку ошибок.
"""
import json

from click.testing import CliRunner
from shout.cli import cli


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "Shout" in result.output


def test_show_config_defaults():
    runner = CliRunner()
    result = runner.invoke(cli, ["config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["destination"] == "<stdout>"
    assert data["write_mode"] == "a"


def test_show_config_from_file(tmp_path):
    cfg_file = tmp_path / "shout.json"
    cfg_file.write_text(json.dumps({"destination": "x.log", "rotate_enabled": True}), encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "--mode", "w", "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["destination"] == "x.log"
    assert data["rotate_enabled"] is True
    assert data["write_mode"] == "w"


def test_log_to_stdout():
    runner = CliRunner()
    result = runner.invoke(cli, ["log", "info", "Hello world"])
    assert result.exit_code == 0
    assert "[INFO] Hello world []" in result.output


def test_log_to_file_with_context(tmp_path):
    out = tmp_path / "app.log"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--destination", str(out), "--mode", "w", "log", "warning", "disk", "-x", "free=1%"]
    )
    assert result.exit_code == 0
    text = out.read_text(encoding="utf-8")
    assert "[WARNING] disk [Array\n(\n    [free] => 1%\n)\n]" in text


def test_log_bad_context():
    runner = CliRunner()
    result = runner.invoke(cli, ["log", "info", "x", "--context", "novalue"])
    assert result.exit_code != 0
    assert "KEY=VALUE" in result.output


def test_pipe_writes_every_line(tmp_path):
    cfg_file = tmp_path / "shout.yaml"
    out = tmp_path / "piped.log"
    cfg_file.write_text(f"destination: {out}\nline_format: \"%2$s %3$s\\n\"\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "pipe", "notice"], input="first\nsecond\n")
    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8") == "NOTICE first\nNOTICE second\n"


def test_unwritable_destination(tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--destination", str(tmp_path / "missing" / "app.log"), "log", "info", "x"]
    )
    assert result.exit_code == 1
    assert "Ошибка записи" in result.output


def test_invalid_config_file(tmp_path):
    cfg_file = tmp_path / "shout.yaml"
    cfg_file.write_text("write_mode: r\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_invalid_mode_choice():
    runner = CliRunner()
    result = runner.invoke(cli, ["--mode", "r", "config"])
    assert result.exit_code == 2


def test_log_file_receives_diagnostics(tmp_path):
    out = tmp_path / "app.log"
    diag = tmp_path / "diag.log"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--log-level", "DEBUG", "--log-file", str(diag), "--destination", str(out), "log", "info", "x"],
    )
    assert result.exit_code == 0
    text = diag.read_text(encoding="utf-8")
    assert f"Opened destination {out} (mode: a)" in text
    assert f"Closed destination {out}" in text
