"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from exprtree.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


def test_eval_default_expression(cli_runner: CliRunner, tmp_path: Path, monkeypatch):
    """Test eval with no argument uses the built-in example."""
    monkeypatch.chdir(tmp_path)
    result = cli_runner.invoke(app, ["eval"])
    assert result.exit_code == 0
    assert "(3 + (5 * (2 - 8)))" in result.stdout
    assert "Result: -27" in result.stdout


def test_eval_expression(cli_runner: CliRunner):
    """Test eval prints the rendered tree and the value."""
    result = cli_runner.invoke(app, ["eval", "8 - 3 - 2"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["((8 - 3) - 2)", "Result: 3"]


def test_eval_json(cli_runner: CliRunner):
    """Test eval with JSON output."""
    result = cli_runner.invoke(app, ["eval", "7 / 2", "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["value"] == 3


def test_eval_unknown_format(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "1", "--format", "xml"])
    assert result.exit_code == 2


@pytest.mark.parametrize(
    "expression,kind",
    [
        ("1 & 2", "invalid character"),
        ("(1 + 2", "unexpected token"),
        ("1 + ", "unexpected token in factor"),
        ("1 / 0", "divide by zero"),
        ("1 2", "unexpected token"),
    ],
)
def test_eval_errors(cli_runner: CliRunner, expression: str, kind: str):
    """Test eval reports failures and exits non-zero."""
    result = cli_runner.invoke(app, ["eval", expression])
    assert result.exit_code == 1
    assert f"Error: {kind}" in result.output
    assert "Result:" not in result.output


def test_eval_lenient(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "1 2", "--lenient"])
    assert result.exit_code == 0
    assert "Result: 1" in result.stdout


def test_eval_bits(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "127 + 1", "--bits", "8"])
    assert result.exit_code == 1
    assert "integer overflow" in result.output


def test_eval_invalid_bits(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "1", "--bits", "1"])
    assert result.exit_code == 1
    assert "invalid option" in result.output


def test_eval_with_config(cli_runner: CliRunner, config_file: Path):
    """Test eval reads engine settings from a config file."""
    result = cli_runner.invoke(app, ["eval", "1 2", "--config", str(config_file)])
    assert result.exit_code == 0
    assert "Result: 1" in result.stdout

    result = cli_runner.invoke(app, ["eval", "32767 + 1", "--config", str(config_file)])
    assert result.exit_code == 1
    assert "integer overflow" in result.output


def test_eval_missing_config(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(app, ["eval", "1", "--config", str(tmp_path / "missing.toml")])
    assert result.exit_code == 1
    assert "configuration error" in result.output


def test_tokens_command(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["tokens", "12 * (3)"])
    assert result.exit_code == 0
    for kind in ("number", "star", "lparen", "rparen", "end"):
        assert kind in result.stdout


def test_tokens_invalid(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["tokens", "1 $ 2"])
    assert result.exit_code == 1
    assert "invalid character" in result.output


def test_tree_command(cli_runner: CliRunner, tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = cli_runner.invoke(app, ["tree", "1 + 2 * 3"])
    assert result.exit_code == 0
    assert "(1 + (2 * 3))" in result.stdout
    assert "depth 3, 5 nodes" in result.stdout


def test_tree_parse_error(cli_runner: CliRunner, tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = cli_runner.invoke(app, ["tree", "1 +"])
    assert result.exit_code == 1
    assert "unexpected token in factor" in result.output


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "exprtree version" in result.stdout
