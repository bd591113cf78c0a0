"""Tests for the click command-line interface."""

import json
import re

import pytest
from click.testing import CliRunner

from forge.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


def _json(runner, *args):
    result = runner.invoke(cli, ["-o", "json", *args], obj={})
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


# ── generate ─────────────────────────────────────────────────────────

def test_generate_console(runner):
    result = runner.invoke(cli, ["-q", "generate", "hexadecimal", "--length", "20"], obj={})
    assert result.exit_code == 0, result.output
    assert re.search(r"\b[0-9a-f]{20}\b", result.output)
    assert "Strength Meter" in result.output


def test_generate_json_records_each_secret(runner):
    items = _json(runner, "generate", "uuid", "-n", "3")
    assert len(items) == 3
    assert all(item["algorithm"] == "uuid" for item in items)
    assert all(item["strength"]["score"] >= 0 for item in items)


def test_generate_count_beyond_history_limit(runner):
    items = _json(runner, "generate", "hexadecimal", "-n", "60", "--no-strength")
    assert len(items) == 60
    assert len({item["id"] for item in items}) == 60


def test_generate_export_beyond_history_limit(runner, tmp_path):
    target = tmp_path / "all.json"
    result = runner.invoke(
        cli,
        ["-q", "generate", "uuid", "-n", "55", "--no-strength",
         "--export", str(target), "--format", "json"],
        obj={},
    )
    assert result.exit_code == 0, result.output
    assert json.loads(target.read_text(encoding="utf-8"))["totalSecrets"] == 55


def test_generate_no_strength(runner):
    items = _json(runner, "generate", "numeric-pin", "--length", "6", "--no-strength")
    assert items[0]["strength"] is None
    assert re.fullmatch(r"\d{6}", items[0]["secret"])


def test_generate_password_options(runner):
    items = _json(
        runner, "generate", "password", "--length", "12",
        "--no-uppercase", "--no-lowercase", "--numbers", "--no-password-symbols",
    )
    assert items[0]["secret"].isdigit()


def test_generate_with_preset(runner):
    items = _json(runner, "generate", "--preset", "hex", "--length", "40")
    assert set(items[0]["secret"]) <= set("0123456789abcdef")


def test_generate_empty_charset_fails(runner):
    result = runner.invoke(
        cli,
        ["-q", "generate", "--charset", "0O1l", "--exclude-similar"],
        obj={},
    )
    assert result.exit_code == 1
    assert "empty" in result.output


def test_generate_invalid_structure_fails(runner):
    result = runner.invoke(cli, ["-q", "generate", "api-key", "--segments", "0"], obj={})
    assert result.exit_code == 1


def test_generate_export_txt(runner, tmp_path):
    target = tmp_path / "secret.txt"
    result = runner.invoke(
        cli,
        ["-q", "generate", "alphanumeric", "--export", str(target), "--format", "txt"],
        obj={},
    )
    assert result.exit_code == 0, result.output
    content = target.read_text(encoding="utf-8")
    assert content.startswith("Secret Generator Export\nAlgorithm: alphanumeric\n")


def test_generate_export_many_is_history(runner, tmp_path):
    result = runner.invoke(
        cli,
        ["-q", "generate", "uuid", "-n", "2", "--export-dir", str(tmp_path),
         "--format", "json"],
        obj={},
    )
    assert result.exit_code == 0, result.output
    files = list(tmp_path.glob("secret-history-*.json"))
    assert len(files) == 1
    assert json.loads(files[0].read_text(encoding="utf-8"))["totalSecrets"] == 2


# ── batch ────────────────────────────────────────────────────────────

def test_batch_json(runner):
    items = _json(runner, "batch", "api-key", "--count", "4")
    assert len(items) == 4
    assert all(re.fullmatch(r"(\w{4}-){3}\w{4}", item["secret"]) for item in items)


def test_batch_count_out_of_range(runner):
    result = runner.invoke(cli, ["-q", "batch", "--count", "101"], obj={})
    assert result.exit_code == 1


def test_batch_export(runner, tmp_path):
    target = tmp_path / "batch.json"
    result = runner.invoke(
        cli, ["-q", "batch", "hexadecimal", "-n", "3", "--export", str(target)], obj={}
    )
    assert result.exit_code == 0, result.output
    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["algorithm"] == "hexadecimal"
    assert data["totalSecrets"] == 3


# ── strength / charset / audit / algorithms ──────────────────────────

def test_strength_json(runner):
    data = _json(runner, "strength", "kj2]aWru")
    assert data["score"] == 86
    assert data["strength"] == "very-strong"


def test_strength_console_does_not_interpret_markup(runner):
    result = runner.invoke(cli, ["-q", "strength", "[bold]x[/bold]"], obj={})
    assert result.exit_code == 0, result.output
    assert "Strength Meter" in result.output


def test_charset_preset(runner):
    data = _json(runner, "charset", "--preset", "numbers", "--exclude-similar")
    assert data["effective"] == "346789"
    assert data["removed"] == "0125"
    assert data["valid"] is True


def test_charset_invalid_exits_nonzero(runner):
    result = runner.invoke(cli, ["-q", "charset", "0O", "--exclude-similar"], obj={})
    assert result.exit_code == 1


def test_charset_requires_input(runner):
    result = runner.invoke(cli, ["-q", "charset"], obj={})
    assert result.exit_code == 2


def test_audit_json(runner):
    result = runner.invoke(
        cli, ["-o", "json", "audit", "hexadecimal", "--samples", "200"], obj={}
    )
    # Exit status 2 marks a failed audit, which a uniform source hits 1% of the time.
    assert result.exit_code in (0, 2), result.output
    data = json.loads(result.output)
    assert data["samples"] == 200
    assert data["alphabet_size"] == 16
    assert data["out_of_alphabet"] == 0


def test_audit_password_rejected(runner):
    result = runner.invoke(cli, ["-q", "audit", "password"], obj={})
    assert result.exit_code == 1


def test_algorithms(runner):
    data = _json(runner, "algorithms")
    assert [entry["tag"] for entry in data][:2] == ["alphanumeric", "with-symbols"]
    assert len(data) == 10


def test_config_option(runner, tmp_path):
    path = tmp_path / "forge.toml"
    path.write_text('[generator]\nalgorithm = "numeric-pin"\nlength = 9\n', encoding="utf-8")
    items = _json(runner, "-c", str(path), "generate")
    assert re.fullmatch(r"\d{9}", items[0]["secret"])


def test_config_option_unknown_algorithm(runner, tmp_path):
    path = tmp_path / "forge.toml"
    path.write_text('[generator]\nalgorithm = "rot13"\n', encoding="utf-8")
    result = runner.invoke(cli, ["-c", str(path), "generate"], obj={})
    assert result.exit_code == 2
    assert "--config" in result.output
