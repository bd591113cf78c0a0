"""Tests for the Rich console output formatters."""

import pytest

from shared.console import ForgeConsole
from forge import estimate
from forge.core.history import SecretHistory
from forge.core.models import GeneratorAlgorithm
from forge.generators.charsets import inspect_charset
from forge.output.console import ForgeConsoleOutput


@pytest.fixture
def console():
    return ForgeConsole(record=True)


def _text(console):
    return console.rich.export_text()


def test_secret_is_printed_verbatim(console):
    output = ForgeConsoleOutput(console)
    output.display_secret("[red]x[/red]", GeneratorAlgorithm.WITH_SYMBOLS)
    assert "[red]x[/red]" in _text(console)


def test_strength_meter(console):
    ForgeConsoleOutput(console).display_strength(estimate("kj2]aWru"), "kj2]aWru")
    text = _text(console)
    assert "86/100" in text
    assert "VERY STRONG" in text
    assert "52.4 bits" in text


def test_error_message_with_brackets(console):
    console.error("Unknown preset ['x']")
    assert "Unknown preset ['x']" in _text(console)


def test_history_table(console):
    history = SecretHistory()
    history.add("abc123", "hexadecimal", strength=estimate("abc123").summary())
    ForgeConsoleOutput(console).display_history(history.items)
    text = _text(console)
    assert "abc123" in text
    assert "Hexadecimal" in text


def test_empty_history(console):
    ForgeConsoleOutput(console).display_history([])
    assert "History is empty" in _text(console)


def test_charset_display_invalid(console):
    ForgeConsoleOutput(console).display_charset(inspect_charset("0O", exclude_similar=True))
    assert "empty after filtering" in _text(console)


def test_algorithms_table(console):
    ForgeConsoleOutput(console).display_algorithms()
    text = _text(console)
    assert "binary-key" in text
    assert "UUID" in text
