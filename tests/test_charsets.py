"""Tests for character sets, presets, similar-character filtering and the CSPRNG helpers."""

import pytest

from forge.core.errors import EmptyCharsetError
from forge.generators import charsets
from forge.generators.charsets import (
    PRESETS,
    exclude_similar_characters,
    get_preset,
    get_similar_characters,
    inspect_charset,
)
from forge.generators.random_source import random_char, random_index, random_string, shuffle


# ── Alphabets ────────────────────────────────────────────────────────

def test_symbol_set_is_ascii_punctuation():
    assert len(charsets.SYMBOLS) == 32
    assert len(set(charsets.SYMBOLS)) == 32
    assert "|" in charsets.SYMBOLS
    assert not any(ch.isalnum() for ch in charsets.SYMBOLS)


def test_alphabet_sizes():
    assert len(charsets.ALPHANUMERIC) == 62
    assert len(charsets.WITH_SYMBOLS) == 94
    assert charsets.HEXADECIMAL == "0123456789abcdef"
    assert len(charsets.BASE64_ALPHABET) == 64
    assert charsets.BASE64_ALPHABET.endswith("+/")
    assert charsets.URL_SAFE_BASE64_ALPHABET.endswith("-_")


# ── Similar characters ───────────────────────────────────────────────

def test_exclude_similar_preserves_order_and_duplicates():
    assert exclude_similar_characters("abc0O1xx") == "abcxx"


def test_exclude_similar_removes_every_group_member():
    assert exclude_similar_characters("0OoQD1lIi|5Ss2Zz") == ""


def test_exclude_similar_empty():
    assert exclude_similar_characters("") == ""


def test_get_similar_characters():
    assert get_similar_characters("0") == ["O", "o", "Q", "D"]
    assert get_similar_characters("5") == ["S", "s"]
    assert get_similar_characters("x") == []


# ── Presets ──────────────────────────────────────────────────────────

def test_presets_are_named():
    assert set(PRESETS) == {
        "alphanumeric",
        "lowercase",
        "uppercase",
        "numbers",
        "symbols",
        "alphanumeric-safe",
        "hex",
        "base64",
    }
    assert PRESETS["numbers"] == "0123456789"
    assert "l" not in PRESETS["alphanumeric-safe"]
    assert "0" not in PRESETS["alphanumeric-safe"]


def test_get_preset_unknown_name():
    with pytest.raises(KeyError, match="alphanumeric-safe"):
        get_preset("emoji")


def test_get_preset_known_name():
    assert get_preset("hex") == charsets.HEXADECIMAL


# ── Inspection ───────────────────────────────────────────────────────

def test_inspect_charset_with_filtering():
    info = inspect_charset("aab0", exclude_similar=True)
    assert info.effective == "aab"
    assert info.size == 3
    assert info.unique_count == 2
    assert info.duplicate_count == 1
    assert info.removed == "0"
    assert info.valid


def test_inspect_charset_filtered_to_nothing():
    info = inspect_charset("0O1lI5S2Z", exclude_similar=True)
    assert info.effective == ""
    assert not info.valid
    assert info.removed == "0O1lI5S2Z"


def test_inspect_charset_without_filtering():
    info = inspect_charset("0O")
    assert info.effective == "0O"
    assert info.removed == ""
    assert info.valid


# ── CSPRNG helpers ───────────────────────────────────────────────────

def test_random_index_covers_range():
    seen = {random_index(4) for _ in range(400)}
    assert seen == {0, 1, 2, 3}


def test_random_char_rejects_empty_set():
    with pytest.raises(EmptyCharsetError):
        random_char("")


def test_random_string_draws_from_charset():
    out = random_string("xyz", 200)
    assert len(out) == 200
    assert set(out) <= set("xyz")


def test_random_string_zero_length():
    assert random_string("abc", 0) == ""


def test_shuffle_keeps_elements():
    items = list(range(50))
    shuffle(items)
    assert sorted(items) == list(range(50))
