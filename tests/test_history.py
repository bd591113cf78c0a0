"""Tests for the in-session secret history."""

import pytest

from forge import estimate
from forge.core.history import SecretHistory


def test_newest_first():
    history = SecretHistory()
    history.add("first", "uuid")
    history.add("second", "hexadecimal")
    assert [item.secret for item in history] == ["second", "first"]
    assert len(history) == 2


def test_trims_to_max_items():
    history = SecretHistory(max_items=3)
    for i in range(5):
        history.add(f"s{i}", "alphanumeric")
    assert [item.secret for item in history.items] == ["s4", "s3", "s2"]
    assert history.max_items == 3


def test_default_capacity_is_fifty():
    history = SecretHistory()
    for i in range(60):
        history.add(str(i), "numeric-pin")
    assert len(history) == 50
    assert history.items[0].secret == "59"


def test_entries_have_unique_ids_and_timestamps():
    history = SecretHistory()
    a = history.add("a", "uuid")
    b = history.add("b", "uuid")
    assert a.id != b.id
    assert a.timestamp > 0
    assert a.created_at.tzinfo is not None


def test_strength_summary_is_stored():
    history = SecretHistory()
    entry = history.add("kj2]aWru", "with-symbols", strength=estimate("kj2]aWru").summary())
    assert entry.strength.score == 86


def test_remove_and_get():
    history = SecretHistory()
    entry = history.add("keep-me", "api-key")
    other = history.add("drop-me", "api-key")
    assert history.get(entry.id) == entry
    assert history.remove(other.id) is True
    assert history.remove(other.id) is False
    assert history.get(other.id) is None
    assert len(history) == 1


def test_clear():
    history = SecretHistory()
    history.add("x", "base64")
    history.clear()
    assert len(history) == 0
    assert history.items == []


def test_items_is_a_copy():
    history = SecretHistory()
    history.add("x", "base64")
    history.items.clear()
    assert len(history) == 1


def test_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        SecretHistory(max_items=0)
