"""Tests for TXT / JSON export rendering and writing."""

import json
from datetime import datetime, timezone

import pytest

from forge.core.history import SecretHistory
from forge.core.models import GeneratorAlgorithm, SavedSecret, StrengthLevel, StrengthSummary
from forge.output.report import ForgeReportGenerator

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
NOW_ISO = "2024-05-01T12:00:00.000Z"
NOW_MS = 1714564800000


@pytest.fixture
def reporter(tmp_path):
    return ForgeReportGenerator(output_dir=tmp_path)


def _saved(secret, algorithm="uuid", strength=None):
    return SavedSecret(secret=secret, algorithm=algorithm, created_at=NOW, strength=strength)


# ── Single secret ────────────────────────────────────────────────────

def test_secret_txt_with_metadata(reporter):
    text = reporter.render_secret("s3cr3t", GeneratorAlgorithm.HEXADECIMAL, "txt", True, NOW)
    assert text == (
        "Secret Generator Export\n"
        "Algorithm: hexadecimal\n"
        f"Generated: {NOW_ISO}\n"
        f"Exported: {NOW_ISO}\n"
        f"\n{'=' * 50}\n\n"
        "s3cr3t"
    )


def test_secret_txt_without_metadata(reporter):
    assert reporter.render_secret("s3cr3t", "uuid", "txt", False, NOW) == "s3cr3t"


def test_secret_json(reporter):
    data = json.loads(reporter.render_secret("s3cr3t", "api-key", "json", now=NOW))
    assert data == {
        "secret": "s3cr3t",
        "algorithm": "api-key",
        "timestamp": NOW_ISO,
        "exportedAt": NOW_ISO,
    }


def test_unknown_format(reporter):
    with pytest.raises(ValueError):
        reporter.render_secret("x", "uuid", "xml")


def test_export_secret_default_name(reporter, tmp_path):
    path = reporter.export_secret("abc", "hexadecimal", fmt="txt")
    assert path.parent == tmp_path
    assert path.name.startswith("secret-hexadecimal-")
    assert path.name.endswith(".txt")
    assert path.read_text(encoding="utf-8").endswith("abc")


def test_export_secret_explicit_path(reporter, tmp_path):
    target = tmp_path / "nested" / "out.json"
    path = reporter.export_secret("abc", "uuid", target, fmt="json")
    assert path == target
    assert json.loads(target.read_text(encoding="utf-8"))["secret"] == "abc"


# ── History ──────────────────────────────────────────────────────────

def test_history_json():
    strength = StrengthSummary(score=86, strength=StrengthLevel.VERY_STRONG, entropy=52.4)
    items = [_saved("second", "api-key", strength), _saved("first")]
    data = json.loads(ForgeReportGenerator().render_history(items, "json", now=NOW))
    assert data["exportedAt"] == NOW_ISO
    assert data["totalSecrets"] == 2
    first = data["secrets"][0]
    assert first["secret"] == "second"
    assert first["timestamp"] == NOW_MS
    assert first["generatedAt"] == NOW_ISO
    assert first["strength"] == {"score": 86, "strength": "very-strong", "entropy": 52.4}
    assert "strength" not in data["secrets"][1]


def test_history_txt():
    strength = StrengthSummary(score=33, strength=StrengthLevel.MEDIUM, entropy=37.6)
    text = ForgeReportGenerator().render_history(
        [_saved("aaaaaaaa", "alphanumeric", strength)], "txt", now=NOW
    )
    assert text.startswith("Secret Generator - History Export\n")
    assert "Total Secrets: 1\n" in text
    assert "[1] ALPHANUMERIC\n" in text
    assert f"Generated: {NOW_ISO}\n" in text
    assert "Strength: medium (Score: 33/100, Entropy: 37.6 bits)\n" in text
    assert "=" * 60 in text
    assert text.endswith(f"aaaaaaaa\n\n{'-' * 60}\n\n")


def test_history_txt_without_metadata():
    text = ForgeReportGenerator().render_history([_saved("x")], "txt", include_metadata=False)
    assert "Generated:" not in text
    assert "[1] UUID\nx\n" in text


def test_export_history_from_service(reporter):
    history = SecretHistory()
    history.add("one", "uuid")
    history.add("two", "uuid")
    path = reporter.export_history(history.items, fmt="json")
    assert path.name.startswith("secret-history-")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert [s["secret"] for s in data["secrets"]] == ["two", "one"]


# ── Batch ────────────────────────────────────────────────────────────

def test_batch_json():
    items = [_saved("a", "hexadecimal"), _saved("b", "hexadecimal")]
    data = json.loads(ForgeReportGenerator().render_batch(items, "json", now=NOW))
    assert data["algorithm"] == "hexadecimal"
    assert data["totalSecrets"] == 2
    assert [s["index"] for s in data["secrets"]] == [1, 2]


def test_batch_empty_algorithm_unknown():
    data = json.loads(ForgeReportGenerator().render_batch([], "json"))
    assert data["algorithm"] == "unknown"
    assert data["secrets"] == []


def test_batch_txt():
    text = ForgeReportGenerator().render_batch([_saved("a", "base64")], "txt", now=NOW)
    assert text.startswith("Secret Generator - Batch Export\n")
    assert "Algorithm: base64\n" in text
    assert f"[1] Generated: {NOW_ISO}\n\na\n" in text


def test_export_batch_default_name(reporter):
    path = reporter.export_batch([_saved("a")], fmt="txt")
    assert path.name.startswith("batch-secrets-")
    assert path.suffix == ".txt"


def test_default_filename():
    assert ForgeReportGenerator.default_filename("secret", "json", "uuid", NOW) == (
        f"secret-uuid-{NOW_MS}.json"
    )
    assert ForgeReportGenerator.default_filename("history", "txt", now=NOW) == (
        f"secret-history-{NOW_MS}.txt"
    )
    with pytest.raises(ValueError):
        ForgeReportGenerator.default_filename("vault", "txt")
