"""Tests for TOML configuration loading."""

import pytest

from shared.config import ForgeConfig
from forge.core.models import GeneratorAlgorithm


def test_defaults():
    config = ForgeConfig()
    assert config.global_settings.log_level == "WARNING"
    assert config.global_settings.log_file == ""
    assert config.generator.algorithm == "alphanumeric"
    assert config.generator.length == 32
    assert config.history.max_items == 50
    assert config.batch.default_count == 5
    assert config.batch.max_count == 100
    assert config.audit.samples == 1000
    assert config.audit.significance == 0.01


def test_load_partial_file(tmp_path):
    path = tmp_path / "forge.toml"
    path.write_text(
        "[generator]\n"
        'algorithm = "api-key"\n'
        "segments = 6\n"
        "unknown_key = 1\n"
        "\n"
        "[batch]\n"
        "max_count = 20\n",
        encoding="utf-8",
    )
    config = ForgeConfig.load(path)
    assert config.generator.algorithm == "api-key"
    assert config.generator.segments == 6
    assert config.generator.segment_length == 4
    assert config.batch.max_count == 20
    assert config.history.max_items == 50


def test_load_missing_explicit_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        ForgeConfig.load(tmp_path / "absent.toml")


def test_to_dict():
    data = ForgeConfig().to_dict()
    assert data["generator"]["length"] == 32
    assert data["global_settings"]["log_json"] is False


def test_to_generator_config_ignores_none_overrides():
    config = ForgeConfig().generator.to_generator_config(algorithm="uuid", length=None)
    assert config.algorithm is GeneratorAlgorithm.UUID
    assert config.length == 32


def test_to_generator_config_password_toggles():
    defaults = ForgeConfig().generator
    defaults.include_password_symbols = True
    config = defaults.to_generator_config(
        password_options={"include_numbers": False, "include_lowercase": None}
    )
    assert config.password_options.include_symbols is True
    assert config.password_options.include_numbers is False
    assert config.password_options.include_lowercase is True


def test_load_rejects_unknown_algorithm(tmp_path):
    path = tmp_path / "forge.toml"
    path.write_text('[generator]\nalgorithm = "rot13"\n', encoding="utf-8")
    with pytest.raises(ValueError):
        ForgeConfig.load(path)
