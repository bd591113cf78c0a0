"""Tests for the ForgeEngine facade."""

import logging

import pytest

from shared.config import BatchConfig, ForgeConfig, GeneratorDefaults, GlobalConfig
from forge.core.engine import ForgeEngine
from forge.core.errors import EmptyCharsetError, InvalidConfigError
from forge.core.models import GeneratorAlgorithm, GeneratorConfig, StrengthLevel


@pytest.fixture
def engine():
    return ForgeEngine()


def test_generate_uses_configured_defaults():
    config = ForgeConfig(generator=GeneratorDefaults(algorithm="hexadecimal", length=12))
    secret = ForgeEngine(config).generate()
    assert len(secret) == 12
    assert set(secret) <= set("0123456789abcdef")


def test_default_config_overrides(engine):
    config = engine.default_config(algorithm="password", length=None,
                                   password_options={"include_symbols": True})
    assert config.algorithm is GeneratorAlgorithm.PASSWORD
    assert config.length == 32
    assert config.password_options.include_symbols is True
    assert config.password_options.include_uppercase is True


def test_generate_propagates_errors(engine):
    config = GeneratorConfig(
        custom_character_set="0O",
        use_custom_character_set=True,
        exclude_similar_characters=True,
    )
    with pytest.raises(EmptyCharsetError):
        engine.generate(config)


def test_estimate(engine):
    result = engine.estimate("aaaaaaaa")
    assert result.score == 33
    assert result.strength is StrengthLevel.MEDIUM


def test_generate_batch(engine):
    items = engine.generate_batch(GeneratorConfig(algorithm="uuid"), 10)
    assert len(items) == 10
    assert len({item.secret for item in items}) == 10
    assert len({item.id for item in items}) == 10
    assert all(item.algorithm == "uuid" for item in items)
    assert all(item.strength is None for item in items)


def test_generate_batch_default_count():
    config = ForgeConfig(batch=BatchConfig(default_count=7))
    assert len(ForgeEngine(config).generate_batch()) == 7


@pytest.mark.parametrize("count", [0, -1, 101])
def test_generate_batch_count_bounds(engine, count):
    with pytest.raises(InvalidConfigError):
        engine.generate_batch(GeneratorConfig(), count)


def test_generate_batch_upper_bound(engine):
    assert len(engine.generate_batch(GeneratorConfig(length=4), 100)) == 100


def test_generate_batch_rejects_invalid_config_up_front(engine):
    with pytest.raises(InvalidConfigError):
        engine.generate_batch(GeneratorConfig(algorithm="api-key", segments=0), 5)


def test_inspect_charset(engine):
    info = engine.inspect_charset("abc0", exclude_similar=True)
    assert info.effective == "abc"


def test_audit_uses_sample_override(engine):
    result = engine.audit(GeneratorConfig(algorithm="numeric-pin", length=10), samples=50)
    assert result.samples == 50
    assert result.characters == 500


def test_debug_setting_lowers_log_level():
    engine = ForgeEngine(ForgeConfig(global_settings=GlobalConfig(debug=True)))
    assert engine.logger.underlying.level == logging.DEBUG
