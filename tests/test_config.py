"""
Tests for configuration loading and validation.
"""
import os

import pytest

from tangkhul_translate.config import TranslationEngineConfig
from tangkhul_translate.config_loader import load_config_from_env, validate_config
from tangkhul_translate.config_validator import get_bool_env, validate_range
from tangkhul_translate.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove TRANSLATION_* variables inherited from the shell."""
    for key in list(os.environ):
        if key.startswith("TRANSLATION_"):
            monkeypatch.delenv(key)


class TestLoadConfig:
    """Tests for load_config_from_env."""

    def test_defaults(self):
        """Test that an empty environment yields the stock settings."""
        config = load_config_from_env(dotenv=False)

        assert config.similarity_threshold == 0.8
        assert config.similarity_pool_size == 50
        assert config.min_pool_confidence == 70
        assert config.consensus_min_agreement == 70.0
        assert config.suggestion_threshold == 0.2
        assert config.cache_enabled is True
        assert config.cache_eviction == "none"
        assert config.confidence.golden_data_floor == 95
        assert config.seed_path is None

    def test_overrides(self, monkeypatch):
        """Test that variables override defaults."""
        monkeypatch.setenv("TRANSLATION_SIMILARITY_THRESHOLD", "0.9")
        monkeypatch.setenv("TRANSLATION_SUGGESTION_LIMIT", "5")
        monkeypatch.setenv("TRANSLATION_CACHE_EVICTION", "LRU")
        monkeypatch.setenv("TRANSLATION_CACHE_MAX_ENTRIES", "1000")
        monkeypatch.setenv("TRANSLATION_LOG_LEVEL", "debug")
        monkeypatch.setenv("TRANSLATION_EXPERT_VOTE_WEIGHT", "4")
        monkeypatch.setenv("TRANSLATION_SEED_PATH", "data/seed.json")

        config = load_config_from_env(dotenv=False)

        assert config.similarity_threshold == 0.9
        assert config.suggestion_limit == 5
        assert config.cache_eviction == "lru"
        assert config.cache_max_entries == 1000
        assert config.log_level == "DEBUG"
        assert config.confidence.expert_vote_weight == 4.0
        assert config.seed_path == "data/seed.json"

    @pytest.mark.parametrize("key,value", [
        ("TRANSLATION_SIMILARITY_THRESHOLD", "high"),
        ("TRANSLATION_SIMILARITY_THRESHOLD", "1.5"),
        ("TRANSLATION_SIMILARITY_POOL_SIZE", "0"),
        ("TRANSLATION_MAX_TEXT_LENGTH", "ten"),
        ("TRANSLATION_CACHE_EVICTION", "fifo"),
        ("TRANSLATION_CACHE_ENABLED", "maybe"),
        ("TRANSLATION_GOLDEN_DATA_FLOOR", "101"),
    ])
    def test_invalid_values(self, monkeypatch, key, value):
        """Test that malformed or out-of-range values fail loudly."""
        monkeypatch.setenv(key, value)

        with pytest.raises(ConfigurationError):
            load_config_from_env(dotenv=False)

    def test_lru_requires_max_entries(self, monkeypatch):
        """Test the LRU cross-check."""
        monkeypatch.setenv("TRANSLATION_CACHE_EVICTION", "lru")

        with pytest.raises(ConfigurationError, match="MAX_ENTRIES"):
            load_config_from_env(dotenv=False)

    def test_ttl_requires_days(self, monkeypatch):
        """Test the TTL cross-check."""
        monkeypatch.setenv("TRANSLATION_CACHE_EVICTION", "ttl")

        with pytest.raises(ConfigurationError, match="TTL_DAYS"):
            load_config_from_env(dotenv=False)

    def test_placeholder_falls_back(self, monkeypatch):
        """Test that placeholder values warn and use the default."""
        monkeypatch.setenv("TRANSLATION_LOG_LEVEL", "your_log_level")

        with pytest.warns(UserWarning):
            config = load_config_from_env(dotenv=False)

        assert config.log_level == "INFO"


class TestValidateConfig:
    """Tests for cross-field validation."""

    def test_suggestion_threshold_above_similarity(self):
        """Test that suggestions cannot be stricter than matches."""
        with pytest.raises(ConfigurationError):
            validate_config(TranslationEngineConfig(similarity_threshold=0.5, suggestion_threshold=0.6))

    def test_valid_config_returned(self):
        """Test that a consistent config passes through."""
        config = TranslationEngineConfig()
        assert validate_config(config) is config


class TestValidators:
    """Tests for individual env helpers."""

    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("1", True), ("Yes", True), ("on", True),
        ("false", False), ("0", False), ("NO", False), ("off", False),
    ])
    def test_bool_parsing(self, monkeypatch, raw, expected):
        """Test accepted boolean spellings."""
        monkeypatch.setenv("TRANSLATION_FLAG", raw)
        assert get_bool_env("TRANSLATION_FLAG", not expected) is expected

    def test_bool_default(self):
        """Test the default when unset."""
        assert get_bool_env("TRANSLATION_FLAG", True) is True

    def test_validate_range(self):
        """Test inclusive bounds."""
        assert validate_range(5, "x", 0, 5) == 5
        with pytest.raises(ConfigurationError):
            validate_range(-1, "x", 0, 5)
