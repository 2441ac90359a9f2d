"""
Configuration loader with validation.

Reads TRANSLATION_* environment variables (and a local .env file during
development) into a TranslationEngineConfig.
"""
from dotenv import load_dotenv

from .confidence import ConfidenceConfig
from .config import TranslationEngineConfig
from .config_validator import (
    get_bool_env,
    get_float_env,
    get_int_env,
    get_optional_env,
    validate_choice,
)
from .exceptions import ConfigurationError

EVICTION_CHOICES = ("none", "lru", "ttl")
LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_confidence_config_from_env() -> ConfidenceConfig:
    """
    Load confidence-model constants, falling back to the stock values.

    :return: ConfidenceConfig instance
    :raises: ConfigurationError if a value is malformed
    """
    defaults = ConfidenceConfig()
    return ConfidenceConfig(
        consensus_high_ratio=get_float_env(
            "TRANSLATION_CONSENSUS_HIGH_RATIO", defaults.consensus_high_ratio, 0.0, 1.0
        ),
        consensus_medium_ratio=get_float_env(
            "TRANSLATION_CONSENSUS_MEDIUM_RATIO", defaults.consensus_medium_ratio, 0.0, 1.0
        ),
        expert_vote_weight=get_float_env(
            "TRANSLATION_EXPERT_VOTE_WEIGHT", defaults.expert_vote_weight, min_value=0.0
        ),
        reviewer_vote_weight=get_float_env(
            "TRANSLATION_REVIEWER_VOTE_WEIGHT", defaults.reviewer_vote_weight, min_value=0.0
        ),
        contributor_vote_weight=get_float_env(
            "TRANSLATION_CONTRIBUTOR_VOTE_WEIGHT", defaults.contributor_vote_weight, min_value=0.0
        ),
        grammar_match_multiplier=get_float_env(
            "TRANSLATION_GRAMMAR_MATCH_MULTIPLIER", defaults.grammar_match_multiplier, min_value=0.0
        ),
        golden_data_floor=get_int_env(
            "TRANSLATION_GOLDEN_DATA_FLOOR", defaults.golden_data_floor, 0, 100
        ),
    )


def load_config_from_env(dotenv: bool = True) -> TranslationEngineConfig:
    """
    Load configuration from environment variables with validation.
    
    Usage:
        config = load_config_from_env()
        service = create_translation_service(config)
    
    :param dotenv: Load a .env file first (disable in production)
    :return: Validated TranslationEngineConfig instance
    :raises: ConfigurationError if values are missing or invalid
    """
    if dotenv:
        load_dotenv()

    config = TranslationEngineConfig(
        similarity_threshold=get_float_env("TRANSLATION_SIMILARITY_THRESHOLD", 0.8, 0.0, 1.0),
        similarity_pool_size=get_int_env("TRANSLATION_SIMILARITY_POOL_SIZE", 50, min_value=1),
        min_pool_confidence=get_int_env("TRANSLATION_MIN_POOL_CONFIDENCE", 70, 0, 100),
        max_alternatives=get_int_env("TRANSLATION_MAX_ALTERNATIVES", 3, min_value=0),
        consensus_min_agreement=get_float_env(
            "TRANSLATION_CONSENSUS_MIN_AGREEMENT", 70.0, 0.0, 100.0
        ),
        suggestion_threshold=get_float_env("TRANSLATION_SUGGESTION_THRESHOLD", 0.2, 0.0, 1.0),
        suggestion_limit=get_int_env("TRANSLATION_SUGGESTION_LIMIT", 3, min_value=0),
        max_text_length=get_int_env("TRANSLATION_MAX_TEXT_LENGTH", 500, min_value=1),
        cache_enabled=get_bool_env("TRANSLATION_CACHE_ENABLED", True),
        cache_eviction=validate_choice(
            (get_optional_env("TRANSLATION_CACHE_EVICTION", "none") or "none").lower(),
            "TRANSLATION_CACHE_EVICTION",
            EVICTION_CHOICES,
        ),
        cache_max_entries=get_int_env("TRANSLATION_CACHE_MAX_ENTRIES", None, min_value=1),
        cache_ttl_days=get_int_env("TRANSLATION_CACHE_TTL_DAYS", None, min_value=1),
        seed_path=get_optional_env("TRANSLATION_SEED_PATH") or None,
        log_level=validate_choice(
            (get_optional_env("TRANSLATION_LOG_LEVEL", "INFO") or "INFO").upper(),
            "TRANSLATION_LOG_LEVEL",
            LOG_LEVEL_CHOICES,
        ),
        confidence=load_confidence_config_from_env(),
    )

    validate_config(config)
    return config


def validate_config(config: TranslationEngineConfig) -> TranslationEngineConfig:
    """
    Cross-field checks that single-variable readers cannot do.
    
    :raises: ConfigurationError on inconsistent settings
    """
    if config.suggestion_threshold > config.similarity_threshold:
        raise ConfigurationError(
            "TRANSLATION_SUGGESTION_THRESHOLD must not exceed TRANSLATION_SIMILARITY_THRESHOLD "
            f"({config.suggestion_threshold} > {config.similarity_threshold})"
        )

    if config.cache_eviction == "lru" and not config.cache_max_entries:
        raise ConfigurationError(
            "TRANSLATION_CACHE_MAX_ENTRIES is required when TRANSLATION_CACHE_EVICTION=lru"
        )

    if config.cache_eviction == "ttl" and not config.cache_ttl_days:
        raise ConfigurationError(
            "TRANSLATION_CACHE_TTL_DAYS is required when TRANSLATION_CACHE_EVICTION=ttl"
        )

    if config.confidence.consensus_medium_ratio > config.confidence.consensus_high_ratio:
        raise ConfigurationError(
            "TRANSLATION_CONSENSUS_MEDIUM_RATIO must not exceed TRANSLATION_CONSENSUS_HIGH_RATIO"
        )

    return config
