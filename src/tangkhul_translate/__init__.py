"""
Tangkhul translation resolution engine.

Resolves English ↔ Tangkhul phrases against community-contributed data by
cascading through cache, exact, consensus, similarity and partial matches.

Usage:
    service = create_translation_service()
    result = service.translate(TranslationRequest(
        text="Hello", source_language="english", target_language="tangkhul"
    ))
"""
from .config import TranslationEngineConfig
from .confidence import ConfidenceConfig, ConfidenceParams, calculate_confidence
from .exceptions import (
    ConfigurationError,
    NoDataAvailable,
    NotFound,
    StorageUnavailable,
    TranslationEngineError,
    UnexpectedError,
    ValidationError,
)
from .models import CacheEntry, ConsensusRecord, TranslationEntry
from .normalization import generate_hash, normalize_text, tokenize
from .schemas import TranslationRequest, TranslationResult
from .service import TranslationService, create_translation_service
from .similarity import calculate_similarity

__version__ = "1.0.0"

__all__ = [
    "TranslationEngineConfig",
    "ConfidenceConfig",
    "ConfidenceParams",
    "calculate_confidence",
    "ConfigurationError",
    "NoDataAvailable",
    "NotFound",
    "StorageUnavailable",
    "TranslationEngineError",
    "UnexpectedError",
    "ValidationError",
    "CacheEntry",
    "ConsensusRecord",
    "TranslationEntry",
    "generate_hash",
    "normalize_text",
    "tokenize",
    "TranslationRequest",
    "TranslationResult",
    "TranslationService",
    "create_translation_service",
    "calculate_similarity",
]
