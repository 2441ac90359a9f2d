from dataclasses import dataclass, field
from typing import Optional

from .confidence import ConfidenceConfig


@dataclass
class TranslationEngineConfig:
    # Similarity stage
    similarity_threshold: float = 0.8
    similarity_pool_size: int = 50
    min_pool_confidence: int = 70
    max_alternatives: int = 3

    # Consensus stage
    consensus_min_agreement: float = 70.0

    # Not-found suggestions
    suggestion_threshold: float = 0.2
    suggestion_limit: int = 3

    # Request validation
    max_text_length: int = 500

    # Cache
    cache_enabled: bool = True
    cache_eviction: str = "none"
    cache_max_entries: Optional[int] = None
    cache_ttl_days: Optional[int] = None

    # Seed export loaded into the in-memory stores
    seed_path: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    confidence: ConfidenceConfig = field(default_factory=ConfidenceConfig)
