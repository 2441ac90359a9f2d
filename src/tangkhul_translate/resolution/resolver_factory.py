"""
Factory for creating translation resolvers.

Wires stores and configuration into the ordered stage cascade.
"""
from typing import Optional

from ..config import TranslationEngineConfig
from ..stores import CacheStore, ConsensusStore, EntryStore
from .cache_stage import CacheStage
from .consensus_matcher import ConsensusStage
from .exact_matcher import ExactMatchStage
from .partial_matcher import PartialMatchStage
from .resolution_policy import ResolutionPolicy
from .similarity_matcher import SimilarityStage
from .translation_resolver import TranslationResolver


def create_resolver(
    entry_store: EntryStore,
    consensus_store: ConsensusStore,
    cache_store: Optional[CacheStore] = None,
    config: Optional[TranslationEngineConfig] = None,
) -> TranslationResolver:
    """
    Factory function to create a TranslationResolver.
    
    The cache stage is included only when a cache store is given and caching
    is enabled in config.
    
    :param entry_store: Approved translation entries
    :param consensus_store: Consensus aggregates
    :param cache_store: Optional resolution cache
    :param config: TranslationEngineConfig instance (defaults if None)
    :return: Configured TranslationResolver
    """
    config = config or TranslationEngineConfig()
    confidence = config.confidence

    if not config.cache_enabled:
        cache_store = None

    similarity_stage = SimilarityStage(
        entry_store,
        threshold=config.similarity_threshold,
        pool_size=config.similarity_pool_size,
        min_pool_confidence=config.min_pool_confidence,
        max_alternatives=config.max_alternatives,
        confidence_config=confidence,
    )

    stages = []
    if cache_store is not None:
        stages.append(CacheStage(cache_store))
    stages.extend([
        ExactMatchStage(entry_store, confidence_config=confidence),
        ConsensusStage(
            consensus_store,
            min_agreement=config.consensus_min_agreement,
            confidence_config=confidence,
        ),
        similarity_stage,
        PartialMatchStage(entry_store, confidence_config=confidence),
    ])

    return TranslationResolver(
        policy=ResolutionPolicy(stages),
        entry_store=entry_store,
        cache_store=cache_store,
        similarity_stage=similarity_stage,
        suggestion_threshold=config.suggestion_threshold,
        suggestion_limit=config.suggestion_limit,
    )
