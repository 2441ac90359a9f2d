"""
Match cascade for translation resolution.

Key components:
- MatchStage: Protocol for cascade stages
- CacheStage, ExactMatchStage, ConsensusStage, SimilarityStage, PartialMatchStage
- ResolutionPolicy: Ordered escalation through stages
- TranslationResolver: Cascade plus cache write-back and NotFound handling
"""
from .match_stage import MatchQuery, MatchStage
from .cache_stage import CacheStage
from .exact_matcher import ExactMatchStage
from .consensus_matcher import ConsensusStage
from .similarity_matcher import SimilarityStage
from .partial_matcher import PartialMatchStage
from .resolution_policy import ResolutionPolicy, StageOutcome
from .translation_resolver import TranslationResolver
from .resolver_factory import create_resolver

__all__ = [
    "MatchQuery",
    "MatchStage",
    "CacheStage",
    "ExactMatchStage",
    "ConsensusStage",
    "SimilarityStage",
    "PartialMatchStage",
    "ResolutionPolicy",
    "StageOutcome",
    "TranslationResolver",
    "create_resolver",
]
