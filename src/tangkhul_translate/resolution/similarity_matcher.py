"""
Similarity matching stage.

Scores a bounded pool of high-confidence approved entries by token-set
similarity. Also serves low-threshold "did you mean" suggestions once the
whole cascade has missed.
"""
from typing import List, Optional, Tuple

from ..confidence import (
    ConfidenceConfig,
    ConfidenceParams,
    DEFAULT_CONFIDENCE_CONFIG,
    METHOD_SIMILARITY,
    calculate_confidence,
)
from ..models import TranslationEntry
from ..schemas import Alternative, Suggestion, TranslationResult
from ..similarity import rank_by_similarity
from ..stores import EntryStore
from .match_stage import MatchQuery, MatchStage


class SimilarityStage(MatchStage):
    """
    Token-set similarity match.
    
    Ranking: similarity desc, then usage frequency desc, then target text asc.
    The winner becomes the result, the next few become alternatives.
    """
    name = "similarity"

    def __init__(
        self,
        entry_store: EntryStore,
        threshold: float = 0.8,
        pool_size: int = 50,
        min_pool_confidence: int = 70,
        max_alternatives: int = 3,
        confidence_config: ConfidenceConfig = DEFAULT_CONFIDENCE_CONFIG,
    ):
        """
        :param entry_store: Source of candidate entries
        :param threshold: Minimum similarity to accept a match (0.0-1.0)
        :param pool_size: Maximum candidates fetched per query
        :param min_pool_confidence: Minimum stored confidence for pool entries
        :param max_alternatives: Alternatives returned beside the winner
        :param confidence_config: Scoring constants
        """
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be between 0.0 and 1.0, got {threshold}")

        self._entries = entry_store
        self.threshold = threshold
        self.pool_size = pool_size
        self.min_pool_confidence = min_pool_confidence
        self.max_alternatives = max_alternatives
        self._confidence_config = confidence_config

    def rank(self, query: MatchQuery, threshold: float) -> List[Tuple[TranslationEntry, float]]:
        """
        Candidates at or above threshold, best first.
        
        :raises StorageUnavailable: If the pool cannot be fetched
        """
        pool = self._entries.find_by_min_confidence(self.min_pool_confidence, self.pool_size)
        if not pool:
            return []

        choices = {index: entry.normalized_for(query.source_lang) for index, entry in enumerate(pool)}
        scored = rank_by_similarity(query.normalized_text, choices, threshold)

        ranked = [(pool[index], similarity) for index, similarity in scored]
        ranked.sort(
            key=lambda pair: (
                -pair[1],
                -pair[0].frequency_rank,
                pair[0].text_for(query.target_lang),
            )
        )
        return ranked

    def _score(self, query: MatchQuery, entry: TranslationEntry, similarity: float) -> int:
        return calculate_confidence(
            METHOD_SIMILARITY,
            ConfidenceParams(
                similarity=similarity,
                grammar_match=query.grammar_matches(entry),
                is_golden_data=entry.is_golden_data,
            ),
            self._confidence_config,
        )

    def try_match(self, query: MatchQuery) -> Optional[TranslationResult]:
        ranked = self.rank(query, self.threshold)
        if not ranked:
            return None

        best, similarity = ranked[0]
        alternatives = [
            Alternative(
                text=entry.text_for(query.target_lang),
                confidence=self._score(query, entry, alt_similarity),
                source=METHOD_SIMILARITY,
            )
            for entry, alt_similarity in ranked[1:1 + self.max_alternatives]
        ]

        return TranslationResult(
            translated_text=best.text_for(query.target_lang),
            confidence_score=self._score(query, best, similarity),
            method=METHOD_SIMILARITY,
            alternatives=alternatives,
            metadata={
                "entry_id": best.id,
                "matched_text": best.text_for(query.source_lang),
                "similarity": round(similarity, 4),
                "is_golden_data": best.is_golden_data,
            },
        )

    def suggest(self, query: MatchQuery, threshold: float = 0.2, limit: int = 3) -> List[Suggestion]:
        """
        Low-threshold candidates for "did you mean" prompts.
        
        Presentational only; never a resolution result.
        """
        return [
            Suggestion(
                source_text=entry.text_for(query.source_lang),
                translated_text=entry.text_for(query.target_lang),
                similarity=similarity,
            )
            for entry, similarity in self.rank(query, threshold)[:limit]
        ]
