"""
Exact matching stage.

Fast, deterministic matching on the normalized source text of approved entries.
"""
from typing import Optional

from ..confidence import (
    ConfidenceConfig,
    ConfidenceParams,
    DEFAULT_CONFIDENCE_CONFIG,
    METHOD_EXACT_MATCH,
    calculate_confidence,
)
from ..schemas import TranslationResult
from ..stores import EntryStore
from .match_stage import MatchQuery, MatchStage


class ExactMatchStage(MatchStage):
    """
    Exact match on normalized text (so case, accents and punctuation are
    ignored). Among several matches the highest stored confidence wins, then
    the most recently created entry.
    """
    name = "exact_match"

    def __init__(
        self,
        entry_store: EntryStore,
        confidence_config: ConfidenceConfig = DEFAULT_CONFIDENCE_CONFIG,
    ):
        self._entries = entry_store
        self._confidence_config = confidence_config

    def try_match(self, query: MatchQuery) -> Optional[TranslationResult]:
        candidates = self._entries.find_by_normalized(query.source_lang, query.normalized_text)
        if not candidates:
            return None

        best = max(
            candidates,
            key=lambda e: (e.confidence_score if e.confidence_score is not None else -1, e.created_at),
        )

        confidence = calculate_confidence(
            METHOD_EXACT_MATCH,
            ConfidenceParams(
                grammar_match=query.grammar_matches(best),
                is_golden_data=best.is_golden_data,
            ),
            self._confidence_config,
        )

        return TranslationResult(
            translated_text=best.text_for(query.target_lang),
            confidence_score=confidence,
            method=METHOD_EXACT_MATCH,
            metadata={
                "entry_id": best.id,
                "is_golden_data": best.is_golden_data,
                "part_of_speech": best.part_of_speech,
                "frequency": best.frequency,
            },
        )
