"""
Word-by-word partial matching stage.

Last resort: substitutes single-word translations token by token and brackets
the tokens nobody has translated yet. Results are query-specific, so they are
never cached, and there is no later stage to fall back to when storage fails.
"""
from typing import Dict, List, Optional

from ..confidence import (
    ConfidenceConfig,
    ConfidenceParams,
    DEFAULT_CONFIDENCE_CONFIG,
    METHOD_PARTIAL,
    calculate_confidence,
)
from ..models import TranslationEntry
from ..schemas import TranslationResult
from ..stores import EntryStore
from .match_stage import MatchQuery, MatchStage

UNTRANSLATED_TEMPLATE = "[{}]"


class PartialMatchStage(MatchStage):
    name = "partial"
    cacheable = False
    fatal_on_storage_error = True

    def __init__(
        self,
        entry_store: EntryStore,
        min_tokens: int = 2,
        confidence_config: ConfidenceConfig = DEFAULT_CONFIDENCE_CONFIG,
    ):
        self._entries = entry_store
        self.min_tokens = min_tokens
        self._confidence_config = confidence_config

    def _best_word(self, query: MatchQuery, token: str) -> Optional[TranslationEntry]:
        candidates = self._entries.find_by_normalized(query.source_lang, token)
        if not candidates:
            return None

        candidates.sort(
            key=lambda e: (
                -e.frequency_rank,
                -(e.confidence_score if e.confidence_score is not None else -1),
                e.text_for(query.target_lang),
            )
        )
        return candidates[0]

    def try_match(self, query: MatchQuery) -> Optional[TranslationResult]:
        tokens = query.tokens
        if len(tokens) < self.min_tokens:
            return None

        lookups: Dict[str, Optional[TranslationEntry]] = {}
        words: List[str] = []
        untranslated: List[str] = []
        matched = 0

        for token in tokens:
            if token not in lookups:
                lookups[token] = self._best_word(query, token)

            entry = lookups[token]
            if entry is None:
                words.append(UNTRANSLATED_TEMPLATE.format(token))
                untranslated.append(token)
            else:
                words.append(entry.text_for(query.target_lang))
                matched += 1

        if matched == 0:
            return None

        coverage_ratio = matched / len(tokens)
        confidence = calculate_confidence(
            METHOD_PARTIAL,
            ConfidenceParams(coverage_ratio=coverage_ratio),
            self._confidence_config,
        )

        return TranslationResult(
            translated_text=" ".join(words),
            confidence_score=confidence,
            method=METHOD_PARTIAL,
            metadata={
                "coverage": f"{matched}/{len(tokens)} words",
                "coverage_ratio": round(coverage_ratio, 4),
                "untranslated": untranslated,
                "suggestion": (
                    "This is a partial translation. Words in [brackets] need translation. "
                    "Would you like to contribute the complete translation?"
                ),
            },
        )
