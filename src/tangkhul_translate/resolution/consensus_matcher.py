"""
Community consensus stage.

Looks up aggregated submissions by the raw query text and scores them by
weighted agreement across contributor tiers.
"""
from typing import Optional

from ..confidence import (
    ConfidenceConfig,
    ConfidenceParams,
    DEFAULT_CONFIDENCE_CONFIG,
    METHOD_CONSENSUS,
    calculate_confidence,
)
from ..schemas import TranslationResult
from ..stores import ConsensusStore
from .match_stage import MatchQuery, MatchStage


class ConsensusStage(MatchStage):
    """
    Consensus match on raw text equality.
    
    Consensus rows are keyed by surface form, so this stage compares the raw
    (trimmed) query, not its normalized form.
    """
    name = "consensus"

    def __init__(
        self,
        consensus_store: ConsensusStore,
        min_agreement: float = 70.0,
        confidence_config: ConfidenceConfig = DEFAULT_CONFIDENCE_CONFIG,
    ):
        """
        :param consensus_store: Source of consensus records
        :param min_agreement: Minimum agreement_score (0-100) to accept a record
        :param confidence_config: Scoring constants
        """
        self._consensus = consensus_store
        self.min_agreement = min_agreement
        self._confidence_config = confidence_config

    def try_match(self, query: MatchQuery) -> Optional[TranslationResult]:
        records = self._consensus.find_by_source(query.source_lang, query.text, self.min_agreement)
        records = [r for r in records if r.agreement_score >= self.min_agreement]
        if not records:
            return None

        best = max(records, key=lambda r: (r.agreement_score, r.submission_count))

        confidence = calculate_confidence(
            METHOD_CONSENSUS,
            ConfidenceParams(
                submission_count=best.submission_count,
                expert_votes=best.expert_votes,
                reviewer_votes=best.reviewer_votes,
                contributor_votes=best.contributor_votes,
                is_golden_data=best.is_golden_data,
            ),
            self._confidence_config,
        )

        return TranslationResult(
            translated_text=best.text_for(query.target_lang),
            confidence_score=confidence,
            method=METHOD_CONSENSUS,
            metadata={
                "submission_count": best.submission_count,
                "agreement_score": best.agreement_score,
                "agreement_ratio": round(best.agreement_ratio(self._confidence_config), 4),
                "is_golden_data": best.is_golden_data,
            },
        )
