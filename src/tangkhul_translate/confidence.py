"""
Confidence model for translation resolution.

Maps a match method plus candidate metadata to an integer score in [0, 100].
Pure and deterministic: identical inputs always produce the identical score.
All weights, thresholds and base scores come from ConfidenceConfig so they can
be tuned without touching the cascade.
"""
import math
from dataclasses import dataclass


METHOD_CACHE_HIT = "cache_hit"
METHOD_EXACT_MATCH = "exact_match"
METHOD_CONSENSUS = "consensus"
METHOD_SIMILARITY = "similarity"
METHOD_PARTIAL = "partial"


@dataclass(frozen=True)
class ConfidenceConfig:
    """Tunable constants for confidence scoring."""
    cache_hit: int = 100
    exact_match: int = 100
    consensus_high: int = 95
    consensus_medium: int = 85
    similarity_base: int = 75
    similarity_span: int = 20
    partial_match: int = 60
    fallback: int = 40

    consensus_high_ratio: float = 0.9
    consensus_medium_ratio: float = 0.7

    expert_vote_weight: float = 3.0
    reviewer_vote_weight: float = 2.0
    contributor_vote_weight: float = 1.0

    grammar_match_multiplier: float = 1.2
    golden_data_floor: int = 95

    max_score: int = 100
    min_score: int = 0


DEFAULT_CONFIDENCE_CONFIG = ConfidenceConfig()


@dataclass(frozen=True)
class ConfidenceParams:
    """
    Candidate metadata fed to the confidence model.

    Attributes:
        similarity: Jaccard similarity of the winning candidate (similarity method)
        submission_count: Total submissions behind a consensus record
        expert_votes: Submissions from expert-tier contributors
        reviewer_votes: Submissions from reviewer-tier contributors
        contributor_votes: Submissions from regular contributors
        coverage_ratio: Matched tokens / total tokens (partial method)
        grammar_match: Candidate grammar features match the request
        is_golden_data: Candidate is promoted golden data
    """
    similarity: float = 0.0
    submission_count: int = 0
    expert_votes: int = 0
    reviewer_votes: int = 0
    contributor_votes: int = 0
    coverage_ratio: float = 0.0
    grammar_match: bool = False
    is_golden_data: bool = False


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def weighted_agreement_ratio(
    expert_votes: int,
    reviewer_votes: int,
    contributor_votes: int,
    submission_count: int,
    config: ConfidenceConfig = DEFAULT_CONFIDENCE_CONFIG,
) -> float:
    """
    Weighted votes normalized against every submission coming from an expert.

    :return: Ratio in [0, 1] for well-formed records, 0.0 when there are no submissions
    """
    max_possible = submission_count * config.expert_vote_weight
    if max_possible <= 0:
        return 0.0

    weighted = (
        expert_votes * config.expert_vote_weight
        + reviewer_votes * config.reviewer_vote_weight
        + contributor_votes * config.contributor_vote_weight
    )
    return weighted / max_possible


def _base_score(method: str, params: ConfidenceParams, config: ConfidenceConfig) -> float:
    if method == METHOD_CACHE_HIT:
        return config.cache_hit

    if method == METHOD_EXACT_MATCH:
        return config.exact_match

    if method == METHOD_CONSENSUS:
        ratio = weighted_agreement_ratio(
            params.expert_votes,
            params.reviewer_votes,
            params.contributor_votes,
            params.submission_count,
            config,
        )
        if ratio >= config.consensus_high_ratio:
            return config.consensus_high
        if ratio >= config.consensus_medium_ratio:
            return config.consensus_medium
        return config.similarity_base

    if method == METHOD_SIMILARITY:
        return config.similarity_base + round_half_up(params.similarity * config.similarity_span)

    if method == METHOD_PARTIAL:
        return round_half_up(config.partial_match * params.coverage_ratio)

    return config.fallback


def calculate_confidence(
    method: str,
    params: ConfidenceParams = ConfidenceParams(),
    config: ConfidenceConfig = DEFAULT_CONFIDENCE_CONFIG,
) -> int:
    """
    Score a match on the 0-100 scale.

    Adjustments run after the base score: a grammar match multiplies it,
    golden data raises it to the golden floor (never lowers it). The result is
    rounded half-up and clamped.

    :param method: One of the METHOD_* names; anything else gets the fallback score
    :param params: Candidate metadata
    :param config: Scoring constants
    :return: Integer confidence in [0, 100]
    """
    score = float(_base_score(method, params, config))

    if params.grammar_match:
        score *= config.grammar_match_multiplier

    if params.is_golden_data:
        score = max(score, float(config.golden_data_floor))

    return max(config.min_score, min(round_half_up(score), config.max_score))
