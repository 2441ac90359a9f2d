"""
Token-set similarity between phrases.

Jaccard index over normalized tokens: |A & B| / |A | B|. Word order and
repetition are ignored, so "I am happy" and "happy am I" score 1.0.

jaccard_scorer adapts the metric to rapidfuzz's scorer protocol (0-100 scale)
so candidate pools can be filtered with rapidfuzz.process.extract.
"""
from typing import Dict, List, Optional, Tuple

from rapidfuzz import process

from .normalization import tokenize


def calculate_similarity(text1: str, text2: str) -> float:
    """
    Jaccard similarity of the token sets of two texts.

    :return: Score in [0, 1]; 0 when either side has no tokens
    """
    tokens1 = set(tokenize(text1))
    tokens2 = set(tokenize(text2))

    if not tokens1 or not tokens2:
        return 0.0

    return len(tokens1 & tokens2) / len(tokens1 | tokens2)


def jaccard_scorer(query: str, choice: str, **kwargs) -> float:
    """rapidfuzz-compatible scorer returning Jaccard similarity on a 0-100 scale."""
    return calculate_similarity(query, choice) * 100.0


def rank_by_similarity(
    query: str,
    choices: Dict[int, str],
    threshold: float,
    limit: Optional[int] = None,
) -> List[Tuple[int, float]]:
    """
    Score every choice against the query and keep those at or above threshold.

    :param query: Text to compare against
    :param choices: Mapping of caller-side key -> candidate text
    :param threshold: Minimum similarity (0.0-1.0)
    :param limit: Maximum number of results (None = all)
    :return: (key, similarity) pairs, highest similarity first
    """
    if not choices:
        return []

    matches = process.extract(
        query,
        choices,
        scorer=jaccard_scorer,
        score_cutoff=threshold * 100.0,
        limit=limit,
    )

    # extract() yields (choice, score, key) for mappings; report the 0-1 ratio
    return [(key, calculate_similarity(query, choice)) for choice, _, key in matches]
