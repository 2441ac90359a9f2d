"""
Records read and written by the resolution engine.

Persistence mechanics live behind the store interfaces; these dataclasses only
fix the shape of what the engine sees.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from .confidence import ConfidenceConfig, DEFAULT_CONFIDENCE_CONFIG, weighted_agreement_ratio
from .normalization import normalize_text, tokenize

ENGLISH = "english"
TANGKHUL = "tangkhul"

LANGUAGE_ALIASES = {
    "english": ENGLISH,
    "en": ENGLISH,
    "tangkhul": TANGKHUL,
    "nmf": TANGKHUL,
}

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"

FREQUENCY_RANKS = {
    "rare": 0,
    "uncommon": 1,
    "common": 2,
    "very_common": 3,
}

TIER_EXPERT = "expert"
TIER_REVIEWER = "reviewer"
TIER_CONTRIBUTOR = "contributor"

CacheKey = Tuple[str, str, str]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def canonical_language(language: Optional[str]) -> Optional[str]:
    """Map a language name or code to "english"/"tangkhul"; None if unknown."""
    if not language:
        return None
    return LANGUAGE_ALIASES.get(language.strip().lower())


def frequency_rank(frequency: Optional[str]) -> int:
    """Rank of a usage-frequency tag; untagged entries rank below "rare"."""
    if not frequency:
        return -1
    return FREQUENCY_RANKS.get(frequency, -1)


@dataclass
class TranslationEntry:
    """A single vetted English/Tangkhul phrase pair."""
    english_text: str
    tangkhul_text: str
    status: str = STATUS_PENDING
    confidence_score: Optional[int] = None
    part_of_speech: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    grammar_features: Dict[str, Any] = field(default_factory=dict)
    frequency: Optional[str] = None
    is_golden_data: bool = False
    category: Optional[str] = None
    context: Optional[str] = None
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: datetime = field(default_factory=utcnow)

    normalized_english: str = field(init=False)
    normalized_tangkhul: str = field(init=False)

    def __post_init__(self):
        self._refresh_normalized()

    def _refresh_normalized(self) -> None:
        self.normalized_english = normalize_text(self.english_text)
        self.normalized_tangkhul = normalize_text(self.tangkhul_text)

    @property
    def is_approved(self) -> bool:
        return self.status == STATUS_APPROVED

    @property
    def frequency_rank(self) -> int:
        return frequency_rank(self.frequency)

    def text_for(self, language: str) -> str:
        return self.english_text if language == ENGLISH else self.tangkhul_text

    def normalized_for(self, language: str) -> str:
        return self.normalized_english if language == ENGLISH else self.normalized_tangkhul

    def word_count(self, language: str = ENGLISH) -> int:
        return len(tokenize(self.text_for(language)))

    def approve(self) -> None:
        self.status = STATUS_APPROVED

    def promote_to_golden(self) -> None:
        """Golden data must be approved first."""
        if not self.is_approved:
            raise ValueError("Only approved entries can be promoted to golden data")
        self.is_golden_data = True

    def update_text(self, english_text: Optional[str] = None, tangkhul_text: Optional[str] = None) -> None:
        """Edit the phrase pair. Golden entries are frozen."""
        if self.is_golden_data:
            raise ValueError("Golden entries are immutable; only metadata can be refreshed")
        if english_text is not None:
            self.english_text = english_text
        if tangkhul_text is not None:
            self.tangkhul_text = tangkhul_text
        self._refresh_normalized()

    def refresh_metadata(
        self,
        confidence_score: Optional[int] = None,
        frequency: Optional[str] = None,
        tags: Optional[List[str]] = None,
        part_of_speech: Optional[str] = None,
        grammar_features: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Update tagging metadata; allowed for golden entries too."""
        if confidence_score is not None:
            self.confidence_score = confidence_score
        if frequency is not None:
            self.frequency = frequency
        if tags is not None:
            self.tags = list(tags)
        if part_of_speech is not None:
            self.part_of_speech = part_of_speech
        if grammar_features is not None:
            self.grammar_features = dict(grammar_features)


@dataclass
class ConsensusRecord:
    """
    Aggregate over every raw submission of the same phrase pair.

    Keyed by the raw (not normalized) english/tangkhul texts, so distinct
    surface forms keep distinct rows. agreement_score is the weighted
    agreement ratio on a 0-100 scale.
    """
    english_text: str
    tangkhul_text: str
    submission_count: int = 0
    expert_votes: int = 0
    reviewer_votes: int = 0
    contributor_votes: int = 0
    agreement_score: float = 0.0
    is_golden_data: bool = False

    @property
    def key(self) -> Tuple[str, str]:
        return (self.english_text, self.tangkhul_text)

    def text_for(self, language: str) -> str:
        return self.english_text if language == ENGLISH else self.tangkhul_text

    def agreement_ratio(self, config: ConfidenceConfig = DEFAULT_CONFIDENCE_CONFIG) -> float:
        return weighted_agreement_ratio(
            self.expert_votes,
            self.reviewer_votes,
            self.contributor_votes,
            self.submission_count,
            config,
        )

    def record_submission(self, tier: str, config: ConfidenceConfig = DEFAULT_CONFIDENCE_CONFIG) -> None:
        """Count one more submission from a contributor tier and rescore."""
        if tier == TIER_EXPERT:
            self.expert_votes += 1
        elif tier == TIER_REVIEWER:
            self.reviewer_votes += 1
        elif tier == TIER_CONTRIBUTOR:
            self.contributor_votes += 1
        else:
            raise ValueError(f"Unknown contributor tier '{tier}'")

        self.submission_count += 1
        self.agreement_score = round(self.agreement_ratio(config) * 100, 2)


@dataclass
class CacheEntry:
    """Memoized resolution keyed by (hash of normalized text, source, target)."""
    text_hash: str
    source_lang: str
    target_lang: str
    source_text: str
    translated_text: str
    confidence_score: int
    method: str
    hit_count: int = 0
    created_at: datetime = field(default_factory=utcnow)
    last_used_at: datetime = field(default_factory=utcnow)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> CacheKey:
        return (self.text_hash, self.source_lang, self.target_lang)


@dataclass
class AnalyticsEvent:
    """One translation request, success or failure."""
    query_text: str
    source_language: str
    target_language: str
    result_found: bool
    method: Optional[str]
    confidence_score: int
    response_time_ms: int
    cache_hit: bool = False
    error_type: Optional[str] = None
    user_id: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
