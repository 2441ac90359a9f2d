"""
Collaborator contracts the resolver depends on.

Implementations raise StorageUnavailable when the backing data source cannot
be reached or a query fails; the resolver decides whether that is fatal.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional

from ..models import AnalyticsEvent, CacheEntry, ConsensusRecord, TranslationEntry
from ..schemas import TranslationResult


class EntryStore(ABC):
    """Read access to vetted translation entries."""

    @abstractmethod
    def find_by_normalized(self, language: str, normalized_text: str) -> List[TranslationEntry]:
        """
        Approved entries whose normalized field for `language` equals the text.

        :param language: Canonical source language ("english"/"tangkhul")
        :param normalized_text: Already-normalized query
        """

    @abstractmethod
    def find_by_min_confidence(self, min_confidence: int, limit: int) -> List[TranslationEntry]:
        """
        Approved entries with confidence_score >= min_confidence.

        Ordered by confidence, then usage frequency, then recency (all
        descending), capped at `limit`.
        """

    @abstractmethod
    def get(self, entry_id: str) -> Optional[TranslationEntry]:
        """Single-entry lookup."""

    @abstractmethod
    def get_many(self, entry_ids: Iterable[str]) -> List[TranslationEntry]:
        """Bulk lookup; unknown ids are skipped."""

    @abstractmethod
    def count_approved(self) -> int:
        """Number of approved entries in the corpus."""


class ConsensusStore(ABC):
    """Read/increment access to consensus aggregates."""

    @abstractmethod
    def find_by_source(self, language: str, text: str, min_agreement: float) -> List[ConsensusRecord]:
        """
        Records whose raw source field equals `text` exactly, with
        agreement_score >= min_agreement, best agreement first.
        """

    @abstractmethod
    def record_submission(self, english_text: str, tangkhul_text: str, tier: str) -> ConsensusRecord:
        """Create or increment the record for a raw text pair."""


class CacheStore(ABC):
    """Hash-keyed memo of successful resolutions."""

    @abstractmethod
    def get(self, text_hash: str, source_lang: str, target_lang: str) -> Optional[CacheEntry]:
        """Point lookup."""

    @abstractmethod
    def touch(
        self,
        text_hash: str,
        source_lang: str,
        target_lang: str,
        now: Optional[datetime] = None,
    ) -> Optional[CacheEntry]:
        """Increment hit count and refresh last-used time of an existing entry."""

    @abstractmethod
    def upsert(
        self,
        text_hash: str,
        source_lang: str,
        target_lang: str,
        result: TranslationResult,
        source_text: str = "",
    ) -> CacheEntry:
        """
        Store a result. If the entry already exists (e.g. a concurrent request
        wrote it first) overwrite its result and increment its hit count.
        """

    @abstractmethod
    def count(self) -> int:
        """Number of cached entries."""

    @abstractmethod
    def evict(self, now: Optional[datetime] = None) -> int:
        """Apply the eviction policy; return how many entries were removed."""


class AnalyticsSink(ABC):
    """Fire-and-forget request log."""

    @abstractmethod
    def log(self, event: AnalyticsEvent) -> None:
        """Record one request."""
