"""
In-memory store implementations.

Dict-backed, guarded by a lock per store. Suitable for tests, local
development and single-process deployments seeded from an export.
"""
import logging
import threading
from collections import deque
from datetime import datetime
from typing import Deque, Dict, Iterable, List, Optional, Tuple

from ..confidence import ConfidenceConfig, DEFAULT_CONFIDENCE_CONFIG
from ..models import (
    AnalyticsEvent,
    CacheEntry,
    CacheKey,
    ConsensusRecord,
    TranslationEntry,
    utcnow,
)
from ..schemas import TranslationResult
from .base import AnalyticsSink, CacheStore, ConsensusStore, EntryStore
from .eviction import EvictionPolicy, NoEviction

logger = logging.getLogger(__name__)


class InMemoryEntryStore(EntryStore):
    """Translation entries held in a dict keyed by entry id."""

    def __init__(self, entries: Optional[Iterable[TranslationEntry]] = None):
        self._entries: Dict[str, TranslationEntry] = {}
        self._lock = threading.Lock()
        for entry in entries or []:
            self.add(entry)

    def add(self, entry: TranslationEntry) -> TranslationEntry:
        with self._lock:
            self._entries[entry.id] = entry
        return entry

    def _approved(self) -> List[TranslationEntry]:
        with self._lock:
            return [entry for entry in self._entries.values() if entry.is_approved]

    def find_by_normalized(self, language: str, normalized_text: str) -> List[TranslationEntry]:
        return [
            entry for entry in self._approved()
            if entry.normalized_for(language) == normalized_text
        ]

    def find_by_min_confidence(self, min_confidence: int, limit: int) -> List[TranslationEntry]:
        pool = [
            entry for entry in self._approved()
            if entry.confidence_score is not None and entry.confidence_score >= min_confidence
        ]
        pool.sort(
            key=lambda e: (e.confidence_score, e.frequency_rank, e.created_at),
            reverse=True,
        )
        return pool[:limit]

    def get(self, entry_id: str) -> Optional[TranslationEntry]:
        with self._lock:
            return self._entries.get(entry_id)

    def get_many(self, entry_ids: Iterable[str]) -> List[TranslationEntry]:
        with self._lock:
            return [self._entries[i] for i in entry_ids if i in self._entries]

    def count_approved(self) -> int:
        return len(self._approved())


class InMemoryConsensusStore(ConsensusStore):
    """Consensus records keyed by the raw (english, tangkhul) text pair."""

    def __init__(
        self,
        records: Optional[Iterable[ConsensusRecord]] = None,
        confidence_config: ConfidenceConfig = DEFAULT_CONFIDENCE_CONFIG,
    ):
        self._records: Dict[Tuple[str, str], ConsensusRecord] = {}
        self._lock = threading.Lock()
        self._confidence_config = confidence_config
        for record in records or []:
            self.add(record)

    def add(self, record: ConsensusRecord) -> ConsensusRecord:
        with self._lock:
            self._records[record.key] = record
        return record

    def find_by_source(self, language: str, text: str, min_agreement: float) -> List[ConsensusRecord]:
        with self._lock:
            matches = [
                record for record in self._records.values()
                if record.text_for(language) == text and record.agreement_score >= min_agreement
            ]
        matches.sort(key=lambda r: (r.agreement_score, r.submission_count), reverse=True)
        return matches

    def record_submission(self, english_text: str, tangkhul_text: str, tier: str) -> ConsensusRecord:
        key = (english_text, tangkhul_text)
        with self._lock:
            record = self._records.get(key)
            if record is None:
                record = ConsensusRecord(english_text=english_text, tangkhul_text=tangkhul_text)
                self._records[key] = record
            record.record_submission(tier, self._confidence_config)
            return record


class InMemoryCacheStore(CacheStore):
    """Resolution cache with a pluggable eviction policy."""

    def __init__(self, eviction_policy: Optional[EvictionPolicy] = None):
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()
        self.eviction_policy = eviction_policy or NoEviction()

    def get(self, text_hash: str, source_lang: str, target_lang: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get((text_hash, source_lang, target_lang))

    def touch(
        self,
        text_hash: str,
        source_lang: str,
        target_lang: str,
        now: Optional[datetime] = None,
    ) -> Optional[CacheEntry]:
        with self._lock:
            entry = self._entries.get((text_hash, source_lang, target_lang))
            if entry is None:
                return None
            entry.hit_count += 1
            entry.last_used_at = now or utcnow()
            return entry

    def upsert(
        self,
        text_hash: str,
        source_lang: str,
        target_lang: str,
        result: TranslationResult,
        source_text: str = "",
    ) -> CacheEntry:
        key = (text_hash, source_lang, target_lang)
        now = utcnow()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = CacheEntry(
                    text_hash=text_hash,
                    source_lang=source_lang,
                    target_lang=target_lang,
                    source_text=source_text,
                    translated_text=result.translated_text,
                    confidence_score=result.confidence_score,
                    method=result.method,
                    created_at=now,
                    last_used_at=now,
                    metadata=dict(result.metadata),
                )
                self._entries[key] = entry
                return entry

            # Raced write: last writer wins on content, hit count keeps counting
            entry.translated_text = result.translated_text
            entry.confidence_score = result.confidence_score
            entry.method = result.method
            entry.metadata = dict(result.metadata)
            entry.hit_count += 1
            entry.last_used_at = now
            return entry

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def entries(self) -> List[CacheEntry]:
        with self._lock:
            return list(self._entries.values())

    def evict(self, now: Optional[datetime] = None) -> int:
        with self._lock:
            victims = self.eviction_policy.select_victims(list(self._entries.values()), now or utcnow())
            for key in victims:
                self._entries.pop(key, None)

        if victims:
            logger.info(f"Evicted {len(victims)} cache entries ({type(self.eviction_policy).__name__})")
        return len(victims)


class InMemoryAnalyticsSink(AnalyticsSink):
    """Keeps the most recent max_events events, oldest dropped first."""

    def __init__(self, max_events: int = 1000):
        if max_events < 1:
            raise ValueError(f"max_events must be >= 1, got {max_events}")
        self.events: Deque[AnalyticsEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def log(self, event: AnalyticsEvent) -> None:
        with self._lock:
            self.events.append(event)
