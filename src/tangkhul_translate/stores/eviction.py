"""
Cache eviction policies.

Eviction strategy is explicit and pluggable:
- NoEviction: keep everything (the historical behaviour)
- LRUEviction: keep only the most recently used max_entries
- TTLEviction: drop entries unused for more than max_age_days
"""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import List, Sequence

from ..config import TranslationEngineConfig
from ..exceptions import ConfigurationError
from ..models import CacheEntry, CacheKey


class EvictionPolicy(ABC):
    """Chooses which cache entries to remove."""

    @abstractmethod
    def select_victims(self, entries: Sequence[CacheEntry], now: datetime) -> List[CacheKey]:
        """
        :param entries: Current cache contents
        :param now: Reference time
        :return: Keys of entries to evict
        """


class NoEviction(EvictionPolicy):
    def select_victims(self, entries: Sequence[CacheEntry], now: datetime) -> List[CacheKey]:
        return []


class LRUEviction(EvictionPolicy):
    """Evict least recently used entries beyond max_entries."""

    def __init__(self, max_entries: int):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.max_entries = max_entries

    def select_victims(self, entries: Sequence[CacheEntry], now: datetime) -> List[CacheKey]:
        if len(entries) <= self.max_entries:
            return []

        # Oldest first, fewer hits first on ties
        ordered = sorted(entries, key=lambda e: (e.last_used_at, e.hit_count))
        excess = len(entries) - self.max_entries
        return [entry.key for entry in ordered[:excess]]


class TTLEviction(EvictionPolicy):
    """Evict entries not used within max_age_days."""

    def __init__(self, max_age_days: int):
        if max_age_days < 1:
            raise ValueError(f"max_age_days must be >= 1, got {max_age_days}")
        self.max_age = timedelta(days=max_age_days)

    def select_victims(self, entries: Sequence[CacheEntry], now: datetime) -> List[CacheKey]:
        cutoff = now - self.max_age
        return [entry.key for entry in entries if entry.last_used_at < cutoff]


def create_eviction_policy(config: TranslationEngineConfig) -> EvictionPolicy:
    """
    Build the eviction policy named in config.

    :raises: ConfigurationError on an unknown policy or missing limit
    """
    name = config.cache_eviction
    if name == "none":
        return NoEviction()
    if name == "lru":
        if not config.cache_max_entries:
            raise ConfigurationError("LRU eviction requires cache_max_entries")
        return LRUEviction(config.cache_max_entries)
    if name == "ttl":
        if not config.cache_ttl_days:
            raise ConfigurationError("TTL eviction requires cache_ttl_days")
        return TTLEviction(config.cache_ttl_days)
    raise ConfigurationError(f"Unknown cache eviction policy '{name}'")
