"""
Cache lookup stage.

First and cheapest stage: a point lookup by (hash, source, target). Hits are
returned with their stored confidence, never rescored.
"""
import logging
from typing import Optional

from ..confidence import METHOD_CACHE_HIT
from ..exceptions import StorageUnavailable
from ..schemas import TranslationResult
from ..stores import CacheStore
from .match_stage import MatchQuery, MatchStage

logger = logging.getLogger(__name__)


class CacheStage(MatchStage):
    name = "cache"
    cacheable = False

    def __init__(self, cache_store: CacheStore):
        self._cache = cache_store

    def try_match(self, query: MatchQuery) -> Optional[TranslationResult]:
        entry = self._cache.get(query.text_hash, query.source_lang, query.target_lang)
        if entry is None:
            return None

        try:
            touched = self._cache.touch(query.text_hash, query.source_lang, query.target_lang)
        except StorageUnavailable as e:
            logger.warning(f"Cache hit-count update failed: {e}", exc_info=True)
            touched = None
        entry = touched or entry

        metadata = dict(entry.metadata)
        metadata.update({
            "cached": True,
            "hit_count": entry.hit_count,
            "original_method": entry.method,
        })

        return TranslationResult(
            translated_text=entry.translated_text,
            confidence_score=entry.confidence_score,
            method=METHOD_CACHE_HIT,
            metadata=metadata,
        )
