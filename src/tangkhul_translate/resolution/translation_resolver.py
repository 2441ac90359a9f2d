"""
Translation resolver: the cascade plus its cache write-back and terminal
outcomes.
"""
import logging
from typing import List, Optional

from ..exceptions import NoDataAvailable, NotFound, StorageUnavailable, ValidationError
from ..models import canonical_language
from ..schemas import Suggestion, TranslationResult
from ..stores import CacheStore, EntryStore
from .match_stage import MatchQuery
from .resolution_policy import ResolutionPolicy
from .similarity_matcher import SimilarityStage

logger = logging.getLogger(__name__)


class TranslationResolver:
    """
    Resolves a phrase to a stored translation.
    
    Usage:
        resolver = create_resolver(config, entry_store, consensus_store, cache_store)
        result = resolver.resolve("Hello", "english", "tangkhul")
        result.translated_text  # "Ngala"
    
    Successful results from cacheable stages are upserted into the cache
    store; partial matches and cache hits are not written back.
    """

    def __init__(
        self,
        policy: ResolutionPolicy,
        entry_store: EntryStore,
        cache_store: Optional[CacheStore] = None,
        similarity_stage: Optional[SimilarityStage] = None,
        suggestion_threshold: float = 0.2,
        suggestion_limit: int = 3,
    ):
        """
        :param policy: Ordered stage cascade
        :param entry_store: Used to tell an empty corpus apart from a miss
        :param cache_store: Write-back target; None disables caching
        :param similarity_stage: Source of "did you mean" suggestions
        :param suggestion_threshold: Minimum similarity for suggestions
        :param suggestion_limit: Maximum suggestions attached to NotFound
        """
        self._policy = policy
        self._entries = entry_store
        self._cache = cache_store
        self._similarity = similarity_stage
        self.suggestion_threshold = suggestion_threshold
        self.suggestion_limit = suggestion_limit

    @property
    def policy(self) -> ResolutionPolicy:
        return self._policy

    def build_query(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        part_of_speech: Optional[str] = None,
    ) -> MatchQuery:
        """
        Validate inputs and normalize them into a MatchQuery.
        
        :raises ValidationError: On missing text, unknown or identical languages,
            or text with no word characters
        """
        if not text or not text.strip():
            raise ValidationError("text is required")

        source = canonical_language(source_lang)
        target = canonical_language(target_lang)
        if source is None:
            raise ValidationError(f"Unsupported source language: '{source_lang}'")
        if target is None:
            raise ValidationError(f"Unsupported target language: '{target_lang}'")
        if source == target:
            raise ValidationError("Source and target languages must differ")

        query = MatchQuery.build(text, source, target, part_of_speech)
        if not query.tokens:
            raise ValidationError("text contains no translatable words")
        return query

    def resolve(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        part_of_speech: Optional[str] = None,
    ) -> TranslationResult:
        """
        Resolve text through the cascade.
        
        :return: TranslationResult of the first stage that matched
        :raises ValidationError: Before any storage access, on bad input
        :raises NoDataAvailable: If nothing matched and the corpus is empty
        :raises NotFound: If nothing matched; carries suggestions
        :raises StorageUnavailable: If the partial stage cannot reach storage
        """
        query = self.build_query(text, source_lang, target_lang, part_of_speech)

        outcome = self._policy.run(query)
        if outcome is None:
            self._raise_not_found(query)

        if outcome.stage.cacheable:
            self._write_cache(query, outcome.result)

        return outcome.result

    def _write_cache(self, query: MatchQuery, result: TranslationResult) -> None:
        if self._cache is None:
            return

        try:
            self._cache.upsert(
                query.text_hash,
                query.source_lang,
                query.target_lang,
                result,
                source_text=query.normalized_text,
            )
        except StorageUnavailable as e:
            logger.warning(f"Cache write failed for '{query.normalized_text}': {e}", exc_info=True)

    def _raise_not_found(self, query: MatchQuery) -> None:
        try:
            corpus_empty = self._entries.count_approved() == 0
        except StorageUnavailable as e:
            logger.warning(f"Could not count approved entries: {e}", exc_info=True)
            corpus_empty = False

        if corpus_empty:
            logger.info("No approved entries in corpus")
            raise NoDataAvailable()

        suggestions = self._suggestions(query)
        logger.info(
            f"No translation for '{query.normalized_text}' "
            f"({query.source_lang} → {query.target_lang}), {len(suggestions)} suggestions"
        )
        raise NotFound(
            f"No translation found for '{query.text}'",
            suggestions=suggestions,
        )

    def _suggestions(self, query: MatchQuery) -> List[Suggestion]:
        if self._similarity is None or self.suggestion_limit <= 0:
            return []

        try:
            return self._similarity.suggest(query, self.suggestion_threshold, self.suggestion_limit)
        except StorageUnavailable as e:
            logger.warning(f"Suggestion lookup failed: {e}", exc_info=True)
            return []
