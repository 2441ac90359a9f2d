"""
Orchestration facade over the resolution engine.

Validates requests, times them, logs analytics and maps engine errors to
response payloads. The resolver itself knows nothing about analytics or HTTP.
"""
import logging
from datetime import datetime, timezone
from time import perf_counter
from typing import Any, Dict, Optional, Tuple

import pydantic

from .config import TranslationEngineConfig
from .data_loader import TranslationDataLoader
from .exceptions import (
    NoDataAvailable,
    NotFound,
    StorageUnavailable,
    TranslationEngineError,
    UnexpectedError,
    ValidationError,
)
from .models import AnalyticsEvent
from .resolution import TranslationResolver, create_resolver
from .schemas import TranslationRequest, TranslationResult
from .stores import (
    AnalyticsSink,
    CacheStore,
    ConsensusStore,
    EntryStore,
    InMemoryCacheStore,
    InMemoryConsensusStore,
    InMemoryEntryStore,
    LoggingAnalyticsSink,
    create_eviction_policy,
)

logger = logging.getLogger(__name__)

SERVICE_VERSION = "1.0.0"

CONTRIBUTE_PROMPT = (
    "This translation is not available yet. Would you like to contribute it to our database?"
)
RETRY_PROMPT = "Translation service temporarily unavailable. Please try again later."

ERROR_VALIDATION = "validation_error"
ERROR_NO_DATA = "no_data"
ERROR_NOT_FOUND = "not_found"
ERROR_STORAGE = "storage_unavailable"
ERROR_UNEXPECTED = "unexpected"


def error_type_for(error: Exception) -> str:
    """Stable error_type tag for an exception (NoDataAvailable before NotFound)."""
    if isinstance(error, ValidationError):
        return ERROR_VALIDATION
    if isinstance(error, NoDataAvailable):
        return ERROR_NO_DATA
    if isinstance(error, NotFound):
        return ERROR_NOT_FOUND
    if isinstance(error, StorageUnavailable):
        return ERROR_STORAGE
    return ERROR_UNEXPECTED


def _elapsed_ms(start: float) -> int:
    return int((perf_counter() - start) * 1000)


class TranslationService:
    """
    Facade over the translation engine.
    The ONLY entry point for the HTTP layer and other clients.
    """

    def __init__(
        self,
        resolver: TranslationResolver,
        entry_store: EntryStore,
        cache_store: Optional[CacheStore] = None,
        analytics_sink: Optional[AnalyticsSink] = None,
        config: Optional[TranslationEngineConfig] = None,
    ):
        self.config = config or TranslationEngineConfig()
        self._resolver = resolver
        self._entries = entry_store
        self._cache = cache_store
        self._analytics = analytics_sink

    # ----------------------------
    # Request handling
    # ----------------------------
    def parse_request(self, payload: Any) -> TranslationRequest:
        """
        Build a TranslationRequest from a raw JSON payload.
        
        :raises ValidationError: If fields are missing, empty or invalid
        """
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")

        missing = [
            name for name in ("text", "source_language", "target_language")
            if not payload.get(name)
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        try:
            request = TranslationRequest(**payload)
        except pydantic.ValidationError as e:
            messages = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'request'}: {err['msg']}"
                for err in e.errors()
            )
            raise ValidationError(messages) from e

        if len(request.text) > self.config.max_text_length:
            raise ValidationError(
                f"text exceeds maximum length of {self.config.max_text_length} characters"
            )
        return request

    def translate(self, request: TranslationRequest) -> TranslationResult:
        """
        Resolve one request and log it for analytics.
        
        :raises TranslationEngineError: ValidationError, NotFound, NoDataAvailable,
            StorageUnavailable, or UnexpectedError wrapping anything else
        """
        start = perf_counter()
        try:
            result = self._resolver.resolve(
                request.text,
                request.source_language,
                request.target_language,
                part_of_speech=request.part_of_speech,
            )
        except TranslationEngineError as e:
            self._log_analytics(request, None, _elapsed_ms(start), error=e)
            raise
        except Exception as e:
            logger.error(f"Unexpected translation error: {str(e)}", exc_info=True)
            wrapped = UnexpectedError("Translation service error")
            self._log_analytics(request, None, _elapsed_ms(start), error=wrapped)
            raise wrapped from e

        result.response_time_ms = _elapsed_ms(start)
        self._log_analytics(request, result, result.response_time_ms)
        return result

    def translate_payload(self, payload: Any) -> Tuple[Dict[str, Any], int]:
        """
        Handle a raw request payload end to end.
        
        :return: (response body, HTTP status code)
        """
        start = perf_counter()
        try:
            request = self.parse_request(payload)
        except ValidationError as e:
            logger.warning(f"Rejected translation request: {e}")
            return self._error_body(e, _elapsed_ms(start)), 400

        try:
            result = self.translate(request)
        except TranslationEngineError as e:
            status = {
                ERROR_VALIDATION: 400,
                ERROR_NO_DATA: 404,
                ERROR_NOT_FOUND: 404,
                ERROR_STORAGE: 503,
            }.get(error_type_for(e), 500)
            return self._error_body(e, _elapsed_ms(start)), status

        return result.to_dict(), 200

    def _error_body(self, error: TranslationEngineError, response_time_ms: int) -> Dict[str, Any]:
        error_type = error_type_for(error)
        body: Dict[str, Any] = {
            "found": False,
            "error_type": error_type,
            "response_time_ms": response_time_ms,
        }

        if error_type == ERROR_VALIDATION:
            body["error"] = "Invalid request"
            body["details"] = str(error)
        elif error_type == ERROR_NO_DATA:
            body["error"] = "No translation data available"
            body["details"] = (
                "Translation database is empty. Please contribute training data to enable translations."
            )
            body["contribute"] = CONTRIBUTE_PROMPT
        elif error_type == ERROR_NOT_FOUND:
            body["error"] = "No translation found"
            body["details"] = str(error)
            body["contribute"] = CONTRIBUTE_PROMPT
            body["suggestions"] = [s.to_dict() for s in error.suggestions]
        elif error_type == ERROR_STORAGE:
            body["error"] = "Translation storage unavailable"
            body["details"] = RETRY_PROMPT
        else:
            body["error"] = "Translation service error"

        return body

    # ----------------------------
    # Analytics
    # ----------------------------
    def _log_analytics(
        self,
        request: TranslationRequest,
        result: Optional[TranslationResult],
        response_time_ms: int,
        error: Optional[Exception] = None,
    ) -> None:
        """Fire-and-forget; a failing sink never affects the caller."""
        if self._analytics is None:
            return

        try:
            event = AnalyticsEvent(
                query_text=request.text,
                source_language=request.source_language,
                target_language=request.target_language,
                result_found=result is not None,
                method=result.method if result else None,
                confidence_score=result.confidence_score if result else 0,
                response_time_ms=response_time_ms,
                cache_hit=result.cache_hit if result else False,
                error_type=error_type_for(error) if error else None,
                user_id=request.user_id,
            )
            self._analytics.log(event)
        except Exception as e:
            logger.warning(f"Failed to log analytics: {str(e)}")

    # ----------------------------
    # Health
    # ----------------------------
    def health(self) -> Dict[str, Any]:
        """Probe the entry and cache stores."""
        checks = {"database": "healthy", "cache": "healthy"}

        try:
            self._entries.count_approved()
        except Exception as e:
            logger.warning(f"Health check: entry store unhealthy: {str(e)}")
            checks["database"] = "unhealthy"

        if self._cache is None:
            checks["cache"] = "disabled"
        else:
            try:
                self._cache.count()
            except Exception as e:
                logger.warning(f"Health check: cache store unhealthy: {str(e)}")
                checks["cache"] = "unhealthy"

        status = "degraded" if "unhealthy" in checks.values() else "healthy"
        return {
            "status": status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": checks,
            "version": SERVICE_VERSION,
        }


def create_translation_service(
    config: Optional[TranslationEngineConfig] = None,
    entry_store: Optional[EntryStore] = None,
    consensus_store: Optional[ConsensusStore] = None,
    cache_store: Optional[CacheStore] = None,
    analytics_sink: Optional[AnalyticsSink] = None,
) -> TranslationService:
    """
    Composition root. Missing stores default to in-memory implementations,
    seeded from config.seed_path when set; analytics default to the
    application log.
    
    :param config: TranslationEngineConfig instance (defaults if None)
    :return: Wired TranslationService
    """
    config = config or TranslationEngineConfig()

    seed_entries, seed_records = [], []
    if config.seed_path and (entry_store is None or consensus_store is None):
        seed_entries, seed_records = TranslationDataLoader(config.seed_path).load()

    if entry_store is None:
        entry_store = InMemoryEntryStore(seed_entries)
    if consensus_store is None:
        consensus_store = InMemoryConsensusStore(seed_records, confidence_config=config.confidence)
    if cache_store is None and config.cache_enabled:
        cache_store = InMemoryCacheStore(eviction_policy=create_eviction_policy(config))
    if analytics_sink is None:
        analytics_sink = LoggingAnalyticsSink()

    resolver = create_resolver(entry_store, consensus_store, cache_store, config)
    return TranslationService(
        resolver=resolver,
        entry_store=entry_store,
        cache_store=cache_store if config.cache_enabled else None,
        analytics_sink=analytics_sink,
        config=config,
    )
