"""
Analytics sink that writes each request to the application log.
"""
import logging

from ..models import AnalyticsEvent
from .base import AnalyticsSink

logger = logging.getLogger(__name__)


class LoggingAnalyticsSink(AnalyticsSink):
    """Emits one INFO line per request; keeps nothing in memory."""

    def log(self, event: AnalyticsEvent) -> None:
        logger.info(
            f"Analytics - found: {event.result_found}, method: {event.method}, "
            f"confidence: {event.confidence_score}, cache_hit: {event.cache_hit}, "
            f"error_type: {event.error_type}, latency: {event.response_time_ms}ms, "
            f"{event.source_language} → {event.target_language}, "
            f"chars: {len(event.query_text)}, user: {event.user_id or '-'}"
        )
