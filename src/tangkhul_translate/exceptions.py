"""
Exceptions raised by the translation resolution engine.

The service layer maps each of these to a distinct response so the UI can
tell "no match, contribute one" apart from "infrastructure problem, retry".
"""
from typing import List, Optional


class TranslationEngineError(Exception):
    """Base exception for the translation engine."""


class ConfigurationError(TranslationEngineError):
    """Raised when engine configuration is missing or invalid."""


class ValidationError(TranslationEngineError):
    """Raised when a request is rejected before any storage access."""


class StorageUnavailable(TranslationEngineError):
    """Raised when a data source cannot be reached or fails a query."""

    def __init__(self, message: str, store: Optional[str] = None):
        super().__init__(message)
        self.store = store


class NotFound(TranslationEngineError):
    """
    Raised when every cascade stage was exhausted without a result.

    Not a system fault. Carries low-threshold "did you mean" suggestions.
    """

    def __init__(self, message: str = "No translation found", suggestions: Optional[List] = None):
        super().__init__(message)
        self.suggestions = list(suggestions or [])


class NoDataAvailable(NotFound):
    """Raised instead of NotFound when the corpus holds no approved entries."""

    def __init__(self, message: str = "No translation data available"):
        super().__init__(message, suggestions=[])


class UnexpectedError(TranslationEngineError):
    """Wraps any other failure. Only a generic message reaches the caller."""
