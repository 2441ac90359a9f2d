"""
Core abstractions for the match cascade.

Defines the query passed through the cascade and the protocol every stage
implements.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from ..models import TranslationEntry
from ..normalization import generate_hash, normalize_text, tokenize
from ..schemas import TranslationResult


@dataclass(frozen=True)
class MatchQuery:
    """
    Immutable, pre-normalized view of one translation request.
    
    Attributes:
        text: Raw query with surrounding whitespace removed
        normalized_text: normalize_text(text)
        tokens: Tokens of the normalized text
        text_hash: SHA-256 of the normalized text (cache key)
        source_lang: Canonical source language
        target_lang: Canonical target language
        part_of_speech: Optional grammar hint from the caller
    """
    text: str
    normalized_text: str
    tokens: Tuple[str, ...]
    text_hash: str
    source_lang: str
    target_lang: str
    part_of_speech: Optional[str] = None

    @classmethod
    def build(
        cls,
        text: str,
        source_lang: str,
        target_lang: str,
        part_of_speech: Optional[str] = None,
    ) -> "MatchQuery":
        stripped = text.strip()
        return cls(
            text=stripped,
            normalized_text=normalize_text(stripped),
            tokens=tuple(tokenize(stripped)),
            text_hash=generate_hash(stripped),
            source_lang=source_lang,
            target_lang=target_lang,
            part_of_speech=(part_of_speech or "").strip().lower() or None,
        )

    def grammar_matches(self, entry: TranslationEntry) -> bool:
        """True when the caller's part-of-speech hint equals the entry's tag."""
        if not self.part_of_speech or not entry.part_of_speech:
            return False
        return entry.part_of_speech.lower() == self.part_of_speech


class MatchStage(ABC):
    """
    One step of the resolution cascade.
    
    Class attributes:
        name: Stage name used in logs
        cacheable: Successful results are written back to the cache store
        fatal_on_storage_error: StorageUnavailable aborts the resolution
            instead of falling through to the next stage
    """
    name: str = "stage"
    cacheable: bool = True
    fatal_on_storage_error: bool = False

    @abstractmethod
    def try_match(self, query: MatchQuery) -> Optional[TranslationResult]:
        """
        Attempt to resolve the query.
        
        :param query: Normalized query
        :return: TranslationResult on success, None to fall through
        :raises StorageUnavailable: If a collaborator cannot be reached
        """
        pass
