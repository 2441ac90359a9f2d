"""
Text normalization for matching and cache keys.

- Lowercase
- Strip diacritics (NFD decomposition, combining marks removed)
- Remove punctuation
- Collapse whitespace and trim
"""
import hashlib
import re
import unicodedata
from typing import List

_COMBINING_MARKS_RE = re.compile(r"[̀-ͯ]")
_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Normalize text for matching and comparison.

    Idempotent: normalize_text(normalize_text(t)) == normalize_text(t).
    """
    if not text:
        return ""

    normalized = unicodedata.normalize("NFD", text.lower())
    normalized = _COMBINING_MARKS_RE.sub("", normalized)
    normalized = _NON_WORD_RE.sub("", normalized)
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip()


def tokenize(text: str) -> List[str]:
    """Split normalized text into word tokens, dropping empty ones."""
    return [token for token in normalize_text(text).split(" ") if token]


def generate_hash(text: str) -> str:
    """
    SHA-256 hex digest of the normalized text, used as a cache key.

    :return: 64-character lowercase hex string
    """
    return hashlib.sha256(normalize_text(text).encode("utf-8")).hexdigest()
