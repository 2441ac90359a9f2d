"""
Shared fixtures for translation engine tests.
"""
from datetime import datetime, timedelta, timezone

import pytest

from tangkhul_translate.config import TranslationEngineConfig
from tangkhul_translate.models import STATUS_APPROVED, STATUS_PENDING, TranslationEntry
from tangkhul_translate.resolution import create_resolver
from tangkhul_translate.stores import (
    InMemoryCacheStore,
    InMemoryConsensusStore,
    InMemoryEntryStore,
)

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def make_entry():
    """Factory for approved translation entries."""
    counter = {"n": 0}

    def _make(
        english,
        tangkhul,
        confidence=None,
        frequency=None,
        golden=False,
        part_of_speech=None,
        approved=True,
        created_offset_days=None,
    ):
        counter["n"] += 1
        offset = counter["n"] if created_offset_days is None else created_offset_days
        return TranslationEntry(
            english_text=english,
            tangkhul_text=tangkhul,
            status=STATUS_APPROVED if approved else STATUS_PENDING,
            confidence_score=confidence,
            frequency=frequency,
            is_golden_data=golden,
            part_of_speech=part_of_speech,
            created_at=BASE_TIME + timedelta(days=offset),
        )

    return _make


@pytest.fixture
def entry_store():
    return InMemoryEntryStore()


@pytest.fixture
def consensus_store():
    return InMemoryConsensusStore()


@pytest.fixture
def cache_store():
    return InMemoryCacheStore()


@pytest.fixture
def resolver(entry_store, consensus_store, cache_store):
    """Resolver over empty in-memory stores with default config."""
    return create_resolver(entry_store, consensus_store, cache_store, TranslationEngineConfig())
