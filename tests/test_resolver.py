"""
Tests for the full resolution cascade.

Covers stage priority, cache write-back rules and terminal outcomes.
"""
import logging
from unittest.mock import Mock

import pytest

from tangkhul_translate.config import TranslationEngineConfig
from tangkhul_translate.exceptions import NoDataAvailable, NotFound, StorageUnavailable, ValidationError
from tangkhul_translate.models import ENGLISH, TANGKHUL
from tangkhul_translate.normalization import generate_hash
from tangkhul_translate.resolution import CacheStage, create_resolver
from tangkhul_translate.stores import CacheStore, ConsensusStore, EntryStore


class TestScenarios:
    """End-to-end resolution scenarios."""

    def test_exact_match_case_insensitive(self, resolver, entry_store, make_entry):
        """Test that "Hello" resolves to the stored "hello" entry."""
        entry_store.add(make_entry("hello", "Ngala"))

        result = resolver.resolve("Hello", "english", "tangkhul")

        assert result.translated_text == "Ngala"
        assert result.method == "exact_match"
        assert result.confidence_score == 100

    def test_consensus_match(self, resolver, consensus_store):
        """Test that two expert submissions give a 95 consensus result."""
        consensus_store.record_submission("thank you", "Kazo", "expert")
        consensus_store.record_submission("thank you", "Kazo", "expert")

        result = resolver.resolve("thank you", "english", "tangkhul")

        assert result.method == "consensus"
        assert result.confidence_score == 95
        assert result.translated_text == "Kazo"

    def test_weak_similarity_falls_through_to_not_found(self, resolver, entry_store, make_entry):
        """Test that 2/3 overlap is below threshold and partial has nothing to use."""
        entry_store.add(make_entry("good morning", "Aphan", confidence=90))

        with pytest.raises(NotFound) as exc_info:
            resolver.resolve("good morning sir", "english", "tangkhul")

        assert not isinstance(exc_info.value, NoDataAvailable)
        suggestions = exc_info.value.suggestions
        assert [s.translated_text for s in suggestions] == ["Aphan"]

    def test_weak_similarity_falls_through_to_partial(self, resolver, entry_store, make_entry):
        """Test that single-word entries let the partial stage answer."""
        entry_store.add(make_entry("good morning", "Aphan", confidence=90))
        entry_store.add(make_entry("good", "Ali"))
        entry_store.add(make_entry("morning", "Ngathum"))

        result = resolver.resolve("good morning sir", "english", "tangkhul")

        assert result.method == "partial"
        assert result.translated_text == "Ali Ngathum [sir]"
        assert result.confidence_score == 40

    def test_empty_corpus_reports_no_data(self, resolver):
        """Test that an empty corpus is reported distinctly from NotFound."""
        with pytest.raises(NoDataAvailable):
            resolver.resolve("hello", "english", "tangkhul")

    def test_unknown_words_not_found(self, resolver, entry_store, make_entry):
        """Test that unknown words end in NotFound with no suggestions."""
        entry_store.add(make_entry("hello", "Ngala"))

        with pytest.raises(NotFound) as exc_info:
            resolver.resolve("purple elephant", "english", "tangkhul")

        assert exc_info.value.suggestions == []

    def test_language_aliases(self, resolver, entry_store, make_entry):
        """Test that short language codes are accepted."""
        entry_store.add(make_entry("hello", "Ngala"))

        assert resolver.resolve("ngala", "nmf", "en").translated_text == "hello"


class TestCascadePriority:
    """Tests for strict stage ordering."""

    def test_exact_beats_similarity(self, resolver, entry_store, make_entry):
        """Test that an exact match wins over an equally similar, higher-confidence entry."""
        entry_store.add(make_entry("good morning", "Aphan", confidence=75))
        entry_store.add(make_entry("morning good", "Other", confidence=99))

        result = resolver.resolve("Good morning", "english", "tangkhul")

        assert result.method == "exact_match"
        assert result.translated_text == "Aphan"

    def test_exact_beats_consensus(self, resolver, entry_store, consensus_store, make_entry):
        """Test that the exact stage runs before consensus."""
        entry_store.add(make_entry("thank you", "Kazo"))
        consensus_store.record_submission("thank you", "Kajo", "expert")

        assert resolver.resolve("thank you", "english", "tangkhul").translated_text == "Kazo"

    def test_cache_hit_preempts_everything(self, resolver, entry_store, make_entry):
        """Test that a cached result is served even after the corpus changes."""
        entry = make_entry("hello", "Ngala")
        entry_store.add(entry)
        resolver.resolve("hello", "english", "tangkhul")

        entry.update_text(tangkhul_text="Changed")
        result = resolver.resolve("hello", "english", "tangkhul")

        assert result.method == "cache_hit"
        assert result.translated_text == "Ngala"


class TestCaching:
    """Tests for cache write-back."""

    def test_second_resolution_is_cache_hit(self, resolver, entry_store, cache_store, make_entry):
        """Test cache idempotence: same text, hit count up by exactly one."""
        entry_store.add(make_entry("hello", "Ngala"))
        key = (generate_hash("hello"), ENGLISH, TANGKHUL)

        first = resolver.resolve("hello", "english", "tangkhul")
        hits_after_first = cache_store.get(*key).hit_count
        second = resolver.resolve("hello", "english", "tangkhul")
        hits_after_second = cache_store.get(*key).hit_count

        assert first.method == "exact_match"
        assert second.method == "cache_hit"
        assert second.translated_text == first.translated_text
        assert second.confidence_score == first.confidence_score
        assert hits_after_second == hits_after_first + 1

    def test_surface_variants_share_cache(self, resolver, entry_store, make_entry):
        """Test that normalization-equivalent queries hit the same cache entry."""
        entry_store.add(make_entry("hello", "Ngala"))

        resolver.resolve("hello", "english", "tangkhul")
        result = resolver.resolve("  HELLO!! ", "english", "tangkhul")

        assert result.method == "cache_hit"

    def test_partial_results_never_cached(self, resolver, entry_store, cache_store, make_entry):
        """Test that a partial match leaves the cache untouched."""
        entry_store.add(make_entry("good", "Ali"))
        before = cache_store.count()

        result = resolver.resolve("good stranger", "english", "tangkhul")

        assert result.method == "partial"
        assert cache_store.get(generate_hash("good stranger"), ENGLISH, TANGKHUL) is None
        assert cache_store.count() == before

        again = resolver.resolve("good stranger", "english", "tangkhul")
        assert again.method == "partial"

    def test_similarity_results_cached(self, resolver, entry_store, cache_store, make_entry):
        """Test that similarity results are written back."""
        entry_store.add(make_entry("how are you today", "Bdhar", confidence=90))

        resolver.resolve("how are you doing today", "english", "tangkhul")
        entry = cache_store.get(generate_hash("how are you doing today"), ENGLISH, TANGKHUL)

        assert entry.method == "similarity"
        assert entry.translated_text == "Bdhar"
        assert entry.source_text == "how are you doing today"

    def test_cache_disabled(self, entry_store, consensus_store, cache_store, make_entry):
        """Test that disabling the cache removes the stage and the write-back."""
        config = TranslationEngineConfig(cache_enabled=False)
        resolver = create_resolver(entry_store, consensus_store, cache_store, config)
        entry_store.add(make_entry("hello", "Ngala"))

        resolver.resolve("hello", "english", "tangkhul")

        assert cache_store.count() == 0
        assert not any(isinstance(s, CacheStage) for s in resolver.policy.stages)


class TestValidation:
    """Tests for input validation before storage access."""

    @pytest.fixture
    def mocked(self):
        entries = Mock(spec=EntryStore)
        consensus = Mock(spec=ConsensusStore)
        cache = Mock(spec=CacheStore)
        return entries, consensus, cache, create_resolver(entries, consensus, cache)

    @pytest.mark.parametrize("text,source,target", [
        ("", "english", "tangkhul"),
        ("   ", "english", "tangkhul"),
        ("hello", "", "tangkhul"),
        ("hello", "klingon", "tangkhul"),
        ("hello", "english", "english"),
        ("?!", "english", "tangkhul"),
    ])
    def test_rejected_before_storage(self, mocked, text, source, target):
        """Test that invalid input never reaches a store."""
        entries, consensus, cache, resolver = mocked

        with pytest.raises(ValidationError):
            resolver.resolve(text, source, target)

        assert entries.method_calls == []
        assert consensus.method_calls == []
        assert cache.method_calls == []


class TestFailureIsolation:
    """Tests for per-stage storage failure handling."""

    def test_cache_outage_degrades_gracefully(self, entry_store, consensus_store, make_entry):
        """Test that a dead cache is skipped for reads and writes."""
        cache = Mock(spec=CacheStore)
        cache.get.side_effect = StorageUnavailable("cache down")
        cache.upsert.side_effect = StorageUnavailable("cache down")
        resolver = create_resolver(entry_store, consensus_store, cache)
        entry_store.add(make_entry("hello", "Ngala"))

        result = resolver.resolve("hello", "english", "tangkhul")

        assert result.method == "exact_match"
        cache.upsert.assert_called_once()

    def test_storage_failures_logged_with_traceback(self, entry_store, consensus_store, make_entry, caplog):
        """Test that swallowed storage errors are logged at WARNING with exc_info."""
        cache = Mock(spec=CacheStore)
        cache.get.side_effect = StorageUnavailable("cache down")
        cache.upsert.side_effect = StorageUnavailable("cache down")
        resolver = create_resolver(entry_store, consensus_store, cache)
        entry_store.add(make_entry("hello", "Ngala"))

        with caplog.at_level(logging.WARNING, logger="tangkhul_translate"):
            resolver.resolve("hello", "english", "tangkhul")

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 2
        assert all(r.exc_info and r.exc_info[0] is StorageUnavailable for r in warnings)

    def test_consensus_outage_falls_through(self, entry_store, cache_store, make_entry):
        """Test that a dead consensus store does not block similarity."""
        consensus = Mock(spec=ConsensusStore)
        consensus.find_by_source.side_effect = StorageUnavailable("consensus down")
        resolver = create_resolver(entry_store, consensus, cache_store)
        entry_store.add(make_entry("how are you today", "Bdhar", confidence=90))

        result = resolver.resolve("how are you doing today", "english", "tangkhul")

        assert result.method == "similarity"

    def test_partial_stage_outage_is_surfaced(self, consensus_store, cache_store):
        """Test that storage failure at the last stage is not reported as NotFound."""
        entries = Mock(spec=EntryStore)
        entries.find_by_normalized.side_effect = StorageUnavailable("entries down")
        entries.find_by_min_confidence.return_value = []
        entries.count_approved.return_value = 10
        resolver = create_resolver(entries, consensus_store, cache_store)

        with pytest.raises(StorageUnavailable):
            resolver.resolve("good morning", "english", "tangkhul")

    def test_single_token_outage_ends_not_found(self, consensus_store, cache_store):
        """Test that skipped partial matching leaves a plain NotFound."""
        entries = Mock(spec=EntryStore)
        entries.find_by_normalized.side_effect = StorageUnavailable("entries down")
        entries.find_by_min_confidence.side_effect = StorageUnavailable("entries down")
        entries.count_approved.return_value = 10
        resolver = create_resolver(entries, consensus_store, cache_store)

        with pytest.raises(NotFound) as exc_info:
            resolver.resolve("hello", "english", "tangkhul")

        assert exc_info.value.suggestions == []


class TestGrammarHint:
    """Tests for the part-of-speech hint passed straight to the resolver."""

    @pytest.mark.parametrize("hint", ["phrase", "Phrase", " PHRASE "])
    def test_hint_is_case_insensitive(self, entry_store, consensus_store, make_entry, hint):
        """Test that any spelling of the hint earns the grammar bonus."""
        entry_store.add(make_entry("how are you today", "Greeting", confidence=99, part_of_speech="phrase"))
        resolver = create_resolver(
            entry_store, consensus_store, config=TranslationEngineConfig(cache_enabled=False)
        )

        plain = resolver.resolve("how are you doing today", "english", "tangkhul")
        hinted = resolver.resolve("how are you doing today", "english", "tangkhul", part_of_speech=hint)

        assert plain.confidence_score == 91
        assert hinted.confidence_score == 100

    def test_blank_hint_ignored(self, entry_store, consensus_store, make_entry):
        """Test that a whitespace-only hint counts as no hint."""
        entry_store.add(make_entry("how are you today", "Greeting", confidence=99, part_of_speech="phrase"))
        resolver = create_resolver(
            entry_store, consensus_store, config=TranslationEngineConfig(cache_enabled=False)
        )

        result = resolver.resolve("how are you doing today", "english", "tangkhul", part_of_speech="  ")

        assert result.confidence_score == 91
