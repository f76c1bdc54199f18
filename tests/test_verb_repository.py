"""
Tests for Verb Repository

Runs against temporary SQLite files; failure paths use a mocked store.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from services.verbs.legacy import record_to_row
from services.verbs.repository import VerbRepository
from services.verbs.seed import load_seed_verbs
from services.verbs.store import VerbStore
from utils.exceptions import (
    ErrorKind,
    ErrorSeverity,
    StorageError,
    StorageTimeoutError,
)


async def insert(store, *records):
    await store.insert_rows([record_to_row(record) for record in records])


class TestSearch:
    """Two-phase search against the seeded store."""

    @pytest.mark.asyncio
    async def test_go_went_gone(self, seeded_repository):
        results = await seeded_repository.search("go")

        assert results[0].base == "go"
        assert results[0].past == "went"
        assert results[0].participle == "gone"
        assert len(results[0].meanings) == 1
        assert [u.context for u in results[0].meanings[0].contextual_usages] == [
            "movement", "progress", "transformation",
        ]

    @pytest.mark.asyncio
    async def test_exact_match_not_repeated(self, seeded_repository):
        results = await seeded_repository.search("go")

        bases = [verb.base for verb in results]
        assert bases.count("go") == 1
        # got / gotten
        assert "get" in bases[1:]

    @pytest.mark.asyncio
    async def test_query_is_normalized(self, seeded_repository):
        results = await seeded_repository.search("  GO ")
        assert results[0].base == "go"

    @pytest.mark.asyncio
    async def test_finds_by_past_form(self, seeded_repository):
        results = await seeded_repository.search("went")

        assert [verb.base for verb in results] == ["go"]

    @pytest.mark.asyncio
    async def test_finds_by_context_label(self, seeded_repository):
        results = await seeded_repository.search("transformation")
        assert "go" in [verb.base for verb in results]

    @pytest.mark.asyncio
    async def test_no_match(self, seeded_repository):
        assert await seeded_repository.search("zzzz") == []

    @pytest.mark.asyncio
    async def test_like_wildcards_are_literal(self, seeded_repository):
        assert await seeded_repository.search("%") == []
        assert await seeded_repository.search("_") == []

    @pytest.mark.asyncio
    async def test_new_layout_rows_searchable(self, seeded_repository):
        results = await seeded_repository.search("run")

        assert results[0].base == "run"
        assert len(results[0].meanings) == 2
        assert results[0].meanings[1].usage_register == "formal"

    @pytest.mark.asyncio
    async def test_search_phases(self, seeded_repository):
        exact, partial = await seeded_repository.search_phases("go")

        assert [verb.base for verb in exact] == ["go"]
        assert all(verb.base != "go" for verb in partial)

    @pytest.mark.asyncio
    async def test_past_substring_in_partial_segment(self, seeded_repository):
        exact, partial = await seeded_repository.search_phases("we")

        assert exact == []
        assert "go" in [verb.base for verb in partial]


class TestPartialRanking:
    """Ordering of the partial phase."""

    @pytest.mark.asyncio
    async def test_rank_order(self, store, repository, verb_factory):
        await insert(
            store,
            verb_factory("1", "xx3", "q", "q", definition="grab something"),
            verb_factory("2", "yy2", "q", "abz"),
            verb_factory("3", "zz1", "abx", "q"),
            verb_factory("4", "abide", "abode", "abode"),
            verb_factory("5", "aa4", "q", "q", definition="crab walk"),
            verb_factory("6", "ab", "ab", "ab"),
        )

        results = await repository.search("ab")

        # exact, base prefix, past prefix, participle prefix, others by base
        assert [verb.base for verb in results] == ["ab", "abide", "zz1", "yy2", "aa4", "xx3"]

    @pytest.mark.asyncio
    async def test_partial_phase_capped(self, store, repository, verb_factory):
        await insert(store, verb_factory("verb", "verb", "verbed", "verbed"))
        await insert(store, *[
            verb_factory(f"v{i}", f"verb{i:02d}", "p", "pp")
            for i in range(60)
        ])

        exact, partial = await repository.search_phases("verb")

        assert [verb.base for verb in exact] == ["verb"]
        assert len(partial) == 50
        assert partial[0].base == "verb00"
        assert len(await repository.search("verb")) == 51

    @pytest.mark.asyncio
    async def test_custom_result_limit(self, store, verb_factory):
        await insert(store, *[
            verb_factory(f"v{i}", f"verb{i}", "p", "pp")
            for i in range(5)
        ])
        repository = VerbRepository(store, max_results=3)

        assert len(await repository.search("verb")) == 3

    @pytest.mark.asyncio
    async def test_zero_result_limit_keeps_exact_phase(self, store, verb_factory):
        await insert(
            store,
            verb_factory("v", "verb", "p", "pp"),
            verb_factory("v1", "verbs", "p", "pp"),
        )
        repository = VerbRepository(store, max_results=0)

        exact, partial = await repository.search_phases("verb")

        assert [verb.base for verb in exact] == ["verb"]
        assert partial == []

    @pytest.mark.asyncio
    async def test_non_ascii_base_matches_exactly(self, store, repository, verb_factory):
        await insert(store, verb_factory("u", "Ébloui", "x", "y"))

        exact, partial = await repository.search_phases("ÉBLOUI")

        assert [verb.id for verb in exact] == ["u"]
        assert partial == []

    @pytest.mark.asyncio
    async def test_unreadable_rows_skipped(self, store, repository):
        await store.insert_rows([
            {"id": "bad", "base": "", "past": "x", "participle": "y", "search_terms": "brokenverb"},
        ])

        assert await repository.search("brokenverb") == []
        assert await repository.get_by_id("bad") is None


class TestLookup:
    """Tests for get_by_id and get_count."""

    @pytest.mark.asyncio
    async def test_get_by_id(self, seeded_repository):
        verb = await seeded_repository.get_by_id("6")

        assert verb.base == "get"
        assert verb.participle_for("en-US") == "gotten"
        assert verb.participle_for("en-UK") == "got"

    @pytest.mark.asyncio
    async def test_missing_id(self, seeded_repository):
        assert await seeded_repository.get_by_id("does-not-exist") is None

    @pytest.mark.asyncio
    async def test_count_matches_seed(self, seeded_repository):
        assert await seeded_repository.get_count() == len(load_seed_verbs())


class TestInitializeStore:
    """Tests for schema creation and seeding."""

    @pytest.mark.asyncio
    async def test_seeds_empty_store(self, repository):
        assert await repository.get_count() == 0

        await repository.initialize_store()

        assert await repository.get_count() == len(load_seed_verbs())

    @pytest.mark.asyncio
    async def test_idempotent(self, seeded_repository):
        before = await seeded_repository.get_count()
        await seeded_repository.initialize_store()
        assert await seeded_repository.get_count() == before

    @pytest.mark.asyncio
    async def test_does_not_seed_non_empty_store(self, store, repository, go_verb):
        await insert(store, go_verb)

        await repository.initialize_store()

        assert await repository.get_count() == 1

    @pytest.mark.asyncio
    async def test_custom_seed_file(self, store, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(
            '[{"id": "1", "base": "go", "past": "went", "participle": "gone", "meaning": "to move"}]',
            encoding="utf-8",
        )
        repository = VerbRepository(store, seed_path=seed)

        await repository.initialize_store()

        verb = await repository.get_by_id("1")
        assert verb.meanings[0].definition == "to move"

    @pytest.mark.asyncio
    async def test_seed_file_with_camel_case_contexts(self, store, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(
            '[{"id": "1", "base": "go", "past": "went", "participle": "gone", '
            '"meaning": "to move", "contextualUsage": {"Movement": "Travel"}}]',
            encoding="utf-8",
        )
        repository = VerbRepository(store, seed_path=seed)

        await repository.initialize_store()

        verb = await repository.get_by_id("1")
        assert [u.description for u in verb.meanings[0].contextual_usages] == ["Travel"]

    @pytest.mark.asyncio
    async def test_missing_seed_file(self, store, tmp_path):
        repository = VerbRepository(store, seed_path=tmp_path / "missing.json")

        with pytest.raises(StorageError) as exc_info:
            await repository.initialize_store()

        assert exc_info.value.severity == ErrorSeverity.HIGH
        assert not exc_info.value.is_recoverable


class TestStorageFailures:
    """Failure wrapping with a mocked store."""

    @pytest.fixture
    def mock_store(self):
        return AsyncMock(spec=VerbStore)

    @pytest.mark.asyncio
    async def test_empty_query_skips_store(self, mock_store):
        repository = VerbRepository(mock_store)

        assert await repository.search("") == []
        assert await repository.search("   ") == []
        mock_store.fetch_exact.assert_not_called()
        mock_store.fetch_partial.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_id_skips_store(self, mock_store):
        repository = VerbRepository(mock_store)

        assert await repository.get_by_id("  ") is None
        mock_store.fetch_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_sql_error_wrapped(self, mock_store):
        cause = OperationalError("SELECT", {}, Exception("disk I/O error"))
        mock_store.fetch_exact.side_effect = cause
        repository = VerbRepository(mock_store)

        with pytest.raises(StorageError) as exc_info:
            await repository.search("go")

        error = exc_info.value
        assert error.kind == ErrorKind.STORAGE
        assert error.severity == ErrorSeverity.MEDIUM
        assert error.details["operation"] == "search.exact"
        assert error.__cause__ is cause

    @pytest.mark.asyncio
    async def test_timeout(self, mock_store):
        async def slow(*args, **kwargs):
            await asyncio.sleep(1)

        mock_store.fetch_by_id.side_effect = slow
        repository = VerbRepository(mock_store, timeout_seconds=0.01)

        with pytest.raises(StorageTimeoutError) as exc_info:
            await repository.get_by_id("4")

        assert exc_info.value.kind == ErrorKind.TIMEOUT
        assert exc_info.value.status_code == 504

    @pytest.mark.asyncio
    async def test_initialize_failure_is_high_severity(self, mock_store):
        mock_store.ensure_schema.side_effect = OperationalError("PRAGMA", {}, Exception("locked"))
        repository = VerbRepository(mock_store)

        with pytest.raises(StorageError) as exc_info:
            await repository.initialize_store()

        assert exc_info.value.severity == ErrorSeverity.HIGH

    @pytest.mark.asyncio
    async def test_optimize_failure_does_not_fail_initialize(self, mock_store):
        mock_store.ensure_schema.return_value = 0
        mock_store.count.return_value = 0
        mock_store.insert_rows.return_value = 3
        mock_store.optimize.side_effect = OperationalError("VACUUM", {}, Exception("busy"))
        repository = VerbRepository(mock_store)

        await repository.initialize_store()

        mock_store.insert_rows.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_optimize_failure_is_low_severity(self, mock_store):
        mock_store.optimize.side_effect = OperationalError("VACUUM", {}, Exception("busy"))
        repository = VerbRepository(mock_store)

        with pytest.raises(StorageError) as exc_info:
            await repository.optimize()

        assert exc_info.value.severity == ErrorSeverity.LOW
