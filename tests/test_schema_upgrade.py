"""
Tests for Schema Versioning

A version 1 database has no ``meanings`` column; opening it must add the
column and indexes without touching existing rows.
"""

import json

import pytest
from sqlalchemy import inspect

from config.constants import SCHEMA_VERSION
from services.verbs.repository import VerbRepository
from services.verbs.store import VerbStore

V1_SCHEMA = """
CREATE TABLE verbs (
    id TEXT PRIMARY KEY,
    base TEXT NOT NULL,
    past TEXT NOT NULL,
    participle TEXT NOT NULL,
    past_uk TEXT,
    past_us TEXT,
    participle_uk TEXT,
    participle_us TEXT,
    meaning TEXT NOT NULL,
    pronunciation_text_us TEXT,
    pronunciation_text_uk TEXT,
    contextual_usage TEXT,
    examples TEXT,
    search_terms TEXT,
    UNIQUE(base, past, participle)
)
"""


async def create_v1_database(database):
    async with database.engine.begin() as conn:
        await conn.exec_driver_sql(V1_SCHEMA)
        await conn.exec_driver_sql(
            "INSERT INTO verbs (id, base, past, participle, past_uk, past_us, "
            "participle_uk, participle_us, meaning, contextual_usage, examples, search_terms) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                "4", "go", "went", "gone", "went", "went", "gone", "gone",
                "to move or travel to a place",
                json.dumps({"Movement": "To move", "Progress": "To advance"}),
                json.dumps(["We go home.", "It went well.", "Time goes by.", "All gone."]),
                "go went gone move travel place movement progress",
            ),
        )
        await conn.exec_driver_sql("PRAGMA user_version = 1")


async def table_info(database):
    def read(sync_conn):
        inspector = inspect(sync_conn)
        return (
            {column["name"] for column in inspector.get_columns("verbs")},
            {index["name"] for index in inspector.get_indexes("verbs")},
        )

    async with database.engine.connect() as conn:
        return await conn.run_sync(read)


class TestFreshDatabase:

    @pytest.mark.asyncio
    async def test_creates_current_schema(self, database):
        store = VerbStore(database)

        found = await store.ensure_schema()

        assert found == 0
        assert await store.get_schema_version() == SCHEMA_VERSION
        columns, indexes = await table_info(database)
        assert {"meanings", "search_terms", "contextual_usage"} <= columns
        assert {"idx_search_terms", "idx_verb_forms"} <= indexes

    @pytest.mark.asyncio
    async def test_second_call_is_noop(self, database):
        store = VerbStore(database)
        await store.ensure_schema()

        assert await store.ensure_schema() == SCHEMA_VERSION


class TestUpgradeFromVersion1:

    @pytest.mark.asyncio
    async def test_adds_meanings_column_and_indexes(self, database):
        await create_v1_database(database)
        store = VerbStore(database)

        found = await store.ensure_schema()

        assert found == 1
        assert await store.get_schema_version() == SCHEMA_VERSION
        columns, indexes = await table_info(database)
        assert "meanings" in columns
        assert {"idx_search_terms", "idx_verb_forms"} <= indexes

    @pytest.mark.asyncio
    async def test_rows_left_in_legacy_layout(self, database):
        await create_v1_database(database)
        store = VerbStore(database)
        await store.ensure_schema()

        row = await store.fetch_by_id("4")

        assert row["meanings"] is None
        assert row["meaning"] == "to move or travel to a place"

    @pytest.mark.asyncio
    async def test_legacy_rows_read_as_meanings(self, database):
        await create_v1_database(database)
        repository = VerbRepository(VerbStore(database))
        await repository.initialize_store()

        results = await repository.search("go")

        assert len(results) == 1
        meaning = results[0].meanings[0]
        assert meaning.part_of_speech == "verb"
        assert [u.context for u in meaning.contextual_usages] == ["Movement", "Progress"]
        assert meaning.contextual_usages[0].examples == ["We go home.", "It went well."]
        assert meaning.contextual_usages[1].examples == ["Time goes by.", "All gone."]
        assert meaning.examples == []

    @pytest.mark.asyncio
    async def test_existing_data_not_reseeded(self, database):
        await create_v1_database(database)
        repository = VerbRepository(VerbStore(database))

        await repository.initialize_store()

        assert await repository.get_count() == 1
