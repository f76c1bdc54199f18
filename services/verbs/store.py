"""
Verb Store

Row-level access to the ``verbs`` table: schema creation and upgrade,
batch insert-or-replace, the two search queries, count and maintenance.

Everything here raises raw SQLAlchemy errors; wrapping into typed failures
happens in the repository.
"""

from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import String, case, func, insert, inspect, select
from sqlalchemy.engine import Connection, RowMapping
from sqlalchemy.ext.asyncio import AsyncConnection

from config.constants import (
    COL_MEANINGS,
    MEANINGS_SCHEMA_VERSION,
    RANK_BASE_PREFIX,
    RANK_PAST_PREFIX,
    RANK_PARTICIPLE_PREFIX,
    RANK_SUBSTRING,
    SCHEMA_VERSION,
    VERBS_TABLE,
)
from core.database import Base, Database
from core.models import verbs_table
from utils.logging import get_logger

logger = get_logger(__name__)


class VerbStore:
    """SQL primitives over the verbs table."""

    def __init__(self, database: Database):
        self._database = database

    # =========================================================================
    # Schema
    # =========================================================================

    async def get_schema_version(self) -> int:
        async with self._database.engine.connect() as conn:
            return await self._read_version(conn)

    async def ensure_schema(self) -> int:
        """
        Create or upgrade the schema to SCHEMA_VERSION.

        Upgrades only add nullable columns and missing indexes; existing
        rows keep their layout and are converted when read.

        Returns:
            int: Version found before the call (0 for a new database)
        """
        async with self._database.engine.begin() as conn:
            found = await self._read_version(conn)
            has_verbs = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).has_table(VERBS_TABLE)
            )

            if has_verbs and found < SCHEMA_VERSION:
                logger.info(f"Upgrading verb store schema {found} -> {SCHEMA_VERSION}")
                await conn.run_sync(_upgrade_verbs_table, found)

            await conn.run_sync(Base.metadata.create_all)

            if found != SCHEMA_VERSION:
                await conn.exec_driver_sql(f"PRAGMA user_version = {int(SCHEMA_VERSION)}")

        return found

    @staticmethod
    async def _read_version(conn: AsyncConnection) -> int:
        result = await conn.exec_driver_sql("PRAGMA user_version")
        return int(result.scalar() or 0)

    # =========================================================================
    # Writes
    # =========================================================================

    async def insert_rows(self, rows: Sequence[Dict[str, Any]]) -> int:
        """Insert-or-replace rows by id inside one transaction."""
        if not rows:
            return 0
        stmt = insert(verbs_table).prefix_with("OR REPLACE")
        async with self._database.engine.begin() as conn:
            await conn.execute(stmt, list(rows))
        return len(rows)

    async def optimize(self) -> None:
        """VACUUM and ANALYZE; VACUUM cannot run inside a transaction."""
        async with self._database.engine.connect() as conn:
            conn = await conn.execution_options(isolation_level="AUTOCOMMIT")
            await conn.exec_driver_sql("VACUUM")
            await conn.exec_driver_sql("ANALYZE")

    # =========================================================================
    # Reads
    # =========================================================================

    async def fetch_by_id(self, verb_id: str) -> Optional[RowMapping]:
        stmt = select(verbs_table).where(verbs_table.c.id == verb_id)
        async with self._database.engine.connect() as conn:
            result = await conn.execute(stmt)
            return result.mappings().first()

    async def fetch_exact(self, query: str) -> List[RowMapping]:
        """Rows whose lowercased base equals the normalized query."""
        stmt = select(verbs_table).where(func.lower(verbs_table.c.base, type_=String) == query)
        async with self._database.engine.connect() as conn:
            result = await conn.execute(stmt)
            return list(result.mappings().all())

    async def fetch_partial(self, query: str, limit: int) -> List[RowMapping]:
        """
        Rows whose search terms contain the query, excluding exact base
        matches, ranked base-prefix < past-prefix < participle-prefix < rest
        and then by base.
        """
        base = func.lower(verbs_table.c.base, type_=String)
        rank = case(
            (base.startswith(query, autoescape=True), RANK_BASE_PREFIX),
            (func.lower(verbs_table.c.past, type_=String).startswith(query, autoescape=True), RANK_PAST_PREFIX),
            (
                func.lower(verbs_table.c.participle, type_=String).startswith(query, autoescape=True),
                RANK_PARTICIPLE_PREFIX,
            ),
            else_=RANK_SUBSTRING,
        )
        stmt = (
            select(verbs_table)
            .where(verbs_table.c.search_terms.contains(query, autoescape=True))
            .where(base != query)
            .order_by(rank, verbs_table.c.base.asc())
            .limit(limit)
        )
        async with self._database.engine.connect() as conn:
            result = await conn.execute(stmt)
            return list(result.mappings().all())

    async def count(self) -> int:
        stmt = select(func.count()).select_from(verbs_table)
        async with self._database.engine.connect() as conn:
            result = await conn.execute(stmt)
            return int(result.scalar() or 0)


def _upgrade_verbs_table(sync_conn: Connection, found_version: int) -> None:
    """Additive upgrade of a pre-existing verbs table."""
    columns = {column["name"] for column in inspect(sync_conn).get_columns(VERBS_TABLE)}

    if found_version < MEANINGS_SCHEMA_VERSION and COL_MEANINGS not in columns:
        sync_conn.exec_driver_sql(f"ALTER TABLE {VERBS_TABLE} ADD COLUMN {COL_MEANINGS} TEXT")
        logger.info(f"Added column {VERBS_TABLE}.{COL_MEANINGS}")

    for index in verbs_table.indexes:
        index.create(sync_conn, checkfirst=True)
