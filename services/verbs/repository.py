"""
Verb Repository

Public entry point for verb data: two-phase search, lookup by id, store
initialization and maintenance.

Every storage call is bounded by ``settings.STORAGE_TIMEOUT_SECONDS`` and
any driver failure is logged once here and re-raised as a ``StorageError``.

Usage:
    repository = VerbRepository(VerbStore(database))
    await repository.initialize_store()

    verbs = await repository.search("go")
"""

import asyncio
import time
from pathlib import Path
from typing import Awaitable, List, Optional, Tuple, TypeVar, Union

from pydantic import ValidationError
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from core.schemas import VerbRecord
from services.verbs.legacy import record_to_row, row_to_record
from services.verbs.seed import load_seed_verbs
from services.verbs.store import VerbStore
from utils.exceptions import (
    ErrorSeverity,
    InvalidVerbDataError,
    StorageError,
    StorageTimeoutError,
)
from utils.logging import get_logger, log_storage_call

logger = get_logger(__name__)

T = TypeVar("T")


def normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().lower()


class VerbRepository:
    """Search and lookup over the verb store."""

    def __init__(
        self,
        store: VerbStore,
        seed_path: Optional[Union[str, Path]] = None,
        timeout_seconds: Optional[float] = None,
        max_results: Optional[int] = None,
    ):
        self._store = store
        self._seed_path = seed_path
        self._timeout = (
            settings.STORAGE_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        )
        self._max_results = settings.SEARCH_MAX_RESULTS if max_results is None else max_results

    @property
    def max_results(self) -> int:
        return self._max_results

    # =========================================================================
    # Queries
    # =========================================================================

    async def search(self, query: str) -> List[VerbRecord]:
        """
        Two-phase search.

        Exact base-form matches come first, followed by at most
        ``max_results`` partial matches over the search terms. An empty
        query returns [] without touching the store.

        Raises:
            StorageError: Store failed or timed out
        """
        exact, partial = await self.search_phases(query)
        return exact + partial

    async def search_phases(self, query: str) -> Tuple[List[VerbRecord], List[VerbRecord]]:
        """Exact and partial segments of a search, kept apart."""
        normalized = normalize_query(query)
        if not normalized:
            return [], []

        exact_rows = await self._guard("search.exact", self._store.fetch_exact(normalized))
        partial_rows = await self._guard(
            "search.partial",
            self._store.fetch_partial(normalized, self._max_results),
        )

        exact = self._decode_rows(exact_rows)
        partial = self._decode_rows(partial_rows)
        logger.debug(f"Search '{normalized}': {len(exact)} exact, {len(partial)} partial")
        return exact, partial

    async def get_by_id(self, verb_id: str) -> Optional[VerbRecord]:
        """Record for ``verb_id``, or None when absent or unreadable."""
        if not verb_id or not verb_id.strip():
            return None

        row = await self._guard("get_by_id", self._store.fetch_by_id(verb_id.strip()))
        if row is None:
            return None

        records = self._decode_rows([row])
        return records[0] if records else None

    async def get_count(self) -> int:
        return await self._guard("count", self._store.count())

    # =========================================================================
    # Maintenance
    # =========================================================================

    async def initialize_store(self) -> None:
        """
        Create or upgrade the schema and seed an empty store.

        Raises:
            StorageError: With HIGH severity; the app cannot work without data
        """
        high = ErrorSeverity.HIGH
        found_version = await self._guard("ensure_schema", self._store.ensure_schema(), high)

        count = await self._guard("count", self._store.count(), high)
        if count > 0:
            logger.info(f"Verb store ready: {count} verbs (schema version {found_version})")
            return

        try:
            records = load_seed_verbs(self._seed_path)
        except InvalidVerbDataError as e:
            logger.error(f"Seed data rejected: {e.message}")
            raise StorageError(
                message=f"Failed to load initial verbs: {e.message}",
                operation="seed",
                severity=high,
                details=e.details,
            ) from e

        inserted = await self._guard(
            "seed",
            self._store.insert_rows([record_to_row(record) for record in records]),
            high,
        )
        logger.info(f"Seeded verb store with {inserted} verbs")

        try:
            await self.optimize()
        except StorageError as e:
            logger.warning(f"Store optimization skipped: {e.message}")

    async def optimize(self) -> None:
        """Compact the database and refresh query planner statistics."""
        await self._guard("optimize", self._store.optimize(), ErrorSeverity.LOW)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _guard(
        self,
        operation: str,
        awaitable: Awaitable[T],
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
    ) -> T:
        """Await a store call with a timeout, mapping failures to StorageError."""
        start = time.perf_counter()
        try:
            result = await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError:
            log_storage_call(operation, False, error=f"timed out after {self._timeout}s")
            raise StorageTimeoutError(operation, self._timeout, severity=severity) from None
        except (SQLAlchemyError, OSError) as e:
            log_storage_call(operation, False, error=str(e))
            raise StorageError(
                message=f"Storage operation failed: {operation}",
                operation=operation,
                severity=severity,
                details={"cause": type(e).__name__},
            ) from e

        duration_ms = (time.perf_counter() - start) * 1000
        log_storage_call(operation, True, duration_ms=duration_ms)
        return result

    @staticmethod
    def _decode_rows(rows: List[RowMapping]) -> List[VerbRecord]:
        records = []
        for row in rows:
            try:
                records.append(row_to_record(row))
            except ValidationError as e:
                logger.warning(
                    f"Skipping unreadable verb row id={row.get('id')!r}: "
                    f"{e.error_count()} error(s)"
                )
        return records
