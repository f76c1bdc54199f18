"""
Search Session

Drives search-as-you-type for one client. Each submitted query receives a
sequence number; after the debounce delay the search only runs if no newer
query arrived, and its outcome is only applied to the session state if it
is still the latest. A slow response for "g" therefore never overwrites
the results for "go".
"""

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional

from config.settings import settings
from core.schemas import VerbRecord
from services.verbs.repository import VerbRepository, normalize_query
from utils.exceptions import VerbLabError
from utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SearchState:
    """What the client should currently display."""
    sequence: int = 0
    query: str = ""
    results: List[VerbRecord] = field(default_factory=list)
    error: Optional[VerbLabError] = None
    is_loading: bool = False


class SearchSession:
    """Sequenced, debounced search over a repository."""

    def __init__(self, repository: VerbRepository, debounce_seconds: Optional[float] = None):
        self._repository = repository
        self._debounce = (
            settings.search_debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self._issued = 0
        self.state = SearchState()

    @property
    def latest_sequence(self) -> int:
        return self._issued

    def _is_latest(self, sequence: int) -> bool:
        return sequence == self._issued

    async def submit(self, query: str) -> bool:
        """
        Search for ``query`` unless superseded.

        Returns:
            bool: True if this call's outcome was applied to ``state``
        """
        self._issued += 1
        sequence = self._issued
        normalized = normalize_query(query)

        if not normalized:
            self.state = SearchState(sequence=sequence)
            return True

        self.state.is_loading = True

        if self._debounce > 0:
            await asyncio.sleep(self._debounce)
        if not self._is_latest(sequence):
            logger.debug(f"Search #{sequence} '{normalized}' superseded before running")
            return False

        try:
            results = await self._repository.search(normalized)
        except VerbLabError as e:
            if not self._is_latest(sequence):
                return False
            logger.warning(f"Search #{sequence} '{normalized}' failed: {e.message}")
            self.state = SearchState(sequence=sequence, query=normalized, error=e)
            return True

        if not self._is_latest(sequence):
            logger.debug(f"Discarding stale results for search #{sequence} '{normalized}'")
            return False

        self.state = SearchState(sequence=sequence, query=normalized, results=results)
        return True
