# Verb data services

from .repository import VerbRepository
from .store import VerbStore
from .search_session import SearchSession, SearchState
from .pronunciation import PronunciationService
from .search_terms import generate_search_terms
from .legacy import decode_meanings, migrate_row, row_to_record, record_to_row

__all__ = [
    "VerbRepository",
    "VerbStore",
    "SearchSession",
    "SearchState",
    "PronunciationService",
    "generate_search_terms",
    "decode_meanings",
    "migrate_row",
    "row_to_record",
    "record_to_row",
]
