"""
Verbs Router

Search, lookup and pronunciation endpoints over the verb store.

Endpoints:
    GET /verbs/search?q= - Exact matches followed by ranked partial matches
    GET /verbs/count - Number of stored verbs
    GET /verbs/{verb_id} - One verb with all meanings
    GET /verbs/{verb_id}/pronunciation - Text-to-speech request for one form
"""

from fastapi import APIRouter, Depends, Query, Request

from core.dependencies import get_pronunciation_service, get_verb_repository
from core.schemas import (
    Dialect,
    PronunciationRequest,
    SearchResponse,
    VerbCountResponse,
    VerbForm,
    VerbRecord,
)
from services.verbs.pronunciation import PronunciationService
from services.verbs.repository import VerbRepository, normalize_query
from utils.exceptions import VerbNotFoundError
from utils.logging import get_logger
from utils.rate_limit import limit_lookup, limit_search

logger = get_logger(__name__)

router = APIRouter(prefix="/verbs", tags=["Verbs"])


# =============================================================================
# Search
# =============================================================================

@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search irregular verbs",
)
@limit_search
async def search_verbs(
    request: Request,  # Required for rate limiter
    q: str = Query("", max_length=100, description="Any verb form or meaning word"),
    repository: VerbRepository = Depends(get_verb_repository),
):
    """
    Search by any form or meaning word.

    Verbs whose base form equals the query come first (``exactCount`` of
    them), followed by partial matches ranked base prefix, past prefix,
    participle prefix, then anything else.
    """
    exact, partial = await repository.search_phases(q)
    return SearchResponse(
        query=normalize_query(q),
        exact_count=len(exact),
        results=exact + partial,
    )


@router.get("/count", response_model=VerbCountResponse)
async def count_verbs(repository: VerbRepository = Depends(get_verb_repository)):
    """Total number of stored verbs"""
    return VerbCountResponse(count=await repository.get_count())


# =============================================================================
# Lookup
# =============================================================================

@router.get(
    "/{verb_id}",
    response_model=VerbRecord,
    responses={404: {"description": "Verb not found"}},
)
@limit_lookup
async def get_verb(
    request: Request,  # Required for rate limiter
    verb_id: str,
    repository: VerbRepository = Depends(get_verb_repository),
):
    verb = await repository.get_by_id(verb_id)
    if verb is None:
        raise VerbNotFoundError(verb_id)
    return verb


@router.get(
    "/{verb_id}/pronunciation",
    response_model=PronunciationRequest,
    responses={404: {"description": "Verb not found"}},
)
@limit_lookup
async def get_pronunciation(
    request: Request,  # Required for rate limiter
    verb_id: str,
    form: VerbForm = Query(VerbForm.BASE),
    dialect: str = Query(Dialect.US.value, description="en-US or en-UK"),
    pronunciation: PronunciationService = Depends(get_pronunciation_service),
):
    """
    Text, language tag and phonetic transcription for one verb form.

    The client feeds ``text`` and ``language`` to its speech engine.
    """
    return await pronunciation.prepare(verb_id, form, dialect)
