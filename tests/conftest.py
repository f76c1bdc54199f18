"""
Test Configuration

Pytest configuration and shared fixtures for all tests.
"""

import pytest
import pytest_asyncio
from typing import AsyncGenerator, List, Optional
from httpx import AsyncClient, ASGITransport

from core.database import Database
from core.schemas import ContextualUsage, VerbMeaning, VerbRecord
from services.verbs.repository import VerbRepository
from services.verbs.store import VerbStore


def database_url(tmp_path) -> str:
    """File-backed SQLite database unique to one test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'verblab_test.db'}"


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """Get a test database, disposed after the test."""
    db = Database(database_url(tmp_path), echo=False)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def store(database) -> VerbStore:
    """Verb store with an up-to-date, empty schema."""
    verb_store = VerbStore(database)
    await verb_store.ensure_schema()
    return verb_store


@pytest_asyncio.fixture
async def repository(store) -> VerbRepository:
    return VerbRepository(store)


@pytest_asyncio.fixture
async def seeded_repository(repository) -> VerbRepository:
    """Repository over a store holding the bundled seed verbs."""
    await repository.initialize_store()
    return repository


@pytest_asyncio.fixture
async def client(tmp_path) -> AsyncGenerator[AsyncClient, None]:
    """Get async test client for API testing, backed by a seeded store."""
    from main import app
    from core.dependencies import build_services

    services = build_services(database_url(tmp_path))
    await services.repository.initialize_store()
    app.state.services = services

    # Create test transport
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    del app.state.services
    await services.close()


def make_verb(
    verb_id: str,
    base: str,
    past: str,
    participle: str,
    definition: Optional[str] = None,
    contexts: Optional[List[str]] = None,
    **overrides,
) -> VerbRecord:
    """Build a verb record for tests; no meaning unless a definition is given."""
    meanings = []
    if definition is not None:
        meanings.append(
            VerbMeaning(
                definition=definition,
                part_of_speech="verb",
                contextual_usages=[
                    ContextualUsage(context=context, description=f"{context} usage")
                    for context in contexts or []
                ],
            )
        )
    return VerbRecord(
        id=verb_id,
        base=base,
        past=past,
        participle=participle,
        meanings=meanings,
        **overrides,
    )


@pytest.fixture
def go_verb() -> VerbRecord:
    """The go/went/gone verb."""
    return make_verb(
        "4",
        "go",
        "went",
        "gone",
        definition="to move or travel to a place",
        contexts=["movement", "progress"],
        past_uk="went",
        past_us="went",
        participle_uk="gone",
        participle_us="gone",
        pronunciation_text_us="goʊ",
        pronunciation_text_uk="gəʊ",
    )


@pytest.fixture
def get_verb() -> VerbRecord:
    """A verb whose participle differs between UK and US."""
    return make_verb(
        "6",
        "get",
        "got",
        "got/gotten",
        definition="to obtain or receive",
        past_uk="got",
        past_us="got",
        participle_uk="got",
        participle_us="gotten",
        pronunciation_text_us="gɛt",
        pronunciation_text_uk="gɛt",
    )


@pytest.fixture
def verb_factory():
    """Factory for ad-hoc verb records."""
    return make_verb
