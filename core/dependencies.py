"""
FastAPI Dependencies Module

Builds the service graph once per application and hands instances to
route handlers.

Usage:
    from core.dependencies import get_verb_repository

    @router.get("/search")
    async def search(
        repository: VerbRepository = Depends(get_verb_repository)
    ):
        ...
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from fastapi import Request

from core.database import Database
from services.preferences import PreferencesService
from services.verbs.pronunciation import PronunciationService
from services.verbs.repository import VerbRepository
from services.verbs.store import VerbStore
from utils.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# Service Initialization
# =============================================================================

@dataclass
class ServiceContainer:
    """Every long-lived service, built together so they share one engine."""
    database: Database
    repository: VerbRepository
    pronunciation: PronunciationService
    preferences: PreferencesService

    async def close(self) -> None:
        await self.database.dispose()


def build_services(
    database_url: Optional[str] = None,
    seed_path: Optional[Union[str, Path]] = None,
) -> ServiceContainer:
    """
    Compose the service graph.

    Args:
        database_url: Override for settings.DATABASE_URL
        seed_path: Override for the initial verb data file
    """
    database = Database(database_url)
    repository = VerbRepository(VerbStore(database), seed_path=seed_path)
    container = ServiceContainer(
        database=database,
        repository=repository,
        pronunciation=PronunciationService(repository),
        preferences=PreferencesService(database),
    )
    logger.info("Services initialized successfully")
    return container


# =============================================================================
# Service Providers
# =============================================================================

def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_database(request: Request) -> Database:
    return get_services(request).database


def get_verb_repository(request: Request) -> VerbRepository:
    """
    Get the VerbRepository built at startup.

    Returns:
        VerbRepository: Shared repository instance
    """
    return get_services(request).repository


def get_pronunciation_service(request: Request) -> PronunciationService:
    return get_services(request).pronunciation


def get_preferences_service(request: Request) -> PreferencesService:
    return get_services(request).preferences
