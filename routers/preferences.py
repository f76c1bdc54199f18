"""
Preferences Router

Endpoints:
    GET /preferences - Current preferences (defaults if none stored)
    PUT /preferences - Partial update
    POST /preferences/reset - Restore defaults, keeping premium
"""

from fastapi import APIRouter, Depends, Request

from core.dependencies import get_preferences_service
from core.schemas import PreferencesUpdate, UserPreferences
from services.preferences import PreferencesService
from utils.logging import get_logger
from utils.rate_limit import limit_preferences

logger = get_logger(__name__)

router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get("", response_model=UserPreferences)
async def get_preferences(service: PreferencesService = Depends(get_preferences_service)):
    return await service.get()


@router.put("", response_model=UserPreferences)
@limit_preferences
async def update_preferences(
    request: Request,  # Required for rate limiter
    update: PreferencesUpdate,
    service: PreferencesService = Depends(get_preferences_service),
):
    """Change any subset of dialect, dark mode and premium."""
    prefs = await service.apply(update)
    logger.info(f"Preferences updated: dialect={prefs.dialect.value}")
    return prefs


@router.post("/reset", response_model=UserPreferences)
@limit_preferences
async def reset_preferences(
    request: Request,  # Required for rate limiter
    service: PreferencesService = Depends(get_preferences_service),
):
    return await service.reset()
