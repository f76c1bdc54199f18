"""
Preferences Service

Persists the single user's settings (dialect, theme, premium flag) as one
JSON blob in the ``app_preferences`` table.

Usage:
    service = PreferencesService(database)
    prefs = await service.get()
    prefs = await service.update(dialect="en-UK")
"""

import json
from typing import Any

from pydantic import ValidationError
from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError

from config.constants import PREFERENCES_KEY
from core.database import Database
from core.models import preferences_table
from core.schemas import PreferencesUpdate, UserPreferences
from utils.exceptions import PreferencesError
from utils.logging import get_logger

logger = get_logger(__name__)


class PreferencesService:
    """Load and store user preferences."""

    def __init__(self, database: Database, key: str = PREFERENCES_KEY):
        self._database = database
        self._key = key
        self._table_ready = False

    async def _ensure_table(self, conn) -> None:
        if not self._table_ready:
            await conn.run_sync(preferences_table.create, checkfirst=True)
            self._table_ready = True

    async def get(self) -> UserPreferences:
        """
        Stored preferences, or defaults.

        A missing or unreadable blob yields defaults; only storage failures
        raise.
        """
        try:
            async with self._database.engine.begin() as conn:
                await self._ensure_table(conn)
                result = await conn.execute(
                    select(preferences_table.c.value).where(preferences_table.c.key == self._key)
                )
                raw = result.scalar()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to read preferences: {e}")
            raise PreferencesError(
                message="Failed to read preferences",
                details={"cause": type(e).__name__},
            ) from e

        if raw is None:
            return UserPreferences.defaults()

        try:
            return UserPreferences.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.warning(f"Stored preferences unreadable, using defaults: {e}")
            return UserPreferences.defaults()

    async def save(self, preferences: UserPreferences) -> UserPreferences:
        blob = preferences.model_dump_json(by_alias=True)
        try:
            async with self._database.engine.begin() as conn:
                await self._ensure_table(conn)
                await conn.execute(
                    insert(preferences_table)
                    .prefix_with("OR REPLACE")
                    .values(key=self._key, value=blob)
                )
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to save preferences: {e}")
            raise PreferencesError(details={"cause": type(e).__name__}) from e

        logger.debug(f"Saved preferences: {blob}")
        return preferences

    async def update(self, **changes: Any) -> UserPreferences:
        """Apply non-None field changes on top of the stored preferences."""
        patch = PreferencesUpdate.model_validate(changes)
        return await self.apply(patch)

    async def apply(self, patch: PreferencesUpdate) -> UserPreferences:
        current = await self.get()
        values = patch.model_dump(exclude_none=True)
        if not values:
            return current
        return await self.save(current.model_copy(update=values))

    async def reset(self) -> UserPreferences:
        """Restore defaults, keeping the premium purchase."""
        current = await self.get()
        defaults = UserPreferences.defaults().model_copy(update={"is_premium": current.is_premium})
        logger.info("Preferences reset to defaults")
        return await self.save(defaults)

    async def clear(self) -> None:
        """Remove the stored blob entirely, premium flag included."""
        try:
            async with self._database.engine.begin() as conn:
                await self._ensure_table(conn)
                await conn.execute(delete(preferences_table).where(preferences_table.c.key == self._key))
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to clear preferences: {e}")
            raise PreferencesError(
                message="Failed to clear preferences",
                details={"cause": type(e).__name__},
            ) from e
