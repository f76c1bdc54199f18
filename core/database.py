"""
Database Module

Owns the single async engine for the verb store. The engine is created
lazily on first use and disposed once at application shutdown.
"""

from typing import Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base

from config.settings import settings
from utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def normalize_database_url(url: str) -> str:
    """Ensure the async SQLite driver is used."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return url


def _python_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    """SQLite's built-in lower() only folds ASCII; queries are folded with str.lower()."""
    dbapi_connection.create_function("lower", 1, _python_lower)


class Database:
    """
    Lazily-opened handle on the verb store.

    One instance is built by the composition root and shared by every
    service; nothing else creates engines.
    """

    def __init__(self, url: Optional[str] = None, echo: Optional[bool] = None):
        self.url = normalize_database_url(url or settings.DATABASE_URL)
        self._echo = settings.DATABASE_ECHO if echo is None else echo
        self._engine: Optional[AsyncEngine] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            logger.info(f"Opening verb store at {self.url}")
            self._engine = create_async_engine(self.url, echo=self._echo)
            if self._engine.dialect.name == "sqlite":
                event.listen(self._engine.sync_engine, "connect", _register_sqlite_functions)
        return self._engine

    async def check_health(self) -> bool:
        """Run a trivial query; False if the store is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return False

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            logger.info("Verb store closed")
