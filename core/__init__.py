"""
Core Module

Provides database, models, schemas, and dependencies for the application.
"""

from .database import Base, Database, normalize_database_url
from .models import VerbRow, PreferenceRow, verbs_table, preferences_table
from .schemas import (
    Dialect,
    VerbForm,
    ContextualUsage,
    VerbMeaning,
    VerbRecord,
    UserPreferences,
    PreferencesUpdate,
    SearchResponse,
    VerbCountResponse,
    PronunciationRequest,
    HealthResponse,
)

__all__ = [
    # Database
    "Base",
    "Database",
    "normalize_database_url",
    # Models
    "VerbRow",
    "PreferenceRow",
    "verbs_table",
    "preferences_table",
    # Schemas
    "Dialect",
    "VerbForm",
    "ContextualUsage",
    "VerbMeaning",
    "VerbRecord",
    "UserPreferences",
    "PreferencesUpdate",
    "SearchResponse",
    "VerbCountResponse",
    "PronunciationRequest",
    "HealthResponse",
]
