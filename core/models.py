"""
Database Models Module

Defines SQLAlchemy ORM models for the application.
All models inherit from Base defined in database.py.

Models:
    - VerbRow: One irregular verb, in both the multi-meaning and the
      legacy single-meaning layout
    - PreferenceRow: Key/value store holding the serialized user preferences
"""

from sqlalchemy import Column, String, Text, Index, UniqueConstraint

from config.constants import (
    VERBS_TABLE,
    PREFERENCES_TABLE,
    SEARCH_TERMS_INDEX,
    VERB_FORMS_INDEX,
)
from .database import Base


class VerbRow(Base):
    """
    Persisted verb record.

    Attributes:
        id: Stable identifier (e.g. "4")
        base, past, participle: Canonical forms
        past_uk, past_us, participle_uk, participle_us: Dialect overrides,
            empty string when the canonical form applies
        pronunciation_text_us, pronunciation_text_uk: Phonetic transcriptions
        meanings: JSON list of meanings (schema version 2)
        meaning, contextual_usage, examples: Legacy single-meaning columns
        search_terms: Denormalized tokens used by the partial search
    """

    __tablename__ = VERBS_TABLE

    id = Column(String, primary_key=True)

    # Forms
    base = Column(String, nullable=False)
    past = Column(String, nullable=False)
    participle = Column(String, nullable=False)
    past_uk = Column(String, nullable=True)
    past_us = Column(String, nullable=True)
    participle_uk = Column(String, nullable=True)
    participle_us = Column(String, nullable=True)

    # Pronunciation
    pronunciation_text_us = Column(String, nullable=True)
    pronunciation_text_uk = Column(String, nullable=True)

    # Legacy layout
    meaning = Column(Text, nullable=True)
    contextual_usage = Column(Text, nullable=True)
    examples = Column(Text, nullable=True)

    # Current layout
    meanings = Column(Text, nullable=True)
    search_terms = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("base", "past", "participle"),
        Index(SEARCH_TERMS_INDEX, "search_terms"),
        Index(VERB_FORMS_INDEX, "base", "past", "participle"),
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<VerbRow(id='{self.id}', base='{self.base}')>"


class PreferenceRow(Base):
    """Serialized preference blobs keyed by name."""

    __tablename__ = PREFERENCES_TABLE

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)


verbs_table = VerbRow.__table__
preferences_table = PreferenceRow.__table__
