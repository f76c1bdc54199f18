"""
Application Constants

Centralizes table layout and fixed values for the verb store.
Avoids hardcoded column names scattered throughout the codebase.

Usage:
    from config.constants import VERBS_TABLE, SCHEMA_VERSION
"""

# =============================================================================
# Schema
# =============================================================================

# Stored in PRAGMA user_version. Version 2 added the multi-meaning column.
SCHEMA_VERSION = 2

# First version that stores meanings as a JSON list
MEANINGS_SCHEMA_VERSION = 2

VERBS_TABLE = "verbs"
PREFERENCES_TABLE = "app_preferences"


# =============================================================================
# Verb Columns
# =============================================================================

COL_ID = "id"
COL_BASE = "base"
COL_PAST = "past"
COL_PARTICIPLE = "participle"
COL_PAST_UK = "past_uk"
COL_PAST_US = "past_us"
COL_PARTICIPLE_UK = "participle_uk"
COL_PARTICIPLE_US = "participle_us"
COL_PRONUNCIATION_US = "pronunciation_text_us"
COL_PRONUNCIATION_UK = "pronunciation_text_uk"
COL_MEANINGS = "meanings"
COL_SEARCH_TERMS = "search_terms"

# Legacy single-meaning columns (still written as a compatibility projection)
COL_MEANING = "meaning"
COL_CONTEXTUAL_USAGE = "contextual_usage"
COL_EXAMPLES = "examples"


# =============================================================================
# Indexes
# =============================================================================

SEARCH_TERMS_INDEX = "idx_search_terms"
VERB_FORMS_INDEX = "idx_verb_forms"


# =============================================================================
# Search
# =============================================================================

# Definition words of this length or shorter are not indexed
MIN_TERM_LENGTH = 2

# Partial-match ranks (lower sorts first)
RANK_BASE_PREFIX = 1
RANK_PAST_PREFIX = 2
RANK_PARTICIPLE_PREFIX = 3
RANK_SUBSTRING = 4


# =============================================================================
# Legacy Migration
# =============================================================================

# Legacy rows carried no part of speech
MIGRATED_PART_OF_SPEECH = "verb"


# =============================================================================
# Preferences
# =============================================================================

PREFERENCES_KEY = "user_preferences"
