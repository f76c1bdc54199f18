"""
Verb Row Codec

Converts between stored ``verbs`` rows and ``VerbRecord`` objects.

Rows written before schema version 2 carry a single definition, a
context->description map and a flat example list. Reading such a row
produces exactly one synthetic meaning; rows with a decodable ``meanings``
list are used as-is. Malformed JSON anywhere is treated as an absent value.

Usage:
    from services.verbs.legacy import row_to_record, record_to_row

    record = row_to_record(row)
    values = record_to_row(record)
"""

import json
from typing import Any, Dict, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from config.constants import (
    COL_ID,
    COL_BASE,
    COL_PAST,
    COL_PARTICIPLE,
    COL_PAST_UK,
    COL_PAST_US,
    COL_PARTICIPLE_UK,
    COL_PARTICIPLE_US,
    COL_PRONUNCIATION_US,
    COL_PRONUNCIATION_UK,
    COL_MEANINGS,
    COL_MEANING,
    COL_CONTEXTUAL_USAGE,
    COL_EXAMPLES,
    COL_SEARCH_TERMS,
    MIGRATED_PART_OF_SPEECH,
)
from core.schemas import ContextualUsage, VerbMeaning, VerbRecord
from services.verbs.search_terms import generate_search_terms
from utils.logging import get_logger

logger = get_logger(__name__)

_MEANINGS_ADAPTER = TypeAdapter(List[VerbMeaning])

# Seed files written by hand may use the camelCase key
_CONTEXTUAL_USAGE_KEYS = (COL_CONTEXTUAL_USAGE, "contextualUsage")


# =============================================================================
# Field Parsing
# =============================================================================

def _load_json(raw: Any) -> Any:
    """Decode a JSON column. Already-decoded values pass through."""
    if raw is None:
        return None
    if not isinstance(raw, (str, bytes)):
        return raw
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning(f"Ignoring malformed JSON column value: {raw[:60]!r}")
        return None


def parse_meanings(raw: Any) -> List[VerbMeaning]:
    """Meanings stored in the current layout, or [] if absent or malformed."""
    data = _load_json(raw)
    if not isinstance(data, list):
        return []
    try:
        return _MEANINGS_ADAPTER.validate_python(data)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid meanings list: {e.error_count()} error(s)")
        return []


def parse_legacy_contexts(raw: Any) -> Dict[str, str]:
    """Legacy context->description map, in stored order."""
    data = _load_json(raw)
    if not isinstance(data, dict):
        return {}
    return {
        str(context): "" if description is None else str(description)
        for context, description in data.items()
    }


def parse_legacy_examples(raw: Any) -> List[str]:
    data = _load_json(raw)
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        return []
    return list(data)


# =============================================================================
# Legacy Conversion
# =============================================================================

def meanings_from_legacy(
    definition: Optional[str],
    contexts: Mapping[str, str],
    examples: List[str],
) -> List[VerbMeaning]:
    """
    Build the single synthetic meaning for a legacy row.

    Examples are dealt out to contexts in stored order,
    ``len(examples) // len(contexts)`` each. Examples whose value was never
    dealt out stay on the meaning itself; with no contexts every example
    stays there.
    """
    usages: List[ContextualUsage] = []
    own_examples: List[str] = []

    if contexts:
        per_context = len(examples) // len(contexts) if examples else 0
        index = 0
        used = set()

        for context, description in contexts.items():
            assigned: List[str] = []
            while per_context and len(assigned) < per_context and index < len(examples):
                assigned.append(examples[index])
                used.add(examples[index])
                index += 1
            usages.append(ContextualUsage(context=context, description=description, examples=assigned))

        own_examples = [example for example in examples if example not in used]
    else:
        own_examples = list(examples)

    return [
        VerbMeaning(
            definition=definition or "",
            part_of_speech=MIGRATED_PART_OF_SPEECH,
            examples=own_examples,
            contextual_usages=usages,
        )
    ]


def _first_present(row: Mapping[str, Any], keys) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def decode_meanings(row: Mapping[str, Any]) -> List[VerbMeaning]:
    """
    Meanings for a stored row, whichever schema version wrote it.

    Current layout wins when it decodes to a non-empty list; otherwise the
    legacy columns are converted.
    """
    meanings = parse_meanings(row.get(COL_MEANINGS))
    if meanings:
        return meanings

    return meanings_from_legacy(
        row.get(COL_MEANING),
        parse_legacy_contexts(_first_present(row, _CONTEXTUAL_USAGE_KEYS)),
        parse_legacy_examples(row.get(COL_EXAMPLES)),
    )


def dump_meanings(meanings: List[VerbMeaning]) -> str:
    return json.dumps(
        [meaning.model_dump(by_alias=True) for meaning in meanings],
        ensure_ascii=False,
    )


def migrate_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Copy of ``row`` whose meanings column holds the decoded meanings.

    Applying it to its own output changes nothing.
    """
    migrated = dict(row)
    migrated[COL_MEANINGS] = dump_meanings(decode_meanings(row))
    return migrated


# =============================================================================
# Row <-> Record
# =============================================================================

def row_to_record(row: Mapping[str, Any]) -> VerbRecord:
    """
    Build a validated record from a stored row.

    Raises:
        pydantic.ValidationError: Row is corrupt (e.g. empty base form)
    """
    return VerbRecord(
        id=row.get(COL_ID) or "",
        base=row.get(COL_BASE) or "",
        past=row.get(COL_PAST) or "",
        participle=row.get(COL_PARTICIPLE) or "",
        past_uk=row.get(COL_PAST_UK) or "",
        past_us=row.get(COL_PAST_US) or "",
        participle_uk=row.get(COL_PARTICIPLE_UK) or "",
        participle_us=row.get(COL_PARTICIPLE_US) or "",
        pronunciation_text_us=row.get(COL_PRONUNCIATION_US),
        pronunciation_text_uk=row.get(COL_PRONUNCIATION_UK),
        meanings=decode_meanings(row),
    )


def record_to_row(record: VerbRecord) -> Dict[str, Any]:
    """
    Column values for an insert.

    The legacy columns receive a projection of the first meaning so that
    readers of the old layout still see a definition, its contexts and
    every example.
    """
    compat_meaning = ""
    compat_contexts: Optional[str] = None
    compat_examples: Optional[str] = None

    if record.meanings:
        first = record.meanings[0]
        compat_meaning = first.definition
        if first.contextual_usages:
            compat_contexts = json.dumps(
                {usage.context: usage.description for usage in first.contextual_usages},
                ensure_ascii=False,
            )
        all_examples = list(first.examples)
        for usage in first.contextual_usages:
            all_examples.extend(usage.examples)
        if all_examples:
            compat_examples = json.dumps(all_examples, ensure_ascii=False)

    return {
        COL_ID: record.id,
        COL_BASE: record.base,
        COL_PAST: record.past,
        COL_PARTICIPLE: record.participle,
        COL_PAST_UK: record.past_uk,
        COL_PAST_US: record.past_us,
        COL_PARTICIPLE_UK: record.participle_uk,
        COL_PARTICIPLE_US: record.participle_us,
        COL_PRONUNCIATION_US: record.pronunciation_text_us,
        COL_PRONUNCIATION_UK: record.pronunciation_text_uk,
        COL_MEANINGS: dump_meanings(record.meanings),
        COL_MEANING: compat_meaning,
        COL_CONTEXTUAL_USAGE: compat_contexts,
        COL_EXAMPLES: compat_examples,
        COL_SEARCH_TERMS: generate_search_terms(record),
    }
