"""
Search Term Generation

Builds the denormalized token string stored in the ``search_terms`` column.
The partial search phase only ever substring-matches this value, so token
order carries no meaning; insertion order is kept so output is reproducible.
"""

from typing import Dict

from config.constants import MIN_TERM_LENGTH
from core.schemas import VerbRecord


def generate_search_terms(record: VerbRecord) -> str:
    """
    Collect every lowercased verb form, significant definition word and
    contextual-usage label of a record into one space-joined string.

    Args:
        record: Verb to index

    Returns:
        str: Tokens separated by single spaces, without duplicates
    """
    terms: Dict[str, None] = {}

    def add(token: str) -> None:
        token = token.strip().lower()
        if token:
            terms.setdefault(token, None)

    add(record.base)
    add(record.past)
    add(record.participle)
    for override in (record.past_uk, record.past_us, record.participle_uk, record.participle_us):
        if override:
            add(override)

    for meaning in record.meanings:
        for word in meaning.definition.split():
            if len(word) > MIN_TERM_LENGTH:
                add(word)
        for usage in meaning.contextual_usages:
            add(usage.context)

    return " ".join(terms)
