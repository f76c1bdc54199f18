"""
Pronunciation Service

Prepares what a text-to-speech engine needs to say one verb form in one
dialect. Speech synthesis itself happens on the client.
"""

from typing import Union

from core.schemas import Dialect, DialectLike, PronunciationRequest, VerbForm, VerbRecord
from services.verbs.repository import VerbRepository
from utils.exceptions import PronunciationError, VerbNotFoundError
from utils.logging import get_logger

logger = get_logger(__name__)


def form_text(verb: VerbRecord, form: VerbForm, dialect: Dialect) -> str:
    """Spelling of ``form`` in ``dialect``: the override if set, else canonical."""
    uk = dialect is Dialect.UK
    if form is VerbForm.PAST:
        return (verb.past_uk if uk else verb.past_us) or verb.past
    if form is VerbForm.PARTICIPLE:
        return (verb.participle_uk if uk else verb.participle_us) or verb.participle
    return verb.base


def tts_text(text: str) -> str:
    """
    Text handed to the speech engine.

    A trailing period makes engines read the word as a finished statement,
    which keeps heteronyms like "read" and "lead" on their dictionary
    pronunciation.
    """
    text = text.strip()
    if not text or text.endswith("."):
        return text
    return f"{text}."


class PronunciationService:
    def __init__(self, repository: VerbRepository):
        self._repository = repository

    async def prepare(
        self,
        verb_id: str,
        form: Union[VerbForm, str] = VerbForm.BASE,
        dialect: DialectLike = Dialect.US,
    ) -> PronunciationRequest:
        """
        Build the speech request for one verb form.

        Raises:
            VerbNotFoundError: No verb with this id
            PronunciationError: The verb has no text for the form
            StorageError: Lookup failed
        """
        verb_form = form if isinstance(form, VerbForm) else VerbForm.from_string(form)
        resolved = Dialect.from_code(dialect)

        verb = await self._repository.get_by_id(verb_id)
        if verb is None:
            raise VerbNotFoundError(verb_id)

        text = tts_text(form_text(verb, verb_form, resolved))
        if not text:
            raise PronunciationError(
                message=f"No {verb_form.value} form to pronounce",
                verb_id=verb_id,
                details={"form": verb_form.value, "dialect": resolved.value},
            )

        logger.debug(f"Prepared pronunciation for {verb.base} ({verb_form.label}, {resolved.label})")
        return PronunciationRequest(
            verb_id=verb.id,
            form=verb_form,
            dialect=resolved,
            text=text,
            language=resolved.tts_language,
            phonetic=verb.pronunciation_for(resolved),
        )
