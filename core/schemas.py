from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from config.settings import settings


class Dialect(str, Enum):
    """Supported English variants."""
    US = "en-US"
    UK = "en-UK"

    @property
    def label(self) -> str:
        return "UK" if self is Dialect.UK else "US"

    @property
    def opposite(self) -> "Dialect":
        return Dialect.US if self is Dialect.UK else Dialect.UK

    @property
    def tts_language(self) -> str:
        """BCP 47 tag understood by speech engines."""
        return "en-GB" if self is Dialect.UK else "en-US"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "Dialect":
        """Resolve a code such as "en-UK"; unknown codes fall back to US."""
        if isinstance(code, Dialect):
            return code
        normalized = (code or "").strip().lower()
        for dialect in cls:
            if dialect.value.lower() == normalized:
                return dialect
        return cls.US

    @classmethod
    def from_label(cls, label: Optional[str]) -> "Dialect":
        normalized = (label or "").strip().upper()
        for dialect in cls:
            if dialect.label == normalized:
                return dialect
        return cls.US


class VerbForm(str, Enum):
    """The three principal parts of a verb."""
    BASE = "base"
    PAST = "past"
    PARTICIPLE = "participle"

    @property
    def label(self) -> str:
        return self.value.upper()

    @classmethod
    def from_string(cls, form: Optional[str]) -> "VerbForm":
        normalized = (form or "").strip().lower()
        for verb_form in cls:
            if verb_form.value == normalized:
                return verb_form
        return cls.BASE


DialectLike = Union[Dialect, str]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Verb Records
# =============================================================================

class ContextualUsage(CamelModel):
    context: str
    description: str
    examples: List[str] = Field(default_factory=list)


class VerbMeaning(CamelModel):
    definition: str
    part_of_speech: str
    # "register" clashes with ABCMeta.register on the model class
    usage_register: Optional[str] = Field(default=None, alias="register")
    examples: List[str] = Field(default_factory=list)
    contextual_usages: List[ContextualUsage] = Field(default_factory=list)


def _split_forms(form: str) -> List[str]:
    if not form:
        return []
    return [part.strip() for part in form.split("/") if part.strip()]


class VerbRecord(CamelModel):
    """
    An irregular verb with its forms, dialect overrides and meanings.

    Dialect overrides hold an empty string when the canonical form applies.
    """

    id: str
    base: str
    past: str
    participle: str
    past_uk: str = Field(default="", alias="pastUK")
    past_us: str = Field(default="", alias="pastUS")
    participle_uk: str = Field(default="", alias="participleUK")
    participle_us: str = Field(default="", alias="participleUS")
    pronunciation_text_us: Optional[str] = Field(default=None, alias="pronunciationTextUS")
    pronunciation_text_uk: Optional[str] = Field(default=None, alias="pronunciationTextUK")
    meanings: List[VerbMeaning] = Field(default_factory=list)

    @field_validator("id", "base")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("past_uk", "past_us", "participle_uk", "participle_us", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    def past_for(self, dialect: DialectLike) -> str:
        """Past form for a dialect; canonical unless both overrides exist."""
        if not self.past_uk or not self.past_us:
            return self.past
        return self.past_uk if Dialect.from_code(dialect) is Dialect.UK else self.past_us

    def participle_for(self, dialect: DialectLike) -> str:
        if not self.participle_uk or not self.participle_us:
            return self.participle
        return self.participle_uk if Dialect.from_code(dialect) is Dialect.UK else self.participle_us

    def pronunciation_for(self, dialect: DialectLike) -> Optional[str]:
        if Dialect.from_code(dialect) is Dialect.UK:
            return self.pronunciation_text_uk
        return self.pronunciation_text_us

    @property
    def has_dialect_variants(self) -> bool:
        past_differs = bool(self.past_uk and self.past_us and self.past_uk != self.past_us)
        participle_differs = bool(
            self.participle_uk and self.participle_us and self.participle_uk != self.participle_us
        )
        return past_differs or participle_differs

    @property
    def all_forms(self) -> List[str]:
        """Every distinct spelling, alternatives like "was/were" split apart."""
        forms = [self.base]
        for form in (
            self.past,
            self.participle,
            self.past_uk,
            self.past_us,
            self.participle_uk,
            self.participle_us,
        ):
            forms.extend(_split_forms(form))
        return list(dict.fromkeys(forms))


# =============================================================================
# User Preferences
# =============================================================================

def _default_dialect() -> Dialect:
    return Dialect.from_code(settings.DEFAULT_DIALECT)


class UserPreferences(CamelModel):
    dialect: Dialect = Field(default_factory=_default_dialect)
    is_dark_mode: bool = False
    is_premium: bool = False

    @field_validator("dialect", mode="before")
    @classmethod
    def _coerce_dialect(cls, value):
        return Dialect.from_code(value)

    @classmethod
    def defaults(cls) -> "UserPreferences":
        return cls()


class PreferencesUpdate(CamelModel):
    dialect: Optional[Dialect] = None
    is_dark_mode: Optional[bool] = None
    is_premium: Optional[bool] = None

    @field_validator("dialect", mode="before")
    @classmethod
    def _coerce_dialect(cls, value):
        return None if value is None else Dialect.from_code(value)


# =============================================================================
# Responses
# =============================================================================

class SearchResponse(CamelModel):
    query: str
    exact_count: int
    results: List[VerbRecord] = Field(default_factory=list)


class VerbCountResponse(BaseModel):
    count: int


class PronunciationRequest(CamelModel):
    """Everything a speech engine needs to say one verb form."""
    verb_id: str
    form: VerbForm
    dialect: Dialect
    text: str
    language: str
    phonetic: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    database: bool
    verb_count: Optional[int] = None
    version: str
