"""
Translation domain types.

Directions are named after the locale pair they translate between; each
persona's default locale decides which direction its messages take.
"""

import enum
from dataclasses import dataclass

from app.config.constants import PERSONA_LOCALES, PERSIAN_LOCALE, ENGLISH_LOCALE

UNKNOWN_PROVIDER = "unknown"


class TranslationDirection(str, enum.Enum):
    EN_TO_FA = "en-to-fa"
    FA_TO_EN = "fa-to-en"

    @property
    def source_locale(self) -> str:
        return ENGLISH_LOCALE if self is TranslationDirection.EN_TO_FA else PERSIAN_LOCALE

    @property
    def target_locale(self) -> str:
        return PERSIAN_LOCALE if self is TranslationDirection.EN_TO_FA else ENGLISH_LOCALE

    @classmethod
    def from_source_locale(cls, locale: str) -> "TranslationDirection":
        if locale == PERSIAN_LOCALE:
            return cls.FA_TO_EN
        if locale == ENGLISH_LOCALE:
            return cls.EN_TO_FA
        raise ValueError(f"Unsupported source locale: {locale}")

    @classmethod
    def for_persona(cls, persona_id: str) -> "TranslationDirection":
        return cls.from_source_locale(persona_locale(persona_id))


def persona_locale(persona_id: str) -> str:
    """Default locale of a persona; raises ValueError for unknown personas."""
    try:
        return PERSONA_LOCALES[persona_id]
    except KeyError:
        raise ValueError(f"Unknown persona: {persona_id}")


@dataclass(frozen=True)
class TranslationCandidate:
    """One provider's raw output and how long it took."""
    provider: str
    text: str
    latency_ms: float


@dataclass(frozen=True)
class TranslationResult:
    """
    Result returned to callers of the orchestrator.

    Attributes:
        translated_text: Text of the selected candidate
        tone_adjusted_text: translated_text after the warmth rewrite
        locale: Target locale code
        provider: Selected provider name, or "unknown"
    """
    translated_text: str
    tone_adjusted_text: str
    locale: str
    provider: str = UNKNOWN_PROVIDER
