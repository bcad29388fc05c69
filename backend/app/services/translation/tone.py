from typing import Sequence

from app.config.constants import ENGLISH_LOCALE, HEART_EMOJI, PERSIAN_ENDEARMENT, PERSIAN_LOCALE


def add_warmth(translated: str, locale: str, context_lines: Sequence[str] = ()) -> str:
    """
    Make a selected translation sound warmer.

    Persian gets the endearment prefix, plus a trailing heart unless the
    conversation already carries one. English gets a trailing heart.
    Applying the rewrite to its own output changes nothing.
    """
    if locale == PERSIAN_LOCALE:
        softened = translated if PERSIAN_ENDEARMENT in translated else f"{PERSIAN_ENDEARMENT} {translated}"
        context_has_heart = any(HEART_EMOJI in line for line in context_lines if line)
        closing = "" if context_has_heart or HEART_EMOJI in softened else f" {HEART_EMOJI}"
        return f"{softened}{closing}".strip()

    if locale == ENGLISH_LOCALE:
        return translated if HEART_EMOJI in translated else f"{translated} {HEART_EMOJI}"

    return translated
