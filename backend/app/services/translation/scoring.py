"""
Candidate scoring for the provider race.

Score components (see app.config.constants for the weights):
- affection cues in the target locale (endearment words, heart emoji)
- length divergence from the source text
- identity with the source text (a no-op translation)
- a shared prefix with any context line
- provider latency
- the preferred provider for the direction

An empty candidate scores -inf and can never win against a non-empty one.
"""

import math
from typing import Sequence

from app.config.constants import (
    AFFECTION_HEART_BONUS,
    AFFECTION_WORD_BONUS,
    AFFECTION_WORDS,
    CONTEXT_AFFINITY_BONUS,
    CONTEXT_AFFINITY_PREFIX_CHARS,
    DIRECTIONAL_PROVIDER_BONUS,
    ENGLISH_LOCALE,
    HEART_EMOJI,
    IDENTITY_PENALTY,
    LATENCY_PENALTY_PER_SEC,
    LENGTH_DELTA_PENALTY_PER_CHAR,
    PREFERRED_PROVIDER_BY_DIRECTION,
)
from app.services.translation.models import TranslationCandidate, TranslationDirection


def affection_score(text: str, target_locale: str) -> float:
    score = 0.0
    words = AFFECTION_WORDS.get(target_locale, ())
    if target_locale == ENGLISH_LOCALE:
        lowered = text.lower()
        has_word = any(word in lowered for word in words)
    else:
        has_word = any(word in text for word in words)
    if has_word:
        score += AFFECTION_WORD_BONUS
    if HEART_EMOJI in text:
        score += AFFECTION_HEART_BONUS
    return score


def has_context_affinity(text: str, context_lines: Sequence[str]) -> bool:
    return any(
        line[:CONTEXT_AFFINITY_PREFIX_CHARS] in text
        for line in context_lines
        if line
    )


def score_candidate(
    source_text: str,
    candidate: TranslationCandidate,
    direction: TranslationDirection,
    context_lines: Sequence[str] = (),
) -> float:
    text = candidate.text.strip()
    if not text:
        return -math.inf

    score = affection_score(text, direction.target_locale)

    score -= abs(len(text) - len(source_text)) * LENGTH_DELTA_PENALTY_PER_CHAR

    if text.lower() == source_text.lower():
        score -= IDENTITY_PENALTY

    if has_context_affinity(text, context_lines):
        score += CONTEXT_AFFINITY_BONUS

    score -= candidate.latency_ms / 1000 * LATENCY_PENALTY_PER_SEC

    if PREFERRED_PROVIDER_BY_DIRECTION.get(direction.value) == candidate.provider:
        score += DIRECTIONAL_PROVIDER_BONUS

    return score


def select_best_candidate(
    source_text: str,
    candidates: Sequence[TranslationCandidate],
    direction: TranslationDirection,
    context_lines: Sequence[str] = (),
) -> TranslationCandidate:
    """
    Pick the highest scoring candidate.

    A single candidate is returned unscored. Ties keep the earlier
    candidate, so callers pass candidates in provider-configuration order.
    """
    if not candidates:
        raise ValueError("select_best_candidate() needs at least one candidate")
    if len(candidates) == 1:
        return candidates[0]

    best = candidates[0]
    best_score = -math.inf
    for candidate in candidates:
        score = score_candidate(source_text, candidate, direction, context_lines)
        if score > best_score:
            best_score = score
            best = candidate
    return best
