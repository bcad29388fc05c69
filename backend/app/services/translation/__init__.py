"""
Translation Module

This module contains all translation-related services:
- TranslationOrchestrator: races providers and selects the best candidate
- scoring: candidate scoring heuristics
- tone: deterministic warmth rewrite of the winning text
- providers: Ollama and Google Cloud Translation adapters

Usage:
    from app.services.translation import TranslationOrchestrator, TranslationDirection
"""

from app.services.translation.models import (
    TranslationCandidate,
    TranslationDirection,
    TranslationResult,
    UNKNOWN_PROVIDER,
    persona_locale,
)
from app.services.translation.orchestrator import TranslationOrchestrator
from app.services.translation.scoring import score_candidate, select_best_candidate
from app.services.translation.tone import add_warmth

__all__ = [
    "TranslationCandidate",
    "TranslationDirection",
    "TranslationResult",
    "UNKNOWN_PROVIDER",
    "persona_locale",
    "TranslationOrchestrator",
    "score_candidate",
    "select_best_candidate",
    "add_warmth",
]
