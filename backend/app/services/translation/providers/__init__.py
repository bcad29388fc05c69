"""
Translation Providers

Each provider exposes ``name`` and an async ``translate``. The enabled set
is resolved once from settings, in configuration order, and handed to the
orchestrator; it is not re-checked per call.

Usage:
    from app.services.translation.providers import build_providers

    providers = build_providers(settings)
"""

import logging
from typing import List

from app.config.settings import Settings
from app.services.protocols import TranslationProviderProtocol
from app.services.translation.providers.ollama import OllamaTranslationProvider
from app.services.translation.providers.google import GoogleTranslationProvider

logger = logging.getLogger(__name__)


def build_providers(settings: Settings) -> List[TranslationProviderProtocol]:
    """Resolve the enabled providers: Ollama first, then Google."""
    providers: List[TranslationProviderProtocol] = []

    if settings.OLLAMA_URL:
        providers.append(OllamaTranslationProvider(settings.OLLAMA_URL, settings.OLLAMA_MODEL))

    if settings.GOOGLE_TRANSLATE_ENABLED:
        if settings.GOOGLE_PROJECT_ID:
            providers.append(
                GoogleTranslationProvider(
                    project_id=settings.GOOGLE_PROJECT_ID,
                    credentials_path=settings.GOOGLE_APPLICATION_CREDENTIALS,
                )
            )
        else:
            logger.warning("GOOGLE_PROJECT_ID not set - Google translation disabled")

    if providers:
        logger.info(f"✅ Translation providers enabled: {[p.name for p in providers]}")
    else:
        logger.warning("⚠️ No translation providers configured - text messages will fail to send")

    return providers


__all__ = [
    "OllamaTranslationProvider",
    "GoogleTranslationProvider",
    "build_providers",
]
