"""
Protocol definitions for the translation and voice-processing core.

This module defines interfaces (Python Protocols) that allow:
- Swapping implementations (e.g., Ollama → another LLM, Deepgram → GCP)
- Testing without real API credentials
- Clear contracts between components

Usage:
    from app.services.protocols import TranslationProviderProtocol

    async def translate_once(provider: TranslationProviderProtocol, text: str):
        return await provider.translate(text, "en", "fa")
"""

from datetime import datetime
from typing import Protocol, Sequence, Optional, Dict, Any, List

from app.services.speech.models import TranscriptionResult


class TranslationProviderProtocol(Protocol):
    """
    Interface for a translation backend.

    Implementations enforce their own call timeout and raise ProviderError
    on timeout, HTTP failure, or an unusable response.
    """

    name: str

    async def translate(
        self,
        text: str,
        source_locale: str,
        target_locale: str,
        context_lines: Sequence[str] = (),
    ) -> str:
        """
        Translate text from source to target locale.

        Args:
            text: Text to translate
            source_locale: Source locale code (e.g., "en", "fa")
            target_locale: Target locale code (e.g., "en", "fa")
            context_lines: Prior message texts, most recent first, used
                           only to improve phrasing

        Returns:
            Translated text
        """
        ...


class TranscriptionProtocol(Protocol):
    """
    Interface for speech-to-text services.

    Returns None (never raises) when transcription is unavailable.
    """

    async def transcribe(self, audio_path: str, locale: str) -> Optional[TranscriptionResult]:
        """
        Transcribe a stored audio file.

        Args:
            audio_path: Path of the uploaded audio file
            locale: Declared source locale ("en" or "fa")

        Returns:
            TranscriptionResult, or None when unavailable
        """
        ...


class NotifierProtocol(Protocol):
    """Best-effort publication of a named event to every subscriber."""

    async def publish(self, event: str, payload: Dict[str, Any]) -> int:
        """Publish an event; returns the number of subscribers reached."""
        ...


class AnalyticsStoreProtocol(Protocol):
    """Backing storage for provider selection counters."""

    async def upsert(
        self,
        provider: str,
        count: int,
        latency_sum_ms: int,
        timestamp: datetime,
    ) -> None:
        """Atomically add count/latency to the provider row, creating it if needed."""
        ...

    async def list(self) -> List[Any]:
        """Return all provider rows ordered by provider."""
        ...


class MessageStoreProtocol(Protocol):
    """Narrow repository contract consumed by the voice pipeline."""

    async def create(self, message: Any) -> Any:
        """Persist a new message together with its attachments."""
        ...

    async def get(self, message_id: str) -> Optional[Any]:
        """Load a message with attachments and reactions, or None."""
        ...

    async def update_voice_fields(self, message_id: str, fields: Any) -> None:
        """Apply the post-processing fields of a voice message in one update."""
        ...
