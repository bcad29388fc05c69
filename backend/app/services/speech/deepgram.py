"""
Deepgram Speech-to-Text Service

Transcribes uploaded voice messages through the Deepgram pre-recorded
audio API. Every failure mode (missing key, unreadable file, HTTP error,
empty transcript) results in ``None`` so callers treat it as
"transcription unavailable".
"""

import logging
import os
from typing import Optional

import aiofiles
import httpx

from app.config.constants import (
    AUDIO_MIME_TYPES,
    DEFAULT_AUDIO_MIME_TYPE,
    DEEPGRAM_ENDPOINT,
    DEEPGRAM_MODELS,
    DEEPGRAM_TIMEOUT_SEC,
)
from app.services.exceptions import TranscriptionError
from app.services.speech.models import TranscriptionResult

logger = logging.getLogger(__name__)


class DeepgramTranscriber:
    """Handles Speech-to-Text operations for stored audio files."""

    def __init__(
        self,
        api_key: Optional[str],
        media_root: str,
        endpoint: str = DEEPGRAM_ENDPOINT,
        timeout: float = DEEPGRAM_TIMEOUT_SEC,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.media_root = media_root
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    async def transcribe(self, audio_path: str, locale: str) -> Optional[TranscriptionResult]:
        if not self.api_key:
            logger.warning(f"[Deepgram] API key missing, skipping transcription of {audio_path}")
            return None

        absolute_path = self._resolve_path(audio_path)

        try:
            async with aiofiles.open(absolute_path, "rb") as f:
                audio = await f.read()
        except OSError as e:
            logger.error(f"[Deepgram] Failed to read audio file {absolute_path}: {e}")
            return None

        try:
            return await self._recognize(audio, absolute_path, locale)
        except TranscriptionError as e:
            logger.warning(f"[Deepgram] {e} ({absolute_path}, locale={locale})")
            return None
        except httpx.HTTPError as e:
            logger.error(f"[Deepgram] Failed to transcribe {absolute_path}: {e}")
            return None

    async def _recognize(self, audio: bytes, path: str, locale: str) -> TranscriptionResult:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                self.endpoint,
                content=audio,
                headers={
                    "Authorization": f"Token {self.api_key}",
                    "Content-Type": self.resolve_mime_type(path),
                },
                params={
                    "model": DEEPGRAM_MODELS.get(locale, "nova-2"),
                    "language": locale,
                    "smart_format": "true",
                },
            )
            response.raise_for_status()

        try:
            alternative = response.json()["results"]["channels"][0]["alternatives"][0]
        except (ValueError, KeyError, IndexError, TypeError):
            raise TranscriptionError("Deepgram returned no transcript")

        transcript = alternative.get("transcript")
        if not transcript:
            raise TranscriptionError("Deepgram returned no transcript")

        return TranscriptionResult(
            text=transcript,
            confidence=float(alternative.get("confidence") or 0),
            locale=locale,
        )

    def _resolve_path(self, audio_path: str) -> str:
        if os.path.isabs(audio_path):
            return audio_path
        return os.path.abspath(os.path.join(self.media_root, audio_path))

    @staticmethod
    def resolve_mime_type(path: str) -> str:
        ext = os.path.splitext(path)[1].lower()
        return AUDIO_MIME_TYPES.get(ext, DEFAULT_AUDIO_MIME_TYPE)
