import asyncio
import uuid
from typing import List, Optional, Sequence, Tuple

from app.models.database import utcnow
from app.models.message import Message, MessageType
from app.services.exceptions import ProviderError
from app.services.speech.models import TranscriptionResult


class FakeProvider:
    """Translation provider returning a canned text, or raising ``error``."""

    def __init__(self, name: str, text: Optional[str] = None, error: Optional[Exception] = None, delay: float = 0):
        self.name = name
        self.text = text
        self.error = error
        self.delay = delay
        self.calls: List[Tuple[str, str, str, List[str]]] = []

    async def translate(self, text: str, source_locale: str, target_locale: str, context_lines: Sequence[str] = ()) -> str:
        self.calls.append((text, source_locale, target_locale, list(context_lines)))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.text is None:
            raise ProviderError(self.name, "no canned text")
        return self.text


class FakeTranscriber:
    def __init__(self, result: Optional[TranscriptionResult] = None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    async def transcribe(self, audio_path: str, locale: str) -> Optional[TranscriptionResult]:
        self.calls.append((audio_path, locale))
        if self.error is not None:
            raise self.error
        return self.result


class RecordingNotifier:
    """Notifier that remembers every published event in order."""

    def __init__(self):
        self.events: List[Tuple[str, dict]] = []

    async def publish(self, event: str, payload: dict) -> int:
        self.events.append((event, payload))
        return 1

    def names(self) -> List[str]:
        return [event for event, _ in self.events]


def make_text_message(persona_id: str = "brian", text: str = "hello", **fields) -> Message:
    values = dict(
        id=str(uuid.uuid4()),
        sender_persona_id=persona_id,
        original_text=text,
        original_locale="en" if persona_id == "brian" else "fa",
        message_type=MessageType.TEXT.value,
        created_at=utcnow(),
        attachments=[],
        reactions=[],
    )
    values.update(fields)
    return Message(**values)
