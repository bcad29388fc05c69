"""
Message Service - Create and list chat messages

Encapsulates logic for:
- Translating and storing text messages
- Handing voice uploads to the background voice pipeline
- Storing media messages and reactions
- Publishing live-update events for every change
"""
import logging
import os
import uuid
from dataclasses import dataclass
from typing import List, Optional, Sequence

from app.config.constants import CONTEXT_MAX_LINES, DEFAULT_MESSAGE_LIST_LIMIT
from app.models.database import utcnow
from app.models.message import Attachment, Message, MessageType, Reaction
from app.services.core.repositories import MessageRepository
from app.services.exceptions import MessageNotFoundError
from app.services.protocols import NotifierProtocol
from app.services.translation.models import TranslationDirection, persona_locale
from app.services.translation.orchestrator import TranslationOrchestrator
from app.services.voice.pipeline import VoiceMessageParams, VoiceProcessingPipeline

logger = logging.getLogger(__name__)

MESSAGE_NEW_EVENT = "message:new"
REACTION_NEW_EVENT = "reaction:new"
PRESENCE_UPDATE_EVENT = "presence:update"


@dataclass(frozen=True)
class UploadedMedia:
    path: str
    mime_type: str
    media_type: str


def context_lines_from(messages: Sequence[Message]) -> List[str]:
    """Best available text of each message, most recent first."""
    return [
        m.tone_adjusted_text or m.translated_text or m.original_text or ""
        for m in messages
    ]


class MessageService:
    """Service for creating messages and broadcasting them."""

    def __init__(
        self,
        messages: MessageRepository,
        orchestrator: TranslationOrchestrator,
        voice_pipeline: VoiceProcessingPipeline,
        notifier: NotifierProtocol,
        media_root: str,
    ):
        self._messages = messages
        self._orchestrator = orchestrator
        self._voice_pipeline = voice_pipeline
        self._notifier = notifier
        self._media_root = media_root

    async def list_messages(self, limit: int = DEFAULT_MESSAGE_LIST_LIMIT, offset: int = 0) -> List[Message]:
        return await self._messages.list(limit, offset)

    async def recent_context(self) -> List[str]:
        recent = await self._messages.list(CONTEXT_MAX_LINES, 0)
        return context_lines_from(recent)

    async def create_text_message(self, persona_id: str, text: str) -> Message:
        """
        Translate and store a text message.

        Raises:
            NoCandidatesError: no provider could translate; nothing is stored
        """
        direction = TranslationDirection.for_persona(persona_id)
        context = await self.recent_context()

        translation = await self._orchestrator.translate(text, direction, context)

        message_id = str(uuid.uuid4())
        logger.debug(f"Text message {message_id} translated ({direction.value}) via {translation.provider}")

        message = Message(
            id=message_id,
            sender_persona_id=persona_id,
            original_text=text,
            original_locale=direction.source_locale,
            translated_text=translation.translated_text,
            translated_locale=translation.locale,
            tone_adjusted_text=translation.tone_adjusted_text,
            translation_provider=translation.provider,
            message_type=MessageType.TEXT.value,
            created_at=utcnow(),
            attachments=[],
            reactions=[],
        )
        await self._messages.create(message)
        await self._notifier.publish(MESSAGE_NEW_EVENT, message.to_dict())
        return message

    async def create_voice_message(self, persona_id: str, audio_path: str) -> Message:
        """
        Store a voice message placeholder; transcription and translation
        follow in the background and arrive as ``message:updated``.
        """
        locale = persona_locale(persona_id)
        context = await self.recent_context()

        logger.info(f"Received voice message from {persona_id}: {os.path.basename(audio_path)}")

        placeholder = await self._voice_pipeline.start(
            VoiceMessageParams(
                persona_id=persona_id,
                audio_path=audio_path,
                audio_url=self.to_public_url(audio_path),
                original_locale=locale,
                context_lines=context,
            )
        )
        # Published before this coroutine yields, so it precedes message:updated.
        await self._notifier.publish(MESSAGE_NEW_EVENT, placeholder.to_dict())
        return placeholder

    async def create_media_message(
        self,
        persona_id: str,
        files: Sequence[UploadedMedia],
        caption: Optional[str] = None,
    ) -> Message:
        message_id = str(uuid.uuid4())
        created_at = utcnow()

        attachments = [
            Attachment(
                id=str(uuid.uuid4()),
                message_id=message_id,
                uri=self.to_public_url(f.path),
                mime_type=f.mime_type,
                media_type=f.media_type,
                position=position,
                created_at=created_at,
            )
            for position, f in enumerate(files)
        ]

        message = Message(
            id=message_id,
            sender_persona_id=persona_id,
            original_text=caption or None,
            original_locale=persona_locale(persona_id) if caption else None,
            message_type=MessageType.MEDIA.value,
            created_at=created_at,
            attachments=attachments,
            reactions=[],
        )
        await self._messages.create(message)
        await self._notifier.publish(MESSAGE_NEW_EVENT, message.to_dict())
        return message

    async def add_reaction(self, message_id: str, persona_id: str, emoji: str) -> Reaction:
        if not await self._messages.exists(message_id):
            raise MessageNotFoundError(f"Message {message_id} not found")

        reaction = Reaction(
            id=str(uuid.uuid4()),
            message_id=message_id,
            persona_id=persona_id,
            emoji=emoji,
            created_at=utcnow(),
        )
        await self._messages.add_reaction(reaction)
        await self._notifier.publish(REACTION_NEW_EVENT, reaction.to_dict())
        return reaction

    async def activate_persona(self, persona_id: str):
        await self._notifier.publish(PRESENCE_UPDATE_EVENT, {"persona_id": persona_id, "status": "online"})

    def to_public_url(self, path: str) -> str:
        relative = os.path.relpath(os.path.abspath(path), os.path.abspath(self._media_root))
        return f"/media/{relative.replace(os.sep, '/')}"
