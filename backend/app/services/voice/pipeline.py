"""
Voice Processing Pipeline - background enrichment of voice messages.

States per message:

    CREATED -> TRANSCRIBING -> (TRANSCRIBED | TRANSCRIPTION_SKIPPED)
            -> TRANSLATING -> PERSISTED

CREATED is the only synchronous step: the message row and its audio
attachment are written and the placeholder is handed back to the caller.
Everything after that runs on a detached task that the caller never
awaits. Each upload gets its own task and there is no cap on how many run
at once; tasks are not cancellable and have no overall timeout (the
adapters time out individually).

Failures degrade, they never propagate:
- no transcript -> nothing to translate, fields stay null, still persisted
- no translation -> transcript is persisted on its own
- persistence failure -> logged, no notification, message stays a placeholder

Usage:
    pipeline = VoiceProcessingPipeline(messages, transcriber, orchestrator, notifier)
    placeholder = await pipeline.start(VoiceMessageParams(...))
"""

import asyncio
import enum
import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from app.config.constants import VOICE_ATTACHMENT_MIME_TYPE
from app.models.database import utcnow
from app.models.message import Attachment, MediaType, Message, MessageType
from app.services.core.repositories import VoiceFields
from app.services.exceptions import NoCandidatesError, PersistenceError
from app.services.metrics import voice_pipeline_outcomes
from app.services.protocols import MessageStoreProtocol, NotifierProtocol, TranscriptionProtocol
from app.services.speech.models import TranscriptionResult
from app.services.translation.models import TranslationDirection, TranslationResult
from app.services.translation.orchestrator import TranslationOrchestrator

logger = logging.getLogger(__name__)

MESSAGE_UPDATED_EVENT = "message:updated"


class VoiceState(str, enum.Enum):
    CREATED = "created"
    TRANSCRIBING = "transcribing"
    TRANSCRIBED = "transcribed"
    TRANSCRIPTION_SKIPPED = "transcription_skipped"
    TRANSLATING = "translating"
    PERSISTED = "persisted"
    FAILED = "failed"


@dataclass(frozen=True)
class VoiceMessageParams:
    """
    Attributes:
        persona_id: Sender persona
        audio_path: Where the uploaded audio file lives on disk
        audio_url: Public URL of the audio file
        original_locale: Locale the persona spoke in
        context_lines: Recent message texts, most recent first
    """
    persona_id: str
    audio_path: str
    audio_url: str
    original_locale: str
    context_lines: Sequence[str] = ()


@dataclass
class VoiceRun:
    """Progress of one background run; ``states`` lists every state entered."""
    message_id: str
    states: List[VoiceState] = field(default_factory=lambda: [VoiceState.CREATED])

    @property
    def state(self) -> VoiceState:
        return self.states[-1]

    def enter(self, state: VoiceState):
        logger.debug(f"[VoicePipeline] {self.message_id}: {self.state.value} -> {state.value}")
        self.states.append(state)


class VoiceProcessingPipeline:
    """Transcribe, translate, persist, and notify for each voice upload."""

    def __init__(
        self,
        messages: MessageStoreProtocol,
        transcriber: TranscriptionProtocol,
        orchestrator: TranslationOrchestrator,
        notifier: NotifierProtocol,
    ):
        self._messages = messages
        self._transcriber = transcriber
        self._orchestrator = orchestrator
        self._notifier = notifier
        self._tasks: Dict[str, asyncio.Task] = {}

    async def start(self, params: VoiceMessageParams) -> Message:
        """
        Persist the placeholder and launch background processing.

        Raises:
            PersistenceError: the placeholder could not be written
        """
        message_id = str(uuid.uuid4())
        created_at = utcnow()

        placeholder = Message(
            id=message_id,
            sender_persona_id=params.persona_id,
            original_locale=params.original_locale,
            audio_url=params.audio_url,
            message_type=MessageType.VOICE.value,
            created_at=created_at,
            attachments=[
                Attachment(
                    id=str(uuid.uuid4()),
                    message_id=message_id,
                    uri=params.audio_url,
                    mime_type=VOICE_ATTACHMENT_MIME_TYPE,
                    media_type=MediaType.AUDIO.value,
                    position=0,
                    created_at=created_at,
                )
            ],
            reactions=[],
        )
        await self._messages.create(placeholder)

        task = asyncio.create_task(self._process(VoiceRun(message_id), params))
        self._tasks[message_id] = task
        task.add_done_callback(lambda _: self._tasks.pop(message_id, None))

        logger.info(f"[VoicePipeline] Started processing of voice message {message_id}")
        return placeholder

    def task_for(self, message_id: str) -> Optional[asyncio.Task]:
        """Background task of a message still being processed, if any."""
        return self._tasks.get(message_id)

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    async def drain(self):
        """Wait for every in-flight run to finish (used at shutdown)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks.values()), return_exceptions=True)

    async def _process(self, run: VoiceRun, params: VoiceMessageParams) -> VoiceRun:
        try:
            await self._advance(run, params)
        except Exception as e:
            run.enter(VoiceState.FAILED)
            logger.exception(f"[VoicePipeline] Post-processing of {run.message_id} failed: {e}")
        return run

    async def _advance(self, run: VoiceRun, params: VoiceMessageParams):
        run.enter(VoiceState.TRANSCRIBING)
        transcription = await self._transcribe(run, params)

        if transcription is None:
            run.enter(VoiceState.TRANSCRIPTION_SKIPPED)
            fields = VoiceFields()
            outcome = "transcription_skipped"
        else:
            run.enter(VoiceState.TRANSCRIBED)
            run.enter(VoiceState.TRANSLATING)
            translation = await self._translate(run, transcription, params)
            fields = self._fields_for(transcription, translation)
            outcome = "translated" if translation else "translation_failed"

        try:
            await self._messages.update_voice_fields(run.message_id, fields)
        except PersistenceError as e:
            run.enter(VoiceState.FAILED)
            voice_pipeline_outcomes.labels(outcome="persistence_failed").inc()
            logger.error(f"[VoicePipeline] Could not persist voice message {run.message_id}: {e}")
            return

        run.enter(VoiceState.PERSISTED)
        voice_pipeline_outcomes.labels(outcome=outcome).inc()

        updated = await self._messages.get(run.message_id)
        if updated is not None:
            await self._notifier.publish(MESSAGE_UPDATED_EVENT, updated.to_dict())

    async def _transcribe(self, run: VoiceRun, params: VoiceMessageParams) -> Optional[TranscriptionResult]:
        try:
            transcription = await self._transcriber.transcribe(params.audio_path, params.original_locale)
        except Exception as e:
            logger.warning(f"[VoicePipeline] Transcription of {run.message_id} failed: {e}")
            return None

        if transcription is None or not transcription.text:
            logger.info(f"[VoicePipeline] No transcript for {run.message_id}, keeping audio only")
            return None
        return transcription

    async def _translate(
        self,
        run: VoiceRun,
        transcription: TranscriptionResult,
        params: VoiceMessageParams,
    ) -> Optional[TranslationResult]:
        direction = TranslationDirection.from_source_locale(params.original_locale)
        try:
            translation = await self._orchestrator.translate(
                transcription.text, direction, params.context_lines
            )
        except NoCandidatesError as e:
            logger.warning(f"[VoicePipeline] Keeping transcript only for {run.message_id}: {e}")
            return None
        except Exception as e:
            logger.exception(f"[VoicePipeline] Translation of {run.message_id} raised: {e}")
            return None

        logger.debug(
            f"[VoicePipeline] {run.message_id} translated via {translation.provider} ({direction.value})"
        )
        return translation

    @staticmethod
    def _fields_for(
        transcription: TranscriptionResult,
        translation: Optional[TranslationResult],
    ) -> VoiceFields:
        if translation is None:
            return VoiceFields(
                original_text=transcription.text,
                transcription_text=transcription.text,
                transcription_confidence=transcription.confidence,
            )
        return VoiceFields(
            original_text=transcription.text,
            translated_text=translation.translated_text,
            translated_locale=translation.locale,
            tone_adjusted_text=translation.tone_adjusted_text,
            translation_provider=translation.provider,
            transcription_text=transcription.text,
            transcription_confidence=transcription.confidence,
        )
