import pytest
from unittest.mock import AsyncMock

from app.services.exceptions import PersistenceError, ProviderError
from app.services.speech.models import TranscriptionResult
from app.services.translation import TranslationOrchestrator
from app.services.voice import VoiceMessageParams, VoiceProcessingPipeline, VoiceState
from tests.helpers import FakeProvider, FakeTranscriber

# Mark all tests in this file as async
pytestmark = pytest.mark.asyncio


def voice_params(locale="fa", context=()):
    return VoiceMessageParams(
        persona_id="khadija" if locale == "fa" else "brian",
        audio_path="/tmp/voice.m4a",
        audio_url="/media/voice.m4a",
        original_locale=locale,
        context_lines=context,
    )


async def run_to_completion(pipeline, params):
    placeholder = await pipeline.start(params)
    run = await pipeline.task_for(placeholder.id)
    return placeholder, run


async def test_transcribed_and_translated(message_repository, notifier):
    transcriber = FakeTranscriber(TranscriptionResult(text="سلام", confidence=0.87, locale="fa"))
    orchestrator = TranslationOrchestrator([FakeProvider("google", "hello")])
    pipeline = VoiceProcessingPipeline(message_repository, transcriber, orchestrator, notifier)

    placeholder, run = await run_to_completion(pipeline, voice_params("fa"))

    assert run.states == [
        VoiceState.CREATED,
        VoiceState.TRANSCRIBING,
        VoiceState.TRANSCRIBED,
        VoiceState.TRANSLATING,
        VoiceState.PERSISTED,
    ]
    assert transcriber.calls == [("/tmp/voice.m4a", "fa")]

    stored = await message_repository.get(placeholder.id)
    assert stored.original_text == "سلام"
    assert stored.transcription_text == "سلام"
    assert stored.transcription_confidence == pytest.approx(0.87)
    assert stored.translated_text == "hello"
    assert stored.translated_locale == "en"
    assert stored.tone_adjusted_text == "hello ❤️"
    assert stored.translation_provider == "google"
    assert stored.message_type == "voice"
    assert [a.media_type for a in stored.attachments] == ["audio"]

    assert notifier.names() == ["message:updated"]
    assert notifier.events[0][1]["id"] == placeholder.id
    assert pipeline.pending_count == 0


async def test_placeholder_is_returned_before_processing(message_repository, notifier):
    transcriber = FakeTranscriber(TranscriptionResult(text="hi", confidence=1.0, locale="en"))
    orchestrator = TranslationOrchestrator([FakeProvider("google", "سلام")])
    pipeline = VoiceProcessingPipeline(message_repository, transcriber, orchestrator, notifier)

    placeholder = await pipeline.start(voice_params("en"))

    assert placeholder.original_text is None
    assert placeholder.audio_url == "/media/voice.m4a"
    assert pipeline.task_for(placeholder.id) is not None
    assert notifier.events == []

    await pipeline.drain()
    assert notifier.names() == ["message:updated"]


async def test_transcription_unavailable_still_notifies(message_repository, notifier):
    provider = FakeProvider("google", "unused")
    pipeline = VoiceProcessingPipeline(
        message_repository, FakeTranscriber(None), TranslationOrchestrator([provider]), notifier
    )

    placeholder, run = await run_to_completion(pipeline, voice_params("fa"))

    assert run.states[-2:] == [VoiceState.TRANSCRIPTION_SKIPPED, VoiceState.PERSISTED]
    assert provider.calls == []

    stored = await message_repository.get(placeholder.id)
    assert stored.original_text is None
    assert stored.transcription_text is None
    assert stored.transcription_confidence is None
    assert stored.translated_text is None
    assert stored.tone_adjusted_text is None
    assert notifier.names() == ["message:updated"]


async def test_transcriber_exception_counts_as_unavailable(message_repository, notifier):
    pipeline = VoiceProcessingPipeline(
        message_repository,
        FakeTranscriber(error=RuntimeError("socket closed")),
        TranslationOrchestrator([FakeProvider("google", "unused")]),
        notifier,
    )

    _, run = await run_to_completion(pipeline, voice_params("fa"))

    assert VoiceState.TRANSCRIPTION_SKIPPED in run.states
    assert run.state == VoiceState.PERSISTED


async def test_translation_failure_keeps_transcript(message_repository, notifier):
    transcriber = FakeTranscriber(TranscriptionResult(text="good night", confidence=0.5, locale="en"))
    orchestrator = TranslationOrchestrator([FakeProvider("ollama", error=ProviderError("ollama", "down"))])
    pipeline = VoiceProcessingPipeline(message_repository, transcriber, orchestrator, notifier)

    placeholder, run = await run_to_completion(pipeline, voice_params("en"))

    assert run.state == VoiceState.PERSISTED
    stored = await message_repository.get(placeholder.id)
    assert stored.original_text == "good night"
    assert stored.transcription_text == "good night"
    assert stored.translated_text is None
    assert stored.translated_locale is None
    assert stored.tone_adjusted_text is None
    assert stored.translation_provider is None
    assert notifier.names() == ["message:updated"]


async def test_persistence_failure_does_not_notify(message_repository, notifier):
    messages = AsyncMock()
    messages.create.side_effect = message_repository.create
    messages.update_voice_fields.side_effect = PersistenceError("db down")
    transcriber = FakeTranscriber(TranscriptionResult(text="hi", confidence=1.0, locale="en"))
    pipeline = VoiceProcessingPipeline(
        messages, transcriber, TranslationOrchestrator([FakeProvider("google", "سلام")]), notifier
    )

    _, run = await run_to_completion(pipeline, voice_params("en"))

    assert run.state == VoiceState.FAILED
    assert notifier.events == []
    messages.get.assert_not_awaited()


async def test_context_is_passed_to_translation(message_repository, notifier):
    provider = FakeProvider("google", "hello")
    pipeline = VoiceProcessingPipeline(
        message_repository,
        FakeTranscriber(TranscriptionResult(text="سلام", confidence=0.7, locale="fa")),
        TranslationOrchestrator([provider]),
        notifier,
    )

    await run_to_completion(pipeline, voice_params("fa", context=["earlier", "even earlier"]))

    assert provider.calls == [("سلام", "fa", "en", ["earlier", "even earlier"])]
