import json

import httpx
import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock

from app.services.exceptions import ProviderError
from app.services.speech import DeepgramTranscriber
from app.services.translation.providers import (
    GoogleTranslationProvider,
    OllamaTranslationProvider,
    build_providers,
)
from app.config.settings import Settings

# === Ollama ===

async def test_ollama_posts_generate_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": "  سلام  "})

    provider = OllamaTranslationProvider(
        "http://ollama:11434/", "ollama2persian", transport=httpx.MockTransport(handler)
    )
    translated = await provider.translate("Hi", "en", "fa", ["previous line"])

    assert translated == "سلام"
    assert seen["url"] == "http://ollama:11434/api/generate"
    assert seen["body"]["model"] == "ollama2persian"
    assert seen["body"]["stream"] is False
    assert "English" in seen["body"]["prompt"]
    assert "Persian" in seen["body"]["prompt"]
    assert "previous line" in seen["body"]["prompt"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"response": 42}),
        httpx.Response(200, json={"response": "   "}),
    ],
)
async def test_ollama_bad_responses_raise_provider_error(response):
    provider = OllamaTranslationProvider(
        "http://ollama:11434", "m", transport=httpx.MockTransport(lambda request: response)
    )

    with pytest.raises(ProviderError) as exc_info:
        await provider.translate("Hi", "en", "fa")
    assert exc_info.value.provider == "ollama"


async def test_ollama_timeout_raises_provider_error():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    provider = OllamaTranslationProvider("http://ollama:11434", "m", transport=httpx.MockTransport(handler))

    with pytest.raises(ProviderError):
        await provider.translate("Hi", "en", "fa")


def test_ollama_prompt_uses_at_most_five_context_lines():
    prompt = OllamaTranslationProvider.build_prompt(
        "Hi", "en", "fa", [f"context-{i}" for i in range(7)]
    )
    assert "context-4" in prompt
    assert "context-5" not in prompt


# === Google ===

def google_response(*texts):
    return SimpleNamespace(translations=[SimpleNamespace(translated_text=t) for t in texts])


async def test_google_translate_text_request():
    client = MagicMock()
    client.translate_text.return_value = google_response("hello")
    provider = GoogleTranslationProvider(project_id="demo", client=client)

    assert await provider.translate("سلام", "fa", "en") == "hello"

    request = client.translate_text.call_args.kwargs["request"]
    assert request["parent"] == "projects/demo/locations/global"
    assert request["contents"] == ["سلام"]
    assert request["source_language_code"] == "fa"
    assert request["target_language_code"] == "en"


async def test_google_empty_response_raises_provider_error():
    client = MagicMock()
    client.translate_text.return_value = google_response()
    provider = GoogleTranslationProvider(project_id="demo", client=client)

    with pytest.raises(ProviderError):
        await provider.translate("سلام", "fa", "en")


async def test_google_client_error_raises_provider_error():
    client = MagicMock()
    client.translate_text.side_effect = RuntimeError("permission denied")
    provider = GoogleTranslationProvider(project_id="demo", client=client)

    with pytest.raises(ProviderError) as exc_info:
        await provider.translate("سلام", "fa", "en")
    assert exc_info.value.provider == "google"


def test_google_requires_project():
    with pytest.raises(RuntimeError):
        GoogleTranslationProvider(project_id="")


def test_build_providers_order():
    settings = Settings(OLLAMA_URL="http://ollama:11434", GOOGLE_PROJECT_ID="demo", GOOGLE_TRANSLATE_ENABLED=True)
    assert [p.name for p in build_providers(settings)] == ["ollama", "google"]


def test_build_providers_skips_unconfigured():
    settings = Settings(OLLAMA_URL=None, GOOGLE_PROJECT_ID=None, GOOGLE_TRANSLATE_ENABLED=True)
    assert build_providers(settings) == []


# === Deepgram ===

async def test_deepgram_transcribes_relative_path(tmp_path):
    (tmp_path / "note.m4a").write_bytes(b"audio-bytes")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={
            "results": {"channels": [{"alternatives": [{"transcript": "salam", "confidence": 0.92}]}]}
        })

    transcriber = DeepgramTranscriber("key", str(tmp_path), transport=httpx.MockTransport(handler))
    result = await transcriber.transcribe("note.m4a", "fa")

    assert result.text == "salam"
    assert result.confidence == pytest.approx(0.92)
    assert result.locale == "fa"

    request = seen["request"]
    assert request.headers["authorization"] == "Token key"
    assert request.headers["content-type"] == "audio/mp4"
    assert request.url.params["language"] == "fa"
    assert request.url.params["smart_format"] == "true"
    assert request.content == b"audio-bytes"


async def test_deepgram_confidence_defaults_to_zero(tmp_path):
    (tmp_path / "note.wav").write_bytes(b"x")
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={
        "results": {"channels": [{"alternatives": [{"transcript": "hello"}]}]}
    }))

    result = await DeepgramTranscriber("key", str(tmp_path), transport=transport).transcribe("note.wav", "en")
    assert result.confidence == 0


async def test_deepgram_without_key_returns_none(tmp_path):
    def handler(request):
        raise AssertionError("no request expected")

    transcriber = DeepgramTranscriber(None, str(tmp_path), transport=httpx.MockTransport(handler))
    assert await transcriber.transcribe("note.m4a", "fa") is None


async def test_deepgram_missing_file_returns_none(tmp_path):
    transcriber = DeepgramTranscriber("key", str(tmp_path))
    assert await transcriber.transcribe("missing.m4a", "fa") is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(401, json={"err_msg": "Invalid credentials"}),
        httpx.Response(200, json={"results": {"channels": []}}),
        httpx.Response(200, json={"results": {"channels": [{"alternatives": [{"transcript": ""}]}]}}),
    ],
)
async def test_deepgram_failures_return_none(tmp_path, response):
    (tmp_path / "note.mp3").write_bytes(b"x")
    transport = httpx.MockTransport(lambda request: response)

    transcriber = DeepgramTranscriber("key", str(tmp_path), transport=transport)
    assert await transcriber.transcribe("note.mp3", "en") is None


def test_deepgram_mime_types():
    assert DeepgramTranscriber.resolve_mime_type("a.M4A") == "audio/mp4"
    assert DeepgramTranscriber.resolve_mime_type("a.mp3") == "audio/mpeg"
    assert DeepgramTranscriber.resolve_mime_type("a.wav") == "audio/wav"
    assert DeepgramTranscriber.resolve_mime_type("a.ogg") == "audio/*"
