"""
Ollama Translation Provider

Translates through a local LLM served by Ollama, prompting it for a
warm, familial tone and feeding it the recent conversation as context.
"""

import logging
from typing import Optional, Sequence

import httpx

from app.config.constants import CONTEXT_MAX_LINES, LANGUAGE_NAMES, OLLAMA_TIMEOUT_SEC, PERSIAN_LOCALE
from app.services.exceptions import ProviderError

logger = logging.getLogger(__name__)

OLLAMA_PROMPT = """You are a caring bilingual assistant helping two partners communicate.
Context (most recent first):
{context}

Translate the following {source_language} message into {target_language}.
Return only the translated sentence with polished, loving tone.
Message: {text}

{tone_instructions}"""

TONE_INSTRUCTIONS = {
    PERSIAN_LOCALE: (
        "Keep the tone tender, familial, add natural warmth and loving expressions "
        "without sounding machine-translated."
    ),
}
DEFAULT_TONE_INSTRUCTIONS = "Translate to clear, friendly English while keeping affectionate nuances."


class OllamaTranslationProvider:
    """Translation via the Ollama ``/api/generate`` endpoint."""

    name = "ollama"

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: float = OLLAMA_TIMEOUT_SEC,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._transport = transport

    async def translate(
        self,
        text: str,
        source_locale: str,
        target_locale: str,
        context_lines: Sequence[str] = (),
    ) -> str:
        prompt = self.build_prompt(text, source_locale, target_locale, context_lines)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/api/generate",
                    json={"model": self.model, "prompt": prompt, "stream": False},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException:
            raise ProviderError(self.name, f"timed out after {self.timeout}s")
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"request failed: {e}")
        except ValueError:
            raise ProviderError(self.name, "response is not JSON")

        generated = data.get("response") if isinstance(data, dict) else None
        if not isinstance(generated, str):
            raise ProviderError(self.name, "unexpected response shape")

        translated = generated.strip()
        if not translated:
            raise ProviderError(self.name, "empty translation")
        return translated

    @staticmethod
    def build_prompt(
        text: str,
        source_locale: str,
        target_locale: str,
        context_lines: Sequence[str] = (),
    ) -> str:
        context = "\n".join([line for line in context_lines if line][:CONTEXT_MAX_LINES])
        return OLLAMA_PROMPT.format(
            context=context,
            source_language=LANGUAGE_NAMES.get(source_locale, source_locale),
            target_language=LANGUAGE_NAMES.get(target_locale, target_locale),
            text=text,
            tone_instructions=TONE_INSTRUCTIONS.get(target_locale, DEFAULT_TONE_INSTRUCTIONS),
        )
