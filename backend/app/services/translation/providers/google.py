"""
Google Cloud Translation Provider

Handles Google Cloud Translation operations. The client library is
blocking, so calls run in a small thread pool under a timeout.
"""

import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from google.cloud import translate

from app.config.constants import GOOGLE_TRANSLATE_TIMEOUT_SEC
from app.services.exceptions import ProviderError

logger = logging.getLogger(__name__)

# Thread pool for blocking Cloud Translation calls
_translate_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="gcp_translate")


class GoogleTranslationProvider:
    """Translation via Cloud Translation v3 ``translate_text``."""

    name = "google"

    def __init__(
        self,
        project_id: str,
        credentials_path: Optional[str] = None,
        location: str = "global",
        timeout: float = GOOGLE_TRANSLATE_TIMEOUT_SEC,
        client=None,
    ):
        if not project_id:
            raise RuntimeError(
                "GOOGLE_PROJECT_ID is not set. Please update backend/.env accordingly."
            )
        self.project_id = project_id
        self.location = location
        self.timeout = timeout
        self._credentials_path = credentials_path
        self._client = client

    def _ensure_credentials(self):
        """Ensure Google credentials are set in environment."""
        if self._credentials_path and "GOOGLE_APPLICATION_CREDENTIALS" not in os.environ:
            os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = self._credentials_path

    def _get_client(self):
        if self._client is None:
            self._ensure_credentials()
            self._client = translate.TranslationServiceClient()
        return self._client

    def _translate_sync(self, text: str, source_locale: str, target_locale: str) -> str:
        parent = f"projects/{self.project_id}/locations/{self.location}"

        response = self._get_client().translate_text(
            request={
                "parent": parent,
                "contents": [text],
                "mime_type": "text/plain",
                "source_language_code": source_locale,
                "target_language_code": target_locale,
            }
        )

        if not response.translations:
            return ""

        return response.translations[0].translated_text

    async def translate(
        self,
        text: str,
        source_locale: str,
        target_locale: str,
        context_lines: Sequence[str] = (),
    ) -> str:
        loop = asyncio.get_running_loop()
        try:
            translated = await asyncio.wait_for(
                loop.run_in_executor(
                    _translate_executor, self._translate_sync, text, source_locale, target_locale
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise ProviderError(self.name, f"timed out after {self.timeout}s")
        except Exception as e:
            raise ProviderError(self.name, f"request failed: {e}") from e

        if not translated or not translated.strip():
            raise ProviderError(self.name, "invalid response: no translated text")
        return translated.strip()
