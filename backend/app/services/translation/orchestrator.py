"""
Translation Orchestrator - races providers and picks the best candidate.

Every enabled provider is asked concurrently; all attempts are awaited,
failures and empty outputs are dropped, and the survivors are scored
(see scoring.py). The winner is tone-adjusted and reported to the
analytics recorder.

Usage:
    from app.services.translation.orchestrator import TranslationOrchestrator

    orchestrator = TranslationOrchestrator(providers, analytics_recorder)
    result = await orchestrator.translate(
        text="Hi there",
        direction=TranslationDirection.EN_TO_FA,
        context_lines=["previous message", ...],
    )
    print(f"{result.provider}: {result.tone_adjusted_text}")
"""

import asyncio
import logging
import time
from typing import Callable, List, Optional, Sequence

from app.config.constants import CONTEXT_MAX_LINES
from app.services.analytics import AnalyticsRecorder
from app.services.exceptions import AnalyticsRecordingError, NoCandidatesError, ProviderError
from app.services.metrics import provider_latency, provider_selections
from app.services.protocols import TranslationProviderProtocol
from app.services.translation.models import (
    TranslationCandidate,
    TranslationDirection,
    TranslationResult,
)
from app.services.translation.scoring import select_best_candidate
from app.services.translation.tone import add_warmth

logger = logging.getLogger(__name__)


class TranslationOrchestrator:
    """
    Stateless per call: holds only the provider list, the recorder, and
    the clock used to time attempts.
    """

    def __init__(
        self,
        providers: Sequence[TranslationProviderProtocol],
        analytics: Optional[AnalyticsRecorder] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._providers = list(providers)
        self._analytics = analytics
        self._clock = clock

    @property
    def provider_names(self) -> List[str]:
        return [p.name for p in self._providers]

    async def translate(
        self,
        text: str,
        direction: TranslationDirection,
        context_lines: Sequence[str] = (),
    ) -> TranslationResult:
        """
        Translate ``text`` in ``direction``.

        Raises:
            NoCandidatesError: no provider is configured, or every attempt failed
                or came back empty
        """
        context = list(context_lines)[:CONTEXT_MAX_LINES]

        candidates = await self._collect_candidates(text, direction, context)
        if not candidates:
            raise NoCandidatesError("No translation candidates available")

        selected = select_best_candidate(text, candidates, direction, context)
        tone_adjusted = add_warmth(selected.text, direction.target_locale, context)

        logger.debug(
            f"[Orchestrator] Selected {selected.provider} "
            f"({selected.latency_ms:.0f}ms, {direction.value}) out of {len(candidates)} candidate(s)"
        )
        provider_selections.labels(provider=selected.provider, direction=direction.value).inc()
        await self._record_selection(selected)

        return TranslationResult(
            translated_text=selected.text,
            tone_adjusted_text=tone_adjusted,
            locale=direction.target_locale,
            provider=selected.provider,
        )

    async def _collect_candidates(
        self,
        text: str,
        direction: TranslationDirection,
        context: List[str],
    ) -> List[TranslationCandidate]:
        if not self._providers:
            return []

        # No early exit: scoring compares every surviving candidate.
        attempts = await asyncio.gather(
            *(self._attempt(provider, text, direction, context) for provider in self._providers)
        )
        return [candidate for candidate in attempts if candidate is not None]

    async def _attempt(
        self,
        provider: TranslationProviderProtocol,
        text: str,
        direction: TranslationDirection,
        context: List[str],
    ) -> Optional[TranslationCandidate]:
        start = self._clock()
        try:
            translated = await provider.translate(
                text,
                direction.source_locale,
                direction.target_locale,
                context,
            )
        except ProviderError as e:
            provider_latency.labels(provider=provider.name, status="error").observe(self._clock() - start)
            logger.warning(f"[Orchestrator] {provider.name} translation failed: {e}")
            return None
        except Exception as e:
            provider_latency.labels(provider=provider.name, status="error").observe(self._clock() - start)
            logger.exception(f"[Orchestrator] {provider.name} raised unexpectedly: {e}")
            return None

        elapsed = self._clock() - start
        if not translated or not translated.strip():
            provider_latency.labels(provider=provider.name, status="error").observe(elapsed)
            logger.warning(f"[Orchestrator] {provider.name} returned an empty translation, discarding it")
            return None

        provider_latency.labels(provider=provider.name, status="success").observe(elapsed)
        return TranslationCandidate(
            provider=provider.name,
            text=translated,
            latency_ms=elapsed * 1000,
        )

    async def _record_selection(self, selected: TranslationCandidate):
        if self._analytics is None:
            return
        try:
            await self._analytics.record(selected.provider, selected.latency_ms)
        except AnalyticsRecordingError as e:
            logger.warning(f"[Orchestrator] Failed to record translation analytics: {e}")
        except Exception as e:
            logger.exception(f"[Orchestrator] Unexpected analytics failure: {e}")
