"""
Translation Analytics - provider selection counters.

Every selection is written straight through to the store as a single
atomic upsert; nothing is cached in process, so concurrent writers never
lose updates.

Usage:
    from app.services.analytics import AnalyticsRecorder

    recorder = AnalyticsRecorder(stats_repository)
    await recorder.record("ollama", 42.3)
    summaries = await recorder.list()
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from app.models.database import utcnow
from app.services.exceptions import AnalyticsRecordingError, PersistenceError
from app.services.protocols import AnalyticsStoreProtocol

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ProviderSummary:
    provider: str
    selection_count: int
    average_latency_ms: Optional[int]
    last_selected_at: Optional[datetime]

    def to_dict(self):
        return {
            "provider": self.provider,
            "selection_count": self.selection_count,
            "average_latency_ms": self.average_latency_ms,
            "last_selected_at": self.last_selected_at.isoformat() if self.last_selected_at else None,
        }


class AnalyticsRecorder:
    """Accumulates per-provider selection count and latency."""

    def __init__(self, store: AnalyticsStoreProtocol, clock: Callable[[], datetime] = utcnow):
        self._store = store
        self._clock = clock

    async def record(self, provider: str, latency_ms: float):
        """
        Count one selection of ``provider``.

        Raises:
            AnalyticsRecordingError: the store rejected the update
        """
        safe_latency = round_half_up(max(0.0, latency_ms)) if math.isfinite(latency_ms) else 0
        try:
            await self._store.upsert(provider, 1, safe_latency, self._clock())
        except PersistenceError as e:
            raise AnalyticsRecordingError(f"Could not record selection of {provider}: {e}") from e

    async def list(self) -> List[ProviderSummary]:
        """Provider summaries ordered by provider name."""
        stats = await self._store.list()
        return [
            ProviderSummary(
                provider=stat.provider,
                selection_count=stat.selection_count,
                average_latency_ms=(
                    round_half_up(stat.total_latency_ms / stat.selection_count)
                    if stat.selection_count > 0 else None
                ),
                last_selected_at=stat.last_selected_at,
            )
            for stat in stats
        ]
