import asyncio
import math
from datetime import datetime

import pytest
from unittest.mock import AsyncMock

from app.services.analytics import AnalyticsRecorder, round_half_up
from app.services.exceptions import AnalyticsRecordingError, PersistenceError


async def test_record_then_list(stats_repository):
    recorder = AnalyticsRecorder(stats_repository)

    await recorder.record("ollama", 42)
    summaries = await recorder.list()
    assert len(summaries) == 1
    assert summaries[0].provider == "ollama"
    assert summaries[0].selection_count == 1
    assert summaries[0].average_latency_ms == 42

    await recorder.record("ollama", 58)
    summary = (await recorder.list())[0]
    assert summary.selection_count == 2
    assert summary.average_latency_ms == 50


async def test_concurrent_records_are_additive(stats_repository):
    recorder = AnalyticsRecorder(stats_repository)
    latencies = [10, 20, 30, 40, 50, 61, 70, 80]

    await asyncio.gather(*(recorder.record("google", latency) for latency in latencies))

    summary = (await recorder.list())[0]
    assert summary.selection_count == len(latencies)
    assert summary.average_latency_ms == round_half_up(sum(latencies) / len(latencies))


async def test_list_is_ordered_by_provider(stats_repository):
    recorder = AnalyticsRecorder(stats_repository)
    await recorder.record("ollama", 5)
    await recorder.record("google", 7)

    assert [s.provider for s in await recorder.list()] == ["google", "ollama"]


async def test_last_selected_at_follows_clock(stats_repository):
    stamps = iter([datetime(2024, 1, 1, 12, 0), datetime(2024, 1, 1, 12, 5)])
    recorder = AnalyticsRecorder(stats_repository, clock=lambda: next(stamps))

    await recorder.record("ollama", 1)
    await recorder.record("ollama", 1)

    summary = (await recorder.list())[0]
    assert summary.last_selected_at == datetime(2024, 1, 1, 12, 5)
    assert summary.to_dict()["last_selected_at"] == "2024-01-01T12:05:00"


async def test_latency_is_sanitized_before_storing():
    store = AsyncMock()
    recorder = AnalyticsRecorder(store)

    await recorder.record("ollama", -12)
    await recorder.record("ollama", math.nan)
    await recorder.record("ollama", 12.5)

    stored = [call.args[2] for call in store.upsert.await_args_list]
    assert stored == [0, 0, 13]


async def test_store_failure_raises_recording_error():
    store = AsyncMock()
    store.upsert.side_effect = PersistenceError("db down")
    recorder = AnalyticsRecorder(store)

    with pytest.raises(AnalyticsRecordingError):
        await recorder.record("ollama", 10)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(49.5) == 50
    assert round_half_up(49.49) == 49
