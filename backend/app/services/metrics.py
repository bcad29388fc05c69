"""Prometheus metrics instrumentation for the translation core.

Exposes metrics for monitoring provider latency, provider selection, and
voice pipeline outcomes. Metrics are exposed via HTTP on port 8001
(configurable) when METRICS_ENABLED is set.

Metrics exported:
- translation_provider_latency_seconds: Histogram of provider attempt time
- translation_provider_selections_total: Counter of selected providers
- voice_pipeline_outcomes_total: Counter of finished voice pipelines

Usage:
    from app.services.metrics import start_metrics_server, provider_selections

    start_metrics_server(port=8001)
    provider_selections.labels(provider='ollama', direction='en-to-fa').inc()
"""

from prometheus_client import Histogram, Counter, start_http_server
import logging

from app.config.constants import METRICS_SERVER_PORT

logger = logging.getLogger(__name__)

# Latency per provider attempt
provider_latency = Histogram(
    'translation_provider_latency_seconds',
    'Time spent in each translation provider attempt',
    labelnames=['provider', 'status']  # status: success, error
)

# Winning provider per direction
provider_selections = Counter(
    'translation_provider_selections_total',
    'Number of times a provider was selected',
    labelnames=['provider', 'direction']
)

# Voice pipeline terminal states
voice_pipeline_outcomes = Counter(
    'voice_pipeline_outcomes_total',
    'Voice messages processed by the background pipeline',
    labelnames=['outcome']  # translated, transcription_skipped, translation_failed, persistence_failed
)


def start_metrics_server(port: int = METRICS_SERVER_PORT):
    """Start Prometheus metrics HTTP server."""
    try:
        start_http_server(port)
        logger.info(f"✅ Metrics server started on port {port}")
    except Exception as e:
        logger.error(f"❌ Failed to start metrics server: {e}")
