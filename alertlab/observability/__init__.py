"""Observability module for logging, metrics and request tracing."""

from alertlab.observability.logging_config import setup_logging
from alertlab.observability.metrics import MetricsCollector, metrics_collector
from alertlab.observability.middleware import ObservabilityMiddleware

__all__ = [
    "setup_logging",
    "MetricsCollector",
    "metrics_collector",
    "ObservabilityMiddleware",
]
