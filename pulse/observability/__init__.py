"""Observability module for logging, metrics and the request tap."""

from pulse.observability.logging_config import setup_logging
from pulse.observability.metrics import MetricsCollector, register_default_metrics
from pulse.observability.middleware import ObservabilityMiddleware

__all__ = [
    "setup_logging",
    "MetricsCollector",
    "register_default_metrics",
    "ObservabilityMiddleware",
]
