"""Prometheus metrics collection for application monitoring."""

import logging
import threading
from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

from pulse.errors import DuplicateMetric, UnknownMetric

logger = logging.getLogger(__name__)

HTTP_REQUESTS_TOTAL = "http_requests_total"
HTTP_REQUEST_DURATION = "http_request_duration_seconds"
APP_ERRORS_TOTAL = "app_errors_total"

# Bucket layout commonly used by RED / Apdex dashboards.
DURATION_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10)


class MetricsCollector:
    """Owns a Prometheus registry and the counters/histograms in it."""

    def __init__(self, registry=None, process_collectors=False):
        """
        Initialize the metrics collector.

        Args:
            registry: CollectorRegistry to use (a private one by default)
            process_collectors: Also export process, platform and GC metrics
        """
        self.registry = registry or CollectorRegistry()
        self.content_type = CONTENT_TYPE_LATEST
        self._metrics = {}
        self._lock = threading.Lock()

        if process_collectors:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)
            GCCollector(registry=self.registry)

    def register_counter(self, name: str, documentation: str, labelnames=()):
        """
        Declare a counter.

        Args:
            name: Metric name, e.g. http_requests_total
            documentation: HELP text
            labelnames: Label names every increment must supply

        Raises:
            DuplicateMetric: name is already registered
        """
        return self._register(
            name,
            lambda: Counter(
                name,
                documentation,
                labelnames=tuple(labelnames),
                registry=self.registry,
            ),
        )

    def register_histogram(
        self,
        name: str,
        documentation: str,
        labelnames=(),
        buckets=DURATION_BUCKETS,
    ):
        """
        Declare a histogram with fixed, ascending bucket upper bounds.

        Raises:
            DuplicateMetric: name is already registered
        """
        return self._register(
            name,
            lambda: Histogram(
                name,
                documentation,
                labelnames=tuple(labelnames),
                buckets=buckets,
                registry=self.registry,
            ),
        )

    def _register(self, name, factory):
        with self._lock:
            if name in self._metrics:
                raise DuplicateMetric(f"metric {name!r} is already registered")
            try:
                metric = factory()
            except ValueError as e:
                # prometheus_client maps jobs and jobs_total onto one family.
                if "Duplicated timeseries" not in str(e):
                    raise
                raise DuplicateMetric(
                    f"metric {name!r} collides with a registered metric"
                ) from e
            self._metrics[name] = metric

        logger.debug("Registered metric", extra={"metric_name": name})
        return metric

    def _lookup(self, name, kind):
        metric = self._metrics.get(name)
        if not isinstance(metric, kind):
            raise UnknownMetric(
                f"no {kind.__name__.lower()} registered as {name!r}"
            )
        return metric

    @staticmethod
    def _child(metric, labels):
        return metric.labels(**labels) if labels else metric

    def increment(self, name: str, labels: Optional[dict] = None):
        """
        Add 1 to a counter series, creating the label combination lazily.

        Args:
            name: Registered counter name
            labels: Mapping of label name to value
        """
        counter = self._lookup(name, Counter)
        self._child(counter, labels).inc()

    def observe_duration(
        self, name: str, seconds: float, labels: Optional[dict] = None
    ):
        """
        Record one observation into a histogram series.

        Args:
            name: Registered histogram name
            seconds: Observed value
            labels: Mapping of label name to value
        """
        histogram = self._lookup(name, Histogram)
        self._child(histogram, labels).observe(seconds)

    def sample_value(self, name: str, labels: Optional[dict] = None):
        """Return one exported sample value, or None if it doesn't exist."""
        return self.registry.get_sample_value(name, labels or {})

    def export(self) -> bytes:
        """Render every registered series in the text exposition format."""
        return generate_latest(self.registry)

    def record_request(
        self,
        method: str,
        route: str,
        status_code: int,
        latency_seconds: float,
    ):
        """
        Record metrics for an HTTP request.

        Args:
            method: HTTP method
            route: Matched URL rule
            status_code: HTTP status code
            latency_seconds: Request latency in seconds
        """
        status = str(status_code)

        self.increment(
            HTTP_REQUESTS_TOTAL, {"method": method, "status": status}
        )
        self.observe_duration(
            HTTP_REQUEST_DURATION,
            latency_seconds,
            {"method": method, "route": route, "code": status},
        )

    def record_error(self, error_type: str):
        """
        Count a simulated failure.

        Args:
            error_type: "random" or "500"
        """
        self.increment(APP_ERRORS_TOTAL, {"type": error_type})


def register_default_metrics(collector):
    """
    Declare the series every request and fault endpoint writes to.

    Args:
        collector: MetricsCollector instance

    Returns:
        The same collector
    """
    collector.register_counter(
        HTTP_REQUESTS_TOTAL,
        "Total HTTP requests",
        labelnames=("method", "status"),
    )
    collector.register_histogram(
        HTTP_REQUEST_DURATION,
        "Duration of HTTP requests in seconds",
        labelnames=("method", "route", "code"),
        buckets=DURATION_BUCKETS,
    )
    collector.register_counter(
        APP_ERRORS_TOTAL, "Total errors", labelnames=("type",)
    )

    return collector
