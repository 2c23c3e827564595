"""
Prometheus metrics collection.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from workpoll.constants import (
    METRIC_API_LATENCY,
    METRIC_API_REQUESTS,
    METRIC_WORK_DURATION,
    METRIC_WORK_ITEMS,
    METRIC_WORK_POLLS,
    METRIC_WORK_SUBMITTED,
)

# Global metrics instance
_metrics: "MetricsCollector | None" = None


class MetricsCollector:
    """
    Prometheus metrics collector for the work polling service.

    Collects metrics for:
    - Work submissions and assigned durations
    - Polls by outcome
    - Tracked work items
    - API requests
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize the metrics collector.

        Args:
            registry: Optional custom registry. Uses default if not provided.
        """
        self._registry = registry or REGISTRY

        self.work_submitted = Counter(
            METRIC_WORK_SUBMITTED,
            "Total number of work items submitted",
            registry=self._registry,
        )

        self.work_polls = Counter(
            METRIC_WORK_POLLS,
            "Total number of work polls",
            ["outcome"],
            registry=self._registry,
        )

        self.work_items = Gauge(
            METRIC_WORK_ITEMS,
            "Number of work items held by the registry",
            registry=self._registry,
        )

        self.work_duration = Histogram(
            METRIC_WORK_DURATION,
            "Duration assigned to submitted work in seconds",
            buckets=(1.0, 2.5, 5.0, 10.0, 15.0, 20.0, 30.0),
            registry=self._registry,
        )

        self.api_requests = Counter(
            METRIC_API_REQUESTS,
            "Total number of API requests",
            ["method", "endpoint", "status"],
            registry=self._registry,
        )

        self.api_latency = Histogram(
            METRIC_API_LATENCY,
            "API request latency in seconds",
            ["method", "endpoint"],
            buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
            registry=self._registry,
        )

    def record_work_submitted(self, duration_seconds: float, tracked: int) -> None:
        """Record a work submission."""
        self.work_submitted.inc()
        self.work_duration.observe(duration_seconds)
        self.work_items.set(tracked)

    def record_work_poll(self, outcome: str) -> None:
        """Record a poll and its outcome."""
        self.work_polls.labels(outcome=outcome).inc()

    def record_api_request(
        self,
        method: str,
        endpoint: str,
        status: int,
        duration_seconds: float,
    ) -> None:
        """Record an API request."""
        self.api_requests.labels(
            method=method,
            endpoint=endpoint,
            status=str(status),
        ).inc()
        self.api_latency.labels(method=method, endpoint=endpoint).observe(
            duration_seconds
        )

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format."""
        return generate_latest(self._registry)

    def get_content_type(self) -> str:
        """Get the content type for metrics response."""
        return CONTENT_TYPE_LATEST


def setup_metrics() -> MetricsCollector:
    """
    Set up and return the metrics collector.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def get_metrics() -> MetricsCollector:
    """
    Get the metrics collector instance, creating it on first use.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    if _metrics is None:
        return setup_metrics()
    return _metrics
