"""Metrics registry holding the metrics published by the exporter"""
import threading
from typing import Dict, List, Optional
from .models import Gauge, MetricValue
from ..logging_config import get_logger


logger = get_logger(__name__)


class DuplicateMetricError(ValueError):
    """Raised when a metric name is registered twice"""


class MetricsRegistry:
    """Central registry mapping metric names to metrics, at most one per name"""

    def __init__(self):
        self._metrics: Dict[str, Gauge] = {}
        self._lock = threading.Lock()

    def register(self, metric: Gauge) -> Gauge:
        """Register a metric, rejecting duplicate names"""
        with self._lock:
            if metric.name in self._metrics:
                raise DuplicateMetricError(f"Metric already registered: {metric.name}")
            self._metrics[metric.name] = metric
        logger.info("Registered metric", metric=metric.name, metric_type=metric.metric_type.value)
        return metric

    def gauge(self, name: str, help_text: str, labels: Optional[Dict[str, str]] = None) -> Gauge:
        """Create and register a gauge"""
        return self.register(Gauge(name, help_text, labels))

    def get(self, name: str) -> Optional[Gauge]:
        """Get metric by name"""
        with self._lock:
            return self._metrics.get(name)

    def names(self) -> List[str]:
        """List all registered metric names in registration order"""
        with self._lock:
            return list(self._metrics)

    def collect(self) -> List[MetricValue]:
        """Snapshot every registered metric"""
        with self._lock:
            metrics = list(self._metrics.values())
        return [metric.snapshot() for metric in metrics]

    def __len__(self):
        with self._lock:
            return len(self._metrics)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._metrics
