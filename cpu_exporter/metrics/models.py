"""Metric data models"""
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, Optional
from enum import Enum


class MetricType(Enum):
    """Prometheus metric types"""
    COUNTER = "counter"
    GAUGE = "gauge"


def escape_label_value(value: str) -> str:
    return value.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')


def format_value(value: float) -> str:
    """Render a sample value without truncating fractional digits"""
    if value != value:
        return "NaN"
    if value in (float('inf'), float('-inf')):
        return "+Inf" if value > 0 else "-Inf"
    return repr(float(value))


@dataclass
class MetricValue:
    """Represents a single metric value at one instant"""
    name: str
    value: float
    help_text: str
    labels: Dict[str, str] = field(default_factory=dict)
    metric_type: MetricType = MetricType.GAUGE
    timestamp: Optional[float] = None

    def to_prometheus_line(self) -> str:
        """Convert to Prometheus exposition format"""
        labels_str = ""
        if self.labels:
            label_pairs = [f'{k}="{escape_label_value(v)}"' for k, v in self.labels.items()]
            labels_str = "{" + ",".join(label_pairs) + "}"

        return f"{self.name}{labels_str} {format_value(self.value)}"


class Gauge:
    """A value that can go up and down, safe to share between threads.

    The sampler is the only writer; any number of request handlers may read
    concurrently. Every access to the value happens under ``_lock`` so a
    reader sees either the previous or the next write, never a mix.
    """

    metric_type = MetricType.GAUGE

    def __init__(self, name: str, help_text: str, labels: Optional[Dict[str, str]] = None):
        self.name = name
        self.help_text = help_text
        self.labels = dict(labels or {})
        self._lock = threading.Lock()
        self._value = 0.0
        self._updated_at: Optional[float] = None

    def set(self, value: float) -> None:
        value = float(value)
        with self._lock:
            self._value = value
            self._updated_at = time.time()

    def get(self) -> float:
        with self._lock:
            return self._value

    @property
    def updated_at(self) -> Optional[float]:
        """Unix time of the last write, None before the first one"""
        with self._lock:
            return self._updated_at

    def snapshot(self) -> MetricValue:
        """Copy the current state into a MetricValue"""
        with self._lock:
            value, updated_at = self._value, self._updated_at
        return MetricValue(
            name=self.name,
            value=value,
            help_text=self.help_text,
            labels=self.labels.copy(),
            metric_type=self.metric_type,
            timestamp=updated_at
        )

    def __repr__(self):
        return f"Gauge(name={self.name!r}, value={self.get()!r})"
