"""Prometheus text exposition format exporter"""
from typing import Dict, List
from ..models import MetricValue


CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


def escape_help(text: str) -> str:
    return text.replace('\\', '\\\\').replace('\n', '\\n')


class PrometheusExporter:
    """Render metric snapshots in Prometheus format"""

    content_type = CONTENT_TYPE

    def render(self, metrics: List[MetricValue]) -> str:
        """Generate Prometheus exposition format output.

        Each metric name gets its HELP and TYPE comments followed by its
        sample lines, and every line is newline-terminated.
        """
        lines = []

        for metric_name, metric_list in self._group_metrics_by_name(metrics).items():
            # HELP and TYPE come from the first sample with this name
            lines.append(f"# HELP {metric_name} {escape_help(metric_list[0].help_text)}")
            lines.append(f"# TYPE {metric_name} {metric_list[0].metric_type.value}")

            for metric in metric_list:
                lines.append(metric.to_prometheus_line())

        return "".join(line + "\n" for line in lines)

    def _group_metrics_by_name(self, metrics: List[MetricValue]) -> Dict[str, List[MetricValue]]:
        """Group metrics by name, preserving order"""
        grouped = {}
        for metric in metrics:
            grouped.setdefault(metric.name, []).append(metric)
        return grouped
