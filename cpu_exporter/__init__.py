"""CPU Metrics Exporter: samples CPU utilization and serves it in Prometheus format"""

__version__ = "1.0.0"
