"""Configuration management for CPU Metrics Exporter"""
import re
from pathlib import Path
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


METRIC_NAME_PATTERN = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")
# Served by the application itself
RESERVED_PATHS = ("/health", "/status")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config(BaseSettings):
    """Configuration class with Pydantic validation and environment-based settings"""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    # Server settings
    metrics_host: str = Field(default="0.0.0.0", description="Metrics server host")
    metrics_port: int = Field(default=8080, ge=1, le=65535, description="Metrics server port")
    metrics_path: str = Field(default="/metrics", description="Path serving the exposition format")

    # Sampling settings
    cpu_sampling_window: float = Field(default=1.0, gt=0, description="CPU measurement window in seconds")
    collection_interval: float = Field(default=1.0, gt=0, description="Delay between samples in seconds")

    # Published metric
    metric_name: str = Field(default="cpu_usage_percent", description="Name of the CPU gauge")
    metric_help: str = Field(default="Current CPU usage in percent", description="Help text of the CPU gauge")

    # Service settings
    service_name: str = Field(default="cpu-metrics-exporter", description="Service name")
    service_version: str = Field(default="1.0.0", description="Service version")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Log file path (stdout only when unset)")
    enable_request_logging: bool = Field(default=True, description="Enable HTTP request logging")

    @field_validator('metrics_path')
    @classmethod
    def validate_metrics_path(cls, v):
        if not v.startswith('/'):
            raise ValueError("METRICS_PATH must start with '/'")
        if v.rstrip('/') in RESERVED_PATHS:
            raise ValueError(f"METRICS_PATH must not be one of {', '.join(RESERVED_PATHS)}")
        return v

    @field_validator('metric_name')
    @classmethod
    def validate_metric_name(cls, v):
        if not METRIC_NAME_PATTERN.match(v):
            raise ValueError(f"Invalid metric name: {v!r}")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator('log_file')
    @classmethod
    def ensure_log_directory(cls, v):
        """Ensure parent directory exists for the log file"""
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    @property
    def health_max_age(self) -> float:
        """Age after which the last sample is considered stale"""
        return 2 * (self.cpu_sampling_window + self.collection_interval)
