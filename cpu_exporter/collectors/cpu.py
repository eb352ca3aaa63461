"""CPU utilization collector backed by psutil"""
import math
import psutil
from .base import BaseCollector, MeasurementError
from ..logging_config import get_logger

logger = get_logger(__name__)


class CPUCollector(BaseCollector):
    """Aggregate CPU utilization across all cores"""

    def __init__(self):
        super().__init__("cpu", "CPU usage in percent across all cores")

    def measure(self, window: float) -> float:
        """Measure CPU busy time over ``window`` seconds, in percent"""
        if window <= 0:
            raise ValueError(f"Sampling window must be positive, got {window}")

        try:
            # psutil reads the CPU times, sleeps for the window and diffs them
            percent = psutil.cpu_percent(interval=window, percpu=False)
        except (OSError, psutil.Error, NotImplementedError, RuntimeError) as e:
            raise MeasurementError(f"CPU measurement failed: {e}") from e

        try:
            percent = float(percent)
        except (TypeError, ValueError) as e:
            raise MeasurementError(f"CPU measurement returned {percent!r}") from e
        if not math.isfinite(percent):
            raise MeasurementError(f"CPU measurement returned {percent!r}")

        logger.debug("Measured CPU usage", percent=percent, window_seconds=window)
        return percent
