"""Background sampler publishing CPU readings into a gauge"""
import asyncio
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional
from ..collectors.base import BaseCollector
from ..metrics.models import Gauge
from ..logging_config import get_logger, log_sample, log_error


logger = get_logger(__name__)


class CPUSampler:
    """Periodically measure through a collector and write the result to a gauge.

    Each cycle blocks for ``window`` seconds inside the collector (on a
    worker thread, so the event loop keeps serving requests), publishes the
    reading, then waits ``interval`` seconds. A failed measurement stops the
    loop for good: the gauge keeps its last good value and ``failed`` is set
    so health checks can report it.
    """

    def __init__(self, collector: BaseCollector, gauge: Gauge, window: float = 1.0, interval: float = 1.0):
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self.collector = collector
        self.gauge = gauge
        self.window = window
        self.interval = interval

        self.sample_count = 0
        self.last_sample_time: Optional[float] = None
        self.last_error: Optional[str] = None
        self.failed = False

        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Spawn the sampling loop on the running event loop"""
        if self.running:
            raise RuntimeError("Sampler is already running")

        self._stop_event = asyncio.Event()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"{self.collector.name}_sampler")
        self._task = asyncio.create_task(self._run(), name=f"{self.gauge.name}-sampler")
        logger.info(
            "Sampler started",
            metric=self.gauge.name,
            window_seconds=self.window,
            interval_seconds=self.interval,
            event_type="sampler_start"
        )
        return self._task

    async def stop(self) -> None:
        """Signal the loop to stop and wait for it"""
        if self._stop_event is not None:
            self._stop_event.set()

        if self._task is not None and not self._task.done():
            # Interrupt an in-flight measurement rather than waiting out the window
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None
            logger.info("Sampler stopped", metric=self.gauge.name, samples=self.sample_count, event_type="sampler_stop")

    async def wait_stopped(self) -> None:
        """Wait until the loop exits on its own"""
        if self._task is not None:
            await asyncio.shield(self._task)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()

        while not self._stop_event.is_set():
            start_time = time.time()
            try:
                value = await loop.run_in_executor(self._executor, self.collector.measure, self.window)
                # A reading the gauge cannot store fails the cycle like a measurement error
                self.gauge.set(value)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self.failed = True
                self.last_error = f"{type(e).__name__}: {e}"
                log_error(logger, e, {
                    "component": "sampler",
                    "metric": self.gauge.name,
                    "samples": self.sample_count,
                    "last_value": self.gauge.get()
                })
                logger.error(
                    "Sampling stopped, metric value is frozen",
                    metric=self.gauge.name,
                    event_type="sampler_failed"
                )
                return

            self.sample_count += 1
            self.last_sample_time = time.time()
            log_sample(logger, self.gauge.name, value, self.last_sample_time - start_time)

            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass

    def status(self) -> Dict[str, Any]:
        return {
            "running": self.running,
            "failed": self.failed,
            "last_error": self.last_error,
            "sample_count": self.sample_count,
            "last_sample_time": self.last_sample_time,
            "window_seconds": self.window,
            "interval_seconds": self.interval
        }
