"""Shared test fixtures"""
import threading
import pytest

from cpu_exporter.collectors.base import BaseCollector


class ScriptedCollector(BaseCollector):
    """Collector returning a fixed script of readings.

    Exception instances in the script are raised instead of returned. Once
    the script runs out the last reading repeats.
    """

    def __init__(self, readings):
        super().__init__("scripted", "Scripted readings for tests")
        self.readings = list(readings)
        self.calls = 0
        self.windows = []
        self.cleaned_up = False
        self._lock = threading.Lock()

    def measure(self, window):
        with self._lock:
            index = min(self.calls, len(self.readings) - 1)
            self.calls += 1
            self.windows.append(window)
        reading = self.readings[index]
        if isinstance(reading, Exception):
            raise reading
        return reading

    def cleanup(self):
        self.cleaned_up = True


@pytest.fixture
def scripted_collector():
    return ScriptedCollector
