"""Base collector class and interfaces"""
from abc import ABC, abstractmethod


class MeasurementError(Exception):
    """Raised when a collector cannot produce a reading"""


class BaseCollector(ABC):
    """Base class for measurement sources feeding the sampler"""

    def __init__(self, name: str = "", help_text: str = ""):
        self._name = name
        self._help_text = help_text

    @abstractmethod
    def measure(self, window: float) -> float:
        """Block for ``window`` seconds and return the measured value.

        Raises MeasurementError when no reading can be taken.
        """

    @property
    def name(self) -> str:
        """Collector name for identification"""
        return self._name

    @property
    def help_text(self) -> str:
        """Help text describing what this collector does"""
        return self._help_text or f"{self.name} metrics collector"

    def cleanup(self):
        """Cleanup resources"""
