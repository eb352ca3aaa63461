"""Tests for collector modules"""
from unittest.mock import patch
import psutil
import pytest

from cpu_exporter.collectors.base import BaseCollector, MeasurementError
from cpu_exporter.collectors.cpu import CPUCollector


class TestBaseCollector:
    """Test base collector functionality"""

    def test_collector_is_abstract(self):
        with pytest.raises(TypeError):
            BaseCollector("abstract")

    def test_default_help_text(self, scripted_collector):
        collector = scripted_collector([1.0])
        collector._help_text = ""

        assert collector.help_text == "scripted metrics collector"


class TestCPUCollector:
    """Test the psutil-backed CPU collector"""

    def setup_method(self):
        self.collector = CPUCollector()

    def test_collector_initialization(self):
        assert self.collector.name == "cpu"
        assert "cpu" in self.collector.help_text.lower()

    @patch('psutil.cpu_percent')
    def test_measure_uses_windowed_aggregate(self, mock_cpu_percent):
        mock_cpu_percent.return_value = 21.53846153846647

        assert self.collector.measure(1.0) == 21.53846153846647
        mock_cpu_percent.assert_called_once_with(interval=1.0, percpu=False)

    @patch('psutil.cpu_percent')
    @pytest.mark.parametrize("reading", [0.0, 100.0])
    def test_measure_boundaries(self, mock_cpu_percent, reading):
        mock_cpu_percent.return_value = reading

        assert self.collector.measure(0.1) == reading

    @patch('psutil.cpu_percent')
    @pytest.mark.parametrize("error", [
        PermissionError("permission denied"),
        NotImplementedError("unsupported platform"),
        psutil.AccessDenied(),
    ])
    def test_measure_failure_raises_measurement_error(self, mock_cpu_percent, error):
        mock_cpu_percent.side_effect = error

        with pytest.raises(MeasurementError) as exc_info:
            self.collector.measure(1.0)

        assert exc_info.value.__cause__ is error

    @patch('psutil.cpu_percent')
    def test_measure_rejects_non_finite(self, mock_cpu_percent):
        mock_cpu_percent.return_value = float("nan")

        with pytest.raises(MeasurementError):
            self.collector.measure(1.0)

    @pytest.mark.parametrize("window", [0, -1.0])
    def test_measure_rejects_non_positive_window(self, window):
        with pytest.raises(ValueError):
            self.collector.measure(window)

    def test_measure_real_cpu(self):
        percent = self.collector.measure(0.05)

        assert 0.0 <= percent <= 100.0
