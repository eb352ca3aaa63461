"""Tests for logging configuration"""
import tempfile
import os
import logging
from pathlib import Path
from unittest.mock import patch

from cpu_exporter.config import Config
from cpu_exporter.logging_config import (
    setup_structured_logging,
    get_logger,
    log_sample,
    log_server_startup,
    log_error
)


class TestLoggingConfig:
    """Test logging configuration and structured logging"""

    def teardown_method(self):
        logging.getLogger().handlers.clear()

    def test_setup_structured_logging(self):
        """Test structured logging setup"""
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_file = Path(tmp_dir) / "logs" / "test.log"
            config = Config(log_file=log_file, log_level="DEBUG")

            setup_structured_logging(config)

            assert log_file.parent.exists()
            logger = logging.getLogger("test")
            assert logger.isEnabledFor(logging.DEBUG)

            get_logger("test").info("written to file")
            for handler in logging.getLogger().handlers:
                handler.flush()
            assert "written to file" in log_file.read_text()

            for handler in logging.getLogger().handlers:
                handler.close()

    def test_setup_without_log_file(self):
        config = Config(log_file=None, log_level="WARNING")

        setup_structured_logging(config)

        handlers = logging.getLogger().handlers
        assert not any(isinstance(h, logging.FileHandler) for h in handlers)
        assert not logging.getLogger("test").isEnabledFor(logging.INFO)

    def test_get_logger(self):
        """Test getting structured logger"""
        logger = get_logger("test_logger")

        assert logger is not None
        assert hasattr(logger, 'info')
        assert hasattr(logger, 'error')
        assert hasattr(logger, 'debug')
        assert hasattr(logger, 'warning')

    def test_log_sample(self):
        logger = get_logger("test")

        # This should not raise an exception
        log_sample(logger, "cpu_usage_percent", 21.5, 1.002)

    def test_log_server_startup(self):
        logger = get_logger("test")

        log_server_startup(logger, Config())

    def test_log_error(self):
        logger = get_logger("test")
        error = ValueError("Test error")
        context = {"component": "test", "metric": "cpu_usage_percent"}

        log_error(logger, error, context)
        log_error(logger, error)  # Without context

    def test_development_vs_production_logging(self):
        """Test different logging configurations for development vs production"""
        config = Config()

        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            setup_structured_logging(config)
            get_logger("test").info("Test development log")

        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            setup_structured_logging(config)
            get_logger("test").info("Test production log")
