"""FastAPI server setup and routes"""
import os
import time
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Response, HTTPException
from ..config import Config
from ..collectors.base import BaseCollector
from ..collectors.cpu import CPUCollector
from ..metrics.registry import MetricsRegistry
from ..metrics.exporters.prometheus import PrometheusExporter
from ..middleware.security import SecurityHeadersMiddleware, RequestLoggingMiddleware
from ..logging_config import get_logger
from .sampler import CPUSampler


logger = get_logger(__name__)


class MetricsServer:
    """FastAPI server exposing the CPU gauge"""

    def __init__(self, config: Config, collector: Optional[BaseCollector] = None):
        self.config = config
        self.app = FastAPI(
            title="CPU Metrics Exporter",
            version=config.service_version,
            docs_url=None,
            redoc_url=None,
            openapi_url=None,
            lifespan=self._lifespan
        )
        self.app.state.start_time = time.time()

        self.registry = MetricsRegistry()
        self.cpu_gauge = self.registry.gauge(config.metric_name, config.metric_help)
        self.exporter = PrometheusExporter()

        self.collector = collector or CPUCollector()
        self.sampler = CPUSampler(
            self.collector,
            self.cpu_gauge,
            window=config.cpu_sampling_window,
            interval=config.collection_interval
        )

        self._setup_middleware()
        self._setup_routes()

    def _setup_middleware(self):
        """Setup middleware (last added is executed first)"""
        if self.config.enable_request_logging:
            self.app.add_middleware(RequestLoggingMiddleware)

        self.app.add_middleware(SecurityHeadersMiddleware)

    def _setup_routes(self):
        """Setup FastAPI routes"""

        # Plain def routes run in the threadpool, so scrapes never wait on the event loop
        @self.app.get(self.config.metrics_path, response_class=Response)
        def get_metrics():
            """Serve metrics in Prometheus format"""
            content = self.exporter.render(self.registry.collect())
            return Response(content, media_type=self.exporter.content_type)

        @self.app.get('/health')
        def health_check():
            """Health check endpoint"""
            health_data = self._health_data()
            if health_data["status"] != "healthy":
                raise HTTPException(status_code=503, detail=health_data)
            return health_data

        @self.app.get('/status')
        def get_status():
            """Detailed status information"""
            return {
                "service": {
                    "name": self.config.service_name,
                    "version": self.config.service_version,
                    "uptime_seconds": round(time.time() - self.app.state.start_time, 1),
                    "hostname": os.uname().nodename
                },
                "sampler": self.sampler.status(),
                "metrics": self.registry.names()
            }

    def _health_data(self):
        last_sample_time = self.sampler.last_sample_time
        age = time.time() - last_sample_time if last_sample_time is not None else None

        if self.sampler.failed or not self.sampler.running:
            is_healthy = False
        else:
            # Still waiting for the first sample counts as healthy
            is_healthy = age is None or age < self.config.health_max_age

        return {
            "status": "healthy" if is_healthy else "unhealthy",
            "sampler_running": self.sampler.running,
            "sampler_failed": self.sampler.failed,
            "last_error": self.sampler.last_error,
            "last_sample_seconds_ago": round(age, 1) if age is not None else None,
            "total_samples": self.sampler.sample_count
        }

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Start the sampler with the application and stop it on shutdown"""
        logger.info(
            "Application startup initiated",
            service_name=self.config.service_name,
            metric=self.cpu_gauge.name,
            event_type="server_startup"
        )
        self.sampler.start()
        try:
            yield
        finally:
            logger.info("Shutting down metrics exporter", event_type="server_shutdown")
            await self.sampler.stop()
            self.collector.cleanup()

    def get_app(self) -> FastAPI:
        """Get the FastAPI application"""
        return self.app
