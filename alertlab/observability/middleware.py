"""Per-request logging and metrics hooks."""

import logging
import time
import uuid

from flask import g, request

from alertlab.observability.metrics import metrics_collector

logger = logging.getLogger(__name__)

# Liveness probes hit these every few seconds, keep them out of the logs.
QUIET_PATHS = ("/up", "/up/")


class ObservabilityMiddleware:
    """Track latency, status and failures of every request."""

    def __init__(self, app=None, metrics=None):
        self.metrics = metrics or metrics_collector
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.before_request(self.before_request)
        app.after_request(self.after_request)
        app.teardown_request(self.teardown_request)
        app.extensions["observability"] = self

    @staticmethod
    def _context():
        return {
            "request_id": getattr(g, "request_id", "unknown"),
            "method": request.method,
            "path": request.path,
            "endpoint": request.endpoint,
        }

    @staticmethod
    def _elapsed_ms():
        if not hasattr(g, "start_time"):
            return 0.0
        return (time.perf_counter() - g.start_time) * 1000

    def before_request(self):
        g.start_time = time.perf_counter()
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex

        if request.path not in QUIET_PATHS:
            logger.debug(
                "Request started",
                extra={
                    **self._context(),
                    "remote_addr": request.remote_addr,
                    "user_agent": request.headers.get("User-Agent", "unknown"),
                },
            )

    def after_request(self, response):
        """
        Log the completed request and stamp tracing headers on the response.

        Args:
            response: Flask response object

        Returns:
            Flask response object
        """
        if not hasattr(g, "start_time"):
            return response

        latency_ms = self._elapsed_ms()

        if request.path not in QUIET_PATHS:
            logger.info(
                "Request completed",
                extra={
                    **self._context(),
                    "status_code": response.status_code,
                    "latency_ms": round(latency_ms, 2),
                    "content_length": response.content_length,
                },
            )

        self.metrics.record_request(
            endpoint=request.endpoint or request.path,
            method=request.method,
            status_code=response.status_code,
            latency_ms=latency_ms,
        )

        response.headers["X-Request-ID"] = g.request_id
        response.headers["X-Response-Time"] = str(round(latency_ms, 2))

        return response

    def teardown_request(self, exception=None):
        """
        Log any exception that escaped the view.

        Args:
            exception: Exception that occurred (if any)
        """
        if exception is None:
            return

        # The 500 response itself was already counted in after_request.
        logger.error(
            "Request failed with exception",
            extra={
                **self._context(),
                "exception": str(exception),
                "exception_type": type(exception).__name__,
                "latency_ms": round(self._elapsed_ms(), 2),
            },
            exc_info=exception,
        )
