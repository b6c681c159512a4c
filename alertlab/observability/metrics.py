"""Service metrics, always logged and optionally pushed to CloudWatch.

Set ``ENABLE_CLOUDWATCH_METRICS=true`` to publish through ``put_metric_data``
in the ``AlertLab`` namespace; otherwise every data point is only written to
the debug log.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


def _cloudwatch_enabled():
    return os.getenv("ENABLE_CLOUDWATCH_METRICS", "false").lower() == "true"


class MetricsCollector:
    def __init__(self, namespace="AlertLab", enabled=None, client=None):
        self.namespace = namespace
        self.enabled = _cloudwatch_enabled() if enabled is None else enabled
        self.client = client

        if self.enabled and self.client is None:
            try:
                import boto3

                self.client = boto3.client(
                    "cloudwatch",
                    region_name=os.getenv("AWS_REGION", "us-east-1"),
                )
            except Exception as e:
                logger.error(
                    "CloudWatch client unavailable, metrics stay local",
                    extra={"error": str(e)},
                )
                self.enabled = False

        logger.info(
            "Metrics collector ready",
            extra={"namespace": self.namespace, "cloudwatch": self.enabled},
        )

    def put_metric(
        self,
        metric_name: str,
        value: float,
        unit: str = "None",
        dimensions: Optional[dict] = None,
    ):
        """Log one data point and publish it when CloudWatch is enabled.

        Publishing errors are logged, a metric never fails a request.
        """
        dimensions = dimensions or {}
        logger.debug(
            f"Metric: {metric_name}",
            extra={
                "metric_name": metric_name,
                "value": value,
                "unit": unit,
                "dimensions": dimensions,
            },
        )

        if not (self.enabled and self.client):
            return

        datum = {
            "MetricName": metric_name,
            "Value": value,
            "Unit": unit,
            "Timestamp": datetime.now(timezone.utc),
        }
        if dimensions:
            datum["Dimensions"] = [
                {"Name": name, "Value": str(dim)}
                for name, dim in dimensions.items()
            ]

        try:
            self.client.put_metric_data(
                Namespace=self.namespace, MetricData=[datum]
            )
        except Exception as e:
            logger.error(
                "Publishing metric failed",
                extra={"metric_name": metric_name, "error": str(e)},
            )

    def _count(self, metric_name, **dimensions):
        self.put_metric(metric_name, 1, unit="Count", dimensions=dimensions)

    def record_request(
        self,
        endpoint: str,
        method: str,
        status_code: int,
        latency_ms: float,
    ):
        """Latency and count per endpoint, plus ErrorCount for 5xx."""
        dimensions = {
            "Endpoint": endpoint,
            "Method": method,
            "StatusCode": str(status_code),
        }
        self.put_metric(
            "RequestLatency",
            latency_ms,
            unit="Milliseconds",
            dimensions=dimensions,
        )
        self._count("RequestCount", **dimensions)
        if status_code >= 500:
            self._count("ErrorCount", **dimensions)

    def record_dependency_call(
        self, dependency: str, latency_ms: float, success: bool
    ):
        # dependency is "database", "cache" or a chained service URL
        dimensions = {"Dependency": dependency, "Success": str(success)}
        self.put_metric(
            "DependencyLatency",
            latency_ms,
            unit="Milliseconds",
            dimensions=dimensions,
        )
        if not success:
            self._count("DependencyError", **dimensions)

    def record_cache_access(self, cache: str, hit: bool):
        self._count("CacheHit" if hit else "CacheMiss", Cache=cache)

    def record_cache_error(self, cache: str, operation: str):
        self._count("CacheError", Cache=cache, Operation=operation)

    def record_payment_outcome(self, status_code: int):
        self._count("PaymentOutcome", StatusCode=str(status_code))

    def record_health_check(self, component: str, healthy: bool):
        """HealthStatus is 1 for a healthy component and 0 otherwise."""
        self.put_metric(
            "HealthStatus",
            1 if healthy else 0,
            unit="Count",
            dimensions={"Component": component},
        )


metrics_collector = MetricsCollector()
