"""Tests for the metrics collector."""

from unittest.mock import MagicMock

from alertlab.observability.metrics import MetricsCollector


class TestMetricsCollector:
    def setup_method(self):
        self.client = MagicMock()
        self.metrics = MetricsCollector(enabled=True, client=self.client)

    def sent(self):
        return [
            call.kwargs["MetricData"][0]
            for call in self.client.put_metric_data.call_args_list
        ]

    def test_disabled_collector_only_logs(self):
        metrics = MetricsCollector(enabled=False, client=self.client)

        metrics.record_cache_access("peanuts", hit=True)

        self.client.put_metric_data.assert_not_called()

    def test_put_metric_publishes_dimensions(self):
        self.metrics.put_metric(
            "CacheHit", 1, unit="Count", dimensions={"Cache": "peanuts"}
        )

        self.client.put_metric_data.assert_called_once()
        kwargs = self.client.put_metric_data.call_args.kwargs
        assert kwargs["Namespace"] == "AlertLab"
        datum = self.sent()[0]
        assert datum["MetricName"] == "CacheHit"
        assert datum["Dimensions"] == [{"Name": "Cache", "Value": "peanuts"}]

    def test_publish_failure_is_logged(self, caplog):
        self.client.put_metric_data.side_effect = RuntimeError("throttled")

        self.metrics.record_payment_outcome(402)

        assert any(
            rec.message == "Publishing metric failed" for rec in caplog.records
        )

    def test_server_error_request_counts_as_error(self):
        self.metrics.record_request("page.error_test", "GET", 500, 12.5)

        assert [d["MetricName"] for d in self.sent()] == [
            "RequestLatency",
            "RequestCount",
            "ErrorCount",
        ]

    def test_client_error_request_is_not_an_error(self):
        self.metrics.record_request("peanuts.create", "POST", 400, 3.0)

        assert "ErrorCount" not in [d["MetricName"] for d in self.sent()]

    def test_cache_error_dimensions(self):
        self.metrics.record_cache_error("peanuts", "get")

        assert self.sent()[0]["Dimensions"] == [
            {"Name": "Cache", "Value": "peanuts"},
            {"Name": "Operation", "Value": "get"},
        ]

    def test_unhealthy_component_reports_zero(self):
        self.metrics.record_health_check("cache", False)

        assert self.sent()[0]["Value"] == 0
