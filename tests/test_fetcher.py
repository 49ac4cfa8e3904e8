"""Tests for MetricFetcher."""
from unittest.mock import MagicMock

import requests

from metrics_pusher.fetcher import MetricFetcher


class TestMetricFetcher:
    """Tests for MetricFetcher.fetch."""

    def test_returns_body(self, logger, make_response):
        """Test: successful GET returns raw bytes and releases the response."""
        response = make_response(b"up 1\n")
        session = MagicMock()
        session.get.return_value = response

        body = MetricFetcher(session, logger).fetch("http://localhost:9100/metrics")

        assert body == b"up 1\n"
        session.get.assert_called_once_with("http://localhost:9100/metrics", timeout=None)
        response.__exit__.assert_called_once()

    def test_transport_error_returns_none(self, logger):
        """Test: connection failure is logged and reported as None."""
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")

        body = MetricFetcher(session, logger).fetch("http://localhost:9100/metrics")

        assert body is None
        logger.error.assert_called_once()
        assert logger.error.call_args.kwargs["url"] == "http://localhost:9100/metrics"

    def test_http_error_returns_none(self, logger, make_response):
        """Test: non-2xx status counts as a failed read."""
        response = make_response(b"oops", raise_exc=requests.HTTPError("500 Server Error"))
        session = MagicMock()
        session.get.return_value = response

        body = MetricFetcher(session, logger).fetch("http://localhost:9100/metrics")

        assert body is None
        response.__exit__.assert_called_once()
        logger.error.assert_called_once()

    def test_timeout_is_forwarded(self, logger, make_response):
        """Test: configured timeout reaches the session."""
        session = MagicMock()
        session.get.return_value = make_response(b"")

        MetricFetcher(session, logger, timeout=2.5).fetch("http://h:1/metrics")

        assert session.get.call_args.kwargs["timeout"] == 2.5
