"""Fetch-then-push unit of work for one metric source."""

from __future__ import annotations

from metrics_pusher.fetcher import MetricFetcher
from metrics_pusher.pusher import MetricPusher


class Relay:
    """Composes the fetcher and pusher for a fixed gateway and instance."""

    def __init__(self, fetcher: MetricFetcher, pusher: MetricPusher, gateway_url: str, instance: str) -> None:
        self._fetcher = fetcher
        self._pusher = pusher
        self._gateway_url = gateway_url
        self._instance = instance

    def relay(self, name: str, source_url: str) -> None:
        """Fetch metrics from source_url and push them under name; skip on fetch failure."""
        payload = self._fetcher.fetch(source_url)
        if payload is None:
            return
        self._pusher.push(name, self._gateway_url, self._instance, payload)
