"""Metric fetcher for scrape endpoints."""

from __future__ import annotations

from typing import Optional

import requests


class MetricFetcher:
    """
    Retrieves raw metric payloads from source endpoints.

    A single blocking GET per call, no retry. Failures are logged and
    reported as None so the caller can skip the cycle.
    """

    def __init__(self, session: requests.Session, logger, timeout: float | None = None) -> None:
        """Initialize with a shared HTTP session and logger."""
        self._session = session
        self._logger = logger
        self._timeout = timeout

    def fetch(self, url: str) -> Optional[bytes]:
        """Return the response body for url, or None on failure."""
        self._logger.info("Getting metrics", url=url)
        try:
            with self._session.get(url, timeout=self._timeout) as response:
                response.raise_for_status()
                return response.content
        except requests.RequestException as exc:
            self._logger.error("Metric fetch failed", url=url, error=str(exc))
            return None
