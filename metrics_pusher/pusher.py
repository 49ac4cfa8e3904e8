"""Metric pusher for the push gateway."""

from __future__ import annotations

from urllib.parse import quote

import requests

from metrics_pusher.errors import LabelError

CONTENT_TYPE = "text/plain"


def encode_label(value: str) -> str:
    """Percent-encode a label value so it stays a single path segment."""
    if not value:
        raise LabelError("Push label must not be empty")
    return quote(value, safe="")


def build_push_url(gateway_url: str, name: str, instance: str) -> str:
    """Return the gateway address for a job/instance pair."""
    return (
        f"{gateway_url.rstrip('/')}/metrics"
        f"/job/{encode_label(name)}"
        f"/instance/{encode_label(instance)}"
    )


class MetricPusher:
    """Submits raw payloads to the push gateway, absorbing failures."""

    def __init__(self, session: requests.Session, logger, timeout: float | None = None) -> None:
        """Initialize with a shared HTTP session and logger."""
        self._session = session
        self._logger = logger
        self._timeout = timeout

    def push(self, name: str, gateway_url: str, instance: str, payload: bytes) -> None:
        """POST payload to the gateway under the job and instance labels."""
        post_url = build_push_url(gateway_url, name, instance)
        self._logger.info("Pushing metrics", endpoint=post_url, job=name, size=len(payload))
        try:
            with self._session.post(
                post_url,
                data=payload,
                headers={"Content-Type": CONTENT_TYPE},
                timeout=self._timeout,
            ) as response:
                response.raise_for_status()
        except requests.RequestException as exc:
            self._logger.error("Metric push failed", endpoint=post_url, job=name, error=str(exc))
