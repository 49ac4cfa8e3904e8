"""Pusher runtime facade."""

from __future__ import annotations

from typing import Dict, Optional

import requests

from metrics_pusher.config import ConfigRepository, PusherConfig
from metrics_pusher.fetcher import MetricFetcher
from metrics_pusher.identity import resolve_instance
from metrics_pusher.pusher import MetricPusher
from metrics_pusher.relay import Relay
from metrics_pusher.scheduler import Scheduler


class PusherRuntime:
    """
    Facade for the metrics pusher.

    Responsibilities:
    - Load config and resolve the instance name
    - Wire fetcher, pusher, relay and scheduler on one HTTP session
    - Start/stop lifecycle
    """

    def __init__(
        self,
        config_repo: ConfigRepository,
        logger,
        max_workers: int = 32,
        instance: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize runtime with config repository and logger."""
        self._config_repo = config_repo
        self._logger = logger
        self._max_workers = max_workers
        self._instance_override = instance
        self._session = session
        self._timeout = timeout
        self.config: Optional[PusherConfig] = None
        self.instance: Optional[str] = None
        self._scheduler: Optional[Scheduler] = None

    def start(self) -> None:
        """Load config and build the relay pipeline. Raises ConfigError."""
        self.config = self._config_repo.load()
        self._logger.info(
            "Config loaded",
            pushgateway_url=self.config.pushgateway_url,
            push_interval=self.config.push_interval,
            sources=len(self.config.metrics),
        )
        self.instance = resolve_instance(self._instance_override)

        if self._session is None:
            self._session = requests.Session()

        relay = Relay(
            fetcher=MetricFetcher(self._session, self._logger, self._timeout),
            pusher=MetricPusher(self._session, self._logger, self._timeout),
            gateway_url=self.config.pushgateway_url,
            instance=self.instance,
        )
        self._scheduler = Scheduler(
            interval=self.config.push_interval,
            sources=self.config.metrics,
            relay=relay,
            logger=self._logger,
            max_workers=self._max_workers,
        )

    def run_forever(self, max_ticks: Optional[int] = None) -> None:
        """Block on the scheduler loop."""
        if self._scheduler is None:
            raise RuntimeError("Runtime not started")
        self._scheduler.run_forever(max_ticks=max_ticks)

    def stop(self) -> None:
        """Stop the scheduler and release the HTTP session."""
        self._logger.info("Stopping metrics pusher")
        if self._scheduler is not None:
            self._scheduler.stop()
        if self._session is not None:
            self._session.close()

    def health_snapshot(self) -> Dict[str, object]:
        """Return aggregated health snapshot for the pusher."""
        if self._scheduler is None or self.config is None:
            return {"status": "starting"}

        snapshot = self._scheduler.snapshot()
        snapshot["instance"] = self.instance
        snapshot["pushgateway_url"] = self.config.pushgateway_url
        return snapshot
