"""Fixed-interval scheduler dispatching relay tasks to a worker pool."""

from __future__ import annotations

import queue
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from metrics_pusher.config import MetricSource
from metrics_pusher.relay import Relay

_SHUTDOWN = None


class Scheduler:
    """
    Fires one relay task per metric source on every tick.

    The first tick happens one full interval after run_forever() starts.
    Tasks are never awaited by the scheduler; tasks of overlapping ticks run
    side by side and queue once every worker is busy. Workers are daemon
    threads, so a relay stuck on the network never holds up process exit.
    """

    def __init__(
        self,
        interval: float,
        sources: Sequence[MetricSource],
        relay: Relay,
        logger,
        max_workers: int = 32,
    ) -> None:
        """Initialize with tick period, sources, relay and pool size."""
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        if max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {max_workers}")

        self._interval = interval
        self._sources = tuple(sources)
        self._relay = relay
        self._logger = logger
        self._max_workers = max_workers
        self._tasks: "queue.Queue[Optional[Tuple[int, MetricSource]]]" = queue.Queue()
        self._workers: List[threading.Thread] = []
        self._stop = threading.Event()
        self._running = threading.Event()
        self._idle = threading.Condition()
        self._in_flight = 0
        self._ticks = 0

    def run_forever(self, max_ticks: Optional[int] = None) -> None:
        """Tick until stop() is called, or until max_ticks ticks have fired."""
        self._running.set()
        try:
            while not self._stop.wait(self._interval):
                self.tick()
                if max_ticks is not None and self._ticks >= max_ticks:
                    break
        finally:
            self._running.clear()

    def tick(self) -> None:
        """Queue one relay task per source; a no-op once stopped."""
        with self._idle:
            if self._stop.is_set():
                return
            self._ticks += 1
            tick = self._ticks
            self._in_flight += len(self._sources)
            for source in self._sources:
                self._tasks.put((tick, source))
            self._spawn_workers()

    def stop(self) -> None:
        """Stop ticking and drop queued tasks; running tasks are abandoned."""
        with self._idle:
            self._stop.set()
            dropped = 0
            while True:
                try:
                    item = self._tasks.get_nowait()
                except queue.Empty:
                    break
                if item is not _SHUTDOWN:
                    dropped += 1
            self._in_flight -= dropped
            for _ in self._workers:
                self._tasks.put(_SHUTDOWN)
            self._idle.notify_all()

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until no task is queued or running; False on timeout."""
        with self._idle:
            return self._idle.wait_for(lambda: self._in_flight == 0, timeout=timeout)

    def snapshot(self) -> Dict[str, object]:
        """Return scheduler counters for health reporting."""
        with self._idle:
            in_flight = self._in_flight
            ticks = self._ticks

        if self._stop.is_set():
            status = "stopped"
        elif self._running.is_set():
            status = "running"
        else:
            status = "idle"

        return {
            "status": status,
            "interval_s": self._interval,
            "ticks": ticks,
            "in_flight": in_flight,
            "sources": [source.name for source in self._sources],
        }

    def _spawn_workers(self) -> None:
        # caller holds self._idle
        while len(self._workers) < min(self._max_workers, self._in_flight):
            worker = threading.Thread(
                target=self._work,
                name=f"relay-{len(self._workers)}",
                daemon=True,
            )
            worker.start()
            self._workers.append(worker)

    def _work(self) -> None:
        while True:
            item = self._tasks.get()
            if item is _SHUTDOWN:
                return
            tick, source = item
            try:
                self._relay.relay(source.name, source.url)
            except Exception:
                self._logger.exception("Relay task failed", tick=tick, source=source.name)
            finally:
                with self._idle:
                    self._in_flight -= 1
                    self._idle.notify_all()
