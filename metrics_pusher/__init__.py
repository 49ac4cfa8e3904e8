"""Metrics pusher package."""

__all__ = [
    "PusherRuntime",
    "Scheduler",
    "Relay",
    "MetricFetcher",
    "MetricPusher",
    "ConfigRepository",
    "PusherConfig",
    "MetricSource",
    "ConfigError",
    "LabelError",
    "build_push_url",
    "resolve_instance",
]

from metrics_pusher.runtime import PusherRuntime
from metrics_pusher.scheduler import Scheduler
from metrics_pusher.relay import Relay
from metrics_pusher.fetcher import MetricFetcher
from metrics_pusher.pusher import MetricPusher, build_push_url
from metrics_pusher.config import ConfigRepository, PusherConfig, MetricSource
from metrics_pusher.identity import resolve_instance
from metrics_pusher.errors import ConfigError, LabelError
