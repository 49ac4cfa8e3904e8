"""Metrics pusher entrypoint."""

from __future__ import annotations

import argparse
import os
import sys
import threading
from typing import Optional, Sequence

from metrics_pusher.config import ConfigRepository
from metrics_pusher.errors import ConfigError
from metrics_pusher.health_server import HealthServer
from metrics_pusher.logs import get_logger, setup_logging
from metrics_pusher.runtime import PusherRuntime

DEFAULT_CONFIG_PATH = "/etc/prometheus-pusher/conf.d"


def positive_int(value: str) -> int:
    """argparse type accepting integers greater than zero."""
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Return the command line parser; defaults come from the environment."""
    parser = argparse.ArgumentParser(
        prog="metrics-pusher",
        description="Relay metrics from local endpoints to a Prometheus push gateway.",
    )
    parser.add_argument(
        "--config",
        default=os.getenv("PUSHER_CONFIG", DEFAULT_CONFIG_PATH),
        help="Config file or directory. If a directory is given, all files in it are loaded.",
    )
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    parser.add_argument(
        "--log-console",
        action="store_true",
        help="Render logs for a terminal instead of JSON lines.",
    )
    parser.add_argument(
        "--max-workers",
        type=positive_int,
        default=os.getenv("PUSHER_MAX_WORKERS", "32"),
        help="Upper bound on concurrently running relay tasks.",
    )
    parser.add_argument("--instance", default=None, help="Override the instance label (defaults to host FQDN).")
    return parser


def _start_health_server(runtime: PusherRuntime, logger) -> Optional[HealthServer]:
    health_host = os.getenv("HEALTH_HOST")
    health_port = os.getenv("HEALTH_PORT")
    if not health_host or not health_port:
        return None

    server = HealthServer(health_host, int(health_port), runtime.health_snapshot)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    logger.info("Health server listening", host=health_host, port=int(health_port))
    return server


def main(argv: Sequence[str] | None = None) -> None:
    """Application entrypoint for the metrics pusher."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level, json_output=not args.log_console)
    logger = get_logger("metrics-pusher")

    runtime = PusherRuntime(
        config_repo=ConfigRepository(args.config, logger),
        logger=logger,
        max_workers=args.max_workers,
        instance=args.instance,
    )

    try:
        runtime.start()
    except ConfigError as exc:
        logger.critical("Error parsing configuration", config=args.config, error=str(exc))
        sys.exit(1)

    logger.info("Starting metrics pusher", instance_name=runtime.instance)
    server = _start_health_server(runtime, logger)

    try:
        runtime.run_forever()
    except KeyboardInterrupt:
        pass
    finally:
        if server is not None:
            server.shutdown()
            server.server_close()
        runtime.stop()


if __name__ == "__main__":
    main()
