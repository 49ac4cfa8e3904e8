"""Pusher configuration models and repository."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple
import json
import tomllib

import jsonschema

from metrics_pusher.errors import ConfigError

DEFAULT_PUSHGATEWAY_URL = "http://localhost:9091"
DEFAULT_PUSH_INTERVAL = 60.0
DEFAULT_HOST = "localhost"
DEFAULT_PATH = "/metrics"

CONFIG_SECTION = "config"
CONFIG_FIELDS = ("pushgateway_url", "push_interval")
SOURCE_FIELDS = ("host", "port", "path", "ssl")


@dataclass(frozen=True)
class MetricSource:
    """A named, fully resolved scrape target."""

    name: str
    url: str


@dataclass(frozen=True)
class PusherConfig:
    """Top-level configuration for the pusher."""

    pushgateway_url: str = DEFAULT_PUSHGATEWAY_URL
    push_interval: float = DEFAULT_PUSH_INTERVAL
    metrics: Tuple[MetricSource, ...] = ()


class ConfigRepository:
    """
    Repository for loading configuration.

    Reads a single TOML file, or every regular file of a directory in name order.
    Sections are merged across files; the first value seen for a field of a
    section is kept.
    """

    def __init__(self, path: str, logger, schema_path: str | None = None) -> None:
        """Initialize with config path, logger and optional schema path."""
        self._path = Path(path)
        self._logger = logger
        if schema_path is None:
            self._schema_path = Path(__file__).resolve().parent / "schemas" / "pusher_config.schema.json"
        else:
            self._schema_path = Path(schema_path)
        self._schema: dict | None = None

    def load(self) -> PusherConfig:
        """Load, validate and merge all config files."""
        sections: Dict[str, dict] = {}

        for file in self.config_files():
            raw = self._read(file)
            self._validate(file, raw)
            for section, fields in raw.items():
                merged = sections.setdefault(section, {})
                for key, value in fields.items():
                    merged.setdefault(key, value)

        settings = sections.pop(CONFIG_SECTION, {})
        self._warn_unknown(CONFIG_SECTION, settings, CONFIG_FIELDS)

        push_interval = settings.get("push_interval", DEFAULT_PUSH_INTERVAL)
        if push_interval <= 0:
            raise ConfigError(f"push_interval must be positive, got {push_interval}")

        metrics = tuple(self._build_source(name, fields) for name, fields in sections.items())

        return PusherConfig(
            pushgateway_url=settings.get("pushgateway_url", DEFAULT_PUSHGATEWAY_URL),
            push_interval=float(push_interval),
            metrics=metrics,
        )

    def config_files(self) -> List[Path]:
        """Return config files to load, in deterministic order."""
        if not self._path.exists():
            raise ConfigError(f"Config path not found: {self._path}")

        if self._path.is_dir():
            try:
                return sorted(item for item in self._path.iterdir() if item.is_file())
            except OSError as exc:
                raise ConfigError(f"Unable to list config directory {self._path}: {exc}") from exc

        return [self._path]

    def _read(self, file: Path) -> dict:
        try:
            return tomllib.loads(file.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"Unable to read config file {file}: {exc}") from exc
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Invalid TOML in config file {file}: {exc}") from exc

    def _validate(self, file: Path, raw: dict) -> None:
        """Validate one parsed file against the bundled JSON Schema."""
        if self._schema is None:
            try:
                self._schema = json.loads(self._schema_path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise ConfigError(f"Unable to load config schema {self._schema_path}: {exc}") from exc

        try:
            jsonschema.validate(instance=raw, schema=self._schema)
        except jsonschema.ValidationError as exc:
            location = ".".join(str(part) for part in exc.absolute_path) or "<root>"
            raise ConfigError(f"Config schema validation failed in {file} at {location}: {exc.message}") from exc

    def _build_source(self, name: str, fields: dict) -> MetricSource:
        """Assemble a metric source from its merged section fields."""
        if not name.strip():
            raise ConfigError("Metric section name must not be empty")
        self._warn_unknown(name, fields, SOURCE_FIELDS)

        port = fields.get("port")
        if port is None:
            raise ConfigError(f"Port is not defined for section '{name}'")
        if not 0 < port <= 65535:
            raise ConfigError(f"Port {port} out of range for section '{name}'")

        scheme = "https" if fields.get("ssl", False) else "http"
        host = fields.get("host", DEFAULT_HOST)
        path = fields.get("path", DEFAULT_PATH)
        if not path.startswith("/"):
            path = "/" + path

        return MetricSource(name=name, url=f"{scheme}://{host}:{port}{path}")

    def _warn_unknown(self, section: str, fields: dict, known: Tuple[str, ...]) -> None:
        for key in fields:
            if key not in known:
                self._logger.warning("Unknown configuration field", config_section=section, field=key)
