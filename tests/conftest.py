"""Shared fixtures for metrics pusher tests."""
from unittest.mock import MagicMock

import pytest


@pytest.fixture
def logger():
    """Logger double recording key/value events."""
    return MagicMock(name="logger")


@pytest.fixture
def write_config(tmp_path):
    """Write a TOML file into tmp_path and return its path."""

    def _write(content: str, name: str = "pusher.toml"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_response():
    """Build a context-manager response double like requests.Response."""

    def _make(content: bytes = b"", raise_exc: Exception | None = None):
        response = MagicMock(name="response")
        response.content = content
        response.__enter__.return_value = response
        response.__exit__.return_value = False
        if raise_exc is not None:
            response.raise_for_status.side_effect = raise_exc
        return response

    return _make
