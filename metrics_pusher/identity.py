"""Host identity used as the gateway instance label."""

from __future__ import annotations

import os
import socket


def resolve_instance(override: str | None = None) -> str:
    """Return the instance name: explicit override, PUSHER_INSTANCE, or the host FQDN."""
    if override and override.strip():
        return override.strip()

    env_instance = os.getenv("PUSHER_INSTANCE", "").strip()
    if env_instance:
        return env_instance

    return socket.getfqdn()
