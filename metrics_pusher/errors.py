"""Custom exceptions for the metrics pusher."""


class ConfigError(Exception):
    """Raised when config is invalid or missing."""


class LabelError(Exception):
    """Raised when a push label cannot be used in a gateway URL."""
