from __future__ import annotations


class EventCoreError(Exception):
    """Base class for errors raised by eventcore."""


class InvalidArgument(EventCoreError, ValueError):
    """Raised when a listener registration is malformed."""


class ConfigError(EventCoreError):
    """Raised when configuration cannot be loaded or fails validation."""
