"""Error hierarchy for :mod:`delay_js`."""

from __future__ import annotations


class DelayJsError(Exception):
    """Base class for package-specific exceptions."""


class ConfigError(DelayJsError):
    """Raised when an event registration or runtime setting is invalid."""


class DispatchError(DelayJsError):
    """Raised when an event is dispatched the wrong way."""

    def __init__(self, message: str, *, event: str | None = None) -> None:
        super().__init__(message)
        self.event = event


class OptionValueError(DelayJsError, ValueError):
    """Raised when a raw option value cannot be parsed as a flag."""


__all__ = [
    "ConfigError",
    "DelayJsError",
    "DispatchError",
    "OptionValueError",
]
