"""Exceptions raised by mdspec."""

from __future__ import annotations


class ConfigError(ValueError):
    """Raised when the resolved configuration cannot be used.

    The run is aborted before any suite starts.
    """

    def __init__(self, message: str, *, option: str | None = None):
        super().__init__(message)
        self.option = option
