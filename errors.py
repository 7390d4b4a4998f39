"""Exceptions raised by citelet.

Expected non-outcomes (no publisher, duplicate, declined confirmation) are
never raised; they end a workflow run as an abort. Only the failures below
reach the caller.
"""

from __future__ import annotations

from typing import Any


class CiteletError(Exception):
    """Base exception for all citelet errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(CiteletError):
    """Stored configuration holds a value citelet does not understand."""


class StoreError(CiteletError):
    """Persistent store could not be read or written."""


class TransportError(CiteletError):
    """Submission did not complete at the network or protocol level."""


class DocumentUnavailableError(CiteletError):
    """The document can no longer be queried (load failed or page closed)."""


class DuplicatePublisherError(CiteletError):
    """A publisher with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Publisher '{name}' is already registered", {"name": name})
        self.name = name
