"""Exceptions raised by the Engagespot client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .result import ErrorKind


class EngagespotError(Exception):
    """Base class for all Engagespot client errors."""


class InvalidHeaderValueError(EngagespotError, ValueError):
    """Raised when an API credential cannot be sent as an HTTP header value."""

    def __init__(self, header: str) -> None:
        super().__init__(f"Invalid value for header {header}")
        self.header = header


class EngagespotRequestError(EngagespotError):
    """Raised by ``EngagespotResult.unwrap`` for failed requests."""

    def __init__(
        self,
        text: str,
        *,
        status_code: int | None = None,
        kind: ErrorKind | None = None,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.status_code = status_code
        self.kind = kind
