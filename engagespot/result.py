"""Result values returned by Engagespot API calls."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .exceptions import EngagespotRequestError


class ErrorKind(str, Enum):
    APPLICATION = "application"
    TRANSPORT = "transport"


@dataclass(slots=True, frozen=True)
class EngagespotResult:
    """Either the response body of a successful call or the error text of a failed one.

    The text is never interpreted: on success it is the raw response body, on an
    HTTP error it is the raw response body, and on a transport failure it is the
    description of the transport exception. ``error_kind`` tells the two failure
    sources apart.
    """

    ok: bool
    text: str
    status_code: int | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def success(cls, text: str, status_code: int | None = None) -> EngagespotResult:
        return cls(ok=True, text=text, status_code=status_code)

    @classmethod
    def failure(
        cls,
        text: str,
        status_code: int | None = None,
        kind: ErrorKind = ErrorKind.APPLICATION,
    ) -> EngagespotResult:
        return cls(ok=False, text=text, status_code=status_code, error_kind=kind)

    @property
    def is_ok(self) -> bool:
        return self.ok

    @property
    def is_err(self) -> bool:
        return not self.ok

    def unwrap(self) -> str:
        """Return the response text or raise ``EngagespotRequestError``."""

        if not self.ok:
            raise EngagespotRequestError(
                self.text, status_code=self.status_code, kind=self.error_kind
            )
        return self.text

    def unwrap_or_else(self, handler: Callable[[str], str]) -> str:
        if self.ok:
            return self.text
        return handler(self.text)

    def json(self) -> Any:
        return json.loads(self.text)
