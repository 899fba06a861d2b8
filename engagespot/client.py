"""HTTP client for the Engagespot REST API."""

from __future__ import annotations

import copy
import logging
from time import perf_counter
from typing import Any

import httpx
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.trace import TracerProvider
from pydantic_core import to_json

from .common.config import DEFAULT_BASE_URL, EngagespotSettings
from .common.tracing import configure_tracing
from .exceptions import EngagespotError, InvalidHeaderValueError
from .metrics import (
    ENGAGESPOT_REQUEST_LATENCY_SECONDS,
    ENGAGESPOT_REQUESTS_TOTAL,
    OUTCOME_APPLICATION_ERROR,
    OUTCOME_SUCCESS,
    OUTCOME_TRANSPORT_ERROR,
)
from .notification import Notification
from .result import EngagespotResult, ErrorKind

_LOGGER = logging.getLogger(__name__)

API_KEY_HEADER = "X-ENGAGESPOT-API-KEY"
API_SECRET_HEADER = "X-ENGAGESPOT-API-SECRET"
USER_AGENT = "engagespot-python"


def _is_valid_header_value(value: str) -> bool:
    # visible ASCII plus space and horizontal tab
    return all(ch == "\t" or 0x20 <= ord(ch) < 0x7F for ch in value)


def _validate_credentials(api_key: str, api_secret: str) -> None:
    for header, value in ((API_KEY_HEADER, api_key), (API_SECRET_HEADER, api_secret)):
        if not _is_valid_header_value(value):
            raise InvalidHeaderValueError(header)


def default_headers(api_key: str, api_secret: str) -> dict[str, str]:
    """Return the static headers sent with every request.

    Raises ``InvalidHeaderValueError`` when a credential contains characters
    that cannot travel in an HTTP header.
    """

    _validate_credentials(api_key, api_secret)
    return {
        "Content-Type": "application/json",
        API_KEY_HEADER: api_key,
        API_SECRET_HEADER: api_secret,
    }


def create_default_client(
    headers: dict[str, str], transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT, **headers},
        transport=transport,
    )


class EngagespotBuilder:
    """Builder for the Engagespot client.

    The credentials are validated as soon as the builder is created. Further
    settings are chained and each call returns a new builder::

        client = EngagespotBuilder("key", "secret").base_url("https://self-hosted/v3").build()
    """

    def __init__(self, api_key: str, api_secret: str) -> None:
        _validate_credentials(api_key, api_secret)
        self._api_key = api_key
        self._api_secret = api_secret
        self._base_url = DEFAULT_BASE_URL
        self._transport: httpx.AsyncBaseTransport | None = None
        self._record_metrics = True
        self._tracer_provider: TracerProvider | None = None

    def _evolve(self, **changes: Any) -> EngagespotBuilder:
        clone = copy.copy(self)
        for name, value in changes.items():
            setattr(clone, name, value)
        return clone

    def base_url(self, base_url: str) -> EngagespotBuilder:
        """Override the API endpoint; only needed for self-hosted Engagespot instances."""

        return self._evolve(_base_url=base_url)

    def transport(self, transport: httpx.AsyncBaseTransport) -> EngagespotBuilder:
        return self._evolve(_transport=transport)

    def record_metrics(self, enabled: bool) -> EngagespotBuilder:
        return self._evolve(_record_metrics=enabled)

    def tracer_provider(self, provider: TracerProvider) -> EngagespotBuilder:
        """Trace every request of the built client with ``provider``."""

        return self._evolve(_tracer_provider=provider)

    def build(self) -> Engagespot:
        return Engagespot(
            self._api_key,
            self._api_secret,
            base_url=self._base_url,
            transport=self._transport,
            record_metrics=self._record_metrics,
            tracer_provider=self._tracer_provider,
        )


class Engagespot:
    """Client for sending notifications and updating users through the Engagespot API.

    Both API calls return an ``EngagespotResult`` instead of raising: the result
    carries the raw response body on success, the raw response body on HTTP
    errors and the exception text when the request never got a response. A
    single client may be shared by concurrent tasks.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        record_metrics: bool = True,
        tracer_provider: TracerProvider | None = None,
    ) -> None:
        self._base_url = base_url
        self._client = create_default_client(default_headers(api_key, api_secret), transport)
        self._record_metrics = record_metrics
        if tracer_provider is not None:
            HTTPXClientInstrumentor.instrument_client(self._client, tracer_provider=tracer_provider)

    @classmethod
    def from_settings(
        cls,
        settings: EngagespotSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Engagespot:
        if not settings.api_key or not settings.api_secret:
            raise EngagespotError("ENGAGESPOT_API_KEY and ENGAGESPOT_API_SECRET must be set")
        return cls(
            settings.api_key,
            settings.api_secret,
            base_url=settings.base_url,
            transport=transport,
            record_metrics=settings.enable_metrics,
            tracer_provider=configure_tracing(settings),
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> Engagespot:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send(self, notification: Notification[Any]) -> EngagespotResult:
        """Send a notification built with ``NotificationBuilder``."""

        return await self._request(
            "POST", "notifications", notification.to_json(), operation="send"
        )

    async def create_or_update_user_attrs(self, identifier: str, attrs: Any) -> EngagespotResult:
        """Create the user or update its attributes.

        ``identifier`` is used verbatim as a URL path segment. ``attrs`` can be
        any JSON-serializable value, including pydantic models and dataclasses.
        """

        return await self._request(
            "PUT", f"users/{identifier}", to_json(attrs), operation="user_attrs"
        )

    async def _request(
        self, method: str, path: str, content: bytes, *, operation: str
    ) -> EngagespotResult:
        url = self._get_url(path)
        _LOGGER.debug("Engagespot %s %s", method, url)
        start = perf_counter()
        try:
            response = await self._client.request(method, url, content=content)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            message = str(exc) or exc.__class__.__name__
            _LOGGER.warning("Engagespot %s %s failed: %s", method, url, message)
            self._observe(operation, OUTCOME_TRANSPORT_ERROR, start)
            return EngagespotResult.failure(message, kind=ErrorKind.TRANSPORT)
        return self._handle_response(operation, response, start)

    def _handle_response(
        self, operation: str, response: httpx.Response, start: float
    ) -> EngagespotResult:
        text = response.text
        if not response.is_success:
            _LOGGER.warning(
                "Engagespot %s returned status %s: %s", operation, response.status_code, text
            )
            self._observe(operation, OUTCOME_APPLICATION_ERROR, start)
            return EngagespotResult.failure(
                text, status_code=response.status_code, kind=ErrorKind.APPLICATION
            )
        self._observe(operation, OUTCOME_SUCCESS, start)
        return EngagespotResult.success(text, status_code=response.status_code)

    def _observe(self, operation: str, outcome: str, start: float) -> None:
        if not self._record_metrics:
            return
        ENGAGESPOT_REQUESTS_TOTAL.labels(operation=operation, outcome=outcome).inc()
        ENGAGESPOT_REQUEST_LATENCY_SECONDS.labels(operation=operation).observe(
            perf_counter() - start
        )

    def _get_url(self, path: str) -> str:
        return f"{self._base_url.rstrip('/')}/{path.lstrip('/')}"
