"""HTTP transport used by providers.

The provider only depends on the ``Transport`` protocol; ``HttpxTransport`` is
the default implementation and can be swapped for any object with a matching
``send`` method (tests use a stub).
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from idp_client.core.config import settings
from idp_client.exceptions import NetworkError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Status and raw body of a completed HTTP exchange."""

    status_code: int
    body: bytes | str
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Anything able to perform one blocking HTTP exchange.

    Implementations must return 2xx responses and either return or raise
    ``TransportError(response=...)`` for error statuses, keeping the body.
    Failures without any response are raised as ``NetworkError``.
    """

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | str | None = None,
    ) -> HttpResponse:
        ...


class HttpxTransport:
    """Synchronous transport backed by ``httpx.Client``."""

    def __init__(self, client: httpx.Client | None = None, timeout: float | None = None):
        """
        Initialize transport.

        Args:
            client: Pre-configured client (proxies, mounts, test transports)
            timeout: Request timeout in seconds when creating our own client
        """
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout or settings.HTTP_TIMEOUT)

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | str | None = None,
    ) -> HttpResponse:
        """
        Send a request and return the response.

        Raises:
            TransportError: Server answered with a non-2xx status (body kept)
            NetworkError: No response could be obtained
        """
        logger.debug("HTTP request | method=%s url=%s", method, url, extra={"method": method, "url": url})
        try:
            response = self.client.request(method, url, headers=dict(headers), content=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"HTTP {e.response.status_code} from {url}",
                response=self._to_response(e.response),
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Failed to connect to {url}: {e}") from e

        return self._to_response(response)

    @staticmethod
    def _to_response(response: httpx.Response) -> HttpResponse:
        return HttpResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
