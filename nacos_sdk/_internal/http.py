"""Shared HTTP client configuration and the per-attempt transport."""

from dataclasses import dataclass
from types import TracebackType
from typing import Protocol, runtime_checkable

import httpx

from nacos_sdk._internal.address import ServerAddress
from nacos_sdk._version import __version__
from nacos_sdk.exceptions import NacosTransportError

DEFAULT_TIMEOUT = 5.0

# Failures that count as "server unreachable" for one attempt. RequestError
# also covers body read failures such as DecodingError.
TRANSPORT_ERRORS: tuple[type[Exception], ...] = (httpx.RequestError, NacosTransportError)


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Status and body text of one HTTP exchange."""

    status_code: int
    text: str


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
) -> httpx.AsyncClient:
    """Create configured HTTP client.

    Args:
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": f"nacos-sdk-http/{__version__}"},
    )


@runtime_checkable
class Transport(Protocol):
    """Short-lived handle bound to one server address."""

    async def send(self, request: httpx.Request) -> TransportResponse: ...

    async def __aenter__(self) -> "Transport": ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


@runtime_checkable
class TransportFactory(Protocol):
    """Produces a transport handle for a server address."""

    def open(self, address: ServerAddress) -> Transport: ...


class HttpxTransport:
    """Transport backed by a dedicated ``httpx.AsyncClient``.

    Network and body read failures surface as ``httpx.RequestError`` subclasses.
    """

    def __init__(self, address: ServerAddress, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._address = address
        self._client = create_http_client(timeout=timeout, base_url=address.http_uri)

    async def send(self, request: httpx.Request) -> TransportResponse:
        # Prebuilt requests do not pick up client defaults on send().
        for key, value in self._client.headers.items():
            request.headers.setdefault(key, value)
        response = await self._client.send(request)
        return TransportResponse(status_code=response.status_code, text=response.text)

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self._client.aclose()


class HttpxTransportFactory:
    """Opens one ``HttpxTransport`` per attempt."""

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout

    def open(self, address: ServerAddress) -> HttpxTransport:
        return HttpxTransport(address, timeout=self._timeout)
