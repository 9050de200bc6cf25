"""Server address pool with a rotating cursor."""

import asyncio
import threading
from collections.abc import Iterable
from typing import Literal, Protocol, runtime_checkable
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

from nacos_sdk._internal.log import get_logger
from nacos_sdk.exceptions import NacosConfigError

DEFAULT_PORT = 8848

_logger = get_logger("address")


class ServerAddress(BaseModel):
    """Endpoint of one Nacos server node."""

    model_config = ConfigDict(frozen=True)

    scheme: Literal["http", "https"] = "http"
    host: str = Field(..., min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    context_path: str = ""

    @property
    def http_uri(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}{self.context_path}"

    @classmethod
    def parse(cls, value: str) -> "ServerAddress":
        """Parse "host", "host:port" or "scheme://host[:port][/context]".

        IPv6 literals must be bracketed ("[::1]:8848"). A context path is
        kept and prefixed to every request path sent to this address.

        Raises:
            NacosConfigError: If the value is not a usable address.
        """
        text = value.strip()
        if "://" not in text:
            text = f"http://{text}"

        try:
            parts = urlsplit(text)
            return cls(
                scheme=parts.scheme,  # type: ignore[arg-type]
                host=parts.hostname or "",
                port=DEFAULT_PORT if parts.port is None else parts.port,
                context_path=parts.path.rstrip("/"),
            )
        except ValueError as e:
            raise NacosConfigError(f"Invalid server address {value!r}: {e}") from e

    def __str__(self) -> str:
        return self.http_uri


@runtime_checkable
class AddressPool(Protocol):
    """Ordered set of interchangeable server addresses.

    Implementations must make ``current``/``advance`` safe to call from
    concurrent dispatch calls.
    """

    @property
    def size(self) -> int: ...

    @property
    def addresses(self) -> tuple[ServerAddress, ...]: ...

    @property
    def current(self) -> ServerAddress: ...

    def advance(self) -> None: ...

    async def init(self, cancel: asyncio.Event | None = None) -> None: ...


class ServerAddressPool:
    """Static address pool built from configured server addresses.

    Example:
        >>> pool = ServerAddressPool(["10.0.0.1:8848", "10.0.0.2:8848"])
        >>> pool.current.http_uri
        'http://10.0.0.1:8848'
        >>> pool.advance()
        >>> pool.current.http_uri
        'http://10.0.0.2:8848'
    """

    def __init__(self, addresses: Iterable[str | ServerAddress]) -> None:
        parsed = [a if isinstance(a, ServerAddress) else ServerAddress.parse(a) for a in addresses]
        if not parsed:
            raise NacosConfigError("At least one server address is required")

        self._addresses: tuple[ServerAddress, ...] = tuple(parsed)
        self._index = 0
        self._lock = threading.Lock()

    @property
    def size(self) -> int:
        return len(self._addresses)

    @property
    def addresses(self) -> tuple[ServerAddress, ...]:
        return self._addresses

    @property
    def current(self) -> ServerAddress:
        with self._lock:
            return self._addresses[self._index]

    def advance(self) -> None:
        """Move the cursor to the next address, wrapping at the end."""
        with self._lock:
            self._index = (self._index + 1) % len(self._addresses)
            address = self._addresses[self._index]
        _logger.debug(
            "moved to next server address %s",
            address,
            extra={"event": "address.advance", "address": str(address)},
        )

    async def init(self, cancel: asyncio.Event | None = None) -> None:
        """Prepare the pool. Static pools have nothing to fetch."""
        _logger.debug(
            "address pool ready: %s",
            ", ".join(str(a) for a in self._addresses),
            extra={"event": "address.init", "size": self.size},
        )
