"""Access token cache for username/password protected Nacos clusters."""

import asyncio
import json
from typing import Protocol, runtime_checkable

import httpx

from nacos_sdk._internal.address import AddressPool
from nacos_sdk._internal.dispatch.models import HttpMethod, NacosRequest
from nacos_sdk._internal.http import TRANSPORT_ERRORS, TransportFactory
from nacos_sdk._internal.log import get_logger
from nacos_sdk.exceptions import NacosConfigError, TokenError

LOGIN_PATH = "/nacos/v1/auth/users/login"
# Used instead of LOGIN_PATH when the address carries its own context path.
CONTEXT_LOGIN_PATH = "/v1/auth/users/login"

_logger = get_logger("auth.token")


@runtime_checkable
class TokenCache(Protocol):
    """Holder of the current access token.

    ``refresh`` is demand-driven and must be safe under concurrent callers.
    """

    @property
    def current(self) -> str: ...

    async def refresh(self) -> None: ...

    async def init(self) -> None: ...


class NoneTokenCache:
    """Token cache for clusters without authentication. Always empty."""

    @property
    def current(self) -> str:
        return ""

    async def refresh(self) -> None:
        return None

    async def init(self) -> None:
        return None


class AccessTokenCache:
    """Logs in with username/password and caches the returned access token.

    Login is tried once per server address, starting at the pool's current
    address. The pool cursor itself is left alone; rotating it is the
    dispatch core's job.
    """

    def __init__(
        self,
        username: str,
        password: str,
        pool: AddressPool,
        transports: TransportFactory,
    ) -> None:
        if not username or not password:
            raise NacosConfigError("username and password are both required for token auth")

        self._username = username
        self._password = password
        self._pool = pool
        self._transports = transports
        self._token = ""
        self._lock = asyncio.Lock()

    @property
    def current(self) -> str:
        return self._token

    async def init(self) -> None:
        await self.refresh()

    async def refresh(self) -> None:
        """Acquire a fresh access token.

        Raises:
            TokenError: If the server rejects the credentials or no server
                address is reachable.
        """
        async with self._lock:
            self._token = await self._login()
        _logger.debug("access token refreshed", extra={"event": "token.refresh"})

    async def _login(self) -> str:
        addresses = self._pool.addresses
        start = addresses.index(self._pool.current)
        last_error: Exception | None = None
        for offset in range(len(addresses)):
            address = addresses[(start + offset) % len(addresses)]
            request = NacosRequest(
                method=HttpMethod.POST,
                path=CONTEXT_LOGIN_PATH if address.context_path else LOGIN_PATH,
                body={"username": self._username, "password": self._password},
            )
            try:
                async with self._transports.open(address) as transport:
                    response = await transport.send(request.to_http_request(request.build_url(address)))
            except TRANSPORT_ERRORS as e:
                _logger.warning(
                    "login failed against %s: %s",
                    address,
                    e,
                    extra={"event": "token.login.transport_error", "address": str(address)},
                )
                last_error = e
                continue

            if response.status_code != httpx.codes.OK:
                raise TokenError(f"Login rejected by {address} with status {response.status_code}")

            try:
                token = json.loads(response.text).get("accessToken")
            except (ValueError, AttributeError) as e:
                raise TokenError(f"Malformed login response from {address}") from e
            if not token:
                raise TokenError(f"Login response from {address} has no accessToken")
            return str(token)

        raise TokenError("Login failed - no server address reachable") from last_error
