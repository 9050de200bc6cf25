"""Attempt loop with failover, token refresh and cancellation."""

import asyncio
import contextlib
from typing import TYPE_CHECKING, Any

import httpx

from nacos_sdk._internal.dispatch.credentials import attach_access_token
from nacos_sdk._internal.dispatch.models import Attempt, NacosRequest
from nacos_sdk._internal.dispatch.redaction import redact_url
from nacos_sdk._internal.http import TRANSPORT_ERRORS
from nacos_sdk._internal.log import get_logger
from nacos_sdk.exceptions import (
    ForbiddenError,
    NotFoundError,
    PoolExhaustedError,
    RequestCancelledError,
)

if TYPE_CHECKING:
    from nacos_sdk._internal.address import AddressPool
    from nacos_sdk._internal.auth.signer import RequestSigner
    from nacos_sdk._internal.auth.token import TokenCache
    from nacos_sdk._internal.http import Transport, TransportFactory, TransportResponse

MIN_ATTEMPTS = 3

_logger = get_logger("dispatch")


class Dispatcher:
    """Executes one logical request against an address pool.

    Outcome handling per attempt:
        transport failure -> move to the next address and retry
        200               -> return the body
        403               -> refresh the token once and retry the same address,
                             second 403 raises ForbiddenError
        404               -> raise NotFoundError
        anything else     -> retry the same address

    The loop makes at most ``max(pool.size, 3)`` attempts and then raises
    PoolExhaustedError. Attempts run back to back with no delay.

    The dispatcher holds no lock. The pool and the token cache serialise
    their own state.
    """

    def __init__(
        self,
        *,
        pool: "AddressPool",
        tokens: "TokenCache",
        signer: "RequestSigner",
        transports: "TransportFactory",
        shutdown: asyncio.Event | None = None,
    ) -> None:
        self._pool = pool
        self._tokens = tokens
        self._signer = signer
        self._transports = transports
        self._shutdown = shutdown

    @property
    def max_attempts(self) -> int:
        return max(self._pool.size, MIN_ATTEMPTS)

    async def dispatch(self, request: NacosRequest, cancel: asyncio.Event | None = None) -> str:
        """Send ``request`` and return the body of the first 200 response.

        Args:
            request: The request to deliver.
            cancel: Optional per-call cancel signal. The client's shutdown
                signal is observed as well.

        Returns:
            Raw response body text.

        Raises:
            RequestCancelledError: A cancel or shutdown signal fired.
            ForbiddenError: 403 after the token was already refreshed.
            NotFoundError: 404 from the server.
            PoolExhaustedError: No attempt succeeded.
            SigningError, TokenError: Propagated from the collaborators.
        """
        signals = [s for s in (cancel, self._shutdown) if s is not None]
        token_refreshed = False
        attempts: list[Attempt] = []

        for index in range(self.max_attempts):
            address = self._pool.current

            await self._signer.sign(request)
            url = attach_access_token(request.build_url(address), self._tokens.current)

            _logger.debug(
                "sending %s - target server %s",
                request,
                address,
                extra={"event": "dispatch.attempt", "attempt": index, "address": str(address)},
            )

            try:
                async with self._transports.open(address) as transport:
                    response = await self._send(transport, request.to_http_request(url), signals)
            except TRANSPORT_ERRORS as e:
                if any(s.is_set() for s in signals):
                    raise RequestCancelledError(f"Request cancelled: {request}") from e

                attempts.append(Attempt(index=index, address=address, outcome=e))
                _logger.error(
                    "request %s failed - target server %s: %s",
                    request,
                    address,
                    e,
                    extra={"event": "dispatch.transport_error", "attempt": index, "url": redact_url(url)},
                )
                self._pool.advance()
                continue

            attempts.append(Attempt(index=index, address=address, outcome=response.status_code))
            _logger.debug(
                "server %s answered %s with status %s",
                address,
                request,
                response.status_code,
                extra={"event": "dispatch.response", "attempt": index, "status": response.status_code},
            )

            if response.status_code == httpx.codes.OK:
                return response.text

            if response.status_code == httpx.codes.FORBIDDEN:
                if token_refreshed:
                    raise ForbiddenError(f"Access forbidden - request: {request} response: {response.text}")
                _logger.warning(
                    "access forbidden for %s, refreshing access token",
                    request,
                    extra={"event": "dispatch.forbidden", "attempt": index},
                )
                await self._tokens.refresh()
                token_refreshed = True
            elif response.status_code == httpx.codes.NOT_FOUND:
                raise NotFoundError(f"Resource not found: {request}", request=request)
            else:
                _logger.error(
                    "unexpected status %s for %s - target server %s",
                    response.status_code,
                    request,
                    address,
                    extra={"event": "dispatch.bad_status", "attempt": index, "status": response.status_code},
                )

        _logger.debug(
            "attempts for %s: %s",
            request,
            ", ".join(_format_attempt(a) for a in attempts),
            extra={"event": "dispatch.exhausted"},
        )
        raise PoolExhaustedError(
            f"Request failed on all server addresses - request: {request}",
            request=request,
        )

    async def _send(
        self,
        transport: "Transport",
        http_request: httpx.Request,
        signals: list[asyncio.Event],
    ) -> "TransportResponse":
        """Send on ``transport``, aborting as soon as any signal is set."""
        if any(s.is_set() for s in signals):
            raise RequestCancelledError("Request cancelled before send")
        if not signals:
            return await transport.send(http_request)

        send_task: asyncio.Task[Any] = asyncio.ensure_future(transport.send(http_request))
        waiters = [asyncio.ensure_future(s.wait()) for s in signals]
        try:
            await asyncio.wait([send_task, *waiters], return_when=asyncio.FIRST_COMPLETED)
        finally:
            for waiter in waiters:
                waiter.cancel()
            if not send_task.done():
                send_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await send_task

        if send_task.cancelled():
            raise RequestCancelledError("Request cancelled while in flight")
        return send_task.result()


def _format_attempt(attempt: Attempt) -> str:
    outcome = attempt.outcome
    if isinstance(outcome, BaseException):
        outcome = type(outcome).__name__
    return f"#{attempt.index} {attempt.address} -> {outcome}"
