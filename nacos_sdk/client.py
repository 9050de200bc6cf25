"""NacosClient - lifecycle wrapper around the dispatch core.

Example:
    from nacos_sdk import ClientOptions, NacosClient, NacosRequest

    options = ClientOptions(server_addresses=["10.0.0.1:8848", "10.0.0.2:8848"])

    async with NacosClient(options) as client:
        content = await client.request(
            NacosRequest(
                path="/nacos/v1/cs/configs",
                params={"dataId": "app.yaml", "group": "DEFAULT_GROUP"},
            )
        )
"""

import asyncio
from enum import Enum
from types import TracebackType
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from nacos_sdk._internal.address import AddressPool, ServerAddressPool
from nacos_sdk._internal.auth import (
    AccessTokenCache,
    AcmRequestSigner,
    NoneTokenCache,
    NullRequestSigner,
    RequestSigner,
    TokenCache,
)
from nacos_sdk._internal.dispatch import Dispatcher, NacosRequest
from nacos_sdk._internal.http import HttpxTransportFactory, TransportFactory
from nacos_sdk._internal.log import enable_debug_logging, get_logger
from nacos_sdk.exceptions import (
    ClientDisposedError,
    ClientNotInitializedError,
    InitializationError,
    NacosValidationError,
)
from nacos_sdk.models.options import ClientOptions

ModelT = TypeVar("ModelT", bound=BaseModel)

_logger = get_logger("client")


class LifecycleState(str, Enum):
    """Client lifecycle. Transitions only move forward."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    DISPOSED = "disposed"


class NacosClient:
    """HTTP client for a Nacos cluster.

    Requests go to one of several equivalent server addresses with failover,
    a single access token refresh on 403, and no retry on 404. The client
    must be initialized with ``init()`` (or ``async with``) before use and
    cannot be used after ``dispose()``.

    Collaborators default from ``options``; pass them explicitly to swap in
    a different address pool, token cache, signer or transport.
    """

    def __init__(
        self,
        options: ClientOptions,
        *,
        pool: AddressPool | None = None,
        tokens: TokenCache | None = None,
        signer: RequestSigner | None = None,
        transports: TransportFactory | None = None,
    ) -> None:
        """Initialize the client. No network I/O happens here.

        Args:
            options: Validated client options.
            pool: Address pool. Defaults to a static pool of
                ``options.server_addresses``.
            tokens: Token cache. Defaults to username/password login when
                credentials are configured, otherwise no token.
            signer: Request signer. Defaults to access key signing when keys
                are configured, otherwise no signature.
            transports: Transport factory. Defaults to httpx.

        Raises:
            NacosConfigError: If the options cannot build a collaborator.
        """
        self._options = options
        if options.debug:
            enable_debug_logging()

        self._transports = transports or HttpxTransportFactory(timeout=options.timeout_ms / 1000)
        self._pool = pool or ServerAddressPool(options.server_addresses)

        if tokens is not None:
            self._tokens = tokens
        elif options.username and options.password:
            self._tokens = AccessTokenCache(options.username, options.password, self._pool, self._transports)
        else:
            self._tokens = NoneTokenCache()

        if signer is not None:
            self._signer = signer
        elif options.access_key and options.secret_key:
            self._signer = AcmRequestSigner(options.access_key, options.secret_key)
        else:
            self._signer = NullRequestSigner()

        self._state = LifecycleState.UNINITIALIZED
        self._shutdown = asyncio.Event()
        self._dispatcher = Dispatcher(
            pool=self._pool,
            tokens=self._tokens,
            signer=self._signer,
            transports=self._transports,
            shutdown=self._shutdown,
        )

    @classmethod
    def from_env(cls) -> "NacosClient":
        """Create a client configured from environment variables.

        See ``ClientOptions.from_env()`` for the variables read.
        """
        return cls(ClientOptions.from_env())

    @property
    def client_type(self) -> str:
        return "http"

    @property
    def name(self) -> str:
        return self._options.client_name

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def shutdown_signal(self) -> asyncio.Event:
        """Set once when the client is disposed."""
        return self._shutdown

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def init(self) -> None:
        """Initialize the address pool and acquire the first access token.

        Calling init() on an initialized client does nothing.

        Raises:
            ClientDisposedError: If the client was disposed, including by a
                dispose() call made while init() was still running.
            InitializationError: If the pool or token cache fails. The client
                is disposed before this is raised.
        """
        self._check_disposed()
        if self._state is LifecycleState.INITIALIZED:
            return

        try:
            await self._pool.init(self._shutdown)
            await self._tokens.init()
        except Exception as e:
            _logger.error(
                "client %s failed to initialize: %s",
                self.name,
                e,
                extra={"event": "client.init.error", "client": self.name},
            )
            self.dispose()
            raise InitializationError(f"Failed to initialize client {self.name}", cause=e) from e

        # dispose() may have run while the collaborators were initializing.
        if self._state is LifecycleState.DISPOSED:
            raise ClientDisposedError(f"Client {self.name} was disposed during init")
        self._state = LifecycleState.INITIALIZED
        _logger.debug("client %s initialized", self.name, extra={"event": "client.init", "client": self.name})

    def dispose(self) -> None:
        """Dispose the client and signal in-flight requests to abort.

        Idempotent; only the first call has any effect.
        """
        if self._state is LifecycleState.DISPOSED:
            return

        self._state = LifecycleState.DISPOSED
        self._shutdown.set()
        _logger.debug("client %s disposed", self.name, extra={"event": "client.dispose", "client": self.name})

    async def __aenter__(self) -> "NacosClient":
        await self.init()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()

    # =========================================================================
    # Requests
    # =========================================================================

    async def request(self, request: NacosRequest, cancel: asyncio.Event | None = None) -> str:
        """Send a request and return the raw response body.

        Args:
            request: The request to send.
            cancel: Optional event; setting it aborts the request.

        Returns:
            Response body text of the first 200 response.

        Raises:
            ClientDisposedError: If the client was disposed.
            ClientNotInitializedError: If init() has not succeeded.
            RequestCancelledError: If ``cancel`` fired or the client was disposed mid-request.
            ForbiddenError: If access is denied after a token refresh.
            NotFoundError: If the server answers 404.
            PoolExhaustedError: If every attempt failed.
        """
        self._check_disposed()
        self._check_initialized()
        return await self._dispatcher.dispatch(request, cancel)

    async def request_model(
        self,
        request: NacosRequest,
        model: type[ModelT],
        cancel: asyncio.Event | None = None,
    ) -> ModelT | None:
        """Send a request and decode the JSON body into ``model``.

        Returns:
            The decoded model, or None when the body is empty.

        Raises:
            NacosValidationError: If the body does not match ``model``.
            Plus everything ``request()`` raises.
        """
        body = await self.request(request, cancel)
        if not body.strip():
            return None
        try:
            return model.model_validate_json(body)
        except ValidationError as e:
            raise NacosValidationError(f"Invalid {model.__name__} response for {request}: {e}") from e

    def _check_disposed(self) -> None:
        if self._state is LifecycleState.DISPOSED:
            raise ClientDisposedError(f"Client {self.name} has been disposed")

    def _check_initialized(self) -> None:
        if self._state is not LifecycleState.INITIALIZED:
            raise ClientNotInitializedError(f"Client {self.name} must be initialized before use")
