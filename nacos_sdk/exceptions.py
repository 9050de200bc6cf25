"""Public exceptions for the Nacos SDK."""

from typing import Any


class NacosError(Exception):
    """Base exception for all Nacos SDK errors."""


class NacosConfigError(NacosError):
    """Configuration error (missing env vars, invalid options)."""


class NacosValidationError(NacosError):
    """Validation error for request/response data."""


class ClientNotInitializedError(NacosError):
    """Client used before a successful init()."""


class ClientDisposedError(NacosError):
    """Client used after dispose()."""


class NacosTransportError(NacosError):
    """Network failure while talking to a single server address."""


class NacosAPIError(NacosError):
    """Error response from the Nacos server."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ForbiddenError(NacosAPIError):
    """Access rejected by the server even after refreshing the access token."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=403)


class NotFoundError(NacosAPIError):
    """Requested resource does not exist."""

    def __init__(self, message: str, request: Any = None) -> None:
        super().__init__(message, status_code=404)
        self.request = request


class PoolExhaustedError(NacosError):
    """Attempt budget spent without a successful response."""

    def __init__(self, message: str, request: Any = None) -> None:
        super().__init__(message)
        self.request = request


class InitializationError(NacosError):
    """Client failed to initialize. The client is disposed when this is raised."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class TokenError(NacosError):
    """Access token could not be acquired."""


class SigningError(NacosError):
    """Request signer failed to sign a request."""


class RequestCancelledError(NacosError):
    """Request aborted by a cancel signal or by client shutdown."""
