"""Nacos SDK for Python.

This SDK provides a resilient HTTP client for Nacos clusters.

Public API:
    NacosClient - Lifecycle-managed client with failover and token refresh
    ClientOptions - Client configuration
    NacosRequest - Logical request sent through the client

Internal (system-level, not for direct use):
    _internal.dispatch - Attempt loop and credential attachment
"""

from nacos_sdk._version import __version__
from nacos_sdk.client import LifecycleState, NacosClient
from nacos_sdk.exceptions import (
    ClientDisposedError,
    ClientNotInitializedError,
    ForbiddenError,
    InitializationError,
    NacosAPIError,
    NacosConfigError,
    NacosError,
    NacosTransportError,
    NacosValidationError,
    NotFoundError,
    PoolExhaustedError,
    RequestCancelledError,
    SigningError,
    TokenError,
)
from nacos_sdk.models import ClientOptions, HttpMethod, NacosRequest, ServerAddress

__all__ = [
    "__version__",
    "NacosClient",
    "LifecycleState",
    "ClientOptions",
    "HttpMethod",
    "NacosRequest",
    "ServerAddress",
    "NacosError",
    "NacosAPIError",
    "NacosConfigError",
    "NacosValidationError",
    "NacosTransportError",
    "ClientNotInitializedError",
    "ClientDisposedError",
    "ForbiddenError",
    "NotFoundError",
    "PoolExhaustedError",
    "InitializationError",
    "TokenError",
    "SigningError",
    "RequestCancelledError",
]
