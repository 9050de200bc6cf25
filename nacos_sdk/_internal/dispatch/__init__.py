"""Request dispatch core for the Nacos HTTP client.

WARNING: This is a system-level module used by NacosClient.
Do not call directly from user code.
"""

from nacos_sdk._internal.dispatch.core import Dispatcher
from nacos_sdk._internal.dispatch.credentials import ACCESS_TOKEN_PARAM, attach_access_token
from nacos_sdk._internal.dispatch.models import Attempt, HttpMethod, NacosRequest

__all__ = [
    "Dispatcher",
    "attach_access_token",
    "ACCESS_TOKEN_PARAM",
    "Attempt",
    "HttpMethod",
    "NacosRequest",
]
