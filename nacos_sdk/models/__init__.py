"""Public models for the Nacos SDK."""

from nacos_sdk._internal.address import ServerAddress
from nacos_sdk._internal.dispatch.models import HttpMethod, NacosRequest
from nacos_sdk.models.options import ClientOptions

__all__ = ["ClientOptions", "HttpMethod", "NacosRequest", "ServerAddress"]
