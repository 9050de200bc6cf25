"""Request, response and attempt types used by the dispatch core."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from nacos_sdk._internal.dispatch.redaction import redact_payload

if TYPE_CHECKING:
    from nacos_sdk._internal.address import ServerAddress

# =============================================================================
# Request
# =============================================================================


class HttpMethod(str, Enum):
    """HTTP methods used by the Nacos open API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class NacosRequest(BaseModel):
    """Logical request against a Nacos server.

    The request is address-independent: the dispatch core renders it against
    whichever server address the pool currently points at.

    Attributes:
        method: HTTP method.
        path: Server-relative path (e.g. "/nacos/v1/cs/configs").
        headers: Extra request headers. Request signers add to these in place.
        params: Query parameters.
        body: Form fields (dict, form-encoded) or a raw string body.
    """

    model_config = ConfigDict(extra="forbid")

    method: HttpMethod = HttpMethod.GET
    path: str = Field(..., min_length=1)
    headers: dict[str, str] = Field(default_factory=dict)
    params: dict[str, str] | None = None
    body: dict[str, str] | str | None = None

    @field_validator("path")
    @classmethod
    def path_is_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("path must start with '/'")
        return v

    def build_url(self, address: "ServerAddress") -> str:
        """Render the absolute URL of this request for one server address."""
        url = f"{address.http_uri}{self.path}"
        if self.params:
            url = f"{url}?{urlencode(self.params)}"
        return url

    def to_http_request(self, url: str) -> httpx.Request:
        """Build the outgoing httpx request for an already rendered URL."""
        if isinstance(self.body, dict):
            return httpx.Request(self.method.value, url, headers=self.headers, data=self.body)
        return httpx.Request(self.method.value, url, headers=self.headers, content=self.body)

    def describe(self) -> str:
        """Log-safe one line description (credentials redacted)."""
        text = f"{self.method.value} {self.path}"
        if self.params:
            text += f" params={redact_payload(self.params)}"
        return text

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True, slots=True)
class Attempt:
    """One try of a dispatch call. Lives only inside that call."""

    index: int
    address: "ServerAddress"
    outcome: int | BaseException
