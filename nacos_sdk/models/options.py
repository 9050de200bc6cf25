"""Client configuration."""

import os
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from nacos_sdk.exceptions import NacosConfigError

DEFAULT_CLIENT_NAME = "nacos-http-client"
DEFAULT_TIMEOUT_MS = 5000


class ClientOptions(BaseModel):
    """Options for NacosClient.

    Required fields:
        server_addresses: Server addresses ("host", "host:port" or
            "http://host:port"). At least one.

    Optional fields:
        client_name: Name used in log output.
        username / password: Enables access token auth (both or neither).
        access_key / secret_key: Enables request signing (both or neither).
        timeout_ms: Per-attempt request timeout in milliseconds.
        debug: Send SDK debug logs to stderr.
    """

    client_name: str = DEFAULT_CLIENT_NAME
    server_addresses: list[str] = Field(min_length=1)
    username: str | None = None
    password: str | None = None
    access_key: str | None = None
    secret_key: str | None = None
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    debug: bool = False

    @model_validator(mode="after")
    def credentials_are_paired(self) -> "ClientOptions":
        if bool(self.username) != bool(self.password):
            raise ValueError("username and password must be set together")
        if bool(self.access_key) != bool(self.secret_key):
            raise ValueError("access_key and secret_key must be set together")
        return self

    def __init__(self, **data: Any) -> None:
        """Validate options.

        Raises:
            NacosConfigError: If any option is missing or invalid.
        """
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise NacosConfigError(f"Invalid client options: {e}") from e

    @classmethod
    def from_env(cls) -> "ClientOptions":
        """Create options from environment variables.

        Required environment variables:
            NACOS_SERVER_ADDR: Comma separated server addresses.

        Optional environment variables:
            NACOS_CLIENT_NAME: Client name for log output.
            NACOS_USERNAME / NACOS_PASSWORD: Access token auth credentials.
            NACOS_ACCESS_KEY / NACOS_SECRET_KEY: Request signing keys.
            NACOS_TIMEOUT_MS: Request timeout in milliseconds.
            NACOS_DEBUG: Set to "1" to enable debug logging.

        Raises:
            NacosConfigError: If required variables are missing or invalid.
            ValueError: If NACOS_TIMEOUT_MS is not an integer.
        """
        server_addr = os.environ.get("NACOS_SERVER_ADDR", "")
        addresses = [a.strip() for a in server_addr.split(",") if a.strip()]
        timeout_ms = int(os.environ.get("NACOS_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))

        return cls(
            client_name=os.environ.get("NACOS_CLIENT_NAME", DEFAULT_CLIENT_NAME),
            server_addresses=addresses,
            username=os.environ.get("NACOS_USERNAME") or None,
            password=os.environ.get("NACOS_PASSWORD") or None,
            access_key=os.environ.get("NACOS_ACCESS_KEY") or None,
            secret_key=os.environ.get("NACOS_SECRET_KEY") or None,
            timeout_ms=timeout_ms,
            debug=os.environ.get("NACOS_DEBUG", "") == "1",
        )
