"""Request signers."""

import base64
import hashlib
import hmac
import time
from typing import Protocol, runtime_checkable

from nacos_sdk._internal.dispatch.models import NacosRequest
from nacos_sdk.exceptions import NacosConfigError, SigningError

ACCESS_KEY_HEADER = "Spas-AccessKey"
TIMESTAMP_HEADER = "timeStamp"
SIGNATURE_HEADER = "Spas-Signature"


@runtime_checkable
class RequestSigner(Protocol):
    """Attaches an authentication signature to a request in place."""

    async def sign(self, request: NacosRequest) -> None: ...


class NullRequestSigner:
    """Signer used when no access key profile is configured."""

    async def sign(self, request: NacosRequest) -> None:
        return None


class AcmRequestSigner:
    """Access key/secret key signer (Spas-* headers).

    The signed resource is ``tenant+group`` taken from the request params;
    when neither is present only the timestamp is signed.
    """

    def __init__(self, access_key: str, secret_key: str) -> None:
        if not access_key or not secret_key:
            raise NacosConfigError("access_key and secret_key are both required for request signing")
        self._access_key = access_key
        self._secret_key = secret_key

    async def sign(self, request: NacosRequest) -> None:
        try:
            timestamp = str(int(time.time() * 1000))
            params = request.params or {}
            resource = "+".join(part for part in (params.get("tenant"), params.get("group")) if part)
            sign_data = f"{resource}+{timestamp}" if resource else timestamp

            request.headers[ACCESS_KEY_HEADER] = self._access_key
            request.headers[TIMESTAMP_HEADER] = timestamp
            request.headers[SIGNATURE_HEADER] = self.signature(sign_data)
        except Exception as e:
            raise SigningError(f"Failed to sign request {request}") from e

    def signature(self, data: str) -> str:
        """HMAC-SHA1 of ``data`` keyed with the secret key, base64 encoded."""
        digest = hmac.new(self._secret_key.encode(), data.encode(), hashlib.sha1).digest()
        return base64.b64encode(digest).decode("ascii")
