"""Access tokens and request signing for Nacos servers."""

from nacos_sdk._internal.auth.signer import AcmRequestSigner, NullRequestSigner, RequestSigner
from nacos_sdk._internal.auth.token import AccessTokenCache, NoneTokenCache, TokenCache

__all__ = [
    "TokenCache",
    "AccessTokenCache",
    "NoneTokenCache",
    "RequestSigner",
    "AcmRequestSigner",
    "NullRequestSigner",
]
