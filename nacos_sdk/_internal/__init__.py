"""Internal modules for the Nacos SDK.

WARNING: This package contains system-level modules used by NacosClient.
These are not intended for direct use in application code.

Modules:
    dispatch - Attempt loop, credential attachment, redaction
    address - Server address pool
    auth - Access token cache and request signers
    http - Shared HTTP client configuration and transports
    log - Logger helpers
"""
