"""Logging helpers for the Nacos SDK."""

import logging
import sys

ROOT_LOGGER_NAME = "nacos_sdk"
DEBUG_FORMAT = "[nacos-sdk] %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``nacos_sdk`` namespace.

    Args:
        name: Dotted suffix (e.g. "dispatch") or a full ``nacos_sdk.*`` name.

    Returns:
        The logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def enable_debug_logging() -> logging.Handler:
    """Send SDK debug logs to stderr.

    Safe to call more than once; only one stderr handler is ever attached.

    Returns:
        The stderr handler attached to the ``nacos_sdk`` logger.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root.handlers:
        if getattr(handler, "_nacos_debug", False):
            return handler

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
    handler._nacos_debug = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    return handler
