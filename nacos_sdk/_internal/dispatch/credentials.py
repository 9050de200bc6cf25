"""Attaching the access token to outgoing request URLs."""

from urllib.parse import urlsplit, urlunsplit

ACCESS_TOKEN_PARAM = "accessToken"


def attach_access_token(url: str, token: str) -> str:
    """Append the access token to the query string of ``url``.

    Args:
        url: The request URL, with or without a query string.
        token: Current access token. Empty or whitespace-only tokens are
            not attached.

    Returns:
        ``url`` with ``accessToken=<token>`` appended as the last query
        parameter, or ``url`` unchanged when there is no token.

    Example:
        >>> attach_access_token("http://a:8848/x?y=1", "abc")
        'http://a:8848/x?y=1&accessToken=abc'
    """
    if not token or not token.strip():
        return url

    parts = urlsplit(url)
    pair = f"{ACCESS_TOKEN_PARAM}={token}"
    query = f"{parts.query}&{pair}" if parts.query else pair
    return urlunsplit(parts._replace(query=query))
