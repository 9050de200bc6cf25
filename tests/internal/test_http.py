"""Tests for the httpx transport."""

import httpx
import pytest
import respx

from nacos_sdk._internal.address import ServerAddress
from nacos_sdk._internal.http import (
    TRANSPORT_ERRORS,
    HttpxTransportFactory,
    Transport,
    TransportFactory,
    create_http_client,
)
from nacos_sdk._version import __version__

ADDRESS = ServerAddress(host="nacos.test", port=8848)


class TestCreateHttpClient:
    """Tests for create_http_client."""

    @pytest.mark.anyio
    async def test_sets_user_agent_and_base_url(self):
        """Should configure headers and base URL."""
        async with create_http_client(timeout=2.0, base_url=ADDRESS.http_uri) as client:
            assert client.headers["User-Agent"] == f"nacos-sdk-http/{__version__}"
            assert str(client.base_url) == "http://nacos.test:8848"
            assert client.timeout.read == 2.0


class TestHttpxTransport:
    """Tests for HttpxTransport."""

    def test_satisfies_protocols(self):
        """Factory and transport implement the dispatch protocols."""
        factory = HttpxTransportFactory()
        assert isinstance(factory, TransportFactory)
        assert isinstance(factory.open(ADDRESS), Transport)

    @pytest.mark.anyio
    async def test_send_returns_status_and_text(self):
        """Should return the status code and decoded body."""
        with respx.mock:
            route = respx.get("http://nacos.test:8848/nacos/v1/cs/configs").mock(
                return_value=httpx.Response(200, text="content")
            )
            async with HttpxTransportFactory().open(ADDRESS) as transport:
                response = await transport.send(
                    httpx.Request("GET", "http://nacos.test:8848/nacos/v1/cs/configs?dataId=a")
                )

        assert response.status_code == 200
        assert response.text == "content"
        assert route.calls.last.request.headers["user-agent"] == f"nacos-sdk-http/{__version__}"

    @pytest.mark.anyio
    async def test_non_200_is_returned_not_raised(self):
        """HTTP error statuses are data, not exceptions."""
        with respx.mock:
            respx.get("http://nacos.test:8848/x").mock(return_value=httpx.Response(503, text="busy"))
            async with HttpxTransportFactory().open(ADDRESS) as transport:
                response = await transport.send(httpx.Request("GET", "http://nacos.test:8848/x"))

        assert response.status_code == 503
        assert response.text == "busy"

    @pytest.mark.anyio
    async def test_network_error_propagates(self):
        """Connection failures raise httpx.TransportError."""
        with respx.mock:
            respx.get("http://nacos.test:8848/x").mock(side_effect=httpx.ConnectError("refused"))
            async with HttpxTransportFactory().open(ADDRESS) as transport:
                with pytest.raises(httpx.TransportError):
                    await transport.send(httpx.Request("GET", "http://nacos.test:8848/x"))

    @pytest.mark.anyio
    async def test_corrupt_body_is_a_transport_error(self):
        """Body decoding failures count as transport failures."""
        with respx.mock:
            respx.get("http://nacos.test:8848/x").mock(
                return_value=httpx.Response(
                    200, headers={"Content-Encoding": "gzip"}, stream=httpx.ByteStream(b"not gzip")
                )
            )
            async with HttpxTransportFactory().open(ADDRESS) as transport:
                with pytest.raises(TRANSPORT_ERRORS) as exc_info:
                    await transport.send(httpx.Request("GET", "http://nacos.test:8848/x"))

        assert isinstance(exc_info.value, httpx.DecodingError)
