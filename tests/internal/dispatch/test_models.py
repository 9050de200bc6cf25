"""Tests for dispatch request models."""

import pytest
from pydantic import ValidationError

from nacos_sdk._internal.address import ServerAddress
from nacos_sdk._internal.dispatch.models import Attempt, HttpMethod, NacosRequest

ADDRESS = ServerAddress(host="10.0.0.1", port=8848)


class TestHttpMethod:
    """Tests for HttpMethod enum."""

    def test_is_string_enum(self):
        """HttpMethod values compare equal to strings."""
        assert HttpMethod.GET == "GET"
        assert HttpMethod.DELETE.value == "DELETE"


class TestNacosRequest:
    """Tests for NacosRequest model."""

    def test_minimal_request(self):
        """Only the path is required."""
        request = NacosRequest(path="/nacos/v1/cs/configs")
        assert request.method == HttpMethod.GET
        assert request.headers == {}
        assert request.params is None
        assert request.body is None

    def test_path_must_be_absolute(self):
        """Should reject paths without a leading slash."""
        with pytest.raises(ValidationError) as exc_info:
            NacosRequest(path="nacos/v1/cs/configs")
        assert "must start with '/'" in str(exc_info.value)

    def test_rejects_unknown_fields(self):
        """Should reject unexpected fields."""
        with pytest.raises(ValidationError):
            NacosRequest(path="/x", timeout=3)

    def test_build_url_without_params(self):
        """Should join the address and path."""
        request = NacosRequest(path="/nacos/v1/ns/instance/list")
        assert request.build_url(ADDRESS) == "http://10.0.0.1:8848/nacos/v1/ns/instance/list"

    def test_build_url_with_params(self):
        """Should encode params into the query string."""
        request = NacosRequest(path="/nacos/v1/cs/configs", params={"dataId": "app.yaml", "group": "G 1"})
        assert request.build_url(ADDRESS) == "http://10.0.0.1:8848/nacos/v1/cs/configs?dataId=app.yaml&group=G+1"

    def test_build_url_under_context_path(self):
        """Request paths are appended to the address context path."""
        request = NacosRequest(path="/v1/cs/configs")
        address = ServerAddress.parse("http://10.0.0.1:8848/config-center")
        assert request.build_url(address) == "http://10.0.0.1:8848/config-center/v1/cs/configs"

    def test_form_body(self):
        """Dict bodies are form-encoded."""
        request = NacosRequest(method=HttpMethod.POST, path="/nacos/v1/cs/configs", body={"content": "a=b"})
        http_request = request.to_http_request(request.build_url(ADDRESS))
        assert http_request.method == "POST"
        assert http_request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert http_request.content == b"content=a%3Db"

    def test_raw_body(self):
        """String bodies are sent as is."""
        request = NacosRequest(method=HttpMethod.PUT, path="/x", body="raw", headers={"X-Test": "1"})
        http_request = request.to_http_request("http://h:1/x")
        assert http_request.content == b"raw"
        assert http_request.headers["x-test"] == "1"

    def test_describe_redacts_params(self):
        """Descriptions never include credentials."""
        request = NacosRequest(path="/x", params={"accessToken": "tok", "dataId": "app"})
        text = str(request)
        assert text.startswith("GET /x")
        assert "tok" not in text
        assert "app" in text


class TestAttempt:
    """Tests for Attempt record."""

    def test_is_frozen(self):
        """Attempts cannot be modified after creation."""
        attempt = Attempt(index=0, address=ADDRESS, outcome=500)
        with pytest.raises(AttributeError):
            attempt.index = 1  # type: ignore[misc]
