"""Tests for public exceptions."""

import pytest

from nacos_sdk.exceptions import (
    ClientDisposedError,
    ClientNotInitializedError,
    ForbiddenError,
    InitializationError,
    NacosAPIError,
    NacosConfigError,
    NacosError,
    NacosTransportError,
    NacosValidationError,
    NotFoundError,
    PoolExhaustedError,
    RequestCancelledError,
    SigningError,
    TokenError,
)


class TestNacosError:
    """Tests for base NacosError."""

    def test_is_exception(self):
        """NacosError should be an Exception."""
        assert issubclass(NacosError, Exception)

    def test_can_be_raised(self):
        """NacosError should be raisable with message."""
        with pytest.raises(NacosError) as exc_info:
            raise NacosError("test error")
        assert str(exc_info.value) == "test error"

    @pytest.mark.parametrize(
        "error_type",
        [
            NacosConfigError,
            NacosValidationError,
            NacosTransportError,
            ClientNotInitializedError,
            ClientDisposedError,
            PoolExhaustedError,
            InitializationError,
            TokenError,
            SigningError,
            RequestCancelledError,
        ],
    )
    def test_subclasses(self, error_type):
        """Every SDK error should be catchable as NacosError."""
        assert issubclass(error_type, NacosError)


class TestNacosAPIError:
    """Tests for NacosAPIError."""

    def test_with_message_only(self):
        """Should create error with message only."""
        error = NacosAPIError("API request failed")
        assert str(error) == "API request failed"
        assert error.status_code is None

    def test_with_status_code(self):
        """Should store status code."""
        error = NacosAPIError("Server error", status_code=500)
        assert error.status_code == 500

    def test_forbidden(self):
        """ForbiddenError carries status 403."""
        error = ForbiddenError("denied")
        assert isinstance(error, NacosAPIError)
        assert error.status_code == 403

    def test_not_found(self):
        """NotFoundError carries status 404 and the request."""
        error = NotFoundError("missing", request="GET /x")
        assert isinstance(error, NacosAPIError)
        assert error.status_code == 404
        assert error.request == "GET /x"

    def test_can_be_caught_as_nacos_error(self):
        """Should be catchable as NacosError."""
        with pytest.raises(NacosError):
            raise NotFoundError("missing")


class TestPoolExhaustedError:
    """Tests for PoolExhaustedError."""

    def test_stores_request(self):
        """Should keep the failed request."""
        error = PoolExhaustedError("all failed", request="GET /x")
        assert str(error) == "all failed"
        assert error.request == "GET /x"


class TestInitializationError:
    """Tests for InitializationError."""

    def test_stores_cause(self):
        """Should keep the underlying failure."""
        cause = TokenError("login refused")
        error = InitializationError("init failed", cause=cause)
        assert error.cause is cause

    def test_cause_defaults_to_none(self):
        """Cause is optional."""
        assert InitializationError("init failed").cause is None
