"""Tests for the error hierarchy and describe_error()."""

import pytest

from xeroclient.core.errors import (
    ErrorCode,
    MalformedTimestampError,
    XeroAPIError,
    XeroCancelledError,
    XeroEmptyResponseError,
    XeroError,
    XeroRateLimitError,
    XeroTransportError,
    describe_error,
)


class TestHierarchy:
    """Every client failure is a XeroError."""

    @pytest.mark.parametrize(
        "exc",
        [
            XeroTransportError("down"),
            XeroAPIError("bad", status_code=400),
            XeroRateLimitError("slow down"),
            XeroEmptyResponseError("empty"),
            MalformedTimestampError("/Date(x)/"),
            XeroCancelledError("cancelled"),
        ],
    )
    def test_is_xero_error(self, exc):
        assert isinstance(exc, XeroError)

    def test_rate_limit_is_api_error(self):
        exc = XeroRateLimitError("slow down", body="{}", retry_after=3, attempts=2)

        assert isinstance(exc, XeroAPIError)
        assert exc.status_code == 429
        assert exc.retry_after == 3
        assert exc.attempts == 2


class TestDescribeError:
    """Tests for describe_error()."""

    def test_api_error(self):
        detail = describe_error(XeroAPIError('{"Message":"nope"}', 400, body='{"Message":"nope"}'))

        assert detail.error_code == "API_ERROR"
        assert detail.status_code == 400
        assert detail.details == {"body": '{"Message":"nope"}'}
        assert detail.is_retryable is False
        assert detail.suggested_action

    def test_rate_limited(self):
        detail = describe_error(XeroRateLimitError("throttled", retry_after=30, attempts=6))

        assert detail.error_code == ErrorCode.RATE_LIMITED.value
        assert detail.retry_after == 30
        assert detail.details == {"attempts": 6}
        assert detail.is_retryable is True

    def test_malformed_timestamp(self):
        detail = describe_error(MalformedTimestampError("/Date(abc)/"))

        assert detail.error_code == "MALFORMED_TIMESTAMP"
        assert detail.details == {"value": "/Date(abc)/"}
        assert "/Date(abc)/" in detail.message

    def test_transport_error_is_retryable(self):
        assert describe_error(XeroTransportError("reset")).is_retryable is True

    def test_cancelled_is_not_retryable(self):
        detail = describe_error(XeroCancelledError("cancelled"))

        assert detail.error_code == "CANCELLED"
        assert detail.is_retryable is False
        assert detail.details is None

    def test_foreign_exception(self):
        """Exceptions from outside the client are reported as internal errors."""
        detail = describe_error(RuntimeError())

        assert detail.error_code == "INTERNAL_ERROR"
        assert detail.message == detail.suggested_action
        assert detail.status_code is None
