"""Error types raised by the API access layer, with suggested actions.

Every failure surfaced by the client derives from ``XeroError`` and carries an
``ErrorCode``. ``describe_error`` turns any of them into a structured
``ErrorDetail`` that callers can log or show to an operator.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Standardized error codes for the client."""

    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    API_ERROR = "API_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    EMPTY_RESPONSE = "EMPTY_RESPONSE"
    MALFORMED_TIMESTAMP = "MALFORMED_TIMESTAMP"
    CANCELLED = "CANCELLED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """Structured description of a client error.

    Attributes:
        error_code: Machine-readable error code
        message: Human-readable error message
        status_code: HTTP status of the response, when there was one
        details: Additional error details
        retry_after: Seconds the server asked us to wait (for rate limits)
        suggested_action: Actionable suggestion for the operator
        is_retryable: Whether the operation can be retried by the caller
    """
    error_code: str
    message: str
    status_code: Optional[int] = None
    details: Optional[Dict[str, Any]] = None
    retry_after: Optional[float] = None
    suggested_action: Optional[str] = None
    is_retryable: bool = False


SUGGESTED_ACTIONS = {
    ErrorCode.TRANSPORT_ERROR: "Could not reach the Xero API. Check network connectivity and try again.",
    ErrorCode.API_ERROR: "The Xero API rejected the request. Review the response body for details.",
    ErrorCode.RATE_LIMITED: "Too many requests for this organisation. Wait before trying again.",
    ErrorCode.EMPTY_RESPONSE: "The Xero API returned an empty response. Try the request again.",
    ErrorCode.MALFORMED_TIMESTAMP: "A date returned by the Xero API could not be parsed.",
    ErrorCode.CANCELLED: "The request was cancelled before it completed.",
    ErrorCode.INTERNAL_ERROR: "An internal error occurred.",
}

RETRYABLE_ERRORS = {
    ErrorCode.TRANSPORT_ERROR,
    ErrorCode.RATE_LIMITED,
    ErrorCode.EMPTY_RESPONSE,
}


class XeroError(Exception):
    """Base exception for Xero API access errors."""

    error_code = ErrorCode.INTERNAL_ERROR


class XeroTransportError(XeroError):
    """Raised when no response was received (connection failure, timeout)."""

    error_code = ErrorCode.TRANSPORT_ERROR


class XeroAPIError(XeroError):
    """Raised when the API answers with a status other than 200."""

    error_code = ErrorCode.API_ERROR

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class XeroRateLimitError(XeroAPIError):
    """Raised when a 429 response is not (or no longer) retried."""

    error_code = ErrorCode.RATE_LIMITED

    def __init__(
        self,
        message: str,
        body: str = "",
        retry_after: Optional[float] = None,
        attempts: int = 1,
    ):
        super().__init__(message, status_code=429, body=body)
        self.retry_after = retry_after
        self.attempts = attempts


class XeroEmptyResponseError(XeroError):
    """Raised when a 200 response carries no body."""

    error_code = ErrorCode.EMPTY_RESPONSE


class MalformedTimestampError(XeroError, ValueError):
    """Raised when a legacy ``/Date(...)/`` string cannot be parsed."""

    error_code = ErrorCode.MALFORMED_TIMESTAMP

    def __init__(self, value: str):
        super().__init__(f"Malformed timestamp: {value!r}")
        self.value = value


class XeroCancelledError(XeroError):
    """Raised when the caller cancels a request or its deadline passes."""

    error_code = ErrorCode.CANCELLED


def describe_error(exc: BaseException) -> ErrorDetail:
    """Build an ``ErrorDetail`` for an exception raised by the client.

    Args:
        exc: The exception to describe

    Returns:
        ErrorDetail with suggested action
    """
    error_code = getattr(exc, "error_code", ErrorCode.INTERNAL_ERROR)
    suggested_action = SUGGESTED_ACTIONS.get(error_code)

    details: Dict[str, Any] = {}
    if isinstance(exc, XeroAPIError) and exc.body:
        details["body"] = exc.body
    if isinstance(exc, XeroRateLimitError):
        details["attempts"] = exc.attempts
    if isinstance(exc, MalformedTimestampError):
        details["value"] = exc.value

    return ErrorDetail(
        error_code=error_code.value,
        message=str(exc) or suggested_action or "An error occurred",
        status_code=getattr(exc, "status_code", None),
        details=details or None,
        retry_after=getattr(exc, "retry_after", None),
        suggested_action=suggested_action,
        is_retryable=error_code in RETRYABLE_ERRORS,
    )
