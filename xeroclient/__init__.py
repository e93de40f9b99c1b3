"""Client layer for the Xero accounting API."""

from xeroclient.core.errors import (
    MalformedTimestampError,
    XeroAPIError,
    XeroCancelledError,
    XeroEmptyResponseError,
    XeroError,
    XeroRateLimitError,
    XeroTransportError,
)
from xeroclient.services.backoff import BackoffHandler
from xeroclient.services.entities import (
    EntityEndpoint,
    bank_transactions,
    journals,
    repeating_invoices,
)
from xeroclient.services.provider import XeroProvider
from xeroclient.services.rate_window import RateWindow, RateWindowRegistry
from xeroclient.services.reports import ReportRunner

__version__ = "0.1.0"

__all__ = [
    "BackoffHandler",
    "EntityEndpoint",
    "MalformedTimestampError",
    "RateWindow",
    "RateWindowRegistry",
    "ReportRunner",
    "XeroAPIError",
    "XeroCancelledError",
    "XeroEmptyResponseError",
    "XeroError",
    "XeroProvider",
    "XeroRateLimitError",
    "XeroTransportError",
    "bank_transactions",
    "journals",
    "repeating_invoices",
]
