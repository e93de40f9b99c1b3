"""Uniform find / create / update / remove operations over entity collections.

``EntityEndpoint`` is written once and parametrized with a record type,
so every collection (bank transactions, journals, repeating invoices, ...)
goes through the same provider calls, throttling and error handling.
"""

import asyncio
import json
import logging
from datetime import datetime
from typing import Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from xeroclient.core.errors import XeroError
from xeroclient.models import BankTransaction, Journal, RepeatingInvoice, XeroModel
from xeroclient.services.provider import XeroProvider
from xeroclient.services.timefmt import modified_since_header

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=XeroModel)

READ_HEADERS = {"Accept": "application/json"}
WRITE_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}


class EntityEndpoint(Generic[T]):
    """Operations on one Xero entity collection.

    Example:
        ```python
        endpoint = EntityEndpoint(provider, BankTransaction, "BankTransactions",
                                  id_field="bank_transaction_id")
        recent = await endpoint.find_modified_since(datetime(2024, 1, 1))
        ```
    """

    def __init__(
        self,
        provider: XeroProvider,
        record_type: Type[T],
        path: str,
        collection_key: Optional[str] = None,
        id_field: Optional[str] = None,
    ):
        """Initialize EntityEndpoint.

        Args:
            provider: Request executor every call goes through
            record_type: Record class responses are decoded into
            path: Collection path, e.g. "BankTransactions"
            collection_key: Key of the record list in responses and bodies.
                Defaults to the path.
            id_field: Record attribute holding the identifier, needed by update
        """
        self.provider = provider
        self.record_type = record_type
        self.path = path.strip("/")
        self.collection_key = collection_key or self.path
        self.id_field = id_field

    # =========================================================================
    # Encoding
    # =========================================================================

    def decode(self, raw: bytes) -> List[T]:
        """Decode a response body into records, normalizing legacy dates.

        Raises:
            XeroError: If the body is not the expected JSON document
            MalformedTimestampError: If a legacy date cannot be parsed
        """
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise XeroError(f"Could not decode {self.path} response: {e}") from e

        if not isinstance(payload, dict):
            raise XeroError(f"Unexpected {self.path} response: {type(payload).__name__}")

        items = payload.get(self.collection_key) or []
        return [self.record_type.from_api(item) for item in items]

    def encode(self, records: Sequence[T]) -> bytes:
        body = {self.collection_key: [record.to_api() for record in records]}
        return json.dumps(body).encode("utf-8")

    def _identifier(self, record: T) -> str:
        if self.id_field is None:
            raise ValueError(f"{self.path} records cannot be updated: no id field")
        identifier = getattr(record, self.id_field, None)
        if not identifier:
            raise ValueError(f"{self.path} update requires {self.id_field} on the record")
        return identifier

    # =========================================================================
    # Operations
    # =========================================================================

    async def find(
        self,
        identifier: str,
        params: Optional[Mapping[str, str]] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> List[T]:
        """Get a single record by its ID or by an alternate key (e.g. a number)."""
        raw = await self.provider.find(
            f"{self.path}/{identifier}",
            READ_HEADERS,
            params,
            cancel=cancel,
            timeout=timeout,
        )
        return self.decode(raw)

    async def find_all(
        self,
        params: Optional[Mapping[str, str]] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> List[T]:
        """Get the collection; params such as where, order or page pass through."""
        return await self.find_modified_since(None, params, cancel=cancel, timeout=timeout)

    async def find_modified_since(
        self,
        modified_since: Optional[datetime],
        params: Optional[Mapping[str, str]] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> List[T]:
        """Get the records modified after an instant (all records for None)."""
        headers: Dict[str, str] = dict(READ_HEADERS)
        if modified_since is not None:
            headers["If-Modified-Since"] = modified_since_header(modified_since)

        raw = await self.provider.find(
            self.path,
            headers,
            dict(params) if params else None,
            cancel=cancel,
            timeout=timeout,
        )
        return self.decode(raw)

    async def create(
        self,
        records: Sequence[T],
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> List[T]:
        """Create records. Sending the same records twice creates them twice."""
        raw = await self.provider.create(
            self.path,
            self.encode(records),
            WRITE_HEADERS,
            cancel=cancel,
            timeout=timeout,
        )
        return self.decode(raw)

    async def update(
        self,
        records: Sequence[T],
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> List[T]:
        """Update an existing record.

        Only a single record can be updated per call: the request goes to the
        first record's identifier.
        """
        if not records:
            raise ValueError(f"{self.path} update requires a record")
        if len(records) > 1:
            logger.warning(
                f"{self.path} update called with {len(records)} records; "
                "only the first identifier is used"
            )

        identifier = self._identifier(records[0])
        raw = await self.provider.update(
            f"{self.path}/{identifier}",
            self.encode(records),
            WRITE_HEADERS,
            cancel=cancel,
            timeout=timeout,
        )
        return self.decode(raw)

    async def remove(
        self,
        identifier: str,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """Delete a record. Returns the raw response body."""
        return await self.provider.remove(
            f"{self.path}/{identifier}",
            READ_HEADERS,
            cancel=cancel,
            timeout=timeout,
        )

    def __repr__(self) -> str:
        return f"EntityEndpoint({self.record_type.__name__}, path={self.path!r})"


def bank_transactions(provider: XeroProvider) -> EntityEndpoint[BankTransaction]:
    return EntityEndpoint(
        provider, BankTransaction, "BankTransactions", id_field="bank_transaction_id"
    )


def journals(provider: XeroProvider) -> EntityEndpoint[Journal]:
    return EntityEndpoint(provider, Journal, "Journals", id_field="journal_id")


def repeating_invoices(provider: XeroProvider) -> EntityEndpoint[RepeatingInvoice]:
    return EntityEndpoint(
        provider, RepeatingInvoice, "RepeatingInvoices", id_field="repeating_invoice_id"
    )


__all__ = [
    "EntityEndpoint",
    "bank_transactions",
    "journals",
    "repeating_invoices",
]
