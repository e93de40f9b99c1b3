"""Tests for the generic entity endpoint and the typed records.

Tests cover:
- find / find_all / find_modified_since request shapes
- create / update / remove verbs and bodies
- Decoding with legacy timestamp normalization, nested records included
- Error propagation from the executor and malformed data
"""

import json
from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest

from xeroclient.core.errors import MalformedTimestampError, XeroAPIError, XeroError
from xeroclient.models import (
    BankTransaction,
    Contact,
    Journal,
    LineItem,
    RepeatingInvoice,
    example_bank_transaction,
)
from xeroclient.services.entities import (
    EntityEndpoint,
    bank_transactions,
    journals,
    repeating_invoices,
)

BANK_TRANSACTION = {
    "BankTransactionID": "d20b6c54-7f5d-4ce6-ab83-55f609719126",
    "Type": "SPEND",
    "Contact": {"ContactID": "6d42f03b-181f-43e3-93fb-2025c012de92", "Name": "Wilson Periodicals"},
    "LineItems": [
        {"Description": "Monthly account fee", "UnitAmount": 49.9, "AccountCode": "404", "Quantity": 1}
    ],
    "BankAccount": {"AccountID": "bd9e85e0-0478-433d-ae9f-0b3c4f04bfe4", "Code": "090"},
    "DateString": "2017-05-08T00:00:00",
    "Status": "AUTHORISED",
    "Total": 49.9,
    "UpdatedDateUTC": "/Date(1494201600000+0000)/",
}

JOURNAL = {
    "JournalID": "8b5c4f7e-7a51-4cfb-8d4b-8a0b0e5a9d2f",
    "JournalDate": "/Date(1494201600000+0000)/",
    "JournalNumber": 42,
    "CreatedDateUTC": "/Date(1494205200000+0000)/",
    "JournalLines": [
        {
            "JournalLineID": "line-1",
            "AccountID": "acc-1",
            "AccountCode": "200",
            "AccountType": "REVENUE",
            "AccountName": "Sales",
            "NetAmount": -100.0,
            "GrossAmount": -115.0,
            "TaxAmount": -15.0,
        }
    ],
}

REPEATING_INVOICE = {
    "RepeatingInvoiceID": "ri-1",
    "Type": "ACCREC",
    "Contact": {"Name": "Ridgeway University"},
    "Schedule": {
        "Period": 1,
        "Unit": "MONTHLY",
        "DueDate": 20,
        "StartDate": "/Date(1494201600000+0000)/",
        "NextScheduledDate": "/Date(1496880000000+0000)/",
    },
}


def recorder(payload, status_code=200):
    """Handler returning ``payload`` and remembering every request."""
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(status_code, json=payload)

    return handler, seen


# =============================================================================
# Reads
# =============================================================================


class TestFind:
    """Tests for find()."""

    @pytest.mark.asyncio
    async def test_find_by_identifier(self, make_provider):
        handler, seen = recorder({"BankTransactions": [BANK_TRANSACTION]})
        endpoint = bank_transactions(make_provider(handler))

        records = await endpoint.find("d20b6c54-7f5d-4ce6-ab83-55f609719126")

        assert seen[0].method == "GET"
        assert seen[0].url.path.endswith("/BankTransactions/d20b6c54-7f5d-4ce6-ab83-55f609719126")
        assert seen[0].headers["Accept"] == "application/json"
        assert len(records) == 1
        assert isinstance(records[0], BankTransaction)

    @pytest.mark.asyncio
    async def test_find_by_alternate_key(self, make_provider):
        """Human-readable keys such as invoice numbers go in the same place."""
        handler, seen = recorder({"BankTransactions": []})
        endpoint = bank_transactions(make_provider(handler))

        await endpoint.find("INV-0042")

        assert seen[0].url.path.endswith("/BankTransactions/INV-0042")

    @pytest.mark.asyncio
    async def test_legacy_dates_are_normalized(self, make_provider):
        handler, _ = recorder({"BankTransactions": [BANK_TRANSACTION]})
        endpoint = bank_transactions(make_provider(handler))

        record = (await endpoint.find("x"))[0]

        assert record.updated_date_utc == "2017-05-08T00:00:00Z"
        assert record.date == "2017-05-08T00:00:00"
        assert record.contact.name == "Wilson Periodicals"
        assert record.line_items[0].unit_amount == Decimal("49.9")

    @pytest.mark.asyncio
    async def test_malformed_date_propagates(self, make_provider):
        broken = dict(BANK_TRANSACTION, UpdatedDateUTC="/Date(yesterday)/")
        handler, _ = recorder({"BankTransactions": [broken]})
        endpoint = bank_transactions(make_provider(handler))

        with pytest.raises(MalformedTimestampError):
            await endpoint.find("x")

    @pytest.mark.asyncio
    async def test_api_errors_propagate(self, make_provider):
        handler, _ = recorder({"Message": "not found"}, status_code=404)
        endpoint = bank_transactions(make_provider(handler))

        with pytest.raises(XeroAPIError) as exc_info:
            await endpoint.find("missing")

        assert exc_info.value.status_code == 404


class TestFindAll:
    """Tests for find_all() and find_modified_since()."""

    @pytest.mark.asyncio
    async def test_filters_pass_through_as_query(self, make_provider):
        handler, seen = recorder({"BankTransactions": [BANK_TRANSACTION, BANK_TRANSACTION]})
        endpoint = bank_transactions(make_provider(handler))
        params = {"where": 'Type=="SPEND"', "page": "1", "order": "Date DESC"}

        records = await endpoint.find_all(params)

        assert len(records) == 2
        assert seen[0].url.path.endswith("/BankTransactions")
        assert dict(seen[0].url.params) == params
        assert "If-Modified-Since" not in seen[0].headers
        assert params == {"where": 'Type=="SPEND"', "page": "1", "order": "Date DESC"}

    @pytest.mark.asyncio
    async def test_modified_since_is_a_header(self, make_provider):
        handler, seen = recorder({"BankTransactions": []})
        endpoint = bank_transactions(make_provider(handler))

        await endpoint.find_modified_since(
            datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc), {"page": "3"}
        )

        assert seen[0].headers["If-Modified-Since"] == "2024-01-02T03:04:05Z"
        assert "If-Modified-Since" not in seen[0].url.params
        assert seen[0].url.params["page"] == "3"

    @pytest.mark.asyncio
    async def test_missing_collection_is_empty(self, make_provider):
        handler, _ = recorder({"Status": "OK"})
        endpoint = bank_transactions(make_provider(handler))

        assert await endpoint.find_all() == []

    @pytest.mark.asyncio
    async def test_non_json_body(self, make_provider):
        provider = make_provider(lambda request: httpx.Response(200, content=b"<xml/>"))

        with pytest.raises(XeroError):
            await bank_transactions(provider).find_all()

    @pytest.mark.asyncio
    async def test_non_object_body(self, make_provider):
        handler, _ = recorder([1, 2, 3])

        with pytest.raises(XeroError):
            await bank_transactions(make_provider(handler)).find_all()


# =============================================================================
# Writes
# =============================================================================


class TestWrites:
    """Tests for create(), update() and remove()."""

    @pytest.mark.asyncio
    async def test_create_puts_collection(self, make_provider):
        handler, seen = recorder({"BankTransactions": [BANK_TRANSACTION]})
        endpoint = bank_transactions(make_provider(handler))
        record = example_bank_transaction()

        created = await endpoint.create([record])

        request = seen[0]
        assert request.method == "PUT"
        assert request.url.path.endswith("/BankTransactions")
        assert request.headers["Content-Type"] == "application/json"
        body = json.loads(request.content)
        sent = body["BankTransactions"][0]
        assert sent["Type"] == "RECEIVE"
        assert sent["Contact"] == {"Name": "George Costanza"}
        assert sent["LineItems"][0]["UnitAmount"] == "395.00"
        assert sent["BankAccount"] == {"Code": "090"}
        assert not sent["DateString"].endswith("Z")
        assert "BankTransactionID" not in sent
        assert created[0].bank_transaction_id == BANK_TRANSACTION["BankTransactionID"]

    @pytest.mark.asyncio
    async def test_create_is_not_deduplicated(self, make_provider):
        handler, seen = recorder({"BankTransactions": [BANK_TRANSACTION]})
        endpoint = bank_transactions(make_provider(handler))
        record = example_bank_transaction()

        await endpoint.create([record])
        await endpoint.create([record])

        assert len(seen) == 2
        assert seen[0].content == seen[1].content

    @pytest.mark.asyncio
    async def test_update_posts_to_first_identifier(self, make_provider, caplog):
        handler, seen = recorder({"BankTransactions": [BANK_TRANSACTION]})
        endpoint = bank_transactions(make_provider(handler))
        first = BankTransaction.from_api(BANK_TRANSACTION)
        second = first.model_copy(update={"bank_transaction_id": "other-id"})

        await endpoint.update([first, second])

        assert seen[0].method == "POST"
        assert seen[0].url.path.endswith(f"/BankTransactions/{BANK_TRANSACTION['BankTransactionID']}")
        assert "only the first identifier" in caplog.text

    @pytest.mark.asyncio
    async def test_update_requires_identifier(self, make_provider):
        handler, seen = recorder({"BankTransactions": []})
        endpoint = bank_transactions(make_provider(handler))

        with pytest.raises(ValueError):
            await endpoint.update([example_bank_transaction()])
        with pytest.raises(ValueError):
            await endpoint.update([])

        assert seen == []

    @pytest.mark.asyncio
    async def test_update_without_id_field(self, make_provider):
        handler, _ = recorder({"Contacts": []})
        endpoint = EntityEndpoint(make_provider(handler), Contact, "Contacts")

        with pytest.raises(ValueError):
            await endpoint.update([Contact(contact_id="c-1")])

    @pytest.mark.asyncio
    async def test_remove_deletes_by_identifier(self, make_provider):
        provider = make_provider(lambda request: httpx.Response(200, content=b'{"Status":"OK"}'))
        endpoint = bank_transactions(provider)

        raw = await endpoint.remove("abc")

        assert raw == b'{"Status":"OK"}'


# =============================================================================
# Other collections
# =============================================================================


class TestOtherCollections:
    """The same endpoint serves every record type."""

    @pytest.mark.asyncio
    async def test_journals_with_lines(self, make_provider):
        handler, seen = recorder({"Journals": [JOURNAL]})
        endpoint = journals(make_provider(handler))

        journal = (await endpoint.find_all({"offset": "100"}))[0]

        assert isinstance(journal, Journal)
        assert journal.journal_date == "2017-05-08T00:00:00"
        assert journal.created_date_utc == "2017-05-08T01:00:00Z"
        assert journal.journal_lines[0].gross_amount == Decimal("-115.0")
        assert seen[0].url.params["offset"] == "100"

    @pytest.mark.asyncio
    async def test_nested_schedule_dates_are_normalized(self, make_provider):
        handler, _ = recorder({"RepeatingInvoices": [REPEATING_INVOICE]})
        endpoint = repeating_invoices(make_provider(handler))

        invoice = (await endpoint.find("ri-1"))[0]

        assert isinstance(invoice, RepeatingInvoice)
        assert invoice.schedule.start_date == "2017-05-08T00:00:00"
        assert invoice.schedule.next_scheduled_date == "2017-06-08T00:00:00"
        assert invoice.schedule.end_date is None

    def test_repr(self, make_provider):
        endpoint = journals(make_provider(lambda request: httpx.Response(200)))
        assert repr(endpoint) == "EntityEndpoint(Journal, path='Journals')"


class TestRecords:
    """Tests for record helpers."""

    def test_unknown_fields_are_kept(self):
        record = BankTransaction.from_api(dict(BANK_TRANSACTION, Brand="new"))

        assert record.to_api()["Brand"] == "new"

    def test_to_api_uses_aliases_and_skips_none(self):
        data = Contact(name="Marine Systems").to_api()

        assert data == {"Name": "Marine Systems"}

    def test_amounts_are_written_exactly(self):
        """Amounts keep every digit; they never pass through float."""
        amount = Decimal("12345678901234.5678")
        line = LineItem(unit_amount=amount, line_amount=Decimal("395.00"))

        data = line.to_api()

        assert data["UnitAmount"] == "12345678901234.5678"
        assert data["LineAmount"] == "395.00"
        assert LineItem.from_api(json.loads(json.dumps(data))).unit_amount == amount

    def test_normalize_dates_leaves_input_untouched(self):
        original = dict(BANK_TRANSACTION)

        BankTransaction.normalize_dates(original)

        assert original["UpdatedDateUTC"] == "/Date(1494201600000+0000)/"
