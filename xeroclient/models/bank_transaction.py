"""Bank transactions (spend and receive money)."""

from typing import ClassVar, Dict, List, Optional

from pydantic import Field

from xeroclient.models.base import Amount, XeroModel
from xeroclient.models.common import BankAccount, Contact, LineItem
from xeroclient.services.timefmt import today


class BankTransaction(XeroModel):
    """A bank transaction.

    ``date`` travels as ``DateString`` (``YYYY-MM-DDT00:00:00``), which the
    API already returns in RFC 3339; only ``UpdatedDateUTC`` uses the legacy
    format.
    """
    type: str = Field(..., alias="Type")
    contact: Contact = Field(..., alias="Contact")
    line_items: List[LineItem] = Field(default_factory=list, alias="LineItems")
    bank_account: Optional[BankAccount] = Field(None, alias="BankAccount")
    is_reconciled: Optional[bool] = Field(None, alias="IsReconciled")
    date: Optional[str] = Field(None, alias="DateString")
    reference: Optional[str] = Field(None, alias="Reference")
    currency_code: Optional[str] = Field(None, alias="CurrencyCode")
    currency_rate: Optional[Amount] = Field(None, alias="CurrencyRate")
    url: Optional[str] = Field(None, alias="Url")
    status: Optional[str] = Field(None, alias="Status")
    line_amount_types: Optional[str] = Field(None, alias="LineAmountTypes")
    sub_total: Optional[Amount] = Field(None, alias="SubTotal")
    total_tax: Optional[Amount] = Field(None, alias="TotalTax")
    total: Optional[Amount] = Field(None, alias="Total")
    bank_transaction_id: Optional[str] = Field(None, alias="BankTransactionID")
    prepayment_id: Optional[str] = Field(None, alias="PrepaymentID")
    overpayment_id: Optional[str] = Field(None, alias="OverpaymentID")
    updated_date_utc: Optional[str] = Field(None, alias="UpdatedDateUTC")
    has_attachments: Optional[bool] = Field(None, alias="HasAttachments")

    legacy_date_fields: ClassVar[Dict[str, bool]] = {"UpdatedDateUTC": True}


def example_bank_transaction() -> BankTransaction:
    """Build a sample RECEIVE transaction dated today."""
    return BankTransaction(
        type="RECEIVE",
        contact=Contact(name="George Costanza"),
        date=today(),
        line_items=[
            LineItem(
                description="Importing & Exporting Services",
                quantity="1.00",
                unit_amount="395.00",
                account_code="200",
            )
        ],
        bank_account=BankAccount(code="090"),
    )
