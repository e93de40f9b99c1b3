"""Journals and their lines (read only)."""

from typing import ClassVar, Dict, List, Optional

from pydantic import Field

from xeroclient.models.base import Amount, XeroModel
from xeroclient.models.common import TrackingCategory


class JournalLine(XeroModel):
    """A line on a journal."""
    journal_line_id: str = Field(..., alias="JournalLineID")
    account_id: str = Field(..., alias="AccountID")
    account_code: str = Field(..., alias="AccountCode")
    account_type: str = Field(..., alias="AccountType")
    account_name: str = Field(..., alias="AccountName")
    description: Optional[str] = Field(None, alias="Description")
    net_amount: Amount = Field(..., alias="NetAmount")
    gross_amount: Amount = Field(..., alias="GrossAmount")
    tax_amount: Optional[Amount] = Field(None, alias="TaxAmount")
    tax_type: Optional[str] = Field(None, alias="TaxType")
    tax_name: Optional[str] = Field(None, alias="TaxName")
    tracking_categories: Optional[List[TrackingCategory]] = Field(
        None, alias="TrackingCategories"
    )


class Journal(XeroModel):
    """A journal posted to the general ledger.

    ``JournalDate`` has no zone on the Xero side, so it is normalized without
    the UTC suffix; ``CreatedDateUTC`` keeps it.
    """
    journal_id: str = Field(..., alias="JournalID")
    journal_date: Optional[str] = Field(None, alias="JournalDate")
    journal_number: Optional[int] = Field(None, alias="JournalNumber")
    created_date_utc: Optional[str] = Field(None, alias="CreatedDateUTC")
    reference: Optional[str] = Field(None, alias="Reference")
    source_id: Optional[str] = Field(None, alias="SourceID")
    source_type: Optional[str] = Field(None, alias="SourceType")
    journal_lines: List[JournalLine] = Field(default_factory=list, alias="JournalLines")

    legacy_date_fields: ClassVar[Dict[str, bool]] = {
        "JournalDate": False,
        "CreatedDateUTC": True,
    }
