"""Records embedded in other Xero documents."""

from typing import ClassVar, Dict, List, Optional

from pydantic import Field

from xeroclient.models.base import Amount, XeroModel


class TrackingCategory(XeroModel):
    """Tracking category option applied to a line."""
    tracking_category_id: Optional[str] = Field(None, alias="TrackingCategoryID")
    name: Optional[str] = Field(None, alias="Name")
    option: Optional[str] = Field(None, alias="Option")


class Contact(XeroModel):
    """Reference to a contact; either the ID or the name identifies it."""
    contact_id: Optional[str] = Field(None, alias="ContactID")
    name: Optional[str] = Field(None, alias="Name")
    email_address: Optional[str] = Field(None, alias="EmailAddress")
    updated_date_utc: Optional[str] = Field(None, alias="UpdatedDateUTC")

    legacy_date_fields: ClassVar[Dict[str, bool]] = {"UpdatedDateUTC": True}


class BankAccount(XeroModel):
    """Reference to a bank account by ID or code."""
    account_id: Optional[str] = Field(None, alias="AccountID")
    code: Optional[str] = Field(None, alias="Code")
    name: Optional[str] = Field(None, alias="Name")


class LineItem(XeroModel):
    """Line on an invoice, bank transaction or similar document."""
    line_item_id: Optional[str] = Field(None, alias="LineItemID")
    description: Optional[str] = Field(None, alias="Description")
    quantity: Optional[Amount] = Field(None, alias="Quantity")
    unit_amount: Optional[Amount] = Field(None, alias="UnitAmount")
    account_code: Optional[str] = Field(None, alias="AccountCode")
    item_code: Optional[str] = Field(None, alias="ItemCode")
    tax_type: Optional[str] = Field(None, alias="TaxType")
    tax_amount: Optional[Amount] = Field(None, alias="TaxAmount")
    line_amount: Optional[Amount] = Field(None, alias="LineAmount")
    tracking: Optional[List[TrackingCategory]] = Field(None, alias="Tracking")
