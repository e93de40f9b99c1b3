"""Repeating invoice templates and their schedules."""

from typing import ClassVar, Dict, List, Optional

from pydantic import Field

from xeroclient.models.base import Amount, XeroModel
from xeroclient.models.common import Contact, LineItem


class Schedule(XeroModel):
    """Schedule of a repeating invoice; not used on its own."""
    # e.g. 1 (every 1 week), 2 (every 2 months)
    period: Optional[float] = Field(None, alias="Period")
    # WEEKLY or MONTHLY
    unit: Optional[str] = Field(None, alias="Unit")
    due_date: Optional[float] = Field(None, alias="DueDate")
    due_date_type: Optional[str] = Field(None, alias="DueDateType")
    start_date: Optional[str] = Field(None, alias="StartDate")
    next_scheduled_date: Optional[str] = Field(None, alias="NextScheduledDate")
    # Only returned if the template has an end date
    end_date: Optional[str] = Field(None, alias="EndDate")

    legacy_date_fields: ClassVar[Dict[str, bool]] = {
        "StartDate": False,
        "NextScheduledDate": False,
        "EndDate": False,
    }


class RepeatingInvoice(XeroModel):
    """A repeating invoice template."""
    repeating_invoice_id: Optional[str] = Field(None, alias="RepeatingInvoiceID")
    type: str = Field(..., alias="Type")
    contact: Contact = Field(..., alias="Contact")
    schedule: Optional[Schedule] = Field(None, alias="Schedule")
    line_items: List[LineItem] = Field(default_factory=list, alias="LineItems")
    line_amount_types: Optional[str] = Field(None, alias="LineAmountTypes")
    reference: Optional[str] = Field(None, alias="Reference")
    branding_theme_id: Optional[str] = Field(None, alias="BrandingThemeID")
    currency_code: Optional[str] = Field(None, alias="CurrencyCode")
    status: Optional[str] = Field(None, alias="Status")
    sub_total: Optional[Amount] = Field(None, alias="SubTotal")
    total_tax: Optional[Amount] = Field(None, alias="TotalTax")
    total: Optional[Amount] = Field(None, alias="Total")
    has_attachments: Optional[bool] = Field(None, alias="HasAttachments")
