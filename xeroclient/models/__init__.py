"""Typed records for Xero accounting entities."""

from xeroclient.models.base import Amount, XeroModel
from xeroclient.models.bank_transaction import BankTransaction, example_bank_transaction
from xeroclient.models.common import BankAccount, Contact, LineItem, TrackingCategory
from xeroclient.models.journal import Journal, JournalLine
from xeroclient.models.repeating_invoice import RepeatingInvoice, Schedule
from xeroclient.models.report import Report, ReportAttribute, ReportCell, ReportRow

__all__ = [
    "Amount",
    "XeroModel",
    "BankAccount",
    "BankTransaction",
    "Contact",
    "Journal",
    "JournalLine",
    "LineItem",
    "RepeatingInvoice",
    "Report",
    "ReportAttribute",
    "ReportCell",
    "ReportRow",
    "Schedule",
    "TrackingCategory",
    "example_bank_transaction",
]
