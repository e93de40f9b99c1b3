"""Report runners for the Xero ``Reports`` endpoints.

Each runner GETs ``Reports/<name>`` and decodes the response into ``Report``
records. Optional query parameters (date, fromDate, toDate, ...) are passed
through as given; the caller's mapping is never modified.
"""

import asyncio
from typing import Dict, List, Mapping, Optional

from xeroclient.models import Report
from xeroclient.services.entities import EntityEndpoint
from xeroclient.services.provider import XeroProvider

Params = Optional[Mapping[str, str]]


def _with(params: Params, **extra: str) -> Dict[str, str]:
    merged = dict(params) if params else {}
    merged.update(extra)
    return merged


class ReportRunner:
    """Runs Xero reports through a provider.

    Example:
        ```python
        runner = ReportRunner(provider)
        reports = await runner.balance_sheet({"date": "2024-06-30"})
        ```
    """

    def __init__(self, provider: XeroProvider):
        self.endpoint: EntityEndpoint[Report] = EntityEndpoint(provider, Report, "Reports")

    async def run(
        self,
        name: str,
        params: Params = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> List[Report]:
        """Run the report ``Reports/<name>``; ``name`` may also be a report ID."""
        return await self.endpoint.find(
            name, dict(params) if params else None, cancel=cancel, timeout=timeout
        )

    async def ten_ninety_nine(self, report_year: int) -> List[Report]:
        """1099 report, US organisations only."""
        return await self.run("TenNinetyNine", {"reportYear": str(report_year)})

    async def aged_payables_by_contact(self, contact_id: str, params: Params = None) -> List[Report]:
        return await self.run("AgedPayablesByContact", _with(params, ContactID=contact_id))

    async def aged_receivables_by_contact(
        self, contact_id: str, params: Params = None
    ) -> List[Report]:
        return await self.run("AgedReceivablesByContact", _with(params, ContactID=contact_id))

    async def balance_sheet(self, params: Params = None) -> List[Report]:
        return await self.run("BalanceSheet", params)

    async def bank_statement(self, bank_account_id: str, params: Params = None) -> List[Report]:
        return await self.run("BankStatement", _with(params, bankAccountID=bank_account_id))

    async def bank_summary(self, params: Params = None) -> List[Report]:
        return await self.run("BankSummary", params)

    async def bas_report(self, report_id: str) -> List[Report]:
        """A single BAS report, AU organisations only."""
        return await self.run(report_id)

    async def bas_reports(self) -> List[Report]:
        """All BAS reports, AU organisations only."""
        return await self.endpoint.find_all()

    async def budget_summary(self, params: Params = None) -> List[Report]:
        return await self.run("BudgetSummary", params)

    async def executive_summary(self, params: Params = None) -> List[Report]:
        return await self.run("ExecutiveSummary", params)

    async def gst_report(self, report_id: str) -> List[Report]:
        """A single GST report, NZ organisations only."""
        return await self.run(report_id)

    async def gst_reports(self) -> List[Report]:
        """All GST reports, NZ organisations only."""
        return await self.endpoint.find_all()

    async def profit_and_loss(self, params: Params = None) -> List[Report]:
        return await self.run("ProfitAndLoss", params)

    async def trial_balance(self, params: Params = None) -> List[Report]:
        return await self.run("TrialBalance", params)
