"""Reports: organised sets of financial information."""

from typing import ClassVar, Dict, List, Optional

from pydantic import Field

from xeroclient.models.base import XeroModel


class ReportAttribute(XeroModel):
    id: Optional[str] = Field(None, alias="Id")
    value: Optional[str] = Field(None, alias="Value")


class ReportCell(XeroModel):
    value: Optional[str] = Field(None, alias="Value")
    attributes: Optional[List[ReportAttribute]] = Field(None, alias="Attributes")


class ReportRow(XeroModel):
    """Row of a report; sections nest further rows."""
    row_type: Optional[str] = Field(None, alias="RowType")
    title: Optional[str] = Field(None, alias="Title")
    cells: Optional[List[ReportCell]] = Field(None, alias="Cells")
    rows: Optional[List["ReportRow"]] = Field(None, alias="Rows")


class Report(XeroModel):
    """A report as returned by ``Reports/<name>``."""
    report_id: Optional[str] = Field(None, alias="ReportID")
    report_name: Optional[str] = Field(None, alias="ReportName")
    report_type: Optional[str] = Field(None, alias="ReportType")
    report_titles: Optional[List[str]] = Field(None, alias="ReportTitles")
    report_date: Optional[str] = Field(None, alias="ReportDate")
    updated_date_utc: Optional[str] = Field(None, alias="UpdatedDateUTC")
    attributes: Optional[List[ReportAttribute]] = Field(None, alias="Attributes")
    rows: Optional[List[ReportRow]] = Field(None, alias="Rows")

    legacy_date_fields: ClassVar[Dict[str, bool]] = {"UpdatedDateUTC": True}


ReportRow.model_rebuild()
