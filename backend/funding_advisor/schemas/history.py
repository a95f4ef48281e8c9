"""History feed schemas — a tagged union of lookup and report entries."""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field

from funding_advisor.schemas.common import CamelModel
from funding_advisor.schemas.company import CompanyMetrics, ManualChange
from funding_advisor.schemas.investor_report import ReportChange


class LookupHistoryEntry(CamelModel):
    entry_type: Literal["lookup"] = "lookup"
    case_id: int
    company_id: int
    company_name: str
    created_at: datetime
    summary: Optional[str] = None
    metrics: CompanyMetrics
    manual_change_log: List[ManualChange] = []


class ReportHistoryEntry(CamelModel):
    entry_type: Literal["investment_report"] = "investment_report"
    report_id: int
    company_id: int
    company_name: str
    created_at: datetime
    investment_report: Optional[Dict[str, Any]] = None
    manual_change_log: List[ReportChange] = []


HistoryEntry = Annotated[
    Union[LookupHistoryEntry, ReportHistoryEntry],
    Field(discriminator="entry_type"),
]


class HistoryResponse(CamelModel):
    history: List[HistoryEntry]
