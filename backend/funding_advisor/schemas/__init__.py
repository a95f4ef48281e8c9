"""Pydantic schemas for request/response validation and domain payloads."""

from funding_advisor.schemas.company import (
    CompanyMetrics,
    CompanyProfile,
    ManualChange,
    ManualCompanyUpdateResult,
)
from funding_advisor.schemas.history import (
    HistoryEntry,
    HistoryResponse,
    LookupHistoryEntry,
    ReportHistoryEntry,
)
from funding_advisor.schemas.investor_report import (
    FundingInstrument,
    InvestorMatchResult,
    InvestorRecommendation,
    ManualReportUpdateResult,
    RecommendedInvestor,
    ReportChange,
)
from funding_advisor.schemas.lookup import EnrichmentResult, LookupResult
from funding_advisor.schemas.requests import (
    CompanyLookupRequest,
    InvestorMatchRequest,
    ManualCompanyUpdateRequest,
    ManualReportUpdateRequest,
)

__all__ = [
    "CompanyMetrics", "CompanyProfile", "ManualChange", "ManualCompanyUpdateResult",
    "HistoryEntry", "HistoryResponse", "LookupHistoryEntry", "ReportHistoryEntry",
    "FundingInstrument", "RecommendedInvestor", "InvestorRecommendation",
    "InvestorMatchResult", "ManualReportUpdateResult", "ReportChange",
    "EnrichmentResult", "LookupResult",
    "CompanyLookupRequest", "InvestorMatchRequest",
    "ManualCompanyUpdateRequest", "ManualReportUpdateRequest",
]
