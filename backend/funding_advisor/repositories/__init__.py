"""Data access repositories."""

from funding_advisor.repositories.base import BaseRepository
from funding_advisor.repositories.case_repo import CaseRepository
from funding_advisor.repositories.company_repo import CompanyRepository
from funding_advisor.repositories.history_repo import HistoryRepository
from funding_advisor.repositories.investor_report_repo import (
    InvestorReportChangeRepository,
    InvestorReportRepository,
)
from funding_advisor.repositories.recommendation_repo import RecommendationRepository

__all__ = [
    "BaseRepository",
    "CompanyRepository",
    "CaseRepository",
    "RecommendationRepository",
    "HistoryRepository",
    "InvestorReportRepository",
    "InvestorReportChangeRepository",
]
